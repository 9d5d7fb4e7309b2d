"""
CLI entry point for SYNZK Hub.
"""

from typing import Optional

import typer

from .config import get_settings
from .log import configure_logging
from .store import StoreInitError, create_store

app = typer.Typer(
    name="synzk-hub",
    help="SYNZK Hub swap backend",
    add_completion=False,
)


@app.command()
def serve(
    host: Optional[str] = typer.Option(
        None,
        "--host",
        help="Bind address (default: HOST or 0.0.0.0)",
    ),
    port: Optional[int] = typer.Option(
        None,
        "--port",
        "-p",
        help="HTTP port (default: PORT or 8080)",
    ),
    reload: bool = typer.Option(
        False,
        "--reload",
        help="Reload on code changes (development only)",
    ),
) -> None:
    """
    Start the HTTP server. Exits non-zero if storage cannot be initialized.
    """
    from .main import run

    run(host=host, port=port, reload=reload or None)


@app.command("init-db")
def init_db() -> None:
    """
    Initialize the configured store once and exit.

    With DATABASE_URL set this connects and creates the swaps table.
    """
    settings = get_settings()
    configure_logging(settings)

    store = create_store(settings)
    try:
        store.initialize()
    except StoreInitError as e:
        typer.echo(f"✗ {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        store.close()

    typer.echo(f"✓ Storage ready ({store.backend})")


@app.command()
def version() -> None:
    """Show the service version."""
    from synzk_hub import __version__
    typer.echo(f"synzk-hub v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
