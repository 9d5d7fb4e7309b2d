"""
Entry point for running the service as a module.

Usage:
    python -m synzk_hub serve
"""

from synzk_hub.cli import main

if __name__ == "__main__":
    main()
