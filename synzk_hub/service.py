"""
Swap service: validation, id generation, persistence and status advance.
"""

import secrets
from typing import Any, Optional, Union

import structlog

from .lifecycle import INITIAL_STATUS, next_status
from .models import SWAP_MODE, SwapRecord
from .store import DEFAULT_LIST_LIMIT, SwapStore, clamp_limit, utcnow
from .validation import BodyParseResult, parse_swap_body

logger = structlog.get_logger()


def new_swap_id() -> str:
    """URL-safe random identifier (22 chars)."""
    return secrets.token_urlsafe(16)


def parse_limit(raw: Union[str, int, None]) -> int:
    """
    Parse the ?limit= query value.

    Missing, non-numeric and non-positive values fall back to the default;
    anything above the maximum is capped.
    """
    if raw is None:
        return DEFAULT_LIST_LIMIT
    try:
        limit = int(str(raw).strip())
    except ValueError:
        return DEFAULT_LIST_LIMIT
    if limit < 1:
        return DEFAULT_LIST_LIMIT
    return clamp_limit(limit)


class SwapService:
    """Request-level operations over a SwapStore."""

    def __init__(self, store: SwapStore):
        self.store = store

    def create(self, raw: Any) -> Union[SwapRecord, BodyParseResult]:
        """
        Validate and persist a new swap.

        Returns the stored record, or the failed parse result when the
        payload is rejected (nothing is persisted in that case).
        """
        parsed = parse_swap_body(raw)
        if not parsed.ok:
            logger.warning("swap_rejected", details=parsed.details)
            return parsed

        now = utcnow()
        record = SwapRecord(
            id=new_swap_id(),
            status=INITIAL_STATUS,
            mode=SWAP_MODE,
            created_at=now,
            updated_at=now,
            body=parsed.body.to_stored(),
        )
        self.store.upsert(record)

        logger.info(
            "swap_created",
            swap_id=record.id,
            from_chain=parsed.body.from_chain,
            to_chain=parsed.body.to_chain,
        )
        return record

    def get(self, swap_id: str) -> Optional[SwapRecord]:
        return self.store.get_by_id(swap_id)

    def list(self, limit: Union[str, int, None] = None) -> list[SwapRecord]:
        return self.store.list(parse_limit(limit))

    def advance(self, swap_id: str) -> Optional[SwapRecord]:
        """
        Move a swap one step along the status table (dev helper).

        Returns the refreshed record, or None for an unknown id.
        """
        record = self.store.get_by_id(swap_id)
        if record is None:
            return None

        target = next_status(record.status)
        self.store.set_status(record.id, target)

        logger.info(
            "swap_advanced",
            swap_id=record.id,
            from_status=record.status.value,
            to_status=target.value,
        )
        return self.store.get_by_id(record.id)
