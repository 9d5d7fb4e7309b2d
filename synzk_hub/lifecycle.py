"""
Swap status progression used by the advance endpoint.
"""

from .models import SwapStatus


INITIAL_STATUS = SwapStatus.QUEUED

# queued -> sent -> confirmed; failed is pinned.
ADVANCE_TRANSITIONS: dict[SwapStatus, SwapStatus] = {
    SwapStatus.QUEUED: SwapStatus.SENT,
    SwapStatus.SENT: SwapStatus.CONFIRMED,
    SwapStatus.FAILED: SwapStatus.FAILED,
}


def next_status(current: SwapStatus) -> SwapStatus:
    """Status after one advance; anything not in the table lands on confirmed."""
    return ADVANCE_TRANSITIONS.get(current, SwapStatus.CONFIRMED)
