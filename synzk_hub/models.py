"""
Pydantic models for swap records, API requests and responses.
"""

import math
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


SWAP_MODE = "backend"


def number_to_string(value: Union[int, float]) -> str:
    """
    Render a number the way JavaScript's String(n) does.

    Shortest round-trip digits; plain notation for 1e-6 <= |n| < 1e21,
    exponent form (1e+21, 1.5e-7) outside that range.
    """
    if isinstance(value, int) and abs(value) < 10**21:
        return str(value)

    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    parsed = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(str(d) for d in parsed.digits)
    k = len(digits)
    # value == 0.<digits> * 10**n
    n = parsed.exponent + k

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        exp = n - 1
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{'+' if exp >= 0 else '-'}{abs(exp)}"
    return sign + text


class SwapStatus(str, Enum):
    """Swap lifecycle states."""

    QUEUED = "queued"
    SENT = "sent"
    CONFIRMED = "confirmed"
    FAILED = "failed"


# ============================================================================
# Swap Body (create payload)
# ============================================================================


class SwapBody(BaseModel):
    """Swap creation payload."""

    # Wire names only: snake_case keys are unknown and get dropped.
    model_config = ConfigDict(
        extra="ignore",
        json_schema_extra={
            "examples": [
                {
                    "fromChain": "ethereum",
                    "fromToken": "USDC",
                    "toChain": "solana",
                    "toToken": "SOL",
                    "amount": "10",
                    "receiver": "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin",
                    "refund": None,
                    "proofHint": None,
                }
            ]
        },
    )

    from_chain: str = Field(..., alias="fromChain", min_length=1, description="Source chain")
    from_token: str = Field(..., alias="fromToken", min_length=1, description="Source token")
    to_chain: str = Field(..., alias="toChain", min_length=1, description="Destination chain")
    to_token: str = Field(..., alias="toToken", min_length=1, description="Destination token")
    amount: str = Field(..., description="Amount (string or number on input, stored as string)")
    receiver: str = Field(..., min_length=8, description="Receiver address on the destination chain")
    refund: Optional[str] = Field(None, min_length=8, description="Refund address on the source chain")
    proof_hint: Optional[str] = Field(None, alias="proofHint", description="Free-form proof hint")

    @field_validator("amount", mode="before")
    @classmethod
    def amount_to_string(cls, value: Any) -> Any:
        """Accept numbers as well as strings."""
        if isinstance(value, bool):
            raise ValueError("amount must be a string or a number")
        if isinstance(value, (int, float)):
            return number_to_string(value)
        return value

    def to_stored(self) -> dict[str, Any]:
        """Wire-format dict as persisted: only the keys the caller supplied."""
        return self.model_dump(by_alias=True, exclude_unset=True)


# ============================================================================
# Swap Record
# ============================================================================


class SwapRecord(BaseModel):
    """A persisted swap request."""

    id: str = Field(..., description="Swap identifier")
    status: SwapStatus = Field(..., description="Current status")
    mode: str = Field(SWAP_MODE, description="Processing mode")
    created_at: datetime = Field(..., description="Creation time (UTC)")
    updated_at: datetime = Field(..., description="Last mutation time (UTC)")
    body: dict[str, Any] = Field(..., description="Validated swap payload")


# ============================================================================
# Responses
# ============================================================================


class CreateSwapResponse(BaseModel):
    """Response to a swap creation."""

    model_config = ConfigDict(populate_by_name=True)

    swap_id: str = Field(..., alias="swapId", description="New swap identifier")
    status: SwapStatus = Field(..., description="Initial status")
    mode: str = Field(..., description="Processing mode")


class ErrorResponse(BaseModel):
    """Error payload for every user-visible failure."""

    error: str = Field(..., description="Machine-readable error code")
    details: Optional[str] = Field(None, description="Human-readable detail")


class HealthResponse(BaseModel):
    """Health check response."""

    ok: bool = Field(..., description="Liveness flag")
    service: str = Field(..., description="Service name")
    time: int = Field(..., description="Server time in epoch milliseconds")
    version: str = Field(..., description="Service version")
    storage: str = Field(..., description="Active storage backend (durable/ephemeral)")
