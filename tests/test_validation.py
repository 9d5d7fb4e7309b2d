"""
Tests for swap payload validation.
"""

import pytest

from synzk_hub.models import number_to_string
from synzk_hub.validation import parse_swap_body


VALID = {
    "fromChain": "bitcoin",
    "fromToken": "BTC",
    "toChain": "ethereum",
    "toToken": "WBTC",
    "amount": "0.5",
    "receiver": "0x1234567890abcdef1234567890abcdef12345678",
}


class TestParseSwapBody:
    """Tests for parse_swap_body."""

    def test_valid_body(self):
        result = parse_swap_body(VALID)
        assert result.ok
        assert result.details is None
        assert result.body.from_chain == "bitcoin"
        assert result.body.to_token == "WBTC"

    @pytest.mark.parametrize("field", ["fromChain", "fromToken", "toChain", "toToken", "amount", "receiver"])
    def test_missing_required_field(self, field):
        body = {k: v for k, v in VALID.items() if k != field}
        result = parse_swap_body(body)
        assert not result.ok
        assert result.body is None
        assert field in result.details

    @pytest.mark.parametrize("field", ["fromChain", "fromToken", "toChain", "toToken"])
    def test_empty_string_rejected(self, field):
        result = parse_swap_body({**VALID, field: ""})
        assert not result.ok

    def test_receiver_minimum_length(self):
        assert not parse_swap_body({**VALID, "receiver": "1234567"}).ok
        assert parse_swap_body({**VALID, "receiver": "12345678"}).ok

    def test_refund_optional_nullable(self):
        assert parse_swap_body({**VALID, "refund": None}).ok
        assert parse_swap_body({**VALID, "refund": "refund-addr"}).ok
        assert not parse_swap_body({**VALID, "refund": "short"}).ok

    def test_proof_hint_unconstrained(self):
        assert parse_swap_body({**VALID, "proofHint": None}).ok
        assert parse_swap_body({**VALID, "proofHint": ""}).ok
        assert parse_swap_body({**VALID, "proofHint": "x" * 5000}).ok

    def test_wrong_type_rejected(self):
        assert not parse_swap_body({**VALID, "fromChain": 5}).ok
        assert not parse_swap_body({**VALID, "receiver": ["a" * 8]}).ok

    @pytest.mark.parametrize("raw", [None, [], "body", 42])
    def test_non_object_rejected(self, raw):
        result = parse_swap_body(raw)
        assert not result.ok
        assert "JSON object" in result.details


class TestAmountNormalization:
    """amount accepts strings and numbers and is stored as a string."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (10, "10"),
            ("10", "10"),
            (10.0, "10"),
            (0.5, "0.5"),
            ("0.00000001", "0.00000001"),
            (1e21, "1e+21"),
            (10**21, "1e+21"),
            (1.5e-7, "1.5e-7"),
            (0.000001, "0.000001"),
            (1e20, "100000000000000000000"),
            (123.456, "123.456"),
            (-2.5, "-2.5"),
            (0.0, "0"),
        ],
    )
    def test_amount_to_string(self, raw, expected):
        result = parse_swap_body({**VALID, "amount": raw})
        assert result.ok
        assert result.body.amount == expected

    def test_boolean_amount_rejected(self):
        assert not parse_swap_body({**VALID, "amount": True}).ok

    def test_null_amount_rejected(self):
        assert not parse_swap_body({**VALID, "amount": None}).ok


class TestStoredShape:
    """SwapBody.to_stored keeps the wire names and only supplied keys."""

    def test_wire_names(self):
        stored = parse_swap_body({**VALID, "amount": 3}).body.to_stored()
        assert stored == {**VALID, "amount": "3"}

    def test_explicit_null_kept(self):
        stored = parse_swap_body({**VALID, "refund": None}).body.to_stored()
        assert "refund" in stored and stored["refund"] is None
        assert "proofHint" not in stored

    def test_unknown_keys_dropped(self):
        stored = parse_swap_body({**VALID, "memo": "hi"}).body.to_stored()
        assert "memo" not in stored

    def test_snake_case_keys_not_accepted(self):
        """Only the camelCase wire names satisfy the required fields."""
        raw = {
            "from_chain": "bitcoin",
            "from_token": "BTC",
            "to_chain": "ethereum",
            "to_token": "WBTC",
            "amount": "1",
            "receiver": "12345678",
            "proof_hint": "x",
        }
        result = parse_swap_body(raw)
        assert not result.ok
        assert "fromChain" in result.details

    def test_snake_case_alongside_wire_names_dropped(self):
        stored = parse_swap_body({**VALID, "proof_hint": "x"}).body.to_stored()
        assert "proof_hint" not in stored
        assert "proofHint" not in stored


class TestNumberToString:
    """Numbers render like JavaScript String(n)."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "0"),
            (-7, "-7"),
            (100.0, "100"),
            (0.1, "0.1"),
            (1e-7, "1e-7"),
            (1.2345e-10, "1.2345e-10"),
            (2.5e25, "2.5e+25"),
            (123456789012345680000.0, "123456789012345680000"),
            (float("inf"), "Infinity"),
        ],
    )
    def test_number_to_string(self, value, expected):
        assert number_to_string(value) == expected


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
