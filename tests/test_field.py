"""Tests for field-element validation and decimal encoding."""

import numpy as np
import pytest

from payout_merkle.errors import InvalidInputError
from payout_merkle.primitives.field import (
    FF,
    N_ELEMENT_BITS_HASH,
    STARK_PRIME,
    format_field_element,
    parse_field_element,
    to_field_element,
)


class TestStarkField:
    """STARK prime constants."""

    def test_prime_value(self) -> None:
        """P = 2^251 + 17 * 2^192 + 1."""
        assert STARK_PRIME == 2**251 + 17 * 2**192 + 1

    def test_bits_per_element(self) -> None:
        """The hash consumes 252 bits per input."""
        assert N_ELEMENT_BITS_HASH == 252

    def test_field_order(self) -> None:
        """FF is GF(P)."""
        assert FF.order == STARK_PRIME
        assert int(FF(STARK_PRIME - 1) + FF(1)) == 0


class TestToFieldElement:
    """Range and type checks on integers."""

    @pytest.mark.parametrize("value", [0, 1, 12345, STARK_PRIME - 1])
    def test_accepts_in_range(self, value: int) -> None:
        """Values in [0, P) pass through unchanged."""
        assert to_field_element(value) == value

    @pytest.mark.parametrize("value", [-1, STARK_PRIME, STARK_PRIME + 1, 2**256])
    def test_rejects_out_of_range(self, value: int) -> None:
        """Negative values and values >= P are rejected."""
        with pytest.raises(InvalidInputError) as excinfo:
            to_field_element(value)
        assert excinfo.value.value == value

    @pytest.mark.parametrize("value", [True, 1.0, "1", None])
    def test_rejects_non_integers(self, value: object) -> None:
        """Booleans, floats, strings and None are not field elements."""
        with pytest.raises(InvalidInputError):
            to_field_element(value)  # type: ignore[arg-type]

    @pytest.mark.parametrize("value", [np.int64(5), np.uint64(7), np.int32(0)])
    def test_accepts_numpy_integers(self, value: np.integer) -> None:
        """numpy integer scalars are converted to plain ints."""
        result = to_field_element(value)
        assert result == int(value)
        assert type(result) is int

    @pytest.mark.parametrize("value", [np.bool_(True), np.float64(1.0), np.int64(-1)])
    def test_rejects_numpy_non_elements(self, value: object) -> None:
        """numpy booleans, floats and negative integers are rejected."""
        with pytest.raises(InvalidInputError):
            to_field_element(value)  # type: ignore[arg-type]

    def test_custom_prime(self) -> None:
        """The range check honours the supplied prime."""
        assert to_field_element(6, prime=7) == 6
        with pytest.raises(InvalidInputError):
            to_field_element(7, prime=7)


class TestDecimalEncoding:
    """Decimal string parsing and formatting."""

    def test_parse_decimal(self) -> None:
        """Decimal strings parse to ints."""
        assert parse_field_element("0") == 0
        assert parse_field_element("1234567890123456789012345678901234567890") == \
            1234567890123456789012345678901234567890

    def test_parse_passes_ints(self) -> None:
        """Ints are range-checked and returned."""
        assert parse_field_element(42) == 42

    def test_parse_max_element(self) -> None:
        """P - 1 is the largest accepted value."""
        assert parse_field_element(str(STARK_PRIME - 1)) == STARK_PRIME - 1
        with pytest.raises(InvalidInputError):
            parse_field_element(str(STARK_PRIME))

    @pytest.mark.parametrize("text", ["", "-1", "+1", " 1", "1 ", "0x10", "1e3", "abc", "²"])
    def test_parse_rejects_malformed(self, text: str) -> None:
        """Only plain ASCII decimal digits are accepted."""
        with pytest.raises(InvalidInputError):
            parse_field_element(text)

    def test_format(self) -> None:
        """Formatting yields canonical decimal, including for galois scalars."""
        assert format_field_element(0) == "0"
        assert format_field_element(STARK_PRIME - 1) == str(STARK_PRIME - 1)
        assert format_field_element(FF(255)) == "255"
