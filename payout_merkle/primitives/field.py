"""STARK prime field GF(P) and field-element encoding helpers.

Uses galois for field arithmetic. Field types are built per prime so that
alternate (smaller) curves can be used in tests; `FF` is the STARK field.

Field elements cross module boundaries as plain Python ints and cross the
external interface as decimal strings.
"""

import numbers
from typing import Optional, Type, Union

import galois

from payout_merkle.errors import InvalidInputError

# --- STARK Curve Constants ---

# P = 2^251 + 17 * 2^192 + 1
STARK_PRIME = 0x800000000000011000000000000000000000000000000000000000000000001
STARK_FIELD_GEN = 3
STARK_ALPHA = 1
STARK_BETA = 0x06F21413EFBE40DE150E596D72F7A8C5609AD26C15C915C1F4CDFCB99CEE9E89
STARK_EC_ORDER = 0x0800000000000010FFFFFFFFFFFFFFFFB781126DCAE7B2321E66A241ADC64D2F

N_ELEMENT_BITS_HASH = STARK_PRIME.bit_length()
"""Bits consumed per hash input (252 for the STARK prime)."""

FieldElementLike = Union[numbers.Integral, str]


# --- Field Construction ---

def make_field(prime: int, primitive_element: Optional[int] = None) -> Type[galois.FieldArray]:
    """Build the galois prime field GF(prime).

    Primality is not re-verified; the STARK constants are fixed and test
    primes are chosen by hand.
    """
    return galois.GF(prime, primitive_element=primitive_element, verify=False)


FF = make_field(STARK_PRIME, STARK_FIELD_GEN)
"""Base field GF(P) - STARK prime field."""


# --- Validation and Encoding ---

def to_field_element(value: numbers.Integral, prime: int = STARK_PRIME) -> int:
    """Check that value is an integer in [0, prime) and return it as int.

    Any integral type is accepted (int, numpy integer scalars); bool is not.

    Raises:
        InvalidInputError: If value is not an integer or is out of range
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidInputError(f"Invalid input: {value!r} is not an integer", value)
    value = int(value)
    if value < 0 or value >= prime:
        raise InvalidInputError(f"Invalid input: {value} is outside [0, P)", value)
    return value


def parse_field_element(value: FieldElementLike, prime: int = STARK_PRIME) -> int:
    """Parse a decimal string (or int) into a field element.

    Only unsigned ASCII decimal digits are accepted; a leading sign,
    whitespace or hex prefix is rejected.
    """
    if isinstance(value, str):
        if not (value.isascii() and value.isdigit()):
            raise InvalidInputError(f"Invalid input: {value!r} is not a decimal field element", value)
        value = int(value)
    return to_field_element(value, prime)


def format_field_element(value: int) -> str:
    """Render a field element as its canonical decimal string."""
    return str(int(value))
