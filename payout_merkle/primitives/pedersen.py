"""Pedersen hash over the STARK curve.

Fixed-base scalar accumulation: starting from the shift point, bit j of input
i selects constant point 2 + i * n_bits + j, and the selected points are added
into the accumulator. The hash is the accumulator's x-coordinate.

Reference: starkex-resources crypto/starkware/crypto/signature/signature.js (pedersen)
"""

from typing import Optional, Sequence

from payout_merkle.errors import InternalInvariantViolation, InvalidInputError
from payout_merkle.primitives.curve import ec_add
from payout_merkle.primitives.field import to_field_element
from payout_merkle.primitives.pedersen_params import N_RESERVED_POINTS, PedersenParams, resolve_params


def pedersen_hash(inputs: Sequence[int], params: Optional[PedersenParams] = None) -> int:
    """Hash a short sequence of field elements to one field element.

    Args:
        inputs: 1 to params.max_inputs field elements, each in [0, P)
        params: Constant table context (process default if None)

    Returns:
        x-coordinate of the accumulated point

    Raises:
        InvalidInputError: If an input is out of range or the input count is unsupported
        InternalInvariantViolation: If the accumulator x-coordinate meets a constant point's
    """
    params = resolve_params(params)
    if not 1 <= len(inputs) <= params.max_inputs:
        raise InvalidInputError(
            f"pedersen_hash takes 1 to {params.max_inputs} inputs, got {len(inputs)}"
        )

    n_bits = params.n_element_bits
    point = params.shift_point
    for i, value in enumerate(inputs):
        x = to_field_element(value, params.prime)
        offset = N_RESERVED_POINTS + i * n_bits
        for j in range(n_bits):
            pt = params.constant_point(offset + j)
            if point.x == pt.x:
                raise InternalInvariantViolation(
                    f"Accumulator collides with constant point {offset + j}"
                )
            if x & 1:
                point = ec_add(point, pt)
            x >>= 1
    return int(point.x)


def combine(a: int, b: int, params: Optional[PedersenParams] = None) -> int:
    """Hash two field elements in canonical order (smaller first).

    Symmetric in its arguments, so Merkle proofs need no left/right bits.
    """
    params = resolve_params(params)
    a = to_field_element(a, params.prime)
    b = to_field_element(b, params.prime)
    if a < b:
        return pedersen_hash([a, b], params)
    return pedersen_hash([b, a], params)
