"""Error taxonomy for hashing and Merkle tree operations."""

from typing import Any, Optional


class PayoutMerkleError(Exception):
    """Base class for all payout_merkle errors."""


class InvalidInputError(PayoutMerkleError, ValueError):
    """A caller-supplied value cannot be used.

    Raised for field elements outside [0, P), malformed decimal strings,
    empty tree inputs, empty proofs and out-of-range proof indices.
    """

    def __init__(self, message: str, value: Optional[Any] = None):
        super().__init__(message)
        self.value = value


class InternalInvariantViolation(PayoutMerkleError, RuntimeError):
    """The hash accumulator collided with a constant point.

    Only possible with a corrupted constant table.
    """


class InvalidParamsError(PayoutMerkleError, ValueError):
    """A curve or constant point dataset is malformed."""
