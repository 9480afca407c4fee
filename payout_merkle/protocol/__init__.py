"""Protocol - payout leaves and the decimal-string Merkle interface."""

from payout_merkle.protocol.leaves import SENTINEL_LEAF, Leaf, derive_leaves, leaf_commitment
from payout_merkle.protocol.payouts import (
    PayoutDistribution,
    generate_leaves,
    generate_merkle_proof,
    generate_merkle_root,
    verify_merkle_proof,
)

__all__ = [
    "Leaf",
    "SENTINEL_LEAF",
    "leaf_commitment",
    "derive_leaves",
    "generate_leaves",
    "generate_merkle_root",
    "generate_merkle_proof",
    "verify_merkle_proof",
    "PayoutDistribution",
]
