"""
Payout Merkle

Merkle commitments over (recipient, amount) payout lists for on-chain claims,
built on the Pedersen hash over the STARK curve.

This package provides:
- STARK field arithmetic (via galois)
- Pedersen hash with an explicit constant point table
- Merkle tree construction with canonical pair ordering
- Inclusion proof generation and verification
- Decimal-string entry points for on-chain tooling

Usage:
    from payout_merkle import PayoutDistribution, verify_merkle_proof

    dist = PayoutDistribution.build(recipients, amounts)
    claim = dist.claim(0)
    assert verify_merkle_proof(claim["leaf"], claim["proof"])
"""

from payout_merkle.errors import (
    InternalInvariantViolation,
    InvalidInputError,
    InvalidParamsError,
    PayoutMerkleError,
)
from payout_merkle.primitives import (
    MerkleTree,
    MerkleVerifier,
    PedersenParams,
    combine,
    default_params,
    pedersen_hash,
    verify_proof,
)
from payout_merkle.protocol import (
    Leaf,
    PayoutDistribution,
    derive_leaves,
    generate_leaves,
    generate_merkle_proof,
    generate_merkle_root,
    verify_merkle_proof,
)

__version__ = "0.1.0"
__all__ = [
    # Errors
    "PayoutMerkleError",
    "InvalidInputError",
    "InternalInvariantViolation",
    "InvalidParamsError",
    # Hash
    "PedersenParams",
    "default_params",
    "pedersen_hash",
    "combine",
    # Merkle
    "MerkleTree",
    "MerkleVerifier",
    "verify_proof",
    # Payouts
    "Leaf",
    "derive_leaves",
    "generate_leaves",
    "generate_merkle_root",
    "generate_merkle_proof",
    "verify_merkle_proof",
    "PayoutDistribution",
]
