"""Primitives - field arithmetic, Pedersen hash and Merkle tree building blocks."""

from payout_merkle.primitives.curve import EcPoint, ec_add, is_on_curve
from payout_merkle.primitives.field import (
    FF,
    N_ELEMENT_BITS_HASH,
    STARK_ALPHA,
    STARK_BETA,
    STARK_EC_ORDER,
    STARK_FIELD_GEN,
    STARK_PRIME,
    format_field_element,
    make_field,
    parse_field_element,
    to_field_element,
)
from payout_merkle.primitives.merkle_tree import (
    MerkleTree,
    compute_proof,
    compute_root,
    next_level,
)
from payout_merkle.primitives.merkle_verifier import MerkleVerifier, verify_proof
from payout_merkle.primitives.pedersen import combine, pedersen_hash
from payout_merkle.primitives.pedersen_params import (
    PARAMS_ENV_VAR,
    PedersenParams,
    default_params,
)

__all__ = [
    # Field
    "FF",
    "STARK_PRIME",
    "STARK_FIELD_GEN",
    "STARK_ALPHA",
    "STARK_BETA",
    "STARK_EC_ORDER",
    "N_ELEMENT_BITS_HASH",
    "make_field",
    "to_field_element",
    "parse_field_element",
    "format_field_element",
    # Curve
    "EcPoint",
    "ec_add",
    "is_on_curve",
    # Pedersen
    "PedersenParams",
    "PARAMS_ENV_VAR",
    "default_params",
    "pedersen_hash",
    "combine",
    # Merkle
    "MerkleTree",
    "MerkleVerifier",
    "next_level",
    "compute_root",
    "compute_proof",
    "verify_proof",
]
