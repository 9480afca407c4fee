"""Merkle inclusion proof verification.

A proof is the sibling path produced by `MerkleTree.get_proof` followed by the
claimed root. The verifier recombines the leaf with each sibling using the
same canonical ordering as tree construction, so no path bits are needed.

A mismatching root is a normal negative result (False); malformed input
(empty proof, out-of-range values) raises InvalidInputError.
"""

import logging
from typing import Optional, Sequence

from payout_merkle.errors import InvalidInputError
from payout_merkle.primitives.field import to_field_element
from payout_merkle.primitives.pedersen import combine
from payout_merkle.primitives.pedersen_params import PedersenParams, resolve_params

logger = logging.getLogger(__name__)


class MerkleVerifier:
    """Checks leaves against a fixed Merkle root.

    Usage:
        verifier = MerkleVerifier(root)
        for leaf, siblings in claims:
            if not verifier.verify(leaf, siblings):
                return False
        return True
    """

    def __init__(self, root: int, params: Optional[PedersenParams] = None) -> None:
        self.params = resolve_params(params)
        self.root = to_field_element(root, self.params.prime)

    def compute_root(self, leaf: int, siblings: Sequence[int]) -> int:
        """Fold the siblings into the leaf, returning the implied root."""
        current = to_field_element(leaf, self.params.prime)
        for sibling in siblings:
            current = combine(current, sibling, self.params)
        return current

    def verify(self, leaf: int, siblings: Sequence[int]) -> bool:
        """Return True if leaf and siblings recombine to this verifier's root."""
        computed = self.compute_root(leaf, siblings)
        if computed != self.root:
            logger.debug("Merkle proof mismatch: computed root %d, expected %d", computed, self.root)
            return False
        return True


def verify_proof(leaf: int, proof: Sequence[int], params: Optional[PedersenParams] = None) -> bool:
    """Verify a root-last proof (siblings..., root) for leaf.

    Raises:
        InvalidInputError: If proof is empty or holds out-of-range values
    """
    if len(proof) == 0:
        raise InvalidInputError("Merkle proof must contain at least the root")
    return MerkleVerifier(proof[-1], params).verify(leaf, proof[:-1])
