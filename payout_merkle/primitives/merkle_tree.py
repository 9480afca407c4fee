"""Binary Merkle tree with canonical (sorted) pair hashing.

Levels are reduced iteratively: each pass pads an odd-length level with the
field element 0, then combines adjacent pairs with `combine`. Because
`combine` orders its inputs, proofs carry only sibling values.

Example for leaves [A, B, C]:

                root
               /    \\
             N1      N2
            /  \\    /  \\
           A    B  C    0

    get_proof(2) -> [0, N1]
"""

import logging
from typing import List, Optional, Sequence

from payout_merkle.errors import InvalidInputError
from payout_merkle.primitives.field import to_field_element
from payout_merkle.primitives.pedersen import combine
from payout_merkle.primitives.pedersen_params import PedersenParams, resolve_params

logger = logging.getLogger(__name__)

PADDING = 0
"""Field element appended to odd-length levels."""

# --- Type Aliases ---

Level = List[int]


# --- Level Reduction ---

def pad_level(level: Sequence[int]) -> Level:
    """Return a copy of level, with PADDING appended if its length is odd."""
    padded = list(level)
    if len(padded) % 2 != 0:
        padded.append(PADDING)
    return padded


def next_level(level: Sequence[int], params: Optional[PedersenParams] = None) -> Level:
    """Combine adjacent pairs of a level into its parent level.

    An odd-length level is padded first; the input is never modified.
    """
    padded = pad_level(level)
    return [combine(padded[k], padded[k + 1], params) for k in range(0, len(padded), 2)]


# --- Merkle Tree ---

class MerkleTree:
    """Merkle tree over an ordered sequence of leaf values.

    levels[0] holds the leaves, levels[-1] holds only the root. Every level
    below the root is stored padded to even length, exactly as it was reduced.
    """

    def __init__(self, values: Sequence[int], params: Optional[PedersenParams] = None):
        if len(values) == 0:
            raise InvalidInputError("Merkle tree must have at least one leaf")

        self.params = resolve_params(params)
        self.n_leaves = len(values)
        self.levels: List[Level] = []

        level = [to_field_element(v, self.params.prime) for v in values]
        while len(level) > 1:
            level = pad_level(level)
            self.levels.append(level)
            level = next_level(level, self.params)
        self.levels.append(level)

        logger.debug("Built Merkle tree: %d leaves, depth %d", self.n_leaves, self.depth)

    @property
    def root(self) -> int:
        return self.levels[-1][0]

    @property
    def depth(self) -> int:
        """Number of levels above the leaves (0 for a single-leaf tree)."""
        return len(self.levels) - 1

    def get_proof(self, index: int) -> List[int]:
        """Return sibling values for the leaf at index, ordered leaf to root.

        The root itself is not included; callers append it before calling
        `verify_proof`.

        Raises:
            InvalidInputError: If index is not a valid leaf index
        """
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < self.n_leaves:
            raise InvalidInputError(f"Leaf index {index!r} out of range [0, {self.n_leaves})", index)

        proof: List[int] = []
        idx = index
        for level in self.levels[:-1]:
            # Sibling index: flip the last bit (even -> right neighbour, odd -> left)
            proof.append(level[idx ^ 1])
            idx //= 2
        return proof


# --- Functional Interface ---

def compute_root(values: Sequence[int], params: Optional[PedersenParams] = None) -> int:
    """Merkle root of values; a single value is its own root."""
    return MerkleTree(values, params).root


def compute_proof(values: Sequence[int], index: int, params: Optional[PedersenParams] = None) -> List[int]:
    """Sibling path for values[index], excluding the root."""
    return MerkleTree(values, params).get_proof(index)
