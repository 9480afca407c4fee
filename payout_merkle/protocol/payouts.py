"""Decimal-string interface to the Merkle engine.

Field elements enter and leave as unsigned decimal strings, the encoding
used by on-chain tooling. Integer-level logic lives in `primitives` and
`protocol.leaves`; this module only parses, delegates and formats.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from payout_merkle.errors import InvalidInputError
from payout_merkle.primitives.field import FieldElementLike, format_field_element, parse_field_element
from payout_merkle.primitives.merkle_tree import MerkleTree
from payout_merkle.primitives.merkle_verifier import verify_proof
from payout_merkle.primitives.pedersen_params import PedersenParams, resolve_params
from payout_merkle.protocol.leaves import Leaf, derive_leaves

logger = logging.getLogger(__name__)

# --- Type Aliases ---

LeafStrings = Tuple[str, str, str]
"""(commitment, recipient, amount) as decimal strings."""


def _parse_all(values: Sequence[FieldElementLike], params: PedersenParams) -> List[int]:
    return [parse_field_element(v, params.prime) for v in values]


def _format_all(values: Sequence[int]) -> List[str]:
    return [format_field_element(v) for v in values]


def _format_leaf(leaf: Leaf) -> LeafStrings:
    return (
        format_field_element(leaf.commitment),
        format_field_element(leaf.recipient),
        format_field_element(leaf.amount),
    )


# --- Entry Points ---

def generate_leaves(
    recipients: Sequence[FieldElementLike],
    amounts: Sequence[FieldElementLike],
    params: Optional[PedersenParams] = None,
) -> List[LeafStrings]:
    """Leaves for a payout list, padded with ("0", "0", "0") to even length."""
    params = resolve_params(params)
    leaves = derive_leaves(_parse_all(recipients, params), _parse_all(amounts, params), params)
    return [_format_leaf(leaf) for leaf in leaves]


def generate_merkle_root(values: Sequence[FieldElementLike], params: Optional[PedersenParams] = None) -> str:
    """Merkle root over leaf commitments."""
    params = resolve_params(params)
    return format_field_element(MerkleTree(_parse_all(values, params), params).root)


def generate_merkle_proof(
    values: Sequence[FieldElementLike],
    index: int,
    params: Optional[PedersenParams] = None,
) -> List[str]:
    """Sibling path for values[index], leaf to root. The root is NOT appended."""
    params = resolve_params(params)
    return _format_all(MerkleTree(_parse_all(values, params), params).get_proof(index))


def verify_merkle_proof(
    leaf: FieldElementLike,
    proof: Sequence[FieldElementLike],
    params: Optional[PedersenParams] = None,
) -> bool:
    """Check a proof whose last entry is the claimed root."""
    params = resolve_params(params)
    if len(proof) == 0:
        raise InvalidInputError("Merkle proof must contain at least the root")
    return verify_proof(parse_field_element(leaf, params.prime), _parse_all(proof, params), params)


# --- Distribution ---

@dataclass(frozen=True)
class PayoutDistribution:
    """A committed payout list: its leaves, tree and root.

    Build once with `PayoutDistribution.build`, then hand out
    `proof_for(index)` to each recipient.
    """
    leaves: Tuple[Leaf, ...]
    tree: MerkleTree
    n_entries: int

    @classmethod
    def build(
        cls,
        recipients: Sequence[FieldElementLike],
        amounts: Sequence[FieldElementLike],
        params: Optional[PedersenParams] = None,
    ) -> "PayoutDistribution":
        params = resolve_params(params)
        leaves = derive_leaves(_parse_all(recipients, params), _parse_all(amounts, params), params)
        if not leaves:
            raise InvalidInputError("Payout list must contain at least one entry")
        tree = MerkleTree([leaf.commitment for leaf in leaves], params)
        logger.debug("Built payout distribution: %d leaves, root %d", len(leaves), tree.root)
        return cls(leaves=tuple(leaves), tree=tree, n_entries=len(recipients))

    @property
    def root(self) -> str:
        return format_field_element(self.tree.root)

    def leaf_strings(self) -> List[LeafStrings]:
        return [_format_leaf(leaf) for leaf in self.leaves]

    def index_of(self, recipient: FieldElementLike) -> int:
        """Leaf index of the first entry paying recipient.

        Raises:
            KeyError: If recipient has no entry
        """
        value = parse_field_element(recipient, self.tree.params.prime)
        for i, leaf in enumerate(self.leaves[:self.n_entries]):
            if leaf.recipient == value:
                return i
        raise KeyError(f"No payout for recipient {recipient}")

    def proof_for(self, index: int) -> List[str]:
        """Verification-ready proof for leaf index: siblings, then the root."""
        return _format_all(self.tree.get_proof(index) + [self.tree.root])

    def claim(self, index: int) -> Dict[str, object]:
        """Everything a recipient needs to claim leaf index."""
        leaf = self.leaves[index]
        return {
            "recipient": format_field_element(leaf.recipient),
            "amount": format_field_element(leaf.amount),
            "leaf": format_field_element(leaf.commitment),
            "proof": self.proof_for(index),
        }
