"""Leaf derivation for payout lists.

Each (recipient, amount) pair is committed as
    commitment = H(recipient, H(amount, 0))
and an odd-length leaf list is padded with the all-zero sentinel leaf.
"""

from typing import List, NamedTuple, Optional, Sequence

from payout_merkle.errors import InvalidInputError
from payout_merkle.primitives.pedersen import pedersen_hash
from payout_merkle.primitives.pedersen_params import PedersenParams, resolve_params


class Leaf(NamedTuple):
    """Committed payout entry."""
    commitment: int
    recipient: int
    amount: int


SENTINEL_LEAF = Leaf(0, 0, 0)


def leaf_commitment(recipient: int, amount: int, params: Optional[PedersenParams] = None) -> int:
    """Commitment to a single (recipient, amount) pair."""
    params = resolve_params(params)
    amount_hash = pedersen_hash([amount, 0], params)
    return pedersen_hash([recipient, amount_hash], params)


def derive_leaves(
    recipients: Sequence[int],
    amounts: Sequence[int],
    params: Optional[PedersenParams] = None,
) -> List[Leaf]:
    """Build leaves for a payout list, preserving input order.

    Args:
        recipients: Recipient field elements
        amounts: Amount field elements, amounts[i] paid to recipients[i]
        params: Constant table context (process default if None)

    Returns:
        One Leaf per pair, plus SENTINEL_LEAF if the pair count is odd

    Raises:
        InvalidInputError: If the sequences differ in length or hold invalid values
    """
    if len(recipients) != len(amounts):
        raise InvalidInputError(
            f"Length mismatch: {len(recipients)} recipients but {len(amounts)} amounts"
        )

    params = resolve_params(params)
    leaves = [
        Leaf(leaf_commitment(recipient, amount, params), recipient, amount)
        for recipient, amount in zip(recipients, amounts)
    ]
    if len(leaves) % 2 != 0:
        leaves.append(SENTINEL_LEAF)
    return leaves
