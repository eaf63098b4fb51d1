"""
Set Intersector - Reduce several peer sets to the peers common to all
"""

from functools import reduce
from typing import Iterable

from .snapshot_loader import PeerSet


def intersect(left: PeerSet, right: PeerSet) -> PeerSet:
    """Peers present in both sets. Outbound flags always come from ``left``."""
    return {address: outbound for address, outbound in left.items() if address in right}


def intersect_all(peer_sets: Iterable[PeerSet]) -> PeerSet:
    """
    Left-fold ``intersect`` over the given sets.

    The first set decides the outbound flags; later sets only decide
    membership. Raises ValueError when no sets are given.
    """
    peer_sets = list(peer_sets)
    if not peer_sets:
        raise ValueError("at least one peer set is required")
    return reduce(intersect, peer_sets[1:], dict(peer_sets[0]))
