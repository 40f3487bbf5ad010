"""
Distinct node counting over edge lists.
"""

from typing import Iterable, Optional, Sequence

from .errors import NodeCountMismatchError
from .graph.builder import check_lengths, index_labels


def count_nodes(
    a: Sequence,
    b: Sequence,
    n: Optional[int] = None,
    nodes: Optional[Iterable] = None,
) -> int:
    """
    Count the distinct node labels referenced by an edge list.

    Args:
        a: Source labels
        b: Target labels (same length as a)
        n: Expected number of nodes. When given, the computed count must
            match it exactly.
        nodes: Optional extra labels (e.g. isolated nodes from a node table),
            counted together with the edge labels

    Returns:
        Number of distinct labels across a, b and nodes
    """
    check_lengths(a=a, b=b)
    label_to_id = index_labels(b, index_labels(a))
    if nodes is not None:
        index_labels(nodes, label_to_id)
    count = len(label_to_id)

    if n is not None and count != n:
        raise NodeCountMismatchError(int(n), count)

    return count


def edges_to_all_nodes(a: Sequence, b: Sequence, n: int) -> Optional[int]:
    """
    Number of leading edges needed before n distinct nodes have been seen.

    Args:
        a: Source labels
        b: Target labels (same length as a)
        n: Number of nodes to reach

    Returns:
        Edge count (0 if n <= 0), or None if the edge list references
        fewer than n distinct nodes
    """
    check_lengths(a=a, b=b)
    if n <= 0:
        return 0

    seen = set()
    for k, (source, target) in enumerate(zip(a, b), start=1):
        seen.add(str(source))
        seen.add(str(target))
        if len(seen) >= n:
            return k
    return None
