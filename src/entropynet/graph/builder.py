"""
Edge list normalization.

Converts parallel (source label, target label, weight) sequences into an
EdgeGraph with dense integer node ids. Node ids are assigned in order of first
appearance across the concatenation of the source and target sequences.
"""

import numpy as np
import pandas as pd
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from ..errors import LengthMismatchError, InvalidWeightError


@dataclass
class EdgeGraph:
    """Normalized edge list with dense node ids."""
    labels: List[str]
    label_to_id: Dict[str, int]
    sources: np.ndarray      # int64, shape (n_edges,)
    targets: np.ndarray      # int64, shape (n_edges,)
    weights: np.ndarray = field(default_factory=lambda: np.empty(0, dtype=np.float64))

    @property
    def n_nodes(self) -> int:
        return len(self.labels)

    @property
    def n_edges(self) -> int:
        return len(self.sources)

    def edge_array(self) -> np.ndarray:
        """
        Return the edges as an (n_edges, 2) array of [source, target] ids.
        """
        return np.column_stack((self.sources, self.targets)).astype(np.int64).reshape(-1, 2)


def check_lengths(**sequences: Sequence) -> int:
    """
    Check that all named sequences have the length of the first one.

    Args:
        **sequences: Sequences keyed by the name used in error messages

    Returns:
        The common length
    """
    items = list(sequences.items())
    expected = len(items[0][1])
    for name, seq in items[1:]:
        if len(seq) != expected:
            raise LengthMismatchError(name, expected, len(seq))
    return expected


def index_labels(labels: Iterable, label_to_id: Optional[Dict[str, int]] = None) -> Dict[str, int]:
    """
    Assign dense ids to labels in order of first appearance.

    Args:
        labels: Labels to index (converted with str())
        label_to_id: Existing mapping to extend in place

    Returns:
        Mapping from label to id
    """
    if label_to_id is None:
        label_to_id = {}
    for label in labels:
        label = str(label)
        if label not in label_to_id:
            label_to_id[label] = len(label_to_id)
    return label_to_id


def _as_weights(w: Sequence, check_weights: bool) -> np.ndarray:
    weights = np.empty(len(w), dtype=np.float64)
    for i, value in enumerate(w):
        try:
            weights[i] = float(value)
        except (TypeError, ValueError):
            raise InvalidWeightError(i, value)

    if check_weights and len(weights) > 0:
        bad = np.flatnonzero(~np.isfinite(weights))
        if len(bad) > 0:
            raise InvalidWeightError(int(bad[0]), weights[bad[0]])

    return weights


def build_graph(
    a: Sequence,
    b: Sequence,
    w: Sequence,
    nodes: Optional[Iterable] = None,
    check_weights: bool = True,
) -> EdgeGraph:
    """
    Build a normalized edge graph from parallel edge sequences.

    Self-loops and duplicate edges are kept as separate edges.

    Args:
        a: Source labels
        b: Target labels
        w: Edge weights
        nodes: Optional extra labels; those not referenced by any edge are
            appended after the edge labels and become isolated nodes
        check_weights: Reject NaN and infinite weights

    Returns:
        EdgeGraph with labels, label->id mapping and id/weight arrays
    """
    check_lengths(a=a, b=b, w=w)

    a = [str(label) for label in a]
    b = [str(label) for label in b]
    weights = _as_weights(w, check_weights)

    label_to_id = index_labels(a)
    index_labels(b, label_to_id)
    if nodes is not None:
        index_labels(nodes, label_to_id)

    sources = np.fromiter((label_to_id[label] for label in a), dtype=np.int64, count=len(a))
    targets = np.fromiter((label_to_id[label] for label in b), dtype=np.int64, count=len(b))

    return EdgeGraph(
        labels=list(label_to_id),
        label_to_id=label_to_id,
        sources=sources,
        targets=targets,
        weights=weights,
    )


def gather_unique_nodes(a: Sequence, b: Sequence) -> pd.DataFrame:
    """
    Collect the distinct node labels referenced by an edge list.

    Args:
        a: Source labels
        b: Target labels

    Returns:
        DataFrame with a single 'id' column, in first-appearance order
    """
    label_to_id = index_labels(a)
    index_labels(b, label_to_id)
    return pd.DataFrame({'id': pd.Series(list(label_to_id), dtype=object)})
