"""
Subgraph structure of an association network over strength cut-points.

Edges are added one at a time in order of decreasing strength. After each edge
the component structure among the nodes seen so far is recorded, giving one row
per possible cut-point. Heuristics then pick a default cut-point from that
table: the min-max rule, the step just before a giant component forms, or the
first edge touching a pinned node.
"""

import numpy as np
import pandas as pd
from typing import List, Optional, Sequence, Tuple, Union

from ..graph.builder import build_graph, check_lengths
from .union_find import UnionFind


STRUCTURE_COLUMNS = [
    'step', 'n_edges', 'source', 'target', 'strength',
    'n_nodes_seen', 'n_subgraphs', 'max_size', 'rel_max_size',
]

DEFAULT_STEP_RULES = (
    'min_max_rule', 'giant_component_local', 'giant_component_global', 'pinned_node',
)


def ensure_sorted(a: Sequence, b: Sequence, w: Sequence) -> Tuple[List, List, List]:
    """
    Sort edges by decreasing strength, keeping input order among ties.

    Args:
        a: Source labels
        b: Target labels
        w: Edge strengths

    Returns:
        Tuple of (a, b, w) lists in sorted order
    """
    check_lengths(a=a, b=b, w=w)
    a, b, w = list(a), list(b), list(w)
    if not w:
        return a, b, w

    order = np.argsort(-np.asarray(w, dtype=np.float64), kind='stable')
    return [a[i] for i in order], [b[i] for i in order], [w[i] for i in order]


def calculate_subgraph_structure(
    a: Sequence,
    b: Sequence,
    w: Sequence,
    sort: bool = True,
) -> pd.DataFrame:
    """
    Record component statistics after each edge is added.

    Args:
        a: Source labels
        b: Target labels
        w: Edge strengths (higher = stronger)
        sort: Sort edges by decreasing strength first. Pass False if the
            edges are already in the desired order.

    Returns:
        DataFrame with one row per edge and columns:
            step: 1-based index of the edge just added
            n_edges: Number of edges added so far
            source: Source label of the edge just added
            target: Target label of the edge just added
            strength: Strength of the edge just added
            n_nodes_seen: Distinct nodes touched by the edges so far
            n_subgraphs: Components among the nodes seen so far
            max_size: Size of the largest component
            rel_max_size: max_size / n_nodes_seen
    """
    graph = build_graph(a, b, w)
    n_edges = graph.n_edges

    sources, targets, strength = graph.sources, graph.targets, graph.weights
    if sort and n_edges > 0:
        order = np.argsort(-strength, kind='stable')
        sources, targets, strength = sources[order], targets[order], strength[order]

    labels = graph.labels
    uf = UnionFind(graph.n_nodes)
    seen = np.zeros(graph.n_nodes, dtype=bool)
    n_nodes_seen = np.empty(n_edges, dtype=np.int64)
    n_subgraphs = np.empty(n_edges, dtype=np.int64)
    max_size = np.empty(n_edges, dtype=np.int64)

    n_seen = 0
    n_sub = 0
    for k, (i, j) in enumerate(zip(sources.tolist(), targets.tolist())):
        for node in (i, j):
            if not seen[node]:
                seen[node] = True
                n_seen += 1
                n_sub += 1
        if uf.union(i, j):
            n_sub -= 1

        n_nodes_seen[k] = n_seen
        n_subgraphs[k] = n_sub
        max_size[k] = uf.max_size

    return pd.DataFrame({
        'step': np.arange(1, n_edges + 1, dtype=np.int64),
        'n_edges': np.arange(1, n_edges + 1, dtype=np.int64),
        'source': pd.Series([labels[i] for i in sources.tolist()], dtype=object),
        'target': pd.Series([labels[j] for j in targets.tolist()], dtype=object),
        'strength': strength,
        'n_nodes_seen': n_nodes_seen,
        'n_subgraphs': n_subgraphs,
        'max_size': max_size,
        'rel_max_size': max_size / np.maximum(n_nodes_seen, 1),
    }, columns=STRUCTURE_COLUMNS)


def min_max_rule(results: pd.DataFrame) -> int:
    """
    Step at which the largest subgraph is smallest relative to nodes seen.

    Tends to select cut-points with many small, easy to read subgraphs.
    """
    if len(results) == 0:
        raise ValueError("Subgraph structure results are empty")
    return int(results['step'].iloc[int(np.argmin(results['rel_max_size'].values))])


def giant_component_detect(
    results: pd.DataFrame,
    all_nodes: bool = False,
    wiggle: float = 0.05,
) -> Optional[int]:
    """
    Step just before a giant component forms.

    A giant component is declared once the largest subgraph exceeds
    max(n_nodes_seen, 5) ** (2/3) by more than `wiggle`.

    Args:
        results: Output of calculate_subgraph_structure()
        all_nodes: Use the threshold for all nodes in the network instead
            of the nodes seen so far
        wiggle: Fraction the ratio may dip below the threshold before a
            giant component is detected

    Returns:
        Step two rows before the first detection (clamped to the first
        row), or None if no giant component forms
    """
    if len(results) == 0:
        return None

    threshold = np.maximum(results['n_nodes_seen'].values, 5) ** (2 / 3)
    if all_nodes:
        threshold = np.full(len(threshold), threshold.max())

    rel_to_thresh = threshold / results['max_size'].values
    passed = np.flatnonzero(rel_to_thresh < 1 - wiggle)
    if len(passed) == 0:
        return None

    row = max(int(passed[0]) - 2, 0)
    return int(results['step'].iloc[row])


def pinned_node_step(results: pd.DataFrame, pinned_node: str) -> int:
    """
    Step at which a given node first appears in the strength-sorted edges.

    Args:
        results: Output of calculate_subgraph_structure()
        pinned_node: Node label to locate

    Returns:
        Step of the first edge touching pinned_node
    """
    pinned_node = str(pinned_node)
    touches = (results['source'] == pinned_node) | (results['target'] == pinned_node)
    hits = np.flatnonzero(touches.values)
    if len(hits) == 0:
        raise ValueError(
            f"The requested pinned node {pinned_node!r} does not appear in the edge list"
        )
    return int(results['step'].iloc[int(hits[0])])


def default_step(
    results: pd.DataFrame,
    rule: Optional[Union[str, int]] = 'min_max_rule',
    pinned_node: Optional[str] = None,
) -> Optional[int]:
    """
    Resolve a default cut-point from a named heuristic or an explicit step.

    Args:
        results: Output of calculate_subgraph_structure()
        rule: One of 'min_max_rule', 'giant_component_local',
            'giant_component_global', 'pinned_node', or an integer step.
            None picks 'pinned_node' when pinned_node is given and
            'min_max_rule' otherwise.
        pinned_node: Node label used by the 'pinned_node' rule

    Returns:
        Selected step (None if a giant component never forms)
    """
    if rule is None:
        rule = 'pinned_node' if pinned_node is not None else 'min_max_rule'

    if isinstance(rule, (int, np.integer)) and not isinstance(rule, bool):
        if rule < 1 or rule > len(results):
            raise ValueError(
                f"Requested default step {rule} is outside the {len(results)} available steps"
            )
        return int(rule)

    if rule == 'min_max_rule':
        return min_max_rule(results)
    elif rule == 'giant_component_local':
        return giant_component_detect(results)
    elif rule == 'giant_component_global':
        return giant_component_detect(results, all_nodes=True)
    elif rule == 'pinned_node':
        if pinned_node is None:
            raise ValueError("The 'pinned_node' rule requires a pinned_node label")
        return pinned_node_step(results, pinned_node)

    raise ValueError(
        f"default_step must be one of {DEFAULT_STEP_RULES} or an integer, got {rule!r}"
    )
