"""
Connected component assignment for labeled edge lists.

Edges are treated as undirected regardless of weight sign. Every node label
(including isolated labels passed through `nodes`) receives exactly one
component id. Component ids are numbered 0, 1, 2, ... by the first-appearance
position of each component's earliest label, so repeated runs on the same
input return identical tables.
"""

import numpy as np
import pandas as pd
from typing import Iterable, Optional, Sequence

from ..graph.builder import EdgeGraph, build_graph
from .union_find import UnionFind, canonicalize


BACKENDS = ('union_find', 'scipy')


def assign_components(edges: np.ndarray, n_nodes: int) -> np.ndarray:
    """
    Assign a canonical component id to every node.

    Args:
        edges: Array of shape (n_edges, 2) with [source, target] node ids
        n_nodes: Total number of nodes (ids 0..n_nodes-1)

    Returns:
        Array of shape (n_nodes,) with component ids
    """
    uf = UnionFind(n_nodes)
    uf.merge_all(edges)
    return uf.canonical_labels()


def assign_components_scipy(edges: np.ndarray, n_nodes: int) -> np.ndarray:
    """
    Same contract as assign_components, computed with scipy.sparse.csgraph.
    """
    from scipy.sparse import coo_matrix
    from scipy.sparse.csgraph import connected_components

    if n_nodes == 0:
        return np.empty(0, dtype=np.int64)

    edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
    adjacency = coo_matrix(
        (np.ones(len(edges), dtype=np.int8), (edges[:, 0], edges[:, 1])),
        shape=(n_nodes, n_nodes),
    )
    _, labels = connected_components(adjacency, directed=False)
    return canonicalize(labels)


def _component_ids(graph: EdgeGraph, backend: str) -> np.ndarray:
    if backend == 'union_find':
        return assign_components(graph.edge_array(), graph.n_nodes)
    elif backend == 'scipy':
        return assign_components_scipy(graph.edge_array(), graph.n_nodes)
    raise ValueError(f"Unsupported backend: '{backend}'. Choose from {BACKENDS}")


def find_components(
    a: Sequence,
    b: Sequence,
    w: Sequence,
    nodes: Optional[Iterable] = None,
    check_weights: bool = True,
    backend: str = 'union_find',
) -> pd.DataFrame:
    """
    Find the connected components of a weighted edge list.

    Args:
        a: Source labels
        b: Target labels
        w: Edge weights (only validated; they do not affect connectivity)
        nodes: Optional labels of isolated nodes to include as singletons
        check_weights: Reject NaN and infinite weights
        backend: 'union_find' (default) or 'scipy'

    Returns:
        DataFrame with columns 'node' and 'component', one row per distinct
        label in first-appearance order
    """
    graph = build_graph(a, b, w, nodes=nodes, check_weights=check_weights)
    component = _component_ids(graph, backend)

    return pd.DataFrame({
        'node': pd.Series(graph.labels, dtype=object),
        'component': pd.Series(component, dtype=np.int64),
    })


def summarize_components(
    a: Sequence,
    b: Sequence,
    w: Sequence,
    nodes: Optional[Iterable] = None,
    check_weights: bool = True,
) -> pd.DataFrame:
    """
    Per-component size and weight statistics.

    Args:
        a: Source labels
        b: Target labels
        w: Edge weights
        nodes: Optional labels of isolated nodes to include as singletons
        check_weights: Reject NaN and infinite weights

    Returns:
        DataFrame with columns 'component', 'size', 'n_edges',
        'total_weight' and 'mean_weight' (NaN for edgeless components),
        ordered by component id
    """
    graph = build_graph(a, b, w, nodes=nodes, check_weights=check_weights)
    component = assign_components(graph.edge_array(), graph.n_nodes)
    n_components = int(component.max()) + 1 if len(component) > 0 else 0

    sizes = np.bincount(component, minlength=n_components)

    # both endpoints share a component, so the source decides
    edge_component = component[graph.sources] if graph.n_edges > 0 else np.empty(0, dtype=np.int64)
    n_edges = np.bincount(edge_component, minlength=n_components)
    total_weight = np.bincount(edge_component, weights=graph.weights, minlength=n_components)

    with np.errstate(invalid='ignore', divide='ignore'):
        mean_weight = np.where(n_edges > 0, total_weight / np.maximum(n_edges, 1), np.nan)

    return pd.DataFrame({
        'component': np.arange(n_components, dtype=np.int64),
        'size': sizes.astype(np.int64),
        'n_edges': n_edges.astype(np.int64),
        'total_weight': total_weight.astype(np.float64),
        'mean_weight': mean_weight.astype(np.float64),
    })
