"""
entropynet - Connected components of weighted association networks.

This package provides tools for:
- Normalizing (source, target, weight) edge lists into dense node ids
- Connected component assignment with union-find
- Distinct node counting over edge lists
- Subgraph structure sweeps over edges sorted by strength
"""

__version__ = "1.0.0"

from .errors import (
    EntropynetError,
    LengthMismatchError,
    InvalidWeightError,
    NodeCountMismatchError,
)
from .graph import EdgeGraph, build_graph, gather_unique_nodes
from .components import (
    UnionFind,
    assign_components,
    find_components,
    summarize_components,
    calculate_subgraph_structure,
)
from .counting import count_nodes, edges_to_all_nodes

__all__ = [
    'EntropynetError', 'LengthMismatchError', 'InvalidWeightError', 'NodeCountMismatchError',
    'EdgeGraph', 'build_graph', 'gather_unique_nodes',
    'UnionFind', 'assign_components', 'find_components', 'summarize_components',
    'calculate_subgraph_structure',
    'count_nodes', 'edges_to_all_nodes',
]
