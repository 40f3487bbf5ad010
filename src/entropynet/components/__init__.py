"""Connected components and subgraph structure of weighted edge lists."""

from .union_find import UnionFind, canonicalize
from .finder import assign_components, assign_components_scipy, find_components, summarize_components
from .structure import (
    ensure_sorted,
    calculate_subgraph_structure,
    min_max_rule,
    giant_component_detect,
    pinned_node_step,
    default_step,
)

__all__ = [
    'UnionFind', 'canonicalize',
    'assign_components', 'assign_components_scipy', 'find_components', 'summarize_components',
    'ensure_sorted', 'calculate_subgraph_structure', 'min_max_rule', 'giant_component_detect',
    'pinned_node_step', 'default_step',
]
