"""Edge list normalization into dense node ids."""

from .builder import EdgeGraph, build_graph, gather_unique_nodes, check_lengths, index_labels

__all__ = ['EdgeGraph', 'build_graph', 'gather_unique_nodes', 'check_lengths', 'index_labels']
