"""
Disjoint-set (union-find) over dense node ids.

Union by size with path halving. When two sets of equal size merge, the root
with the smaller node id is kept, so the final forest depends only on the edge
order.
"""

import numpy as np


class UnionFind:
    """
    Union-find over nodes 0..n-1 that tracks component count and sizes.

    Example:
        uf = UnionFind(4)
        uf.merge_all(np.array([[0, 1], [2, 3]]))
        uf.n_components  # 2
    """

    def __init__(self, n: int):
        """
        Initialize n singleton sets.

        Args:
            n: Number of nodes
        """
        if n < 0:
            raise ValueError(f"Number of nodes must be non-negative, got {n}")
        self.n = n
        self._parent = list(range(n))
        self._size = [1] * n
        self.n_components = n
        self.max_size = 1 if n > 0 else 0

    def find(self, i: int) -> int:
        """Return the root of the set containing node i."""
        parent = self._parent
        while parent[i] != i:
            parent[i] = parent[parent[i]]
            i = parent[i]
        return i

    def union(self, i: int, j: int) -> bool:
        """
        Merge the sets containing nodes i and j.

        Returns:
            True if two different sets were merged, False if i and j
            were already connected
        """
        ri = self.find(i)
        rj = self.find(j)
        if ri == rj:
            return False

        size = self._size
        if size[ri] < size[rj] or (size[ri] == size[rj] and rj < ri):
            ri, rj = rj, ri

        self._parent[rj] = ri
        size[ri] += size[rj]
        self.n_components -= 1
        if size[ri] > self.max_size:
            self.max_size = size[ri]
        return True

    def connected(self, i: int, j: int) -> bool:
        return self.find(i) == self.find(j)

    def size_of(self, i: int) -> int:
        """Size of the set containing node i."""
        return self._size[self.find(i)]

    def merge_all(self, edges: np.ndarray) -> np.ndarray:
        """
        Merge every edge in order.

        Args:
            edges: Array of shape (n_edges, 2) with [source, target] ids

        Returns:
            Array of shape (n_edges,) with the number of components after
            each edge was merged
        """
        edges = np.asarray(edges, dtype=np.int64).reshape(-1, 2)
        counts = np.empty(len(edges), dtype=np.int64)
        for k, (i, j) in enumerate(edges.tolist()):
            self.union(i, j)
            counts[k] = self.n_components
        return counts

    def get_roots(self) -> np.ndarray:
        """
        Root id of every node.

        Returns:
            Array of shape (n,) with the root of each node
        """
        return np.array([self.find(i) for i in range(self.n)], dtype=np.int64)

    def canonical_labels(self) -> np.ndarray:
        """
        Component id of every node, numbered by smallest member.

        Component ids are assigned 0, 1, 2, ... in increasing order of the
        smallest node id found in each set.

        Returns:
            Array of shape (n,) with the component id of each node
        """
        return canonicalize(self.get_roots())


def canonicalize(roots: np.ndarray) -> np.ndarray:
    """
    Relabel arbitrary per-node set labels by order of first occurrence.

    Args:
        roots: Array of shape (n,) where equal values mean the same set

    Returns:
        Array of shape (n,) with contiguous ids starting at 0
    """
    roots = np.asarray(roots)
    if len(roots) == 0:
        return np.empty(0, dtype=np.int64)
    _, first_ix, inverse = np.unique(roots, return_index=True, return_inverse=True)
    # rank of each set's first occurrence
    order = np.argsort(first_ix, kind='stable')
    rank = np.empty_like(order)
    rank[order] = np.arange(len(order))
    return rank[inverse.reshape(-1)].astype(np.int64)
