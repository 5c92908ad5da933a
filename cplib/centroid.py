"""
Centroid decomposition of a tree.

Given an undirected tree on nodes 0..n-1, repeatedly remove a centroid
(a node whose removal leaves no piece larger than half its component)
and recurse into the remaining pieces. The removed centroids form a new
tree of depth O(log n).

Both passes use explicit stacks; a path of 10^5 nodes would otherwise
exceed Python's recursion limit.
"""

import numpy as np
from typing import List, Sequence, Tuple


def tree_from_edges(n: int, edges: Sequence[Tuple[int, int]]) -> List[List[int]]:
    """Build adjacency lists for nodes 0..n-1 from an undirected edge list."""
    adjacency = [[] for _ in range(n)]
    for u, v in edges:
        adjacency[u].append(v)
        adjacency[v].append(u)
    return adjacency


def _component_sizes(entry: int, adjacency, removed: list,
                     sizes: list, dfs_parent: list) -> int:
    """
    Root the component containing entry at entry and fill subtree sizes.

    Returns the component size. Raises ValueError if an edge leads back
    to a node already reached, i.e. the component contains a cycle.
    """
    dfs_parent[entry] = -1
    order = []
    visited = {entry}
    stack = [entry]
    while stack:
        u = stack.pop()
        order.append(u)
        for v in adjacency[u]:
            if v != dfs_parent[u] and not removed[v]:
                if v in visited:
                    raise ValueError(f"adjacency is not a tree: cycle through nodes {u} and {v}")
                visited.add(v)
                dfs_parent[v] = u
                stack.append(v)

    # Children appear after their parent in order
    for u in order:
        sizes[u] = 1
    for u in reversed(order):
        if dfs_parent[u] != -1:
            sizes[dfs_parent[u]] += sizes[u]
    return len(order)


def _find_centroid(entry: int, total: int, adjacency, removed: list,
                   sizes: list, dfs_parent: list) -> int:
    """Walk from entry towards any child subtree larger than total // 2."""
    u = entry
    while True:
        for v in adjacency[u]:
            if v != dfs_parent[u] and not removed[v] and sizes[v] > total // 2:
                u = v
                break
        else:
            return u


def centroid_decompose(adjacency: Sequence[Sequence[int]]) -> Tuple[np.ndarray, int]:
    """
    Compute the centroid decomposition of a tree.

    Parameters
    ----------
    adjacency : sequence of sequences
        adjacency[u] lists the neighbours of node u. Must describe a single
        connected tree on nodes 0..n-1.

    Returns
    -------
    tuple
        (parent, root): parent[u] is the parent of u in the centroid tree
        (-1 for the root), root is the first centroid. An empty tree gives
        (empty array, -1).

    Time: O(n log n)
    """
    n = len(adjacency)
    parent = np.full(n, -1, dtype=np.int64)
    if n == 0:
        return parent, -1

    removed = [False] * n
    sizes = [0] * n
    dfs_parent = [-1] * n

    root = -1
    placed = 0
    stack = [(0, -1)]  # (any node of the component, parent centroid)
    while stack:
        entry, above = stack.pop()
        total = _component_sizes(entry, adjacency, removed, sizes, dfs_parent)
        centroid = _find_centroid(entry, total, adjacency, removed, sizes, dfs_parent)

        parent[centroid] = above
        removed[centroid] = True
        placed += 1
        if above == -1:
            root = centroid

        for v in adjacency[centroid]:
            if not removed[v]:
                stack.append((v, centroid))

    if placed != n:
        raise ValueError(f"adjacency is not connected: reached {placed} of {n} nodes")
    return parent, root


def centroid_depths(parent: np.ndarray) -> np.ndarray:
    """Return the depth of every node in a centroid tree (root at depth 0)."""
    n = len(parent)
    depth = np.full(n, -1, dtype=np.int64)
    for u in range(n):
        path = []
        v = u
        while v != -1 and depth[v] == -1:
            path.append(v)
            v = parent[v]
        d = -1 if v == -1 else depth[v]
        for w in reversed(path):
            d += 1
            depth[w] = d
    return depth
