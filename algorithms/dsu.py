"""
dsu.py — Disjoint-Set-Union (Union-Find)
=========================================
Tracks which nodes are already connected so Kruskal can reject edges
that would close a cycle.

  • find     – path compression
  • union    – union by rank, returns True when two sets were merged
  • elements are added lazily on first use
"""

from typing import Dict, Hashable, Iterable


class DisjointSet:
    """
    Attributes:
        _parent : {element: parent element}; a root is its own parent.
        _rank   : {root: upper bound on tree height}
        _count  : number of disjoint sets
    """

    def __init__(self, elements: Iterable[Hashable] = ()):
        self._parent: Dict[Hashable, Hashable] = {}
        self._rank:   Dict[Hashable, int]      = {}
        self._count:  int                      = 0
        for e in elements:
            self.add(e)

    def add(self, element: Hashable) -> None:
        if element not in self._parent:
            self._parent[element] = element
            self._rank[element] = 0
            self._count += 1

    def find(self, element: Hashable) -> Hashable:
        self.add(element)
        root = element
        while self._parent[root] != root:
            root = self._parent[root]
        # path compression
        while self._parent[element] != root:
            self._parent[element], element = root, self._parent[element]
        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        root_a = self.find(a)
        root_b = self.find(b)
        if root_a == root_b:
            return False
        if self._rank[root_a] < self._rank[root_b]:
            self._parent[root_a] = root_b
        elif self._rank[root_a] > self._rank[root_b]:
            self._parent[root_b] = root_a
        else:
            self._parent[root_b] = root_a
            self._rank[root_a] += 1
        self._count -= 1
        return True

    def connected(self, a: Hashable, b: Hashable) -> bool:
        return self.find(a) == self.find(b)

    def __contains__(self, element: Hashable) -> bool:
        return element in self._parent

    def __len__(self) -> int:
        """Number of disjoint sets."""
        return self._count
