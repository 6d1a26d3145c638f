from typing import Dict, Hashable, Iterable

from ..grid_core import Grid
from ..maze_gen import MazeGeneration
from ..maze_types import MazeAlgorithm


class DisjointSet:
    """Union-find with union by rank and path compression."""

    def __init__(self, items: Iterable[Hashable]):
        self.parent: Dict[Hashable, Hashable] = {}
        self.rank: Dict[Hashable, int] = {}
        for item in items:
            self.parent[item] = item
            self.rank[item] = 0

    def find(self, item: Hashable) -> Hashable:
        root = item
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[item] != root:
            self.parent[item], item = root, self.parent[item]
        return root

    def union(self, a: Hashable, b: Hashable) -> bool:
        """Merges the sets of ``a`` and ``b``; False if they were already one set."""
        root_a, root_b = self.find(a), self.find(b)
        if root_a == root_b:
            return False
        if self.rank[root_a] < self.rank[root_b]:
            root_a, root_b = root_b, root_a
        self.parent[root_b] = root_a
        if self.rank[root_a] == self.rank[root_b]:
            self.rank[root_a] += 1
        return True


class Kruskals(MazeGeneration):
    algorithm = MazeAlgorithm.KRUSKALS

    def carve(self, grid: Grid):
        forest = DisjointSet(grid.all_coordinates())
        edges = grid.unique_edges()
        grid.shuffle(edges)

        for a, b in edges:
            if forest.union(a, b):
                grid.link(a, b)
                self.capture_step(grid, [a, b])
