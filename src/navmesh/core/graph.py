"""Navigation graph and A* search.

A Graph is a list of node points plus undirected edges between node
indices. The first ``corner_count`` nodes are the inflated island corners;
any further nodes were injected for a single query.
"""

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Any

from navmesh.domain import Point
from navmesh.exceptions import NodeIndexError


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """An undirected edge between two node indices."""

    start: int
    end: int

    def other(self, index: int) -> int:
        """The endpoint opposite ``index``."""
        return self.end if index == self.start else self.start


@dataclass
class Graph:
    """Nodes and undirected edges for pathfinding.

    Attributes:
        nodes: Node positions
        edges: Edges between node indices
        corner_count: Number of leading nodes that are island corners
    """

    nodes: list[Point] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    corner_count: int = 0

    @property
    def node_count(self) -> int:
        return len(self.nodes)

    @property
    def edge_count(self) -> int:
        return len(self.edges)

    def adjacency(self) -> dict[int, list[int]]:
        """Neighbour lists keyed by node index."""
        neighbours: dict[int, list[int]] = {i: [] for i in range(len(self.nodes))}
        for edge in self.edges:
            neighbours[edge.start].append(edge.end)
            neighbours[edge.end].append(edge.start)
        return neighbours

    def neighbours(self, index: int) -> list[int]:
        self._check_index(index)
        return [edge.other(index) for edge in self.edges if index in (edge.start, edge.end)]

    def has_edge(self, a: int, b: int) -> bool:
        return any({edge.start, edge.end} == {a, b} for edge in self.edges)

    def a_star(self, start: int, end: int) -> list[Point]:
        """Find the shortest route between two nodes.

        Edge costs are Euclidean lengths and the heuristic is the straight
        line distance to ``end``, which never overestimates.

        Args:
            start: Index of the start node
            end: Index of the end node

        Returns:
            Node points from start to end, both included. A route from a
            node to itself is that single node. An empty list means ``end``
            cannot be reached.

        Raises:
            NodeIndexError: If either index is outside the graph
        """
        self._check_index(start)
        self._check_index(end)

        goal = self.nodes[end]
        neighbours = self.adjacency()
        counter = itertools.count()

        frontier: list[tuple[float, int, int]] = [(0.0, next(counter), start)]
        came_from: dict[int, int] = {}
        cost_so_far: dict[int, float] = {start: 0.0}
        closed: set[int] = set()

        while frontier:
            _, _, current = heapq.heappop(frontier)
            if current == end:
                break
            if current in closed:
                continue
            closed.add(current)

            for nxt in neighbours[current]:
                new_cost = cost_so_far[current] + self.nodes[current].distance_to(self.nodes[nxt])
                if nxt not in cost_so_far or new_cost < cost_so_far[nxt]:
                    cost_so_far[nxt] = new_cost
                    priority = new_cost + goal.distance_to(self.nodes[nxt])
                    heapq.heappush(frontier, (priority, next(counter), nxt))
                    came_from[nxt] = current

        if end not in cost_so_far:
            return []

        path = [end]
        while path[-1] != start:
            path.append(came_from[path[-1]])
        path.reverse()

        return [self.nodes[i] for i in path]

    @staticmethod
    def path_length(path: list[Point]) -> float:
        """Total length of a route returned by ``a_star``."""
        return sum(a.distance_to(b) for a, b in zip(path, path[1:]))

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [p.to_dict() for p in self.nodes],
            "edges": [[e.start, e.end] for e in self.edges],
            "corner_count": self.corner_count,
        }

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self.nodes):
            raise NodeIndexError(index, len(self.nodes))
