"""Trapezoidal decomposition of an island ring.

This module builds a trapezoidal map of the plane around one island:
- Trapezoid: A cell bounded by a left and a right edge, clipped to its
  own y-range, so top and bottom are horizontal
- Leaf, XSplit, YSplit: The tagged point-location nodes
- QueryStructure: An arena of query nodes addressed by index
- TrapezoidalMap: Incremental segment insertion and inside classification

Segments are inserted one at a time. Each new endpoint splits the cell
containing it at its y-coordinate, then every cell the segment passes
through is split into a left and a right part. At every step the leaves of
the query structure partition the whole coordinate domain.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from navmesh.core.geometry import DEFAULT_EPSILON, cross_2d, point_in_polygon
from navmesh.domain import Edge, Point


def x_at(edge: Edge, y: float) -> float:
    """X coordinate of the edge's supporting line at height ``y``.

    Horizontal edges have no unique answer; their start x is returned.
    """
    dy = edge.end.y - edge.start.y
    if dy == 0.0:
        return edge.start.x
    t = (y - edge.start.y) / dy
    return edge.start.x + t * (edge.end.x - edge.start.x)


def clip_to_band(edge: Edge, top: float, bottom: float) -> Edge:
    """Cut an edge's supporting line to the horizontal band [bottom, top].

    Returns:
        Edge running from height ``top`` down to height ``bottom``
    """
    return Edge(Point(x_at(edge, top), top), Point(x_at(edge, bottom), bottom))


@dataclass(frozen=True, slots=True)
class Trapezoid:
    """A cell of the trapezoidal map.

    Both side edges run top to bottom and span exactly the cell's y-range,
    so the cell's corners are the side edges' endpoints.

    Attributes:
        trapezoid_id: Arena id, unique within one map
        left: Left side, upper endpoint first
        right: Right side, upper endpoint first
    """

    trapezoid_id: int
    left: Edge
    right: Edge

    @property
    def top_y(self) -> float:
        return self.left.start.y

    @property
    def bottom_y(self) -> float:
        return self.left.end.y

    @property
    def height(self) -> float:
        return self.top_y - self.bottom_y

    def area(self) -> float:
        top_width = self.right.start.x - self.left.start.x
        bottom_width = self.right.end.x - self.left.end.x
        return self.height * (top_width + bottom_width) / 2.0

    def top_edge(self) -> Edge:
        return Edge(self.left.start, self.right.start)

    def bottom_edge(self) -> Edge:
        return Edge(self.left.end, self.right.end)

    def horizontal_edges(self) -> tuple[Edge, Edge]:
        """The top and bottom sides."""
        return (self.top_edge(), self.bottom_edge())

    def boundary_edges(self) -> tuple[Edge, Edge, Edge, Edge]:
        """All four sides: left, right, top, bottom."""
        return (self.left, self.right, self.top_edge(), self.bottom_edge())

    def vertices(self) -> tuple[Point, Point, Point, Point]:
        """Corners in clockwise order starting top left."""
        return (self.left.start, self.right.start, self.right.end, self.left.end)

    def center(self) -> Point:
        corners = self.vertices()
        return Point(
            sum(p.x for p in corners) / 4.0,
            sum(p.y for p in corners) / 4.0,
        )

    def x_range_at(self, y: float) -> tuple[float, float]:
        """Left and right extent of the cell at height ``y``."""
        return (x_at(self.left, y), x_at(self.right, y))

    def split_vertically(self, y: float, above_id: int, below_id: int) -> tuple["Trapezoid", "Trapezoid"]:
        """Cut the cell with a horizontal line at height ``y``.

        Args:
            y: Height of the cut, strictly inside the cell's y-range
            above_id: Id for the upper part
            below_id: Id for the lower part

        Returns:
            Tuple of (above, below) trapezoids
        """
        above = Trapezoid(
            above_id,
            clip_to_band(self.left, self.top_y, y),
            clip_to_band(self.right, self.top_y, y),
        )
        below = Trapezoid(
            below_id,
            clip_to_band(self.left, y, self.bottom_y),
            clip_to_band(self.right, y, self.bottom_y),
        )
        return above, below

    def split_horizontally(
        self, segment: Edge, left_id: int, right_id: int
    ) -> tuple["Trapezoid", "Trapezoid"]:
        """Cut the cell along a segment that crosses it from top to bottom.

        Args:
            segment: Segment spanning the cell's y-range
            left_id: Id for the part left of the segment
            right_id: Id for the part right of the segment

        Returns:
            Tuple of (left, right) trapezoids
        """
        middle = clip_to_band(segment, self.top_y, self.bottom_y)
        return Trapezoid(left_id, self.left, middle), Trapezoid(right_id, middle, self.right)


@dataclass(frozen=True, slots=True)
class Leaf:
    """Query node resolving to a single trapezoid."""

    trapezoid_id: int


@dataclass(frozen=True, slots=True)
class XSplit:
    """Query node branching on which side of a segment a point lies.

    Attributes:
        segment: Splitting segment, upper endpoint first
        left: Node index for points left of the segment
        right: Node index for points on or right of the segment
    """

    segment: Edge
    left: int
    right: int


@dataclass(frozen=True, slots=True)
class YSplit:
    """Query node branching on a point's height.

    Attributes:
        y: Height of the split
        above: Node index for points with y >= split
        below: Node index for points with y < split
    """

    y: float
    above: int
    below: int


QueryNode = Union[Leaf, XSplit, YSplit]


class QueryStructure:
    """Point-location search tree over the trapezoids of a map.

    Nodes live in an arena and refer to their children by index. Splitting
    a trapezoid replaces its leaf in place with a split node whose two
    children are fresh leaves, so no parent links are needed.
    """

    def __init__(self, root_trapezoid: int) -> None:
        self._nodes: list[QueryNode] = [Leaf(root_trapezoid)]
        self._leaf_index: dict[int, int] = {root_trapezoid: 0}

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, index: int) -> QueryNode:
        return self._nodes[index]

    @property
    def root(self) -> QueryNode:
        return self._nodes[0]

    def leaves(self) -> list[int]:
        """Ids of the trapezoids currently reachable as leaves."""
        return [node.trapezoid_id for node in self._nodes if isinstance(node, Leaf)]

    def locate(self, point: Point) -> int:
        """Find the id of the trapezoid containing a point.

        Args:
            point: Point to locate

        Returns:
            Trapezoid id
        """
        node = self._nodes[0]
        while not isinstance(node, Leaf):
            if isinstance(node, YSplit):
                node = self._nodes[node.above if point.y >= node.y else node.below]
            else:
                segment = node.segment
                upward = segment.start - segment.end
                is_left = cross_2d(upward, point - segment.end) > 0.0
                node = self._nodes[node.left if is_left else node.right]
        return node.trapezoid_id

    def split_y(self, trapezoid_id: int, y: float, above_id: int, below_id: int) -> None:
        """Replace a trapezoid's leaf with a YSplit over two new leaves."""
        above = self._add_leaf(above_id)
        below = self._add_leaf(below_id)
        self._replace(trapezoid_id, YSplit(y, above, below))

    def split_x(self, trapezoid_id: int, segment: Edge, left_id: int, right_id: int) -> None:
        """Replace a trapezoid's leaf with an XSplit over two new leaves."""
        left = self._add_leaf(left_id)
        right = self._add_leaf(right_id)
        self._replace(trapezoid_id, XSplit(segment, left, right))

    def _add_leaf(self, trapezoid_id: int) -> int:
        self._nodes.append(Leaf(trapezoid_id))
        index = len(self._nodes) - 1
        self._leaf_index[trapezoid_id] = index
        return index

    def _replace(self, trapezoid_id: int, node: QueryNode) -> None:
        index = self._leaf_index.pop(trapezoid_id)
        self._nodes[index] = node


class TrapezoidalMap:
    """Trapezoidal map of the plane around one island.

    The map starts as a single sentinel trapezoid covering the square
    ``[-bound, bound]`` in both axes. Trapezoid ids are handed out in
    increasing order and never reused.

    Example:
        >>> ring = [Point(50, 0), Point(100, 25), Point(100, -25)]
        >>> tmap = TrapezoidalMap.from_ring(ring)
        >>> len(tmap.inside_trapezoids(ring))
        2
    """

    def __init__(self, bound: float = 10000.0, epsilon: float = DEFAULT_EPSILON) -> None:
        self.epsilon = epsilon
        self.trapezoids: dict[int, Trapezoid] = {}
        self._next_id = 0
        self._introduced: set[Point] = set()

        root = Trapezoid(
            self._allocate_id(),
            Edge(Point(-bound, bound), Point(-bound, -bound)),
            Edge(Point(bound, bound), Point(bound, -bound)),
        )
        self.trapezoids[root.trapezoid_id] = root
        self.query = QueryStructure(root.trapezoid_id)

    @classmethod
    def from_ring(
        cls,
        ring: Sequence[Point],
        bound: float = 10000.0,
        epsilon: float = DEFAULT_EPSILON,
    ) -> "TrapezoidalMap":
        """Build the map of a closed ring, inserting segments in ring order."""
        tmap = cls(bound=bound, epsilon=epsilon)
        n = len(ring)
        for i in range(n):
            tmap.insert_segment(Edge(ring[i], ring[(i + 1) % n]))
        return tmap

    def __len__(self) -> int:
        return len(self.trapezoids)

    def locate(self, point: Point) -> Trapezoid:
        return self.trapezoids[self.query.locate(point)]

    def insert_segment(self, segment: Edge) -> None:
        """Add one boundary segment to the map.

        Args:
            segment: Segment in either direction
        """
        ordered = segment.order_by_y()

        for endpoint in (ordered.start, ordered.end):
            if endpoint not in self._introduced:
                self._introduced.add(endpoint)
                self._split_at(endpoint)

        if ordered.start.y - ordered.end.y <= self.epsilon:
            # Horizontal segments lie along the cuts made at their endpoints
            return

        for trapezoid in list(self.trapezoids.values()):
            if self._is_crossed_by(trapezoid, ordered):
                self._split_along(trapezoid, ordered)

    def inside_trapezoids(self, ring: Sequence[Point]) -> list[Trapezoid]:
        """Trapezoids lying inside the ring, by ray parity from their centers."""
        return [
            trapezoid
            for trapezoid in self.trapezoids.values()
            if trapezoid.height > self.epsilon and point_in_polygon(trapezoid.center(), ring)
        ]

    def _allocate_id(self) -> int:
        trapezoid_id = self._next_id
        self._next_id += 1
        return trapezoid_id

    def _split_at(self, point: Point) -> None:
        trapezoid = self.locate(point)
        if (
            point.y >= trapezoid.top_y - self.epsilon
            or point.y <= trapezoid.bottom_y + self.epsilon
        ):
            # A cut already runs through this height
            return

        above, below = trapezoid.split_vertically(
            point.y, self._allocate_id(), self._allocate_id()
        )
        self._replace(trapezoid, above, below)
        self.query.split_y(trapezoid.trapezoid_id, point.y, above.trapezoid_id, below.trapezoid_id)

    def _is_crossed_by(self, trapezoid: Trapezoid, segment: Edge) -> bool:
        if trapezoid.height <= self.epsilon:
            return False
        if segment.start.y < trapezoid.top_y - self.epsilon:
            return False
        if segment.end.y > trapezoid.bottom_y + self.epsilon:
            return False

        middle = (trapezoid.top_y + trapezoid.bottom_y) / 2.0
        left_x, right_x = trapezoid.x_range_at(middle)
        return left_x + self.epsilon < x_at(segment, middle) < right_x - self.epsilon

    def _split_along(self, trapezoid: Trapezoid, segment: Edge) -> None:
        left, right = trapezoid.split_horizontally(
            segment, self._allocate_id(), self._allocate_id()
        )
        self._replace(trapezoid, left, right)
        self.query.split_x(trapezoid.trapezoid_id, segment, left.trapezoid_id, right.trapezoid_id)

    def _replace(self, old: Trapezoid, first: Trapezoid, second: Trapezoid) -> None:
        del self.trapezoids[old.trapezoid_id]
        self.trapezoids[first.trapezoid_id] = first
        self.trapezoids[second.trapezoid_id] = second
