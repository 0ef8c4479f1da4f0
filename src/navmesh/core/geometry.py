"""Geometric operations for decomposition, boundary and path queries.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Point-in-polygon testing (ray casting algorithm)
- Point-on-segment and point-in-triangle tests
- Segment/segment and line/segment intersection
- Nearest point calculations
- Perpendicular vector computation

Every tolerance-dependent function takes the same distance ``epsilon``:
two things closer than ``epsilon`` world units are considered touching.

All functions are pure and stateless.
"""

import math
from collections.abc import Sequence

from navmesh.domain import Point, Vector

DEFAULT_EPSILON = 1e-6


def cross_2d(u: Vector, v: Vector) -> float:
    """Z component of the cross product of two 2D vectors.

    Positive when ``v`` turns counter-clockwise from ``u``, negative when
    it turns clockwise and zero when they are parallel.
    """
    return u.x * v.y - u.y * v.x


def signed_area(points: Sequence[Point]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: List of points forming the polygon boundary

    Returns:
        Signed area in square units. Returns 0.0 for degenerate polygons.

    Examples:
        >>> p1 = Point(0.0, 0.0)
        >>> p2 = Point(1.0, 0.0)
        >>> p3 = Point(1.0, 1.0)
        >>> p4 = Point(0.0, 1.0)
        >>> signed_area([p1, p2, p3, p4])  # CCW square
        1.0
        >>> signed_area([p1, p4, p3, p2])  # CW square
        -1.0
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        j = (i + 1) % n
        area += points[i].x * points[j].y
        area -= points[j].x * points[i].y

    return area / 2.0


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.
    Vertices exactly at the ray's height are counted on one side only, so a
    ray passing through a vertex is not double counted.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside


def on_segment(
    point: Point,
    start: Point,
    direction: Vector,
    epsilon: float = DEFAULT_EPSILON,
) -> bool:
    """Check whether a point lies on the segment ``start -> start + direction``.

    The point's distance from the supporting line must be within ``epsilon``
    and its projection must fall on the segment (also within ``epsilon``).

    Args:
        point: The point to test
        start: Segment start
        direction: Vector from segment start to segment end
        epsilon: Distance tolerance

    Returns:
        True if the point is on the segment
    """
    length = direction.length()
    if length == 0.0:
        return point.distance_to(start) <= epsilon

    relative = point - start
    if abs(cross_2d(relative, direction)) / length > epsilon:
        return False

    t = relative.dot(direction) / (length * length)
    tolerance = epsilon / length
    return -tolerance <= t <= 1.0 + tolerance


def point_in_triangle(
    point: Point,
    a: Point,
    b: Point,
    c: Point,
    epsilon: float = DEFAULT_EPSILON,
) -> bool:
    """Check whether a point is inside or on the boundary of a triangle.

    Works for either winding: the point is inside when it is on the same
    side of all three edges. Points on an edge (within ``epsilon``) also
    count as inside.
    """
    a_cross = cross_2d(b - a, point - a)
    b_cross = cross_2d(c - b, point - b)
    c_cross = cross_2d(a - c, point - c)

    if (a_cross > 0 and b_cross > 0 and c_cross > 0) or (
        a_cross < 0 and b_cross < 0 and c_cross < 0
    ):
        return True

    return (
        on_segment(point, a, b - a, epsilon)
        or on_segment(point, b, c - b, epsilon)
        or on_segment(point, c, a - c, epsilon)
    )


def segment_intersection(
    line_start: Point,
    line_direction: Vector,
    edge_start: Point,
    edge_direction: Vector,
    strict: bool = True,
    epsilon: float = DEFAULT_EPSILON,
) -> Point | None:
    """Intersect a line or segment with an edge.

    The edge is always bounded. With ``strict`` the line is bounded too
    (a segment from ``line_start`` to ``line_start + line_direction``);
    without it the line extends infinitely in both directions, which is
    what ray casts use. Parameters within ``epsilon`` of a bound are
    accepted to absorb floating point error.

    When the two are collinear and overlap, the overlapping point nearest
    to ``line_start`` is returned.

    Args:
        line_start: Start of the tested line
        line_direction: Direction (and, when strict, extent) of the line
        edge_start: Start of the edge
        edge_direction: Vector from edge start to edge end
        strict: Whether the line is bounded to its segment
        epsilon: Distance tolerance

    Returns:
        The intersection point, or None if they do not meet
    """
    line_length = line_direction.length()
    edge_length = edge_direction.length()

    if edge_length == 0.0:
        if line_length == 0.0:
            return edge_start if edge_start.distance_to(line_start) <= epsilon else None
        if strict:
            return edge_start if on_segment(edge_start, line_start, line_direction, epsilon) else None
        offset = abs(cross_2d(edge_start - line_start, line_direction)) / line_length
        return edge_start if offset <= epsilon else None

    if line_length == 0.0:
        return line_start if on_segment(line_start, edge_start, edge_direction, epsilon) else None

    offset = edge_start - line_start
    denominator = cross_2d(line_direction, edge_direction)
    line_tolerance = epsilon / line_length
    edge_tolerance = epsilon / edge_length

    if abs(denominator) <= epsilon * line_length * edge_length:
        # Parallel
        if abs(cross_2d(offset, line_direction)) / line_length > epsilon:
            return None

        # Collinear: express the edge as an interval of line parameters
        length_squared = line_length * line_length
        t_0 = offset.dot(line_direction) / length_squared
        t_1 = t_0 + edge_direction.dot(line_direction) / length_squared
        low, high = min(t_0, t_1), max(t_0, t_1)

        if strict:
            low = max(low, -line_tolerance)
            high = min(high, 1.0 + line_tolerance)
            if low > high:
                return None

        t = min(max(0.0, low), high)
        return line_start + line_direction * t

    t = cross_2d(offset, edge_direction) / denominator
    u = cross_2d(offset, line_direction) / denominator

    if not -edge_tolerance <= u <= 1.0 + edge_tolerance:
        return None
    if strict and not -line_tolerance <= t <= 1.0 + line_tolerance:
        return None

    u = min(max(u, 0.0), 1.0)
    return edge_start + edge_direction * u


def segments_intersect(
    p1: Point,
    p2: Point,
    q1: Point,
    q2: Point,
    epsilon: float = DEFAULT_EPSILON,
) -> bool:
    """Check whether two segments share any point besides a common endpoint.

    Segments that merely meet at an endpoint they both have are not
    considered intersecting; a segment touching the interior of the other,
    or overlapping it along a stretch, is.

    Args:
        p1: First endpoint of segment 1
        p2: Second endpoint of segment 1
        q1: First endpoint of segment 2
        q2: Second endpoint of segment 2
        epsilon: Distance tolerance

    Returns:
        True if the segments intersect
    """
    shared = {p1, p2} & {q1, q2}
    d = p2 - p1
    e = q2 - q1
    d_length = d.length()
    e_length = e.length()

    if d_length == 0.0 or e_length == 0.0:
        point, start, direction = (p1, q1, e) if d_length == 0.0 else (q1, p1, d)
        return point not in shared and on_segment(point, start, direction, epsilon)

    denominator = cross_2d(d, e)

    if abs(denominator) <= epsilon * d_length * e_length:
        # Parallel
        if abs(cross_2d(q1 - p1, d)) / d_length > epsilon:
            return False

        t_0 = (q1 - p1).dot(d) / (d_length * d_length)
        t_1 = (q2 - p1).dot(d) / (d_length * d_length)
        overlap = (min(1.0, max(t_0, t_1)) - max(0.0, min(t_0, t_1))) * d_length

        if overlap > epsilon:
            return True
        if overlap >= -epsilon:
            return not shared
        return False

    t = cross_2d(q1 - p1, e) / denominator
    u = cross_2d(q1 - p1, d) / denominator

    if not -epsilon / d_length <= t <= 1.0 + epsilon / d_length:
        return False
    if not -epsilon / e_length <= u <= 1.0 + epsilon / e_length:
        return False

    crossing = p1 + d * t
    return not any(crossing.distance_to(s) <= epsilon for s in shared)


def is_simple_ring(points: Sequence[Point], epsilon: float = DEFAULT_EPSILON) -> bool:
    """Check that a closed ring neither crosses nor touches itself.

    Args:
        points: Ring vertices; the last connects back to the first
        epsilon: Distance tolerance

    Returns:
        True if the ring is a simple polygon
    """
    n = len(points)
    if n < 3 or len(set(points)) != n:
        return False

    for i in range(n):
        a1, a2 = points[i], points[(i + 1) % n]
        for j in range(i + 1, n):
            b1, b2 = points[j], points[(j + 1) % n]
            if segments_intersect(a1, a2, b1, b2, epsilon):
                return False

    return True


def nearest_point_on_segment(point: Point, seg_start: Point, seg_end: Point) -> tuple[Point, float]:
    """Find the closest point on a line segment to a given point.

    Projects the point onto the infinite line, then clamps to the segment endpoints.

    Args:
        point: The point to project
        seg_start: Start point of line segment
        seg_end: End point of line segment

    Returns:
        Tuple of (nearest_point, distance) where nearest_point is the closest
        point on the segment and distance is the Euclidean distance to it

    Examples:
        >>> nearest, dist = nearest_point_on_segment(Point(1.0, 1.0), Point(0.0, 0.0), Point(2.0, 0.0))
        >>> nearest, dist
        (Point(x=1.0, y=0.0), 1.0)
    """
    dx = seg_end.x - seg_start.x
    dy = seg_end.y - seg_start.y

    # Handle zero-length segment
    segment_length_sq = dx * dx + dy * dy
    if segment_length_sq < 1e-10:
        distance = math.hypot(point.x - seg_start.x, point.y - seg_start.y)
        return seg_start, distance

    # t = dot(point - start, end - start) / ||end - start||^2
    t = ((point.x - seg_start.x) * dx + (point.y - seg_start.y) * dy) / segment_length_sq

    # Clamp t to [0, 1] to stay within segment
    t = max(0.0, min(1.0, t))

    nearest = Point(seg_start.x + t * dx, seg_start.y + t * dy)
    distance = math.hypot(point.x - nearest.x, point.y - nearest.y)

    return nearest, distance


def perpendicular_direction(p1: Point, p2: Point) -> Vector:
    """Calculate the unit perpendicular vector to a line from p1 to p2.

    The perpendicular is rotated 90 degrees counter-clockwise from the
    direction vector (p2 - p1).

    Args:
        p1: Start point of line
        p2: End point of line

    Returns:
        Unit perpendicular vector

    Raises:
        ValueError: If p1 and p2 are the same point (zero-length line)

    Examples:
        >>> perpendicular_direction(Point(0.0, 0.0), Point(1.0, 0.0))
        Point(x=-0.0, y=1.0)
    """
    dx = p2.x - p1.x
    dy = p2.y - p1.y

    length = math.hypot(dx, dy)

    if length < 1e-10:
        raise ValueError("Cannot calculate perpendicular of zero-length line")

    dx /= length
    dy /= length

    # Rotate 90 degrees counter-clockwise: (x, y) -> (-y, x)
    return Point(-dy, dx)
