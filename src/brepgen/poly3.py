## poly3, planar polygons in three-space for brepgen

"""
=====================================================
poly3 -- planar polygon records for brepgen solids
=====================================================

A ``Polygon`` is an ordered loop of three or more coplanar vertices
together with its supporting ``Plane``.  Vertex order is significant:
seen from the side the plane normal points to, the vertices run
counter-clockwise, so for a polygon on the boundary of a solid the
normal points out of the solid.

The plane is derived from the polygon's own vertices when the polygon
is built.  Starting from the first vertex, the first later vertex that
is more than ``eps`` away is taken as the second corner, and the first
vertex after that which makes a corner that is not flat (see
``corner_normal``) is taken as the third.  The normal is that cross product normalized,
and ``w`` is the normal's dot product with the first vertex (so that
``dot(normal, p) == w`` for every point ``p`` on the plane).

Polygons are immutable.  Nothing here reorders, merges or deduplicates
vertices: ``topoints(poly_from_points(pts))`` gives back ``pts``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from brepgen.errors import DegeneratePolygon, InvalidPolygon
from brepgen.geom import Vec3, cross, dist, dot, epsilon, isvect, mag, scale3, sub, vect


@dataclass(frozen=True)
class Plane:
    """Hessian normal form of a plane: unit ``normal`` and offset ``w``."""

    normal: Vec3
    w: float

    def flipped(self) -> "Plane":
        return Plane(scale3(self.normal, -1.0), -self.w)


@dataclass(frozen=True)
class Polygon:
    """Immutable planar polygon with its supporting plane.  Fewer than
    three distinct vertices raise ``InvalidPolygon``."""

    vertices: Tuple[Vec3, ...]
    plane: Plane

    def __post_init__(self):
        if len(self.vertices) < 3:
            raise InvalidPolygon(len(self.vertices))
        if len({tuple(v) for v in self.vertices}) < 3:
            raise InvalidPolygon(len(self.vertices), 'a polygon needs at least three distinct points')

    def __len__(self) -> int:
        return len(self.vertices)


def corner_normal(p0: Sequence[float], a: Sequence[float], b: Sequence[float],
                  eps: float = epsilon) -> Vec3 | None:
    """Unit normal of the corner ``a - p0 - b`` by the right-hand rule, or
    ``None`` if the corner is flat within ``eps``.

    The three points must be more than ``eps`` apart.  The corner is flat
    when ``b`` lies within ``eps`` of the line through ``p0`` and ``a``
    and the sine of the angle at ``p0`` is also below ``eps``.
    """

    e1 = sub(a, p0)
    e2 = sub(b, p0)
    l1 = mag(e1)
    l2 = mag(e2)
    if l1 <= eps or l2 <= eps or dist(a, b) <= eps:
        return None
    n = cross(e1, e2)
    m = mag(n)
    if m <= eps * l1 and m <= eps * l1 * l2:
        return None
    return scale3(n, 1.0 / m)


def plane_from_points(a: Sequence[float], b: Sequence[float], c: Sequence[float],
                      eps: float = epsilon) -> Plane:
    """Return the plane through ``a``, ``b`` and ``c``, with the normal
    oriented by the right-hand rule.  Raises ``DegeneratePolygon`` if the
    points are coincident or collinear within ``eps``.
    """

    normal = corner_normal(a, b, c, eps)
    if normal is None:
        raise DegeneratePolygon('points are collinear, no plane is defined')
    return Plane(normal, dot(normal, a))


def _plane_or_none(points: Sequence[Vec3], eps: float) -> Plane | None:
    p0 = points[0]
    count = len(points)
    j = 1
    while j < count and dist(points[j], p0) <= eps:
        j += 1
    for k in range(j + 1, count):
        normal = corner_normal(p0, points[j], points[k], eps)
        if normal is not None:
            return Plane(normal, dot(normal, p0))
    return None


def isflat(points: Sequence[Sequence[float]], eps: float = epsilon) -> bool:
    """Do ``points`` fail to span a plane within ``eps``, as a sliver or a
    run of coincident or collinear vertices does."""
    return _plane_or_none([vect(p) for p in points], eps) is None


def poly_from_points(points: Sequence[Sequence[float]], eps: float = epsilon) -> Polygon:
    """Build a ``Polygon`` from an ordered sequence of three or more points.

    Raises ``InvalidPolygon`` if fewer than three points (or a point with
    fewer than three numeric components) are given, and
    ``DegeneratePolygon`` if no plane can be derived from them.
    """

    if len(points) < 3:
        raise InvalidPolygon(len(points))
    for p in points:
        if not isvect(p):
            raise InvalidPolygon(len(points), f'bad point {p!r} passed to poly_from_points')
    verts = tuple(vect(p) for p in points)
    plane = _plane_or_none(verts, eps)
    if plane is None:
        raise DegeneratePolygon('polygon vertices are coincident or collinear')
    return Polygon(verts, plane)


def ispolygon(x) -> bool:
    """Structural check: is ``x`` a ``Polygon`` with three or more vertices."""
    return isinstance(x, Polygon) and len(x.vertices) >= 3


def topoints(poly: Polygon) -> Tuple[Vec3, ...]:
    """Return the vertices of ``poly`` in their stored order."""
    if not isinstance(poly, Polygon):
        raise ValueError('bad polygon passed to topoints')
    return poly.vertices


def invert(poly: Polygon) -> Polygon:
    """Return ``poly`` with reversed winding and a flipped plane."""
    if not isinstance(poly, Polygon):
        raise ValueError('bad polygon passed to invert')
    return Polygon(tuple(reversed(poly.vertices)), poly.plane.flipped())


def signed_distance(poly: Polygon, p: Sequence[float]) -> float:
    """Signed distance of point ``p`` from the plane of ``poly``; positive
    on the side the normal points to.
    """
    return dot(poly.plane.normal, p) - poly.plane.w


def is_coplanar(poly: Polygon, eps: float = epsilon) -> bool:
    """Do all vertices of ``poly`` lie within ``eps`` of its plane."""
    return all(abs(signed_distance(poly, v)) <= eps for v in poly.vertices)


__all__ = [
    'Plane',
    'Polygon',
    'corner_normal',
    'plane_from_points',
    'isflat',
    'poly_from_points',
    'ispolygon',
    'topoints',
    'invert',
    'signed_distance',
    'is_coplanar',
]
