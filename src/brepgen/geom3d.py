## geom3d, solid boundary representation for brepgen

"""
==========================================================
geom3d -- polygonal boundary representation of solids
==========================================================

Solids
------

A ``Solid`` is an ordered collection of planar ``Polygon`` records
(see ``brepgen.poly3``) that together bound a volume of space.  The
polygons are expected to form a closed, outward-oriented 2-manifold:
every edge is shared by exactly two polygons that traverse it in
opposite directions.  That guarantee is made by whoever builds the
solid (the primitive generators in ``brepgen.geom3d_util`` make it for
every geometry they accept); it is not checked here.

A solid may be completely empty, as empty solids are legal products
of constructive solid geometry operations like intersection and
difference.  Consumers performing boolean operations are expected to
handle the empty case explicitly.

``Solid = (polygons, construction)``, where:

           ``polygons`` is a tuple of ``Polygon`` records,

           ``construction`` is a tuple that records how the solid was
           made, *e.g.* ``('procedure', 'brepgen.geom3d_util.sphere(...)')``
           for algorithmically-generated geometry, and may be empty.

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from brepgen.geom import Vec3, add, dot, epsilon, isvect
from brepgen.poly3 import Plane, Polygon, ispolygon, poly_from_points


@dataclass(frozen=True)
class Solid:
    """Immutable polygonal boundary representation of a solid."""

    polygons: Tuple[Polygon, ...] = ()
    construction: Tuple = ()

    def __len__(self) -> int:
        return len(self.polygons)

    def __iter__(self):
        return iter(self.polygons)


def solid(polygons: Iterable[Polygon] = (), construction: Sequence = ()) -> Solid:
    """Wrap ``polygons`` into a ``Solid``.  No geometric validation is
    performed; an empty sequence produces an empty solid.
    """

    polys = tuple(polygons)
    for p in polys:
        if not ispolygon(p):
            raise ValueError(f'bad polygon {p!r} passed to solid')
    return Solid(polys, tuple(construction))


def solid_from_points(listofpoints: Iterable[Sequence[Sequence[float]]],
                      eps: float = epsilon) -> Solid:
    """Build a solid from a list of point loops, one per polygon."""
    return solid(poly_from_points(points, eps=eps) for points in listofpoints)


def issolid(x) -> bool:
    """
    Check to see if ``x`` is a solid.  NOTE: this function only determines
    if the data structure is correct, it does not verify that the collection
    of polygons completely bounds a volume of space without holes
    """
    return (isinstance(x, Solid)
            and isinstance(x.polygons, tuple)
            and all(ispolygon(p) for p in x.polygons))


def isemptysolid(x) -> bool:
    return issolid(x) and len(x.polygons) == 0


def solid_polygons(x: Solid) -> Tuple[Polygon, ...]:
    if not issolid(x):
        raise ValueError('bad argument to solid_polygons')
    return x.polygons


def solid_vertices(x: Solid) -> List[Vec3]:
    """Every polygon vertex of ``x`` in polygon order; shared vertices
    appear once per polygon that uses them.
    """
    if not issolid(x):
        raise ValueError('bad argument to solid_vertices')
    return [v for p in x.polygons for v in p.vertices]


def solidbbox(x: Solid) -> List[Vec3]:
    """return the axis-aligned bounding box ``[min, max]`` of a non-empty solid"""
    verts = solid_vertices(x)
    if not verts:
        raise ValueError('empty solid has no bounding box')
    lo = tuple(min(v[i] for v in verts) for i in range(3))
    hi = tuple(max(v[i] for v in verts) for i in range(3))
    return [lo, hi]


def translatesolid(x: Solid, delta: Sequence[float]) -> Solid:
    """Return a copy of ``x`` moved by ``delta``."""
    if not issolid(x):
        raise ValueError('bad solid passed to translatesolid')
    if not isvect(delta):
        raise ValueError('bad delta passed to translatesolid')
    polys = []
    for p in x.polygons:
        # translation keeps the normal, only the offset moves
        plane = Plane(p.plane.normal, p.plane.w + dot(p.plane.normal, delta))
        polys.append(Polygon(tuple(add(v, delta) for v in p.vertices), plane))
    return Solid(tuple(polys), x.construction)


__all__ = [
    'Solid',
    'solid',
    'solid_from_points',
    'issolid',
    'isemptysolid',
    'solid_polygons',
    'solid_vertices',
    'solidbbox',
    'translatesolid',
]
