"""Utilities for working with triangulated views of brepgen solids."""

from __future__ import annotations

from typing import Iterator, Tuple

import numpy as np

from brepgen.geom import Vec3, epsilon
from brepgen.geom3d import issolid
from brepgen.poly3 import Polygon, corner_normal

TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


def mesh_view(obj, eps: float = epsilon) -> Iterator[TriTuple]:
    """Yield triangles for a solid or polygon as ``(normal, v0, v1, v2)``.

    Polygons are fan-triangulated from their first vertex, which is
    exact for the convex polygons the primitive generators produce.
    Normals are unit vectors.  Fan triangles that are flat within
    ``eps`` (see ``brepgen.poly3.corner_normal``) are skipped.
    """

    if isinstance(obj, Polygon):
        polygons = (obj,)
    elif issolid(obj):
        polygons = obj.polygons
    else:
        raise ValueError("mesh_view expects a solid or polygon")

    for poly in polygons:
        verts = poly.vertices
        v0 = verts[0]
        for i in range(1, len(verts) - 1):
            v1 = verts[i]
            v2 = verts[i + 1]
            calc_normal = corner_normal(v0, v1, v2, eps)
            if calc_normal is None:
                continue
            yield calc_normal, v0, v1, v2


def triangle_array(obj, eps: float = epsilon) -> np.ndarray:
    """Return the triangles of ``mesh_view(obj)`` as a ``(n, 3, 3)``
    float array of vertex coordinates, ready for array-based mesh
    libraries.  An empty solid gives a ``(0, 3, 3)`` array.
    """

    tris = [(v0, v1, v2) for _, v0, v1, v2 in mesh_view(obj, eps)]
    if not tris:
        return np.zeros((0, 3, 3), dtype=float)
    return np.asarray(tris, dtype=float)


__all__ = [
    'mesh_view',
    'triangle_array',
]
