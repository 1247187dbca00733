## geom3d_util, parametric primitive solids for brepgen

"""
==================================================
Parametric primitive solids for brepgen
==================================================

This module is a collection of parametric solid generators: elliptic
cylinders (which also cover right cylinders, cones, frusta and
partial-rotation wedges) and general ellipsoids (which also cover
spheres).  Each generator returns a closed, outward-oriented
``brepgen.geom3d.Solid`` suitable as an operand for downstream CSG.

Options
=======

Every generator takes an optional options record plus keyword
overrides, *e.g.* ::

    cyl = cylinder_elliptic(height=4, start_radius=[2, 1])
    opts = EllipsoidOptions(radius=(5, 10, 20), segments=24)
    egg = ellipsoid(opts, center=(0, 0, 10))

The options record may also be a plain ``dict``.  Fields that are not
given take the documented defaults, and unknown names are rejected.
All validation happens before any geometry is produced, so a failing
call never returns a partial solid.

Each options record carries an ``eps`` tolerance, defaulting to
``brepgen.geom.epsilon``, that is used for every degeneracy test the
generator makes.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from math import acos, cos, floor, pi, sin
from typing import Any, Mapping, Sequence

from brepgen.errors import InsufficientRotation, InvalidParameter
from brepgen.geom import (add, cross, dot, epsilon, isgoodnum, isvect, mag, orthonormal_frame,
                          pi2, scale3, sub, unit, vstr)
from brepgen.geom3d import Solid, solid
from brepgen.poly3 import isflat, poly_from_points

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EllipticCylinderOptions:
    center: Sequence[float] = (0.0, 0.0, 0.0)
    height: float = 2.0
    start_radius: Sequence[float] = (1.0, 1.0)
    end_radius: Sequence[float] = (1.0, 1.0)
    start_angle: float = 0.0
    end_angle: float = pi2
    segments: int = 12
    eps: float = epsilon


@dataclass(frozen=True)
class CylinderOptions:
    center: Sequence[float] = (0.0, 0.0, 0.0)
    height: float = 2.0
    start_radius: float = 1.0
    end_radius: float = 1.0
    start_angle: float = 0.0
    end_angle: float = pi2
    segments: int = 12
    eps: float = epsilon


@dataclass(frozen=True)
class EllipsoidOptions:
    center: Sequence[float] = (0.0, 0.0, 0.0)
    radius: Sequence[float] = (1.0, 1.0, 1.0)
    segments: int = 12
    axes: Sequence[Sequence[float]] = ((1.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, 1.0))
    eps: float = epsilon


@dataclass(frozen=True)
class SphereOptions:
    center: Sequence[float] = (0.0, 0.0, 0.0)
    radius: float = 1.0
    segments: int = 12
    axes: Sequence[Sequence[float]] = ((1.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 0.0, 1.0))
    eps: float = epsilon


def merge_options(cls, options=None, **overrides):
    """Merge an options record (an instance of ``cls``, a mapping, or
    ``None`` for all defaults) with keyword ``overrides``, field by
    field.  Unknown field names raise ``InvalidParameter``.
    """

    names = {f.name for f in fields(cls)}

    def check(keys):
        for key in keys:
            if key not in names:
                raise InvalidParameter(key, f'not an option of {cls.__name__}')

    if options is None:
        base = cls()
    elif isinstance(options, cls):
        base = options
    elif isinstance(options, Mapping):
        check(options)
        base = cls(**options)
    else:
        raise InvalidParameter('options', f'expected {cls.__name__} or a mapping')
    check(overrides)
    return replace(base, **overrides)


## validation helpers
## ------------------

def _check_eps(eps):
    if not isgoodnum(eps) or eps <= 0:
        raise InvalidParameter('eps', 'must be a positive number')


def _check_center(center):
    if not isinstance(center, (list, tuple)):
        raise InvalidParameter('center', 'must be a sequence')
    if not isvect(center):
        raise InvalidParameter('center', 'must contain X, Y and Z values')


def _check_segments(segments):
    if isinstance(segments, bool) or not isinstance(segments, int):
        raise InvalidParameter('segments', 'must be an integer')
    if segments < 4:
        raise InvalidParameter('segments', 'must be four or more')


def _check_radius_pair(name, radius):
    if (not isinstance(radius, (list, tuple)) or len(radius) < 2
            or not (isgoodnum(radius[0]) and isgoodnum(radius[1]))):
        raise InvalidParameter(name, 'must contain X and Y radius values')
    if radius[0] <= 0 or radius[1] <= 0:
        raise InvalidParameter(name, 'radius components must be positive')


def _is_apex(radius, eps):
    """does an end of a cylinder collapse to a point on its axis"""
    return radius[0] <= eps and radius[1] <= eps


def _polygons(faces, eps):
    """Polygons for the point loops in ``faces``.  A face that spans no
    plane within ``eps`` is a sliver of zero area, such as a cap of an
    ellipse flattened below ``eps``, and is left out."""
    return [poly_from_points(face, eps=eps) for face in faces if not isflat(face, eps)]


## elliptic cylinders
## ------------------

def minimum_rotation(radius, eps=epsilon):
    """Smallest sweep angle, in radians, for which the arc of a circle of
    ``radius`` spans a chord longer than ``eps``.  Any sweep below this
    would collapse the wedge walls of a partial cylinder onto each
    other.
    """
    c = ((radius * radius) + (radius * radius) - (eps * eps)) / (2 * radius * radius)
    return acos(max(-1.0, min(1.0, c)))


def _sweep(start_angle, end_angle):
    """normalize angles into ``[0, 2pi)`` and return them with the
    rotation they span; equal angles mean a full turn"""
    start_angle = start_angle % pi2
    end_angle = end_angle % pi2
    rotation = pi2
    if start_angle < end_angle:
        rotation = end_angle - start_angle
    if start_angle > end_angle:
        rotation = end_angle + (pi2 - start_angle)
    return start_angle, end_angle, rotation


def _validate_cylinder(opts):
    _check_eps(opts.eps)
    _check_center(opts.center)
    if not isgoodnum(opts.height):
        raise InvalidParameter('height', 'must be a number')
    if opts.height < opts.eps * 2:
        raise InvalidParameter('height', f'must be at least twice eps ({opts.eps * 2:g})')
    _check_radius_pair('start_radius', opts.start_radius)
    _check_radius_pair('end_radius', opts.end_radius)
    if _is_apex(opts.start_radius, opts.eps) and _is_apex(opts.end_radius, opts.eps):
        raise InvalidParameter('end_radius', 'start_radius and end_radius cannot both collapse to a point')
    for name in ('start_angle', 'end_angle'):
        value = getattr(opts, name)
        if not isgoodnum(value):
            raise InvalidParameter(name, 'must be a number')
        if value < 0:
            raise InvalidParameter(name, 'must be non-negative')
    _check_segments(opts.segments)


def _make_elliptic_cylinder(opts, call):
    _validate_cylinder(opts)
    eps = opts.eps
    center = opts.center
    start_radius = (opts.start_radius[0], opts.start_radius[1])
    end_radius = (opts.end_radius[0], opts.end_radius[1])

    start_angle, end_angle, rotation = _sweep(opts.start_angle, opts.end_angle)

    # an apex end has no arc to resolve, so only the other end counts
    radii = [r for r in (start_radius, end_radius) if not _is_apex(r, eps)]
    minradius = min(min(r[0], r[1]) for r in radii)
    minangle = minimum_rotation(minradius, eps)
    if rotation < minangle:
        raise InsufficientRotation(rotation, minangle)

    slices = max(1, int(floor(opts.segments * (rotation / pi2))))

    start = (0.0, 0.0, -(opts.height / 2))
    end = (0.0, 0.0, opts.height / 2)
    ray = sub(end, start)
    axisX, axisY, axisZ = orthonormal_frame(ray)

    start_apex = _is_apex(start_radius, eps)
    end_apex = _is_apex(end_radius, eps)
    # an apex end samples exactly the axis point so the fan closes on it
    if start_apex:
        start_radius = (0.0, 0.0)
    if end_apex:
        end_radius = (0.0, 0.0)

    def point(stack, t, radius):
        angle = t * rotation + start_angle
        out = add(scale3(axisX, radius[0] * cos(angle)), scale3(axisY, radius[1] * sin(angle)))
        return add(add(scale3(ray, stack), start), out)

    # adjust the points to center
    def centered(*points):
        return [add(p, center) for p in points]

    faces = []
    straight = start_radius == end_radius
    for i in range(slices):
        t0 = i / slices
        t1 = (i + 1) / slices

        if straight:
            faces.append(centered(start, point(0, t0, end_radius), point(0, t1, end_radius)))
            faces.append(centered(point(0, t1, end_radius), point(0, t0, end_radius),
                                  point(1, t0, end_radius), point(1, t1, end_radius)))
            faces.append(centered(end, point(1, t1, end_radius), point(1, t0, end_radius)))
        else:
            if not start_apex:
                faces.append(centered(start, point(0, t0, start_radius), point(0, t1, start_radius)))
                faces.append(centered(point(0, t0, start_radius), point(1, t0, end_radius),
                                      point(0, t1, start_radius)))
            if not end_apex:
                faces.append(centered(end, point(1, t1, end_radius), point(1, t0, end_radius)))
                faces.append(centered(point(1, t0, end_radius), point(1, t1, end_radius),
                                      point(0, t1, start_radius)))

    if rotation < pi2:
        # wedge walls at start_angle and end_angle; a wall triangle that
        # would run along an apex collapses and is left out
        if not start_apex:
            faces.append(centered(start, end, point(0, 0, start_radius)))
        if not end_apex:
            faces.append(centered(point(0, 0, start_radius), end, point(1, 0, end_radius)))
        if not start_apex:
            faces.append(centered(start, point(0, 1, start_radius), end))
        if not end_apex:
            faces.append(centered(point(0, 1, start_radius), point(1, 1, end_radius), end))

    polygons = _polygons(faces, eps)
    logger.debug("%s: rotation=%.6f slices=%d polygons=%d dropped=%d",
                 call, rotation, slices, len(polygons), len(faces) - len(polygons))
    return solid(polygons, ['procedure', call])


def cylinder_elliptic(options=None, **overrides) -> Solid:
    """Make an elliptic cylinder solid.  The main axis runs along Z,
    from ``center - height/2`` to ``center + height/2``.  This function
    can be used to make a cylinder, a cone, a conic frustum or a
    partial wedge of any of these, each with an elliptical
    cross-section.

         ``center`` is the center of the solid, default ``(0,0,0)``.

         ``height`` is the length along the main axis, must be at
         least ``2*eps``.  Default 2.

         ``start_radius`` and ``end_radius`` are ``[x, y]`` radius
         pairs at the bottom and top of the solid.  All components
         must be positive.  Default ``[1, 1]``.

         ``start_angle`` and ``end_angle`` bound the angular sweep, in
         radians, and must be non-negative.  Equal angles (after
         reduction modulo 2pi) make a full turn.  Defaults 0 and 2pi.

         ``segments`` is the number of segments for a full turn, at
         least 4.  A partial sweep uses a proportional share of them.
         Default 12.

    Raises ``InvalidParameter`` for malformed options and
    ``InsufficientRotation`` when the sweep is too thin to form a
    solid.
    """
    opts = merge_options(EllipticCylinderOptions, options, **overrides)
    call = (f"brepgen.geom3d_util.cylinder_elliptic(center={_fmt(opts.center)},"
            f"height={opts.height},start_radius={_fmt(opts.start_radius)},"
            f"end_radius={_fmt(opts.end_radius)},start_angle={opts.start_angle},"
            f"end_angle={opts.end_angle},segments={opts.segments})")
    return _make_elliptic_cylinder(opts, call)


def cylinder(options=None, **overrides) -> Solid:
    """Make a circular cylinder, cone or frustum solid.  Takes the same
    options as ``cylinder_elliptic`` except that ``start_radius`` and
    ``end_radius`` are scalars (default 1), each expanded to an
    ``[r, r]`` pair.
    """
    opts = merge_options(CylinderOptions, options, **overrides)
    for name in ('start_radius', 'end_radius'):
        if not isgoodnum(getattr(opts, name)):
            raise InvalidParameter(name, 'must be a number')
    eopts = EllipticCylinderOptions(center=opts.center,
                                    height=opts.height,
                                    start_radius=(opts.start_radius, opts.start_radius),
                                    end_radius=(opts.end_radius, opts.end_radius),
                                    start_angle=opts.start_angle,
                                    end_angle=opts.end_angle,
                                    segments=opts.segments,
                                    eps=opts.eps)
    call = (f"brepgen.geom3d_util.cylinder(center={_fmt(opts.center)},"
            f"height={opts.height},start_radius={opts.start_radius},"
            f"end_radius={opts.end_radius},start_angle={opts.start_angle},"
            f"end_angle={opts.end_angle},segments={opts.segments})")
    return _make_elliptic_cylinder(eopts, call)


## ellipsoids
## ----------

def _validate_ellipsoid(opts):
    _check_eps(opts.eps)
    _check_center(opts.center)
    if not isinstance(opts.radius, (list, tuple)):
        raise InvalidParameter('radius', 'must be a sequence')
    if not isvect(opts.radius):
        raise InvalidParameter('radius', 'must contain X, Y and Z values')
    if opts.radius[0] <= 0 or opts.radius[1] <= 0 or opts.radius[2] <= 0:
        raise InvalidParameter('radius', 'radius components must be positive')
    _check_segments(opts.segments)
    axes = opts.axes
    if not isinstance(axes, (list, tuple)) or len(axes) != 3:
        raise InvalidParameter('axes', 'must contain three base vectors')
    for axis in axes:
        if not isvect(axis):
            raise InvalidParameter('axes', 'base vectors must contain X, Y and Z values')
        if mag(axis) <= opts.eps:
            raise InvalidParameter('axes', 'base vectors must be non-zero')
    handedness = dot(cross(unit(axes[0]), unit(axes[1])), unit(axes[2]))
    if abs(handedness) <= opts.eps:
        raise InvalidParameter('axes', 'base vectors must not be coplanar')


def _patch(center, prevpoint, point, prevpitch, pitch, zvector, sign, pole):
    """Corners of one latitude/longitude cell of an ellipsoid, for the
    hemisphere on the ``sign`` side of the equator.  A cell that
    touches the pole is a triangle closing on the pole itself."""

    def corner(cylpoint, angle):
        return add(center, add(scale3(cylpoint, cos(angle)), scale3(zvector, sign * sin(angle))))

    corners = [corner(prevpoint, prevpitch), corner(point, prevpitch)]
    if pole:
        corners.append(add(center, scale3(zvector, sign)))
    else:
        corners.append(corner(point, pitch))
        corners.append(corner(prevpoint, pitch))
    return corners


def _make_ellipsoid(opts, call):
    _validate_ellipsoid(opts)
    eps = opts.eps
    center = (opts.center[0], opts.center[1], opts.center[2])
    radius = opts.radius
    segments = opts.segments

    xvector = scale3(unit(opts.axes[0]), radius[0])
    yvector = scale3(unit(opts.axes[1]), radius[1])
    zvector = scale3(unit(opts.axes[2]), radius[2])

    # longitude runs from xvector towards yvector; whether that is
    # clockwise about zvector decides which hemisphere must be reversed
    # to face outwards
    reverse_upper = dot(cross(xvector, yvector), zvector) < 0

    # quarter turn from equator to pole, rounding halves up
    qsegments = max(1, int(floor(segments / 4 + 0.5)))

    faces = []
    prevpoint = None
    for slice1 in range(segments + 1):
        angle = pi2 * slice1 / segments
        point = add(scale3(xvector, cos(angle)), scale3(yvector, sin(angle)))
        if slice1 > 0:
            for slice2 in range(1, qsegments + 1):
                prevpitch = 0.5 * pi * (slice2 - 1) / qsegments
                pitch = 0.5 * pi * slice2 / qsegments
                pole = slice2 == qsegments
                lower = _patch(center, prevpoint, point, prevpitch, pitch, zvector, -1, pole)
                upper = _patch(center, prevpoint, point, prevpitch, pitch, zvector, 1, pole)
                if reverse_upper:
                    upper.reverse()
                else:
                    lower.reverse()
                faces.append(lower)
                faces.append(upper)
        prevpoint = point

    polygons = _polygons(faces, eps)
    if not polygons:
        raise InvalidParameter('radius', f'collapses below the eps tolerance ({eps:g})')
    logger.debug("%s: qsegments=%d polygons=%d dropped=%d",
                 call, qsegments, len(polygons), len(faces) - len(polygons))
    return solid(polygons, ['procedure', call])


def ellipsoid(options=None, **overrides) -> Solid:
    """Make an ellipsoid solid.

         ``center`` is the center of the ellipsoid, default ``(0,0,0)``.

         ``radius`` is the ``[x, y, z]`` list of semi-axis lengths along
         the three base vectors, all positive.  Default ``[1, 1, 1]``.

         ``segments`` is the number of segments per full turn of
         longitude, at least 4.  Latitude uses ``round(segments/4)``
         segments from the equator to each pole.  Default 12.

         ``axes`` are the three base vectors for the x, y and z semi
         axes.  They are normalized, but need not be orthogonal, so
         sheared ellipsoids are possible.  Default
         ``[[1,0,0],[0,-1,0],[0,0,1]]``.

    Raises ``InvalidParameter`` for malformed options.
    """
    opts = merge_options(EllipsoidOptions, options, **overrides)
    call = (f"brepgen.geom3d_util.ellipsoid(center={_fmt(opts.center)},"
            f"radius={_fmt(opts.radius)},segments={opts.segments})")
    return _make_ellipsoid(opts, call)


def sphere(options=None, **overrides) -> Solid:
    """Make a sphere solid, where all points are at the same distance
    from the center.  Takes the same options as ``ellipsoid`` except
    that ``radius`` is a scalar (default 1).
    """
    opts = merge_options(SphereOptions, options, **overrides)
    if not isgoodnum(opts.radius):
        raise InvalidParameter('radius', 'must be a number')
    r = opts.radius
    eopts = EllipsoidOptions(center=opts.center,
                             radius=(r, r, r),
                             segments=opts.segments,
                             axes=opts.axes,
                             eps=opts.eps)
    call = (f"brepgen.geom3d_util.sphere(center={_fmt(opts.center)},"
            f"radius={r},segments={opts.segments})")
    return _make_ellipsoid(eopts, call)


def _fmt(value: Any) -> str:
    if isvect(value):
        return vstr(value)
    return repr(value)


__all__ = [
    'EllipticCylinderOptions',
    'CylinderOptions',
    'EllipsoidOptions',
    'SphereOptions',
    'merge_options',
    'minimum_rotation',
    'cylinder_elliptic',
    'cylinder',
    'ellipsoid',
    'sphere',
]
