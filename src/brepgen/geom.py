## foundational vector algebra for brepgen

"""foundational vector algebra for **brepgen**

====================
OVERVIEW
====================

The brepgen.geom module provides the constants, scalar helpers and
three-vector operations that the polygon, solid and primitive modules
are built on.

constants
=========

brepgen.geom provides the "constants" ``epsilon`` and ``pi2`` (2*pi).
``epsilon`` is the default tolerance for every degeneracy check in the
package.  Functions that test for degeneracy also accept an ``eps``
keyword, so callers working at an unusual unit scale can tune precision
per call instead of redefining the module constant.

vectors
=======

Vectors are Python tuples of three floats, ``(x, y, z)``.  They are
value types: no function in this module mutates its arguments, and
every operation returns a new tuple.

Operations accept any sequence with at least three numeric components
and ignore anything past the third, so lists such as ``[1, 2, 3]`` or
homogeneous ``[x, y, z, 1]`` coordinates are fine as inputs: ::

   a = vect(1, 0, 0)
   b = vect([0, 1, 0])
   c = cross(a, b)      # (0.0, 0.0, 1.0)

frames
======

``orthogonal_seed(v)`` picks a deterministic unit vector that is not
parallel to ``v`` (the global X axis, or the global Y axis when ``v``
is nearly parallel to X).  ``orthonormal_frame(axis)`` uses the seed to
build the triple ``(axisX, axisY, axisZ)`` in which
``axisZ`` follows ``axis`` and ``axisY = axisX x axisZ``.  Note that
this makes the frame left-handed: increasing angles in the
``axisX``/``axisY`` plane sweep clockwise when viewed down ``axisZ``.

"""

from math import *
from typing import Tuple

## constants
epsilon = 0.000005
pi2 = 2.0*pi

Vec3 = Tuple[float, float, float]

## operations on scalars
## -----------------------

## utility function to determine if argument is a "real" python
## number, since booleans are considered ints (True=1 and False=0 for
## integer arithmetic) but 1 and 0 are not considered boolean

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))


def close(a,b,eps=epsilon):
    """ are two scalars the same within ``eps``
    """
    return abs(a-b) < eps


## operations on vectors
## ---------------------

def vect(a=0.0,b=0.0,c=0.0):
    """Convenience function for making a three vector.  Either takes
    up to three scalars, or a single sequence of at least three numbers.
    """
    if isinstance(a,(list,tuple)):
        if len(a) < 3:
            raise ValueError('vect needs at least three components')
        return (float(a[0]),float(a[1]),float(a[2]))
    return (float(a),float(b),float(c))


def isvect(x):
    """
    is ``x`` a sequence of three (or more) real numbers
    """
    return (isinstance(x,(list,tuple)) and len(x) >= 3
            and isgoodnum(x[0]) and isgoodnum(x[1]) and isgoodnum(x[2]))


def add(a,b):
    """ 3 vector, `a + b`"""
    return (a[0]+b[0],a[1]+b[1],a[2]+b[2])

def sub(a,b):
    """ 3 vector, `a - b`"""
    return (a[0]-b[0],a[1]-b[1],a[2]-b[2])

def scale3(a,c):
    """ 3 vector, vector ``a`` times scalar ``c``, `a * c`"""
    return (a[0]*c,a[1]*c,a[2]*c)

def dot(a,b):
    """ 3 vector ``a`` dot ``b`` """
    return a[0]*b[0]+a[1]*b[1]+a[2]*b[2]

def cross(a,b):
    """ 3 vector cross product, `a x b`"""
    return (a[1]*b[2] - a[2]*b[1],
            a[2]*b[0] - a[0]*b[2],
            a[0]*b[1] - a[1]*b[0])

def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0]*a[0]+a[1]*a[1]+a[2]*a[2])

def dist(a,b):
    """ compute the euclidean distance between two points ``a`` and ``b``"""
    return mag(sub(a,b))

def vclose(a,b,eps=epsilon):
    """ are two points the same within ``eps``"""
    return dist(a,b) < eps


def unit(a):
    """Return ``a`` scaled to unit length.  A zero-length vector has no
    direction, so it raises ``ValueError``; callers are expected to
    guarantee non-zero input.
    """
    m = mag(a)
    if m == 0.0:
        raise ValueError('cannot normalize a zero-length vector')
    return scale3(a,1.0/m)


def orthogonal_seed(v):
    """Return a deterministic unit vector that is not parallel to ``v``.

    The global X axis is used unless ``v`` is nearly parallel to it, in
    which case the global Y axis is used.
    """
    u = unit(v)
    if abs(u[0]) > 0.9:
        return (0.0,1.0,0.0)
    return (1.0,0.0,0.0)


def orthonormal_frame(axis):
    """Given a non-zero ``axis`` direction, return the orthonormal frame
    ``(axisX, axisY, axisZ)``.  ``axisZ`` is ``unit(axis)``, ``axisX``
    is the orthogonal seed with its ``axisZ`` component removed, and
    ``axisY = axisX x axisZ``.
    """
    axisZ = unit(axis)
    seed = orthogonal_seed(axisZ)
    axisX = unit(sub(seed,scale3(axisZ,dot(seed,axisZ))))
    axisY = unit(cross(axisX,axisZ))
    return axisX,axisY,axisZ


def vstr(a):
    """ compact string for a vector, trailing zeros trimmed """
    return '[' + ', '.join(f'{c:g}' for c in a[:3]) + ']'
