"""
Exceptions raised by brepgen constructors.

Every exception derives from ``GeometryError``, which is itself a
``ValueError``: bad arguments to a geometry constructor have always been
reported as ``ValueError``, and code that catches that keeps working.

- ``InvalidParameter``: a generator option is malformed or out of range
- ``InsufficientRotation``: the angular sweep is too thin to bound a solid
- ``InvalidPolygon``: fewer than three usable vertices
- ``DegeneratePolygon``: the vertices are collinear or coincident
"""


class GeometryError(ValueError):
    """Base exception for brepgen construction errors."""
    pass


class InvalidParameter(GeometryError):
    """A configuration field is malformed or violates a constraint."""

    def __init__(self, field: str, constraint: str):
        self.field = field
        self.constraint = constraint
        super().__init__(f"{field}: {constraint}")


class InsufficientRotation(GeometryError):
    """The requested sweep is below the smallest resolvable angle."""

    def __init__(self, rotation: float, minimum: float):
        self.rotation = rotation
        self.minimum = minimum
        super().__init__(
            f"start_angle and end_angle do not define a significant rotation "
            f"({rotation:g} rad < {minimum:g} rad)"
        )


class InvalidPolygon(GeometryError):
    """Too few (or malformed) vertices to form a polygon."""

    def __init__(self, count: int, reason: str = "a polygon needs at least three points"):
        self.count = count
        super().__init__(f"{reason} (got {count})")


class DegeneratePolygon(GeometryError):
    """No supporting plane can be derived from the vertices."""
    pass
