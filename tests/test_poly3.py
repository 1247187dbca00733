import math

import pytest

from brepgen.errors import DegeneratePolygon, GeometryError, InvalidPolygon
from brepgen.geom import close, mag, vclose
from brepgen.poly3 import (
    Plane,
    Polygon,
    invert,
    is_coplanar,
    ispolygon,
    corner_normal,
    isflat,
    plane_from_points,
    poly_from_points,
    signed_distance,
    topoints,
)


class TestPolyFromPoints:
    """construction of planar polygons"""

    square = [(0, 0, 1), (1, 0, 1), (1, 1, 1), (0, 1, 1)]

    def test_triangle_plane(self):
        p = poly_from_points([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        assert isinstance(p, Polygon)
        assert vclose(p.plane.normal, (0, 0, 1))
        assert close(p.plane.w, 0.0)

    def test_square_offset(self):
        p = poly_from_points(self.square)
        assert vclose(p.plane.normal, (0, 0, 1))
        assert close(p.plane.w, 1.0)
        assert len(p) == 4

    def test_winding_sets_normal(self):
        p = poly_from_points(list(reversed(self.square)))
        assert vclose(p.plane.normal, (0, 0, -1))
        assert close(p.plane.w, -1.0)

    def test_round_trip_preserves_order(self):
        pts = [(0.5, 0.25, 2.0), (3.0, 0.25, 2.0), (3.0, 4.0, 2.0), (0.5, 4.0, 2.0), (0.0, 2.0, 2.0)]
        p = poly_from_points(pts)
        assert topoints(p) == tuple(pts)

    def test_no_dedupe(self):
        pts = [(0, 0, 0), (0, 0, 0), (1, 0, 0), (0, 1, 0)]
        p = poly_from_points(pts)
        assert len(topoints(p)) == 4
        assert vclose(p.plane.normal, (0, 0, 1))

    def test_lists_become_tuples(self):
        p = poly_from_points([[0, 0, 0, 1], [1, 0, 0, 1], [0, 1, 0, 1]])
        assert topoints(p) == ((0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (0.0, 1.0, 0.0))

    def test_skips_leading_collinear_vertices(self):
        # first three points are collinear, the fourth fixes the plane
        pts = [(0, 0, 0), (1, 0, 0), (2, 0, 0), (1, 1, 0)]
        p = poly_from_points(pts)
        assert vclose(p.plane.normal, (0, 0, 1))

    def test_unit_normal(self):
        p = poly_from_points([(0, 0, 0), (3, 1, 2), (-1, 4, 1)])
        assert math.isclose(mag(p.plane.normal), 1.0, abs_tol=1e-12)

    @pytest.mark.parametrize('pts', [[], [(0, 0, 0)], [(0, 0, 0), (1, 0, 0)]])
    def test_too_few_points(self, pts):
        with pytest.raises(InvalidPolygon) as exc:
            poly_from_points(pts)
        assert exc.value.count == len(pts)

    def test_bad_point(self):
        with pytest.raises(InvalidPolygon):
            poly_from_points([(0, 0, 0), (1, 0), (0, 1, 0)])

    def test_collinear(self):
        with pytest.raises(DegeneratePolygon):
            poly_from_points([(0, 0, 0), (1, 1, 1), (2, 2, 2), (3, 3, 3)])

    def test_coincident(self):
        with pytest.raises(DegeneratePolygon):
            poly_from_points([(1, 1, 1), (1, 1, 1), (1, 1, 1)])

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            poly_from_points([(0, 0, 0), (1, 0, 0)])
        assert issubclass(DegeneratePolygon, GeometryError)

    def test_eps_is_injected(self):
        pts = [(0, 0, 0), (1e-2, 0, 0), (0, 1e-2, 0)]
        assert ispolygon(poly_from_points(pts))
        with pytest.raises(DegeneratePolygon):
            poly_from_points(pts, eps=1e-2)

    def test_small_scale(self):
        # edges of 1e-3 give a cross product far below eps, still a plane
        p = poly_from_points([(0, 0, 0), (1e-3, 0, 0), (0, 1e-3, 0)])
        assert vclose(p.plane.normal, (0, 0, 1))

    def test_long_thin_triangle(self):
        # the third vertex is 1e-5 off a 1000 unit base line
        p = poly_from_points([(0, 0, 0), (1000, 0, 0), (500, 1e-5, 0)])
        assert vclose(p.plane.normal, (0, 0, 1))

    def test_sliver(self):
        with pytest.raises(DegeneratePolygon):
            poly_from_points([(0, 0, 0), (1, 0, 0), (0.5, 1e-7, 0)])

    def test_near_coincident_third_vertex(self):
        with pytest.raises(DegeneratePolygon):
            poly_from_points([(0, 0, 0), (0.5, 0, 0), (0.5, 3e-6, 0)])


class TestPlaneAndHelpers:
    def test_plane_from_points(self):
        pl = plane_from_points((0, 0, 2), (1, 0, 2), (0, 1, 2))
        assert isinstance(pl, Plane)
        assert vclose(pl.normal, (0, 0, 1))
        assert close(pl.w, 2.0)

    def test_plane_from_collinear_points(self):
        with pytest.raises(DegeneratePolygon):
            plane_from_points((0, 0, 0), (1, 0, 0), (2, 0, 0))

    def test_invert(self):
        p = poly_from_points([(0, 0, 1), (1, 0, 1), (0, 1, 1)])
        q = invert(p)
        assert topoints(q) == tuple(reversed(topoints(p)))
        assert vclose(q.plane.normal, (0, 0, -1))
        assert close(q.plane.w, -1.0)
        assert topoints(invert(q)) == topoints(p)

    def test_signed_distance(self):
        p = poly_from_points([(0, 0, 1), (1, 0, 1), (0, 1, 1)])
        assert close(signed_distance(p, (5, 5, 3)), 2.0)
        assert close(signed_distance(p, (0, 0, 0)), -1.0)

    def test_is_coplanar(self):
        p = poly_from_points([(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)])
        assert is_coplanar(p)
        bent = poly_from_points([(0, 0, 0), (1, 0, 0), (1, 1, 0.5), (0, 1, 0)])
        assert not is_coplanar(bent)

    def test_ispolygon(self):
        assert ispolygon(poly_from_points([(0, 0, 0), (1, 0, 0), (0, 1, 0)]))
        assert not ispolygon([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        assert not ispolygon(None)

    def test_topoints_rejects_non_polygon(self):
        with pytest.raises(ValueError):
            topoints([(0, 0, 0)])

    def test_polygon_needs_three_vertices(self):
        with pytest.raises(InvalidPolygon) as exc:
            Polygon(((0, 0, 0), (1, 0, 0)), Plane((0, 0, 1), 0))
        assert exc.value.count == 2

    def test_polygon_needs_three_distinct_vertices(self):
        with pytest.raises(InvalidPolygon):
            Polygon(((0, 0, 0), (1, 0, 0), (0, 0, 0)), Plane((0, 0, 1), 0))

    def test_corner_normal(self):
        assert vclose(corner_normal((0, 0, 0), (1, 0, 0), (0, 1, 0)), (0, 0, 1))
        assert vclose(corner_normal((0, 0, 0), (0, 1, 0), (1, 0, 0)), (0, 0, -1))
        assert corner_normal((0, 0, 0), (1, 0, 0), (2, 0, 0)) is None
        assert corner_normal((0, 0, 0), (0, 0, 0), (0, 1, 0)) is None
        assert corner_normal((0, 0, 0), (1e-2, 0, 0), (0, 1e-2, 0), eps=1e-2) is None

    def test_isflat(self):
        assert not isflat([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        assert isflat([(0, 0, 0), (1, 0, 0), (2, 0, 0)])
        assert isflat([(0, 0, 0), (1, 0, 0), (0.5, 1e-7, 0)])
        assert not isflat([(0, 0, 0), (1, 0, 0), (0.5, 1e-7, 0)], eps=1e-9)

    def test_polygon_is_immutable(self):
        p = poly_from_points([(0, 0, 0), (1, 0, 0), (0, 1, 0)])
        with pytest.raises(AttributeError):
            p.vertices = ()
