from rigid2d.geometry import Rect
from rigid2d.raster import Canvas, Color
from rigid2d.triangles import fill_triangle


def painted(cv):
    return {(i % cv.width, i // cv.width) for i, c in enumerate(cv.colors) if c == Color.RED}


def test_vertex_order_does_not_matter():
    pts = [(2, 2), (15, 4), (6, 14)]
    a = Canvas(20, 20)
    fill_triangle(a, a.rect(), *pts, 0, Color.RED)
    b = Canvas(20, 20)
    fill_triangle(b, b.rect(), pts[2], pts[0], pts[1], 0, Color.RED)
    assert painted(a) == painted(b)
    assert (7, 7) in painted(a)
    assert (0, 19) not in painted(a)


def test_degenerate_draws_nothing():
    cv = Canvas(10, 10)
    fill_triangle(cv, cv.rect(), (1, 1), (1, 5), (1, 8), 0, Color.RED)
    assert painted(cv) == set()


def test_clipped_triangle_stays_in_viewport():
    cv = Canvas(20, 20)
    vp = Rect(5, 5, 10, 10)
    fill_triangle(cv, vp, (-10, -10), (30, 0), (0, 30), 0, Color.RED)
    pts = painted(cv)
    assert pts
    assert all(vp.contains(p) for p in pts)


def test_depth_blocks_drawing():
    cv = Canvas(10, 10)
    cv.depth = [100.0] * 100
    fill_triangle(cv, cv.rect(), (0, 0), (9, 0), (0, 9), 0, Color.RED)
    assert painted(cv) == set()