from rigid2d.geometry import Rect
from rigid2d.lines import clip_segment, draw_line
from rigid2d.raster import Canvas, Color


def test_clip_inside_unchanged():
    vp = Rect(0, 0, 10, 10)
    assert clip_segment((1, 2), (5, 7), vp) == ((1, 2), (5, 7))


def test_clip_outside_is_none():
    assert clip_segment((-5, 0), (-1, 9), Rect(0, 0, 10, 10)) is None


def test_clip_result_within_viewport():
    vp = Rect(0, 0, 10, 10)
    (ax, ay), (bx, by) = clip_segment((-20, 5), (30, 5), vp)
    for x, y in ((ax, ay), (bx, by)):
        assert vp.contains((x, y))
    assert ay == by == 5


def test_horizontal_line_pixels():
    cv = Canvas(10, 10)
    draw_line(cv, (2, 3), (6, 3), 0, cv.rect(), Color.RED)
    reds = [i for i, c in enumerate(cv.colors) if c == Color.RED]
    assert reds == [cv.index(x, 3) for x in range(2, 7)]


def test_diagonal_and_empty_viewport():
    cv = Canvas(8, 8)
    draw_line(cv, (0, 0), (7, 7), 0, cv.rect(), Color.RED)
    assert all(cv.colors[cv.index(i, i)] == Color.RED for i in range(8))
    cv2 = Canvas(8, 8)
    draw_line(cv2, (0, 0), (7, 7), 0, Rect(0, 0, 0, 8), Color.RED)
    assert Color.RED not in cv2.colors