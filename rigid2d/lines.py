"""Integer line drawing with viewport clipping."""

from __future__ import annotations


def _tdiv(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _cut(p, q, axis, bound, below):
    other = 1 - axis
    if (p[axis] < bound) if below else (p[axis] > bound):
        p[other] += _tdiv((q[other] - p[other]) * (bound - p[axis]), q[axis] - p[axis])
        p[axis] = bound


def clip_segment(pa, pb, viewport):
    """Clip the integer segment to the viewport; None when it lies outside."""
    a = [int(pa[0]), int(pa[1])]
    b = [int(pb[0]), int(pb[1])]
    lows = (int(viewport.left), int(viewport.top))
    highs = (int(viewport.right) - 1, int(viewport.bottom) - 1)
    for axis in (0, 1):
        lo, hi = lows[axis], highs[axis]
        if (a[axis] < lo and b[axis] < lo) or (a[axis] > hi and b[axis] > hi):
            return None
        _cut(a, b, axis, lo, True)
        _cut(a, b, axis, hi, False)
        _cut(b, a, axis, lo, True)
        _cut(b, a, axis, hi, False)
    return (a[0], a[1]), (b[0], b[1])


def draw_line(canvas, pa, pb, depth, viewport, color):
    """Depth-tested Bresenham line from pa to pb."""
    if viewport.w <= 0 or viewport.h <= 0:
        return
    clipped = clip_segment(pa, pb, viewport)
    if clipped is None:
        return
    (x, y), (bx, by) = clipped
    dx, dy = abs(bx - x), abs(by - y)
    sx = 1 if bx > x else -1
    sy = 1 if by > y else -1
    steep = dy > dx
    if steep:
        dx, dy = dy, dx
    e = dx
    canvas.plot(canvas.index(x, y), depth, color)
    for _ in range(dx):
        e -= 2 * dy
        if steep:
            y += sy
        else:
            x += sx
        if e < 0:
            e += 2 * dx
            if steep:
                x += sx
            else:
                y += sy
        canvas.plot(canvas.index(x, y), depth, color)