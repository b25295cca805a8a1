"""Scan-line triangle filling with viewport clipping."""

from __future__ import annotations

import operator

from .lines import _tdiv


def _fill_half(canvas, pa, pb, pc, depth, color, same_y):
    if pa[1] == pb[1]:
        return
    dy = 1 if pb[1] > pa[1] else -1
    dx = 1 if pc[0] > pb[0] else -1
    span = pb[1] - pa[1]
    for y in range(pa[1], pb[1] + dy, dy):
        xb = _tdiv(pa[0] * (pb[1] - y) + pb[0] * (y - pa[1]), span)
        xc = _tdiv(pa[0] * (pb[1] - y) + pc[0] * (y - pa[1]), span)
        for x in range(xb, xc + dx, dx):
            i = y * canvas.width + x if same_y else x * canvas.width + y
            canvas.plot(i, depth, color)


def _edge_cut(canvas, viewport, pa, pb, pc, axis, over, border, depth, color):
    """Clip against one border; True when drawing was handled here."""
    other = 1 - axis
    if over(pc[axis], border):
        return True
    if not over(pa[axis], border):
        return False
    pac = list(pc)
    pac[axis] = border
    pac[other] += _tdiv((pa[other] - pc[other]) * (border - pc[axis]), pa[axis] - pc[axis])
    if over(pb[axis], border):
        p1 = list(pc)
        p1[axis] = border
        p1[other] += _tdiv((pb[other] - pc[other]) * (border - pc[axis]), pb[axis] - pc[axis])
        fill_triangle(canvas, viewport, pac, p1, pc, depth, color)
        return True
    p1 = list(pb)
    p1[axis] = border
    p1[other] += _tdiv((pa[other] - pb[other]) * (border - pb[axis]), pa[axis] - pb[axis])
    fill_triangle(canvas, viewport, pac, pb, pc, depth, color)
    fill_triangle(canvas, viewport, pac, pb, p1, depth, color)
    return True


def _sort_desc(points, axis):
    points.sort(key=lambda p: p[axis], reverse=True)
    return points


def fill_triangle(canvas, viewport, pa, pb, pc, depth, color):
    """Fill a depth-tested triangle with integer vertices."""
    pts = [[int(pa[0]), int(pa[1])], [int(pb[0]), int(pb[1])], [int(pc[0]), int(pc[1])]]
    a, b, c = _sort_desc(pts, 0)
    if a[0] == c[0]:
        return
    dx = a[0] - c[0]
    right, left = int(viewport.right) - 1, int(viewport.left)
    if _edge_cut(canvas, viewport, a, b, c, 0, operator.gt, right, depth, color):
        return
    if _edge_cut(canvas, viewport, c, b, a, 0, operator.lt, left, depth, color):
        return

    a, b, c = _sort_desc([a, b, c], 1)
    if a[1] == c[1]:
        return
    dy = a[1] - c[1]
    bottom, top = int(viewport.bottom) - 1, int(viewport.top)
    if _edge_cut(canvas, viewport, a, b, c, 1, operator.gt, bottom, depth, color):
        return
    if _edge_cut(canvas, viewport, c, b, a, 1, operator.lt, top, depth, color):
        return

    y_big = dy > dx
    if not y_big:
        a, b, c = _sort_desc([a, b, c], 0)
        a, b, c = [a[1], a[0]], [b[1], b[0]], [c[1], c[0]]
    d = list(b)
    d[0] = _tdiv(a[0] * (b[1] - c[1]) + c[0] * (a[1] - b[1]), a[1] - c[1])
    _fill_half(canvas, a, b, d, depth, color, y_big)
    _fill_half(canvas, c, b, d, depth, color, y_big)