"""A colour canvas with depth buffer and primitive fill routines."""

from __future__ import annotations

import math
from typing import NamedTuple

from .geometry import Mat2, Rect, Vec2


class Color(NamedTuple):
    r: int = 0
    g: int = 0
    b: int = 0


Color.BLACK = Color(0, 0, 0)
Color.WHITE = Color(255, 255, 255)
Color.RED = Color(255, 0, 0)
Color.GREEN = Color(0, 255, 0)
Color.BLUE = Color(0, 0, 255)
Color.YELLOW = Color(255, 255, 0)
Color.CYAN = Color(0, 255, 255)
Color.MAGENTA = Color(255, 0, 255)


class Canvas:
    """Pixel colours, per-pixel alpha and a depth buffer."""

    def __init__(self, width: int, height: int, color: Color = Color.BLACK, alpha: int = 255):
        self.width = width
        self.height = height
        self.colors = [color] * (width * height)
        self.alpha = [alpha] * (width * height)
        self.depth = [-math.inf] * (width * height)

    def rect(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def reset_depth(self) -> None:
        self.depth = [-math.inf] * (self.width * self.height)

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def plot(self, i: int, depth: float, color: Color) -> None:
        if self.depth[i] <= depth:
            self.depth[i] = depth
            self.colors[i] = color


def _clip(viewport: Rect, top_left, width, height):
    x, y = int(top_left[0]), int(top_left[1])
    a = max(int(viewport.left), x)
    b = min(int(viewport.right), x + int(width))
    c = max(int(viewport.top), y)
    d = min(int(viewport.bottom), y + int(height))
    return a, b, c, d


def fill_rect_raw(canvas, top_left, width, height, viewport, color):
    """Fill a rectangle ignoring depth."""
    a, b, c, d = _clip(viewport, top_left, width, height)
    if a >= b or c >= d:
        return
    row = [color] * (b - a)
    for j in range(c, d):
        start = canvas.index(a, j)
        canvas.colors[start:start + (b - a)] = row


def fill_rect(canvas, depth, top_left, width, height, viewport, color):
    a, b, c, d = _clip(viewport, top_left, width, height)
    if a >= b or c >= d:
        return
    for i in range(a, b):
        for j in range(c, d):
            canvas.plot(canvas.index(i, j), depth, color)


def fill_rotated_rect(canvas, depth, center, width, height, transform: Mat2, viewport, color):
    inv = transform.inverse()
    half = transform.abs().transform(Vec2(width, height)) / 2
    a = max(int(viewport.left), int(center.x - half.x) - 1)
    b = min(int(viewport.right), int(center.x + half.x) + 1)
    c = max(int(viewport.top), int(center.y - half.y) - 1)
    d = min(int(viewport.bottom), int(center.y + half.y) + 1)
    if a >= b or c >= d:
        return
    unit = Rect(0, 0, 1, 1)
    for i in range(a, b):
        for j in range(c, d):
            local = inv.transform(Vec2(i, j) - center)
            u = (0.5 + local.x / width, 0.5 + local.y / height)
            if unit.contains(u):
                canvas.plot(canvas.index(i, j), depth, color)


def fill_ellipse(canvas, depth, center, a, b, viewport, color):
    left = max(int(viewport.left), int(center.x - a) - 1)
    right = min(int(viewport.right), int(center.x + a) + 1)
    top = max(int(viewport.top), int(center.y - b) - 1)
    bottom = min(int(viewport.bottom), int(center.y + b) + 1)
    inv_x = 1 / (a * a)
    inv_y = 1 / (b * b)
    for i in range(left, right):
        for j in range(top, bottom):
            vx, vy = i - center.x, j - center.y
            if vx * vx * inv_x + vy * vy * inv_y < 1:
                canvas.plot(canvas.index(i, j), depth, color)


def _borders(top_left, width, height):
    x, y = top_left
    return [
        ((x, y), width, 1),
        ((x, y + height), width, 1),
        ((x, y), 1, height),
        ((x + width, y), 1, height),
    ]


def outlined_rect_raw(canvas, top_left, width, height, viewport, color, border_color):
    fill_rect_raw(canvas, top_left, width, height, viewport, color)
    for tl, w, h in _borders(top_left, width, height):
        fill_rect_raw(canvas, tl, w, h, viewport, border_color)


def outlined_rect(canvas, depth, top_left, width, height, viewport, color, border_color):
    """Depth-tested rectangle; its border is drawn in the fill colour."""
    fill_rect(canvas, depth, top_left, width, height, viewport, color)
    for tl, w, h in _borders(top_left, width, height):
        fill_rect(canvas, depth, tl, w, h, viewport, color)


def blit_base(dest, top_left, src):
    """Copy src onto dest without depth or alpha tests."""
    vd, vs = dest.rect(), src.rect()
    tx, ty = int(top_left[0]), int(top_left[1])
    l = max(vd.left, tx)
    r = min(vd.right, tx + vs.w)
    t = max(vd.top, ty)
    b = min(vd.bottom, ty + vs.h)
    if l >= r or t >= b:
        return
    for j in range(t, b):
        dp = dest.index(l, j)
        sp = src.index(l - tx + vs.left, j - ty + vs.top)
        dest.colors[dp:dp + (r - l)] = src.colors[sp:sp + (r - l)]


def blit(dest, depth, top_left, viewport, src, src_viewport):
    tx, ty = int(top_left[0]), int(top_left[1])
    l = max(int(viewport.left), tx)
    r = min(int(viewport.right), tx + int(src_viewport.w))
    t = max(int(viewport.top), ty)
    b = min(int(viewport.bottom), ty + int(src_viewport.h))
    if l >= r or t >= b:
        return
    for j in range(t, b):
        dp = dest.index(l, j)
        sp = src.index(l - tx + int(src_viewport.left), j - ty + int(src_viewport.top))
        for _ in range(l, r):
            if dest.depth[dp] <= depth and src.alpha[sp] != 0:
                dest.depth[dp] = depth
                dest.colors[dp] = src.colors[sp]
            dp += 1
            sp += 1


def hit_tile(p, top_left, src, src_viewport) -> bool:
    """True when p lands on an opaque pixel of src placed at top_left."""
    px = int(src_viewport.left) + int(p[0]) - int(top_left[0])
    py = int(src_viewport.top) + int(p[1]) - int(top_left[1])
    if not src_viewport.contains((px, py)):
        return False
    return src.alpha[src.index(px, py)] != 0