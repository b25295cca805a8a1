"""Shape descriptions and scene builders used by scene scripts.

A shape description is a list of shape entries.  Each entry is
``[1, radius]`` or ``[1, radius, (x, y)]`` for a circle (the optional point
is its centre in body coordinates) and ``[0, [(x, y), ...]]`` for a convex
polygon.

The scene builders take a ``world`` object that provides:

* ``bodies`` and ``connections``: lists that new objects are appended to;
* ``scene_changed``: set to True whenever the scene gains objects;
* ``background``: a :class:`~rigid2d.geometry.Rect` (needed by :func:`boundary`);
* ``rng`` (optional): a :class:`random.Random`; the ``random`` module otherwise.
"""

from __future__ import annotations

import math
import random
from typing import Mapping, Sequence

from .body import Body, Shape
from .connection import Connection, ConnectionType
from .geometry import Vec2
from .raster import Color


def _rng(world):
    return getattr(world, "rng", None) or random


def _random_color(world) -> Color:
    rng = _rng(world)
    return Color(rng.randrange(256), rng.randrange(256), rng.randrange(256))


def _vec(value) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(float(x), float(y))


def _polygon(points) -> list:
    return [0, [(float(x), float(y)) for x, y in points]]


def _rect_vertices(w: float, h: float) -> list:
    return [(w / 2, h / 2), (-w / 2, h / 2), (-w / 2, -h / 2), (w / 2, -h / 2)]


def ball(r) -> list:
    """A single circle of radius r."""
    return [[1, r]]


def box(w, h) -> list:
    """A w by h rectangle centred on the origin."""
    return [_polygon(_rect_vertices(w, h))]


def regular_polygon(n, r) -> list:
    """A regular polygon with at least three corners on a circle of radius r."""
    m = max(3, int(n))
    corners = [
        (r * math.cos(2 * math.pi * i / m), r * math.sin(2 * math.pi * i / m))
        for i in range(m)
    ]
    return [_polygon(corners)]


def parallelogram(w, h, s) -> list:
    """A w by h parallelogram whose top edge is shifted by s and bottom edge by -s."""
    return [_polygon([
        (w / 2 + s, h / 2),
        (-w / 2 + s, h / 2),
        (-w / 2 - s, -h / 2),
        (w / 2 - s, -h / 2),
    ])]


def trapezoid(t, b, h) -> list:
    """A trapezoid of height h with edges of width t (top) and b (bottom)."""
    return [_polygon([
        (t / 2, h / 2),
        (-t / 2, h / 2),
        (-b / 2, -h / 2),
        (b / 2, -h / 2),
    ])]


def cross(s, thickness) -> list:
    """Two bars of length s and the given thickness, crossing at the origin."""
    return [
        _polygon(_rect_vertices(s, thickness)),
        _polygon(_rect_vertices(thickness, s)),
    ]


def framed_box(w, h, thickness) -> list:
    """Four bars framing a w by h box; the bars are centred on its edges."""
    ht = thickness / 2
    top = [
        (w / 2 + ht, h / 2 + ht),
        (-w / 2 - ht, h / 2 + ht),
        (-w / 2 - ht, h / 2 - ht),
        (w / 2 + ht, h / 2 - ht),
    ]
    bottom = [
        (w / 2 + ht, -h / 2 + ht),
        (-w / 2 - ht, -h / 2 + ht),
        (-w / 2 - ht, -h / 2 - ht),
        (w / 2 + ht, -h / 2 - ht),
    ]
    right = [
        (w / 2 - ht, h / 2 + ht),
        (w / 2 - ht, -h / 2 - ht),
        (w / 2 + ht, -h / 2 - ht),
        (w / 2 + ht, h / 2 + ht),
    ]
    left = [
        (-w / 2 - ht, h / 2 + ht),
        (-w / 2 - ht, -h / 2 - ht),
        (-w / 2 + ht, -h / 2 - ht),
        (-w / 2 + ht, h / 2 + ht),
    ]
    return [_polygon(top), _polygon(bottom), _polygon(right), _polygon(left)]


def _shapes_from(shapes_cfg: Sequence) -> list:
    shapes = []
    for entry in shapes_cfg:
        if not entry or len(entry) < 2:
            continue
        if entry[0]:
            center = _vec(entry[2]) if len(entry) >= 3 else Vec2()
            shapes.append(Shape.circle(float(entry[1]), center))
        else:
            shapes.append(Shape.polygon([_vec(p) for p in entry[1]]))
    return shapes


def create_body(world, shapes_cfg: Sequence, cfg: Mapping) -> Body:
    """Add a body built from a shape description and configured by cfg."""
    point = bool(cfg.get("point", False))
    shapes = _shapes_from(shapes_cfg)
    body = Body.point_body(Vec2()) if point else Body(shapes=shapes)
    body.inner_color = _random_color(world)
    body.apply_config(cfg)
    body.init_mass(bool(cfg.get("repos_o", False)))
    world.bodies.append(body)
    world.scene_changed = True
    return body


def _anchor(body: Body, value, absolute: bool) -> Vec2:
    p = _vec(value)
    if absolute:
        p = body.transform.inverse() * (p - body.o)
    return p


def create_connection(world, cfg: Mapping) -> Connection:
    """Join two bodies, chosen by "idx0"/"idx1" or at random, with a connection."""
    count = len(world.bodies)
    if count == 0:
        raise ValueError("the world has no bodies to connect")
    rng = _rng(world)
    idx0 = int(cfg.get("idx0", rng.randrange(count)))
    idx1 = int(cfg.get("idx1", rng.randrange(count)))
    idx0 = min(max(idx0, 0), count - 1)
    idx1 = min(max(idx1, 0), count - 1)

    conn = Connection(body0=world.bodies[idx0], body1=world.bodies[idx1])
    conn.p0_relative = conn.body0.random_point_inside(rng)
    conn.p1_relative = conn.body1.random_point_inside(rng)
    absolute = bool(cfg.get("absolute", False))
    if "p0" in cfg:
        conn.p0_relative = _anchor(conn.body0, cfg["p0"], absolute)
    if "p1" in cfg:
        conn.p1_relative = _anchor(conn.body1, cfg["p1"], absolute)
    conn.attach()
    conn.update_position()
    conn.length = (conn.p0 - conn.p1).length()
    conn.apply_config(cfg)
    world.connections.append(conn)
    world.scene_changed = True
    return conn


def boundary(world, thickness, cfg: Mapping) -> list:
    """Add four fixed walls along the edges of the world's background."""
    bg = world.background
    bw, bh = bg.w, bg.h
    x0, y0 = bg.left, bg.top
    x1, y1 = x0 + bw, y0 + bh
    color = _random_color(world)
    walls = [
        (thickness, bh, Vec2(x0, (y0 + y1) / 2)),
        (thickness, bh, Vec2(x1, (y0 + y1) / 2)),
        (bw, thickness, Vec2((x0 + x1) / 2, y0)),
        (bw, thickness, Vec2((x0 + x1) / 2, y1)),
    ]
    added = []
    for w, h, o in walls:
        body = Body(shapes=[Shape.polygon([_vec(p) for p in _rect_vertices(w, h)])])
        body.o = o
        body.fixed = True
        body.inner_color = color
        body.apply_config(cfg)
        body.init_mass()
        world.bodies.append(body)
        added.append(body)
    world.scene_changed = True
    return added


def gear(world, r, n, h, cfg: Mapping):
    """Add a toothed wheel pinned by a link to a point body at its centre."""
    teeth = int(n)
    shapes = [Shape.circle(float(r))]
    for i in range(teeth):
        phi0 = 2 * math.pi * i / teeth
        phi1 = 2 * math.pi * (i + 1) / teeth
        phi = (phi0 + phi1) / 2
        tip = Vec2(math.cos(phi), math.sin(phi)) * (r + h)
        v0 = Vec2(math.cos(phi0), math.sin(phi0)) * r
        v1 = Vec2(math.cos(phi1), math.sin(phi1)) * r
        shapes.append(Shape.polygon([v0, tip, v1]))
    wheel = Body(shapes=shapes)
    wheel.inner_color = _random_color(world)
    wheel.apply_config(cfg)
    wheel.init_mass()
    world.bodies.append(wheel)

    root = Body.point_body(wheel.o)
    root.inner_color = wheel.inner_color
    root.init_mass()
    world.bodies.append(root)

    conn = Connection(type=ConnectionType.LINK, body0=root, body1=wheel)
    conn.attach()
    conn.update_position()
    world.connections.append(conn)
    world.scene_changed = True
    return wheel, root, conn


def _bead(world, radius, o, color, cfg_body) -> Body:
    body = Body(shapes=[Shape.circle(radius)])
    body.inner_color = color
    body.o = o
    body.apply_config(cfg_body)
    body.init_mass()
    world.bodies.append(body)
    return body


def _join(world, b0, b1, gap, p0_rel, p1_rel, cfg_conn) -> Connection:
    conn = Connection(body0=b0, body1=b1, length=gap,
                      p0_relative=p0_rel, p1_relative=p1_rel)
    conn.apply_config(cfg_conn)
    conn.attach()
    conn.update_position()
    world.connections.append(conn)
    return conn


def strand(world, p0, p1, n, ratio, cfg_body: Mapping, cfg_conn: Mapping):
    """Add a chain of n + 1 balls from p0 to p1, joined end to end."""
    start, end = _vec(p0), _vec(p1)
    count = int(n)
    seg = (end - start).length() / count
    rad = 0.5 * ratio * seg
    gap = max(0.0, seg - 2 * rad)
    color = _random_color(world)
    direction = (end - start).normalized()

    prev = _bead(world, rad, start, color, cfg_body)
    beads, conns = [prev], []
    for i in range(1, count + 1):
        o = (start * (count - i) + end * i) / count
        cur = _bead(world, rad, o, color, cfg_body)
        conns.append(_join(world, prev, cur, gap, direction * rad, direction * -rad, cfg_conn))
        beads.append(cur)
        prev = cur
    world.scene_changed = True
    return beads, conns


def necklace(world, o, rad, n, ratio, cfg_body: Mapping, cfg_conn: Mapping):
    """Add a closed ring of n balls on a circle of radius rad around o."""
    center = _vec(o)
    count = int(n)
    seg = 2 * math.pi * rad / count
    ball_rad = 0.5 * ratio * seg
    gap = max(0.0, seg - 2 * ball_rad)
    color = _random_color(world)

    def anchors(i):
        phi1 = 2 * math.pi * i / count
        phi0 = 2 * math.pi * (i - 1) / count
        p1_rel = Vec2(math.sin(phi1), -math.cos(phi1)) * ball_rad
        p0_rel = Vec2(-math.sin(phi0), math.cos(phi0)) * ball_rad
        return p0_rel, p1_rel

    first = _bead(world, ball_rad, center + Vec2(rad, 0), color, cfg_body)
    beads, conns = [first], []
    prev = first
    for i in range(1, count):
        phi = 2 * math.pi * i / count
        cur = _bead(world, ball_rad, center + Vec2(math.cos(phi), math.sin(phi)) * rad,
                    color, cfg_body)
        conns.append(_join(world, prev, cur, gap, *anchors(i), cfg_conn))
        beads.append(cur)
        prev = cur
    conns.append(_join(world, prev, first, gap, *anchors(count), cfg_conn))
    world.scene_changed = True
    return beads, conns