"""Rigid bodies made of circles and convex polygons."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Callable, Mapping, Optional

from .geometry import AABB, Mat2, Rect, Vec2, cross, dot
from .lines import draw_line
from .raster import Color, fill_ellipse
from .triangles import fill_triangle


def _vec(value) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(float(x), float(y))


def _color(value) -> Color:
    if isinstance(value, Color):
        return value
    r, g, b = (max(0, min(255, int(c))) for c in value)
    return Color(r, g, b)


def _xy(v: Vec2) -> tuple:
    return (v.x, v.y)


def _random_in_triangle(rng, a: Vec2, b: Vec2, c: Vec2) -> Vec2:
    s = math.sqrt(rng.random())
    t = rng.random()
    return a * (1 - s) + b * (s * (1 - t)) + c * (s * t)


@dataclass(eq=False)
class Shape:
    """A circle or a convex polygon, stored relative to its body and in world space."""

    is_circle: bool = False
    radius: float = 0.0
    offset: Vec2 = field(default_factory=Vec2)
    local_vertices: list = field(default_factory=list)
    center: Vec2 = field(default_factory=Vec2)
    radian: float = 0.0
    vertices: list = field(default_factory=list)
    area: float = 0.0

    @classmethod
    def circle(cls, radius: float, center: Vec2 = Vec2()) -> Shape:
        """A circle whose centre sits at `center` in body coordinates."""
        return cls(is_circle=True, radius=radius, offset=_vec(center), center=_vec(center))

    @classmethod
    def polygon(cls, vertices) -> Shape:
        """A convex polygon given by its vertices in body coordinates."""
        pts = [_vec(v) for v in vertices]
        return cls(local_vertices=list(pts), vertices=list(pts))

    def bounding_box(self) -> AABB:
        if self.is_circle:
            c, r = self.center, self.radius
            return AABB(c.x - r, c.x + r, c.y - r, c.y + r)
        box = AABB()
        for v in self.vertices:
            box = box.expand(v)
        return box

    def contains(self, p: Vec2) -> bool:
        """True when the world point p lies inside the shape."""
        if self.is_circle:
            return (p - self.center).length_sq() < self.radius * self.radius
        pts = self.vertices
        if len(pts) < 3:
            return False
        signs = [cross(b - a, p - a) for a, b in zip(pts, pts[1:] + pts[:1])]
        return all(s >= 0 for s in signs) or all(s <= 0 for s in signs)

    def random_point(self, rng=None) -> Vec2:
        """A uniformly random point inside the shape, in body coordinates."""
        rng = rng or random
        if self.is_circle:
            r = self.radius * math.sqrt(rng.random())
            phi = 2 * math.pi * rng.random()
            return self.offset + Vec2(math.cos(phi), math.sin(phi)) * r
        pts = self.local_vertices
        if len(pts) < 3:
            return pts[0] if pts else Vec2()
        fan = [(pts[0], pts[i], pts[i + 1]) for i in range(1, len(pts) - 1)]
        weights = [abs(cross(b - a, c - a)) / 2 for a, b, c in fan]
        total = sum(weights)
        if total == 0:
            return pts[0]
        pick = rng.random() * total
        for tri, w in zip(fan, weights):
            pick -= w
            if pick < 0:
                return _random_in_triangle(rng, *tri)
        return _random_in_triangle(rng, *fan[-1])


@dataclass(eq=False)
class Body:
    """A rigid body: its shapes, mass properties, motion and interaction state."""

    shapes: list = field(default_factory=list)
    point: bool = False
    fixed: bool = False
    deleted: bool = False
    o: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    radian: float = 0.0
    angular_velocity: float = 0.0
    box: AABB = field(default_factory=AABB)
    transform: Mat2 = field(default_factory=Mat2)
    inertia: float = 0.0
    inv_mass: float = 0.0
    inv_inertia: float = 0.0
    area: float = 0.0
    density: float = 1.0
    elasticity: float = 0.7
    friction_static: float = 0.5
    friction_dynamic: float = 0.3
    damping: float = 0.1
    angular_damping: float = 0.1
    charge_density: float = 0.0
    charge: float = 0.0
    cmd: str = ""

    preset_o: bool = False
    preset_ang: bool = False
    preset_v_ang: bool = False
    o_program: Optional[Callable[[float], Vec2]] = None
    angle_program: Optional[Callable[[float], float]] = None
    angular_velocity_program: Optional[Callable[[float], float]] = None

    track: list = field(default_factory=list)
    connections: list = field(default_factory=list)
    visited: bool = False
    hovered: bool = False
    dragged: bool = False
    drag_radian: float = 0.0
    drag_angular_velocity: float = 0.0
    drag_anchor: Vec2 = field(default_factory=Vec2)
    drag_mouse: Optional[Vec2] = None

    depth_shape: float = 0.0
    depth_point: float = 1.0
    point_radius: float = 8.0

    inner_color: Color = Color.BLACK
    border_color: Color = Color(255, 255, 255)
    hovered_color: Color = Color(0, 0, 255)
    dragged_color: Color = Color(255, 0, 0)
    selected_color: Color = Color(255, 0, 255)
    selected_connection_color: Color = Color(255, 255, 0)

    @classmethod
    def point_body(cls, position: Vec2) -> Body:
        """A shapeless body drawn and picked as a small disc."""
        return cls(point=True, o=_vec(position))

    def depth(self) -> float:
        return self.depth_point if self.point else self.depth_shape

    def contains(self, p: Vec2) -> bool:
        if self.point:
            return (p - self.o).length_sq() < self.point_radius * self.point_radius
        return any(sh.contains(p) for sh in self.shapes)

    def random_point_inside(self, rng=None) -> Vec2:
        """A random point inside the body, in body coordinates, chosen by area."""
        if self.point:
            return Vec2()
        rng = rng or random
        remaining = rng.random() * self.area
        for sh in self.shapes:
            remaining -= sh.area
            if remaining < 0:
                return sh.random_point(rng)
        return self.shapes[-1].random_point(rng)

    def apply_config(self, cfg: Mapping) -> None:
        """Set properties from a configuration mapping keyed by script names."""
        if "o" in cfg:
            self.o = _vec(cfg["o"])
        if "v" in cfg:
            self.velocity = _vec(cfg["v"])
        if "col" in cfg:
            self.inner_color = _color(cfg["col"])
        numeric = {
            "radian": "radian",
            "velocityAngular": "angular_velocity",
            "elasticity": "elasticity",
            "frictionStatic": "friction_static",
            "frictionDynamic": "friction_dynamic",
            "dampCoeff": "damping",
            "dampCoeffAngular": "angular_damping",
            "density": "density",
            "chargeDensity": "charge_density",
        }
        for key, attr in numeric.items():
            if key in cfg:
                setattr(self, attr, float(cfg[key]))
        for key in ("fixed", "preset_o", "preset_ang", "preset_v_ang"):
            if key in cfg:
                setattr(self, key, bool(cfg[key]))
        programs = {
            "o_prog": "o_program",
            "ang_prog": "angle_program",
            "v_ang_prog": "angular_velocity_program",
        }
        for key, attr in programs.items():
            if key in cfg:
                setattr(self, attr, cfg[key])

    def init_mass(self, recenter: bool = False) -> None:
        """Compute area, inertia and inverse mass; shift shapes so the centroid is the origin."""
        if self.point:
            return
        self.area = 0.0
        self.inertia = 0.0
        center = Vec2()
        for sh in self.shapes:
            sh.area = 0.0
            sub_center = Vec2()
            if sh.is_circle:
                sh.area = math.pi * sh.radius * sh.radius
                sub_center = sh.offset * sh.area
                self.inertia += sh.area * sh.radius * sh.radius / 2
            else:
                pts = sh.local_vertices
                for p, q in zip(pts, pts[1:] + pts[:1]):
                    tri_area = cross(p, q) / 2
                    tri_inertia = (dot(p, p) + dot(p, q) + dot(q, q)) * tri_area / 6
                    sub_center = sub_center + (p + q) * (tri_area / 3)
                    sh.area += tri_area
                    self.inertia += tri_inertia
            self.area += sh.area
            center = center + sub_center
            sh.offset = sub_center / sh.area

        center = center / self.area
        self.charge = self.charge_density * self.area
        self.inv_mass = 0.0 if self.fixed else 1 / (self.density * self.area)
        self.inv_inertia = 0.0 if self.fixed else 1 / (self.density * self.inertia)
        if recenter:
            self.o = center
        for sh in self.shapes:
            sh.offset = sh.offset - center
            sh.local_vertices = [v - center for v in sh.local_vertices]
        self.update_placement()

    def update_placement(self) -> None:
        """Recompute world positions of the shapes and the bounding box."""
        self.transform = Mat2.rotation(self.radian)
        for sh in self.shapes:
            sh.center = self.o + self.transform * sh.offset
            sh.radian = self.radian
            sh.vertices = [self.o + self.transform * v for v in sh.local_vertices]
        box = AABB()
        for sh in self.shapes:
            box = box.union(sh.bounding_box())
        self.box = box

    def wrap(self, rect: Rect) -> None:
        """Move the body to the opposite side when it leaves rect."""
        if self.inv_mass == 0 or self.dragged:
            return
        x, y = self.o.x, self.o.y
        if x < rect.left:
            x += rect.w
        elif x > rect.right:
            x -= rect.w
        if y < rect.top:
            y += rect.h
        elif y > rect.bottom:
            y -= rect.h
        self.o = Vec2(x, y)

    def grid_cell(self, origin: Vec2, cell_size: float, nx: int, ny: int):
        """The grid cell of the box's top-left corner, or None when it spans too many cells."""
        if self.point:
            raise ValueError("point bodies occupy no grid cell")

        def cell(value, start, n):
            return min(max(math.floor((value - start) / cell_size), 0), n - 1)

        x0 = cell(self.box.x0, origin.x, nx)
        y0 = cell(self.box.y0, origin.y, ny)
        x1 = cell(self.box.x1, origin.x, nx)
        y1 = cell(self.box.y1, origin.y, ny)
        if x1 > x0 + 1 or y1 > y0 + 1:
            return None
        return (x0, y0)

    def step(self, dt: float, gravity: Vec2, t: float) -> None:
        """Advance the body by dt seconds at simulation time t."""
        if self.inv_mass:
            self.velocity = self.velocity - self.velocity * (self.damping * dt)
            self.velocity = self.velocity + gravity * dt
            self.angular_velocity -= self.angular_damping * self.angular_velocity * dt
            if self.preset_v_ang and self.angular_velocity_program:
                self.angular_velocity = self.angular_velocity_program(t)
            self.o = self.o + self.velocity * dt
            self.radian += self.angular_velocity * dt
        else:
            self.velocity = Vec2()
            self.angular_velocity = 0.0
            if self.preset_o and self.o_program:
                old = _vec(self.o_program(t))
                new = _vec(self.o_program(t + dt))
                self.o = new
                self.velocity = (new - old) / dt
            if self.preset_ang and self.angle_program:
                old = self.angle_program(t)
                new = self.angle_program(t + dt)
                self.radian = new
                self.angular_velocity = (new - old) / dt
        self.update_placement()

    def _anchor(self) -> Vec2:
        return self.o + self.transform * self.drag_anchor

    def drag_point(self, mouse: Vec2, mouse_prev: Vec2, real_dt: float) -> None:
        """Pull the grabbed point to the mouse with an impulse along the pull."""
        self.drag_mouse = mouse
        p = self._anchor()
        mouse_velocity = (mouse - mouse_prev) / real_dt
        direction = (mouse - p).normalized()
        r = (p - self.o).perp()
        point_velocity = self.velocity + r * self.angular_velocity
        rd = dot(r, direction)
        inv_i = self.inv_mass + rd * rd * self.inv_inertia
        impulse = direction * (dot(mouse_velocity - point_velocity, direction) / inv_i)
        self.velocity = self.velocity + impulse * self.inv_mass
        self.angular_velocity += dot(impulse, r) * self.inv_inertia
        self.o = self.o + (mouse - p)

    def drag_whole(self, mouse: Vec2, mouse_prev: Vec2, real_dt: float) -> None:
        """Move the whole body with the mouse, taking the drag spin."""
        self.drag_mouse = mouse
        p = self._anchor()
        self.velocity = (mouse - mouse_prev) / real_dt
        self.radian = self.drag_radian
        self.angular_velocity = self.drag_angular_velocity
        self.o = self.o + (mouse - p)

    def drag_force(self, mouse: Vec2, dt: float) -> None:
        """Apply a spring-like force from the grabbed point toward the mouse."""
        self.drag_mouse = mouse
        p = self._anchor()
        direction = (mouse - p).normalized()
        impulse = direction * (1e6 * (mouse - p).length() * dt)
        r = (p - self.o).perp()
        self.velocity = self.velocity + impulse * self.inv_mass
        self.angular_velocity += dot(impulse, r) * self.inv_inertia

    def render(self, canvas, viewport: Rect, color: Color) -> None:
        """Draw the body filled with color, its outline, drag line and track."""
        depth = self.depth()
        if self.point:
            r = self.point_radius
            fill_ellipse(canvas, depth, self.o, r, r, viewport, color)
            _ellipse_border(canvas, depth, self.o, r, r, viewport, self.border_color, 20)
        for sh in self.shapes:
            if sh.is_circle:
                fill_ellipse(canvas, depth, sh.center, sh.radius, sh.radius, viewport, color)
                _ellipse_border(canvas, depth, sh.center, sh.radius, sh.radius,
                                viewport, self.border_color, 30)
                peak = Vec2(math.cos(sh.radian), math.sin(sh.radian)) * sh.radius + sh.center
                draw_line(canvas, _xy(sh.center), _xy(peak), depth, viewport, self.border_color)
                continue
            edges = list(zip(sh.vertices, sh.vertices[1:] + sh.vertices[:1]))
            for a, b in edges:
                fill_triangle(canvas, viewport, _xy(sh.center), _xy(a), _xy(b), depth, color)
            for a, b in edges:
                draw_line(canvas, _xy(a), _xy(b), depth, viewport, self.border_color)

        if self.dragged and self.drag_mouse is not None:
            draw_line(canvas, _xy(self._anchor()), _xy(self.drag_mouse), depth,
                      viewport, Color(0, 255, 255))

        if self.track:
            prev = self.track[0]
            for p in self.track:
                draw_line(canvas, _xy(prev), _xy(p), 10, viewport, Color(255, 0, 255))
                prev = p


def _ellipse_border(canvas, depth, center, a, b, viewport, color, n):
    pts = [
        center + Vec2(a * math.cos(2 * math.pi * k / n), b * math.sin(2 * math.pi * k / n))
        for k in range(n)
    ]
    for p, q in zip(pts, pts[1:] + pts[:1]):
        draw_line(canvas, _xy(p), _xy(q), depth, viewport, color)


def electrostatic(b0: Body, b1: Body, dt: float, coulomb: float) -> None:
    """Exchange the Coulomb impulse between two charged bodies."""
    diff = b1.o - b0.o
    dsqr = diff.length_sq()
    d = diff.normalized()
    je = d * (-b0.charge * b1.charge / dsqr * dt * coulomb)
    b0.velocity = b0.velocity + je * b0.inv_mass
    b1.velocity = b1.velocity - je * b1.inv_mass