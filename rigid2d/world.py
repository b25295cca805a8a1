"""The simulation scene: bodies, connections, input handling and stepping."""

from __future__ import annotations

import dataclasses
import math
import random
from enum import IntEnum
from itertools import combinations
from typing import Mapping, Optional

from .body import Body, electrostatic
from .collision import collide_bodies
from .connection import Connection
from .creator import CreateMode, Creator
from .geometry import Rect, Vec2
from .inputs import InputState, Owners
from .raster import Color, fill_rect_raw

BACKGROUND_DEPTH = -100000.0
KEY_SPACE = ord(" ")
KEY_F = ord("F")
KEY_Q = ord("Q")
KEY_E = ord("E")


class Mode(IntEnum):
    DRAG = 0
    SELECT = 1
    CREATE = 2
    DELETE = 3


class DisplayMode(IntEnum):
    COLOR = 0
    ENERGY = 1
    CHARGES = 2
    NONE = 3


_NUMERIC = {
    "vol": "volume",
    "energy_mul": "energy_mul",
    "chargeMultiplier": "charge_multiplier",
    "eps_paralell": "eps_parallel",
    "max_real_dt": "max_real_dt",
    "coulomb": "coulomb",
    "gridSize": "grid_size",
    "t": "t",
}
_FLAGS = {
    "hasElectrostatic": "electrostatic",
    "equal_repos": "equal_response",
    "isTrackShown": "track_shown",
}


def _vec(value) -> Vec2:
    if isinstance(value, Vec2):
        return value
    x, y = value
    return Vec2(float(x), float(y))


def _channel(value: float) -> int:
    return max(0, min(255, int(value * 255)))


def _intersect(a: Rect, b: Rect) -> Rect:
    x0, y0 = max(a.left, b.left), max(a.top, b.top)
    x1, y1 = min(a.right, b.right), min(a.bottom, b.bottom)
    return Rect(x0, y0, max(0, x1 - x0), max(0, y1 - y0))


class World:
    """A scene of bodies and connections driven by mouse and keyboard input.

    Each frame the caller feeds window events into ``input``, calls
    :meth:`update` and :meth:`render`, then ``input.end_frame()``.
    The world itself owns the hover when the mouse is over the bare background.
    """

    def __init__(self, background: Optional[Rect] = None, rng: Optional[random.Random] = None):
        self.background = background or Rect(170, 0, 1630, 860)
        self.rng = rng or random.Random()
        self.input = InputState()
        self.owners = Owners()
        self.mode = Mode.DRAG
        self.display = DisplayMode.COLOR
        self.paused = False
        self.muted = False
        self.volume = 1.0
        self.real_dt = 0.0
        self.reset()

    def reset(self) -> None:
        """Empty the scene and restore the default simulation settings."""
        self.bodies: list = []
        self.connections: list = []
        self.collisions: list = []
        self.body_selected: Optional[Body] = None
        self.connection_selected: Optional[Connection] = None
        self.scene_changed = False
        self.gravity = Vec2()
        self.max_real_dt = 0.05
        self.t = 0.0
        self.step_num = 60
        self.scene = self.background
        self.grid_size = 50.0
        self.grid_nx = 0
        self.grid_ny = 0
        self.grid: list = []
        self.multi_grid_bodies: list = []
        self.energy_mul = 4e-6
        self.charge_multiplier = 1.0
        self.track_shown = False
        self.electrostatic = False
        self.coulomb = 1e5
        self.eps_parallel = 1e-3
        self.equal_response = False
        self.drag_angular_speed = 2.0
        self.creator = Creator()

    def apply_config(self, cfg: Mapping) -> None:
        """Set simulation settings from a mapping keyed by script names."""
        for key, attr in _NUMERIC.items():
            if key in cfg:
                setattr(self, attr, float(cfg[key]))
        for key, attr in _FLAGS.items():
            if key in cfg:
                setattr(self, attr, bool(cfg[key]))
        if "stepNum" in cfg:
            self.step_num = int(cfg["stepNum"])
        self.step_num = max(1, self.step_num)
        scene = {}
        for key, attr in (("left_scene", "x"), ("top_scene", "y"),
                          ("w_scene", "w"), ("h_scene", "h")):
            if key in cfg:
                scene[attr] = float(cfg[key])
        if scene:
            self.scene = dataclasses.replace(self.scene, **scene)
        if "gravity" in cfg:
            self.gravity = _vec(cfg["gravity"])
        self.scene_changed = True

    def remove_deleted(self) -> None:
        """Drop deleted bodies, their connections and deleted connections."""
        for body in self.bodies:
            if body.deleted:
                for conn in body.connections:
                    conn.deleted = True
        if self.body_selected is not None and self.body_selected.deleted:
            self.body_selected = None
        if self.connection_selected is not None and self.connection_selected.deleted:
            self.connection_selected = None
        for conn in self.connections:
            if conn.deleted:
                for body in (conn.body0, conn.body1):
                    body.connections = [c for c in body.connections if c is not conn]
        self.connections = [c for c in self.connections if not c.deleted]
        self.bodies = [b for b in self.bodies if not b.deleted]

    def rebuild_grid(self) -> None:
        """Sort bodies into grid cells; bodies spanning many cells go to a separate list."""
        self.grid_nx = max(1, math.ceil(self.scene.w / self.grid_size))
        self.grid_ny = max(1, math.ceil(self.scene.h / self.grid_size))
        self.grid = [[] for _ in range(self.grid_nx * self.grid_ny)]
        self.multi_grid_bodies = []
        origin = Vec2(self.scene.x, self.scene.y)
        for body in self.bodies:
            if body.point:
                continue
            cell = body.grid_cell(origin, self.grid_size, self.grid_nx, self.grid_ny)
            if cell is None:
                self.multi_grid_bodies.append(body)
            else:
                x, y = cell
                self.grid[y * self.grid_nx + x].append(body)

    def detect_collisions(self) -> list:
        """Collect contacts between bodies in the same or neighbouring cells."""
        if len(self.grid) != self.grid_nx * self.grid_ny or not self.grid:
            self.rebuild_grid()
        nx, ny, grid = self.grid_nx, self.grid_ny, self.grid
        contacts: list = []

        def hit(b0, b1):
            contacts.extend(collide_bodies(b0, b1, self.eps_parallel))

        for i in range(nx):
            for j in range(ny):
                cell = grid[j * nx + i]
                for k, body in enumerate(cell):
                    for other in cell[k + 1:]:
                        hit(body, other)
                    for other in self.multi_grid_bodies:
                        hit(body, other)
                    neighbours = []
                    if i + 1 < nx:
                        neighbours.append(grid[j * nx + i + 1])
                    if j + 1 < ny:
                        if i - 1 >= 0:
                            neighbours.append(grid[(j + 1) * nx + i - 1])
                        if i + 1 < nx:
                            neighbours.append(grid[(j + 1) * nx + i + 1])
                        neighbours.append(grid[(j + 1) * nx + i])
                    for neighbour in neighbours:
                        for other in neighbour:
                            hit(body, other)
        for b0, b1 in combinations(self.multi_grid_bodies, 2):
            hit(b0, b1)
        self.collisions = contacts
        return contacts

    def _drag(self, body: Body, step_dt: Optional[float] = None) -> None:
        inp = self.input
        body.drag_mouse = inp.mouse
        if self.real_dt <= 0:
            return
        if inp.buttons[2]:
            body.drag_whole(inp.mouse, inp.mouse_prev, self.real_dt)
        elif self.owners.keyboard_owner is None and inp.keys[KEY_F]:
            if step_dt is not None:
                body.drag_force(inp.mouse, step_dt)
        elif body.inv_mass == 0:
            body.drag_whole(inp.mouse, inp.mouse_prev, self.real_dt)
        else:
            body.drag_point(inp.mouse, inp.mouse_prev, self.real_dt)

    def simulate(self, real_dt: float) -> None:
        """Advance the physics by real_dt seconds in step_num sub-steps."""
        steps = max(1, int(self.step_num))
        sdt = real_dt / steps
        for _ in range(steps):
            for body in self.bodies:
                body.step(sdt, self.gravity, self.t)
                if body.dragged:
                    self._drag(body, sdt)
                    body.update_placement()
            if self.electrostatic:
                for b0, b1 in combinations(self.bodies, 2):
                    if not (b1.o - b0.o).is_zero():
                        electrostatic(b0, b1, sdt, self.coulomb)
            self.rebuild_grid()
            for contact in self.detect_collisions():
                contact.resolve(self.equal_response)
            for conn in self.connections:
                conn.simulate(sdt, self.equal_response)
            self.t += sdt

    def _pre_update(self) -> None:
        owners, mouse = self.owners, self.input.mouse
        owners.reset()
        inside = self.background.contains(mouse)
        if inside and owners.hovered_depth <= BACKGROUND_DEPTH:
            owners.hovered_depth = BACKGROUND_DEPTH
            owners.hovered = self
        if inside and owners.wheeled_depth <= BACKGROUND_DEPTH:
            owners.wheeled_depth = BACKGROUND_DEPTH
            owners.wheeled = self
        if self.mode == Mode.CREATE:
            self.creator.pre_update(self)
        for body in self.bodies:
            if owners.hovered_depth <= body.depth() and body.contains(mouse) and inside:
                owners.hovered_depth = body.depth()
                owners.hovered = body

    def _update_drag_angle(self, body: Body) -> None:
        body.drag_angular_velocity = 0.0
        if self.owners.keyboard_owner is None:
            if self.input.keys[KEY_Q]:
                body.drag_angular_velocity = -self.drag_angular_speed
            if self.input.keys[KEY_E]:
                body.drag_angular_velocity = self.drag_angular_speed
        body.drag_radian = body.radian + body.drag_angular_velocity * self.real_dt

    def _update_body(self, body: Body) -> None:
        inp = self.input
        clicked = inp.mouse_clicked(0)
        body.hovered = self.owners.hovered is body
        if self.mode == Mode.DELETE and body.hovered and clicked:
            body.deleted = True
        if self.mode == Mode.SELECT and body.hovered and clicked:
            self.body_selected = body

        if body.dragged:
            self._update_drag_angle(body)
            self._drag(body)
            body.dragged = inp.buttons[0] and self.mode == Mode.DRAG
        else:
            body.dragged = body.hovered and clicked and self.mode == Mode.DRAG
            if body.dragged:
                body.drag_anchor = body.transform.inverse() * (inp.mouse - body.o)
                self._update_drag_angle(body)

        selected = body is self.body_selected
        if selected and self.track_shown and not self.paused:
            body.track.append(body.o)
        elif not selected or not self.track_shown:
            body.track.clear()

        creator = self.creator
        can_create = (body.hovered and self.mode == Mode.CREATE
                      and creator.mode in (CreateMode.CONN, CreateMode.NAIL))
        if can_create:
            local = body.transform.inverse() * (inp.mouse - body.o)
            if clicked and not creator.active:
                creator.body0 = body
                creator.p0_relative = local
            elif not inp.buttons[0] and inp.buttons_prev[0] and creator.active:
                creator.body1 = body
                creator.p1_relative = local

    def update(self, dt: float) -> None:
        """Handle one frame of input and advance the simulation by dt seconds."""
        self._pre_update()
        inp = self.input
        if self.owners.keyboard_owner is None and inp.key_pressed(KEY_SPACE):
            self.paused = not self.paused

        self.remove_deleted()
        if self.owners.hovered is self and inp.mouse_clicked(0):
            self.body_selected = None
            self.connection_selected = None

        self.real_dt = min(self.max_real_dt, dt)
        self.scene_changed = False
        for body in list(self.bodies):
            self._update_body(body)

        if not self.paused and self.real_dt != 0:
            self.simulate(self.real_dt)

        if self.mode == Mode.CREATE:
            self.creator.update(self)

    def _normal_color(self, body: Body) -> Color:
        if self.display == DisplayMode.COLOR:
            return body.inner_color
        if self.display == DisplayMode.ENERGY:
            energy = body.velocity.length_sq()
            if body.area:
                energy += body.angular_velocity ** 2 * body.inertia / body.area
            return Color(_channel(energy * self.energy_mul), 0, 0)
        if self.display == DisplayMode.CHARGES:
            level = body.charge_density * self.charge_multiplier
            if body.charge_density > 0:
                return Color(_channel(level), 0, 0)
            return Color(0, 0, _channel(-level))
        return Color()

    def _body_color(self, body: Body) -> Color:
        conn = self.connection_selected
        on_selected_conn = conn is not None and (conn.body0 is body or conn.body1 is body)
        if body.dragged:
            return body.dragged_color
        if body is self.body_selected:
            return body.selected_color
        if body.hovered:
            return body.hovered_color
        if on_selected_conn:
            return body.selected_connection_color
        return self._normal_color(body)

    def render(self, canvas) -> None:
        """Draw the background, bodies, connections and any creation preview."""
        bg = self.background
        fill_rect_raw(canvas, (bg.x, bg.y), bg.w, bg.h, canvas.rect(), Color.BLACK)
        viewport = _intersect(bg, canvas.rect())
        for body in self.bodies:
            body.update_placement()
            body.render(canvas, viewport, self._body_color(body))
        for conn in self.connections:
            conn.update_position()
            conn.render(canvas, viewport)
        if self.mode == Mode.CREATE:
            creator = self.creator
            if creator.body is not None:
                creator.body.render(canvas, viewport, self._body_color(creator.body))
            if creator.connection is not None and creator.body0 is not None:
                creator.connection.render(canvas, viewport)