"""Interactive creation of bodies and connections with the mouse."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping, Optional

from .body import Body, Shape
from .connection import Connection, ConnectionType
from .geometry import Vec2
from .raster import Color


class CreateMode(IntEnum):
    BOX = 0
    BALL = 1
    PLATE = 2
    PARTICLE = 3
    CONN = 4
    POINT = 5
    NAIL = 6


_MODE_NAMES = {
    "box": CreateMode.BOX,
    "ball": CreateMode.BALL,
    "plate": CreateMode.PLATE,
    "conn": CreateMode.CONN,
    "point": CreateMode.POINT,
    "nail": CreateMode.NAIL,
    "particle": CreateMode.PARTICLE,
}

MIN_BOX_SIDE = 10.0
MIN_BALL_RADIUS = 7.5
MIN_PLATE_LENGTH = 5.0


def _rect_vertices(w: float, h: float) -> list:
    return [Vec2(w / 2, h / 2), Vec2(-w / 2, h / 2), Vec2(-w / 2, -h / 2), Vec2(w / 2, -h / 2)]


def _random_color(world) -> Color:
    rng = getattr(world, "rng", None) or random
    return Color(rng.randrange(256), rng.randrange(256), rng.randrange(256))


@dataclass(eq=False)
class Creator:
    """Builds new bodies and connections from mouse gestures on the background.

    The world it works on provides ``input``, ``owners``, ``background``,
    ``bodies``, ``connections``, ``scene_changed`` and optionally ``rng``.
    """

    mode: CreateMode = CreateMode.BOX
    depth_body: float = 10.0
    depth_connection: float = -1.0
    thick: float = 10.0
    rad: float = 8.0
    start: Vec2 = field(default_factory=Vec2)
    body0: Optional[Body] = None
    body1: Optional[Body] = None
    p0_relative: Vec2 = field(default_factory=Vec2)
    p1_relative: Vec2 = field(default_factory=Vec2)
    cfg_body: Optional[Mapping] = None
    cfg_connection: Optional[Mapping] = None
    body: Optional[Body] = None
    connection: Optional[Connection] = None
    active: bool = False
    hovered: bool = False

    @classmethod
    def from_config(cls, cfg: Mapping) -> Creator:
        """Read "mode" (a name or a number), "thick", "rad", "cfg_body" and "cfg_conn"."""
        creator = cls()
        if "mode" in cfg:
            kind = cfg["mode"]
            if isinstance(kind, str):
                if kind in _MODE_NAMES:
                    creator.mode = _MODE_NAMES[kind]
            else:
                creator.mode = CreateMode(int(kind))
        if "thick" in cfg:
            creator.thick = float(cfg["thick"])
        if "rad" in cfg:
            creator.rad = float(cfg["rad"])
        if "cfg_body" in cfg:
            creator.cfg_body = dict(cfg["cfg_body"])
        if "cfg_conn" in cfg:
            creator.cfg_connection = dict(cfg["cfg_conn"])
        return creator

    def depth(self) -> float:
        if self.mode in (CreateMode.CONN, CreateMode.NAIL):
            return self.depth_connection
        return self.depth_body

    def _finish(self, world, body: Body) -> Body:
        body.inner_color = _random_color(world)
        if self.cfg_body:
            body.apply_config(self.cfg_body)
        body.init_mass()
        return body

    def _add(self, world, body: Body) -> None:
        world.bodies.append(body)
        world.scene_changed = True

    def _drag_out(self, world, build) -> None:
        inp = world.input
        if self.active:
            body = build(inp.mouse)
            if body is not None:
                self.body = self._finish(world, body)
            if not inp.buttons[0]:
                self.active = False
                if self.body is not None:
                    self._add(world, self.body)
                    self.body = None
        elif self.hovered and inp.mouse_clicked(0):
            self.active = True
            self.start = inp.mouse

    def _build_box(self, mouse: Vec2) -> Optional[Body]:
        w, h = mouse.x - self.start.x, mouse.y - self.start.y
        if w < MIN_BOX_SIDE or h < MIN_BOX_SIDE:
            return None
        body = Body(shapes=[Shape.polygon(_rect_vertices(w, h))])
        body.o = (self.start + mouse) / 2
        return body

    def _build_ball(self, mouse: Vec2) -> Optional[Body]:
        r = (self.start - mouse).length()
        if r <= MIN_BALL_RADIUS:
            return None
        body = Body(shapes=[Shape.circle(r)])
        body.o = self.start
        return body

    def _build_plate(self, mouse: Vec2) -> Optional[Body]:
        v = self.start - mouse
        length = v.length()
        if length <= MIN_PLATE_LENGTH:
            return None
        body = Body(shapes=[Shape.polygon(_rect_vertices(length + self.thick, self.thick))])
        body.o = (self.start + mouse) / 2
        body.radian = math.atan2(v.y, v.x)
        return body

    def _update_connection(self, world) -> None:
        inp = world.input
        if self.active:
            conn = Connection()
            if self.cfg_connection:
                conn.apply_config(self.cfg_connection)
            self.connection = conn
            if not inp.buttons[0]:
                if self.body1 is not None:
                    conn.body0 = self.body0
                    conn.body1 = self.body1
                    conn.p0_relative = self.p0_relative
                    conn.p1_relative = self.p1_relative
                    conn.attach()
                    conn.update_position()
                    conn.length = (conn.p0 - conn.p1).length()
                    world.connections.append(conn)
                    world.scene_changed = True
                self.connection = None
                self.body0 = self.body1 = None
                self.active = False
        elif self.body0 is not None:
            self.active = True

    def _update_point(self, world) -> None:
        if self.hovered and world.input.mouse_clicked(0):
            self._add(world, self._finish(world, Body.point_body(world.input.mouse)))

    def _update_nail(self, world) -> None:
        if self.body0 is None:
            return
        anchor = self.body0.o + self.body0.transform * self.p0_relative
        pin = Body.point_body(anchor)
        pin.init_mass()
        world.bodies.append(pin)
        conn = Connection(type=ConnectionType.LINK, body0=self.body0, body1=pin,
                          p0_relative=self.p0_relative)
        conn.attach()
        conn.update_position()
        world.connections.append(conn)
        self.body0 = None
        world.scene_changed = True

    def _update_particle(self, world) -> None:
        if self.hovered and world.input.mouse_clicked(0):
            body = Body(shapes=[Shape.circle(self.rad)])
            body.o = world.input.mouse
            self._add(world, self._finish(world, body))

    def update(self, world) -> None:
        """Advance the gesture of the current mode by one frame."""
        self.hovered = world.owners.hovered is self
        self.body = None
        self.connection = None
        if self.mode == CreateMode.BOX:
            self._drag_out(world, self._build_box)
        elif self.mode == CreateMode.BALL:
            self._drag_out(world, self._build_ball)
        elif self.mode == CreateMode.PLATE:
            self._drag_out(world, self._build_plate)
        elif self.mode == CreateMode.CONN:
            self._update_connection(world)
        elif self.mode == CreateMode.POINT:
            self._update_point(world)
        elif self.mode == CreateMode.NAIL:
            self._update_nail(world)
        elif self.mode == CreateMode.PARTICLE:
            self._update_particle(world)

        if self.connection is not None and self.body0 is not None:
            self.connection.p0 = self.body0.o + self.body0.transform * self.p0_relative
            self.connection.p1 = world.input.mouse

    def discard(self, world) -> None:
        """Drop any gesture in progress and give up hover ownership."""
        world.owners.remove(self)
        self.body0 = self.body1 = None
        self.body = None
        self.connection = None
        self.hovered = self.active = False

    def pre_update(self, world) -> None:
        owners = world.owners
        if owners.hovered_depth <= self.depth() and world.background.contains(world.input.mouse):
            owners.hovered_depth = self.depth()
            owners.hovered = self