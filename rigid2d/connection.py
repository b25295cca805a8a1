"""Links, ropes, springs and cords joining two bodies."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Mapping, Optional

from .body import Body
from .geometry import Vec2, dot
from .lines import draw_line
from .raster import Color


class ConnectionType(IntEnum):
    ROPE = 0
    LINK = 1
    SPRING = 3
    CORD = 4


_TYPE_NAMES = {
    "rope": ConnectionType.ROPE,
    "link": ConnectionType.LINK,
    "spring": ConnectionType.SPRING,
    "cord": ConnectionType.CORD,
}


@dataclass(eq=False)
class Connection:
    """A connection between anchor points on two bodies."""

    type: ConnectionType = ConnectionType.ROPE
    body0: Optional[Body] = None
    body1: Optional[Body] = None
    p0_relative: Vec2 = field(default_factory=Vec2)
    p1_relative: Vec2 = field(default_factory=Vec2)
    p0: Vec2 = field(default_factory=Vec2)
    p1: Vec2 = field(default_factory=Vec2)
    length: float = 0.0
    hooke: float = 0.0
    tight: bool = False
    deleted: bool = False
    cmd: str = ""

    color_rope: Color = Color.WHITE
    color_rope_tight: Color = Color.RED
    color_link: Color = Color.BLUE
    color_spring_compress: Color = Color.GREEN
    color_spring_stretch: Color = Color.YELLOW
    color_cord: Color = Color.CYAN
    color_cord_tight: Color = Color.MAGENTA

    def apply_config(self, cfg: Mapping) -> None:
        """Read "len", "hooke" and "type" (a name or a number) from cfg."""
        if "len" in cfg:
            self.length = float(cfg["len"])
        if "hooke" in cfg:
            self.hooke = float(cfg["hooke"])
        if "type" in cfg:
            kind = cfg["type"]
            if isinstance(kind, str):
                if kind in _TYPE_NAMES:
                    self.type = _TYPE_NAMES[kind]
            else:
                self.type = ConnectionType(int(kind))

    def attach(self) -> None:
        """Register this connection with the bodies it joins."""
        self.body0.connections.append(self)
        if self.body0 is not self.body1:
            self.body1.connections.append(self)

    def update_position(self) -> None:
        self.p0 = self.body0.o + self.body0.transform * self.p0_relative
        self.p1 = self.body1.o + self.body1.transform * self.p1_relative

    def _arms(self):
        b0, b1 = self.body0, self.body1
        r0 = (self.p0 - b0.o).perp()
        r1 = (self.p1 - b1.o).perp()
        return r0, r1

    def _apply(self, impulse: Vec2, r0: Vec2, r1: Vec2) -> None:
        b0, b1 = self.body0, self.body1
        b0.velocity = b0.velocity + impulse * b0.inv_mass
        b1.velocity = b1.velocity - impulse * b1.inv_mass
        b0.angular_velocity += dot(impulse, r0) * b0.inv_inertia
        b1.angular_velocity -= dot(impulse, r1) * b1.inv_inertia

    def solve_rigid(self, equal_response: bool = False) -> None:
        """Hold the anchors at the rest length (a rope only when stretched)."""
        self.update_position()
        b0, b1 = self.body0, self.body1
        if b0 is b1 or (b0.inv_mass == 0 and b1.inv_mass == 0):
            return
        r0, r1 = self._arms()
        v0 = b0.velocity + r0 * b0.angular_velocity
        v1 = b1.velocity + r1 * b1.angular_velocity

        d = self.p1 - self.p0
        current = d.length()
        d = d.normalized()
        self.tight = current > self.length
        if not self.tight and self.type == ConnectionType.ROPE:
            return

        t0 = dot(r0, d)
        t1 = dot(r1, d)
        k0 = b0.inv_mass + t0 * t0 * b0.inv_inertia
        k1 = b1.inv_mass + t1 * t1 * b1.inv_inertia
        closing = dot(v0 - v1, d)
        if self.type == ConnectionType.ROPE:
            closing = min(0.0, closing)
        self._apply(d * (-closing / (k0 + k1)), r0, r1)

        stretch = current - self.length
        if equal_response:
            if b0.inv_mass == 0:
                b1.o = b1.o + d * stretch
            elif b1.inv_mass == 0:
                b0.o = b0.o - d * stretch
            else:
                b0.o = b0.o + d * (stretch / 2)
                b1.o = b1.o - d * (stretch / 2)
            return
        total = b0.inv_mass + b1.inv_mass
        b0.o = b0.o + d * (stretch * b0.inv_mass / total)
        b1.o = b1.o - d * (stretch * b1.inv_mass / total)

    def solve_elastic(self, dt: float) -> None:
        """Apply a Hooke's-law impulse over dt (a cord only when stretched)."""
        self.update_position()
        b0, b1 = self.body0, self.body1
        if b0 is b1 or (b0.inv_mass == 0 and b1.inv_mass == 0):
            return
        r0, r1 = self._arms()

        d = self.p1 - self.p0
        current = d.length()
        d = d.normalized()
        if d.is_zero():
            d = Vec2(1, 0)
        self.tight = current > self.length
        if not self.tight and self.type == ConnectionType.CORD:
            return
        self._apply(d * ((current - self.length) * self.hooke * dt), r0, r1)

    def simulate(self, dt: float, equal_response: bool = False) -> None:
        if self.type in (ConnectionType.ROPE, ConnectionType.LINK):
            self.solve_rigid(equal_response)
        elif self.type in (ConnectionType.CORD, ConnectionType.SPRING):
            self.solve_elastic(dt)

    def color(self) -> Color:
        if self.type == ConnectionType.ROPE:
            return self.color_rope_tight if self.tight else self.color_rope
        if self.type == ConnectionType.LINK:
            return self.color_link
        if self.type == ConnectionType.CORD:
            return self.color_cord_tight if self.tight else self.color_cord
        return self.color_spring_stretch if self.tight else self.color_spring_compress

    def render(self, canvas, viewport) -> None:
        draw_line(canvas, (self.p0.x, self.p0.y), (self.p1.x, self.p1.y), 2,
                  viewport, self.color())


def other_body(body: Body, connection: Connection) -> Optional[Body]:
    """The body at the other end, or None for a self-loop or an unrelated body."""
    at0 = connection.body0 is body
    at1 = connection.body1 is body
    if at0 == at1:
        return None
    return connection.body1 if at0 else connection.body0