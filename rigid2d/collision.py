"""Contact detection between bodies and impulse-based contact resolution."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from .body import Body, Shape
from .geometry import Vec2, dot, overlap


def _segment_distance_sq(a: Vec2, b: Vec2, p: Vec2) -> float:
    """Squared distance from p to the segment ab."""
    ab = b - a
    len_sq = ab.length_sq()
    if len_sq == 0:
        return (p - a).length_sq()
    t = max(0.0, min(1.0, dot(p - a, ab) / len_sq))
    return (p - (a + ab * t)).length_sq()


@dataclass(eq=False)
class Contact:
    """One contact between two bodies: penetration depth, normal and point."""

    body0: Optional[Body] = None
    body1: Optional[Body] = None
    d: float = math.inf
    diff: float = math.inf
    n: Vec2 = field(default_factory=Vec2)
    c: Vec2 = field(default_factory=Vec2)

    def resolve(self, equal_response: bool = False) -> None:
        """Apply normal and friction impulses, then push the bodies apart."""
        b0, b1, n, d = self.body0, self.body1, self.n, self.d
        elasticity = min(b0.elasticity, b1.elasticity)
        friction_dynamic = min(b0.friction_dynamic, b1.friction_dynamic)
        friction_static = min(b0.friction_static, b1.friction_static)

        r0 = (self.c - b0.o).perp()
        r1 = (self.c - b1.o).perp()
        v0 = b0.velocity + r0 * b0.angular_velocity
        v1 = b1.velocity + r1 * b1.angular_velocity

        rn0 = dot(r0, n)
        rn1 = dot(r1, n)
        inv_i0 = b0.inv_mass + rn0 * rn0 * b0.inv_inertia
        inv_i1 = b1.inv_mass + rn1 * rn1 * b1.inv_inertia
        impulse_normal = (1 + elasticity) * max(0.0, dot(v0 - v1, n)) / (inv_i0 + inv_i1)

        self._apply(n * -impulse_normal, r0, r1)

        v0 = b0.velocity + r0 * b0.angular_velocity
        v1 = b1.velocity + r1 * b1.angular_velocity
        static_limit = friction_static * impulse_normal
        dynamic_impulse = friction_dynamic * impulse_normal

        tangent = Vec2(-n.y, n.x)
        impulse_tangential = dot(v0 - v1, tangent)
        if impulse_tangential < 0:
            impulse_tangential = -impulse_tangential
            tangent = -tangent
        rt0 = dot(r0, tangent)
        rt1 = dot(r1, tangent)
        inv_it0 = b0.inv_mass + rt0 * rt0 * b0.inv_inertia
        inv_it1 = b1.inv_mass + rt1 * rt1 * b1.inv_inertia
        impulse_tangential /= inv_it0 + inv_it1

        if impulse_tangential < static_limit:
            impulse = tangent * -impulse_tangential
        else:
            impulse = tangent * -dynamic_impulse
        self._apply(impulse, r0, r1)

        if equal_response:
            if b0.inv_mass == 0:
                b1.o = b1.o + n * d
            elif b1.inv_mass == 0:
                b0.o = b0.o - n * d
            else:
                b0.o = b0.o - n * (d / 2)
                b1.o = b1.o + n * (d / 2)
            return
        total = b0.inv_mass + b1.inv_mass
        b0.o = b0.o - n * (d * b0.inv_mass / total)
        b1.o = b1.o + n * (d * b1.inv_mass / total)

    def _apply(self, impulse: Vec2, r0: Vec2, r1: Vec2) -> None:
        b0, b1 = self.body0, self.body1
        b0.velocity = b0.velocity + impulse * b0.inv_mass
        b1.velocity = b1.velocity - impulse * b1.inv_mass
        b0.angular_velocity += dot(impulse, r0) * b0.inv_inertia
        b1.angular_velocity -= dot(impulse, r1) * b1.inv_inertia


def collide_bodies(b0: Body, b1: Body, eps_parallel: float) -> list:
    """All contacts between the shapes of two bodies."""
    contacts = []
    if b0.inv_mass == 0 and b1.inv_mass == 0:
        return contacts
    if not overlap(b0.box, b1.box):
        return contacts

    for sh0 in b0.shapes:
        for sh1 in b1.shapes:
            contact = Contact(body0=b0, body1=b1)
            if sh0.is_circle and sh1.is_circle:
                if not collide_circles(sh0, sh1, contact):
                    continue
            else:
                if not collide_shapes(sh0, sh1, contact, False):
                    continue
                if not collide_shapes(sh1, sh0, contact, True):
                    continue

            if not sh0.is_circle and not sh1.is_circle and contact.diff < eps_parallel:
                point, best = contact.c, math.inf
                point, best = closest_contact_vertex(sh0, sh1, point, best)
                point, best = closest_contact_vertex(sh1, sh0, point, best)
                contact.c = point
            contacts.append(contact)
    return contacts


def collide_shapes(sh0: Shape, sh1: Shape, contact: Contact, reverse: bool) -> bool:
    """Test the separating axes of sh0 against sh1, refining contact; False when separated."""
    if sh0.is_circle:
        for v in sh1.vertices:
            n = (v - sh0.center).normalized()
            if n.is_zero():
                n = Vec2(0, 1)
            d, c = support_polygon(n, sh0.center + n * sh0.radius, sh1)
            if d < 0:
                return False
            if d < contact.d:
                contact.diff = contact.d - d
                contact.d = d
                contact.c = c
                contact.n = -n if reverse else n
        return True

    verts = sh0.vertices
    for a, b in zip(verts, verts[1:] + verts[:1]):
        e = b - a
        n = Vec2(e.y, -e.x).normalized()
        if sh1.is_circle:
            d, c = support_circle(n, a, sh1)
        else:
            d, c = support_polygon(n, a, sh1)
        if d < 0:
            return False
        if d < contact.d:
            contact.diff = contact.d - d
            contact.d = d
            contact.c = c
            contact.n = -n if reverse else n
    return True


def closest_contact_vertex(sh0: Shape, sh1: Shape, point: Vec2, best: float):
    """The vertex of sh1 nearest to an edge of sh0, if nearer than best; returns (point, best)."""
    verts = sh0.vertices
    for a, b in zip(verts, verts[1:] + verts[:1]):
        for v in sh1.vertices:
            dist_sq = _segment_distance_sq(a, b, v)
            if dist_sq < best:
                best = dist_sq
                point = v
    return point, best


def collide_circles(sh0: Shape, sh1: Shape, contact: Contact) -> bool:
    """Contact between two circles; False when they do not touch."""
    o10 = sh1.center - sh0.center
    d = sh0.radius + sh1.radius - o10.length()
    if d < 0:
        return False
    contact.d = d
    contact.n = Vec2(0, 1) if o10.is_zero() else o10.normalized()
    if sh0.radius < sh1.radius:
        contact.c = sh0.center + contact.n * sh0.radius
    else:
        contact.c = sh1.center - contact.n * sh1.radius
    return True


def support_circle(n: Vec2, o: Vec2, shape: Shape):
    """Penetration of a circle behind the plane through o with normal n, and its deepest point."""
    depth = dot(shape.center - o, n) - shape.radius
    return -depth, shape.center - n * shape.radius


def support_polygon(n: Vec2, o: Vec2, shape: Shape):
    """Penetration of a polygon behind the plane through o with normal n, and its deepest vertex."""
    lowest = math.inf
    point = Vec2()
    for v in shape.vertices:
        value = dot(v - o, n)
        if value < lowest:
            lowest = value
            point = v
    return -lowest, point