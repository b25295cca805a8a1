import math
import random
from dataclasses import dataclass, field

import pytest

from rigid2d.builders import (
    ball,
    boundary,
    box,
    create_body,
    create_connection,
    cross,
    framed_box,
    gear,
    necklace,
    parallelogram,
    regular_polygon,
    strand,
    trapezoid,
)
from rigid2d.connection import ConnectionType
from rigid2d.geometry import Rect, Vec2


@dataclass
class FakeWorld:
    bodies: list = field(default_factory=list)
    connections: list = field(default_factory=list)
    scene_changed: bool = False
    background: Rect = field(default_factory=lambda: Rect(170, 0, 1630, 860))
    rng: random.Random = field(default_factory=lambda: random.Random(7))


def test_ball_description():
    assert ball(5) == [[1, 5]]


def test_box_area_and_scene_flag():
    world = FakeWorld()
    body = create_body(world, box(4, 2), {})
    assert body.area == pytest.approx(4 * 2)
    assert world.bodies == [body]
    assert world.scene_changed is True


def test_regular_polygon_has_at_least_three_corners_on_circle():
    shapes = regular_polygon(2, 10)
    assert len(shapes) == 1
    flag, corners = shapes[0]
    assert flag == 0
    assert len(corners) == 3
    for x, y in corners:
        assert math.hypot(x, y) == pytest.approx(10)


def test_parallelogram_area():
    body = create_body(FakeWorld(), parallelogram(6, 3, 1), {})
    assert body.area == pytest.approx(6 * 3)


def test_trapezoid_area():
    body = create_body(FakeWorld(), trapezoid(2, 6, 4), {})
    assert body.area == pytest.approx((2 + 6) / 2 * 4)


def test_cross_two_bars():
    shapes = cross(10, 2)
    assert len(shapes) == 2
    body = create_body(FakeWorld(), shapes, {})
    assert [sh.area for sh in body.shapes] == pytest.approx([10 * 2, 10 * 2])


def test_framed_box_extents():
    body = create_body(FakeWorld(), framed_box(20, 10, 2), {"o": (0, 0)})
    assert len(body.shapes) == 4
    assert all(sh.area > 0 for sh in body.shapes)
    assert body.box.x1 == pytest.approx(20 / 2 + 2 / 2)
    assert body.box.y0 == pytest.approx(-(10 / 2 + 2 / 2))


def test_create_body_point():
    body = create_body(FakeWorld(), ball(3), {"point": 1})
    assert body.point is True
    assert body.shapes == []


def test_create_body_skips_incomplete_entries():
    body = create_body(FakeWorld(), [[], [1], [0], [1, 2]], {})
    assert len(body.shapes) == 1
    assert body.shapes[0].is_circle


def test_create_body_recenters_on_offset_circle():
    body = create_body(FakeWorld(), [[1, 2, (3, 0)]], {"repos_o": 1})
    assert body.o.x == pytest.approx(3)
    assert body.shapes[0].center.x == pytest.approx(3)


def test_create_body_config_fixed():
    body = create_body(FakeWorld(), ball(2), {"fixed": 1, "o": (5, 6)})
    assert body.inv_mass == 0
    assert body.o == Vec2(5, 6)


def test_create_connection_absolute_anchors():
    world = FakeWorld()
    create_body(world, ball(5), {"o": (10, 0)})
    create_body(world, ball(5), {"o": (30, 0)})
    conn = create_connection(world, {"idx0": 0, "idx1": 1, "absolute": 1,
                                     "p0": (12, 0), "p1": (28, 0)})
    assert conn.p0.x == pytest.approx(12)
    assert conn.p1.x == pytest.approx(28)
    assert conn.length == pytest.approx(16)
    assert conn in world.bodies[0].connections
    assert world.connections == [conn]


def test_create_connection_type_from_config():
    world = FakeWorld()
    create_body(world, ball(5), {})
    create_body(world, ball(5), {"o": (20, 0)})
    conn = create_connection(world, {"idx0": 0, "idx1": 1, "type": "spring"})
    assert conn.type == ConnectionType.SPRING


def test_create_connection_without_bodies():
    with pytest.raises(ValueError):
        create_connection(FakeWorld(), {})


def test_boundary_walls():
    world = FakeWorld()
    walls = boundary(world, 20, {})
    assert len(walls) == 4
    assert all(w.inv_mass == 0 for w in walls)
    bg = world.background
    assert walls[0].o.x == pytest.approx(bg.left)
    assert walls[1].o.x == pytest.approx(bg.right)
    assert walls[2].o.y == pytest.approx(bg.top)
    assert walls[3].o.y == pytest.approx(bg.bottom)
    assert len({w.inner_color for w in walls}) == 1


def test_gear_links_wheel_to_point():
    world = FakeWorld()
    wheel, root, conn = gear(world, 10, 8, 3, {"o": (50, 50)})
    assert len(wheel.shapes) == 8 + 1
    assert root.point and root.o == wheel.o
    assert conn.type == ConnectionType.LINK
    assert conn.body0 is root and conn.body1 is wheel
    assert world.bodies == [wheel, root]


def test_strand_chain():
    world = FakeWorld()
    beads, conns = strand(world, (0, 0), (100, 0), 4, 0.5, {}, {})
    assert len(beads) == 4 + 1
    assert len(conns) == 4
    assert beads[0].o == Vec2(0, 0)
    assert beads[-1].o.x == pytest.approx(100)
    for c, (a, b) in zip(conns, zip(beads, beads[1:])):
        assert c.body0 is a and c.body1 is b
        assert c.length == pytest.approx(conns[0].length)


def test_necklace_ring_closes():
    world = FakeWorld()
    beads, conns = necklace(world, (0, 0), 50, 6, 0.5, {}, {})
    assert len(beads) == 6
    assert len(conns) == 6
    assert conns[-1].body1 is beads[0]
    assert conns[-1].body0 is beads[-1]
    for b in beads:
        assert b.o.length() == pytest.approx(50)