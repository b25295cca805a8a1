import math
import random

import pytest

from rigid2d.body import Body, Shape, electrostatic
from rigid2d.geometry import Rect, Vec2
from rigid2d.raster import Canvas, Color


def rect_vertices(w, h):
    return [Vec2(w / 2, h / 2), Vec2(-w / 2, h / 2), Vec2(-w / 2, -h / 2), Vec2(w / 2, -h / 2)]


def make_box(w=40.0, h=20.0, o=Vec2(100, 100), **cfg):
    body = Body(shapes=[Shape.polygon(rect_vertices(w, h))], o=o)
    body.apply_config(cfg)
    body.init_mass()
    return body


def make_ball(r=10.0, o=Vec2(0, 0), **cfg):
    body = Body(shapes=[Shape.circle(r)], o=o)
    body.apply_config(cfg)
    body.init_mass()
    return body


def test_box_area_and_mass():
    w, h = 40.0, 20.0
    body = make_box(w, h, density=2)
    assert body.area == pytest.approx(w * h)
    assert body.inv_mass == pytest.approx(1 / (2 * w * h))
    assert body.inv_inertia > 0


def test_circle_area():
    r = 7.0
    body = make_ball(r)
    assert body.area == pytest.approx(math.pi * r * r)


def test_fixed_body_has_no_inverse_mass():
    body = make_box(fixed=1)
    assert body.inv_mass == 0
    assert body.inv_inertia == 0


def test_recenter_moves_origin_to_centroid():
    shift = Vec2(10, 5)
    verts = [v + shift for v in rect_vertices(20, 10)]
    body = Body(shapes=[Shape.polygon(verts)])
    body.init_mass(recenter=True)
    assert body.o.x == pytest.approx(shift.x)
    assert body.o.y == pytest.approx(shift.y)
    for world, local in zip(body.shapes[0].vertices, verts):
        assert world.x == pytest.approx(local.x)
        assert world.y == pytest.approx(local.y)


def test_contains_and_bounding_box():
    body = make_box(40, 20, o=Vec2(100, 100))
    assert body.contains(Vec2(100, 100))
    assert body.contains(Vec2(115, 105))
    assert not body.contains(Vec2(125, 100))
    assert body.box.x0 == pytest.approx(80)
    assert body.box.x1 == pytest.approx(120)
    assert body.box.y0 == pytest.approx(90)
    assert body.box.y1 == pytest.approx(110)


def test_circle_shape_contains():
    body = make_ball(10, o=Vec2(50, 50))
    assert body.contains(Vec2(55, 55))
    assert not body.contains(Vec2(60, 60))


def test_point_body_depth_and_contains():
    point = Body.point_body(Vec2(3, 4))
    shape_body = make_ball()
    assert point.depth() > shape_body.depth()
    assert point.contains(Vec2(3, 4))
    assert not point.contains(Vec2(3, 40))
    assert point.random_point_inside() == Vec2()


def test_random_points_lie_inside():
    rng = random.Random(7)
    body = Body(shapes=[Shape.polygon(rect_vertices(30, 10)), Shape.circle(6, Vec2(30, 0))],
                o=Vec2(200, 200))
    body.init_mass()
    for _ in range(100):
        local = body.random_point_inside(rng)
        assert body.contains(body.o + body.transform * local)


def test_update_placement_rotates_vertices():
    body = make_box(40, 20, o=Vec2(0, 0))
    body.radian = math.pi / 2
    body.update_placement()
    first = body.shapes[0].vertices[0]
    assert first.x == pytest.approx(-10)
    assert first.y == pytest.approx(20)


def test_apply_config_reads_values():
    body = Body()
    body.apply_config({"o": (1, 2), "v": [3, 4], "elasticity": 0.2, "fixed": 1,
                       "col": (300, 10, -5)})
    assert body.o == Vec2(1, 2)
    assert body.velocity == Vec2(3, 4)
    assert body.elasticity == 0.2
    assert body.fixed is True
    assert body.inner_color == Color(255, 10, 0)


def test_step_applies_gravity():
    body = make_ball(o=Vec2(0, 0), dampCoeff=0, dampCoeffAngular=0)
    gravity = Vec2(0, 100)
    dt = 0.01
    body.step(dt, gravity, 0.0)
    assert body.velocity.y == pytest.approx(gravity.y * dt)
    assert body.o.y == pytest.approx(gravity.y * dt * dt)
    assert body.shapes[0].center == body.o


def test_step_fixed_body_stays_still():
    body = make_box(fixed=1, v=(5, 5))
    start = body.o
    body.step(0.1, Vec2(0, 100), 0.0)
    assert body.velocity == Vec2()
    assert body.o == start


def test_step_follows_preset_position():
    def program(t):
        return Vec2(t, 2 * t)

    body = make_box(fixed=1, preset_o=1, o_prog=program)
    t, dt = 1.0, 0.1
    body.step(dt, Vec2(), t)
    assert body.o == program(t + dt)
    expected = (program(t + dt) - program(t)) / dt
    assert body.velocity.x == pytest.approx(expected.x)
    assert body.velocity.y == pytest.approx(expected.y)


def test_step_follows_preset_angle():
    body = make_box(fixed=1, preset_ang=1, ang_prog=lambda t: 3 * t)
    body.step(0.5, Vec2(), 1.0)
    assert body.radian == pytest.approx(3 * 1.5)
    assert body.angular_velocity == pytest.approx(3)


def test_wrap_moves_body_across():
    rect = Rect(0, 0, 100, 50)
    body = make_ball(o=Vec2(-5, 60))
    body.wrap(rect)
    assert body.o.x == pytest.approx(-5 + rect.w)
    assert body.o.y == pytest.approx(60 - rect.h)


def test_wrap_ignores_fixed_body():
    body = make_ball(o=Vec2(-5, 60), fixed=1)
    body.wrap(Rect(0, 0, 100, 50))
    assert body.o == Vec2(-5, 60)


def test_grid_cell():
    small = make_ball(5, o=Vec2(120, 70))
    assert small.grid_cell(Vec2(0, 0), 50, 10, 10) == (2, 1)
    big = make_box(400, 20, o=Vec2(250, 250))
    assert big.grid_cell(Vec2(0, 0), 50, 10, 10) is None
    with pytest.raises(ValueError):
        Body.point_body(Vec2()).grid_cell(Vec2(), 50, 10, 10)


def test_drag_whole_brings_anchor_to_mouse():
    body = make_ball(o=Vec2(0, 0))
    body.drag_anchor = Vec2(2, 0)
    mouse, prev, real_dt = Vec2(5, 5), Vec2(4, 5), 0.5
    body.drag_whole(mouse, prev, real_dt)
    assert body.o + body.transform * body.drag_anchor == mouse
    assert body.velocity == (mouse - prev) / real_dt


def test_drag_point_moves_anchor_to_mouse():
    body = make_box(o=Vec2(0, 0))
    body.drag_anchor = Vec2(5, 3)
    mouse = Vec2(30, -10)
    body.drag_point(mouse, Vec2(29, -10), 0.1)
    anchor = body.o + body.transform * body.drag_anchor
    assert anchor.x == pytest.approx(mouse.x)
    assert anchor.y == pytest.approx(mouse.y)


def test_drag_force_pulls_toward_mouse():
    body = make_ball(o=Vec2(0, 0))
    body.drag_force(Vec2(10, 0), 0.01)
    assert body.velocity.x > 0
    assert body.velocity.y == 0
    assert body.angular_velocity == 0


def test_electrostatic_like_charges_repel():
    b0 = make_ball(5, o=Vec2(0, 0), chargeDensity=1)
    b1 = make_ball(5, o=Vec2(10, 0), chargeDensity=1)
    electrostatic(b0, b1, 0.01, 1e5)
    assert b0.velocity.x < 0
    assert b1.velocity.x > 0
    assert b0.velocity.x == pytest.approx(-b1.velocity.x)


def test_electrostatic_opposite_charges_attract():
    b0 = make_ball(5, o=Vec2(0, 0), chargeDensity=1)
    b1 = make_ball(5, o=Vec2(10, 0), chargeDensity=-1)
    electrostatic(b0, b1, 0.01, 1e5)
    assert b0.velocity.x > 0
    assert b1.velocity.x < 0


def test_render_fills_circle():
    canvas = Canvas(100, 100)
    body = make_ball(10, o=Vec2(50, 50))
    fill = Color(10, 20, 30)
    body.render(canvas, canvas.rect(), fill)
    assert canvas.colors[canvas.index(45, 50)] == fill
    assert canvas.colors[canvas.index(5, 5)] == Color.BLACK


def test_render_polygon_draws_border():
    canvas = Canvas(100, 100)
    body = make_box(40, 20, o=Vec2(50, 50))
    body.render(canvas, canvas.rect(), Color(10, 20, 30))
    corner = body.shapes[0].vertices[1]
    assert canvas.colors[canvas.index(int(corner.x), int(corner.y))] == body.border_color