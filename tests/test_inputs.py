import math

from rigid2d.geometry import Vec2
from rigid2d.inputs import FrameClock, InputState, Owners


def test_click_only_on_first_frame():
    s = InputState()
    s.on_mouse_button(0, True)
    assert s.mouse_clicked(0)
    assert s.mouse_owned and s.mouse_tracked
    s.end_frame()
    assert not s.mouse_clicked(0)
    assert s.buttons[0]


def test_keys_and_messages():
    s = InputState()
    s.on_key_down(65)
    s.on_key_down(65)
    assert s.key_messages[65] == 2
    assert s.key_pressed(65)
    s.end_frame()
    assert s.key_messages[65] == 0
    assert not s.key_pressed(65)
    s.on_key_up(65)
    assert not s.keys[65]


def test_focus_and_caption_clear_keys():
    s = InputState()
    s.on_key_down(10)
    s.on_focus_lost()
    assert not any(s.keys)
    s.on_key_down(10)
    s.on_caption_clicked()
    assert s.caption_clicked and not any(s.keys)


def test_wheel_and_chars_reset():
    s = InputState()
    s.on_wheel(-240)
    s.on_char("a")
    s.on_char("b")
    assert s.wheel == -2
    assert s.chars == "ab"
    s.end_frame()
    assert s.wheel == 0 and s.chars == ""


def test_sync_mouse_releases_when_not_owned():
    s = InputState()
    s.on_mouse_button(2, True)
    s.sync_mouse(Vec2(1, 2), [False, False, False])
    assert s.buttons[2]
    s.on_mouse_leave()
    s.sync_mouse(Vec2(3, 4), [False, False, False])
    assert not s.buttons[2]
    assert s.mouse_prev == Vec2(1, 2) and s.mouse == Vec2(3, 4)


def test_frame_clock():
    c = FrameClock()
    c.start(0)
    for k in range(1, 11):
        c.tick(k * 10_000_000)
    assert math.isclose(c.dt(), 0.01)
    assert math.isclose(c.elapsed(), 0.1)
    assert math.isclose(c.fps, 100)
    assert c.frame_count == 0


def test_owners():
    o = Owners()
    a, b = object(), object()
    o.keyboard_owner = a
    o.hovered = a
    o.wheeled = b
    o.release_keyboard(b)
    assert o.keyboard_owner is a
    o.remove(a)
    assert o.keyboard_owner is None and o.hovered is None and o.wheeled is b
    o.hovered_depth = 5
    o.reset()
    assert o.wheeled is None and o.hovered_depth == -math.inf