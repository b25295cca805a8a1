"""Per-frame input state, frame timing and hover/keyboard ownership."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .geometry import Vec2

WHEEL_DELTA = 120


@dataclass
class InputState:
    """Mouse and keyboard state, fed by window events and reset each frame."""

    wheel: float = 0.0
    chars: str = ""
    mouse: Vec2 = field(default_factory=Vec2)
    mouse_prev: Vec2 = field(default_factory=Vec2)
    buttons: list = field(default_factory=lambda: [False] * 3)
    buttons_prev: list = field(default_factory=lambda: [False] * 3)
    key_messages: list = field(default_factory=lambda: [0] * 256)
    keys: list = field(default_factory=lambda: [False] * 256)
    keys_prev: list = field(default_factory=lambda: [False] * 256)
    caption_clicked: bool = False
    mouse_owned: bool = False
    mouse_tracked: bool = False

    def mouse_clicked(self, button: int) -> bool:
        return self.buttons[button] and not self.buttons_prev[button]

    def key_pressed(self, key: int) -> bool:
        return self.keys[key] and not self.keys_prev[key]

    def on_key_down(self, key: int) -> None:
        self.key_messages[key] += 1
        self.keys[key] = True

    def on_key_up(self, key: int) -> None:
        self.keys[key] = False

    def on_char(self, ch: str) -> None:
        self.chars += ch

    def on_wheel(self, delta: int) -> None:
        self.wheel = delta / WHEEL_DELTA

    def on_mouse_button(self, button: int, down: bool) -> None:
        self.buttons[button] = down
        self.mouse_owned = True
        if down:
            self.mouse_tracked = True

    def on_mouse_leave(self) -> None:
        self.mouse_owned = False
        self.mouse_tracked = False

    def on_focus_lost(self) -> None:
        self.keys = [False] * 256

    def on_caption_clicked(self) -> None:
        self.caption_clicked = True
        self.keys = [False] * 256

    def sync_mouse(self, position: Vec2, held) -> None:
        """Record the cursor; release buttons not held while the mouse is away."""
        self.mouse_prev = self.mouse
        self.mouse = position
        if not self.mouse_owned:
            for i, h in enumerate(held):
                if not h:
                    self.buttons[i] = False

    def end_frame(self) -> None:
        self.wheel = 0.0
        self.chars = ""
        self.buttons_prev = list(self.buttons)
        self.keys_prev = list(self.keys)
        self.key_messages = [0] * 256
        self.caption_clicked = False


@dataclass
class FrameClock:
    """Measures frame durations and a rolling frame rate."""

    frame_count_max: int = 10
    frame_count: int = 0
    ns_count: int = 0
    fps: float = 0.0
    frame_time: float = 0.0
    real_dt: int = 0
    real_duration: int = 0
    last_ns: int = 0

    def start(self, now_ns: int) -> None:
        self.last_ns = now_ns

    def tick(self, now_ns: int) -> None:
        self.real_dt = now_ns - self.last_ns
        self.real_duration += self.real_dt
        self.last_ns = now_ns
        self.frame_count += 1
        self.ns_count += self.real_dt
        if self.frame_count == self.frame_count_max:
            self.frame_time = self.ns_count / self.frame_count * 1e-9
            self.fps = 1 / self.frame_time if self.frame_time else 0.0
            self.frame_count = 0
            self.ns_count = 0

    def dt(self) -> float:
        return self.real_dt / 1e9

    def elapsed(self) -> float:
        return self.real_duration / 1e9


@dataclass
class Owners:
    """Which object holds the keyboard, hover and wheel this frame."""

    keyboard_owner: object = None
    hovered: object = None
    wheeled: object = None
    hovered_depth: float = -math.inf
    wheeled_depth: float = -math.inf

    def reset(self) -> None:
        self.hovered_depth = self.wheeled_depth = -math.inf
        self.keyboard_owner = self.hovered = self.wheeled = None

    def remove(self, owner) -> None:
        if self.keyboard_owner is owner:
            self.keyboard_owner = None
        if self.hovered is owner:
            self.hovered = None
        if self.wheeled is owner:
            self.wheeled = None

    def release_keyboard(self, owner) -> None:
        if self.keyboard_owner is owner:
            self.keyboard_owner = None