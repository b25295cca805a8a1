"""Base user-interface control, a delegating holder and row/column layouts."""

from __future__ import annotations

from typing import Iterable, Optional

from .geometry import Rect, Vec2


class Control:
    """A UI element with a position and a clipping viewport."""

    def __init__(self) -> None:
        self.top_left = Vec2()
        self.viewport = Rect()

    def update(self, app) -> None:
        """Handle input and draw for one frame."""

    def discard(self, app) -> None:
        """Release what the control holds; called before it is dropped."""

    def pre_update(self, app) -> None:
        """Claim hover ownership before the frame's updates."""

    def width(self) -> int:
        return 0

    def height(self) -> int:
        return 0


class Delegate(Control):
    """Shows one child at its own place and discards a child it replaces."""

    def __init__(self, child: Optional[Control] = None) -> None:
        super().__init__()
        self.child = child

    def set_child(self, app, child: Optional[Control]) -> None:
        if self.child is not None and self.child is not child:
            self.child.discard(app)
        self.child = child

    def width(self) -> int:
        return self.child.width() if self.child else 0

    def height(self) -> int:
        return self.child.height() if self.child else 0

    def update(self, app) -> None:
        if self.child:
            self.child.top_left = self.top_left
            self.child.viewport = self.viewport
            self.child.update(app)

    def discard(self, app) -> None:
        if self.child:
            self.child.discard(app)

    def pre_update(self, app) -> None:
        if self.child:
            self.child.pre_update(app)


class _ControlList(Control):
    def __init__(self, children: Iterable[Control] = ()) -> None:
        super().__init__()
        self.children = list(children)

    def discard(self, app) -> None:
        for child in self.children:
            child.discard(app)

    def pre_update(self, app) -> None:
        for child in self.children:
            child.pre_update(app)


class RowList(_ControlList):
    """Lays its children out left to right."""

    def width(self) -> int:
        return sum(child.width() for child in self.children)

    def height(self) -> int:
        return max((child.height() for child in self.children), default=0, key=lambda h: h) \
            if self.children else 0

    def update(self, app) -> None:
        x = int(self.top_left.x)
        y = int(self.top_left.y)
        for child in self.children:
            child.viewport = self.viewport
            child.top_left = Vec2(x, y)
            # A child's width is known only after its update.
            child.update(app)
            x += child.width()


class ColumnList(_ControlList):
    """Lays its children out top to bottom."""

    def width(self) -> int:
        return max([0, *(child.width() for child in self.children)])

    def height(self) -> int:
        return sum(child.height() for child in self.children)

    def update(self, app) -> None:
        x = int(self.top_left.x)
        y = int(self.top_left.y)
        for child in self.children:
            child.viewport = self.viewport
            child.top_left = Vec2(x, y)
            child.update(app)
            y += child.height()