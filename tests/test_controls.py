from rigid2d.controls import ColumnList, Control, Delegate, RowList
from rigid2d.geometry import Rect, Vec2


class Box(Control):
    def __init__(self, w, h, log):
        super().__init__()
        self.w, self.h, self.log = w, h, log

    def width(self):
        return self.w

    def height(self):
        return self.h

    def update(self, app):
        self.log.append(("update", self, self.top_left))

    def discard(self, app):
        self.log.append(("discard", self))

    def pre_update(self, app):
        self.log.append(("pre", self))


def test_base_control_has_zero_size():
    c = Control()
    assert (c.width(), c.height()) == (0, 0)


def test_delegate_size_and_empty():
    log = []
    d = Delegate()
    assert d.width() == 0 and d.height() == 0
    d.set_child(None, Box(7, 9, log))
    assert (d.width(), d.height()) == (7, 9)


def test_delegate_discards_replaced_child():
    log = []
    a, b = Box(1, 1, log), Box(2, 2, log)
    d = Delegate(a)
    d.set_child(None, a)
    assert log == []
    d.set_child(None, b)
    assert log == [("discard", a)]
    assert d.child is b


def test_delegate_passes_position():
    log = []
    child = Box(1, 1, log)
    d = Delegate(child)
    d.top_left = Vec2(3, 4)
    d.viewport = Rect(0, 0, 50, 50)
    d.update(None)
    assert child.top_left == Vec2(3, 4)
    assert child.viewport == Rect(0, 0, 50, 50)


def test_row_layout():
    log = []
    a, b = Box(10, 5, log), Box(20, 8, log)
    row = RowList([a, b])
    row.top_left = Vec2(1, 2)
    row.update(None)
    assert a.top_left == Vec2(1, 2)
    assert b.top_left == Vec2(1 + a.w, 2)
    assert row.width() == a.w + b.w
    assert row.height() == b.h


def test_column_layout():
    log = []
    a, b = Box(10, 5, log), Box(20, 8, log)
    col = ColumnList([a, b])
    col.top_left = Vec2(1, 2)
    col.update(None)
    assert b.top_left == Vec2(1, 2 + a.h)
    assert col.width() == b.w
    assert col.height() == a.h + b.h


def test_empty_lists():
    assert (RowList().width(), RowList().height()) == (0, 0)
    assert (ColumnList().width(), ColumnList().height()) == (0, 0)


def test_lists_forward_discard_and_pre_update():
    log = []
    a, b = Box(1, 1, log), Box(1, 1, log)
    row = RowList([a, b])
    row.pre_update(None)
    row.discard(None)
    assert log == [("pre", a), ("pre", b), ("discard", a), ("discard", b)]