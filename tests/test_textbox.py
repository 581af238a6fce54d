from inkpanel.display import Display, TextDatum, UpdateMode
from inkpanel.textbox import Textbox


def make_box(x=0, y=0, ident=1, display=None):
    display = display if display is not None else Display()
    box = Textbox(x, y, 200, 60, display=display)
    box.id = ident
    return box


def test_add_text_appends():
    box = make_box()
    box.add_text("abc")
    assert box.text == "abc"


def test_backspace_deletes_last_character():
    box = make_box()
    box.add_text("abc")
    box.add_text("\b")
    assert box.text == "ab"


def test_backspace_inside_added_text():
    box = make_box()
    box.add_text("ab\bc")
    assert box.text == "ac"


def test_backspace_on_empty_text():
    box = make_box()
    box.add_text("\b")
    assert box.text == ""


def test_remove_by_index_counts_characters():
    box = make_box()
    box.add_text("h\u00e9llo")
    box.remove(1)
    assert box.text == "hllo"


def test_remove_out_of_range_changes_nothing():
    box = make_box()
    box.add_text("abc")
    box.remove(7)
    assert box.text == "abc"


def test_add_empty_text_does_not_redraw():
    box = make_box()
    before = list(box.display.updates)
    box.add_text("")
    assert box.display.updates == before


def test_set_text_refreshes_with_a2():
    box = make_box()
    box.set_text("hi")
    assert box.text == "hi"
    assert box.display.updates[-1] == (0, 0, 200, 60, UpdateMode.A2)


def test_set_same_text_does_not_redraw():
    box = make_box()
    box.set_text("hi")
    count = len(box.display.updates)
    box.set_text("hi")
    assert len(box.display.updates) == count


def test_text_drawn_at_margin():
    box = make_box()
    box.set_text("hi")
    assert box.canvas.texts == [("hi", 8, 8, 26, 15, TextDatum.TL)]


def test_set_text_margin_accumulates_right_and_bottom():
    box = make_box()
    box.set_text_margin(4, 6, 10, 12)
    assert (box.margin_left, box.margin_top) == (4, 6)
    assert (box.margin_right, box.margin_bottom) == (14, 18)
    assert box.text_area == (4, 6, box.w - 14, box.h - 18)


def test_set_text_size_redraws_gc16():
    box = make_box()
    box.set_text_size(32)
    assert box.text_size == 32
    assert box.canvas.text_size == 32
    assert box.display.updates[-1][4] == UpdateMode.GC16


def test_pressed_border_is_thicker():
    box = make_box()
    box.draw()
    assert box.canvas[2, 30] == 0
    box.set_state(1)
    box.draw()
    assert box.canvas[2, 30] == 15
    assert box.canvas[0, 30] == 15


def test_touch_selects_box():
    box = make_box()
    box.update_state(50, 30)
    assert box.is_selected()
    box.update_state(-1, -1)
    assert box.is_selected()


def test_focus_moves_to_other_box():
    display = Display()
    first = make_box(0, 0, 1, display)
    second = make_box(0, 100, 2, display)
    for point in ((50, 30), (-1, -1), (50, 130), (-1, -1)):
        first.update_state(*point)
        second.update_state(*point)
    assert not first.is_selected()
    assert second.is_selected()


def test_disabled_box_ignores_touch():
    box = make_box()
    box.enabled = False
    box.update_state(50, 30)
    assert not box.is_selected()


def test_hidden_box_does_not_draw():
    box = make_box()
    box.hidden = True
    box.set_text("x")
    assert box.display.updates == []
    assert box.text == "x"