from __future__ import annotations

import pytest

from inkpanel.button import Button, ButtonEvent
from inkpanel.display import Canvas, Display, UpdateMode
from inkpanel.gui import SHUTDOWN_PROMPT, Frame, Gui, TouchEvent
from inkpanel.widget import Widget


class Clock:
    def __init__(self, now: int = 0) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now


class Recorder(Widget):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.points: list[tuple[int, int]] = []
        self.draws: list[UpdateMode] = []

    def draw(self, mode=UpdateMode.DU4) -> None:
        self.draws.append(mode)

    def draw_to(self, canvas: Canvas) -> None:
        pass

    def update_state(self, x: int, y: int) -> None:
        self.points.append((x, y))


class StubFrame(Frame):
    def __init__(self, gui: Gui, runs: int = 1, has_title: bool = True) -> None:
        super().__init__(gui, has_title)
        self.runs_left = runs
        self.init_args: list | None = None
        self.exited = 0

    def init(self, args):
        self.init_args = list(args)
        return 3

    def run(self) -> int:
        super().run()
        self.runs_left -= 1
        return 0 if self.runs_left <= 0 else 1

    def exit(self) -> None:
        self.exited += 1


def make_gui(**kwargs) -> tuple[Gui, Clock]:
    clock = Clock()
    return Gui(Display(), clock=clock, **kwargs), clock


def test_add_object_numbers_from_one():
    gui, _ = make_gui()
    widgets = [Recorder(display=gui.display) for _ in range(3)]
    for widget in widgets:
        gui.add_object(widget)
    assert [w.id for w in widgets] == [1, 2, 3]
    assert gui.objects == widgets


def test_process_and_clear():
    gui, _ = make_gui()
    widget = Recorder(display=gui.display)
    gui.add_object(widget)
    gui.process(10, 20)
    gui.process()
    assert widget.points == [(10, 20), (-1, -1)]
    gui.clear()
    gui.process(5, 5)
    assert widget.points == [(10, 20), (-1, -1)]


def test_draw_passes_mode():
    gui, _ = make_gui()
    widget = Recorder(display=gui.display)
    gui.add_object(widget)
    gui.draw()
    gui.draw(UpdateMode.A2)
    assert widget.draws == [UpdateMode.GC16, UpdateMode.A2]


def test_handle_touch_ignores_duplicates():
    gui, clock = make_gui()
    widget = Recorder(display=gui.display)
    gui.add_object(widget)
    clock.now = 50
    assert gui.handle_touch(TouchEvent(30, 40)) is True
    assert gui.handle_touch(TouchEvent(30, 40)) is False
    assert gui.handle_touch(TouchEvent(30, 40, finger_up=True)) is True
    assert widget.points == [(30, 40), (-1, -1)]
    assert gui.last_active_ms == 50


def test_stack_operations():
    gui, _ = make_gui()
    first = StubFrame(gui)
    second = StubFrame(gui)
    gui.push_frame(first)
    gui.push_frame(second)
    assert gui.frame_stack == [first, second]
    gui.pop_frame()
    assert gui.frame_stack == [first]
    assert gui.pending_delete is None
    gui.push_frame(second)
    gui.pop_frame(True)
    assert gui.pending_delete is second
    gui.overwrite_frame(second)
    assert gui.frame_stack == [second]


def test_pop_empty_stack_raises():
    gui, _ = make_gui()
    with pytest.raises(IndexError):
        gui.pop_frame()


def test_frame_registry():
    gui, _ = make_gui()
    first = StubFrame(gui)
    other = StubFrame(gui)
    gui.add_frame("main", first)
    gui.add_frame("main", other)
    assert gui.get_frame("main") is first
    assert gui.get_frame("missing") is None


def test_frame_args_set_and_append():
    gui, _ = make_gui()
    gui.add_frame("main", StubFrame(gui))
    gui.add_frame_arg("main", 0, "a")
    gui.add_frame_arg("main", 5, "b")
    gui.add_frame_arg("main", 0, "c")
    gui.add_frame_arg("missing", 0, "x")
    assert gui.frame_args("main") == ["c", "b"]
    assert gui.frame_args("missing") == []


def test_run_first_frame_full_quality_refresh_and_exit():
    gui, _ = make_gui()
    frame = StubFrame(gui, runs=1)
    frame.frame_id = 1
    gui.run(frame)
    modes = [u[4] for u in gui.display.updates]
    assert modes[0] is UpdateMode.GC16
    assert modes[-1] is UpdateMode.INIT
    assert frame.exited == 1


def test_run_switch_count_cycles():
    gui, _ = make_gui()
    first_modes = []
    for _ in range(5):
        gui.display.updates.clear()
        gui.run(StubFrame(gui, runs=1))
        first_modes.append(gui.display.updates[0][4])
    assert first_modes[:4] == [UpdateMode.GL16] * 4
    assert first_modes[4] is UpdateMode.GC16
    assert gui.frame_switch_count == 0


def test_run_stopped_frame_exits_without_refresh():
    gui, _ = make_gui()
    frame = StubFrame(gui)
    frame.is_running = False
    gui.push_frame(frame)
    gui.pop_frame(True)
    gui.run(frame)
    assert gui.display.updates == []
    assert frame.exited == 1
    assert gui.pending_delete is None


def _scripted(clock: Clock, script):
    items = iter(script)

    def source():
        try:
            now, event = next(items)
        except StopIteration:
            return None
        clock.now = now
        return event

    return source


@pytest.mark.parametrize("auto", [True, False])
def test_auto_refresh_after_release(auto):
    clock = Clock()
    script = [(0, TouchEvent(10, 10)), (1000, TouchEvent(10, 10, True)), (5000, None)]
    gui = Gui(Display(), clock=clock, touch_source=_scripted(clock, script))
    frame = StubFrame(gui, runs=4)
    frame.frame_id = 1
    gui.display.update_count = 10
    gui.set_auto_update(auto)
    gui.run(frame)
    full_gl16 = [u for u in gui.display.updates if u[4] is UpdateMode.GL16]
    assert len(full_gl16) == (1 if auto else 0)
    assert gui.display.update_count <= 2


def test_main_loop_passes_registered_args():
    gui, _ = make_gui()
    frame = StubFrame(gui, runs=1)
    gui.add_frame(frame.name, frame)
    gui.add_frame_arg(frame.name, 0, "arg")
    gui.add_object(Recorder(display=gui.display))
    gui.set_auto_update(False)
    gui.push_frame(frame)
    gui.main_loop()
    assert frame.init_args == ["arg"]
    assert gui.objects == []
    assert gui.auto_update is True


def test_main_loop_empty_stack_does_nothing():
    gui, _ = make_gui()
    gui.main_loop()
    assert gui.display.updates == []


def test_exit_button_faces_are_inverse():
    gui, _ = make_gui()
    frame = StubFrame(gui)
    key = frame.exit_button("Home")
    assert frame.key_exit is key
    assert (key.x, key.y) == (8, 12)
    assert key.canvas_normal.texts[0][0] == "Home"
    assert key.canvas_normal.texts[0][4] == 15 - key.canvas_pressed.texts[0][4]
    assert key.canvas_pressed[0, 0] == 15 - key.canvas_normal[0, 0]


def test_exit_callback_via_button_release():
    gui, _ = make_gui()
    frame = StubFrame(gui)
    gui.push_frame(frame)
    key = frame.exit_button("Home")
    key.bind(ButtonEvent.RELEASED, frame.exit_callback)
    gui.add_object(key)
    gui.handle_touch(TouchEvent(key.x + 5, key.y + 5))
    gui.handle_touch(TouchEvent(key.x + 5, key.y + 5, True))
    assert frame.is_running is False
    assert gui.frame_stack == []
    assert frame.run() == 0


def test_title_canvas_has_rule():
    gui, _ = make_gui()
    frame = StubFrame(gui)
    assert frame.canvas_title is not None
    assert frame.canvas_title[0, 63] == 15
    assert frame.canvas_title[0, 0] == 0
    assert StubFrame(gui, has_title=False).canvas_title is None


def test_power_save_prompt_then_hide():
    gui, clock = make_gui(prompt_after_ms=100, shutdown_after_ms=1000)
    frame = StubFrame(gui)
    clock.now = 500
    frame.check_auto_power_save()
    assert frame.shutdown_prompt_shown is True
    assert frame.canvas_footer.texts[0][0] == SHUTDOWN_PROMPT
    gui.touch_active()
    frame.check_auto_power_save()
    assert frame.shutdown_prompt_shown is False
    assert frame.canvas_footer.texts == []
    assert gui.shutdown_requested is False


def test_power_save_shutdown():
    calls = []
    gui, clock = make_gui(prompt_after_ms=100, shutdown_after_ms=1000,
                          on_shutdown=lambda: calls.append(True))
    frame = StubFrame(gui, runs=5)
    clock.now = 2000
    frame.run()
    assert gui.shutdown_requested is True
    assert calls == [True]


def test_power_save_disabled_by_default():
    gui, clock = make_gui()
    frame = StubFrame(gui, runs=5)
    clock.now = 10**9
    frame.run()
    assert gui.power_save_enabled is False
    assert frame.shutdown_prompt_shown is False
    assert gui.shutdown_requested is False


def test_button_registered_gets_touch():
    gui, _ = make_gui()
    presses = []
    button = Button(100, 100, 40, 40, "ok", display=gui.display)
    button.bind(ButtonEvent.PRESSED, presses.append)
    gui.add_object(button)
    gui.handle_touch(TouchEvent(110, 110))
    assert presses == [[]]
    assert button.state is ButtonEvent.PRESSED