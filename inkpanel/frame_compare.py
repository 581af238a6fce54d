"""Screen that shows the same grey ramp refreshed with each panel waveform."""

from __future__ import annotations

from typing import Any

from inkpanel.button import LABEL_SIZE, Button, ButtonEvent
from inkpanel.display import Canvas, TextDatum, UpdateMode
from inkpanel.gui import Frame, Gui
from inkpanel.keyboard import Language

SAMPLE_WIDTH = 432
SAMPLE_HEIGHT = 100
SAMPLE_X = 104
SAMPLE_Y = 168
ROW_PITCH = 108
RAMP_STEP = 27
RAMP_HEIGHT = 50
TIME_X = 330
TIME_Y = 925
TIME_WIDTH = 200
TIME_HEIGHT = 30

_MODE_DESCRIPTIONS = {
    UpdateMode.INIT: "Display initialization",
    UpdateMode.DU: "Monochrome menu, text input ",
    UpdateMode.GC16: "High quality images",
    UpdateMode.GL16: "Text with white background",
    UpdateMode.GLR16: "Text with white background",
    UpdateMode.GLD16: "Graphics with white background",
    UpdateMode.DU4: "Fast page flipping",
    UpdateMode.A2: "Anti-aliased text in menus",
}

_MODE_LABELS = {
    UpdateMode.DU: "DU",
    UpdateMode.GC16: "GC16",
    UpdateMode.GL16: "GL16",
    UpdateMode.GLR16: "GLR16",
    UpdateMode.GLD16: "GLD16",
    UpdateMode.DU4: "DU4",
    UpdateMode.A2: "A2",
}

# (exit key, title, reset key)
_TEXTS = {
    Language.JA: ("\u30db\u30fc\u30e0", "\u6bd4\u8f03", "\u30ea\u30bb\u30c3\u30c8"),
    Language.ZH: ("\u4e3b\u9875", "\u6bd4\u8f83", "\u5168\u90e8\u91cd\u7f6e"),
    Language.EN: ("Home", "Compare", "Reset all"),
}


def mode_description(mode: int) -> str | None:
    """What a waveform is meant for, or None for modes without one."""
    try:
        return _MODE_DESCRIPTIONS.get(UpdateMode(mode))
    except ValueError:
        return None


def draw_compare_canvas(mode: int, canvas: Canvas) -> None:
    """Paint the 16-level grey ramp, the mode's description and a border."""
    canvas.fill(0)
    for level in range(16):
        canvas.fill_rect(level * RAMP_STEP, 0, RAMP_STEP, RAMP_HEIGHT, level)
    description = mode_description(mode)
    if description is not None:
        canvas.draw_string(description, 8, 60)
    canvas.draw_rect(0, 0, SAMPLE_WIDTH, SAMPLE_HEIGHT, 15)


def _sample_y(mode: int) -> int:
    return SAMPLE_Y + (mode - 1) * ROW_PITCH


class CompareFrame(Frame):
    """One key per waveform; pressing it redraws its sample and times the refresh."""

    def __init__(self, gui: Gui, language: Language = Language.EN) -> None:
        super().__init__(gui)
        self.canvas = Canvas(SAMPLE_WIDTH, SAMPLE_HEIGHT)
        self.canvas_time = Canvas(TIME_WIDTH, TIME_HEIGHT)
        self.canvas.text_size = LABEL_SIZE
        self.canvas_time.text_size = LABEL_SIZE
        self.canvas_time.text_datum = TextDatum.CR
        self.update_flag = False

        exit_label, title, reset_label = _TEXTS[Language(language)]
        self.exit_button(exit_label)
        if self.canvas_title is not None:
            self.canvas_title.draw_string(title, 270, 34)

        reset = Button(4, 88, 532, 60, reset_label, display=gui.display)
        reset.bind(ButtonEvent.RELEASED, self.reset_callback)
        self.mode_keys: list[Button] = [reset]
        for mode in range(1, 8):
            key = Button(0, _sample_y(mode), 100, 100, display=gui.display)
            key.custom_string = str(mode)
            key.add_args(ButtonEvent.RELEASED, 0, key)
            key.add_args(ButtonEvent.RELEASED, 1, self.canvas)
            key.add_args(ButtonEvent.RELEASED, 2, self.canvas_time)
            key.bind(ButtonEvent.RELEASED, self.update_mode_callback)
            self.mode_keys.append(key)
        for mode, label in _MODE_LABELS.items():
            self.mode_keys[mode].set_label(label)

        if self.key_exit is not None:
            self.key_exit.add_args(ButtonEvent.RELEASED, 0, self)
            self.key_exit.bind(ButtonEvent.RELEASED, self.exit_callback)

    def update_mode_callback(self, args: list[Any]) -> None:
        """Redraw the sample of the pressed key's mode and show how long it took."""
        key, canvas, canvas_time = args[0], args[1], args[2]
        mode = UpdateMode(int(key.custom_string))
        draw_compare_canvas(mode, canvas)
        canvas_time.fill(0)
        start = self.gui.clock()
        canvas.push(self.gui.display, SAMPLE_X, _sample_y(mode), mode)
        elapsed = self.gui.clock() - start
        canvas_time.draw_string(f"{elapsed} ms", TIME_WIDTH, 15)
        canvas_time.push(self.gui.display, TIME_X, TIME_Y, UpdateMode.GL16)

    def reset_callback(self, args: list[Any]) -> None:
        """Whiten the sample area and refresh it with the init waveform."""
        height = 7 * ROW_PITCH - (ROW_PITCH - SAMPLE_HEIGHT) + (ROW_PITCH - SAMPLE_HEIGHT)
        height = 748
        display = self.gui.display
        display.gram.fill_rect(SAMPLE_X, SAMPLE_Y, SAMPLE_WIDTH, height, 15)
        display.update_area(SAMPLE_X, SAMPLE_Y, SAMPLE_WIDTH, height, UpdateMode.INIT)

    def run(self) -> int:
        super().run()
        if self.update_flag:
            self.update_flag = False
            for mode in range(1, 8):
                draw_compare_canvas(mode, self.canvas)
                self.canvas.push(self.gui.display, SAMPLE_X, _sample_y(mode), UpdateMode(mode))
        return 1

    def init(self, args: list[Any]) -> int:
        self.is_running = True
        self.update_flag = True
        self.gui.display.clear()
        if self.canvas_title is not None:
            self.canvas_title.push(self.gui.display, 0, 8, UpdateMode.NONE)
        if self.key_exit is not None:
            self.gui.add_object(self.key_exit)
        for key in self.mode_keys:
            self.gui.add_object(key)
        self.gui.set_auto_update(False)
        return 3