"""On-screen keyboard built from buttons and switches."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import IntEnum, IntFlag

from inkpanel.button import Button
from inkpanel.display import Canvas, Display, UpdateMode
from inkpanel.switch import Switch
from inkpanel.widget import Widget

LOWER_CASE = (
    "q", "w", "e", "r", "t", "y", "u", "i", "o", "p",
    "a", "s", "d", "f", "g", "h", "j", "k", "l",
    "z", "x", "c", "v", "b", "n", "m",
)
UPPER_CASE = (
    "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P",
    "A", "S", "D", "F", "G", "H", "J", "K", "L",
    "Z", "X", "C", "V", "B", "N", "M",
)
NUMBERS = (
    "1", "2", "3", "4", "5", "6", "7", "8", "9", "0",
    "-", "/", ":", ";", "(", ")", "$", "&", "@",
    "_", "\"", ".", ",", "?", "!", "'",
)
SYMBOLS = (
    "[", "]", "{", "}", "#", "%", "^", "*", "+", "=",
    "_", "\\", "|", "~", "<", ">", "\u20ac", "\u00a3", "\u00a5",
    "\u2022", "\u273f", "\u221a", "\u221e", "\u2103", "\u2109", "\u2116",
)

LETTER_COUNT = 26
KEY_SPACE = 26
KEY_BACKSPACE = 27
KEY_WRAP = 28
KEY_CASE = 29
KEY_SWITCH = 30
KEY_NUMBER = 31
KEY_COUNT = 32

BACKSPACE = "\b"
_ROW_LENGTHS = (10, 9, 7)


class Language(IntEnum):
    EN = 0
    ZH = 1
    JA = 2


class KeyboardStyle(IntFlag):
    NORMALTEXT = 0x01
    NEEDCONFIRM = 0x02
    DEFAULT = NORMALTEXT


class Layout(IntEnum):
    LOWER_ALPHA = 0
    UPPER_ALPHA = 1
    NUMBER = 2
    SYMBOL = 3


_LAYOUT_MAPS = {
    Layout.LOWER_ALPHA: LOWER_CASE,
    Layout.UPPER_ALPHA: UPPER_CASE,
    Layout.NUMBER: NUMBERS,
    Layout.SYMBOL: SYMBOLS,
}

# (space, wrap, confirm)
_KEY_LABELS = {
    Language.EN: ("Space", "Wrap", "Confirm"),
    Language.ZH: ("\u7a7a\u683c", "\u6362\u884c", "\u786e\u8ba4"),
    Language.JA: ("\u7a7a\u767d", "\u6539\u884c", "\u78ba\u8a8d"),
}


@dataclass(frozen=True)
class _Geometry:
    key_w: int
    key_h: int
    interval: int
    rows_y: tuple[int, int, int, int]
    rows_x: tuple[int, int, int]
    backspace: tuple[int, int]
    space: tuple[int, int]
    wrap: tuple[int, int]
    case: tuple[int, int]
    switch: tuple[int, int]
    number: tuple[int, int]


_HORIZONTAL = _Geometry(
    key_w=72,
    key_h=44,
    interval=8,
    rows_y=(302, 356, 410, 464),
    rows_x=(84, 84 + 40, 84 + 118),
    backspace=(84 + 792 - 96, 96),
    space=(84 + 162, 468),
    wrap=(84 + 792 - 152, 152),
    case=(84, 96),
    switch=(84, 68),
    number=(84 + 162 - 8 - 68, 68),
)

_VERTICAL = _Geometry(
    key_w=44,
    key_h=52,
    interval=8,
    rows_y=(700, 764, 828, 892),
    rows_x=(16, 16 + 28, 16 + 80),
    backspace=(16 + 512 - 60, 60),
    space=(16 + 132, 244),
    wrap=(16 + 512 - 128, 128),
    case=(16, 60),
    switch=(16, 56),
    number=(16 + 56 + 8, 60),
)


class Keyboard(Widget):
    """A 32-key keyboard whose typed characters collect until taken."""

    def __init__(
        self,
        horizontal: bool = True,
        style: KeyboardStyle = KeyboardStyle.DEFAULT,
        language: Language = Language.EN,
        *,
        backspace_icon: Sequence[int] | None = None,
        case_icon: Sequence[int] | None = None,
        display: Display | None = None,
    ) -> None:
        super().__init__(display=display)
        style = KeyboardStyle(style)
        if not style & (KeyboardStyle.NORMALTEXT | KeyboardStyle.NEEDCONFIRM):
            raise ValueError(f"keyboard style {int(style):#x} names no input mode")
        language = Language(language)
        geo = _HORIZONTAL if horizontal else _VERTICAL
        self._case_icon = case_icon

        buttons: list[Button] = []
        letter = 0
        for row, count in enumerate(_ROW_LENGTHS):
            for col in range(count):
                buttons.append(
                    Button(
                        geo.rows_x[row] + (geo.interval + geo.key_w) * col,
                        geo.rows_y[row],
                        geo.key_w,
                        geo.key_h,
                        LOWER_CASE[letter],
                        display=self.display,
                    )
                )
                letter += 1

        space_label, wrap_label, confirm_label = _KEY_LABELS[language]
        space = Button(
            geo.space[0], geo.rows_y[3], geo.space[1], geo.key_h, space_label, display=self.display
        )
        backspace = Button(
            geo.backspace[0], geo.rows_y[2], geo.backspace[1], geo.key_h, "", display=self.display
        )
        self._paint_backspace(backspace, backspace_icon)
        wrap = Button(
            geo.wrap[0],
            geo.rows_y[3],
            geo.wrap[1],
            geo.key_h,
            wrap_label if style & KeyboardStyle.NORMALTEXT else confirm_label,
            display=self.display,
        )
        buttons.extend((space, backspace, wrap))
        self._buttons = buttons

        self._case_switch = Switch(
            2, geo.case[0], geo.rows_y[2], geo.case[1], geo.key_h, display=self.display
        )
        self._mode_switch = Switch(
            2, geo.switch[0], geo.rows_y[3], geo.switch[1], geo.key_h, display=self.display
        )
        self._number_switch = Switch(
            2, geo.number[0], geo.rows_y[3], geo.number[1], geo.key_h, display=self.display
        )
        self._paint_case_icon()
        self._mode_switch.set_label(0, "\u3042")
        self._mode_switch.set_label(1, "Aa")
        self._number_switch.set_label(0, "123")
        self._number_switch.set_label(1, "Abc")

        self._keys: list[Widget] = [
            *buttons,
            self._case_switch,
            self._mode_switch,
            self._number_switch,
        ]
        self._data = ""
        self._layout = Layout.LOWER_ALPHA

    @staticmethod
    def _paint_backspace(button: Button, icon: Sequence[int] | None) -> None:
        ix, iy = button.w // 2 - 16, button.h // 2 - 16
        if icon is not None:
            button.canvas_normal.push_image(ix, iy, 32, 32, icon)
        button.canvas_pressed.fill(0)
        if icon is not None:
            button.canvas_pressed.push_image(ix, iy, 32, 32, icon)
        button.canvas_pressed.reverse_color()

    def _paint_case_icon(self) -> None:
        sw = self._case_switch
        if self._case_icon is not None:
            for state in (0, 1):
                sw.canvas(state).push_image(
                    sw.w // 2 - 16, sw.h // 2 - 16, 32, 32, self._case_icon
                )
        sw.canvas(1).reverse_color()

    @property
    def keys(self) -> list[Widget]:
        return list(self._keys)

    @property
    def layout(self) -> Layout:
        return self._layout

    @property
    def data(self) -> str:
        """Characters typed since the last take_data, left in place."""
        return self._data

    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        if self.hidden:
            return
        for key in self._keys:
            key.draw(mode)

    def draw_to(self, canvas: Canvas) -> None:
        if self.hidden:
            return
        for key in self._keys:
            key.draw_to(canvas)

    def _set_layout(self, layout: Layout) -> None:
        for button, label in zip(self._buttons[:LETTER_COUNT], _LAYOUT_MAPS[layout]):
            button.set_label(label)
        self._layout = layout

    def _refresh(self) -> None:
        self.draw(UpdateMode.NONE)
        self.display.update_full(UpdateMode.GL16)

    def _toggle_case(self) -> None:
        first = self._case_switch.state == 1
        if self._layout in (Layout.NUMBER, Layout.SYMBOL):
            self._set_layout(Layout.NUMBER if first else Layout.SYMBOL)
        else:
            self._set_layout(Layout.LOWER_ALPHA if first else Layout.UPPER_ALPHA)
        self._case_switch.update_state(-1, -1)
        self._refresh()

    def _toggle_number(self) -> None:
        sw = self._case_switch
        sw.set_state(0)
        if self._number_switch.state == 1:
            for state in (0, 1):
                sw.canvas(state).fill(0)
                sw.canvas(state).draw_rect(0, 0, sw.w, sw.h, 15)
            self._paint_case_icon()
            self._set_layout(Layout.LOWER_ALPHA)
        else:
            sw.set_label(0, "#+-")
            sw.set_label(1, "123")
            self._set_layout(Layout.NUMBER)
        self._number_switch.update_state(-1, -1)
        self._refresh()

    def update_state(self, x: int, y: int) -> None:
        if not self.enabled:
            return
        for i, key in enumerate(self._keys):
            pressed = key.is_in_box(x, y)
            key.update_state(x, y)
            if not pressed:
                continue
            if i < LETTER_COUNT:
                self._data += _LAYOUT_MAPS[self._layout][i]
            elif i == KEY_BACKSPACE:
                self._data += BACKSPACE
            elif i == KEY_SPACE:
                self._data += " "
            elif i == KEY_WRAP:
                self._data += "\n"
            elif i == KEY_CASE:
                self._toggle_case()
            elif i == KEY_NUMBER:
                self._toggle_number()

    def take_data(self) -> str:
        """Return the typed characters and start collecting afresh."""
        data, self._data = self._data, ""
        return data