"""Single text entry field that keeps track of which box has focus."""

from __future__ import annotations

from inkpanel.button import ButtonEvent
from inkpanel.display import Canvas, Display, TextDatum, UpdateMode
from inkpanel.widget import Widget

DEFAULT_TEXT_SIZE = 26
DEFAULT_MARGIN = 8
BACKSPACE = "\b"


class Textbox(Widget):
    """A bordered text area; touching it gives it focus and takes focus from others."""

    _touching_id = 0

    def __init__(self, x: int, y: int, w: int, h: int, *, display: Display | None = None) -> None:
        super().__init__(x, y, w, h, display=display)
        self._canvas = Canvas(self.w, self.h)
        self._size = DEFAULT_TEXT_SIZE
        self._canvas.fill(15)
        self._canvas.draw_rect(0, 0, self.w, self.h, 15)
        self._canvas.text_size = self._size
        self._canvas.text_datum = TextDatum.TL
        self._canvas.text_color = 15
        self.margin_left = DEFAULT_MARGIN
        self.margin_right = DEFAULT_MARGIN
        self.margin_top = DEFAULT_MARGIN
        self.margin_bottom = DEFAULT_MARGIN
        self._data = ""
        self._state = ButtonEvent.NONE

    @property
    def canvas(self) -> Canvas:
        return self._canvas

    @property
    def text(self) -> str:
        return self._data

    @property
    def text_size(self) -> int:
        return self._size

    @property
    def state(self) -> ButtonEvent:
        return self._state

    @property
    def text_area(self) -> tuple[int, int, int, int]:
        """Left, top, right and bottom edges of the area text is printed in."""
        return (
            self.margin_left,
            self.margin_top,
            self.w - self.margin_right,
            self.h - self.margin_bottom,
        )

    def set_text_margin(self, left: int, top: int, right: int, bottom: int) -> None:
        self.margin_left = left
        self.margin_top = top
        self.margin_right = right + left
        self.margin_bottom = bottom + top

    def set_text_size(self, size: int) -> None:
        self._size = size
        self._canvas.text_size = size
        self.draw(UpdateMode.GC16)

    def _paint(self) -> None:
        canvas = self._canvas
        canvas.text_size = self._size
        canvas.fill(0)
        canvas.draw_rect(0, 0, self.w, self.h, 15)
        if self._state is not ButtonEvent.NONE:
            canvas.draw_rect(1, 1, self.w - 2, self.h - 2, 15)
            canvas.draw_rect(2, 2, self.w - 4, self.h - 4, 15)
        if self._data:
            canvas.draw_string(self._data, self.margin_left, self.margin_top)

    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        if self.hidden:
            return
        self._paint()
        self._canvas.push(self.display, self.x, self.y, mode)

    def draw_to(self, canvas: Canvas) -> None:
        if self.hidden:
            return
        self._paint()
        self._canvas.push_to(canvas, self.x, self.y)

    def update_state(self, x: int, y: int) -> None:
        if not self.enabled:
            return
        state = self._state
        if state is ButtonEvent.PRESSED and Textbox._touching_id != self.id:
            state = ButtonEvent.NONE
        if self.is_in_box(x, y):
            Textbox._touching_id = self.id
            state = ButtonEvent.PRESSED
        self.set_state(state)

    def set_state(self, state: int) -> None:
        state = ButtonEvent(state)
        if state is not self._state:
            if state is ButtonEvent.PRESSED:
                Textbox._touching_id = self.id
            self._state = state

    def is_selected(self) -> bool:
        return self._state is not ButtonEvent.NONE

    def set_text(self, text: str) -> None:
        if text != self._data:
            self._data = text
            self.draw(UpdateMode.A2)

    def add_text(self, text: str) -> None:
        """Append text; each backspace character deletes the last character instead."""
        if not text:
            return
        for char in text:
            if char == BACKSPACE:
                self.remove(-1)
            else:
                self._data += char
        self.draw(UpdateMode.A2)

    def remove(self, idx: int) -> None:
        """Delete the character at idx, or the last one when idx is -1."""
        if 0 <= idx < len(self._data):
            self._data = self._data[:idx] + self._data[idx + 1:]
        elif idx == -1:
            self._data = self._data[:-1]