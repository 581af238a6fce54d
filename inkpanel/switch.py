"""Multi-state toggle that advances one state per tap."""

from __future__ import annotations

from typing import Any

from inkpanel.button import LABEL_SIZE, ButtonEvent
from inkpanel.display import Canvas, Display, TextDatum, UpdateMode
from inkpanel.widget import Callback, Widget

MAX_STATES = 5


class Switch(Widget):
    """A control cycling through up to five faces, firing a callback per state."""

    def __init__(
        self, state_num: int, x: int, y: int, w: int, h: int, *, display: Display | None = None
    ) -> None:
        if state_num < 1:
            raise ValueError(f"a switch needs at least one state, got {state_num}")
        super().__init__(x, y, w, h, display=display)
        self._state_count = min(state_num, MAX_STATES)
        self._canvases: list[Canvas] = []
        for _ in range(self._state_count):
            canvas = Canvas(self.w, self.h)
            canvas.text_size = LABEL_SIZE
            canvas.fill(0)
            canvas.draw_rect(0, 0, self.w, self.h, 15)
            self._canvases.append(canvas)
        self._pressed_canvas = Canvas(self.w, self.h)
        self._pressed_canvas.fill(15)
        self._callbacks: list[Callback | None] = [None] * MAX_STATES
        self._args: list[list[Any]] = [[] for _ in range(MAX_STATES)]
        self.labels = [""] * MAX_STATES
        self._state = 0
        self._event = ButtonEvent.NONE

    @property
    def state(self) -> int:
        return self._state

    @property
    def state_count(self) -> int:
        return self._state_count

    def canvas(self, state: int) -> Canvas:
        """Face for a state; -1 gives the face shown while touched."""
        if state == -1:
            return self._pressed_canvas
        return self._canvases[state]

    def set_label(self, state: int, label: str) -> None:
        if not 0 <= state < MAX_STATES:
            return
        canvas = self._canvases[state]
        canvas.fill(0)
        canvas.draw_rect(0, 0, self.w, self.h, 15)
        canvas.text_size = LABEL_SIZE
        canvas.text_datum = TextDatum.CC
        canvas.text_color = 15
        canvas.draw_string(label, self.w // 2, self.h // 2 + 5)
        self.labels[state] = label

    def _face(self) -> Canvas:
        if self._event is ButtonEvent.PRESSED:
            return self._pressed_canvas
        return self._canvases[self._state]

    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        if self.hidden:
            return
        self._face().push(self.display, self.x, self.y, mode)

    def draw_to(self, canvas: Canvas) -> None:
        if self.hidden:
            return
        self._face().push_to(canvas, self.x, self.y)

    def bind(self, state: int, callback: Callback) -> None:
        if 0 <= state < MAX_STATES:
            self._callbacks[state] = callback

    def update_state(self, x: int, y: int) -> None:
        if not self.enabled or self.hidden:
            return
        if self.is_in_box(x, y):
            if self._event is ButtonEvent.NONE:
                self._event = ButtonEvent.PRESSED
                self.draw()
        elif self._event is ButtonEvent.PRESSED:
            self._event = ButtonEvent.NONE
            self._state = (self._state + 1) % self._state_count
            self.draw()
            callback = self._callbacks[self._state]
            if callback is not None:
                callback(self._args[self._state])

    def set_state(self, state: int) -> None:
        """Jump to a state without firing its callback; out of range is ignored."""
        if not 0 <= state < self._state_count:
            return
        self._state = state
        self.draw(UpdateMode.NONE)

    def add_args(self, state: int, n: int, arg: Any) -> None:
        """Set argument n for a state's callback, appending when n is past the end."""
        if not 0 <= state < MAX_STATES:
            return
        args = self._args[state]
        if len(args) > n:
            args[n] = arg
        else:
            args.append(arg)