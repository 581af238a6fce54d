"""Push button with a normal and a pressed face."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum, IntFlag
from typing import Any

from inkpanel.display import Canvas, Display, TextDatum, UpdateMode
from inkpanel.widget import Callback, Widget

LABEL_SIZE = 26


class ButtonEvent(IntEnum):
    NONE = 0
    PRESSED = 1
    RELEASED = 2


class ButtonStyle(IntFlag):
    BORDERLESS = 0x01
    SOLIDBORDER = 0x02
    ALIGN_LEFT = 0x04
    ALIGN_RIGHT = 0x08
    ALIGN_CENTER = 0x10
    INVISIBLE = 0x20
    DEFAULT = SOLIDBORDER | ALIGN_CENTER


class Button(Widget):
    """A control that fires callbacks when touched and when let go."""

    def __init__(
        self,
        x: int,
        y: int,
        w: int,
        h: int,
        label: str | None = None,
        style: ButtonStyle = ButtonStyle.DEFAULT,
        *,
        display: Display | None = None,
    ) -> None:
        super().__init__(x, y, w, h, display=display)
        self.canvas_normal = Canvas(self.w, self.h)
        self.canvas_pressed = Canvas(self.w, self.h)
        self._label = ""
        self._invisible = False
        self._state = ButtonEvent.NONE
        self._callbacks: dict[ButtonEvent, Callback | None] = {
            ButtonEvent.PRESSED: None,
            ButtonEvent.RELEASED: None,
        }
        self._args: dict[ButtonEvent, list[Any]] = {
            ButtonEvent.PRESSED: [],
            ButtonEvent.RELEASED: [],
        }
        if label is None:
            return
        style = ButtonStyle(style)
        if style & ButtonStyle.INVISIBLE:
            self._invisible = True
            return
        self._label = label
        self._paint_faces(style)

    def _paint_faces(self, style: ButtonStyle) -> None:
        normal, pressed = self.canvas_normal, self.canvas_pressed
        normal.fill(0)
        normal.text_size = LABEL_SIZE
        normal.text_color = 15
        pressed.fill(15)
        pressed.text_size = LABEL_SIZE
        pressed.text_color = 0
        if style & ButtonStyle.SOLIDBORDER:
            normal.draw_rect(0, 0, self.w, self.h, 15)

        text_y = self.h // 2 + 3
        if style & ButtonStyle.ALIGN_LEFT:
            datum, text_x = TextDatum.CL, 5
        elif style & ButtonStyle.ALIGN_RIGHT:
            datum, text_x = TextDatum.CR, self.w - 5
        elif style & ButtonStyle.ALIGN_CENTER:
            datum, text_x = TextDatum.CC, self.w // 2
        else:
            return
        for canvas in (normal, pressed):
            canvas.text_datum = datum
            canvas.draw_string(self._label, text_x, text_y)

    @property
    def label(self) -> str:
        return self._label

    @property
    def state(self) -> ButtonEvent:
        return self._state

    @property
    def invisible(self) -> bool:
        return self._invisible

    def _face(self) -> Canvas | None:
        if self._state in (ButtonEvent.NONE, ButtonEvent.RELEASED):
            return self.canvas_normal
        if self._state is ButtonEvent.PRESSED:
            return self.canvas_pressed
        return None

    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        if self.hidden or self._invisible:
            return
        face = self._face()
        if face is not None:
            face.push(self.display, self.x, self.y, mode)

    def draw_to(self, canvas: Canvas) -> None:
        if self.hidden or self._invisible:
            return
        face = self._face()
        if face is not None:
            face.push_to(canvas, self.x, self.y)

    def bind(self, event: int, callback: Callback) -> None:
        if event in self._callbacks:
            self._callbacks[ButtonEvent(event)] = callback

    def update_state(self, x: int, y: int) -> None:
        if not self.enabled or self.hidden:
            return
        if self.is_in_box(x, y):
            if self._state is ButtonEvent.NONE:
                self._state = ButtonEvent.PRESSED
                self.draw()
                self._fire(ButtonEvent.PRESSED)
        elif self._state is ButtonEvent.PRESSED:
            self._state = ButtonEvent.NONE
            self.draw()
            self._fire(ButtonEvent.RELEASED)

    def _fire(self, event: ButtonEvent) -> None:
        callback = self._callbacks[event]
        if callback is not None:
            callback(self._args[event])

    def set_label(self, label: str) -> None:
        """Repaint both faces with a centred label."""
        self._label = label
        normal, pressed = self.canvas_normal, self.canvas_pressed
        normal.fill(0)
        normal.draw_rect(0, 0, self.w, self.h, 15)
        normal.text_size = LABEL_SIZE
        normal.text_datum = TextDatum.CC
        normal.text_color = 15
        normal.draw_string(label, self.w // 2, self.h // 2 + 3)

        pressed.fill(15)
        pressed.text_size = LABEL_SIZE
        pressed.text_datum = TextDatum.CC
        pressed.text_color = 0
        pressed.draw_string(label, self.w // 2, self.h // 2 + 3)

    def add_args(self, event: int, n: int, arg: Any) -> None:
        """Set argument n for an event's callback, appending when n is past the end."""
        if event not in self._args:
            return
        args = self._args[ButtonEvent(event)]
        if len(args) > n:
            args[n] = arg
        else:
            args.append(arg)

    def set_bmp_button(self, label_left: str, label_right: str, image: Sequence[int]) -> None:
        """Paint a 32x32 icon with optional left and right labels; pressed is the inverse."""
        normal = self.canvas_normal
        normal.fill(0)
        normal.draw_rect(0, 0, self.w, self.h, 15)
        normal.text_size = LABEL_SIZE
        normal.text_color = 15
        if label_left:
            normal.text_datum = TextDatum.CL
            normal.draw_string(label_left, 47 + 8, (self.h >> 1) + 5)
        if label_right:
            normal.text_datum = TextDatum.CR
            normal.draw_string(label_right, self.w - 15, (self.h >> 1) + 5)
        normal.push_image(15, (self.h >> 1) - 16, 32, 32, image)
        self.canvas_pressed.copy_from(normal)
        self.canvas_pressed.reverse_color()