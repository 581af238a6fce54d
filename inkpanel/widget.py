"""Base class shared by every on-screen control."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any

from inkpanel.display import Canvas, Display, UpdateMode

Callback = Callable[[list[Any]], None]


def align4(value: int) -> int:
    """Round up to a multiple of four, wrapping as a signed 16-bit value."""
    aligned = (value + 3) & 0xFFFC
    return aligned - 0x10000 if aligned >= 0x8000 else aligned


class Widget(ABC):
    """A rectangular control placed on the panel."""

    def __init__(
        self, x: int = 0, y: int = 0, w: int = 0, h: int = 0, *, display: Display | None = None
    ) -> None:
        self.display = display if display is not None else Display()
        self.x = align4(x)
        self.y = y
        self.w = align4(w)
        self.h = h
        self.right = self.x + self.w
        self.bottom = self.y + self.h
        self.id = 0
        self.custom_string = ""
        self.hidden = False
        self.enabled = True
        self._selected = False

    def is_in_box(self, x: int, y: int) -> bool:
        """Hit-test a touch point; (-1, -1) means no touch and changes nothing."""
        if x == -1 or y == -1:
            return False
        self._selected = self.x < x < self.right and self.y < y < self.bottom
        return self._selected

    def is_selected(self) -> bool:
        return self._selected

    def set_geometry(self, x: int, y: int, w: int, h: int) -> None:
        self.x = align4(x)
        self.y = y
        self.w = align4(w)
        self.h = h

    def set_pos(self, x: int, y: int) -> None:
        self.x = align4(x)
        self.y = y

    def update_gram(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        """Refresh the panel area this widget covers."""
        self.display.update_area(self.x, self.y, self.w, self.h, mode)

    @abstractmethod
    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        """Push the widget onto the panel."""

    @abstractmethod
    def draw_to(self, canvas: Canvas) -> None:
        """Paint the widget onto another canvas."""

    def bind(self, event: int, callback: Callback) -> None:
        """Attach a callback to an event; widgets without events ignore it."""

    @abstractmethod
    def update_state(self, x: int, y: int) -> None:
        """Feed a touch point, or (-1, -1) when the finger is lifted."""