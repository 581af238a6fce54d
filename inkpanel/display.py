"""In-memory model of a 16-level grey e-paper panel and its drawing canvases."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum

MAX_GREY = 15
PANEL_WIDTH = 540
PANEL_HEIGHT = 960


class UpdateMode(IntEnum):
    """Waveforms the panel can refresh an area with."""

    INIT = 0
    DU = 1
    GC16 = 2
    GL16 = 3
    GLR16 = 4
    GLD16 = 5
    DU4 = 6
    A2 = 7
    NONE = 8


class TextDatum(IntEnum):
    """Anchor point of a string relative to its drawing position."""

    TL = 0
    TC = 1
    TR = 2
    CL = 3
    CC = 4
    CR = 5
    BL = 6
    BC = 7
    BR = 8


# (text, x, y, size, color, datum)
TextItem = tuple[str, int, int, int, int, TextDatum]


class Canvas:
    """A rectangle of 4-bit grey pixels plus the strings drawn onto it."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid canvas size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height)
        self.texts: list[TextItem] = []
        self.text_size = 1
        self.text_color = MAX_GREY
        self.text_datum = TextDatum.TL

    def __getitem__(self, pos: tuple[int, int]) -> int:
        x, y = pos
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y * self.width + x]

    def fill(self, color: int) -> None:
        """Paint every pixel with one grey level and forget all strings."""
        self.pixels[:] = bytes([color & MAX_GREY]) * len(self.pixels)
        self.texts.clear()

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Paint a solid rectangle, clipped to the canvas."""
        x0, x1 = max(x, 0), min(x + w, self.width)
        y0, y1 = max(y, 0), min(y + h, self.height)
        if x1 <= x0 or y1 <= y0:
            return
        run = bytes([color & MAX_GREY]) * (x1 - x0)
        for row in range(y0, y1):
            start = row * self.width
            self.pixels[start + x0:start + x1] = run

    def draw_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Paint the one-pixel outline of a rectangle."""
        if w <= 0 or h <= 0:
            return
        self.fill_rect(x, y, w, 1, color)
        self.fill_rect(x, y + h - 1, w, 1, color)
        self.fill_rect(x, y, 1, h, color)
        self.fill_rect(x + w - 1, y, 1, h, color)

    def draw_string(self, text: str, x: int, y: int) -> None:
        """Record a string with the current size, colour and datum."""
        self.texts.append(
            (text, x, y, self.text_size, self.text_color, self.text_datum)
        )

    def push_image(self, x: int, y: int, w: int, h: int, image: Sequence[int]) -> None:
        """Copy a packed 4bpp image (high nibble first) onto the canvas."""
        needed = (w * h + 1) // 2
        if len(image) < needed:
            raise ValueError(f"image needs {needed} bytes, got {len(image)}")
        nibbles = [n for byte in image[:needed] for n in (byte >> 4, byte & 0x0F)]
        for row in range(h):
            ty = y + row
            if not 0 <= ty < self.height:
                continue
            for col, value in enumerate(nibbles[row * w:(row + 1) * w]):
                tx = x + col
                if 0 <= tx < self.width:
                    self.pixels[ty * self.width + tx] = value

    def reverse_color(self) -> None:
        """Invert every grey level, strings included."""
        self.pixels = bytearray(MAX_GREY - p for p in self.pixels)
        self.texts = [
            (text, x, y, size, MAX_GREY - color, datum)
            for text, x, y, size, color, datum in self.texts
        ]

    def copy_from(self, other: Canvas) -> None:
        """Make this canvas an independent copy of another."""
        self.width = other.width
        self.height = other.height
        self.pixels = bytearray(other.pixels)
        self.texts = list(other.texts)
        self.text_size = other.text_size
        self.text_color = other.text_color
        self.text_datum = other.text_datum

    def push(self, display: Display, x: int, y: int, mode: UpdateMode = UpdateMode.GC16) -> None:
        """Write the canvas into the panel memory and refresh that area."""
        self.push_to(display.gram, x, y)
        display.update_area(x, y, self.width, self.height, mode)

    def push_to(self, target: Canvas, x: int, y: int) -> None:
        """Copy the canvas onto another canvas at the given position."""
        src0 = max(0, -x)
        src1 = min(self.width, target.width - x)
        if src1 > src0:
            for row in range(self.height):
                ty = y + row
                if not 0 <= ty < target.height:
                    continue
                dst = ty * target.width + x
                src = row * self.width
                target.pixels[dst + src0:dst + src1] = self.pixels[src + src0:src + src1]
        target.texts.extend(
            (text, tx + x, ty + y, size, color, datum)
            for text, tx, ty, size, color, datum in self.texts
        )


class Display:
    """The panel: its memory and the refreshes issued to it."""

    def __init__(self, width: int = PANEL_WIDTH, height: int = PANEL_HEIGHT) -> None:
        self.gram = Canvas(width, height)
        self.updates: list[tuple[int, int, int, int, UpdateMode]] = []
        self.update_count = 0

    @property
    def width(self) -> int:
        return self.gram.width

    @property
    def height(self) -> int:
        return self.gram.height

    def update_area(self, x: int, y: int, w: int, h: int, mode: UpdateMode) -> None:
        """Refresh a rectangle; mode NONE only leaves the memory written."""
        mode = UpdateMode(mode)
        if mode is UpdateMode.NONE:
            return
        self.updates.append((x, y, w, h, mode))
        self.update_count += 1

    def update_full(self, mode: UpdateMode) -> None:
        """Refresh the whole panel."""
        self.update_area(0, 0, self.width, self.height, mode)

    def clear(self, init: bool = False) -> None:
        """Blank the panel memory and refresh it."""
        self.gram.fill(0)
        self.update_full(UpdateMode.INIT if init else UpdateMode.GC16)

    def reset_update_count(self) -> None:
        self.update_count = 0