"""Placeholder screen for glucose readings, with a title bar and no widgets."""

from __future__ import annotations

from typing import Any

from inkpanel.gui import Frame


class GlucoseFrame(Frame):
    """A titled screen that registers nothing and keeps running."""

    def init(self, args: list[Any]) -> int:
        return 4

    def run(self) -> int:
        return 1