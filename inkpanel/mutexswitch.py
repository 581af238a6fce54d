"""A group of switches of which at most one is selected at a time."""

from __future__ import annotations

from inkpanel.display import Canvas, Display, UpdateMode
from inkpanel.switch import Switch
from inkpanel.widget import Widget


class MutexSwitch(Widget):
    """Radio-style group: selecting one switch resets the others when exclusive."""

    def __init__(self, *, display: Display | None = None) -> None:
        super().__init__(display=display)
        self.exclusive = True
        self._default_idx = 0
        self._switches: list[Switch] = []
        self._last_pressed: int | None = None

    @property
    def switches(self) -> list[Switch]:
        return list(self._switches)

    @property
    def default_index(self) -> int:
        return self._default_idx

    @property
    def selected_index(self) -> int | None:
        """Index of the switch touched last, or None before any selection."""
        return self._last_pressed

    def add(self, switch: Switch) -> None:
        self._switches.append(switch)

    def set_default(self, idx: int) -> None:
        """Select the switch at idx (kept unchanged when out of range) and reset the rest."""
        if 0 <= idx < len(self._switches):
            self._default_idx = idx
        for i, switch in enumerate(self._switches):
            if i == self._default_idx:
                self._last_pressed = i
                switch.set_state(1)
            else:
                switch.set_state(0)

    def draw(self, mode: UpdateMode = UpdateMode.DU4) -> None:
        if self.hidden:
            return
        for switch in self._switches:
            switch.draw(mode)

    def draw_to(self, canvas: Canvas) -> None:
        if self.hidden:
            return
        for switch in self._switches:
            switch.draw_to(canvas)

    def update_state(self, x: int, y: int) -> None:
        if not self.enabled:
            return
        pressed: int | None = None
        for i, switch in enumerate(self._switches):
            if self._last_pressed == i:
                switch.update_state(-1, -1)
                continue
            if switch.is_in_box(x, y):
                self._last_pressed = i
                pressed = i
            switch.update_state(x, y)

        if not self.exclusive or pressed is None:
            return

        for i, switch in enumerate(self._switches):
            if i == pressed:
                continue
            if switch.state != 0:
                switch.set_state(0)
                switch.draw(UpdateMode.GL16)