"""Frame stack, touch dispatch and refresh policy for the panel's screens."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from inkpanel.button import LABEL_SIZE, Button, ButtonEvent
from inkpanel.display import PANEL_HEIGHT, PANEL_WIDTH, Canvas, Display, TextDatum, UpdateMode
from inkpanel.widget import Widget

TITLE_HEIGHT = 64
FOOTER_HEIGHT = 28
FOOTER_MARGIN_BOTTOM = 10
AUTO_REFRESH_DELAY_MS = 2000
AUTO_REFRESH_UPDATE_LIMIT = 4
FULL_REFRESH_EVERY = 3
SHUTDOWN_PROMPT = "Shutdown to save power, touch to continue?"


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


@dataclass(frozen=True)
class TouchEvent:
    """One reading of the touch panel."""

    x: int
    y: int
    finger_up: bool = False


@dataclass
class _FrameEntry:
    frame: Frame
    args: list[Any] = field(default_factory=list)


class Frame(ABC):
    """A full screen: its title bar, exit key and the widgets it registers."""

    exit_icon: Sequence[int] | None = None

    def __init__(self, gui: Gui, has_title: bool = True) -> None:
        self.gui = gui
        self.name = type(self).__name__
        self.frame_id = 0
        self.is_running = True
        self.canvas_title: Canvas | None = None
        self.canvas_footer: Canvas | None = None
        self.key_exit: Button | None = None
        self._shutdown_prompt_shown = False
        if has_title:
            title = Canvas(PANEL_WIDTH, TITLE_HEIGHT)
            for row in (TITLE_HEIGHT, TITLE_HEIGHT - 1, TITLE_HEIGHT - 2):
                title.fill_rect(0, row, PANEL_WIDTH, 1, 15)
            title.text_size = LABEL_SIZE
            title.text_datum = TextDatum.CC
            self.canvas_title = title
        gui.touch_active()

    @property
    def shutdown_prompt_shown(self) -> bool:
        return self._shutdown_prompt_shown

    def exit_button(self, title: str, width: int = 150) -> Button:
        """Create the top-left exit key showing a back arrow and a title."""
        key = Button(8, 12, width, 48, display=self.gui.display)
        normal = key.canvas_normal
        normal.fill(0)
        normal.text_size = LABEL_SIZE
        normal.text_datum = TextDatum.CL
        normal.text_color = 15
        normal.draw_string(title, 47 + 13, 28)
        if self.exit_icon is not None:
            normal.push_image(15, 8, 32, 32, self.exit_icon)
        key.canvas_pressed.copy_from(normal)
        key.canvas_pressed.reverse_color()
        self.key_exit = key
        return key

    def check_auto_power_save(self) -> None:
        """Prompt after the idle prompt delay, shut down after the idle limit."""
        gui = self.gui
        idle = gui.clock() - gui.last_active_ms
        footer_y = PANEL_HEIGHT - FOOTER_HEIGHT - FOOTER_MARGIN_BOTTOM
        if gui.shutdown_after_ms is not None and idle > gui.shutdown_after_ms:
            gui.shutdown_requested = True
            if gui.on_shutdown is not None:
                gui.on_shutdown()
        elif gui.prompt_after_ms is not None and idle > gui.prompt_after_ms:
            if not self._shutdown_prompt_shown:
                footer = Canvas(PANEL_WIDTH, FOOTER_HEIGHT)
                footer.text_size = LABEL_SIZE
                footer.text_datum = TextDatum.CC
                footer.draw_string(SHUTDOWN_PROMPT, PANEL_WIDTH // 2, FOOTER_HEIGHT // 2)
                footer.push(gui.display, 0, footer_y, UpdateMode.DU4)
                self.canvas_footer = footer
                self._shutdown_prompt_shown = True
        elif self._shutdown_prompt_shown and self.canvas_footer is not None:
            self.canvas_footer.fill(0)
            self.canvas_footer.push(gui.display, 0, footer_y, UpdateMode.DU4)
            self._shutdown_prompt_shown = False

    def run(self) -> int:
        """One pass of the frame's own work; 0 ends the frame."""
        if self.gui.power_save_enabled:
            self.check_auto_power_save()
        return int(self.is_running)

    def exit(self) -> None:
        """Called once when the frame stops running."""

    @abstractmethod
    def init(self, args: list[Any]) -> int:
        """Prepare the screen and register widgets before the frame runs."""

    def exit_callback(self, args: list[Any]) -> None:
        """Leave this frame and return to the one below it."""
        self.gui.pop_frame()
        self.is_running = False


class Gui:
    """Owns the registered widgets and the stack of frames shown on the panel."""

    def __init__(
        self,
        display: Display | None = None,
        *,
        clock: Callable[[], int] | None = None,
        touch_source: Callable[[], TouchEvent | None] | None = None,
        prompt_after_ms: int | None = None,
        shutdown_after_ms: int | None = None,
        on_shutdown: Callable[[], None] | None = None,
    ) -> None:
        self.display = display if display is not None else Display()
        self.clock = clock if clock is not None else _monotonic_ms
        self.touch_source = touch_source if touch_source is not None else (lambda: None)
        self.prompt_after_ms = prompt_after_ms
        self.shutdown_after_ms = shutdown_after_ms
        self.on_shutdown = on_shutdown
        self.shutdown_requested = False
        self.objects: list[Widget] = []
        self._next_id = 1
        self.pending_delete: Frame | None = None
        self._stack: list[Frame | None] = []
        self._frames: dict[str, _FrameEntry] = {}
        self.frame_switch_count = 0
        self.auto_update = True
        self._last_touch: tuple[bool, int, int] | None = None
        self._release_time: int | None = None
        self.last_active_ms = self.clock()

    @property
    def power_save_enabled(self) -> bool:
        return self.prompt_after_ms is not None or self.shutdown_after_ms is not None

    @property
    def frame_stack(self) -> list[Frame | None]:
        """Frames from bottom to top."""
        return list(self._stack)

    def add_object(self, widget: Widget) -> None:
        widget.id = self._next_id
        self._next_id += 1
        self.objects.append(widget)

    def draw(self, mode: UpdateMode = UpdateMode.GC16) -> None:
        for widget in self.objects:
            widget.draw(mode)

    def process(self, x: int = -1, y: int = -1) -> None:
        """Feed a touch point to every widget; (-1, -1) means the finger lifted."""
        for widget in self.objects:
            widget.update_state(x, y)

    def clear(self) -> None:
        self.objects.clear()

    def handle_touch(self, event: TouchEvent) -> bool:
        """Dispatch a touch reading unless it repeats the previous one."""
        key = (event.finger_up, event.x, event.y)
        if key == self._last_touch:
            return False
        self.touch_active()
        self._last_touch = key
        if event.finger_up:
            self.process()
            self._release_time = self.clock()
        else:
            self.process(event.x, event.y)
            self._release_time = None
        return True

    def _finish(self, frame: Frame) -> None:
        frame.exit()
        self.pending_delete = None

    def run(self, frame: Frame) -> None:
        """Show a frame and pump touch events until it stops running."""
        self._release_time = None
        if not frame.is_running:
            self._finish(frame)
            return

        self.draw(UpdateMode.NONE)
        if frame.frame_id == 1 or self.frame_switch_count > FULL_REFRESH_EVERY:
            self.frame_switch_count = 0
            self.display.update_full(UpdateMode.GC16)
        else:
            self.display.update_full(UpdateMode.GL16)
            self.frame_switch_count += 1

        while True:
            if not frame.is_running or frame.run() == 0:
                self.display.clear(True)
                self._finish(frame)
                return

            event = self.touch_source()
            if event is not None:
                self.handle_touch(event)

            if (
                self._release_time is not None
                and self.clock() - self._release_time > AUTO_REFRESH_DELAY_MS
            ):
                if self.display.update_count > AUTO_REFRESH_UPDATE_LIMIT:
                    self.display.reset_update_count()
                    if self.auto_update:
                        self.display.update_full(UpdateMode.GL16)
                self._release_time = None

    def main_loop(self) -> None:
        """Run the frame on top of the stack, if there is one."""
        if not self._stack or self._stack[-1] is None:
            return
        frame = self._stack[-1]
        self.clear()
        self.auto_update = True
        entry = self._frames.get(frame.name)
        frame.init(entry.args if entry is not None else [])
        self.run(frame)

    def push_frame(self, frame: Frame | None) -> None:
        self._stack.append(frame)

    def pop_frame(self, delete: bool = False) -> None:
        """Drop the top frame; with delete it is discarded once it stops running."""
        if not self._stack:
            raise IndexError("pop from an empty frame stack")
        top = self._stack.pop()
        if delete:
            self.pending_delete = top

    def overwrite_frame(self, frame: Frame | None) -> None:
        self._stack.clear()
        self._stack.append(frame)

    def add_frame(self, name: str, frame: Frame) -> None:
        """Register a frame by name; an existing registration is kept."""
        self._frames.setdefault(name, _FrameEntry(frame))

    def add_frame_arg(self, name: str, n: int, arg: Any) -> None:
        """Set init argument n of a named frame, appending when n is past the end."""
        entry = self._frames.get(name)
        if entry is None:
            return
        if len(entry.args) > n:
            entry.args[n] = arg
        else:
            entry.args.append(arg)

    def get_frame(self, name: str) -> Frame | None:
        entry = self._frames.get(name)
        return entry.frame if entry is not None else None

    def frame_args(self, name: str) -> list[Any]:
        """Init arguments registered for a named frame."""
        entry = self._frames.get(name)
        return list(entry.args) if entry is not None else []

    def set_auto_update(self, enabled: bool) -> None:
        self.auto_update = enabled

    def touch_active(self) -> None:
        """Record activity so power saving waits again."""
        self.last_active_ms = self.clock()


__all__ = ["ButtonEvent", "Frame", "Gui", "TouchEvent"]