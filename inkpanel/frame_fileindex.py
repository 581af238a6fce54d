"""Screen that lists one directory of the storage card as a column of keys."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from inkpanel.button import LABEL_SIZE, Button, ButtonEvent
from inkpanel.display import TextDatum, UpdateMode
from inkpanel.gui import Frame, Gui
from inkpanel.keyboard import Language

log = logging.getLogger(__name__)

MAX_BUTTONS = 14
KEY_X = 4
KEY_Y = 100
KEY_PITCH = 60
KEY_WIDTH = 532
KEY_HEIGHT = 61
NAME_LIMIT = 19
PATH_LIMIT = 20
ICON_SIZE = 32

IMAGE_NAMES = frozenset({"folder", "arrow_right", "text", "image", "unknown"})

_TEXT_SUFFIXES = ("txt", "TXT")
_IMAGE_SUFFIXES = ("bmp", "BMP", "png", "PNG", "jpg", "JPG")

_HOME_LABELS = {
    Language.JA: "\u30db\u30fc\u30e0",
    Language.ZH: "\u4e3b\u9875",
    Language.EN: "Home",
}

Opener = Callable[[Gui, str], Frame]


class FileKind(Enum):
    FOLDER = "folder"
    TEXT = "text"
    IMAGE = "image"
    UNKNOWN = "unknown"


def classify_file(name: str) -> FileKind:
    """Kind of a file judged by what follows the last dot of its name."""
    dot = name.rfind(".")
    suffix = name[dot:] if dot >= 0 else ""
    if any(s in suffix for s in _TEXT_SUFFIXES):
        return FileKind.TEXT
    if any(s in suffix for s in _IMAGE_SUFFIXES):
        return FileKind.IMAGE
    return FileKind.UNKNOWN


def shorten_name(name: str) -> str:
    """Last path component, cut to 19 characters plus an ellipsis when longer."""
    base = name[name.rfind("/") + 1:]
    if len(base) > NAME_LIMIT:
        base = base[:NAME_LIMIT] + "..."
    return base


def format_size(size: int) -> str:
    return f"{size / 1024:.2f} KiB"


def _join(dirname: str, name: str) -> str:
    return dirname + name if dirname.endswith("/") else f"{dirname}/{name}"


class FileIndexFrame(Frame):
    """Lists folders then files; folders open a nested listing, known files an opener."""

    def __init__(
        self,
        gui: Gui,
        path: str = "/",
        *,
        root: str | os.PathLike[str] = ".",
        language: Language = Language.EN,
        images: Mapping[str, Sequence[int]] | None = None,
        wallpaper: Sequence[int] | None = None,
        open_text: Opener | None = None,
        open_image: Opener | None = None,
    ) -> None:
        super().__init__(gui)
        self.images = dict(images or {})
        unknown = set(self.images) - IMAGE_NAMES
        if unknown:
            raise ValueError(f"unknown image names: {', '.join(sorted(unknown))}")
        self.path = path
        self.root = Path(root)
        self.language = Language(language)
        self.wallpaper = wallpaper
        self.open_text = open_text
        self.open_image = open_image
        self.key_files: list[Button] = []

        title = self.canvas_title
        if title is not None:
            title.text_datum = TextDatum.CR
        if path == "/":
            self.exit_button(_HOME_LABELS[self.language])
            heading = "SD/"
        else:
            self.exit_button("/..")
            subpath = path[:PATH_LIMIT] + "..." if len(path) > PATH_LIMIT else path
            heading = "SD" + subpath
        if title is not None:
            title.draw_string(heading, 540 - 15, 34)

        if self.key_exit is not None:
            self.key_exit.add_args(ButtonEvent.RELEASED, 0, self)
            self.key_exit.bind(ButtonEvent.RELEASED, self._exit_and_delete)

    def _exit_and_delete(self, args: list[Any]) -> None:
        self.gui.pop_frame(True)
        self.is_running = False

    def _open(self, frame: Frame) -> None:
        self.gui.push_frame(frame)
        self.is_running = False

    def _open_folder(self, args: list[Any]) -> None:
        path = args[0].custom_string
        self._open(
            FileIndexFrame(
                self.gui,
                path,
                root=self.root,
                language=self.language,
                images=self.images,
                wallpaper=self.wallpaper,
                open_text=self.open_text,
                open_image=self.open_image,
            )
        )
        log.debug("%s", path)

    def _open_with(self, opener: Opener) -> Callable[[list[Any]], None]:
        def callback(args: list[Any]) -> None:
            path = args[0].custom_string
            self._open(opener(self.gui, path))
            log.debug("%s", path)

        return callback

    def _new_key(self, label: str, path: str) -> Button:
        key = Button(
            KEY_X,
            KEY_Y + len(self.key_files) * KEY_PITCH,
            KEY_WIDTH,
            KEY_HEIGHT,
            display=self.gui.display,
        )
        self.key_files.append(key)
        normal = key.canvas_normal
        normal.fill(0)
        normal.draw_rect(0, 0, KEY_WIDTH, KEY_HEIGHT, 15)
        normal.text_size = LABEL_SIZE
        normal.text_datum = TextDatum.CL
        normal.text_color = 15
        normal.draw_string(label, 47 + 13, 35)
        key.custom_string = path
        normal.text_datum = TextDatum.CR
        return key

    def _icon(self, key: Button, name: str, x: int = 15) -> None:
        icon = self.images.get(name)
        if icon is not None:
            key.canvas_normal.push_image(x, 14, ICON_SIZE, ICON_SIZE, icon)

    @staticmethod
    def _finish_faces(key: Button) -> None:
        key.canvas_pressed.copy_from(key.canvas_normal)
        key.canvas_pressed.reverse_color()

    def list_dir(self, root: str | os.PathLike[str], dirname: str) -> None:
        """Create one key per entry of dirname under root, at most 15 in all."""
        target = Path(root) / dirname.lstrip("/")
        if not target.exists():
            log.debug("Failed to open directory")
            return
        if not target.is_dir():
            log.debug("Not a directory")
            return

        with os.scandir(target) as entries:
            listing = sorted(entries, key=lambda entry: entry.name)
        folders = [_join(dirname, e.name) for e in listing if e.is_dir()]
        files = [(_join(dirname, e.name), e.stat().st_size) for e in listing if not e.is_dir()]

        for path in folders:
            if len(self.key_files) > MAX_BUTTONS:
                break
            key = self._new_key(shorten_name(path), path)
            self._icon(key, "folder")
            self._icon(key, "arrow_right", KEY_WIDTH - 15 - ICON_SIZE)
            self._finish_faces(key)
            key.add_args(ButtonEvent.RELEASED, 0, key)
            key.add_args(ButtonEvent.RELEASED, 1, self)
            key.bind(ButtonEvent.RELEASED, self._open_folder)

        for path, size in files:
            if len(self.key_files) > MAX_BUTTONS:
                break
            label = shorten_name(path)
            key = self._new_key(label, path)
            kind = classify_file(label)
            opener = {FileKind.TEXT: self.open_text, FileKind.IMAGE: self.open_image}.get(kind)
            self._icon(key, kind.value)
            if opener is not None:
                key.add_args(ButtonEvent.RELEASED, 0, key)
                key.add_args(ButtonEvent.RELEASED, 1, self)
                key.bind(ButtonEvent.RELEASED, self._open_with(opener))
            else:
                key.enabled = False
            key.canvas_normal.draw_string(format_size(size), KEY_WIDTH - 15, 35)
            self._finish_faces(key)

    def init(self, args: list[Any]) -> int:
        self.is_running = True
        if not self.key_files:
            self.list_dir(self.root, self.path)
        display = self.gui.display
        if self.wallpaper is not None:
            display.gram.push_image(0, 0, display.width, display.height, self.wallpaper)
        if self.canvas_title is not None:
            self.canvas_title.push(display, 0, 8, UpdateMode.NONE)
        if self.key_exit is not None:
            self.gui.add_object(self.key_exit)
        for key in self.key_files:
            self.gui.add_object(key)
        return 3