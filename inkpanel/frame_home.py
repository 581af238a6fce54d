"""Home-control screen: light and socket toggles plus two air conditioners."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from inkpanel.button import Button, ButtonEvent
from inkpanel.display import Canvas, TextDatum, UpdateMode
from inkpanel.gui import Frame, Gui
from inkpanel.keyboard import Language
from inkpanel.switch import Switch

TILE_SIZE = 228
AIR_HEIGHT = 184
ICON_SIZE = 92
DEGREE = "\u2103"
DEFAULT_TEMPERATURE = 26

IMAGE_NAMES = frozenset(
    {
        "button_background",
        "air_background",
        "air_background_right",
        "air_background_left",
        "light_off",
        "light_on",
        "socket_off",
        "socket_on",
        "conditioner_off",
        "conditioner_on",
    }
)

# ((title, subtitle) for light1, light2, socket1, socket2), (air1 room, air2 room),
# (exit key, screen title)
_TEXTS = {
    Language.JA: (
        (
            ("\u30e9\u30f3\u30d7", "\u5ba2\u9593"),
            ("\u30e9\u30f3\u30d7", "\u5bdd\u5ba4"),
            ("\u70ca\u98ef\u5668", "\u53a8\u623f"),
            ("\u30d1\u30bd\u30b3\u30f3", "\u5bdd\u5ba4"),
        ),
        ("\u5bdd\u5ba4", "\u5ba2\u9593"),
        ("\u30db\u30fc\u30e0", "\u30b3\u30f3\u30c8\u30ed\u30fc\u30eb\u30d1\u30cd\u30eb"),
    ),
    Language.ZH: (
        (
            ("\u5438\u9876\u706f", "\u5ba2\u5385"),
            ("\u53f0\u706f", "\u5367\u5ba4"),
            ("\u7535\u996d\u7172", "\u53a8\u623f"),
            ("\u7535\u8111", "\u5367\u5ba4"),
        ),
        ("\u5367\u5ba4", "\u5ba2\u5385"),
        ("\u4e3b\u9875", "\u63a7\u5236\u9762\u677f"),
    ),
    Language.EN: (
        (
            ("Ceiling Light", "Living Room"),
            ("Table Lamp", "Bedroom"),
            ("Rice Cooker", "Kitchen"),
            ("Computer", "Bedroom"),
        ),
        ("Bedroom", "Living Room"),
        ("Home", "Control Panel"),
    ),
}


def _erase_texts(canvas: Canvas, x: int, y: int, w: int, h: int) -> None:
    """Forget strings anchored inside a rectangle that is being painted over."""
    canvas.texts[:] = [
        item for item in canvas.texts if not (x <= item[1] < x + w and y <= item[2] < y + h)
    ]


def adjust_air_temperature(args: list[Any]) -> None:
    """Raise (key "1") or lower the set temperature of a switched-on conditioner."""
    key, switch = args[0], args[1]
    operation = int(key.custom_string)
    if switch.state == 0:
        return
    temperature = int(switch.custom_string)
    temperature += 1 if operation == 1 else -1
    switch.custom_string = str(temperature)
    canvas = switch.canvas(1)
    canvas.text_size = 36
    canvas.text_datum = TextDatum.TC
    canvas.fill_rect(114 - 100, 108, 200, 38, 0)
    _erase_texts(canvas, 114 - 100, 108, 200, 38)
    canvas.draw_string(f"{temperature}{DEGREE}", 114, 108)
    canvas.push(switch.display, switch.x, switch.y, UpdateMode.A2)


def disable_air_keys(args: list[Any]) -> None:
    args[0].enabled = False
    args[1].enabled = False


def enable_air_keys(args: list[Any]) -> None:
    args[0].enabled = True
    args[1].enabled = True


class HomeFrame(Frame):
    """Four on/off tiles and two conditioners with plus and minus keys."""

    def __init__(
        self,
        gui: Gui,
        language: Language = Language.EN,
        images: Mapping[str, Sequence[int]] | None = None,
    ) -> None:
        super().__init__(gui)
        self.images = dict(images or {})
        unknown = set(self.images) - IMAGE_NAMES
        if unknown:
            raise ValueError(f"unknown image names: {', '.join(sorted(unknown))}")
        display = gui.display
        tiles, rooms, (exit_label, title) = _TEXTS[Language(language)]

        self.sw_light1 = Switch(2, 20, 44 + 72, TILE_SIZE, TILE_SIZE, display=display)
        self.sw_light2 = Switch(2, 288, 44 + 72, TILE_SIZE, TILE_SIZE, display=display)
        self.sw_socket1 = Switch(2, 20, 324 + 72, TILE_SIZE, TILE_SIZE, display=display)
        self.sw_socket2 = Switch(2, 288, 324 + 72, TILE_SIZE, TILE_SIZE, display=display)
        self.sw_air_1 = Switch(2, 20, 604 + 72, TILE_SIZE, AIR_HEIGHT, display=display)
        self.sw_air_2 = Switch(2, 288, 604 + 72, TILE_SIZE, AIR_HEIGHT, display=display)
        keys_y = 604 + 72 + AIR_HEIGHT
        self.key_air_1_plus = Button(20 + 116, keys_y, 112, 44, display=display)
        self.key_air_1_minus = Button(20, keys_y, 116, 44, display=display)
        self.key_air_2_plus = Button(288 + 116, keys_y, 112, 44, display=display)
        self.key_air_2_minus = Button(288, keys_y, 116, 44, display=display)

        for key in (self.key_air_1_plus, self.key_air_2_plus):
            key.custom_string = "1"
        for key in (self.key_air_1_minus, self.key_air_2_minus):
            key.custom_string = "0"
        for key, switch in (
            (self.key_air_1_plus, self.sw_air_1),
            (self.key_air_1_minus, self.sw_air_1),
            (self.key_air_2_plus, self.sw_air_2),
            (self.key_air_2_minus, self.sw_air_2),
        ):
            key.add_args(ButtonEvent.RELEASED, 0, key)
            key.add_args(ButtonEvent.RELEASED, 1, switch)
            key.bind(ButtonEvent.RELEASED, adjust_air_temperature)

        light_off, light_on = self.images.get("light_off"), self.images.get("light_on")
        socket_off, socket_on = self.images.get("socket_off"), self.images.get("socket_on")
        for switch, (tile_title, subtitle), off, on in zip(
            (self.sw_light1, self.sw_light2, self.sw_socket1, self.sw_socket2),
            tiles,
            (light_off, light_off, socket_off, socket_off),
            (light_on, light_on, socket_on, socket_on),
        ):
            self.init_switch(switch, tile_title, subtitle, off, on)

        for switch, room in zip((self.sw_air_1, self.sw_air_2), rooms):
            self._init_air_switch(switch, room)

        for key, name in (
            (self.key_air_1_plus, "air_background_right"),
            (self.key_air_2_plus, "air_background_right"),
            (self.key_air_1_minus, "air_background_left"),
            (self.key_air_2_minus, "air_background_left"),
        ):
            background = self.images.get(name)
            if background is not None:
                key.canvas_normal.push_image(0, 0, key.w, key.h, background)
            key.canvas_pressed.copy_from(key.canvas_normal)
            key.canvas_pressed.reverse_color()
            key.enabled = False

        for switch, plus, minus in (
            (self.sw_air_1, self.key_air_1_plus, self.key_air_1_minus),
            (self.sw_air_2, self.key_air_2_plus, self.key_air_2_minus),
        ):
            for state, callback in ((0, disable_air_keys), (1, enable_air_keys)):
                switch.add_args(state, 0, plus)
                switch.add_args(state, 1, minus)
                switch.add_args(state, 2, switch)
                switch.bind(state, callback)

        self.exit_button(exit_label)
        if self.canvas_title is not None:
            self.canvas_title.draw_string(title, 270, 34)
        if self.key_exit is not None:
            self.key_exit.add_args(ButtonEvent.RELEASED, 0, self)
            self.key_exit.bind(ButtonEvent.RELEASED, self.exit_callback)

    def _init_air_switch(self, switch: Switch, room: str) -> None:
        off, on = switch.canvas(0), switch.canvas(1)
        background = self.images.get("air_background")
        if background is not None:
            off.push_image(0, 0, TILE_SIZE, AIR_HEIGHT, background)
        off.text_datum = TextDatum.TC
        off.text_size = 26
        off.draw_string(room, 114, 152)
        on.copy_from(off)
        off.text_size = 36
        off.draw_string("OFF", 114, 108)
        on.text_size = 36
        on.text_datum = TextDatum.TC
        on.draw_string(f"{DEFAULT_TEMPERATURE}{DEGREE}", 114, 108)
        switch.custom_string = str(DEFAULT_TEMPERATURE)
        for canvas, name in ((off, "conditioner_off"), (on, "conditioner_on")):
            icon = self.images.get(name)
            if icon is not None:
                canvas.push_image(68, 12, ICON_SIZE, ICON_SIZE, icon)

    def init_switch(
        self,
        switch: Switch,
        title: str,
        subtitle: str,
        image_off: Sequence[int] | None,
        image_on: Sequence[int] | None,
    ) -> None:
        """Paint a tile's two faces: shared background and text, one icon each."""
        off, on = switch.canvas(0), switch.canvas(1)
        background = self.images.get("button_background")
        if background is not None:
            off.push_image(0, 0, TILE_SIZE, TILE_SIZE, background)
        off.text_size = 36
        off.text_datum = TextDatum.TC
        off.draw_string(title, 114, 136)
        off.text_size = 26
        off.draw_string(subtitle, 114, 183)
        on.copy_from(off)
        if image_off is not None:
            off.push_image(68, 20, ICON_SIZE, ICON_SIZE, image_off)
        if image_on is not None:
            on.push_image(68, 20, ICON_SIZE, ICON_SIZE, image_on)

    def init(self, args: list[Any]) -> int:
        self.is_running = True
        self.gui.display.clear()
        if self.canvas_title is not None:
            self.canvas_title.push(self.gui.display, 0, 8, UpdateMode.NONE)
        for widget in (
            self.sw_light1,
            self.sw_light2,
            self.sw_socket1,
            self.sw_socket2,
            self.sw_air_1,
            self.sw_air_2,
            self.key_air_1_plus,
            self.key_air_1_minus,
            self.key_air_2_plus,
            self.key_air_2_minus,
            self.key_exit,
        ):
            if widget is not None:
                self.gui.add_object(widget)
        return 3