import pytest

from inkpanel.button import Button
from inkpanel.frame_home import (
    DEGREE,
    HomeFrame,
    adjust_air_temperature,
    disable_air_keys,
    enable_air_keys,
)
from inkpanel.gui import Gui
from inkpanel.keyboard import Language
from inkpanel.switch import Switch


@pytest.fixture
def gui():
    return Gui(clock=lambda: 0)


@pytest.fixture
def frame(gui):
    frame = HomeFrame(gui)
    gui.push_frame(frame)
    frame.init([])
    return frame


def tap(gui, x, y):
    gui.process(x, y)
    gui.process()


def texts(canvas):
    return [t[0] for t in canvas.texts]


def make_pair(operation):
    switch = Switch(2, 20, 20, 100, 100)
    switch.custom_string = "26"
    key = Button(200, 20, 40, 40)
    key.custom_string = operation
    return key, switch


def test_adjust_ignored_when_switch_off():
    key, switch = make_pair("1")
    adjust_air_temperature([key, switch])
    assert switch.custom_string == "26"
    assert switch.display.updates == []


def test_adjust_raises_and_lowers():
    key, switch = make_pair("1")
    switch.set_state(1)
    before = int(switch.custom_string)
    adjust_air_temperature([key, switch])
    assert int(switch.custom_string) == before + 1
    assert f"{before + 1}{DEGREE}" in texts(switch.canvas(1))
    minus = Button(200, 80, 40, 40)
    minus.custom_string = "0"
    adjust_air_temperature([minus, switch])
    adjust_air_temperature([minus, switch])
    assert int(switch.custom_string) == before - 1
    assert f"{before + 1}{DEGREE}" not in texts(switch.canvas(1))


def test_enable_and_disable_keys():
    first, second = Button(0, 0, 10, 10), Button(20, 0, 10, 10)
    disable_air_keys([first, second, None])
    assert (first.enabled, second.enabled) == (False, False)
    enable_air_keys([first, second, None])
    assert (first.enabled, second.enabled) == (True, True)


def test_init_registers_widgets(gui):
    frame = HomeFrame(gui)
    assert frame.init([]) == 3
    assert len(gui.objects) == 11
    assert gui.objects[-1] is frame.key_exit


def test_air_keys_start_disabled(frame):
    keys = (frame.key_air_1_plus, frame.key_air_1_minus,
            frame.key_air_2_plus, frame.key_air_2_minus)
    assert not any(key.enabled for key in keys)


def test_air_switch_faces(frame):
    assert "OFF" in texts(frame.sw_air_1.canvas(0))
    assert "Bedroom" in texts(frame.sw_air_1.canvas(0))
    assert f"26{DEGREE}" in texts(frame.sw_air_1.canvas(1))
    assert "Living Room" in texts(frame.sw_air_2.canvas(1))
    assert frame.sw_air_2.custom_string == "26"


def test_turning_on_conditioner_enables_keys_and_adjusts(gui, frame):
    tap(gui, 100, 700)
    assert frame.sw_air_1.state == 1
    assert frame.key_air_1_plus.enabled and frame.key_air_1_minus.enabled
    assert not frame.key_air_2_plus.enabled
    before = int(frame.sw_air_1.custom_string)
    tap(gui, 180, 880)
    assert int(frame.sw_air_1.custom_string) == before + 1
    tap(gui, 60, 880)
    assert int(frame.sw_air_1.custom_string) == before
    tap(gui, 100, 700)
    assert frame.sw_air_1.state == 0
    assert not frame.key_air_1_plus.enabled


def test_exit_key(gui, frame):
    tap(gui, 50, 30)
    assert frame.is_running is False
    assert gui.frame_stack == []


def test_language_texts(gui):
    frame = HomeFrame(gui, Language.JA)
    assert "\u30b3\u30f3\u30c8\u30ed\u30fc\u30eb\u30d1\u30cd\u30eb" in texts(frame.canvas_title)
    assert "\u30e9\u30f3\u30d7" in texts(frame.sw_light1.canvas(0))
    assert "\u30e9\u30f3\u30d7" in texts(frame.sw_light1.canvas(1))


def test_init_switch_images(gui):
    background = bytes([0x11]) * (228 * 228 // 2)
    frame = HomeFrame(gui, images={"button_background": background})
    switch = Switch(2, 0, 0, 228, 228, display=gui.display)
    frame.init_switch(switch, "Lamp", "Hall",
                      bytes([0x22]) * (92 * 92 // 2), bytes([0x33]) * (92 * 92 // 2))
    assert switch.canvas(0)[0, 0] == 1
    assert switch.canvas(1)[0, 0] == 1
    assert switch.canvas(0)[68, 20] == 2
    assert switch.canvas(1)[68, 20] == 3
    assert texts(switch.canvas(1)) == ["Lamp", "Hall"]


def test_unknown_image_name_rejected(gui):
    with pytest.raises(ValueError):
        HomeFrame(gui, images={"wallpaper": b"\x00"})