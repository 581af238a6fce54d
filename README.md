# inkpanel

A small toolkit for building touch-driven user interfaces for 16-level
grey e-paper panels. The panel is modelled in memory: a `Display` holds
a 540x960 canvas of 4-bit grey pixels and records every refresh issued
to it. On top of that sit buttons, multi-state switches, exclusive
switch groups, text boxes, an on-screen keyboard, and full-screen
*frames* that a `Gui` runs one at a time.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

The package has no runtime dependencies.

## Modules

- `inkpanel.display`: `Canvas`, `Display`, `UpdateMode` and `TextDatum`.
  A `Canvas` stores pixels and a list of the strings drawn on it
  (text, position, size, colour, datum); it can fill, draw rectangles,
  paste packed 4bpp images, invert itself, copy another canvas, and be
  pushed to a `Display` (`push`) or onto another canvas (`push_to`).
  `Display.updates` lists the refreshed areas with their mode and
  `Display.update_count` counts them; mode `UpdateMode.NONE` writes the
  memory without counting a refresh.
- `inkpanel.widget`: `Widget`, the abstract base of every control, and
  `align4`, which rounds x positions and widths up to a multiple of four
  (wrapping as a signed 16-bit value). `is_in_box` hit-tests strictly
  inside the rectangle; `(-1, -1)` means "no touch".
- `inkpanel.button`: `Button`, with `ButtonEvent` and `ButtonStyle`.
  Callbacks bound to `PRESSED` and `RELEASED` receive the list built
  with `add_args`. Also `set_label` and `set_bmp_button`.
- `inkpanel.switch`: `Switch`, cycling through up to five states on each
  tap and calling the callback bound to the state it lands on.
- `inkpanel.mutexswitch`: `MutexSwitch`, a group of switches; while
  `exclusive` is true, selecting one resets the others to state 0.
- `inkpanel.textbox`: `Textbox`, a bordered text field. `add_text`
  treats `"\b"` as backspace; touching a text box gives it focus and
  takes focus from the others.
- `inkpanel.keyboard`: `Keyboard` with `Language`, `KeyboardStyle` and
  `Layout`. It lays out 32 keys horizontally or vertically, switches
  between lower case, upper case, numbers and symbols, and collects
  typed characters (`"\b"` for backspace, `"\n"` for the wrap/confirm
  key) until `take_data()` returns and clears them.
- `inkpanel.gui`: `Gui`, `Frame` and `TouchEvent`. `Gui` keeps the
  registered widgets, the frame stack and named frames with their init
  arguments, drops repeated touch readings, and after a release issues a
  full `GL16` refresh once more than four refreshes have piled up (when
  auto update is on). Idle power saving is opt-in: pass
  `prompt_after_ms` and/or `shutdown_after_ms` (and `on_shutdown`) to
  `Gui`; frames then show a footer prompt and finally set
  `gui.shutdown_requested` and call `on_shutdown`.
- Ready-made frames:
  - `inkpanel.frame_compare.CompareFrame`: one key per update mode, each
    redrawing a grey ramp with that mode and showing the time it took;
    plus `mode_description` and `draw_compare_canvas`.
  - `inkpanel.frame_home.HomeFrame`: four on/off tiles and two air
    conditioners whose plus/minus keys are enabled only while switched on.
  - `inkpanel.frame_fileindex.FileIndexFrame`: lists up to 15 entries of
    a directory (folders first, then files) under a local `root`, with
    `classify_file`, `shorten_name` and `format_size`.
  - `inkpanel.frame_glucose.GlucoseFrame`: a titled frame with no
    widgets.

## Example

```python
from inkpanel.button import Button, ButtonEvent
from inkpanel.display import Display

display = Display()
ok = Button(20, 20, 120, 60, "OK", display=display)

pressed = []
ok.bind(ButtonEvent.RELEASED, lambda args: pressed.append(list(args)))
ok.add_args(ButtonEvent.RELEASED, 0, "ok")

ok.update_state(50, 40)    # finger down inside the button
ok.update_state(-1, -1)    # finger lifted
assert pressed == [["ok"]]
```

A frame is a subclass of `Frame` whose `init(args)` adds its widgets
with `gui.add_object`. `Gui.push_frame` puts it on the stack and
`Gui.main_loop` runs the top frame, polling the `touch_source` callable
given to `Gui` for `TouchEvent`s until the frame's `run()` returns 0 or
its `is_running` becomes false. `Gui` also takes a `clock` callable
returning milliseconds, which makes the loop easy to drive in tests.

## What it does not do

- It does not drive a real panel or touch controller: `Display` only
  keeps pixels and a log of refreshes in memory, and touches come from
  whatever `touch_source` you supply.
- Text is not rasterised: strings are recorded on canvases, not turned
  into glyph pixels.
- There is no text reader or picture viewer screen. `FileIndexFrame`
  opens text and image files only through the `open_text` and
  `open_image` callables you pass it; without them those entries are
  disabled.
- There is no command-line program and no application assembling the
  frames into a launcher; you build the `Gui` and frame stack yourself.
- Icons and wallpapers are not bundled; frames take them as optional
  packed 4bpp byte sequences.

## Tests

```
pytest
```