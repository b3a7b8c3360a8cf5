# zepto

A small text editor that runs in the terminal and uses curses. By default it
works like nano: you type straight into the buffer and use control keys for
commands. You can also turn on vim-like modal editing.

## Installation

```
pip install .
```

The editor needs Python's `curses` module, so it runs on POSIX systems.

## Usage

```
zepto [FILE]
```

If you give a file, the editor opens it at start-up. If the file cannot be
read, the status line shows the error and you get an empty buffer. Without a
file you start with an empty buffer that has no file name.

When you save, the editor writes the lines joined with `\n` and adds no final
line break. A buffer without a file name cannot be saved. The status line
then shows `No filename. Cannot save.`

The title bar shows the file name, or `[No Name]`, and `(Modified)` when the
buffer differs from what you last opened or saved.

### Keys in every mode

| Key    | Action |
|--------|--------|
| Ctrl+X | If text is selected, cut it. If the buffer is modified, ask `Save modified buffer? (Y/N)`. Otherwise exit. |
| Ctrl+Q | If the buffer is modified, ask `Quit without saving? (Y/N)`. Otherwise exit. |
| Ctrl+W | Save the file |
| Ctrl+H | Show the help screen |

When one of these questions is showing, `y`/`Y` saves and exits. If saving
fails, the error is shown and you go back to editing. `n`/`N` exits without
saving. `Esc` goes back to editing.

To leave the help screen, press `Esc`, `h` or `Enter`.

### Nano-like editing (the default)

| Key                    | Action                                    |
|------------------------|-------------------------------------------|
| Printable keys         | Insert the character                      |
| Enter                  | Split the line                            |
| Backspace / Delete     | Delete backward / forward (or the selection) |
| Arrow keys             | Move the cursor                           |
| Shift+Arrow keys       | Select text                               |
| Ctrl+Left / Ctrl+Right | Move by word                              |
| Home / End             | Start / end of line                       |
| Ctrl+Home / Ctrl+End   | Start / end of file                       |
| PageUp / PageDown      | Move by one screen                        |

In this mode the only clipboard action is cutting the selection with Ctrl+X.
You can copy and paste only in vim-like normal mode.

### Vim-like editing

Set `vim = true` under `[editor_behavior]` in the configuration file. The
editor then starts in normal mode. These keys work there:

- `i` enters insert mode. `a` enters insert mode one place to the right.
- `o` opens a new line below the cursor. `O` opens one above. Both enter insert mode.
- `h`, `j`, `k`, `l` and the arrow keys move the cursor. Hold Shift with the arrow keys to select.
- `w` and `b` move by word.
- `0` and `$` go to the start or end of the line.
- `x` deletes the character under the cursor.
- Ctrl+C copies the selection, Ctrl+U cuts it and Ctrl+V pastes.
- `Esc` clears the selection.

In insert mode the keys work as in the nano-like table. `Esc` goes back to
normal mode.

Some terminals use Ctrl+C, Ctrl+Q or Ctrl+V for their own purposes. Those
keys may never reach the editor. Ctrl+C in particular interrupts the program.

## Configuration

The configuration file is `config.toml` in the `zepto` folder of your user
configuration directory. The `platformdirs` package finds that directory. If
the editor cannot read the file, it uses the defaults and tries to write a
default file in its place. If the file does not parse or has values of the
wrong type, the defaults are used. Any key you leave out keeps its default
value.

```toml
[main_section]
background_color = "#000000"

[main_section.frame]
corner = "plain"        # plain, rounded or thick
margin = 0
color = "#0000FF"
hide = false

[main_section.line_numbers]
enabled = true
color = "#808080"
gutter_width = 5
show_separator_line = false

[main_section.status_panel]
enabled = true
background_color = "#0000FF"
foreground_color = "#FFFFFF"

[main_section.prompt_panel]
enabled = true
background_color = "#808080"
foreground_color = "#FFFFFF"

[editor_behavior]
vim = false
```

A colour can be written in any of these forms:

- a name such as `blue`, `darkgray` or `lightred`
- a `#RRGGBB` value
- a palette index from 0 to 255

The editor uses a fallback colour for any value it does not recognise.
Integer settings must lie between 0 and 65535.

## Using it from Python

- `zepto.config`:
  - The dataclasses `Config`, `MainSection`, `Frame`, `LineNumbers`, `StatusPanel`, `PromptPanel` and `EditorBehavior`.
  - `parse_config(text)`, which raises `ConfigError`.
  - `load_config(path)` and `default_config_path()`.
  - `Config.from_dict`, `Config.to_dict` and `Config.to_toml`.
- `zepto.events`: `KeyCode`, `Modifiers` and `KeyEvent`.
- `zepto.layout`: `Rect` and `split_layout(area, status_enabled, prompt_enabled)`.
- `zepto.editor`:
  - `Editor`, which holds the buffer, cursor, scroll, selection and clipboard, with its editing methods.
  - `ApplicationMode`, `InputMode` and `NoFilenameError`.
- `zepto.commands`: `handle_key(editor, event, area)`, which returns `True` when the editor should exit, and the handlers for each mode.
- `zepto.render`:
  - `parse_color`, `editor_title`, `render_editor_lines` (which returns lines of `Segment`s) and `cursor_position`.
  - `help_lines` and `help_area`.
- `zepto.app`: `translate_key`, `run(editor, screen)` and `main(argv)`.

```python
from zepto.commands import handle_key
from zepto.config import parse_config
from zepto.editor import Editor
from zepto.events import KeyCode, KeyEvent
from zepto.layout import Rect

editor = Editor(parse_config("[editor_behavior]\nvim = false\n"))
area = Rect(0, 0, 80, 22)
for char in "hi":
    handle_key(editor, KeyEvent(KeyCode.CHAR, char), area)
handle_key(editor, KeyEvent(KeyCode.ENTER), area)
print(editor.buffer)   # ['hi', '']
```

## What it does not do

The editor has none of these:

- a way to name the file from inside the editor ("save as")
- search
- undo
- syntax highlighting
- line wrapping (long lines scroll sideways)

The Tab key does nothing. The `margin` setting is read but has no effect on
the screen.