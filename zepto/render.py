"""Turning editor state into styled lines, titles, cursor positions and help text."""

from dataclasses import dataclass
from itertools import groupby

from zepto.editor import Editor, InputMode
from zepto.layout import Rect

Color = str | int | tuple[int, int, int]

SELECTION_BACKGROUND: Color = (50, 50, 100)

_BASE_NAMES = (
    "reset",
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "gray",
    "darkgray",
    "lightred",
    "lightgreen",
    "lightyellow",
    "lightblue",
    "lightmagenta",
    "lightcyan",
    "white",
)
_HUES = ("red", "green", "yellow", "blue", "magenta", "cyan")
_COLOR_NAMES: dict[str, str] = {
    **{name: name for name in _BASE_NAMES},
    **{f"bright{hue}": f"light{hue}" for hue in _HUES},
    "grey": "gray",
    "lightgray": "gray",
    "lightgrey": "gray",
    "darkgrey": "darkgray",
    "lightblack": "darkgray",
    "brightblack": "darkgray",
    "lightwhite": "white",
    "brightwhite": "white",
}

_HELP_NANO = (
    "--- Help (Nano-like) ---",
    "",
    "Ctrl+X: Exit (prompts to save if modified)",
    "Ctrl+W: Save File",
    "Ctrl+Q: Quit without saving (prompts if modified)",
    "Ctrl+H: Show this Help",
    "",
    "Arrow Keys: Move Cursor",
    "Shift+Arrow Keys: Select Text",
    "Ctrl+C: Copy Selection",
    "Ctrl+U: Cut Selection",
    "Ctrl+V: Paste",
    "Ctrl+Left/Right: Move cursor by word",
    "PageUp/PageDown: Scroll through file",
    "Home/End: Go to start/end of line",
    "Ctrl+Home/Ctrl+End: Go to start/end of file",
    "Backspace: Delete character backward",
    "Delete: Delete character forward",
    "Enter: New line",
    "Esc: Clear selection",
    "",
    "Press ESC or any key to return to editor.",
)

_HELP_VIM = (
    "--- Help (Vim-like) ---",
    "",
    "GLOBAL COMMANDS:",
    "  Ctrl+X: Exit (prompts to save if modified)",
    "  Ctrl+W: Save File",
    "  Ctrl+Q: Quit without saving (prompts if modified)",
    "  Ctrl+H: Show this Help",
    "",
    "NORMAL MODE:",
    "  i: Insert before cursor",
    "  a: Insert after cursor",
    "  o: Insert new line below",
    "  O: Insert new line above",
    "  h, j, k, l: Move cursor (Left, Down, Up, Right)",
    "  w, b: Move cursor by word (Forward, Backward)",
    "  0: Go to start of line",
    "  $: Go to end of line",
    "  x: Delete character under cursor",
    "  Ctrl+C: Copy Selection (Visual Mode needed for full power)",
    "  Ctrl+U: Cut Selection (Visual Mode needed for full power)",
    "  Ctrl+V: Paste",
    "  Esc: Clear selection (if active)",
    "",
    "INSERT MODE:",
    "  Typing: Insert characters",
    "  Enter: New line",
    "  Backspace/Delete: Delete characters",
    "  Arrow Keys: Move cursor",
    "  Shift+Arrow Keys: Select text",
    "  Esc: Exit to Normal Mode",
    "",
    "Press ESC or any key to return to editor.",
)


@dataclass(frozen=True)
class Segment:
    """A run of text drawn with one foreground and background colour."""

    text: str
    fg: Color | None = None
    bg: Color | None = None


def parse_color(value: str, default: Color) -> Color:
    """Parse a colour name, ``#RRGGBB`` or palette index; ``default`` if unrecognised.

    Names come back in canonical lower-case form, hex values as an RGB tuple,
    indices as an int.
    """
    text = value.strip().lower().replace(" ", "").replace("-", "").replace("_", "")
    if text in _COLOR_NAMES:
        return _COLOR_NAMES[text]
    if len(text) == 7 and text.startswith("#"):
        try:
            number = int(text[1:], 16)
        except ValueError:
            return default
        return ((number >> 16) & 0xFF, (number >> 8) & 0xFF, number & 0xFF)
    if text.isdigit() and int(text) <= 255:
        return int(text)
    return default


def editor_title(editor: Editor) -> str:
    name = editor.filename if editor.filename is not None else "[No Name]"
    marker = "(Modified)" if editor.is_dirty() else ""
    return f"Zepto - {name} {marker}"


def _text_width(editor: Editor, area: Rect) -> int:
    numbers = editor.config.main_section.line_numbers
    gutter = numbers.gutter_width + 1 if numbers.enabled else 0
    return max(0, max(0, area.width - 2) - gutter)


def render_editor_lines(editor: Editor, area: Rect) -> list[list[Segment]]:
    """Scroll the cursor into view and return the visible lines as styled segments."""
    numbers = editor.config.main_section.line_numbers
    editor.ensure_cursor_in_view(area)

    height = max(0, area.height - 2)
    start = editor.scroll_y
    end = min(start + height, len(editor.buffer))
    width = _text_width(editor, area)
    number_color = parse_color(numbers.color, "darkgray")
    separator = 1 if numbers.show_separator_line else 0
    number_width = max(1, numbers.gutter_width - separator - 1)
    selection = editor.normalized_selection()

    def selected(row: int, col: int) -> bool:
        return selection is not None and selection[0] <= (row, col) < selection[1]

    rendered = []
    for row, line in enumerate(editor.buffer[start:end], start=start):
        segments: list[Segment] = []
        if numbers.enabled:
            segments.append(Segment(str(row + 1).rjust(number_width), fg=number_color))
            if numbers.show_separator_line:
                segments.append(Segment("|", fg=number_color))
            segments.append(Segment(" "))
        visible = line[editor.scroll_x : editor.scroll_x + width]
        for is_selected, group in groupby(
            enumerate(visible, start=editor.scroll_x),
            key=lambda item: selected(row, item[0]),
        ):
            text = "".join(char for _, char in group)
            segments.append(Segment(text, bg=SELECTION_BACKGROUND if is_selected else None))
        rendered.append(segments)
    return rendered


def cursor_position(editor: Editor, area: Rect) -> tuple[int, int]:
    """Screen (x, y) of the cursor inside the editor area."""
    numbers = editor.config.main_section.line_numbers
    offset = numbers.gutter_width + 1 if numbers.enabled else 1
    rel_x = max(0, editor.cursor_x - editor.scroll_x)
    rel_y = max(0, editor.cursor_y - editor.scroll_y)
    line_length = len(editor.buffer[editor.cursor_y])
    if (
        editor.vim_enabled
        and editor.input_mode is InputMode.NORMAL
        and editor.cursor_x == line_length
        and line_length > 0
    ):
        rel_x = max(0, rel_x - 1)
    return (area.x + offset + rel_x, area.y + 1 + rel_y)


def help_lines(vim: bool) -> list[str]:
    return list(_HELP_VIM if vim else _HELP_NANO)


def help_area(size: Rect) -> Rect:
    """The centred rectangle the help screen occupies."""
    return Rect(size.width // 4, size.height // 4, size.width // 2, size.height // 2)