"""Terminal front end: key translation, screen drawing and the main loop."""

import argparse
import curses
import re
import textwrap

from zepto.commands import handle_key
from zepto.config import load_config
from zepto.editor import ApplicationMode, Editor
from zepto.events import KeyCode, KeyEvent, Modifiers
from zepto.layout import Rect, split_layout
from zepto.render import (
    Color,
    cursor_position,
    editor_title,
    help_area,
    help_lines,
    parse_color,
    render_editor_lines,
)

_POLL_MS = 50

_SPECIAL_KEYS: dict[int, tuple[KeyCode, Modifiers]] = {
    curses.KEY_LEFT: (KeyCode.LEFT, Modifiers.NONE),
    curses.KEY_RIGHT: (KeyCode.RIGHT, Modifiers.NONE),
    curses.KEY_UP: (KeyCode.UP, Modifiers.NONE),
    curses.KEY_DOWN: (KeyCode.DOWN, Modifiers.NONE),
    curses.KEY_HOME: (KeyCode.HOME, Modifiers.NONE),
    curses.KEY_END: (KeyCode.END, Modifiers.NONE),
    curses.KEY_PPAGE: (KeyCode.PAGE_UP, Modifiers.NONE),
    curses.KEY_NPAGE: (KeyCode.PAGE_DOWN, Modifiers.NONE),
    curses.KEY_DC: (KeyCode.DELETE, Modifiers.NONE),
    curses.KEY_BACKSPACE: (KeyCode.BACKSPACE, Modifiers.NONE),
    curses.KEY_ENTER: (KeyCode.ENTER, Modifiers.NONE),
    curses.KEY_SLEFT: (KeyCode.LEFT, Modifiers.SHIFT),
    curses.KEY_SRIGHT: (KeyCode.RIGHT, Modifiers.SHIFT),
    curses.KEY_SR: (KeyCode.UP, Modifiers.SHIFT),
    curses.KEY_SF: (KeyCode.DOWN, Modifiers.SHIFT),
    curses.KEY_SHOME: (KeyCode.HOME, Modifiers.SHIFT),
    curses.KEY_SEND: (KeyCode.END, Modifiers.SHIFT),
    curses.KEY_SDC: (KeyCode.DELETE, Modifiers.SHIFT),
}

_EXTENDED_KEYS = {
    "LFT": KeyCode.LEFT,
    "RIT": KeyCode.RIGHT,
    "UP": KeyCode.UP,
    "DN": KeyCode.DOWN,
    "HOM": KeyCode.HOME,
    "END": KeyCode.END,
    "DC": KeyCode.DELETE,
    "PRV": KeyCode.PAGE_UP,
    "NXT": KeyCode.PAGE_DOWN,
}
_EXTENDED_PATTERN = re.compile(r"k(LFT|RIT|UP|DN|HOM|END|DC|PRV|NXT)([2-8])")
_MODIFIER_BITS = ((1, Modifiers.SHIFT), (2, Modifiers.ALT), (4, Modifiers.CONTROL))

_BORDERS = {
    "plain": "─│┌┐└┘",
    "rounded": "─│╭╮╰╯",
    "thick": "━┃┏┓┗┛",
}

_NAMED_INDEX = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "gray": 7,
    "darkgray": 8,
    "lightred": 9,
    "lightgreen": 10,
    "lightyellow": 11,
    "lightblue": 12,
    "lightmagenta": 13,
    "lightcyan": 14,
    "white": 15,
}

_ANSI_RGB = (
    (0, 0, 0),
    (128, 0, 0),
    (0, 128, 0),
    (128, 128, 0),
    (0, 0, 128),
    (128, 0, 128),
    (0, 128, 128),
    (192, 192, 192),
    (128, 128, 128),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)


def _extended_key(key: int) -> KeyEvent | None:
    try:
        name = curses.keyname(key).decode("ascii", "replace")
    except (curses.error, ValueError, OverflowError):
        return None
    match = _EXTENDED_PATTERN.fullmatch(name)
    if match is None:
        return None
    bits = int(match.group(2)) - 1
    modifiers = Modifiers.NONE
    for bit, flag in _MODIFIER_BITS:
        if bits & bit:
            modifiers |= flag
    return KeyEvent(_EXTENDED_KEYS[match.group(1)], modifiers=modifiers)


def translate_key(key: str | int) -> KeyEvent | None:
    """Turn a key read from the terminal into a KeyEvent, or None if it means nothing."""
    if isinstance(key, int):
        if key in _SPECIAL_KEYS:
            code, modifiers = _SPECIAL_KEYS[key]
            return KeyEvent(code, modifiers=modifiers)
        if key == curses.KEY_RESIZE:
            return None
        return _extended_key(key)
    if len(key) != 1:
        return None
    if key == "\x1b":
        return KeyEvent(KeyCode.ESC)
    if key in ("\r", "\n"):
        return KeyEvent(KeyCode.ENTER)
    if key == "\t":
        return KeyEvent(KeyCode.TAB)
    if key == "\x7f":
        return KeyEvent(KeyCode.BACKSPACE)
    number = ord(key)
    if 1 <= number <= 26:
        return KeyEvent(KeyCode.CHAR, chr(number + ord("a") - 1), Modifiers.CONTROL)
    if not key.isprintable():
        return None
    modifiers = Modifiers.SHIFT if key.isupper() else Modifiers.NONE
    return KeyEvent(KeyCode.CHAR, key, modifiers)


def _nearest_ansi(rgb: tuple[int, int, int]) -> int:
    return min(
        enumerate(_ANSI_RGB),
        key=lambda item: sum((a - b) ** 2 for a, b in zip(item[1], rgb)),
    )[0]


class _Palette:
    """Allocates curses colour pairs on demand; inert when colours are unavailable."""

    def __init__(self) -> None:
        self._pairs: dict[tuple[int, int], int] = {}
        self._default_fg = self._default_bg = -1
        try:
            self.enabled = curses.has_colors()
            if self.enabled:
                curses.start_color()
                self._colors = curses.COLORS
                self._max_pairs = curses.COLOR_PAIRS
        except curses.error:
            self.enabled = False
            return
        if self.enabled:
            try:
                curses.use_default_colors()
            except curses.error:
                self._default_fg, self._default_bg = 7, 0

    def _fit(self, index: int) -> int:
        if index < self._colors:
            return index
        return index % 8 if self._colors >= 8 else 0

    def _number(self, color: Color | None, default: int) -> int:
        if color is None or color == "reset":
            return default
        if isinstance(color, int):
            return self._fit(color)
        if isinstance(color, str):
            return self._fit(_NAMED_INDEX.get(color, default)) if color in _NAMED_INDEX else default
        if self._colors >= 256:
            r, g, b = (round(component * 5 / 255) for component in color)
            return 16 + 36 * r + 6 * g + b
        return self._fit(_nearest_ansi(color))

    def attr(self, fg: Color | None, bg: Color | None) -> int:
        if not self.enabled:
            return 0
        key = (self._number(fg, self._default_fg), self._number(bg, self._default_bg))
        pair = self._pairs.get(key)
        if pair is None:
            pair = len(self._pairs) + 1
            if pair >= self._max_pairs:
                return 0
            try:
                curses.init_pair(pair, *key)
            except curses.error:
                return 0
            self._pairs[key] = pair
        return curses.color_pair(pair)


class _Painter:
    """Draws text on a curses window, ignoring writes that fall off the edge."""

    def __init__(self, screen) -> None:
        self.screen = screen
        self.palette = _Palette()

    def put(self, y: int, x: int, text: str, fg: Color | None = None, bg: Color | None = None) -> None:
        if not text:
            return
        try:
            self.screen.addstr(y, x, text, self.palette.attr(fg, bg))
        except curses.error:
            pass

    def fill(self, rect: Rect, bg: Color | None) -> None:
        for row in range(rect.y, rect.y + rect.height):
            self.put(row, rect.x, " " * rect.width, None, bg)

    def box(self, rect: Rect, chars: str, fg: Color | None, bg: Color | None) -> None:
        if rect.width < 2 or rect.height < 2:
            return
        horizontal, vertical, top_left, top_right, bottom_left, bottom_right = chars
        right = rect.x + rect.width - 1
        bottom = rect.y + rect.height - 1
        span = horizontal * (rect.width - 2)
        self.put(rect.y, rect.x, top_left + span + top_right, fg, bg)
        for row in range(rect.y + 1, bottom):
            self.put(row, rect.x, vertical, fg, bg)
            self.put(row, right, vertical, fg, bg)
        self.put(bottom, rect.x, bottom_left + span + bottom_right, fg, bg)


def _draw_panel(painter: _Painter, rect: Rect, text: str, bg: Color, fg: Color) -> None:
    if rect.height == 0:
        return
    painter.fill(rect, bg)
    painter.put(rect.y, rect.x, text[: rect.width], fg, bg)


def _draw_editor(painter: _Painter, editor: Editor, layout: tuple[Rect, ...]) -> None:
    section = editor.config.main_section
    area = layout[0]
    lines = render_editor_lines(editor, area)
    background = parse_color(section.background_color, "black")
    painter.fill(area, background)

    frame = section.frame
    if frame.hide:
        inner = Rect(area.x, area.y + min(1, area.height), area.width, max(0, area.height - 1))
        title_x, title_room = area.x, area.width
    else:
        chars = _BORDERS.get(frame.corner, _BORDERS["plain"])
        painter.box(area, chars, parse_color(frame.color, "blue"), background)
        inner = Rect(area.x + 1, area.y + 1, max(0, area.width - 2), max(0, area.height - 2))
        title_x, title_room = area.x + 1, max(0, area.width - 2)
    if area.height:
        painter.put(area.y, title_x, editor_title(editor)[:title_room], None, background)

    limit = inner.x + inner.width
    for row, segments in zip(range(inner.y, inner.y + inner.height), lines):
        x = inner.x
        for segment in segments:
            text = segment.text[: max(0, limit - x)]
            if not text:
                break
            bg = segment.bg if segment.bg is not None else background
            painter.put(row, x, text, segment.fg, bg)
            x += len(text)

    panels = iter(layout[1:])
    status = section.status_panel
    if status.enabled:
        _draw_panel(
            painter,
            next(panels),
            editor.status_message,
            parse_color(status.background_color, "blue"),
            parse_color(status.foreground_color, "white"),
        )
    prompt = section.prompt_panel
    if prompt.enabled:
        _draw_panel(
            painter,
            next(panels),
            editor.prompt_message,
            parse_color(prompt.background_color, "darkgray"),
            parse_color(prompt.foreground_color, "white"),
        )


def _draw_help(painter: _Painter, editor: Editor, size: Rect) -> None:
    area = help_area(size)
    painter.box(area, _BORDERS["plain"], None, None)
    inner_width = max(0, area.width - 2)
    inner_height = max(0, area.height - 2)
    if area.height:
        painter.put(area.y, area.x + 1, "Zepto Help"[:inner_width])
    if inner_width == 0:
        return
    rows = [
        piece.rstrip()
        for line in help_lines(editor.vim_enabled)
        for piece in (textwrap.wrap(line, inner_width, drop_whitespace=False) or [""])
    ]
    for y, text in zip(range(area.y + 1, area.y + 1 + inner_height), rows):
        painter.put(y, area.x + 1 + (inner_width - len(text)) // 2, text)


def _set_cursor_visible(visible: bool) -> None:
    try:
        curses.curs_set(1 if visible else 0)
    except curses.error:
        pass


def run(editor: Editor, screen) -> None:
    """Draw the editor and process keys until a command asks to exit."""
    painter = _Painter(screen)
    screen.keypad(True)
    screen.timeout(_POLL_MS)
    section = editor.config.main_section
    while True:
        height, width = screen.getmaxyx()
        size = Rect(0, 0, width, height)
        layout = split_layout(size, section.status_panel.enabled, section.prompt_panel.enabled)
        area = layout[0]

        screen.erase()
        if editor.application_mode is ApplicationMode.HELP:
            _draw_help(painter, editor, size)
            _set_cursor_visible(False)
        else:
            _draw_editor(painter, editor, layout)
            _set_cursor_visible(True)
            x, y = cursor_position(editor, area)
            try:
                screen.move(y, x)
            except curses.error:
                pass
        screen.refresh()

        try:
            key = screen.get_wch()
        except curses.error:
            continue
        event = translate_key(key)
        if event is not None and handle_key(editor, event, area):
            return


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="zepto", description="A small terminal text editor.")
    parser.add_argument("file", nargs="?", help="file to open")
    args = parser.parse_args(argv)

    editor = Editor(load_config())
    if args.file is not None:
        try:
            editor.open_file(args.file)
        except (OSError, UnicodeDecodeError) as exc:
            editor.status_message = f"Error opening file: {exc}"
    curses.wrapper(lambda screen: run(editor, screen))
    return 0