"""Text buffer, cursor, scrolling, selection and clipboard state of the editor."""

import enum
from pathlib import Path

from zepto.config import Config
from zepto.layout import Rect

NORMAL_STATUS = "-- NORMAL --"
INSERT_STATUS = "-- INSERT --"
HELP_STATUS = "-- HELP --"
HINT_STATUS = "Ctrl+X Exit | Ctrl+W Save | Ctrl+H Help"
NO_FILENAME_STATUS = "No filename. Cannot save."

Position = tuple[int, int]


class ApplicationMode(enum.Enum):
    EDITING = enum.auto()
    HELP = enum.auto()
    PROMPT_SAVE = enum.auto()


class InputMode(enum.Enum):
    NORMAL = enum.auto()
    INSERT = enum.auto()


class NoFilenameError(OSError):
    """Raised when saving a buffer that has no file name."""


def _split_lines(content: str) -> list[str]:
    """Split text into lines; a final line break adds no empty line."""
    parts = content.split("\n")
    last = parts.pop()
    lines = [part.removesuffix("\r") for part in parts]
    if last:
        lines.append(last)
    return lines


class Editor:
    """The editing state: buffer lines, cursor, scroll offsets and selection."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else Config()
        self.vim_enabled = self.config.editor_behavior.vim
        self.buffer: list[str] = [""]
        self.cursor_x = 0
        self.cursor_y = 0
        self.scroll_x = 0
        self.scroll_y = 0
        self.filename: str | None = None
        self.application_mode = ApplicationMode.EDITING
        if self.vim_enabled:
            self.input_mode = InputMode.NORMAL
            self.status_message = NORMAL_STATUS
        else:
            self.input_mode = InputMode.INSERT
            self.status_message = HINT_STATUS
        self.prompt_message = ""
        self.clipboard = ""
        self.selection_start: Position | None = None
        self.selection_end: Position | None = None
        self._saved: tuple[str, ...] = tuple(self.buffer)

    def _mark_clean(self) -> None:
        self._saved = tuple(self.buffer)

    def is_dirty(self) -> bool:
        return tuple(self.buffer) != self._saved

    def open_file(self, path: str | Path) -> None:
        """Load ``path`` into the buffer; raises OSError if it cannot be read."""
        with open(path, encoding="utf-8", newline="") as handle:
            content = handle.read()
        self.buffer = _split_lines(content) or [""]
        self.filename = str(path)
        self._mark_clean()
        if not self.vim_enabled:
            self.status_message = f"Opened: {path}"
        self.cursor_x = self.cursor_y = 0
        self.scroll_x = self.scroll_y = 0
        self.clear_selection()

    def save_file(self) -> None:
        """Write the buffer to its file; raises NoFilenameError without one."""
        if self.filename is None:
            self.status_message = NO_FILENAME_STATUS
            raise NoFilenameError("No filename")
        with open(self.filename, "w", encoding="utf-8", newline="") as handle:
            handle.write("\n".join(self.buffer))
        self._mark_clean()
        self.status_message = f"Saved {len(self.buffer)} lines to {self.filename}"

    def clear_selection(self) -> None:
        self.selection_start = None
        self.selection_end = None

    def normalized_selection(self) -> tuple[Position, Position] | None:
        """The selection as (start, end) with start not after end, or None."""
        if self.selection_start is None or self.selection_end is None:
            return None
        return (
            min(self.selection_start, self.selection_end),
            max(self.selection_start, self.selection_end),
        )

    def delete_selected_text(self, area: Rect) -> None:
        selection = self.normalized_selection()
        if selection is None:
            return
        (start_row, start_col), (end_row, end_col) = selection
        if start_row == end_row:
            line = self.buffer[start_row]
            self.buffer[start_row] = line[:start_col] + line[end_col:]
        else:
            joined = self.buffer[start_row][:start_col] + self.buffer[end_row][end_col:]
            self.buffer[start_row : end_row + 1] = [joined]
        self.cursor_y = start_row
        self.cursor_x = start_col
        self.clear_selection()
        self.ensure_cursor_in_view(area)

    def _text_width(self, area: Rect) -> int:
        numbers = self.config.main_section.line_numbers
        gutter = numbers.gutter_width + 1 if numbers.enabled else 0
        return max(0, max(0, area.width - 2) - gutter)

    def ensure_cursor_in_view(self, area: Rect) -> None:
        """Adjust scroll offsets so the cursor lies inside the visible text area."""
        width = self._text_width(area)
        height = max(0, area.height - 2)

        if self.cursor_y < self.scroll_y:
            self.scroll_y = self.cursor_y
        elif self.cursor_y >= self.scroll_y + height:
            self.scroll_y = self.cursor_y - height + 1

        if self.cursor_x < self.scroll_x:
            self.scroll_x = self.cursor_x
        elif self.cursor_x >= self.scroll_x + width:
            self.scroll_x = self.cursor_x - width + 1

        self.scroll_y = min(self.scroll_y, max(0, len(self.buffer) - 1))

        if self.cursor_y < len(self.buffer):
            line_length = len(self.buffer[self.cursor_y])
            self.scroll_x = min(self.scroll_x, max(0, line_length - width))
        else:
            self.scroll_x = 0
        self.cursor_x = min(self.cursor_x, len(self.buffer[self.cursor_y]))

    def update_selection_on_move(self, shift: bool) -> None:
        if shift:
            if self.selection_start is None:
                self.selection_start = (self.cursor_y, self.cursor_x)
            self.selection_end = (self.cursor_y, self.cursor_x)
        else:
            self.clear_selection()

    def _after_move(self, area: Rect, shift: bool) -> None:
        self.update_selection_on_move(shift)
        self.ensure_cursor_in_view(area)

    def move_left(self, area: Rect, shift: bool) -> None:
        if self.cursor_x > 0:
            self.cursor_x -= 1
        elif self.cursor_y > 0:
            self.cursor_y -= 1
            self.cursor_x = len(self.buffer[self.cursor_y])
        self._after_move(area, shift)

    def move_right(self, area: Rect, shift: bool) -> None:
        if self.cursor_x < len(self.buffer[self.cursor_y]):
            self.cursor_x += 1
        elif self.cursor_y < len(self.buffer) - 1:
            self.cursor_y += 1
            self.cursor_x = 0
        self._after_move(area, shift)

    def move_up(self, area: Rect, shift: bool) -> None:
        if self.cursor_y > 0:
            self.cursor_y -= 1
            self.cursor_x = min(self.cursor_x, len(self.buffer[self.cursor_y]))
        self._after_move(area, shift)

    def move_down(self, area: Rect, shift: bool) -> None:
        if self.cursor_y < len(self.buffer) - 1:
            self.cursor_y += 1
            self.cursor_x = min(self.cursor_x, len(self.buffer[self.cursor_y]))
        self._after_move(area, shift)

    def move_word_left(self, area: Rect, shift: bool) -> None:
        if self.cursor_x == 0:
            if self.cursor_y == 0:
                return
            self.cursor_y -= 1
            self.cursor_x = len(self.buffer[self.cursor_y])
        line = self.buffer[self.cursor_y]
        while self.cursor_x > 0 and not line[self.cursor_x - 1].isalnum():
            self.cursor_x -= 1
        while self.cursor_x > 0 and line[self.cursor_x - 1].isalnum():
            self.cursor_x -= 1
        self._after_move(area, shift)

    def move_word_right(self, area: Rect, shift: bool) -> None:
        if self.cursor_x == len(self.buffer[self.cursor_y]):
            if self.cursor_y >= len(self.buffer) - 1:
                return
            self.cursor_y += 1
            self.cursor_x = 0
        line = self.buffer[self.cursor_y]
        while self.cursor_x < len(line) and line[self.cursor_x].isalnum():
            self.cursor_x += 1
        while self.cursor_x < len(line) and not line[self.cursor_x].isalnum():
            self.cursor_x += 1
        self._after_move(area, shift)

    def selected_text(self) -> str | None:
        selection = self.normalized_selection()
        if selection is None:
            return None
        (start_row, start_col), (end_row, end_col) = selection
        if start_row == end_row:
            return self.buffer[start_row][start_col:end_col]
        pieces = [
            self.buffer[start_row][start_col:],
            *self.buffer[start_row + 1 : end_row],
            self.buffer[end_row][:end_col],
        ]
        return "\n".join(pieces)

    def copy_selection(self) -> None:
        text = self.selected_text()
        if text is None:
            self.status_message = "No selection to copy."
            return
        self.clipboard = text
        self.status_message = f"Copied {len(text)} characters."

    def cut_selection(self, area: Rect) -> None:
        text = self.selected_text()
        if text is None:
            self.status_message = "No selection to cut."
            return
        self.clipboard = text
        self.delete_selected_text(area)
        self.status_message = f"Cut {len(text)} characters."

    def insert_text(self, text: str, area: Rect) -> None:
        """Insert possibly multi-line text at the cursor, replacing any selection."""
        if self.selection_start is not None:
            self.delete_selected_text(area)
        first, *rest = text.split("\n")
        line = self.buffer[self.cursor_y]
        remaining = line[self.cursor_x :]
        self.buffer[self.cursor_y] = line[: self.cursor_x] + first
        self.cursor_x += len(first)
        if rest:
            *middle, last = rest
            for part in middle:
                self.buffer.insert(self.cursor_y + 1, part)
                self.cursor_y += 1
            self.buffer.insert(self.cursor_y + 1, last + remaining)
            self.cursor_y += 1
            self.cursor_x = len(last)
        else:
            self.buffer[self.cursor_y] += remaining
        self.ensure_cursor_in_view(area)

    def paste(self, area: Rect) -> None:
        content = self.clipboard
        if not content:
            self.status_message = "Clipboard is empty."
            return
        self.insert_text(content, area)
        self.status_message = f"Pasted {len(content)} characters."

    def insert_char(self, char: str, area: Rect) -> None:
        self.clear_selection()
        line = self.buffer[self.cursor_y]
        self.buffer[self.cursor_y] = line[: self.cursor_x] + char + line[self.cursor_x :]
        self.cursor_x += 1
        self.ensure_cursor_in_view(area)

    def insert_newline(self, area: Rect) -> None:
        self.clear_selection()
        line = self.buffer[self.cursor_y]
        self.buffer[self.cursor_y] = line[: self.cursor_x]
        self.buffer.insert(self.cursor_y + 1, line[self.cursor_x :])
        self.cursor_y += 1
        self.cursor_x = 0
        self.ensure_cursor_in_view(area)

    def delete_backward(self, area: Rect) -> None:
        if self.selection_start is not None:
            self.delete_selected_text(area)
            return
        if self.cursor_x > 0:
            self.cursor_x -= 1
            line = self.buffer[self.cursor_y]
            self.buffer[self.cursor_y] = line[: self.cursor_x] + line[self.cursor_x + 1 :]
        elif self.cursor_y > 0:
            current = self.buffer.pop(self.cursor_y)
            self.cursor_y -= 1
            self.cursor_x = len(self.buffer[self.cursor_y])
            self.buffer[self.cursor_y] += current
        self.ensure_cursor_in_view(area)

    def delete_forward(self, area: Rect) -> None:
        if self.selection_start is not None:
            self.delete_selected_text(area)
            return
        line = self.buffer[self.cursor_y]
        if self.cursor_x < len(line):
            self.buffer[self.cursor_y] = line[: self.cursor_x] + line[self.cursor_x + 1 :]
        elif self.cursor_y < len(self.buffer) - 1:
            following = self.buffer.pop(self.cursor_y + 1)
            self.buffer[self.cursor_y] += following
        self.ensure_cursor_in_view(area)