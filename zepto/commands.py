"""Key handling: global shortcuts and the editing, help and save-prompt modes."""

from zepto.editor import (
    HELP_STATUS,
    HINT_STATUS,
    INSERT_STATUS,
    NORMAL_STATUS,
    ApplicationMode,
    Editor,
    InputMode,
)
from zepto.events import KeyCode, KeyEvent, Modifiers
from zepto.layout import Rect

SAVE_PROMPT = "Save modified buffer? (Y/N)"
QUIT_PROMPT = "Quit without saving? (Y/N)"


def _is_char(event: KeyEvent, *chars: str) -> bool:
    return event.code is KeyCode.CHAR and event.char in chars


def _is_ctrl(event: KeyEvent, char: str) -> bool:
    return _is_char(event, char) and event.has(Modifiers.CONTROL)


def _visible_height(area: Rect) -> int:
    return max(0, area.height - 2)


def _resting_status(editor: Editor) -> str:
    """The status line shown when returning to editing."""
    if not editor.vim_enabled:
        return HINT_STATUS
    return NORMAL_STATUS if editor.input_mode is InputMode.NORMAL else INSERT_STATUS


def _return_to_editing(editor: Editor) -> None:
    editor.application_mode = ApplicationMode.EDITING
    editor.status_message = _resting_status(editor)


def _enter_insert(editor: Editor) -> None:
    editor.input_mode = InputMode.INSERT
    editor.status_message = INSERT_STATUS


def _try_save(editor: Editor) -> bool:
    try:
        editor.save_file()
    except OSError as exc:
        editor.status_message = f"Error saving: {exc}"
        return False
    return True


def _global_shortcut(editor: Editor, event: KeyEvent, area: Rect) -> bool:
    """Handle shortcuts available in every mode; True means the editor should exit."""
    editing = editor.application_mode is ApplicationMode.EDITING
    if _is_ctrl(event, "x"):
        if not editing:
            return False
        if editor.selection_start is not None:
            editor.cut_selection(area)
            return False
        if editor.is_dirty():
            editor.application_mode = ApplicationMode.PROMPT_SAVE
            editor.prompt_message = SAVE_PROMPT
            return False
        return True
    if _is_ctrl(event, "w"):
        if editing:
            _try_save(editor)
        return False
    if _is_ctrl(event, "q"):
        if not editing:
            return False
        if editor.is_dirty():
            editor.application_mode = ApplicationMode.PROMPT_SAVE
            editor.prompt_message = QUIT_PROMPT
            return False
        return True
    if _is_ctrl(event, "h"):
        if editing:
            editor.application_mode = ApplicationMode.HELP
            if editor.vim_enabled:
                editor.status_message = HELP_STATUS
    return False


def handle_key(editor: Editor, event: KeyEvent, area: Rect) -> bool:
    """Apply a key press to the editor; returns True when the editor should exit."""
    if _global_shortcut(editor, event, area):
        return True
    mode = editor.application_mode
    if mode is ApplicationMode.HELP:
        return handle_help_mode(editor, event)
    if mode is ApplicationMode.PROMPT_SAVE:
        return handle_prompt_save_mode(editor, event)
    if editor.input_mode is InputMode.INSERT:
        return handle_insert_mode(editor, event, area)
    return handle_normal_mode(editor, event, area)


def handle_insert_mode(editor: Editor, event: KeyEvent, area: Rect) -> bool:
    """Handle a key in insert mode; never asks to exit."""
    shift = event.has(Modifiers.SHIFT)
    control = event.has(Modifiers.CONTROL)
    code = event.code
    height = _visible_height(area)

    if code is KeyCode.ESC:
        if editor.vim_enabled:
            editor.input_mode = InputMode.NORMAL
            editor.status_message = NORMAL_STATUS
            editor.clear_selection()
            line_length = len(editor.buffer[editor.cursor_y])
            editor.cursor_x = min(max(0, editor.cursor_x - 1), max(0, line_length - 1))
    elif code is KeyCode.CHAR:
        if event.modifiers == Modifiers.NONE or shift:
            editor.insert_char(event.char, area)
    elif code is KeyCode.ENTER:
        editor.insert_newline(area)
    elif code is KeyCode.BACKSPACE:
        editor.delete_backward(area)
    elif code is KeyCode.DELETE:
        editor.delete_forward(area)
    elif code is KeyCode.LEFT:
        if control:
            editor.move_word_left(area, shift)
        else:
            editor.move_left(area, shift)
    elif code is KeyCode.RIGHT:
        if control:
            editor.move_word_right(area, shift)
        else:
            editor.move_right(area, shift)
    elif code is KeyCode.UP:
        editor.move_up(area, shift)
    elif code is KeyCode.DOWN:
        editor.move_down(area, shift)
    elif code is KeyCode.HOME and control:
        editor.cursor_x = editor.cursor_y = 0
        editor.scroll_x = editor.scroll_y = 0
        editor.update_selection_on_move(shift)
    elif code is KeyCode.END and control:
        editor.cursor_y = max(0, len(editor.buffer) - 1)
        editor.cursor_x = len(editor.buffer[editor.cursor_y])
        editor.update_selection_on_move(shift)
        editor.ensure_cursor_in_view(area)
    elif code is KeyCode.HOME:
        editor.cursor_x = 0
        editor.scroll_x = 0
        editor.update_selection_on_move(shift)
        editor.ensure_cursor_in_view(area)
    elif code is KeyCode.END:
        editor.cursor_x = len(editor.buffer[editor.cursor_y])
        editor.update_selection_on_move(shift)
        editor.ensure_cursor_in_view(area)
    elif code is KeyCode.PAGE_UP:
        editor.scroll_y = max(0, editor.scroll_y - height)
        editor.cursor_y = max(max(0, editor.cursor_y - height), editor.scroll_y)
        editor.cursor_x = min(editor.cursor_x, len(editor.buffer[editor.cursor_y]))
        editor.update_selection_on_move(shift)
        editor.ensure_cursor_in_view(area)
    elif code is KeyCode.PAGE_DOWN:
        last = max(0, len(editor.buffer) - 1)
        editor.scroll_y = min(editor.scroll_y + height, last)
        editor.cursor_y = min(editor.cursor_y + height, last)
        editor.cursor_x = min(editor.cursor_x, len(editor.buffer[editor.cursor_y]))
        editor.update_selection_on_move(shift)
        editor.ensure_cursor_in_view(area)
    return False


def _open_line_below(editor: Editor, area: Rect) -> None:
    if editor.cursor_y + 1 >= len(editor.buffer):
        editor.cursor_x = len(editor.buffer[editor.cursor_y])
        editor.insert_newline(area)
        return
    editor.cursor_y += 1
    editor.cursor_x = 0
    editor.insert_newline(area)


def handle_normal_mode(editor: Editor, event: KeyEvent, area: Rect) -> bool:
    """Handle a key in vim-like normal mode; never asks to exit."""
    shift = event.has(Modifiers.SHIFT)
    if not shift and editor.selection_start is not None:
        editor.clear_selection()

    code = event.code
    char = event.char if code is KeyCode.CHAR else None

    if char == "i":
        _enter_insert(editor)
    elif char == "a":
        editor.cursor_x += 1
        _enter_insert(editor)
    elif char == "o":
        _open_line_below(editor, area)
        _enter_insert(editor)
    elif char == "O":
        editor.insert_newline(area)
        editor.cursor_y = max(0, editor.cursor_y - 1)
        editor.cursor_x = 0
        _enter_insert(editor)
    elif char == "h" or code is KeyCode.LEFT:
        editor.move_left(area, shift)
    elif char == "j" or code is KeyCode.DOWN:
        editor.move_down(area, shift)
    elif char == "k" or code is KeyCode.UP:
        editor.move_up(area, shift)
    elif char == "l" or code is KeyCode.RIGHT:
        editor.move_right(area, shift)
    elif char == "b":
        editor.move_word_left(area, shift)
    elif char == "w":
        editor.move_word_right(area, shift)
    elif char == "0":
        editor.cursor_x = 0
        editor.ensure_cursor_in_view(area)
    elif char == "$":
        editor.cursor_x = len(editor.buffer[editor.cursor_y])
        editor.ensure_cursor_in_view(area)
    elif char == "x":
        editor.delete_forward(area)
    elif char == "c" and event.has(Modifiers.CONTROL):
        editor.copy_selection()
    elif char == "u" and event.has(Modifiers.CONTROL):
        editor.cut_selection(area)
    elif char == "v" and event.has(Modifiers.CONTROL):
        editor.paste(area)
    elif code is KeyCode.ESC:
        editor.clear_selection()
        line_length = len(editor.buffer[editor.cursor_y])
        if 0 < editor.cursor_x == line_length:
            editor.cursor_x -= 1
    return False


def handle_help_mode(editor: Editor, event: KeyEvent) -> bool:
    """Leave the help screen on Esc, 'h' or Enter; never asks to exit."""
    if event.code in (KeyCode.ESC, KeyCode.ENTER) or _is_char(event, "h"):
        _return_to_editing(editor)
    return False


def handle_prompt_save_mode(editor: Editor, event: KeyEvent) -> bool:
    """Answer the save prompt; returns True when the editor should exit."""
    if _is_char(event, "y", "Y"):
        if _try_save(editor):
            return True
        editor.application_mode = ApplicationMode.EDITING
        return False
    if _is_char(event, "n", "N"):
        return True
    if event.code is KeyCode.ESC:
        _return_to_editing(editor)
    return False