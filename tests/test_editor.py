import pytest

from zepto.config import Config, EditorBehavior
from zepto.editor import (
    HINT_STATUS,
    NORMAL_STATUS,
    ApplicationMode,
    Editor,
    InputMode,
    NoFilenameError,
)
from zepto.layout import Rect

AREA = Rect(0, 0, 80, 24)
SMALL = Rect(0, 0, 20, 8)


def make_editor(lines=None, vim=False):
    editor = Editor(Config(editor_behavior=EditorBehavior(vim=vim)))
    if lines is not None:
        editor.buffer = list(lines)
        editor._mark_clean()
    return editor


def test_new_editor_defaults():
    editor = make_editor()
    assert editor.buffer == [""]
    assert editor.input_mode is InputMode.INSERT
    assert editor.application_mode is ApplicationMode.EDITING
    assert editor.status_message == "Ctrl+X Exit | Ctrl+W Save | Ctrl+H Help"
    assert not editor.is_dirty()


def test_new_editor_vim_mode():
    editor = make_editor(vim=True)
    assert editor.input_mode is InputMode.NORMAL
    assert editor.status_message == "-- NORMAL --"


def test_insert_chars_marks_dirty_and_reverting_cleans():
    editor = make_editor()
    for ch in "hi":
        editor.insert_char(ch, AREA)
    assert editor.buffer == ["hi"]
    assert editor.cursor_x == len("hi")
    assert editor.is_dirty()
    editor.delete_backward(AREA)
    editor.delete_backward(AREA)
    assert editor.buffer == [""]
    assert not editor.is_dirty()


def test_insert_newline_splits_line():
    editor = make_editor(["hello"])
    editor.cursor_x = 2
    editor.insert_newline(AREA)
    assert editor.buffer == ["he", "llo"]
    assert (editor.cursor_y, editor.cursor_x) == (1, 0)


def test_delete_backward_merges_lines():
    editor = make_editor(["ab", "cd"])
    editor.cursor_y = 1
    editor.delete_backward(AREA)
    assert editor.buffer == ["abcd"]
    assert (editor.cursor_y, editor.cursor_x) == (0, len("ab"))


def test_delete_forward_merges_and_removes():
    editor = make_editor(["ab", "cd"])
    editor.cursor_x = len("ab")
    editor.delete_forward(AREA)
    assert editor.buffer == ["abcd"]
    editor.cursor_x = 0
    editor.delete_forward(AREA)
    assert editor.buffer == ["bcd"]


def test_delete_at_buffer_edges_is_noop():
    editor = make_editor(["x"])
    editor.delete_backward(AREA)
    editor.cursor_x = 1
    editor.delete_forward(AREA)
    assert editor.buffer == ["x"]


def test_open_file_lines_and_status(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_bytes(b"one\r\ntwo\n\nthree\n")
    editor = make_editor()
    editor.open_file(path)
    assert editor.buffer == ["one", "two", "", "three"]
    assert editor.filename == str(path)
    assert editor.status_message == f"Opened: {path}"
    assert not editor.is_dirty()


def test_open_file_vim_keeps_status(tmp_path):
    path = tmp_path / "doc.txt"
    path.write_text("x", encoding="utf-8")
    editor = make_editor(vim=True)
    editor.open_file(path)
    assert editor.status_message == NORMAL_STATUS
    assert editor.buffer == ["x"]


def test_open_empty_file_gives_one_line(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    editor = make_editor(["junk"])
    editor.open_file(path)
    assert editor.buffer == [""]


def test_open_missing_file_raises(tmp_path):
    editor = make_editor()
    with pytest.raises(OSError):
        editor.open_file(tmp_path / "missing.txt")


def test_save_round_trip(tmp_path):
    path = tmp_path / "out.txt"
    path.write_text("", encoding="utf-8")
    editor = make_editor()
    editor.open_file(path)
    editor.insert_text("alpha\nbeta", AREA)
    assert editor.is_dirty()
    editor.save_file()
    assert not editor.is_dirty()
    assert path.read_bytes() == b"alpha\nbeta"
    assert editor.status_message == f"Saved 2 lines to {path}"
    other = make_editor()
    other.open_file(path)
    assert other.buffer == editor.buffer


def test_save_without_filename_raises():
    editor = make_editor(["text"])
    with pytest.raises(NoFilenameError):
        editor.save_file()
    assert editor.status_message.startswith("No filename")


def test_normalized_selection_orders_points():
    editor = make_editor(["hello", "world"])
    editor.selection_start = (1, 3)
    editor.selection_end = (0, 2)
    assert editor.normalized_selection() == ((0, 2), (1, 3))
    editor.selection_end = None
    assert editor.normalized_selection() is None


def test_selected_text_single_and_multi_line():
    editor = make_editor(["hello world", "middle", "tail end"])
    editor.selection_start = (0, 0)
    editor.selection_end = (0, 5)
    assert editor.selected_text() == "hello"
    editor.selection_start = (0, 6)
    editor.selection_end = (2, 4)
    assert editor.selected_text() == "world\nmiddle\ntail"


def test_delete_multi_line_selection():
    editor = make_editor(["hello world", "middle", "tail end"])
    editor.selection_start = (2, 4)
    editor.selection_end = (0, 6)
    editor.delete_selected_text(AREA)
    assert editor.buffer == ["hello  end"]
    assert (editor.cursor_y, editor.cursor_x) == (0, 6)
    assert editor.selection_start is None


def test_copy_and_paste():
    editor = make_editor(["abc"])
    editor.selection_start = (0, 0)
    editor.selection_end = (0, 3)
    editor.copy_selection()
    assert editor.clipboard == "abc"
    assert editor.status_message == "Copied 3 characters."
    editor.clear_selection()
    editor.cursor_x = 3
    editor.paste(AREA)
    assert editor.buffer == ["abcabc"]
    assert editor.status_message == "Pasted 3 characters."


def test_cut_removes_text():
    editor = make_editor(["abcdef"])
    editor.selection_start = (0, 1)
    editor.selection_end = (0, 4)
    editor.cut_selection(AREA)
    assert editor.clipboard == "bcd"
    assert editor.buffer == ["aef"]
    assert editor.status_message == "Cut 3 characters."


def test_messages_without_selection_or_clipboard():
    editor = make_editor(["abc"])
    editor.copy_selection()
    assert editor.status_message == "No selection to copy."
    editor.cut_selection(AREA)
    assert editor.status_message == "No selection to cut."
    editor.paste(AREA)
    assert editor.status_message == "Clipboard is empty."
    assert editor.buffer == ["abc"]


def test_insert_multiline_text_in_middle():
    editor = make_editor(["startend"])
    editor.cursor_x = len("start")
    editor.insert_text("A\nB\nC", AREA)
    assert editor.buffer == ["startA", "B", "Cend"]
    assert (editor.cursor_y, editor.cursor_x) == (2, len("C"))


def test_insert_text_replaces_selection():
    editor = make_editor(["hello world"])
    editor.selection_start = (0, 0)
    editor.selection_end = (0, 5)
    editor.insert_text("bye", AREA)
    assert editor.buffer == ["bye world"]


def test_move_right_wraps_and_left_returns():
    editor = make_editor(["ab", "cd"])
    editor.cursor_x = 2
    editor.move_right(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (1, 0)
    editor.move_left(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (0, 2)


def test_move_up_down_clamp_column():
    editor = make_editor(["long line", "ab"])
    editor.cursor_x = len("long line")
    editor.move_down(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (1, len("ab"))
    editor.move_down(AREA, False)
    assert editor.cursor_y == 1
    editor.move_up(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (0, len("ab"))


def test_shift_move_extends_selection_and_plain_move_clears():
    editor = make_editor(["hello"])
    editor.move_right(AREA, True)
    editor.move_right(AREA, True)
    assert editor.selection_start == (0, 1)
    assert editor.selection_end == (0, 2)
    editor.move_right(AREA, False)
    assert editor.normalized_selection() is None


def test_word_movement():
    editor = make_editor(["foo bar"])
    editor.move_word_right(AREA, False)
    assert editor.cursor_x == "foo bar".index("bar")
    editor.move_word_right(AREA, False)
    assert editor.cursor_x == len("foo bar")
    editor.move_word_left(AREA, False)
    assert editor.cursor_x == "foo bar".index("bar")
    editor.move_word_left(AREA, False)
    assert editor.cursor_x == 0


def test_word_left_at_start_is_noop_and_crosses_lines():
    editor = make_editor(["foo", "bar"])
    editor.move_word_left(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (0, 0)
    editor.cursor_y = 1
    editor.move_word_left(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (0, 0)


def test_word_right_crosses_to_next_line():
    editor = make_editor(["foo", "bar baz"])
    editor.cursor_x = len("foo")
    editor.move_word_right(AREA, False)
    assert (editor.cursor_y, editor.cursor_x) == (1, "bar baz".index("baz"))


@pytest.mark.parametrize("row", [0, 5, 30, 99])
def test_ensure_cursor_in_view_vertical_invariant(row):
    editor = make_editor([f"line {n}" for n in range(100)])
    editor.cursor_y = row
    editor.ensure_cursor_in_view(SMALL)
    visible = SMALL.height - 2
    assert editor.scroll_y <= editor.cursor_y < editor.scroll_y + visible


@pytest.mark.parametrize("column", [0, 10, 50, 199])
def test_ensure_cursor_in_view_horizontal_invariant(column):
    editor = make_editor(["x" * 200])
    editor.cursor_x = column
    editor.ensure_cursor_in_view(SMALL)
    width = SMALL.width - 2 - (editor.config.main_section.line_numbers.gutter_width + 1)
    assert editor.scroll_x <= editor.cursor_x < editor.scroll_x + width


def test_ensure_cursor_in_view_clamps_cursor_to_line():
    editor = make_editor(["abc"])
    editor.cursor_x = 50
    editor.ensure_cursor_in_view(AREA)
    assert editor.cursor_x == len("abc")
    assert editor.scroll_x == 0


def test_hint_constant_matches_default_status():
    assert make_editor().status_message == HINT_STATUS