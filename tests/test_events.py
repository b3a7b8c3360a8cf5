import dataclasses

import pytest

from zepto.events import KeyCode, KeyEvent, Modifiers


def test_char_event_holds_character():
    event = KeyEvent(KeyCode.CHAR, "q", Modifiers.CONTROL)
    assert event.char == "q"
    assert event.has(Modifiers.CONTROL) is True
    assert event.has(Modifiers.SHIFT) is False


def test_combined_modifiers():
    event = KeyEvent(KeyCode.LEFT, modifiers=Modifiers.CONTROL | Modifiers.SHIFT)
    assert event.has(Modifiers.SHIFT)
    assert event.has(Modifiers.CONTROL)
    assert event.has(Modifiers.CONTROL | Modifiers.SHIFT)
    assert not event.has(Modifiers.ALT)
    assert not event.has(Modifiers.CONTROL | Modifiers.ALT)


def test_default_has_no_modifiers():
    event = KeyEvent(KeyCode.ENTER)
    assert event.modifiers == Modifiers.NONE
    assert event.char is None
    assert not event.has(Modifiers.SHIFT)


@pytest.mark.parametrize("char", [None, "", "ab", 5])
def test_char_key_requires_single_character(char):
    with pytest.raises(ValueError):
        KeyEvent(KeyCode.CHAR, char)


def test_non_char_key_rejects_character():
    with pytest.raises(ValueError):
        KeyEvent(KeyCode.ESC, "x")


def test_events_compare_by_value():
    first = KeyEvent(KeyCode.CHAR, "a")
    second = KeyEvent(KeyCode.CHAR, "a")
    assert first == second
    assert hash(first) == hash(second)
    assert (first == KeyEvent(KeyCode.CHAR, "b")) is False
    assert (first == KeyEvent(KeyCode.CHAR, "a", Modifiers.SHIFT)) is False


def test_events_are_immutable():
    event = KeyEvent(KeyCode.UP)
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.code = KeyCode.DOWN
    assert event.code is KeyCode.UP
    assert event.modifiers == Modifiers.NONE