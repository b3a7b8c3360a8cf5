"""Keyboard events as seen by the editor."""

import enum
from dataclasses import dataclass


class KeyCode(enum.Enum):
    CHAR = enum.auto()
    ENTER = enum.auto()
    BACKSPACE = enum.auto()
    DELETE = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    HOME = enum.auto()
    END = enum.auto()
    PAGE_UP = enum.auto()
    PAGE_DOWN = enum.auto()
    TAB = enum.auto()
    ESC = enum.auto()
    OTHER = enum.auto()


class Modifiers(enum.Flag):
    NONE = 0
    SHIFT = enum.auto()
    CONTROL = enum.auto()
    ALT = enum.auto()


@dataclass(frozen=True)
class KeyEvent:
    """A key press; ``char`` holds the character for ``KeyCode.CHAR`` only."""

    code: KeyCode
    char: str | None = None
    modifiers: Modifiers = Modifiers.NONE

    def __post_init__(self) -> None:
        if self.code is KeyCode.CHAR:
            if not isinstance(self.char, str) or len(self.char) != 1:
                raise ValueError("a character key needs exactly one character")
        elif self.char is not None:
            raise ValueError(f"{self.code.name} key carries no character")

    def has(self, modifier: Modifiers) -> bool:
        """True if every flag in ``modifier`` is held."""
        return modifier in self.modifiers