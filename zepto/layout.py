"""Screen rectangles and the vertical split of editor, status and prompt areas."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if min(self.x, self.y, self.width, self.height) < 0:
            raise ValueError("rectangle coordinates and sizes must be non-negative")


def split_layout(area: Rect, status_enabled: bool, prompt_enabled: bool) -> tuple[Rect, ...]:
    """Split ``area`` into the editor area followed by one-line panels.

    The editor area keeps at least one row while any are available; the
    enabled panels (status, then prompt) each take one row of what is left.
    """
    panels = int(bool(status_enabled)) + int(bool(prompt_enabled))
    editor_height = max(area.height - panels, min(area.height, 1))
    rects = [Rect(area.x, area.y, area.width, editor_height)]
    remaining = area.height - editor_height
    y = area.y + editor_height
    for _ in range(panels):
        height = min(1, remaining)
        rects.append(Rect(area.x, y, area.width, height))
        y += height
        remaining -= height
    return tuple(rects)