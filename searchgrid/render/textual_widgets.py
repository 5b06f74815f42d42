"""Textual widget that draws the search grid."""

from __future__ import annotations

from typing import Callable

from rich.console import RenderableType
from textual.geometry import Size
from textual.widget import Widget


class GridWidget(Widget):
    """Render a grid through a callback that knows the current widget size."""

    def __init__(
        self,
        render_grid: Callable[[Size, Size], RenderableType],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._render_grid = render_grid

    def render(self) -> RenderableType:
        return self._render_grid(self.size, self.content_size)
