"""Textual application hosting the search viewer."""

from __future__ import annotations

from textual.app import App
from textual.screen import Screen


class SearchGridApp(App):
    """Shows the search viewer screen on mount; quitting it exits the app."""

    def __init__(self, viewer: Screen, *, title: str = "searchgrid") -> None:
        super().__init__()
        self._viewer = viewer
        self.title = title

    def on_mount(self) -> None:
        self.push_screen(self._viewer)
