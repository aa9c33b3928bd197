"""Widgets for the plantnav UI."""

from collections import deque

from textual.binding import Binding
from textual.widgets import Input

HISTORY_LIMIT = 20


class ZoneInput(Input):
    """Grow zone entry, hidden until the 'visible' class is added.

    Up and down recall previously applied zones, newest first.
    """

    DEFAULT_CSS = """
    ZoneInput {
        dock: bottom;
        display: none;
        border: tall $accent;
    }

    ZoneInput.visible {
        display: block;
    }
    """

    BINDINGS = [
        Binding("up", "recall(1)", "Older zone", show=False),
        Binding("down", "recall(-1)", "Newer zone", show=False),
    ]

    def __init__(self, placeholder: str = "", id: str | None = None) -> None:
        super().__init__(placeholder=placeholder, id=id)
        self._recent: deque[str] = deque(maxlen=HISTORY_LIMIT)
        self._recall_index = -1
        self._draft = ""

    @property
    def history(self) -> list[str]:
        """Applied zones, most recent first."""
        return list(self._recent)

    def remember(self, text: str) -> None:
        """Record an applied zone, dropping an older copy of it."""
        text = text.strip()
        if not text:
            return
        if text in self._recent:
            self._recent.remove(text)
        self._recent.appendleft(text)
        self._recall_index = -1

    def action_recall(self, step: int) -> None:
        """Move through history; index -1 is what was typed before recalling."""
        if not self._recent:
            return
        if self._recall_index == -1:
            self._draft = self.value
        index = max(-1, min(self._recall_index + step, len(self._recent) - 1))
        self._recall_index = index
        self.value = self._draft if index == -1 else self._recent[index]
        self.cursor_position = len(self.value)
