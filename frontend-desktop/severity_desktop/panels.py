"""Which of the three main panels is currently on screen."""
from __future__ import annotations

from enum import Enum


class Panel(str, Enum):
    MANUAL_INPUT = "manual_input"
    DASHBOARD = "dashboard"
    CSV_TABLE = "csv_table"


class PanelController:
    """
    Single-active-panel model: at most one panel is visible.

    Each button toggles its own panel and hides the other two. Callers use
    the return value of `toggle` to know when the dashboard just opened
    (that is when the charts need drawing).
    """

    def __init__(self) -> None:
        self.visible: dict[Panel, bool] = {panel: False for panel in Panel}

    def is_visible(self, panel: Panel) -> bool:
        return self.visible[panel]

    @property
    def active(self) -> Panel | None:
        for panel, shown in self.visible.items():
            if shown:
                return panel
        return None

    def toggle(self, panel: Panel) -> bool:
        """Flip `panel`, hide the others, return True if `panel` is now shown."""
        now_visible = not self.visible[panel]
        for other in Panel:
            self.visible[other] = False
        self.visible[panel] = now_visible
        return now_visible

    def show(self, panel: Panel) -> None:
        """Show `panel` no matter what (used after a CSV has been parsed)."""
        for other in Panel:
            self.visible[other] = other is panel
