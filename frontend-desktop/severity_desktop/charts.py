"""
Matplotlib charts for the dashboard panel.

`ChartRenderer` owns at most one bar figure and one pie figure. Rendering a
kind again throws the old figure away before building the new one, so the
window never ends up with two overlapping canvases.
"""
from __future__ import annotations

from typing import Callable, Sequence

from matplotlib.figure import Figure

MESI = [
    "Gennaio",
    "Febbraio",
    "Marzo",
    "Aprile",
    "Maggio",
    "Giugno",
    "Luglio",
    "Agosto",
    "Settembre",
    "Ottobre",
    "Novembre",
    "Dicembre",
]

BAR_LABEL = "Totale ponderato"
PIE_LABELS = ("Disruptive days", "Non-disruptive days")
WORKING_DAYS = 252

BACKGROUND = "#020617"  # slate‑900
ACCENT = "#0891b2"  # teal
MUTED = "#334155"

BAR = "bar"
PIE = "pie"
KINDS = (BAR, PIE)


def month_labels(count: int) -> list[str]:
    """First `count` Italian month names (never more than twelve)."""
    return MESI[:count]


def pie_slices(values: Sequence[float], working_days: int = WORKING_DAYS) -> tuple[float, float]:
    """(disruptive days, non-disruptive days) for a year of `working_days`."""
    # Negative totals (negative weights or counts) would make a negative wedge.
    disruptive = max(0, min(sum(values), working_days))
    return disruptive, working_days - disruptive


class ChartRenderer:
    """
    Builds the bar and pie figures and keeps a handle to the current ones.

    `on_dispose` is called with (kind, figure) before a figure is dropped;
    the Qt window uses it to remove the matching canvas widget.
    """

    def __init__(
        self,
        working_days: int = WORKING_DAYS,
        on_dispose: Callable[[str, Figure], None] | None = None,
    ):
        self.working_days = working_days
        self.on_dispose = on_dispose
        self.figures: dict[str, Figure] = {}

    def render(self, kind: str, data: Sequence[float]) -> Figure:
        if kind not in KINDS:
            raise ValueError(f"Unknown chart kind: {kind!r}")

        self.dispose(kind)
        figure = Figure(figsize=(5, 3), facecolor=BACKGROUND)
        if kind == BAR:
            self._draw_bar(figure, data)
        else:
            self._draw_pie(figure, data)
        self.figures[kind] = figure
        return figure

    def dispose(self, kind: str) -> None:
        figure = self.figures.pop(kind, None)
        if figure is None:
            return
        if self.on_dispose is not None:
            self.on_dispose(kind, figure)
        figure.clear()

    def dispose_all(self) -> None:
        for kind in list(self.figures):
            self.dispose(kind)

    def _draw_bar(self, figure: Figure, data: Sequence[float]) -> None:
        values = list(data)[: len(MESI)]
        ax = figure.add_subplot(111)
        ax.bar(month_labels(len(values)), values, color=ACCENT, label=BAR_LABEL)
        ax.set_title("Totale ponderato mensile", color="white")
        ax.legend(loc="upper right", fontsize=8)
        ax.tick_params(axis="x", labelrotation=45, labelcolor="white", labelsize=8)
        ax.tick_params(axis="y", labelcolor="white")
        ax.set_facecolor(BACKGROUND)

    def _draw_pie(self, figure: Figure, data: Sequence[float]) -> None:
        disruptive, non_disruptive = pie_slices(data, self.working_days)
        ax = figure.add_subplot(111)
        ax.pie(
            [disruptive, non_disruptive],
            labels=PIE_LABELS,
            colors=[ACCENT, MUTED],
            autopct="%1.0f%%",
            textprops={"color": "white", "fontsize": 8},
        )
        ax.set_title(f"Giorni lavorativi ({self.working_days})", color="white")
        ax.set_facecolor(BACKGROUND)
