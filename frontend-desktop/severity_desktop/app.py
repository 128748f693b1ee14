"""
PyQt5 window for the severity dashboard.

Three buttons on top (Inserimento manuale, Dashboard, Carica CSV) and three
panels below, only one of which is visible at a time:
- manual input: edit the four severity weights and save them to /config,
- dashboard: weighted monthly totals (bar) and disruptive days (pie),
- CSV table: the last parsed file, always with the same five columns.

HTTP calls run on a QThread so the window does not freeze.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Callable

from PyQt5.QtCore import QThread, pyqtSignal
from PyQt5.QtWidgets import (
    QApplication,
    QDoubleSpinBox,
    QFileDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)
from matplotlib.backends.backend_qt5agg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from .api_client import ApiClient, ApiResult
from .charts import BAR, PIE, ChartRenderer
from .csv_table import CSV_HEADERS, SAMPLE_TOTALS, parse_csv, resolve_weights, table_rows, weighted_totals
from .panels import Panel, PanelController

logger = logging.getLogger(__name__)

BUTTON_STYLE = "background-color: #0891b2; color: #020617; padding: 6px 12px; border-radius: 4px;"
LABEL_STYLE = "color: #e5e7eb; font-size: 11px;"


class ApiWorker(QThread):
    """Runs one ApiClient call in the background and emits the ApiResult."""

    finished_with_result = pyqtSignal(object)

    def __init__(self, call: Callable[[], ApiResult]):
        super().__init__()
        self.call = call

    def run(self) -> None:
        try:
            result = self.call()
        except Exception as exc:  # noqa: BLE001
            # e.g. the CSV vanished between picking and uploading it
            result = ApiResult(ok=False, error_message=str(exc))
        self.finished_with_result.emit(result)


class MainWindow(QWidget):
    def __init__(self, client: ApiClient | None = None):
        super().__init__()
        self.setWindowTitle("Severity Dashboard")
        self.setMinimumSize(900, 560)

        self.client = client or ApiClient()
        self.panels = PanelController()
        self.renderer = ChartRenderer(on_dispose=self._remove_canvas)
        self.canvases: dict[str, FigureCanvas] = {}
        self.parsed_rows: list[dict[str, Any]] | None = None
        self.weights: dict[str, float] = resolve_weights(None)
        # Keep references so running threads are not garbage collected.
        self.workers: list[ApiWorker] = []

        self._build_ui()
        self._sync_panels()

    # ------------------------------------------------------------------ UI

    def _build_ui(self) -> None:
        main_layout = QVBoxLayout()
        main_layout.setContentsMargins(16, 16, 16, 16)
        main_layout.setSpacing(12)

        title = QLabel("Severity Dashboard")
        title.setStyleSheet("color: #0f766e; font-size: 20px; font-weight: 600;")
        main_layout.addWidget(title)

        buttons = QHBoxLayout()
        self.manual_button = QPushButton("Inserimento manuale")
        self.dashboard_button = QPushButton("Dashboard")
        self.upload_button = QPushButton("Carica CSV")
        for button in (self.manual_button, self.dashboard_button, self.upload_button):
            button.setStyleSheet(BUTTON_STYLE)
            buttons.addWidget(button)
        buttons.addStretch()
        self.manual_button.clicked.connect(self.on_manual_clicked)
        self.dashboard_button.clicked.connect(self.on_dashboard_clicked)
        self.upload_button.clicked.connect(self.on_upload_clicked)
        main_layout.addLayout(buttons)

        self.info_label = QLabel("")
        self.info_label.setStyleSheet("color: #fecaca; font-size: 11px;")
        main_layout.addWidget(self.info_label)

        self.manual_panel = self._build_manual_panel()
        self.dashboard_panel = QWidget()
        self.chart_row = QHBoxLayout(self.dashboard_panel)
        self.csv_panel = self._build_csv_panel()

        for widget in (self.manual_panel, self.dashboard_panel, self.csv_panel):
            main_layout.addWidget(widget)
        main_layout.addStretch()

        self.setLayout(main_layout)
        self.setStyleSheet("background-color: #020617;")  # slate‑900

    def _build_manual_panel(self) -> QWidget:
        panel = QWidget()
        form = QFormLayout(panel)
        self.weight_inputs: dict[str, QDoubleSpinBox] = {}
        for field, label in (
            ("severity1", "Severity 1 case"),
            ("critical", "ProM Critical Alert"),
            ("warning", "ProM Warning Alert"),
            ("outage", "System Outage"),
        ):
            spin = QDoubleSpinBox()
            spin.setRange(0, 1000)
            spin.setDecimals(2)
            spin.setStyleSheet("background-color: #020617; color: white; border: 1px solid #374151;")
            self.weight_inputs[field] = spin
            row_label = QLabel(label)
            row_label.setStyleSheet(LABEL_STYLE)
            form.addRow(row_label, spin)

        save_button = QPushButton("Salva pesi")
        save_button.setStyleSheet(BUTTON_STYLE)
        save_button.clicked.connect(self.on_save_weights)
        form.addRow(save_button)
        return panel

    def _build_csv_panel(self) -> QWidget:
        panel = QWidget()
        layout = QVBoxLayout(panel)
        self.csv_table = QTableWidget(0, len(CSV_HEADERS))
        self.csv_table.setHorizontalHeaderLabels(CSV_HEADERS)
        self.csv_table.setStyleSheet("background-color: #1e293b; color: #e5e7eb;")
        layout.addWidget(self.csv_table)
        return panel

    def _sync_panels(self) -> None:
        self.manual_panel.setVisible(self.panels.is_visible(Panel.MANUAL_INPUT))
        self.dashboard_panel.setVisible(self.panels.is_visible(Panel.DASHBOARD))
        self.csv_panel.setVisible(self.panels.is_visible(Panel.CSV_TABLE))

    # ------------------------------------------------------------ handlers

    def on_manual_clicked(self) -> None:
        if self.panels.toggle(Panel.MANUAL_INPUT):
            self._run(self.client.get_config, self.on_config_loaded)
        self._sync_panels()

    def on_dashboard_clicked(self) -> None:
        if self.panels.toggle(Panel.DASHBOARD):
            # Fetch the current weights first; charts are drawn when they arrive.
            self._run(self.client.get_config, self.on_config_for_dashboard)
        self._sync_panels()

    def on_upload_clicked(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(
            self, "Seleziona CSV", "", "CSV files (*.csv);;All files (*.*)"
        )
        if file_path:
            self.on_file_selected(file_path)

    def on_file_selected(self, file_path: str) -> None:
        try:
            rows = parse_csv(file_path)
        except Exception as exc:  # noqa: BLE001
            # pandas raises a zoo of exception types for broken files.
            self._show_error(f"Impossibile leggere il CSV: {exc}")
            return

        self.parsed_rows = rows
        self._fill_table(rows)
        self.panels.show(Panel.CSV_TABLE)
        self._sync_panels()

        self._run(lambda: self.client.upload_csv(file_path), self.on_upload_finished)
        self._run(lambda: self.client.save_data({"rows": rows}), self.on_data_saved)

    def on_save_weights(self) -> None:
        weights = {field: spin.value() for field, spin in self.weight_inputs.items()}
        self.weights = weights
        self._run(lambda: self.client.save_config(weights), self.on_config_saved)

    # ------------------------------------------------------------- results

    def on_config_loaded(self, result: ApiResult) -> None:
        if not result.ok:
            # First run: nothing saved yet, keep the zeros in the form.
            logger.info("No configuration loaded: %s", result.error_message)
            return
        self.weights = resolve_weights(result.data)
        for field, spin in self.weight_inputs.items():
            spin.setValue(self.weights[field])

    def on_config_for_dashboard(self, result: ApiResult) -> None:
        if result.ok:
            self.weights = resolve_weights(result.data)
        self.render_charts()

    def on_config_saved(self, result: ApiResult) -> None:
        if not result.ok:
            self._show_error(result.error_message or "Salvataggio non riuscito.")
            return
        self.info_label.setText("Pesi salvati.")

    def on_upload_finished(self, result: ApiResult) -> None:
        if not result.ok:
            self._show_error(result.error_message or "Upload non riuscito.")
            return
        self.info_label.setText(f"File caricato: {result.data.get('filename')}")

    def on_data_saved(self, result: ApiResult) -> None:
        if not result.ok:
            logger.warning("Could not save parsed rows: %s", result.error_message)

    # -------------------------------------------------------------- charts

    def chart_values(self) -> list[float]:
        """Weighted totals from the parsed CSV, or the sample year if none."""
        if self.parsed_rows:
            return weighted_totals(self.parsed_rows, self.weights)
        return list(SAMPLE_TOTALS)

    def render_charts(self) -> None:
        values = self.chart_values()
        for kind in (BAR, PIE):
            figure = self.renderer.render(kind, values)
            canvas = FigureCanvas(figure)
            figure.tight_layout()
            self.chart_row.addWidget(canvas)
            self.canvases[kind] = canvas

    def _remove_canvas(self, kind: str, figure: Figure) -> None:
        canvas = self.canvases.pop(kind, None)
        if canvas is not None:
            self.chart_row.removeWidget(canvas)
            canvas.setParent(None)
            canvas.deleteLater()

    # ------------------------------------------------------------- helpers

    def _fill_table(self, rows: list[dict[str, Any]]) -> None:
        cells = table_rows(rows)
        self.csv_table.setRowCount(len(cells))
        for r, row in enumerate(cells):
            for c, value in enumerate(row):
                self.csv_table.setItem(r, c, QTableWidgetItem(value))

    def _run(self, call: Callable[[], ApiResult], on_done: Callable[[ApiResult], None]) -> None:
        worker = ApiWorker(call)
        worker.finished_with_result.connect(on_done)
        worker.finished.connect(lambda: self.workers.remove(worker))
        self.workers.append(worker)
        worker.start()

    def _show_error(self, message: str) -> None:
        self.info_label.setText(message)
        msg_box = QMessageBox(self)
        msg_box.setIcon(QMessageBox.Warning)
        msg_box.setWindowTitle("Errore")
        msg_box.setText(message)
        msg_box.exec_()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = QApplication(sys.argv)
    window = MainWindow()
    window.show()
    sys.exit(app.exec_())
