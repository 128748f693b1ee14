import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest  # noqa: E402
from PyQt5.QtWidgets import QApplication  # noqa: E402

from severity_desktop.api_client import ApiResult  # noqa: E402
from severity_desktop.app import MainWindow  # noqa: E402
from severity_desktop.charts import BAR, PIE  # noqa: E402
from severity_desktop.panels import Panel  # noqa: E402

WEIGHTS = {"severity1": 10, "critical": 5, "warning": 1, "outage": 20}


class FakeClient:
    """Stands in for ApiClient; records calls and answers from memory."""

    def __init__(self):
        self.calls = []

    def get_config(self):
        self.calls.append("get_config")
        return ApiResult(ok=True, error_message=None, data=dict(WEIGHTS))

    def save_config(self, weights):
        self.calls.append("save_config")
        return ApiResult(ok=True, error_message=None, data={"message": "Configuration saved"})

    def upload_csv(self, file_path):
        self.calls.append("upload_csv")
        return ApiResult(ok=True, error_message=None, data={"filename": "1-report.csv"})

    def save_data(self, payload):
        self.calls.append("save_data")
        return ApiResult(ok=True, error_message=None, data={"message": "Data saved"})


@pytest.fixture(scope="session")
def qapp():
    return QApplication.instance() or QApplication([])


@pytest.fixture
def window(qapp, monkeypatch):
    win = MainWindow(client=FakeClient())
    # Run API calls inline instead of on a QThread.
    monkeypatch.setattr(win, "_run", lambda call, on_done: on_done(call()))
    yield win
    win.renderer.dispose_all()
    win.close()
    win.deleteLater()


def test_all_panels_start_hidden(window):
    assert window.manual_panel.isHidden()
    assert window.dashboard_panel.isHidden()
    assert window.csv_panel.isHidden()


def test_opening_the_dashboard_renders_both_charts(window):
    window.on_dashboard_clicked()

    assert not window.dashboard_panel.isHidden()
    assert window.manual_panel.isHidden()
    assert window.client.calls == ["get_config"]
    assert set(window.canvases) == {BAR, PIE}
    assert window.chart_row.count() == 2


def test_rendering_again_replaces_the_old_canvases(window):
    window.on_dashboard_clicked()
    first_bar = window.canvases[BAR]

    window.on_config_for_dashboard(ApiResult(ok=True, error_message=None, data=WEIGHTS))

    assert window.chart_row.count() == 2
    assert window.canvases[BAR] is not first_bar


def test_closing_and_reopening_the_dashboard_does_not_pile_up_charts(window):
    window.on_dashboard_clicked()
    window.on_dashboard_clicked()
    assert window.dashboard_panel.isHidden()

    window.on_dashboard_clicked()

    assert window.chart_row.count() == 2


def test_choosing_a_file_fills_the_table_and_shows_csv_panel(window, tmp_path):
    csv_path = tmp_path / "report.csv"
    csv_path.write_text(
        "Mese,Severity 1 case,System Outage,Extra\nGennaio,1,2,x\n\nFebbraio,,1,y\n",
        encoding="utf-8",
    )
    window.on_manual_clicked()

    window.on_file_selected(str(csv_path))

    assert window.panels.active is Panel.CSV_TABLE
    assert not window.csv_panel.isHidden()
    assert window.manual_panel.isHidden()
    assert window.csv_table.columnCount() == 5
    assert window.csv_table.rowCount() == 2
    first_row = [window.csv_table.item(0, c).text() for c in range(5)]
    assert first_row == ["Gennaio", "1", "", "", "2"]
    assert window.csv_table.item(1, 1).text() == ""
    assert "upload_csv" in window.client.calls
    assert "save_data" in window.client.calls
    assert window.info_label.text() == "File caricato: 1-report.csv"


def test_dashboard_uses_parsed_rows_once_a_file_is_loaded(window, tmp_path):
    assert window.chart_values() == [10, 8, 12, 9, 11, 7, 6, 5, 9, 10, 8, 7]

    csv_path = tmp_path / "report.csv"
    csv_path.write_text("Mese,Severity 1 case,System Outage\nGennaio,1,2\n", encoding="utf-8")
    window.on_file_selected(str(csv_path))
    window.on_dashboard_clicked()

    assert window.chart_values() == [10 * 1 + 20 * 2]


def test_manual_panel_loads_weights_into_the_form(window):
    window.on_manual_clicked()

    assert not window.manual_panel.isHidden()
    assert window.weight_inputs["outage"].value() == 20
