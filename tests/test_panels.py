from severity_desktop.panels import Panel, PanelController


def test_everything_starts_hidden():
    panels = PanelController()
    assert panels.active is None


def test_toggle_shows_panel_and_hides_the_others():
    panels = PanelController()
    panels.toggle(Panel.DASHBOARD)

    assert panels.toggle(Panel.MANUAL_INPUT) is True
    assert panels.active is Panel.MANUAL_INPUT
    assert not panels.is_visible(Panel.DASHBOARD)
    assert not panels.is_visible(Panel.CSV_TABLE)


def test_toggling_the_open_panel_hides_everything():
    panels = PanelController()
    panels.toggle(Panel.MANUAL_INPUT)

    assert panels.toggle(Panel.MANUAL_INPUT) is False
    assert panels.active is None
    assert not any(panels.visible.values())


def test_dashboard_toggle_reports_when_it_opens():
    panels = PanelController()
    assert panels.toggle(Panel.DASHBOARD) is True
    assert panels.toggle(Panel.DASHBOARD) is False


def test_show_forces_csv_panel():
    panels = PanelController()
    panels.toggle(Panel.MANUAL_INPUT)
    panels.show(Panel.CSV_TABLE)
    panels.show(Panel.CSV_TABLE)

    assert panels.active is Panel.CSV_TABLE
    assert [p for p, shown in panels.visible.items() if shown] == [Panel.CSV_TABLE]
