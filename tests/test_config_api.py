import json

import pytest

from core.stores import INVALID_CONFIG_MESSAGE

VALID_CONFIG = {"severity1": 5, "critical": 3, "warning": 1.5, "outage": 10}


def test_post_then_get_round_trips(api_client, settings):
    response = api_client.post("/config", VALID_CONFIG, format="json")
    assert response.status_code == 200
    assert response.json() == {"message": "Configuration saved"}

    response = api_client.get("/config")
    assert response.status_code == 200
    assert response.json() == VALID_CONFIG


def test_config_file_is_pretty_printed(api_client, settings):
    api_client.post("/config", VALID_CONFIG, format="json")
    assert settings.CONFIG_FILE.read_text(encoding="utf-8") == json.dumps(VALID_CONFIG, indent=2)


def test_legacy_s1_field_is_accepted_and_kept(api_client):
    legacy = {"s1": 4, "critical": 3, "warning": 2, "outage": 1}
    assert api_client.post("/config", legacy, format="json").status_code == 200
    assert api_client.get("/config").json() == legacy


@pytest.mark.parametrize(
    "payload",
    [
        {"s1": "x", "critical": 1, "warning": 1, "outage": 1},
        {"severity1": 1, "critical": 1, "warning": 1},
        {"severity1": 1, "critical": True, "warning": 1, "outage": 1},
        {"severity1": 1, "critical": "2", "warning": 1, "outage": 1},
        {"critical": 1, "warning": 1, "outage": 1},
        {"severity1": int("9" * 400), "critical": 1, "warning": 1, "outage": 1},
        [1, 2, 3, 4],
    ],
)
def test_invalid_config_is_rejected_and_file_untouched(api_client, settings, payload):
    api_client.post("/config", VALID_CONFIG, format="json")
    before = settings.CONFIG_FILE.read_text(encoding="utf-8")

    response = api_client.post("/config", payload, format="json")

    assert response.status_code == 400
    assert response.json() == {"error": INVALID_CONFIG_MESSAGE}
    assert settings.CONFIG_FILE.read_text(encoding="utf-8") == before


def test_invalid_config_does_not_create_a_file(api_client, settings):
    response = api_client.post("/config", {"severity1": "nope"}, format="json")
    assert response.status_code == 400
    assert not settings.CONFIG_FILE.exists()


def test_get_without_saved_config_is_a_server_error(api_client):
    response = api_client.get("/config")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read configuration"}


def test_get_with_corrupt_config_is_a_server_error(api_client, settings):
    settings.CONFIG_FILE.parent.mkdir(parents=True)
    settings.CONFIG_FILE.write_text("{not json", encoding="utf-8")

    response = api_client.get("/config")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to read configuration"}


def test_write_failure_is_a_server_error(api_client, settings, storage):
    # A plain file where the folder should be makes mkdir fail.
    blocker = storage / "blocked"
    blocker.write_text("", encoding="utf-8")
    settings.CONFIG_FILE = blocker / "config.json"

    response = api_client.post("/config", VALID_CONFIG, format="json")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to save configuration"}
