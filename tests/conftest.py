import pytest
from rest_framework.test import APIClient


@pytest.fixture(autouse=True)
def storage(tmp_path, settings):
    """Point every persisted file at a fresh temporary folder."""
    settings.CONFIG_FILE = tmp_path / "config" / "config.json"
    settings.DATA_FILE = tmp_path / "data" / "data.json"
    settings.UPLOAD_DIR = tmp_path / "uploads"
    return tmp_path


@pytest.fixture
def api_client():
    return APIClient()
