"""
Tiny JSON file stores for the weights configuration and the event data.

Each store owns exactly one file. Writes go to a temporary file next to the
target and are then moved over it with `os.replace`, so a reader never sees
half a file. Two writers racing still means "last one wins".
"""
from __future__ import annotations

import json
import logging
import math
import os
import tempfile
from pathlib import Path
from typing import Any

from django.conf import settings

from .exceptions import PersistenceError, ValidationFailed

logger = logging.getLogger(__name__)

# Weight fields the dashboard needs. `severity1` is the canonical name,
# older clients send `s1` instead.
SEVERITY_FIELD = "severity1"
LEGACY_SEVERITY_FIELD = "s1"
WEIGHT_FIELDS = ("critical", "warning", "outage")

INVALID_CONFIG_MESSAGE = (
    "Fields severity1 (or s1), critical, warning and outage must be finite numbers"
)


def write_json_atomic(path: Path, payload: Any) -> None:
    """Dump `payload` as 2-space JSON into `path`, creating the folder if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, ensure_ascii=False)
        os.replace(tmp_name, path)
    except BaseException:
        # Do not leave stray temp files behind if the dump blew up.
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass, but `true` is not a weight.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too big for a float are as good as infinite
        return False


def validate_weights(payload: Any) -> None:
    """Raise `ValidationFailed` unless all four weights are finite numbers."""
    if not isinstance(payload, dict):
        raise ValidationFailed(INVALID_CONFIG_MESSAGE)

    severity = payload.get(SEVERITY_FIELD, payload.get(LEGACY_SEVERITY_FIELD))
    values = [severity] + [payload.get(field) for field in WEIGHT_FIELDS]
    if not all(_is_finite_number(value) for value in values):
        raise ValidationFailed(INVALID_CONFIG_MESSAGE)


class JsonFileStore:
    """One JSON document on disk, read and replaced as a whole."""

    # Subclasses point this at a settings name and fill in the messages.
    setting_name = ""
    read_error = "Failed to read file"
    write_error = "Failed to write file"

    def __init__(self, path: Path | None = None):
        self._path = path

    @property
    def path(self) -> Path:
        # Looked up lazily so test settings overrides are honoured.
        if self._path is not None:
            return Path(self._path)
        return Path(getattr(settings, self.setting_name))

    def read(self) -> Any:
        try:
            with open(self.path, encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, ValueError) as exc:
            logger.error("Could not read %s: %s", self.path, exc)
            raise PersistenceError(self.read_error) from exc

    def write(self, payload: Any) -> None:
        try:
            write_json_atomic(self.path, payload)
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Could not write %s: %s", self.path, exc)
            raise PersistenceError(self.write_error) from exc
        logger.info("Saved %s", self.path)


class ConfigStore(JsonFileStore):
    """The severity weights used to compute the monthly weighted totals."""

    setting_name = "CONFIG_FILE"
    read_error = "Failed to read configuration"
    write_error = "Failed to save configuration"

    def write(self, payload: Any) -> None:
        # Validate before touching the file so a bad request leaves it alone.
        validate_weights(payload)
        super().write(payload)


class DataStore(JsonFileStore):
    """Whatever event payload the frontend last submitted."""

    setting_name = "DATA_FILE"
    read_error = "Failed to read data"
    write_error = "Failed to save data"
