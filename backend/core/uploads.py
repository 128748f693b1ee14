"""
CSV upload storage and the retention sweep that cleans it up.

Uploaded files are written as `<epoch-ms>-<original name>` into
`settings.UPLOAD_DIR`. A background thread deletes files whose modification
time is older than the retention window; it runs once on start and then
every `settings.UPLOAD_SWEEP_INTERVAL` seconds.
"""
from __future__ import annotations

import logging
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from django.conf import settings

logger = logging.getLogger(__name__)

CSV_CONTENT_TYPE = "text/csv"
MS_PER_DAY = 86400 * 1000


def upload_dir() -> Path:
    return Path(settings.UPLOAD_DIR)


def ensure_upload_dir() -> Path:
    directory = upload_dir()
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def is_csv(filename: str, content_type: str | None) -> bool:
    """A file counts as CSV if either the MIME type or the suffix says so."""
    if content_type == CSV_CONTENT_TYPE:
        return True
    return filename.lower().endswith(".csv")


def upload_problem(upload) -> str | None:
    """Return why `upload` is not acceptable, or None if it is fine."""
    if not is_csv(upload.name, getattr(upload, "content_type", None)):
        return "Only CSV files are allowed"
    if upload.size > settings.UPLOAD_MAX_BYTES:
        return "File size exceeds limit"
    return None


def store_upload(upload) -> str:
    """
    Write an already validated upload to disk and return the generated name.

    Type and size are checked by `CsvUploadSerializer` before this is called.
    """
    # Django already strips directories from upload names; basename is a
    # second line in case a client gets creative.
    original_name = os.path.basename(upload.name)
    stored_name = f"{int(time.time() * 1000)}-{original_name}"
    destination = ensure_upload_dir() / stored_name

    with open(destination, "wb") as handle:
        for chunk in upload.chunks():
            handle.write(chunk)

    logger.info("Stored upload %s (%d bytes)", stored_name, upload.size)
    return stored_name


# ---------------------------------------------------------------------------
# Retention sweep
# ---------------------------------------------------------------------------


def _expire_file(path: Path, max_age_ms: float, now_ms: float) -> bool:
    """Delete `path` if it is too old. Errors are logged, never raised."""
    try:
        modified_ms = path.stat().st_mtime * 1000
    except OSError as exc:
        logger.warning("Could not stat %s: %s", path, exc)
        return False

    if now_ms - modified_ms <= max_age_ms:
        return False

    try:
        path.unlink()
    except OSError as exc:
        logger.error("Could not delete %s: %s", path, exc)
        return False

    logger.info("Deleted expired upload %s", path.name)
    return True


def purge_expired_uploads(retention_days: float | None = None, directory: Path | None = None) -> list[str]:
    """
    Delete every upload older than `retention_days` and return their names.

    All files are checked in parallel on a small thread pool and the call
    waits until every check has finished. A missing upload folder simply
    means there is nothing to purge.
    """
    if retention_days is None:
        retention_days = settings.UPLOAD_RETENTION_DAYS
    directory = Path(directory) if directory is not None else upload_dir()

    try:
        entries = [entry for entry in directory.iterdir() if not entry.is_dir()]
    except FileNotFoundError:
        return []
    except OSError as exc:
        logger.error("Could not list upload directory %s: %s", directory, exc)
        return []

    if not entries:
        return []

    max_age_ms = retention_days * MS_PER_DAY
    now_ms = time.time() * 1000

    with ThreadPoolExecutor(max_workers=min(8, len(entries))) as executor:
        results = list(executor.map(lambda entry: _expire_file(entry, max_age_ms, now_ms), entries))

    deleted = [entry.name for entry, removed in zip(entries, results) if removed]
    logger.info("Retention sweep checked %d file(s), deleted %d", len(entries), len(deleted))
    return deleted


class RetentionScheduler:
    """Daemon thread that runs `purge_expired_uploads` on a fixed interval."""

    def __init__(self, interval: float, retention_days: float | None = None):
        self.interval = interval
        self.retention_days = retention_days
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="upload-retention", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None

    def _run(self) -> None:
        # First sweep right away, then once per interval until stopped.
        while not self._stop_event.is_set():
            try:
                purge_expired_uploads(self.retention_days)
            except Exception:  # noqa: BLE001
                # A failed sweep must not kill the thread; try again next time.
                logger.exception("Retention sweep failed")
            if self._stop_event.wait(self.interval):
                break


_scheduler: RetentionScheduler | None = None
_scheduler_lock = threading.Lock()


def start_retention_scheduler() -> RetentionScheduler:
    """Create the upload folder and start the process-wide sweep thread once."""
    global _scheduler
    with _scheduler_lock:
        ensure_upload_dir()
        if _scheduler is None:
            _scheduler = RetentionScheduler(settings.UPLOAD_SWEEP_INTERVAL)
        _scheduler.start()
        logger.info(
            "Upload retention sweep every %ss, keeping files for %s day(s)",
            settings.UPLOAD_SWEEP_INTERVAL,
            settings.UPLOAD_RETENTION_DAYS,
        )
        return _scheduler
