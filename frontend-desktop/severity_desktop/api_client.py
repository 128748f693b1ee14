"""
Thin `requests` wrapper around the backend API.

Every call returns an `ApiResult` instead of raising, because the Qt workers
only need to know "did it work, and if not, what do I show the user".
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import requests

API_BASE_URL = os.environ.get("SEVERITY_API_URL", "http://127.0.0.1:3000")


@dataclass
class ApiResult:
    ok: bool
    error_message: str | None
    data: Any = None


class ApiClient:
    def __init__(self, base_url: str = API_BASE_URL, timeout: float = 30):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _call(self, method: str, path: str, **kwargs) -> ApiResult:
        try:
            response = self.session.request(method, self._url(path), timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            return ApiResult(ok=False, error_message=str(exc))

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code != 200:
            if isinstance(payload, dict) and payload.get("error"):
                msg = payload["error"]
            else:
                msg = response.text or f"HTTP {response.status_code}"
            return ApiResult(ok=False, error_message=msg, data=payload)

        return ApiResult(ok=True, error_message=None, data=payload)

    def get_config(self) -> ApiResult:
        return self._call("GET", "config")

    def save_config(self, weights: dict[str, float]) -> ApiResult:
        return self._call("POST", "config", json=weights)

    def get_data(self) -> ApiResult:
        return self._call("GET", "data")

    def save_data(self, payload: Any) -> ApiResult:
        return self._call("POST", "data", json=payload)

    def upload_csv(self, file_path: str | Path) -> ApiResult:
        file_path = Path(file_path)
        with open(file_path, "rb") as f:
            files = {"file": (file_path.name, f, "text/csv")}
            return self._call("POST", "upload", files=files)
