from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

TIMEOUT = 10
NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
    "User-Agent": "labpage/1.0",
}


class ContentLoadError(Exception):
    """The content document could not be fetched."""

    def __init__(self, source: str, status: int | None, reason: str) -> None:
        self.source = source
        self.status = status
        self.reason = reason
        label = f"{status} {reason}" if status is not None else reason
        super().__init__(f"Failed to load {source}: {label}")


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in {"http", "https"}


def _fetch_url(source: str, session: requests.Session | None) -> Any:
    getter = session.get if session is not None else requests.get
    try:
        response = getter(source, headers=NO_CACHE_HEADERS, timeout=TIMEOUT)
    except requests.RequestException as exc:
        raise ContentLoadError(source, None, str(exc)) from exc
    if not response.ok:
        raise ContentLoadError(source, response.status_code, response.reason or "")
    return response.json()


def _read_file(source: str, base_dir: Path | None) -> Any:
    path = Path(source)
    if not path.is_absolute() and base_dir is not None:
        path = base_dir / path
    if not path.is_file():
        raise ContentLoadError(source, 404, "Not Found")
    return json.loads(path.read_text(encoding="utf-8"))


def load_json(
    source: str | Path,
    *,
    base_dir: Path | None = None,
    session: requests.Session | None = None,
) -> Any:
    source = str(source)
    if _is_url(source):
        return _fetch_url(source, session)
    return _read_file(source, base_dir)
