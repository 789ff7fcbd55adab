"""
Destinations for the finished FeatureCollection.

Sinks raise on failure; a run either submits the whole collection or fails.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Protocol

import requests

from .config import EtlConfig, Secrets, get_secrets
from .util import write_json_atomic

logger = logging.getLogger(__name__)


class Sink(Protocol):
    def submit(self, collection: Dict[str, Any]) -> None: ...

    def describe(self) -> str: ...


class FileSink:
    """Write the collection as GeoJSON to a local path (atomic replace)."""

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    def submit(self, collection: Dict[str, Any]) -> None:
        target = write_json_atomic(self.path, collection)
        logger.info("Wrote %d features to %s", len(collection.get("features", [])), target)

    def describe(self) -> str:
        return str(self.path)


class HttpSink:
    """POST the collection as JSON to a collector endpoint."""

    def __init__(self, url: str, *, timeout_ms: int, token: Optional[str] = None, session: Any = None) -> None:
        self.url = url
        self.timeout_ms = timeout_ms
        self.token = token
        self.session = session

    def submit(self, collection: Dict[str, Any]) -> None:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        http = self.session or requests
        resp = http.post(self.url, json=collection, headers=headers, timeout=self.timeout_ms / 1000.0)
        resp.raise_for_status()
        logger.info("Posted %d features to %s (HTTP %s)", len(collection.get("features", [])), self.url, resp.status_code)

    def describe(self) -> str:
        return self.url


def resolve_sink(config: EtlConfig, *, secrets: Optional[Secrets] = None) -> Sink:
    """Pick the HTTP sink when ``submit_url`` is configured, else the file sink."""
    if config.submit_url:
        secrets = secrets or get_secrets()
        return HttpSink(config.submit_url, timeout_ms=config.timeout, token=secrets.submit_token)
    return FileSink(config.output)
