import json
from typing import Any, Dict, Optional

import pytest
import requests
from typer.testing import CliRunner

from avalanche_etl.config.models import DEFAULT_BASE_URL

FORECAST_URL = f"{DEFAULT_BASE_URL}/forecast"


def region_url(region_id: int) -> str:
    return f"{DEFAULT_BASE_URL}/region/{region_id}"


class FakeResponse:
    def __init__(self, payload: Any, *, status_code: int = 200, url: str = "") -> None:
        self._payload = payload
        self.status_code = status_code
        self.url = url

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """
    Minimal stand-in for requests.Session keyed by URL.

    A route value may be a payload, a FakeResponse, or an exception to raise.
    Unknown URLs answer 404.
    """

    def __init__(self, routes: Optional[Dict[str, Any]] = None) -> None:
        self.routes = dict(routes or {})
        self.calls: list[dict] = []
        self.posts: list[dict] = []

    def get(self, url: str, headers=None, timeout=None):
        self.calls.append({"url": url, "headers": headers or {}, "timeout": timeout})
        route = self.routes.get(url)
        if isinstance(route, Exception):
            raise route
        if isinstance(route, FakeResponse):
            return route
        if route is None:
            return FakeResponse({}, status_code=404, url=url)
        return FakeResponse(route, url=url)

    def post(self, url: str, json=None, headers=None, timeout=None):
        self.posts.append({"url": url, "json": json, "headers": headers or {}, "timeout": timeout})
        return FakeResponse({}, status_code=200, url=url)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        return None


class RecordingSink:
    def __init__(self) -> None:
        self.submitted: list[dict] = []

    def submit(self, collection: dict) -> None:
        self.submitted.append(collection)

    def describe(self) -> str:
        return "memory"


def make_region(region_id: int, *, title: Optional[str] = None, geometry: Any = "default") -> dict:
    if geometry == "default":
        geometry = json.dumps(
            {
                "layers": [
                    {
                        "geometry": {
                            "type": "Polygon",
                            "coordinates": [[[171.5, -42.9], [171.7, -42.9], [171.7, -43.1], [171.5, -42.9]]],
                        }
                    }
                ]
            }
        )
    return {
        "id": region_id,
        "title": title or f"Region Title {region_id}",
        "latitude": -43.0,
        "longitude": 171.6,
        "geometry": geometry,
    }


def make_forecast(
    region_id: int,
    *,
    ratings=((3, "Considerable"),),
    created: str = "2025-01-01T00:00:00Z",
    valid_period: str = "24hrs",
    important_information: str = "",
) -> dict:
    return {
        "regionId": region_id,
        "altitudeDanger": [{"rating": rating, "description": text} for rating, text in ratings],
        "created": created,
        "validPeriod": valid_period,
        "importantInformation": important_information,
    }


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("AVALANCHE_TIMEOUT", "AVALANCHE_LOG_LEVEL", "AVALANCHE_SUBMIT_TOKEN"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()
