import pytest

from avalanche_etl.api.avalanche import RawForecast
from avalanche_etl.forecast import NO_RATING_DESCRIPTION, danger_level_text, normalize_forecast

from conftest import make_forecast


def _raw(*payloads: dict) -> list[RawForecast]:
    return [RawForecast.from_payload(payload) for payload in payloads]


@pytest.mark.parametrize(
    ("rating", "expected"),
    [
        (-2, "Insufficient Snow"),
        (0, "No Rating"),
        (1, "Low (1)"),
        (2, "Moderate (2)"),
        (3, "Considerable (3)"),
        (4, "High (4)"),
        (5, "Extreme (5)"),
        (6, "Level 6"),
        (-7, "Level -7"),
    ],
)
def test_danger_level_text_is_total(rating: int, expected: str) -> None:
    assert danger_level_text(rating) == expected


def test_uses_highest_positive_band() -> None:
    forecasts = _raw(make_forecast(1, ratings=[(2, "Moderate low"), (4, "High alpine"), (3, "Considerable mid")]))

    result = normalize_forecast(1, forecasts)

    assert result is not None
    assert result.level == 4
    assert result.level_text == "High (4)"
    assert result.description == "High alpine"
    assert result.location == "Region 1"
    assert result.url == "https://www.avalanche.net.nz/region/1"


def test_first_matching_entry_is_authoritative() -> None:
    forecasts = _raw(
        make_forecast(2, ratings=[(5, "Other region")]),
        make_forecast(1, ratings=[(1, "Newest")], created="2025-02-01T00:00:00Z"),
        make_forecast(1, ratings=[(4, "Older")], created="2025-01-01T00:00:00Z"),
    )

    result = normalize_forecast(1, forecasts)

    assert result is not None
    assert result.level == 1
    assert result.start == "2025-02-01T00:00:00Z"


def test_insufficient_snow_keeps_level_zero() -> None:
    forecasts = _raw(make_forecast(7, ratings=[(-2, "Insufficient Snow data")]))

    result = normalize_forecast(7, forecasts)

    assert result is not None
    assert result.level == 0
    assert result.level_text == "No Rating"
    assert result.description == "Insufficient Snow data"


def test_unrated_forecast_uses_placeholder_description() -> None:
    forecasts = _raw(make_forecast(7, ratings=[(0, "zero"), (0, "zero again")]))

    result = normalize_forecast(7, forecasts)

    assert result is not None
    assert result.level == 0
    assert result.description == NO_RATING_DESCRIPTION


def test_important_information_is_stripped_of_markup() -> None:
    forecasts = _raw(
        make_forecast(
            4,
            ratings=[(2, "Moderate")],
            important_information="  <p>Wind slabs <strong>building</strong> on lee slopes.</p>\n",
        )
    )

    result = normalize_forecast(4, forecasts)

    assert result is not None
    assert result.description == "Wind slabs building on lee slopes."


@pytest.mark.parametrize(
    ("period", "expected"),
    [
        ("24hrs", "2025-01-02T00:00:00.000Z"),
        ("48hrs", "2025-01-03T00:00:00.000Z"),
        ("72hrs", "2025-01-02T00:00:00.000Z"),
    ],
)
def test_expiry_follows_valid_period(period: str, expected: str) -> None:
    forecasts = _raw(make_forecast(5, valid_period=period))

    result = normalize_forecast(5, forecasts)

    assert result is not None
    assert result.expires == expected


def test_expiry_keeps_milliseconds_and_offset() -> None:
    forecasts = _raw(make_forecast(5, created="2025-06-30T17:45:12.345+12:00"))

    result = normalize_forecast(5, forecasts)

    assert result is not None
    assert result.expires == "2025-07-01T05:45:12.345Z"


def test_missing_region_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    forecasts = _raw(make_forecast(2))

    assert normalize_forecast(1, forecasts) is None
    assert "No forecasts available for region 1" in caplog.text


def test_empty_forecast_list_returns_none() -> None:
    assert normalize_forecast(1, []) is None
    assert normalize_forecast(1, None) is None


def test_unparseable_created_skips_region() -> None:
    forecasts = _raw(make_forecast(1, created="sometime last week"))

    assert normalize_forecast(1, forecasts) is None
