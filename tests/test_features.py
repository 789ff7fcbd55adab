from avalanche_etl.api.avalanche import RegionInfo
from avalanche_etl.forecast import NormalizedForecast
from avalanche_etl.geo import (
    AVALANCHE_COLORS,
    AVALANCHE_ICONS,
    build_region_features,
    color_for_level,
    feature_collection,
    icon_for_level,
)

RING = [[[170.0, -43.0], [170.5, -43.0], [170.5, -43.5], [170.0, -43.0]]]


def _region() -> RegionInfo:
    return RegionInfo(id=3, title="Arthur's Pass", latitude=-42.95, longitude=171.56, geometry=None)


def _forecast(level: int = 3, level_text: str = "Considerable (3)", expires: str = "2025-01-02T00:00:00.000Z") -> NormalizedForecast:
    return NormalizedForecast(
        location="Region 3",
        level=level,
        level_text=level_text,
        description="Wind slabs on lee slopes",
        start="2025-01-01T00:00:00Z",
        expires=expires,
        url="https://www.avalanche.net.nz/region/3",
    )


def test_polygon_and_point_features() -> None:
    features = build_region_features(3, _region(), _forecast(), RING)

    assert [f["id"] for f in features] == ["avalanche-3", "avalanche-3-center"]
    polygon, point = features

    assert polygon["geometry"] == {"type": "Polygon", "coordinates": RING}
    props = polygon["properties"]
    assert props["stroke"] == props["fill"] == "rgb(248, 151, 44)"
    assert props["stroke-width"] == 2
    assert props["stroke-opacity"] == 0.4
    assert props["fill-opacity"] == 0.4
    assert props["stroke-style"] == "solid"
    assert "icon" not in props

    assert point["geometry"] == {"type": "Point", "coordinates": [-42.95, 171.56]}
    assert point["properties"]["icon"] == AVALANCHE_ICONS[3]
    assert "fill" not in point["properties"]


def test_shared_properties() -> None:
    point = build_region_features(3, _region(), _forecast())[0]
    props = point["properties"]

    assert props["callsign"] == "Avalanche Risk: Arthur's Pass - Considerable (3)"
    assert props["type"] == "a-o-X-i-g-h"
    assert props["time"] == props["start"] == "2025-01-01T00:00:00.000Z"
    assert props["stale"] == "2025-01-02T00:00:00.000Z"
    assert props["remarks"].split("\n") == [
        "Avalanche Risk: Arthur's Pass - Considerable (3)",
        "Location: Arthur's Pass",
        "Danger Level: Considerable (3)",
        "Description: Wind slabs on lee slopes",
        "Issued: 2025-01-01T00:00:00Z",
        "Valid Until: 2025-01-02T00:00:00.000Z",
    ]
    assert props["links"] == [
        {
            "uid": "avalanche-3",
            "relation": "r-u",
            "mime": "text/html",
            "url": "https://www.avalanche.net.nz/region/3",
            "remarks": "Avalanche Forecast Details",
        }
    ]


def test_remarks_omit_valid_until_without_expiry() -> None:
    point = build_region_features(3, _region(), _forecast(expires=""))[0]

    assert "Valid Until" not in point["properties"]["remarks"]
    assert point["properties"]["stale"] is None


def test_point_only_without_polygon() -> None:
    features = build_region_features(3, _region(), _forecast(), None)

    assert [f["id"] for f in features] == ["avalanche-3-center"]


def test_missing_inputs_produce_nothing() -> None:
    assert build_region_features(3, None, _forecast(), RING) == []
    assert build_region_features(3, _region(), None, RING) == []


def test_style_lookup_falls_back_to_level_zero() -> None:
    assert color_for_level(9) == AVALANCHE_COLORS[0]
    assert icon_for_level(-1) == AVALANCHE_ICONS[0]
    assert icon_for_level(5) == icon_for_level(4)

    features = build_region_features(3, _region(), _forecast(level=8, level_text="Level 8"), RING)
    assert features[0]["properties"]["fill"] == "rgb(128, 128, 128)"
    assert features[1]["properties"]["icon"] == AVALANCHE_ICONS[0]


def test_feature_collection_wraps_features() -> None:
    features = build_region_features(3, _region(), _forecast(), RING)

    assert feature_collection(features) == {"type": "FeatureCollection", "features": features}
