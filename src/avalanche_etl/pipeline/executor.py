"""
Run one ETL pass: fetch every catalog region, build features, submit once.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import requests

from ..api import RawForecast, fetch_forecasts, fetch_region_info
from ..config import EtlConfig
from ..forecast import normalize_forecast
from ..geo import build_region_features, extract_polygon, feature_collection
from ..regions import resolve_regions
from ..submit import Sink, resolve_sink

logger = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    """
    Outcome of a run.

    Attributes:
        collection: The FeatureCollection that was (or would be) submitted.
        processed: Region ids that produced features.
        skipped: Region ids that produced nothing, mapped to the reason.
        submitted_to: Sink description, or None for a dry run.
    """
    collection: Dict[str, Any]
    processed: List[int] = field(default_factory=list)
    skipped: Dict[int, str] = field(default_factory=dict)
    submitted_to: Optional[str] = None

    @property
    def feature_count(self) -> int:
        return len(self.collection.get("features", []))

    def summary_rows(self) -> List[tuple[str, str]]:
        rows = [
            ("Regions processed", ", ".join(str(r) for r in self.processed) or "none"),
            ("Regions skipped", ", ".join(f"{r} ({why})" for r, why in self.skipped.items()) or "none"),
            ("Features", str(self.feature_count)),
        ]
        rows.append(("Submitted to", self.submitted_to or "not submitted (dry run)"))
        return rows


def _process_region(
    region_id: int,
    forecasts: Optional[Sequence[RawForecast]],
    config: EtlConfig,
    session: Any,
) -> List[Dict[str, Any]]:
    region = fetch_region_info(
        region_id,
        timeout_ms=config.timeout,
        base_url=config.base_url,
        user_agent=config.user_agent,
        session=session,
    )
    forecast = normalize_forecast(region_id, forecasts, site_url=config.site_url)
    if region is None or forecast is None:
        logger.warning("No data for region %s", region_id)
        return []

    polygon = extract_polygon(region.geometry, region_id)
    features = build_region_features(region_id, region, forecast, polygon)
    logger.info(
        "Added avalanche data for %s (Level %d) with %s",
        region.title,
        forecast.level,
        "polygon" if polygon else "point only",
    )
    return features


def _collect_features(config: EtlConfig, session: Any, report: PipelineReport) -> List[Dict[str, Any]]:
    forecasts = fetch_forecasts(
        timeout_ms=config.timeout,
        base_url=config.base_url,
        user_agent=config.user_agent,
        session=session,
    )

    features: List[Dict[str, Any]] = []
    for region_id in resolve_regions(config.regions):
        try:
            region_features = _process_region(region_id, forecasts, config, session)
        except Exception as exc:
            logger.exception("Unexpected error processing region %s", region_id)
            report.skipped[region_id] = f"error: {exc}"
            continue
        if region_features:
            features.extend(region_features)
            report.processed.append(region_id)
        else:
            report.skipped[region_id] = "no data"
    return features


def execute_pipeline(
    config: EtlConfig,
    *,
    session: Any = None,
    sink: Optional[Sink] = None,
    dry_run: bool = False,
) -> PipelineReport:
    """
    Fetch, normalize and assemble features for every configured region, then submit.

    A failing region is logged and skipped. Sink errors propagate and abort
    the run; nothing is submitted in that case.

    Args:
        config: Validated run configuration.
        session: Optional HTTP session; a fresh ``requests.Session`` is used otherwise.
        sink: Destination for the collection; resolved from config when omitted.
        dry_run: Build the collection without submitting it.

    Returns:
        A PipelineReport describing the run.
    """
    logger.info("ok - Starting avalanche data scraping")
    if sink is None and not dry_run:
        sink = resolve_sink(config)

    report = PipelineReport(collection=feature_collection([]))
    if session is None:
        with requests.Session() as owned_session:
            features = _collect_features(config, owned_session, report)
    else:
        features = _collect_features(config, session, report)

    report.collection = feature_collection(features)
    logger.info("ok - Generated %d avalanche forecast features", report.feature_count)

    if dry_run:
        return report

    sink.submit(report.collection)
    report.submitted_to = sink.describe()
    logger.info("ok - submitted avalanche forecast data")
    return report
