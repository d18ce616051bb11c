from __future__ import annotations

from dataclasses import dataclass

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, Counter
from prometheus_client.exposition import generate_latest, write_to_textfile

from renovate_profiles.config import get_settings


@dataclass(frozen=True)
class PrometheusMetrics:
    registry: CollectorRegistry
    config_loads_total: Counter
    config_load_failures_total: Counter


_REGISTRY = CollectorRegistry(auto_describe=True)

METRICS = PrometheusMetrics(
    registry=_REGISTRY,
    config_loads_total=Counter(
        "renovate_profiles_config_loads_total",
        "Total resolved configuration loads by profile and dry-run mode",
        labelnames=("profile", "dry_run"),
        registry=_REGISTRY,
    ),
    config_load_failures_total=Counter(
        "renovate_profiles_config_load_failures_total",
        "Total configuration load failures by reason",
        labelnames=("reason",),
        registry=_REGISTRY,
    ),
)


def render_prometheus() -> tuple[bytes, str]:
    return generate_latest(METRICS.registry), CONTENT_TYPE_LATEST


def record_config_load(*, profile: str, dry_run: str | None) -> None:
    if not get_settings().metrics_enabled:
        return
    METRICS.config_loads_total.labels(profile=profile, dry_run=dry_run or "off").inc()


def record_config_load_failure(*, reason: str) -> None:
    if not get_settings().metrics_enabled:
        return
    METRICS.config_load_failures_total.labels(reason=reason).inc()


def write_metrics_textfile(path: str) -> None:
    # node-exporter textfile collector format, written atomically
    write_to_textfile(path, METRICS.registry)
