from __future__ import annotations

import json
import logging

import pytest
from renovate_profiles.config import get_settings
from renovate_profiles.core.logging import profile_context, profile_ctx, setup_logging
from renovate_profiles.errors import UnknownProfileError
from renovate_profiles.loader import load_config
from renovate_profiles.observability.metrics import METRICS, render_prometheus


def _sample(name: str, labels: dict[str, str]) -> float:
    return METRICS.registry.get_sample_value(name, labels) or 0.0


def test_config_loads_are_counted() -> None:
    labels = {"profile": "ungrouped", "dry_run": "off"}
    before = _sample("renovate_profiles_config_loads_total", labels)

    load_config("ungrouped", environ={"RENOVATE_REPOSITORIES": "acme/widgets"})

    assert _sample("renovate_profiles_config_loads_total", labels) == before + 1


def test_unknown_profile_is_counted_as_failure() -> None:
    labels = {"reason": "unknown_profile"}
    before = _sample("renovate_profiles_config_load_failures_total", labels)

    with pytest.raises(UnknownProfileError):
        load_config("nightly", environ={})

    assert _sample("renovate_profiles_config_load_failures_total", labels) == before + 1


def test_metrics_can_be_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RENOVATE_PROFILES_METRICS_ENABLED", "false")
    get_settings.cache_clear()
    labels = {"profile": "default", "dry_run": "full"}
    before = _sample("renovate_profiles_config_loads_total", labels)

    load_config("default", environ={})

    assert _sample("renovate_profiles_config_loads_total", labels) == before


def test_render_prometheus_exposes_counters() -> None:
    load_config("default", environ={})

    body, content_type = render_prometheus()

    assert b"renovate_profiles_config_loads_total" in body
    assert content_type.startswith("text/plain")


def test_profile_context_resets() -> None:
    with profile_context("ungrouped"):
        assert profile_ctx.get() == "ungrouped"
    assert profile_ctx.get() is None


def test_json_logs_carry_profile(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setenv("RENOVATE_PROFILES_LOG_FORMAT", "json")
    get_settings.cache_clear()
    setup_logging()

    load_config("ungrouped", environ={})

    records = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line]
    resolved = [r for r in records if r["message"] == "Resolved bot configuration"]
    assert resolved
    assert resolved[0]["profile"] == "ungrouped"
    assert resolved[0]["dry_run"] == "full"
    assert resolved[0]["level"] == "INFO"


def test_setup_logging_applies_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RENOVATE_PROFILES_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()

    setup_logging()

    assert logging.getLogger().level == logging.WARNING
