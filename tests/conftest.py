"""Test configuration and fixtures."""

import logging
import os
from collections.abc import Generator

import pytest
from renovate_profiles.config import get_settings
from renovate_profiles.loader import load_config
from renovate_profiles.schemas.bot_config import BotConfig

PROFILE_NAMES = ("default", "ungrouped")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep host environment overrides out of the settings and dry-run lookup."""
    for key in list(os.environ):
        if key.startswith("RENOVATE_PROFILES_"):
            monkeypatch.delenv(key)
    monkeypatch.delenv("RENOVATE_REPOSITORIES", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def restore_root_logger() -> Generator[None, None, None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture(params=PROFILE_NAMES)
def profile_name(request: pytest.FixtureRequest) -> str:
    return request.param


@pytest.fixture
def resolved_config(profile_name: str) -> BotConfig:
    """Profile resolved with the repositories variable unset (dry run)."""
    return load_config(profile_name, environ={})


@pytest.fixture
def platform_data() -> dict:
    """A valid record as the platform would read it."""
    return {
        "autodiscover": False,
        "branchPrefix": "renovate/",
        "dryRun": "full",
        "enabledManagers": ["gomod", "github-actions"],
        "gitAuthor": "dfns-github-bot <infra@dfns.co>",
        "onboarding": False,
        "platform": "github",
        "postUpdateOptions": ["gomodTidy"],
        "prConcurrentLimit": 0,
        "prHourlyLimit": 0,
        "requireConfig": "optional",
        "lockFileMaintenance": {"enabled": False, "schedule": None},
        "packageRules": [
            {
                "groupName": "aws-sdk-go-v2 packages",
                "groupSlug": "aws-sdk-go-v2",
                "matchDatasources": ["go"],
                "matchPackageNames": ["github.com/aws/aws-sdk-go-v2/**"],
            }
        ],
        "customManagers": [],
    }
