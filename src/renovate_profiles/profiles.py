"""Named bot configuration profiles.

Both profiles share every policy value and differ only in package grouping:
``default`` bundles the AWS SDK for Go v2 modules into one PR, ``ungrouped``
lets each module update on its own.
"""

from __future__ import annotations

import copy
from typing import Any

from pydantic import ValidationError

from renovate_profiles.errors import ConfigValidationError, UnknownProfileError
from renovate_profiles.schemas.bot_config import BotConfig, DryRunMode

AWS_SDK_GO_V2_RULE: dict[str, Any] = {
    "groupName": "aws-sdk-go-v2 packages",
    "groupSlug": "aws-sdk-go-v2",
    "matchDatasources": ["go"],
    "matchPackageNames": ["github.com/aws/aws-sdk-go-v2/**"],
}

# dryRun is resolved at load time and is not part of the templates
_SHARED: dict[str, Any] = {
    "autodiscover": False,
    "branchPrefix": "renovate/",
    "enabledManagers": ["gomod", "github-actions"],
    "gitAuthor": "dfns-github-bot <infra@dfns.co>",
    "onboarding": False,
    "platform": "github",
    "postUpdateOptions": ["gomodTidy"],
    "prConcurrentLimit": 0,
    "prHourlyLimit": 0,
    "requireConfig": "optional",
    "lockFileMaintenance": {
        "enabled": False,
        "schedule": None,
    },
}

_PROFILES: dict[str, dict[str, Any]] = {
    "default": {
        **_SHARED,
        "packageRules": [AWS_SDK_GO_V2_RULE],
        "customManagers": [],
    },
    "ungrouped": {
        **_SHARED,
        "packageRules": [],
        "customManagers": [],
    },
}


def profile_names() -> list[str]:
    return sorted(_PROFILES)


def profile_template(name: str) -> dict[str, Any]:
    """Return a copy of the unresolved profile data, without ``dryRun``."""
    try:
        template = _PROFILES[name]
    except KeyError:
        raise UnknownProfileError(name, profile_names()) from None
    return copy.deepcopy(template)


def get_profile(name: str, *, dry_run: DryRunMode | None) -> BotConfig:
    """Build the record for profile ``name`` with an already resolved dry-run mode."""
    data = profile_template(name)
    data["dryRun"] = dry_run
    try:
        return BotConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError.from_validation_error(exc, source=f"profile:{name}") from exc
