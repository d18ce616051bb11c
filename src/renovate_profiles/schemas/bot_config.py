"""Schemas for the dependency-update bot configuration record.

Attribute names are snake_case; the platform reads camelCase keys, which are
produced by the alias generator and accepted on input as well.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    ValidationInfo,
    field_validator,
    model_serializer,
)
from pydantic.alias_generators import to_camel

DryRunMode = Literal["extract", "lookup", "full"]
RequireConfig = Literal["required", "optional", "ignored"]
Platform = Literal[
    "azure",
    "bitbucket",
    "bitbucket-server",
    "codecommit",
    "forgejo",
    "gerrit",
    "gitea",
    "github",
    "gitlab",
    "local",
]
CustomManagerType = Literal["regex", "jsonata"]
MatchStringsStrategy = Literal["any", "recursive", "combination"]

GIT_AUTHOR_PATTERN = r"^[^<>]*\S[^<>]* <[^<>@\s]+@[^<>\s]+>$"


class _PlatformModel(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def _require_entries(values: tuple[str, ...], field: str) -> tuple[str, ...]:
    if not values:
        raise ValueError(f"{field} must not be empty")
    if any(not v.strip() for v in values):
        raise ValueError(f"{field} entries must be non-empty strings")
    return values


class LockFileMaintenance(_PlatformModel):
    """Separately scheduled lock file refresh policy."""

    enabled: bool = Field(strict=True)
    schedule: str | None = None


class PackageRule(_PlatformModel):
    """Grouping rule bundling matching dependency updates into one PR."""

    group_name: str = Field(min_length=1)
    group_slug: str = Field(min_length=1)
    match_datasources: tuple[str, ...]
    match_package_names: tuple[str, ...]

    @field_validator("match_datasources", "match_package_names")
    @classmethod
    def non_empty_matchers(cls, v: tuple[str, ...], info: ValidationInfo) -> tuple[str, ...]:
        return _require_entries(v, to_camel(info.field_name or ""))


class CustomManager(_PlatformModel):
    """Custom dependency extraction rule."""

    custom_type: CustomManagerType
    manager_file_patterns: tuple[str, ...]
    match_strings: tuple[str, ...]
    match_strings_strategy: MatchStringsStrategy | None = None
    datasource_template: str | None = None
    dep_name_template: str | None = None
    versioning_template: str | None = None

    @field_validator("manager_file_patterns", "match_strings")
    @classmethod
    def non_empty_patterns(cls, v: tuple[str, ...], info: ValidationInfo) -> tuple[str, ...]:
        return _require_entries(v, to_camel(info.field_name or ""))

    @model_serializer(mode="wrap")
    def omit_unset_options(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        # The platform treats absent and null templates differently
        return {k: v for k, v in handler(self).items() if v is not None}


class BotConfig(_PlatformModel):
    """Self-hosted configuration read once by the bot at start-up."""

    autodiscover: bool = Field(strict=True)
    branch_prefix: str = Field(min_length=1)
    dry_run: DryRunMode | None
    enabled_managers: tuple[str, ...]
    git_author: str = Field(pattern=GIT_AUTHOR_PATTERN)
    onboarding: bool = Field(strict=True)
    platform: Platform
    post_update_options: tuple[str, ...]
    pr_concurrent_limit: int = Field(ge=0, strict=True)
    pr_hourly_limit: int = Field(ge=0, strict=True)
    require_config: RequireConfig
    lock_file_maintenance: LockFileMaintenance
    package_rules: tuple[PackageRule, ...] = ()
    custom_managers: tuple[CustomManager, ...] = ()

    @field_validator("enabled_managers")
    @classmethod
    def unique_managers(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        seen: set[str] = set()
        for manager in v:
            if not manager.strip():
                raise ValueError("enabledManagers entries must be non-empty strings")
            if manager in seen:
                raise ValueError(f"enabledManagers contains duplicate manager {manager!r}")
            seen.add(manager)
        return v

    def to_platform_dict(self) -> dict[str, Any]:
        """Return the complete record keyed the way the platform reads it."""
        return self.model_dump(mode="json", by_alias=True)
