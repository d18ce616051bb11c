"""Loading of resolved bot configuration.

The only runtime input is the environment: when the repositories variable is
unset or empty the bot runs as a full dry run, otherwise it runs for real.
The environment is passed in as a mapping so callers and tests control it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

from renovate_profiles.config import get_settings
from renovate_profiles.core.logging import profile_context
from renovate_profiles.errors import (
    BotConfigError,
    ConfigValidationError,
    UnknownProfileError,
    UnsupportedFormatError,
)
from renovate_profiles.observability.metrics import (
    record_config_load,
    record_config_load_failure,
)
from renovate_profiles.profiles import get_profile
from renovate_profiles.schemas.bot_config import BotConfig, DryRunMode
from renovate_profiles.serialization import parse_config

logger = logging.getLogger(__name__)

DRY_RUN_ENV_VAR = "RENOVATE_REPOSITORIES"


def resolve_dry_run(
    environ: Mapping[str, str], env_var: str = DRY_RUN_ENV_VAR
) -> DryRunMode | None:
    if environ.get(env_var):
        return None
    return "full"


def load_config(
    profile: str | None = None,
    environ: Mapping[str, str] | None = None,
    *,
    env_var: str | None = None,
) -> BotConfig:
    """Build the resolved configuration record for ``profile``.

    Args:
        profile: Profile name (defaults to the configured default profile)
        environ: Environment lookup (defaults to ``os.environ``)
        env_var: Variable that disables dry-run when set and non-empty

    Raises:
        UnknownProfileError: If the profile is not registered
        ConfigValidationError: If the profile data fails validation
    """
    settings = get_settings()
    name = profile if profile is not None else settings.default_profile
    lookup = os.environ if environ is None else environ
    variable = env_var or settings.dry_run_env_var

    with profile_context(name):
        dry_run = resolve_dry_run(lookup, variable)
        try:
            config = get_profile(name, dry_run=dry_run)
        except UnknownProfileError:
            record_config_load_failure(reason="unknown_profile")
            raise
        except ConfigValidationError as exc:
            record_config_load_failure(reason="invalid")
            logger.error(
                "Profile failed validation",
                extra={"errors": exc.errors},
            )
            raise

        record_config_load(profile=name, dry_run=dry_run)
        logger.info(
            "Resolved bot configuration",
            extra={"env_var": variable, "dry_run": dry_run},
        )
        return config


def load_config_from_file(path: str | Path) -> BotConfig:
    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix in {".yaml", ".yml"}:
        fmt = "yaml"
    elif suffix == ".json":
        fmt = "json"
    else:
        record_config_load_failure(reason="unsupported_format")
        raise UnsupportedFormatError(
            f"Unsupported config file format: {config_path.suffix}",
            source=str(config_path),
        )

    try:
        raw = config_path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        record_config_load_failure(reason="invalid")
        raise ConfigValidationError(
            f"Bot configuration in {config_path} is not valid UTF-8",
            source=str(config_path),
        ) from exc
    except OSError:
        record_config_load_failure(reason="io")
        raise

    try:
        config = parse_config(raw, fmt, source=str(config_path))
    except BotConfigError:
        record_config_load_failure(reason="invalid")
        raise

    logger.info(
        "Loaded bot configuration from file",
        extra={"path": str(config_path), "dry_run": config.dry_run},
    )
    return config
