from renovate_profiles.errors import (
    BotConfigError,
    ConfigValidationError,
    UnknownProfileError,
    UnsupportedFormatError,
)
from renovate_profiles.loader import (
    DRY_RUN_ENV_VAR,
    load_config,
    load_config_from_file,
    resolve_dry_run,
)
from renovate_profiles.profiles import get_profile, profile_names
from renovate_profiles.schemas.bot_config import (
    BotConfig,
    CustomManager,
    LockFileMaintenance,
    PackageRule,
)
from renovate_profiles.serialization import dump_config, parse_config, render_module

__all__ = [
    "DRY_RUN_ENV_VAR",
    "BotConfig",
    "BotConfigError",
    "ConfigValidationError",
    "CustomManager",
    "LockFileMaintenance",
    "PackageRule",
    "UnknownProfileError",
    "UnsupportedFormatError",
    "dump_config",
    "get_profile",
    "load_config",
    "load_config_from_file",
    "parse_config",
    "profile_names",
    "render_module",
    "resolve_dry_run",
]
