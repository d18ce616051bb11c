"""Serialization of bot configuration records.

JSON and YAML are read and written; the CommonJS module consumed by the bot's
``config.js`` loader is written only.
"""

from __future__ import annotations

import json
import re
from typing import Any

import yaml
from pydantic import ValidationError

from renovate_profiles.errors import BotConfigError, ConfigValidationError, UnsupportedFormatError
from renovate_profiles.schemas.bot_config import BotConfig

DUMP_FORMATS = ("js", "json", "yaml")
PARSE_FORMATS = ("json", "yaml")

MODULE_TYPE_ANNOTATION = "/**\n * @type {import('renovate/dist/config/types').AllConfig}\n */\n"

_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")
_INDENT = "  "


def validate_data(data: Any, *, source: str) -> BotConfig:
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"Bot configuration in {source} must be a mapping",
            source=source,
        )
    try:
        return BotConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigValidationError.from_validation_error(exc, source=source) from exc


def parse_config(text: str, fmt: str, *, source: str = "<string>") -> BotConfig:
    if fmt not in PARSE_FORMATS:
        raise UnsupportedFormatError(f"Unsupported config format: {fmt}", source=source)
    try:
        data = yaml.safe_load(text) if fmt == "yaml" else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise BotConfigError(f"Could not parse {fmt} from {source}: {exc}", source=source) from exc
    return validate_data(data, source=source)


def dump_config(config: BotConfig, fmt: str) -> str:
    data = config.to_platform_dict()
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False, allow_unicode=True)
    if fmt == "js":
        return render_module(config)
    raise UnsupportedFormatError(f"Unsupported config format: {fmt}")


def _js_key(key: str) -> str:
    return key if _IDENTIFIER.match(key) else json.dumps(key)


def _js_scalar(value: Any) -> str:
    # json literals for str/bool/null/numbers are valid JavaScript
    return json.dumps(value)


def _js_value(value: Any, depth: int) -> str:
    if isinstance(value, dict):
        if not value:
            return "{}"
        inner = _INDENT * (depth + 1)
        lines = [f"{inner}{_js_key(k)}: {_js_value(v, depth + 1)}," for k, v in value.items()]
        return "{\n" + "\n".join(lines) + "\n" + _INDENT * depth + "}"
    if isinstance(value, list):
        if not value:
            return "[]"
        if all(not isinstance(item, (dict, list)) for item in value):
            return "[" + ", ".join(_js_scalar(item) for item in value) + "]"
        inner = _INDENT * (depth + 1)
        lines = [f"{inner}{_js_value(item, depth + 1)}," for item in value]
        return "[\n" + "\n".join(lines) + "\n" + _INDENT * depth + "]"
    return _js_scalar(value)


def _env_lookup(env_var: str) -> str:
    if _IDENTIFIER.match(env_var):
        return f"process.env.{env_var}"
    return f"process.env[{json.dumps(env_var)}]"


def render_module(config: BotConfig, dry_run_env: str | None = None) -> str:
    """Render ``config`` as a CommonJS module exporting the record.

    When ``dry_run_env`` is given, ``dryRun`` is emitted as a runtime check of
    that variable instead of the resolved value, so the bot decides on start-up.
    """
    data = config.to_platform_dict()
    lines = []
    for key, value in data.items():
        if key == "dryRun" and dry_run_env:
            rendered = f'{_env_lookup(dry_run_env)} ? null : "full"'
        else:
            rendered = _js_value(value, 1)
        lines.append(f"{_INDENT}{_js_key(key)}: {rendered},")
    return MODULE_TYPE_ANNOTATION + "module.exports = {\n" + "\n".join(lines) + "\n};\n"
