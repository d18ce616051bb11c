"""Command line entry point for listing, rendering and validating bot profiles."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from renovate_profiles.config import get_settings
from renovate_profiles.core.logging import setup_logging
from renovate_profiles.errors import BotConfigError, ConfigValidationError
from renovate_profiles.loader import load_config, load_config_from_file
from renovate_profiles.observability.metrics import write_metrics_textfile
from renovate_profiles.profiles import profile_names
from renovate_profiles.serialization import DUMP_FORMATS, PARSE_FORMATS, dump_config, render_module

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    settings = get_settings()
    p = argparse.ArgumentParser(prog="renovate-profiles")
    p.add_argument(
        "--metrics-file",
        type=Path,
        default=None,
        help="Write load counters here in Prometheus textfile format",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List registered profiles")

    show = sub.add_parser("show", help="Print the resolved configuration record")
    show.add_argument("--profile", default=None)
    show.add_argument("--format", choices=PARSE_FORMATS, default="json", dest="fmt")

    render = sub.add_parser("render", help="Render a profile for the bot to consume")
    render.add_argument("--profile", default=None)
    render.add_argument("--format", choices=DUMP_FORMATS, default=settings.output_format, dest="fmt")
    render.add_argument(
        "--dry-run-env",
        default=None,
        help="Emit dryRun as a runtime check of this variable (js only)",
    )
    render.add_argument("--out", type=Path, default=None)

    validate = sub.add_parser("validate", help="Validate a JSON or YAML configuration file")
    validate.add_argument("path", type=Path)

    return p.parse_args(argv)


def _render(args: argparse.Namespace) -> str:
    config = load_config(args.profile)
    if args.fmt == "js":
        return render_module(config, dry_run_env=args.dry_run_env)
    if args.dry_run_env:
        logger.warning("--dry-run-env only applies to js output; ignoring it")
    return dump_config(config, args.fmt)


def _run(args: argparse.Namespace) -> int:
    try:
        if args.command == "list":
            sys.stdout.write("\n".join(profile_names()) + "\n")
        elif args.command == "show":
            sys.stdout.write(dump_config(load_config(args.profile), args.fmt))
        elif args.command == "render":
            output = _render(args)
            if args.out:
                args.out.write_text(output, encoding="utf-8")
                logger.info("Wrote bot configuration", extra={"path": str(args.out)})
            else:
                sys.stdout.write(output)
        elif args.command == "validate":
            load_config_from_file(args.path)
            sys.stdout.write(f"{args.path}: ok\n")
    except ConfigValidationError as exc:
        logger.error(str(exc))
        if exc.errors:
            sys.stdout.write(json.dumps(exc.errors, indent=2) + "\n")
        return 1
    except BotConfigError as exc:
        logger.error(str(exc))
        return 1
    except OSError as exc:
        logger.error("I/O error", extra={"error": str(exc)})
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging()

    status = _run(args)
    if args.metrics_file:
        try:
            write_metrics_textfile(str(args.metrics_file))
        except OSError as exc:
            logger.error("Could not write metrics file", extra={"error": str(exc)})
            return 1
    return status


if __name__ == "__main__":
    raise SystemExit(main())
