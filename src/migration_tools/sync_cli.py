from __future__ import annotations

import argparse
import dataclasses
from pathlib import Path

from .config import load_config, sync_settings
from .console import ArgumentParser, print_command_failure, print_error
from .errors import ConfigurationError, EmptyResultError, UpstreamCommandError
from .models import SyncOptions
from .sync_run import run_sync


def _build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="migration-tools sync",
        description="Sync schema changes from the development database into the schema model and a new migration.",
    )
    g = parser.add_mutually_exclusive_group(required=True)
    g.add_argument(
        "--objects",
        type=str,
        nargs="+",
        default=[],
        help="Objects to sync as Schema.ObjectName (space- or comma-separated).",
    )
    g.add_argument("--all", action="store_true", help="Sync every detected change.")
    parser.add_argument("--description", type=str, default="", help="Migration description (default: <branch>_<changes>_<user>).")
    parser.add_argument("--skip-generate", action="store_true", help="Update the schema model only; do not generate a migration script.")
    parser.add_argument("--dry-run", action="store_true", help="Preview the selected differences and script without changing any files.")
    parser.add_argument("--flyway", type=str, default="", help="Flyway executable (overrides config sync.flyway).")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    return parser


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        settings = sync_settings(load_config(args.config))
        if str(args.flyway).strip():
            settings = dataclasses.replace(settings, flyway=str(args.flyway).strip())
        options = SyncOptions(
            objects=tuple(args.objects or ()),
            select_all=bool(args.all),
            description=str(args.description or ""),
            skip_generate=bool(args.skip_generate),
            dry_run=bool(args.dry_run),
        )
        result = run_sync(options, settings)
    except EmptyResultError as e:
        if e.benign:
            print(str(e))
            print("Nothing to sync.")
            return 0
        print_error(str(e))
        return 1
    except UpstreamCommandError as e:
        print_command_failure(e)
        return 1
    except ConfigurationError as e:
        print_error(str(e))
        return 1

    if options.dry_run:
        print("Dry run complete. No changes were made.")
    elif result.script_generated:
        print(f"Done. Migration generated in: {settings.migrations_location}")
    else:
        print("Done.")
    return 0
