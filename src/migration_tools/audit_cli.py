from __future__ import annotations

import argparse
from pathlib import Path

from .audit_aggregate import build_report
from .audit_collect import collect_changes, split_folders
from .audit_render import render_header, render_report
from .audit_write import write_changes_csv, write_text_report
from .config import audit_folders, load_config
from .console import ArgumentParser, print_command_failure, print_error
from .errors import MigrationToolsError, UpstreamCommandError
from .identity import normalize_records


def _build_parser() -> argparse.ArgumentParser:
    parser = ArgumentParser(
        prog="migration-tools audit",
        description="Audit git history of script folders: who added, modified or deleted scripts.",
    )
    parser.add_argument(
        "--folders",
        type=str,
        default="",
        help="Comma-separated folders to audit (default: config audit.folders or Scripts,migrations,Quests).",
    )
    parser.add_argument("--csv", type=Path, default=None, help="Also export every change record to this CSV file.")
    parser.add_argument("--report", type=Path, default=None, help="Also write the console report to this text file.")
    parser.add_argument("--repo", type=Path, default=Path("."), help="Repository root to audit.")
    parser.add_argument("--config", type=Path, default=Path("config.json"), help="Path to config.json.")
    return parser


def run_audit(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    folders = split_folders([args.folders]) if str(args.folders).strip() else split_folders(audit_folders(config))
    repo = args.repo

    header = render_header(folders)
    print(header)

    result = collect_changes(repo, folders)
    records, _author_map = normalize_records(result.records)
    report = build_report(records)

    text = render_report(report)
    print("")
    print(text)

    if args.csv is not None:
        write_changes_csv(args.csv, records)
        print(f"Report exported to: {args.csv}")
        print("")
    if args.report is not None:
        write_text_report(args.report, header + "\n" + text)
        print(f"Report written to: {args.report}")
        print("")

    if result.skipped:
        print(f"Skipped folders: {', '.join(s.path for s in result.skipped)}")
    print("Audit Complete")
    return 0


def main(argv: list[str]) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        return run_audit(args)
    except UpstreamCommandError as e:
        print_command_failure(e)
        return 1
    except MigrationToolsError as e:
        print_error(str(e))
        return 1
    except OSError as e:
        print_error(f"Could not write output: {e}")
        return 1
