from __future__ import annotations

import sys
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from .console import warn
from .errors import EmptyResultError, UpstreamCommandError
from .flyway import changes_params, check_flyway, diff_params
from .git import get_current_branch, get_user_name
from .models import DiffChangeEntry, SyncOptions, SyncResult, SyncSettings
from .sync_parse import has_no_differences, parse_diff_output
from .sync_select import (
    ObjectName,
    join_change_ids,
    parse_object_names,
    reselect,
    select_changes,
    synthesize_description,
)

MIGRATIONS_TARGET = "migrations"


def render_entries(entries: Sequence[DiffChangeEntry]) -> str:
    lines = []
    for e in entries:
        lines.append(f"  {e.change_type:<6} {e.object_type:<18} {e.qualified_name}  ({e.change_id})")
    return "\n".join(lines)


def diff_entries(
    settings: SyncSettings,
    source: str,
    target: str,
    build_environment: str = "",
    cwd: Optional[Path] = None,
) -> tuple[str, list[DiffChangeEntry]]:
    out = check_flyway(settings, "diff", diff_params(source, target, build_environment), cwd=cwd)
    return out, parse_diff_output(out)


def describe(options: SyncOptions, entries: Sequence[DiffChangeEntry], cwd: Path) -> str:
    if options.description.strip():
        return options.description.strip()
    return synthesize_description(entries, get_current_branch(cwd), get_user_name(cwd))


def generate_params(settings: SyncSettings, entries: Sequence[DiffChangeEntry], description: str, location: str) -> list[str]:
    return [
        *changes_params("generate", join_change_ids(entries)),
        f"-generate.description={description}",
        f"-generate.location={location}",
        f"-generate.types={settings.generate_types}",
    ]


def preview_script(settings: SyncSettings, selected: Sequence[DiffChangeEntry], description: str, result: SyncResult, cwd: Path) -> None:
    try:
        _out, rediffed = diff_entries(settings, settings.source, MIGRATIONS_TARGET, settings.build_environment, cwd=cwd)
    except UpstreamCommandError as e:
        msg = f"could not compare {settings.source} -> {MIGRATIONS_TARGET}, skipping script preview"
        result.warnings.append(msg)
        if e.output:
            print(e.output, file=sys.stderr)
        warn(msg)
        return

    gen_selected = reselect(rediffed, selected)
    if not gen_selected:
        print("Script preview: nothing to generate against the current migrations.")
        return

    # Removed on every exit path, including a failing generate.
    with tempfile.TemporaryDirectory(prefix="migration-tools-preview-") as scratch:
        check_flyway(settings, "generate", generate_params(settings, gen_selected, description, scratch), cwd=cwd)
        scripts = sorted(Path(scratch).glob("*.sql"))
        print("Script preview:")
        for script in scripts:
            print(f"--- {script.name}")
            print(script.read_text(encoding="utf-8", errors="replace").rstrip("\n"))
        if not scripts:
            print("(no script generated)")


def run_dry(settings: SyncSettings, options: SyncOptions, result: SyncResult, cwd: Path) -> SyncResult:
    print("Dry run: previewing differences (schema model and migrations are left untouched).")
    text = check_flyway(settings, "diffText", [f"-diffText.changes={join_change_ids(result.selected)}"], cwd=cwd)
    print(text.rstrip("\n"))
    print("")
    if not options.skip_generate:
        preview_script(settings, result.selected, result.description, result, cwd)
    return result


def run_sync(options: SyncOptions, settings: SyncSettings, cwd: Path | None = None) -> SyncResult:
    """
    Sync selected development-database changes into the schema model and a new migration script.

    Raises ConfigurationError for malformed object names, EmptyResultError when there is
    nothing to sync, and UpstreamCommandError when a Flyway command fails.
    """
    workdir = cwd if cwd is not None else Path.cwd()
    objects: list[ObjectName] = [] if options.select_all else parse_object_names(options.objects)

    print(f"Comparing {settings.source} -> {settings.target}...")
    diff_out, entries = diff_entries(settings, settings.source, settings.target, cwd=workdir)
    if not entries and has_no_differences(diff_out):
        raise EmptyResultError("No differences found.", benign=True)

    selection = select_changes(entries, objects, select_all=options.select_all)
    result = SyncResult(selected=selection.entries, unmatched=[str(o) for o in selection.unmatched])
    for name in result.unmatched:
        warn(f"no changes found for {name}")

    print(f"Selected {len(result.selected)} change(s):")
    print(render_entries(result.selected))
    print("")

    result.description = describe(options, result.selected, workdir)
    if options.dry_run:
        return run_dry(settings, options, result, workdir)

    print(f"Updating schema model ({settings.target})...")
    out = check_flyway(settings, "model", changes_params("model", join_change_ids(result.selected)), cwd=workdir)
    if out.strip():
        print(out.rstrip("\n"))
    result.model_updated = True

    if options.skip_generate:
        print("Skipping script generation.")
        return result

    print(f"Comparing {settings.target} -> {MIGRATIONS_TARGET}...")
    _out, rediffed = diff_entries(settings, settings.target, MIGRATIONS_TARGET, settings.build_environment, cwd=workdir)
    gen_selected = reselect(rediffed, result.selected)
    if not gen_selected:
        msg = "schema model already matches migrations, no script generated"
        result.warnings.append(msg)
        warn(msg)
        return result

    print(f"Generating migration script: {result.description}")
    out = check_flyway(
        settings,
        "generate",
        generate_params(settings, gen_selected, result.description, settings.migrations_location),
        cwd=workdir,
    )
    if out.strip():
        print(out.rstrip("\n"))
    result.script_generated = True
    return result
