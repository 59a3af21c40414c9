from __future__ import annotations

import dataclasses
import shutil
import subprocess
from pathlib import Path
from typing import Iterable, Iterator

from .console import warn
from .errors import ConfigurationError, NotFoundError, UpstreamCommandError
from .git import is_inside_work_tree, run_git
from .models import ChangeRecord

STATUS_NAMES: dict[str, str] = {
    "A": "Added",
    "M": "Modified",
    "D": "Deleted",
}

LOG_PRETTY = "@@@%H%x09%an%x09%ae%x09%ad%x09%s"


@dataclasses.dataclass
class CollectionResult:
    records: list[ChangeRecord]
    skipped: list[NotFoundError]


def split_folders(values: Iterable[str]) -> list[str]:
    out: list[str] = []
    for v in values:
        for part in str(v).split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out


def log_command(folder: str) -> list[str]:
    return [
        "log",
        "--name-status",
        "--date=short",
        f"--pretty=format:{LOG_PRETTY}",
        "--",
        folder,
    ]


def parse_name_status_log(folder: str, lines: Iterable[str]) -> Iterator[ChangeRecord]:
    """
    Parse `git log --name-status` output produced with LOG_PRETTY.

    Each commit starts with an `@@@` header (sha, author, email, date, subject, tab separated)
    followed by `<status>\t<path>` lines. Only A/M/D statuses yield records.
    """
    sha = ""
    author = ""
    email = ""
    date = ""
    subject = ""

    for raw_line in lines:
        line = raw_line.rstrip("\r\n")
        if not line:
            continue
        if line.startswith("@@@"):
            parts = line[3:].split("\t", 4)
            sha = parts[0] if len(parts) > 0 else ""
            author = parts[1] if len(parts) > 1 else ""
            email = parts[2] if len(parts) > 2 else ""
            date = parts[3] if len(parts) > 3 else ""
            subject = parts[4] if len(parts) > 4 else ""
            continue
        if not sha:
            continue

        parts = line.split("\t")
        if len(parts) < 2:
            continue
        status = parts[0][:1]
        change_type = STATUS_NAMES.get(status)
        if change_type is None:
            continue
        yield ChangeRecord(
            folder=folder,
            author=author,
            email=email,
            date=date,
            change_type=change_type,
            file_path=parts[-1],
            commit=sha,
            message=subject,
        )


def collect_folder(repo: Path, folder: str) -> list[ChangeRecord]:
    args = log_command(folder)
    try:
        code, out, err = run_git(args, cwd=repo)
    except subprocess.TimeoutExpired as e:
        raise UpstreamCommandError(["git", *args], 124, "", f"git log timed out after {e.timeout}s") from e
    except OSError as e:
        raise UpstreamCommandError(["git", *args], 127, "", f"failed to start git: {e}") from e
    if code != 0:
        raise UpstreamCommandError(["git", *args], code, out, err)
    return list(parse_name_status_log(folder, out.splitlines()))


def collect_changes(repo: Path, folders: Iterable[str]) -> CollectionResult:
    if shutil.which("git") is None:
        raise ConfigurationError("git executable not found on PATH.")
    if not is_inside_work_tree(repo):
        raise ConfigurationError(
            f"Not in a git repository: {repo}. Please run this from the repository root."
        )

    records: list[ChangeRecord] = []
    skipped: list[NotFoundError] = []
    for folder in split_folders(folders):
        if not (repo / folder).is_dir():
            missing = NotFoundError(folder)
            skipped.append(missing)
            warn(str(missing))
            continue
        print(f"Scanning folder: {folder}")
        records.extend(collect_folder(repo, folder))
    return CollectionResult(records=records, skipped=skipped)
