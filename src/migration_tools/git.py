from __future__ import annotations

import subprocess
from pathlib import Path


def run_git(args: list[str], cwd: Path, timeout_s: int = 300) -> tuple[int, str, str]:
    proc = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        text=True,
        timeout=timeout_s,
    )
    return proc.returncode, proc.stdout, proc.stderr


def _git_value(args: list[str], cwd: Path) -> str:
    # Missing git or a hung call reads as "unknown".
    try:
        code, out, _ = run_git(args, cwd=cwd, timeout_s=30)
    except (OSError, subprocess.TimeoutExpired):
        return ""
    if code == 0:
        return out.strip()
    return ""


def is_inside_work_tree(candidate: Path) -> bool:
    return _git_value(["rev-parse", "--is-inside-work-tree"], cwd=candidate) == "true"


def get_current_branch(repo: Path) -> str:
    return _git_value(["rev-parse", "--abbrev-ref", "HEAD"], cwd=repo)


def get_user_name(repo: Path) -> str:
    return _git_value(["config", "--get", "user.name"], cwd=repo)
