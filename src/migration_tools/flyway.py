from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Optional

from .errors import UpstreamCommandError
from .models import SyncSettings


def run_flyway(settings: SyncSettings, verb: str, params: list[str], cwd: Optional[Path] = None) -> tuple[int, str, str]:
    cmd = [settings.flyway, verb, *params, *settings.extra_args]
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(cwd) if cwd is not None else None,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise UpstreamCommandError(cmd, 127, "", f"failed to start {settings.flyway}: {e}") from e
    return proc.returncode, proc.stdout, proc.stderr


def check_flyway(settings: SyncSettings, verb: str, params: list[str], cwd: Optional[Path] = None) -> str:
    code, out, err = run_flyway(settings, verb, params, cwd=cwd)
    if code != 0:
        raise UpstreamCommandError([settings.flyway, verb, *params, *settings.extra_args], code, out, err)
    return out


def changes_params(verb: str, change_ids: str) -> list[str]:
    # Dependencies stay out of the change set; only the selected objects are applied.
    return [f"-{verb}.changes={change_ids}", f"-{verb}.includeDependencies=false"]


def diff_params(source: str, target: str, build_environment: str = "") -> list[str]:
    params = [f"-diff.source={source}", f"-diff.target={target}"]
    if build_environment:
        params.append(f"-diff.buildEnvironment={build_environment}")
    return params
