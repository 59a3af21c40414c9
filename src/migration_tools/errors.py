from __future__ import annotations


class MigrationToolsError(RuntimeError):
    pass


class ConfigurationError(MigrationToolsError):
    """Bad invocation context or arguments: not a git work tree, malformed object name, unreadable config."""


class NotFoundError(MigrationToolsError):
    def __init__(self, path: str) -> None:
        super().__init__(f"Folder not found: {path}")
        self.path = path


class UpstreamCommandError(MigrationToolsError):
    def __init__(self, command: list[str], returncode: int, stdout: str = "", stderr: str = "") -> None:
        super().__init__(f"Command failed with exit code {returncode}: {' '.join(command)}")
        self.command = list(command)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        parts = [p for p in (self.stdout, self.stderr) if p and p.strip()]
        return "\n".join(p.rstrip("\n") for p in parts)


class EmptyResultError(MigrationToolsError):
    """
    Nothing to act on.

    `benign` is True for "no differences found" (exit 0) and False when the
    caller asked for specific objects and none of them were found (exit 1).
    """

    def __init__(self, message: str, *, benign: bool) -> None:
        super().__init__(message)
        self.benign = benign
