from __future__ import annotations

import argparse
import sys

from .errors import UpstreamCommandError


class ArgumentParser(argparse.ArgumentParser):
    """Usage errors exit 1, like every other failure of the tools."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def warn(message: str) -> None:
    print(f"Warning: {message}", file=sys.stderr)


def print_error(message: str) -> None:
    print(f"Error: {message}", file=sys.stderr)


def print_command_failure(e: UpstreamCommandError) -> None:
    # Captured output first, verbatim.
    if e.output:
        print(e.output, file=sys.stderr)
    print_error(str(e))
