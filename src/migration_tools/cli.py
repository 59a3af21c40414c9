from __future__ import annotations

import sys

from . import audit_cli, sync_cli


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    if not argv or argv[0] in ("-h", "--help"):
        print("usage: migration-tools <command> [options]")
        print("")
        print("commands:")
        print("  audit   Report who added, modified or deleted scripts in git history.")
        print("  sync    Sync development database changes into the schema model and a new migration.")
        print("")
        print("Run `migration-tools <command> --help` for command-specific options.")
        return 0
    if argv[0] == "audit":
        return audit_cli.main(argv[1:])
    if argv[0] == "sync":
        return sync_cli.main(argv[1:])
    print(f"Unknown command: {argv[0]}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
