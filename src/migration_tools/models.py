from __future__ import annotations

import dataclasses

CHANGE_TYPES: tuple[str, ...] = ("Added", "Modified", "Deleted")


@dataclasses.dataclass(frozen=True)
class ChangeRecord:
    folder: str
    author: str
    email: str
    date: str  # YYYY-MM-DD
    change_type: str  # Added | Modified | Deleted
    file_path: str
    commit: str
    message: str


@dataclasses.dataclass
class AuthorActivity:
    author: str = ""
    total: int = 0
    commits: int = 0
    added: int = 0
    modified: int = 0
    deleted: int = 0


@dataclasses.dataclass
class AuditReport:
    total_changes: int
    unique_authors: int
    authors: list[AuthorActivity]
    change_types: dict[str, int]  # change type -> count, always Added/Modified/Deleted
    folders: dict[str, int]  # folder -> count, busiest first
    recent: list[ChangeRecord]


@dataclasses.dataclass(frozen=True)
class DiffChangeEntry:
    change_id: str
    change_type: str  # Add | Edit | Delete
    object_type: str
    schema: str
    name: str

    @property
    def qualified_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclasses.dataclass(frozen=True)
class SyncSettings:
    flyway: str = "flyway"
    source: str = "dev"
    target: str = "schemaModel"
    build_environment: str = "shadow"
    migrations_location: str = "migrations"
    generate_types: str = "versioned,undo"
    extra_args: tuple[str, ...] = ()


@dataclasses.dataclass(frozen=True)
class SyncOptions:
    objects: tuple[str, ...] = ()
    select_all: bool = False
    description: str = ""
    skip_generate: bool = False
    dry_run: bool = False


@dataclasses.dataclass
class SyncResult:
    selected: list[DiffChangeEntry]
    unmatched: list[str]
    description: str = ""
    model_updated: bool = False
    script_generated: bool = False
    warnings: list[str] = dataclasses.field(default_factory=list)
