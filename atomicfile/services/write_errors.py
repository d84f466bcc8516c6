from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class DirectoryMissing:
    path: Path


@dataclass(frozen=True, slots=True)
class PermissionDenied:
    path: Path


@dataclass(frozen=True, slots=True)
class InputUnreadable:
    path: Path | None
    reason: str


@dataclass(frozen=True, slots=True)
class StagingFailed:
    destination: Path
    reason: str


@dataclass(frozen=True, slots=True)
class CommitFailed:
    destination: Path
    backup: Path
    backup_exists: bool
    reason: str


WriteFailure = DirectoryMissing | PermissionDenied | InputUnreadable | StagingFailed | CommitFailed
