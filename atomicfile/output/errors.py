"""Failure presentation.

Maps WriteFailure variants to console messages and exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from atomicfile.core.errors import ErrorCode
from atomicfile.output.console import Style
from atomicfile.services.write_errors import (
    CommitFailed,
    DirectoryMissing,
    InputUnreadable,
    PermissionDenied,
    StagingFailed,
    WriteFailure,
)

if TYPE_CHECKING:
    from atomicfile.output.console import ConsoleProtocol

__all__ = ["print_write_failure", "write_failure_exit_code"]


def print_write_failure(failure: WriteFailure, console: ConsoleProtocol) -> None:
    match failure:
        case DirectoryMissing(path=path):
            console.error(f"directory does not exist: {path}")
            console.print("hint: create it first, atomicfile never creates directories", Style.DIM)
        case PermissionDenied(path=path):
            console.error(f"permission denied: cannot create files in {path}")
        case InputUnreadable(path=path, reason=reason):
            source = path if path is not None else "<stdin>"
            console.error(f"cannot read {source}: {reason}")
        case StagingFailed(destination=destination, reason=reason):
            console.error(f"write to {destination} failed: {reason}")
            console.print("destination left unchanged", Style.DIM)
        case CommitFailed(destination=destination, backup=backup, backup_exists=exists, reason=r):
            console.error(f"replacing {destination} failed: {r}")
            if exists:
                console.warning(f"backup of the original kept at {backup}")
                console.print("destination not replaced; delete the backup once checked", Style.DIM)


def write_failure_exit_code(failure: WriteFailure) -> int:
    match failure:
        case DirectoryMissing():
            return int(ErrorCode.USER_ERROR)
        case PermissionDenied():
            return int(ErrorCode.ENV_ERROR)
        case InputUnreadable() | StagingFailed():
            return int(ErrorCode.IO_ERROR)
        case CommitFailed():
            return int(ErrorCode.COMMIT_ERROR)
    # Fallback for exhaustiveness
    return int(ErrorCode.IO_ERROR)
