"""Stream bytes from a source into a destination file atomically.

The service wraps AtomicWriter for callers that want failures as values:
every OSError is classified into a WriteFailure variant and returned as Err.
Input read errors cancel the writer, so the destination is untouched.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO

from atomicfile.core.config import WriteConfig
from atomicfile.core.result import Err, Ok, Result
from atomicfile.platform.files import AtomicWriter, WriterState
from atomicfile.services.write_errors import (
    CommitFailed,
    DirectoryMissing,
    InputUnreadable,
    PermissionDenied,
    StagingFailed,
    WriteFailure,
)

__all__ = ["WriteReport", "write_file", "write_stream"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class WriteReport:
    destination: Path
    bytes_written: int
    replaced: bool  # an existing file was replaced (vs. created)


class _InputError(Exception):
    def __init__(self, cause: OSError) -> None:
        super().__init__(str(cause))
        self.cause = cause


def _open_writer(destination: Path, config: WriteConfig) -> Result[AtomicWriter, WriteFailure]:
    try:
        return Ok(AtomicWriter(destination, fsync=config.fsync))
    except FileNotFoundError:
        return Err(DirectoryMissing(path=destination.parent))
    except PermissionError:
        return Err(PermissionDenied(path=destination.parent))
    except OSError as e:
        return Err(StagingFailed(destination=destination, reason=str(e)))


def _copy(source: BinaryIO, writer: AtomicWriter, chunk_size: int) -> int:
    total = 0
    while True:
        try:
            chunk = source.read(chunk_size)
        except OSError as e:
            raise _InputError(e) from e
        if not chunk:
            return total
        total += writer.write(chunk)


def write_stream(
    source: BinaryIO,
    destination: Path,
    *,
    config: WriteConfig,
    source_path: Path | None = None,
) -> Result[WriteReport, WriteFailure]:
    """Copy source into destination, replacing it only if everything succeeds."""
    opened = _open_writer(destination, config)
    if isinstance(opened, Err):
        return opened
    writer = opened.value

    try:
        total = _copy(source, writer, config.chunk_size)
    except _InputError as e:
        writer.cancel()
        return Err(InputUnreadable(path=source_path, reason=str(e.cause)))
    except OSError as e:
        if not writer.closed:
            writer.cancel()
        return Err(StagingFailed(destination=destination, reason=str(e)))
    except BaseException:
        if not writer.closed:
            writer.cancel()
        raise

    replaced = destination.exists()
    try:
        writer.close()
    except OSError as e:
        if not writer.staged:
            # Final flush/fsync of the temp file failed; nothing was backed up.
            return Err(StagingFailed(destination=destination, reason=str(e)))
        if writer.state is not WriterState.COMMITTED:
            backup = writer.backup_path
            return Err(
                CommitFailed(
                    destination=destination,
                    backup=backup,
                    backup_exists=backup.exists(),
                    reason=str(e),
                )
            )
        # Replaced, but the backup could not be removed afterwards.
        logger.warning("wrote %s but could not remove %s: %s", destination, writer.backup_path, e)

    return Ok(WriteReport(destination=destination, bytes_written=total, replaced=replaced))


def write_file(
    source_path: Path, destination: Path, *, config: WriteConfig
) -> Result[WriteReport, WriteFailure]:
    """Copy the file at source_path into destination atomically."""
    try:
        source = source_path.open("rb")
    except OSError as e:
        return Err(InputUnreadable(path=source_path, reason=str(e)))
    with source:
        return write_stream(source, destination, config=config, source_path=source_path)
