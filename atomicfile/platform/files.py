"""All-or-nothing file writes.

An AtomicWriter stages every byte in a temp file next to the destination and
only touches the destination on a successful close():

1. flush and close the temp file
2. copy the current destination (if any) to a backup sibling
3. os.replace() the temp file over the destination
4. delete the backup

Any failure deletes the temp file. A failure between steps 2 and 4 leaves the
backup on disk; its path is available as ``writer.backup_path``. After a clean
close() neither the temp nor the backup file remains.

Artifact names:
- temp:   ``<dir>/<name>.<random>.tmp``
- backup: ``<dir>/<name>.<random>.bak``
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import tempfile
from collections.abc import Callable, Iterable
from enum import Enum, auto
from pathlib import Path
from types import TracebackType
from typing import BinaryIO, Protocol, Self

from atomicfile.core.errors import StreamClosedError

__all__ = [
    "AtomicWriter",
    "ByteSink",
    "WriterState",
    "atomic_write_bytes",
    "atomic_write_text",
    "derive_backup_path",
    "open_atomic",
]

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"
BACKUP_SUFFIX = ".bak"

type Buffer = bytes | bytearray | memoryview


class ByteSink(Protocol):
    """Anything that accepts bytes and can be flushed and closed."""

    def write(self, data: Buffer, /) -> int: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...


class WriterState(Enum):
    OPEN = auto()
    CLOSING = auto()
    COMMITTED = auto()
    CANCELLED = auto()
    FAILED = auto()

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_terminal(self) -> bool:
        return self in (WriterState.COMMITTED, WriterState.CANCELLED, WriterState.FAILED)


def derive_backup_path(temp_path: Path) -> Path:
    """Return the backup sibling of a temp file (``.tmp`` -> ``.bak``)."""
    name = temp_path.name
    if name.endswith(TEMP_SUFFIX):
        name = name[: -len(TEMP_SUFFIX)]
    return temp_path.with_name(name + BACKUP_SUFFIX)


class AtomicWriter:
    """Binary writer that replaces its destination atomically on close().

    Use cancel() to discard everything written so far. As a context manager
    the writer commits when the block succeeds and cancels when it raises.

    Not thread-safe, and two writers must not target the same destination at
    the same time.
    """

    def __init__(self, path: str | os.PathLike[str], *, fsync: bool = True) -> None:
        self._destination = Path(path)
        self._fsync = fsync
        self._state = WriterState.OPEN
        self._staged = False

        fd, tmp_name = tempfile.mkstemp(
            prefix=f"{self._destination.name}.",
            suffix=TEMP_SUFFIX,
            dir=self._destination.parent,
        )
        self._temp = Path(tmp_name)
        self._backup = derive_backup_path(self._temp)
        try:
            self._out: BinaryIO = os.fdopen(fd, "wb")
        except BaseException:
            with contextlib.suppress(OSError):
                os.close(fd)
            self._temp.unlink(missing_ok=True)
            raise

        logger.debug("staging %s in %s", self._destination, self._temp)

    # -- accessors -----------------------------------------------------------

    @property
    def destination(self) -> Path:
        return self._destination

    @property
    def temp_path(self) -> Path:
        return self._temp

    @property
    def backup_path(self) -> Path:
        """Path of the (possibly nonexistent) backup of the replaced file.

        A file only exists here after a close() that failed once the backup
        had been written. It then holds the original destination content.
        """
        return self._backup

    @property
    def state(self) -> WriterState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._state.is_terminal

    @property
    def name(self) -> str:
        return str(self._destination)

    @property
    def staged(self) -> bool:
        """True once the temp file is complete and closed (commit step 1 passed).

        A failed close() with staged False failed while finishing the temp file;
        with staged True it failed backing up or replacing the destination.
        """
        return self._staged

    def writable(self) -> bool:
        return self._state is WriterState.OPEN

    # -- writing -------------------------------------------------------------

    def write(self, data: Buffer, offset: int = 0, length: int | None = None) -> int:
        """Write ``data[offset:offset + length]`` and return the byte count."""
        view = memoryview(data).cast("B")
        end = len(view) if length is None else offset + length
        if offset < 0 or end < offset or end > len(view):
            raise ValueError(f"invalid slice offset={offset} length={length} for {len(view)} bytes")
        chunk = view[offset:end]
        self._io(lambda: self._out.write(chunk))
        return len(chunk)

    def write_byte(self, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"byte must be in range(0, 256), got {value}")
        self._io(lambda: self._out.write(bytes((value,))))

    def writelines(self, lines: Iterable[Buffer]) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self._io(self._out.flush)

    # -- termination ---------------------------------------------------------

    def close(self) -> None:
        """Commit: replace the destination with everything written so far."""
        self._check()
        self._state = WriterState.CLOSING
        self._io(self._close_handle)
        self._staged = True
        self._io(self._replace)

        self._state = WriterState.COMMITTED
        self._temp.unlink(missing_ok=True)
        self._backup.unlink(missing_ok=True)
        logger.debug("committed %s", self._destination)

    def cancel(self) -> None:
        """Discard everything written. The destination is left untouched."""
        self._check()
        with contextlib.suppress(OSError):
            self._out.close()
        self._state = WriterState.CANCELLED
        self._temp.unlink(missing_ok=True)
        self._backup.unlink(missing_ok=True)
        logger.debug("cancelled write to %s", self._destination)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if self.closed:
            return
        if exc_type is None:
            self.close()
        else:
            self.cancel()

    def __repr__(self) -> str:
        return f"AtomicWriter({str(self._destination)!r}, state={self._state})"

    # -- internals -----------------------------------------------------------

    def _check(self) -> None:
        if self._state is not WriterState.OPEN:
            raise StreamClosedError(
                f"Stream is closed or invalid ({self._state}): {self._destination}"
            )

    def _io[T](self, op: Callable[[], T]) -> T:
        """Run op; on any failure delete the temp file, then re-raise."""
        if self._state is not WriterState.CLOSING:
            self._check()
        try:
            return op()
        except BaseException:
            self._fail()
            raise

    def _fail(self) -> None:
        self._state = WriterState.FAILED
        with contextlib.suppress(OSError):
            self._out.close()
        with contextlib.suppress(OSError):
            self._temp.unlink(missing_ok=True)

    def _close_handle(self) -> None:
        self._out.flush()
        if self._fsync:
            os.fsync(self._out.fileno())
        self._out.close()

    def _back_up(self) -> bool:
        """Copy the destination to the backup path; False if there is nothing to copy."""
        if not self._destination.exists():
            return False
        try:
            shutil.copy2(self._destination, self._backup)
        except BaseException:
            # A partial copy is not a usable backup.
            with contextlib.suppress(OSError):
                self._backup.unlink(missing_ok=True)
            raise
        logger.debug("backed up %s to %s", self._destination, self._backup)
        return True

    def _replace(self) -> None:
        backed_up = self._back_up()
        try:
            os.replace(self._temp, self._destination)
        except OSError as e:
            if backed_up:
                logger.warning(
                    "replacing %s failed, original kept at %s", self._destination, self._backup
                )
                e.add_note(f"backup of {self._destination} kept at {self._backup}")
            raise


def open_atomic(path: str | os.PathLike[str], *, fsync: bool = True) -> AtomicWriter:
    """Open an AtomicWriter for path."""
    return AtomicWriter(path, fsync=fsync)


def atomic_write_bytes(path: Path, data: Buffer, *, fsync: bool = True) -> None:
    """Replace path with data, all or nothing."""
    with AtomicWriter(path, fsync=fsync) as out:
        out.write(data)


def atomic_write_text(
    path: Path, content: str, *, encoding: str = "utf-8", fsync: bool = True
) -> None:
    """Replace path with encoded text, all or nothing."""
    atomic_write_bytes(path, content.encode(encoding), fsync=fsync)
