"""Filesystem primitives."""

from .files import (
    AtomicWriter,
    ByteSink,
    WriterState,
    atomic_write_bytes,
    atomic_write_text,
    derive_backup_path,
    open_atomic,
)

__all__ = [
    "AtomicWriter",
    "ByteSink",
    "WriterState",
    "atomic_write_bytes",
    "atomic_write_text",
    "derive_backup_path",
    "open_atomic",
]
