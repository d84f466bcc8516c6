"""Atomic, all-or-nothing file writes."""

from atomicfile.core.errors import StreamClosedError
from atomicfile.platform.files import (
    AtomicWriter,
    ByteSink,
    WriterState,
    atomic_write_bytes,
    atomic_write_text,
    open_atomic,
)

__version__ = "0.1.0"

__all__ = [
    "AtomicWriter",
    "ByteSink",
    "StreamClosedError",
    "WriterState",
    "__version__",
    "atomic_write_bytes",
    "atomic_write_text",
    "open_atomic",
]
