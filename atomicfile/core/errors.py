"""Exit codes and exception types.

ErrorCode values double as process exit codes for the CLI and must stay
stable:
- 0: Success
- 1: User error (bad arguments, missing destination directory, bad config)
- 2: Environment error (permission denied)
- 5: I/O error (input unreadable, staging write failed)
- 6: Commit error (backup or replace failed; a backup may remain on disk)

Filesystem failures themselves are the platform's OSError subclasses and are
propagated unchanged. The only exception type defined here is the one raised
when a writer is used after it has finished.
"""

from enum import IntEnum

__all__ = ["ErrorCode", "StreamClosedError"]


class ErrorCode(IntEnum):
    """Exit codes for CLI commands."""

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    IO_ERROR = 5
    COMMIT_ERROR = 6

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")


class StreamClosedError(OSError, ValueError):
    """Operation on a writer that was committed, cancelled or has failed.

    Like io.UnsupportedOperation this is both an OSError and a ValueError, so
    it is caught by handlers written for either file-object convention.
    """
