"""Ok/Err result values.

Services return ``Result[T, E]`` instead of raising so that callers (the CLI
in particular) handle every failure variant explicitly:

    match write_file(src, dest, config=config):
        case Ok(report):
            console.success(f"wrote {report.bytes_written} bytes")
        case Err(failure):
            print_write_failure(failure, console)
"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["Ok", "Err", "Result"]


@dataclass(frozen=True, slots=True)
class Ok[T]:
    """Success carrying ``value``."""

    value: T

    def __repr__(self) -> str:
        return f"Ok({self.value!r})"


@dataclass(frozen=True, slots=True)
class Err[E]:
    """Failure carrying ``error``."""

    error: E

    def __repr__(self) -> str:
        return f"Err({self.error!r})"


type Result[T, E] = Ok[T] | Err[E]
