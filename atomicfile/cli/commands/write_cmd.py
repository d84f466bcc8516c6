"""Write command - replace a file atomically with stdin or another file."""

from __future__ import annotations

import sys
from dataclasses import replace
from pathlib import Path
from typing import BinaryIO

import typer

from atomicfile.cli.context import build_context
from atomicfile.core.result import Err, Ok
from atomicfile.output.console import Style
from atomicfile.output.errors import print_write_failure, write_failure_exit_code
from atomicfile.services.write import write_file, write_stream


def _stdin() -> BinaryIO:
    return sys.stdin.buffer


def write(
    destination: Path = typer.Argument(..., help="File to create or replace"),
    input_: Path | None = typer.Option(
        None, "--input", "-i", help="Read from this file instead of stdin"
    ),
    no_fsync: bool = typer.Option(False, "--no-fsync", help="Skip fsync before the rename"),
) -> None:
    """Write stdin (or --input) to DESTINATION, all or nothing."""
    ctx = build_context()
    config = ctx.config.write
    if no_fsync:
        config = replace(config, fsync=False)

    if input_ is None:
        result = write_stream(_stdin(), destination, config=config)
    else:
        result = write_file(input_, destination, config=config)

    match result:
        case Ok(report):
            ctx.console.success(f"wrote {report.bytes_written} bytes to {report.destination}")
            if report.replaced:
                ctx.console.print("previous content replaced", Style.DIM)
        case Err(failure):
            print_write_failure(failure, ctx.console)
            raise typer.Exit(code=write_failure_exit_code(failure))
