from __future__ import annotations

from dataclasses import dataclass

import typer

from atomicfile.core.config import Config, load_config, resolve_config_path
from atomicfile.core.errors import ErrorCode
from atomicfile.core.result import Err
from atomicfile.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context() -> CLIContext:
    console = RichConsole()

    config = Config()
    config_path = resolve_config_path()
    if config_path is not None:
        result = load_config(config_path)
        if isinstance(result, Err):
            console.error(result.error.message)
            raise typer.Exit(code=int(ErrorCode.USER_ERROR))
        config = result.value

    return CLIContext(config=config, console=console)
