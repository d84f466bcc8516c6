"""Typed configuration loading.

Configuration is an optional TOML file:

    [write]
    fsync = true
    chunk_size = 65536

Lookup order: explicit path (``--config``), ``$ATOMICFILE_CONFIG``, then
``atomicfile.toml`` in the current directory. Without any of them the
defaults apply.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_int, get_table

__all__ = [
    "Config",
    "ConfigError",
    "WriteConfig",
    "CONFIG_ENV_VAR",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_CONFIG_NAME",
    "load_config",
    "resolve_config_path",
]

CONFIG_ENV_VAR = "ATOMICFILE_CONFIG"
DEFAULT_CONFIG_NAME = "atomicfile.toml"
DEFAULT_CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class WriteConfig:
    """Settings for AtomicWriter and the streaming service."""

    fsync: bool = True
    chunk_size: int = DEFAULT_CHUNK_SIZE


@dataclass(frozen=True, slots=True)
class Config:
    write: WriteConfig = field(default_factory=WriteConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Build a Config from parsed TOML, defaulting missing keys.

        Raises:
            ValueError: a key is present with the wrong type or an invalid value.
        """
        write = get_table(data, "write")
        if write is None:
            if "write" in data:
                raise ValueError("[write] must be a table")
            write = {}

        fsync = get_bool(write, "fsync")
        if fsync is None and "fsync" in write:
            raise ValueError("write.fsync must be a boolean")

        chunk_size = get_int(write, "chunk_size")
        if chunk_size is None and "chunk_size" in write:
            raise ValueError("write.chunk_size must be an integer")
        if chunk_size is not None and chunk_size <= 0:
            raise ValueError(f"write.chunk_size must be positive, got {chunk_size}")

        return cls(
            write=WriteConfig(
                fsync=True if fsync is None else fsync,
                chunk_size=chunk_size or DEFAULT_CHUNK_SIZE,
            )
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    try:
        data = as_str_dict(tomllib.loads(path.read_bytes().decode("utf-8")))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and validate configuration from a TOML file."""
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except ValueError as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def resolve_config_path(explicit: Path | None = None, *, cwd: Path | None = None) -> Path | None:
    """Return the config file to load, or None to use the defaults.

    An explicit path or ``$ATOMICFILE_CONFIG`` is returned even if missing so
    the caller reports it; the working-directory fallback only if it exists.
    """
    if explicit is not None:
        return explicit
    env_value = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if env_value:
        return Path(env_value).expanduser()
    candidate = (cwd or Path.cwd()) / DEFAULT_CONFIG_NAME
    if candidate.is_file():
        return candidate
    return None
