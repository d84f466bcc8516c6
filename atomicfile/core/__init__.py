"""Core types: errors, results and configuration."""

from .config import Config, ConfigError, WriteConfig, load_config
from .errors import ErrorCode, StreamClosedError
from .result import Err, Ok, Result

__all__ = [
    # config
    "Config",
    "ConfigError",
    "WriteConfig",
    "load_config",
    # errors
    "ErrorCode",
    "StreamClosedError",
    # result
    "Err",
    "Ok",
    "Result",
]
