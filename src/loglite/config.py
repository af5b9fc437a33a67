"""
Config - Build logger settings from the environment.

Values come from os.environ after loading an optional .env file:
1. LOGLITE_DIRECTORY: target directory (cwd at first use when unset)
2. LOGLITE_FILE_NAME: target file name (process-wide default when unset)
3. LOGLITE_PRINT / LOGLITE_STORE / LOGLITE_WRITE_TO_FILE /
   LOGLITE_NOTIFY_HANDLER: default dispatch flags ("true" to enable)
4. LOGLITE_LOG_LEVEL: level for the package's own stdlib logging output
"""

import logging
import os
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from .logger import Logger
from .message import Message

logger = logging.getLogger(__name__)

ENV_PREFIX = "LOGLITE_"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(ENV_PREFIX + name, default).lower() == "true"


class LoggerSettings:
    """Construction-time configuration for a Logger."""

    def __init__(
        self,
        directory: Optional[Path] = None,
        file_name: Optional[str] = None,
        print_by_default: bool = False,
        store_by_default: bool = False,
        write_to_file_by_default: bool = False,
        notify_handler_by_default: bool = False,
        log_level: str = "INFO",
    ):
        self.directory = Path(directory) if directory is not None else None
        self.file_name = file_name
        self.print_by_default = print_by_default
        self.store_by_default = store_by_default
        self.write_to_file_by_default = write_to_file_by_default
        self.notify_handler_by_default = notify_handler_by_default
        self.log_level = log_level

    def __repr__(self) -> str:
        return (
            f"LoggerSettings(directory={self.directory}, file_name={self.file_name!r}, "
            f"print={self.print_by_default}, store={self.store_by_default}, "
            f"write_to_file={self.write_to_file_by_default}, "
            f"notify_handler={self.notify_handler_by_default}, log_level={self.log_level})"
        )


def load_settings(env_file: Optional[str] = None) -> LoggerSettings:
    """Read LOGLITE_* variables, loading ``env_file`` (or ./.env) first.

    Variables already set in the process environment win over the file.

    Raises:
        ValueError: If LOGLITE_FILE_NAME is set but blank.
    """
    load_dotenv(env_file)

    directory = os.getenv(ENV_PREFIX + "DIRECTORY") or None

    file_name = os.getenv(ENV_PREFIX + "FILE_NAME")
    if file_name is not None and not file_name.strip():
        raise ValueError(f"{ENV_PREFIX}FILE_NAME is set but empty")

    log_level = os.getenv(ENV_PREFIX + "LOG_LEVEL", "INFO").upper()
    if not isinstance(getattr(logging, log_level, None), int):
        logger.warning(f"Invalid {ENV_PREFIX}LOG_LEVEL '{log_level}', using INFO")
        log_level = "INFO"

    return LoggerSettings(
        directory=directory,
        file_name=file_name,
        print_by_default=_env_flag("PRINT"),
        store_by_default=_env_flag("STORE"),
        write_to_file_by_default=_env_flag("WRITE_TO_FILE"),
        notify_handler_by_default=_env_flag("NOTIFY_HANDLER"),
        log_level=log_level,
    )


def configure(target: Logger, settings: LoggerSettings) -> Logger:
    """Apply ``settings`` to an existing logger and return it.

    The target file itself stays lazy; it is created on first use. A file
    the logger already resolved is dropped when the directory or file
    name changes, so the next write lands in the configured place.
    """
    if settings.directory is not None:
        target.set_directory(settings.directory)
        target.file = None
    if settings.file_name is not None:
        target.file_name = settings.file_name
        target.file = None
    target.print_by_default = settings.print_by_default
    target.store_by_default = settings.store_by_default
    target.write_to_file_by_default = settings.write_to_file_by_default
    target.notify_handler_by_default = settings.notify_handler_by_default
    return target


def build_logger(
    name: str,
    settings: Optional[LoggerSettings] = None,
    handler: Optional[Callable[[Message], None]] = None,
) -> Logger:
    """Create a logger named ``name`` configured from ``settings``.

    Settings are loaded from the environment when not given.
    """
    if settings is None:
        settings = load_settings()
    return configure(Logger(name, handler=handler), settings)
