from .message import ANSI_RESET, Message, MessageType, Style
from .logger import DEFAULT_FILE_NAME, Logger, filter_messages_of_type, filter_messages_of_types
from .persistence import get_exception_as_string, get_file, get_messages_as_string, make_file

__all__ = [
    "ANSI_RESET",
    "DEFAULT_FILE_NAME",
    "Logger",
    "Message",
    "MessageType",
    "Style",
    "debug",
    "error",
    "filter_messages_of_type",
    "filter_messages_of_types",
    "get_exception_as_string",
    "get_file",
    "get_instance",
    "get_messages_as_string",
    "info",
    "make_file",
    "trace",
    "warning",
]


def get_instance() -> Logger:
    """Return the shared ``root`` logger."""
    return Logger.get_instance()


# Shortcuts that dispatch to the shared logger with its default flags

def error(payload: str, capture_source: bool = False) -> None:
    Logger.get_instance().error(payload, capture_source)


def warning(payload: str, capture_source: bool = False) -> None:
    Logger.get_instance().warning(payload, capture_source)


def info(payload: str, capture_source: bool = False) -> None:
    Logger.get_instance().info(payload, capture_source)


def debug(payload: str, capture_source: bool = False) -> None:
    Logger.get_instance().debug(payload, capture_source)


def trace(payload: str, capture_source: bool = False) -> None:
    Logger.get_instance().trace(payload, capture_source)
