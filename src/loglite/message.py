"""
Message - Immutable record of a single log event.

A Message carries:
1. The text payload, emitted verbatim
2. A fixed severity/category (MessageType) with its label and ANSI color
3. Optionally, a description of the call site captured at construction
"""

import sys
import traceback
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Optional

# Resets terminal color
ANSI_RESET = "\033[0m"

SEPARATOR = " - "


class Style(NamedTuple):
    """Display metadata for one severity."""

    label: str
    color: str


class MessageType(Enum):
    """Severity/category of a message. Closed set."""

    ERROR = Style("ERROR!!", "\033[31m")  # red
    WARNING = Style("WARNING!", "\033[33m")  # yellow
    INFO = Style("Info", "\033[32m")  # green
    DEBUG = Style("Debug", "\033[34m")  # blue
    TRACE = Style("Trace", "\033[35m")  # magenta
    UNKNOWN = Style("Unknown", "\033[36m")  # cyan

    @property
    def label(self) -> str:
        return self.value.label

    @property
    def color(self) -> str:
        return self.value.color


def describe_frame(frame: traceback.FrameSummary) -> str:
    """Render a stack frame as ``function(file.py:line)``."""
    return f"{frame.name}({Path(frame.filename).name}:{frame.lineno})"


def outermost_frame() -> traceback.FrameSummary:
    """Summarize the root frame of the current call stack."""
    frame = sys._getframe()
    while frame.f_back is not None:
        frame = frame.f_back
    code = frame.f_code
    return traceback.FrameSummary(code.co_filename, frame.f_lineno, code.co_name, lookup_line=False)


def capture_outermost_source() -> str:
    """Describe the frame closest to the root of the current call stack.

    This is the outermost frame (the program entry point), not the caller
    of the Message constructor. Only the root frame is summarized; no
    source lines are read.
    """
    return describe_frame(outermost_frame())


class Message:
    """One log event. Attributes are read-only once constructed."""

    __slots__ = ("_payload", "_type", "_source")

    def __init__(
        self,
        payload: str,
        message_type: MessageType = MessageType.INFO,
        capture_source: bool = False,
    ):
        """
        Args:
            payload: Text content, emitted as-is
            message_type: Severity/category of the message
            capture_source: Record the outermost call-site frame as the source
        """
        if payload is None:
            raise TypeError("Message payload can't be None")
        self._payload = payload
        self._type = message_type
        self._source = capture_outermost_source() if capture_source else None

    @property
    def payload(self) -> str:
        return self._payload

    @property
    def type(self) -> MessageType:
        return self._type

    @property
    def source(self) -> Optional[str]:
        return self._source

    def format(self, include_color: bool = False) -> str:
        """Render the message as a single string.

        Layout: [color]label[ from source] - payload[reset]
        """
        parts = []
        if include_color:
            parts.append(self._type.color)
        parts.append(self._type.label)
        if self._source is not None:
            parts.append(f" from {self._source}")
        parts.append(SEPARATOR)
        parts.append(self._payload)
        if include_color:
            parts.append(ANSI_RESET)
        return "".join(parts)

    def __str__(self) -> str:
        return self.format(False)

    def __repr__(self) -> str:
        return f"Message({self._type.name}, {self._payload!r})"
