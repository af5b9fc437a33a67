"""
Persistence - File protocol used to write messages to disk.

Appending is a read-whole-file / rewrite-whole-file cycle:
1. Ensure the file exists (never truncating it)
2. If appending, read every existing line back, newline-terminated
3. Add the colorless rendering of the new messages
4. Overwrite the file with the result in a single write

The rewrite is not atomic and costs O(file size) per call. Callers that
need speed or concurrent writers should batch messages themselves.
"""

import logging
import os
import traceback
from pathlib import Path
from typing import Iterable, Optional

from .message import Message

logger = logging.getLogger(__name__)


def current_directory() -> Path:
    """Return the process working directory."""
    return Path(os.getcwd())


def ensure_file(path: Path) -> Path:
    """Create an empty file at ``path`` if it does not exist yet.

    Idempotent: an existing file is left untouched.
    """
    path = Path(path)
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        logger.debug(f"Created log file {path}")
    return path


def get_file(name: str, directory: Optional[Path] = None) -> Path:
    """Resolve ``directory/name``, creating the file if needed.

    Raises:
        ValueError: If ``name`` is None or empty.
        OSError: If the file can't be created.
    """
    if not name:
        raise ValueError("File name can't be None or empty")
    if directory is None:
        directory = current_directory()
    return ensure_file(Path(directory) / name)


def get_messages_as_string(messages: Iterable[Message], include_color: bool = False) -> str:
    """Join formatted messages with newlines, without a trailing newline."""
    return "\n".join(m.format(include_color) for m in messages)


def make_file(messages: Iterable[Message], file: Path, append: bool = True) -> None:
    """Write ``messages`` to ``file``, keeping its old content when ``append``.

    Raises:
        OSError: If the file can't be created, read or written.
    """
    file = ensure_file(file)
    new_content = get_messages_as_string(messages, False)

    # Nothing to add: rewriting would only normalize the old line endings
    if append and not new_content:
        return

    content = []
    if append:
        with file.open("r", encoding="utf-8") as fh:
            for line in fh:
                content.append(line if line.endswith("\n") else line + "\n")

    content.append(new_content)
    file.write_text("".join(content), encoding="utf-8")
    logger.debug(f"Rewrote {file} (append={append})")


def get_exception_as_string(exc: BaseException) -> str:
    """Render an exception and its traceback as text."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
