"""
Logger - Named dispatcher that fans each message out to its destinations.

A single add_message call can, in this order:
1. Print a colored rendering to standard output
2. Store the message in the logger's in-memory buffer
3. Append the message to the logger's target file
4. Hand the message to a registered handler callback

Each step is gated by an explicit argument or, when the argument is
omitted, by the logger's default flags. A failed file write never escapes
add_message: it is turned into an ERROR message that is printed and stored.

Loggers perform no locking. Share one between threads only through
loglite.log_utils.SynchronizedLogger or an equivalent external lock.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, Optional

from . import persistence
from .message import Message, MessageType

logger = logging.getLogger(__name__)

DEFAULT_FILE_NAME = "log.txt"

WRITE_FAILURE_TEXT = "Could not write message to file.\n"


def filter_messages_of_type(messages: Iterable[Message], message_type: MessageType) -> list[Message]:
    """Return the messages of one type, in their original order."""
    return [m for m in messages if m.type is message_type]


def filter_messages_of_types(messages: Iterable[Message], *message_types: MessageType) -> list[Message]:
    """Return the messages whose type is any of ``message_types``, order kept.

    Prefer filter_messages_of_type for a single type.
    """
    wanted = set(message_types)
    return [m for m in messages if m.type in wanted]


class Logger:
    """Named, stateful message dispatcher.

    Holds an ordered message buffer, a lazily resolved target file and the
    default flags consulted when add_message is called without overrides.
    """

    _default_file_name = DEFAULT_FILE_NAME
    _instance: Optional["Logger"] = None

    def __init__(
        self,
        name: str,
        directory: Optional[Path] = None,
        file_name: Optional[str] = None,
        print_by_default: bool = False,
        store_by_default: bool = False,
        write_to_file_by_default: bool = False,
        notify_handler_by_default: bool = False,
        handler: Optional[Callable[[Message], None]] = None,
    ):
        """
        Args:
            name: Identity label, not required to be unique
            directory: Where the target file lives (cwd at first use if None)
            file_name: Target file name (process-wide default if None)
            print_by_default: Print messages when add_message gets no override
            store_by_default: Buffer messages when add_message gets no override
            write_to_file_by_default: Write messages when add_message gets no override
            notify_handler_by_default: Call the handler when add_message gets no override
            handler: Callback invoked with each message when notifying
        """
        self.name = name
        self.directory = Path(directory) if directory is not None else None
        self.file_name = file_name
        self.file: Optional[Path] = None
        self.handler = handler

        self.print_by_default = print_by_default
        self.store_by_default = store_by_default
        self.write_to_file_by_default = write_to_file_by_default
        self.notify_handler_by_default = notify_handler_by_default

        self._messages: list[Message] = []

    def __repr__(self) -> str:
        return f"Logger({self.name!r}, messages={len(self._messages)})"

    # --- Process-wide state ---

    @classmethod
    def get_instance(cls) -> "Logger":
        """Return the shared ``root`` logger, creating it on first use."""
        if cls._instance is None:
            cls._instance = cls("root")
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the shared logger so the next get_instance builds a fresh one."""
        cls._instance = None

    @classmethod
    def get_default_file_name(cls) -> str:
        """Return the file name used when a logger has none of its own."""
        return cls._default_file_name

    @classmethod
    def set_default_file_name(cls, file_name: str) -> None:
        """Change the file name used when a logger has none of its own.

        Raises:
            ValueError: If ``file_name`` is empty.
        """
        if not file_name:
            raise ValueError("Default file name can't be None or empty")
        cls._default_file_name = file_name

    # --- Directory and file resolution ---

    def set_directory(self, directory: Path) -> None:
        """Target ``directory`` for files resolved from now on."""
        self.directory = Path(directory)

    def set_directory_to_current(self) -> None:
        """Target the current working directory."""
        self.directory = persistence.current_directory()

    def resolve_directory(self) -> Path:
        """Return the target directory, defaulting it to cwd on first use."""
        if self.directory is None:
            self.set_directory_to_current()
        return self.directory

    def set_file(self, file: Path) -> None:
        """Use ``file`` as the target file, creating it if it does not exist.

        Raises:
            OSError: If the file can't be created.
        """
        self.file = persistence.ensure_file(Path(file))

    def set_file_by_name(self, file_name: str, use_directory: bool = True) -> None:
        """Target ``file_name``, inside the logger's directory if ``use_directory``.

        Raises:
            ValueError: If ``file_name`` is empty.
            OSError: If the file can't be created.
        """
        if not file_name:
            raise ValueError("File name can't be None or empty")
        if use_directory:
            self.set_file(self.resolve_directory() / file_name)
        else:
            self.set_file(Path(file_name))

    def resolve_file(self) -> Path:
        """Return the target file, creating it on first use.

        Uses the logger's file_name, or the process-wide default name, in
        the resolved directory.
        """
        if self.file is None:
            file_name = self.file_name if self.file_name is not None else self._default_file_name
            self.set_file_by_name(file_name, use_directory=True)
        return self.file

    # --- Dispatch ---

    def add_message(
        self,
        message: Message,
        print_to_console: Optional[bool] = None,
        store: Optional[bool] = None,
        write_to_file: Optional[bool] = None,
        notify_handler: Optional[bool] = None,
    ) -> None:
        """Dispatch ``message``. Omitted flags fall back to the logger defaults.

        A failure while writing to the file is not raised. It becomes an
        ERROR message that is printed and stored (never written, so the
        recovery can't recurse). Handler exceptions do propagate.
        """
        if print_to_console is None:
            print_to_console = self.print_by_default
        if store is None:
            store = self.store_by_default
        if write_to_file is None:
            write_to_file = self.write_to_file_by_default
        if notify_handler is None:
            notify_handler = self.notify_handler_by_default

        if print_to_console:
            print(message.format(True))

        if store:
            self._messages.append(message)

        if write_to_file:
            try:
                persistence.make_file([message], self.resolve_file(), append=True)
            except Exception as e:
                logger.warning(f"Logger '{self.name}' could not write to file: {e}")
                self.add_message(
                    Message(
                        WRITE_FAILURE_TEXT + persistence.get_exception_as_string(e),
                        MessageType.ERROR,
                        capture_source=True,
                    ),
                    print_to_console=True,
                    store=True,
                    write_to_file=False,
                    notify_handler=False,
                )

        if notify_handler and self.handler is not None:
            self.handler(message)

    def error(self, payload: str, capture_source: bool = False) -> None:
        """Dispatch an ERROR message with the default flags."""
        self.add_message(Message(payload, MessageType.ERROR, capture_source))

    def warning(self, payload: str, capture_source: bool = False) -> None:
        """Dispatch a WARNING message with the default flags."""
        self.add_message(Message(payload, MessageType.WARNING, capture_source))

    def info(self, payload: str, capture_source: bool = False) -> None:
        """Dispatch an INFO message with the default flags."""
        self.add_message(Message(payload, MessageType.INFO, capture_source))

    def debug(self, payload: str, capture_source: bool = False) -> None:
        """Dispatch a DEBUG message with the default flags."""
        self.add_message(Message(payload, MessageType.DEBUG, capture_source))

    def trace(self, payload: str, capture_source: bool = False) -> None:
        """Dispatch a TRACE message with the default flags."""
        self.add_message(Message(payload, MessageType.TRACE, capture_source))

    # --- File output ---

    def make_file(
        self,
        append: bool = True,
        clear_after_write: bool = False,
        file: Optional[Path] = None,
        file_name: Optional[str] = None,
    ) -> Path:
        """Write the stored messages to a file and return its path.

        The target is ``file`` if given, else ``file_name`` in the logger's
        directory, else the logger's resolved file. An explicit target
        becomes the logger's file. The buffer is cleared only after a
        successful write.

        Raises:
            ValueError: If ``file_name`` is given but empty.
            OSError: If the file can't be created, read or written.
        """
        if file is not None:
            self.set_file(file)
        elif file_name is not None:
            self.set_file_by_name(file_name)
        target = self.resolve_file()

        persistence.make_file(self._messages, target, append)

        if clear_after_write:
            self.clear_messages()
        return target

    @classmethod
    def make_default_file(
        cls,
        messages: Iterable[Message],
        append: bool = True,
        file_name: Optional[str] = None,
    ) -> Path:
        """Write ``messages`` to ``file_name`` (or the default name) in cwd."""
        target = persistence.get_file(
            file_name if file_name is not None else cls._default_file_name,
            persistence.current_directory(),
        )
        persistence.make_file(messages, target, append)
        return target

    # --- Buffer queries ---

    def get_stored_messages(self) -> list[Message]:
        """Return a copy of the buffer, oldest first."""
        return list(self._messages)

    def get_stored_messages_of_type(self, message_type: MessageType) -> list[Message]:
        """Return stored messages of ``message_type``, oldest first."""
        return filter_messages_of_type(self._messages, message_type)

    def get_stored_messages_of_types(self, *message_types: MessageType) -> list[Message]:
        """Return stored messages matching any of ``message_types``, oldest first."""
        return filter_messages_of_types(self._messages, *message_types)

    def get_stored_messages_as_string(self, include_color: bool = False) -> str:
        """Render the buffer one message per line, without a trailing newline."""
        return persistence.get_messages_as_string(self._messages, include_color)

    def print_stored_messages(self, clear_after: bool = False) -> None:
        """Print every stored message, colored, in order."""
        for message in self._messages:
            print(message.format(True))
        if clear_after:
            self.clear_messages()

    def clear_messages(self) -> None:
        """Empty the buffer."""
        self._messages.clear()

    # Static file helpers, reachable from the class as well
    get_messages_as_string = staticmethod(persistence.get_messages_as_string)
    get_exception_as_string = staticmethod(persistence.get_exception_as_string)
    get_file = staticmethod(persistence.get_file)
    get_current_directory = staticmethod(persistence.current_directory)
