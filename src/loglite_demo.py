"""
Demo - Walk through the loglite API end to end.

Writes two files into LOGLITE_DIRECTORY (the working directory when unset):
1. example.txt: every message added to the "demo" logger
2. the default log file (log.txt unless LOGLITE_FILE_NAME says otherwise),
   written from the shared root logger

Settings are read from the environment / .env (see loglite.config).
"""

import logging

from loglite import Logger, Message, MessageType, get_exception_as_string, get_messages_as_string
from loglite.config import LoggerSettings, build_logger, configure, load_settings
from loglite.log_utils import SynchronizedLogger

logger = logging.getLogger("Demo")

EXAMPLE_FILE_NAME = "example.txt"


def setup_logging(settings: LoggerSettings) -> None:
    """Configure stdlib logging for the package's own diagnostics."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )


def run(settings: LoggerSettings) -> Logger:
    """Exercise the logger API and return the demo logger."""
    demo_logger = SynchronizedLogger(build_logger("demo", settings))
    demo_logger.set_file_by_name(EXAMPLE_FILE_NAME)
    logger.info(f"Writing demo messages to {demo_logger.resolve_file()}")

    try:
        raise RuntimeError("I told you it was blowing up")
    except RuntimeError as e:
        real_error = Message(get_exception_as_string(e), MessageType.ERROR)

    messages = [
        Message("hey got some info: -40 is the same temperature in celsius and fahrenheit", MessageType.INFO),
        Message("just a quick debug", MessageType.DEBUG, capture_source=True),
        Message("it's not failing. yet...", MessageType.WARNING),
        Message("now the code is blowing up :(", MessageType.ERROR, capture_source=True),
        real_error,
        Message("idk", MessageType.UNKNOWN, capture_source=True),
    ]
    for message in messages:
        demo_logger.add_message(message, print_to_console=True, store=True, write_to_file=True)

    root = configure(Logger.get_instance(), settings)
    root.add_message(real_error, print_to_console=True, store=True, write_to_file=False)

    print(get_messages_as_string(demo_logger.get_stored_messages(), True))
    demo_logger.print_stored_messages(clear_after=False)

    root_file = root.make_file(append=False, clear_after_write=False)
    logger.info(f"Shared logger written to {root_file}")
    return demo_logger.wrapped


def main():
    """Entry point for the demo."""
    settings = load_settings()
    setup_logging(settings)
    run(settings)


if __name__ == "__main__":
    main()
