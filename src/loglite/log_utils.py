"""Shared locking utilities for loggers used from more than one thread.

loglite.Logger does no locking of its own. Code that shares a Logger
between threads wraps it in SynchronizedLogger so buffer appends and the
read-modify-write file cycle run one caller at a time.
"""

import inspect
import threading
from functools import wraps

# Single shared lock for loggers that write to the same files.
# Re-entrant: a handler may log again from inside add_message.
log_file_lock = threading.RLock()

_OWN_ATTRIBUTES = ("_logger", "_lock")


class SynchronizedLogger:
    """Proxy that runs every method of the wrapped logger under a lock.

    Attribute reads and writes go straight to the wrapped logger; only
    bound methods are wrapped.
    """

    def __init__(self, logger, lock=None):
        object.__setattr__(self, "_logger", logger)
        object.__setattr__(self, "_lock", lock if lock is not None else log_file_lock)

    @property
    def wrapped(self):
        """Return the logger behind the proxy."""
        return self._logger

    def __getattr__(self, name):
        attr = getattr(self._logger, name)
        if not inspect.ismethod(attr):
            return attr

        @wraps(attr)
        def locked(*args, **kwargs):
            with self._lock:
                return attr(*args, **kwargs)

        return locked

    def __setattr__(self, name, value):
        if name in _OWN_ATTRIBUTES:
            object.__setattr__(self, name, value)
        else:
            with self._lock:
                setattr(self._logger, name, value)
