"""
Logging classes for alnio
"""

import copy
import logging

__all__ = ["get_logger", "ColoredConsoleHandler", "init_console_logger"]

ROOT_LOGGER_NAME = "alnio"


class ColoredConsoleHandler(logging.StreamHandler):
    """Stream handler that uses a colored output using ANSI colors
    when the underlying stream is a terminal."""

    def __init__(self, *args, **kwds):
        logging.StreamHandler.__init__(self, *args, **kwds)
        isatty = getattr(self.stream, "isatty", None)
        self.uses_colors = bool(isatty and isatty())

    def emit(self, record):
        """Emits the given logging message"""
        if not self.uses_colors:
            return logging.StreamHandler.emit(self, record)

        my_record = copy.copy(record)
        level = my_record.levelno
        if level >= logging.ERROR:
            color = '\x1b[31m\x1b[1m'
        elif level >= logging.WARNING:
            color = '\x1b[33m\x1b[1m'
        elif level >= logging.INFO:
            color = '\x1b[0m'
        elif level >= logging.DEBUG:
            color = '\x1b[35m'
        else:
            color = '\x1b[0m'

        my_record.msg = "%s%s\x1b[0m" % (color, my_record.msg)
        logging.StreamHandler.emit(self, my_record)


def get_logger(name=None):
    """Retrieves a logger with the given name in the ``alnio`` namespace
    and ensures that the namespace is handled by a `logging.NullHandler`.
    This is to avoid error messages being printed when the host
    application using alnio does not use the `logging` module.
    """
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(h, logging.NullHandler) for h in root.handlers):
        root.addHandler(logging.NullHandler())

    if not name:
        return root
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME+"."):
        name = "%s.%s" % (ROOT_LOGGER_NAME, name)
    return logging.getLogger(name)


def init_console_logger(logger, level=logging.WARNING, stream=None):
    """Attaches a `ColoredConsoleHandler` to the given logger and sets
    its level. Returns the handler."""
    handler = ColoredConsoleHandler(stream)
    if handler.uses_colors:
        formatter = logging.Formatter("%(message)s")
    else:
        formatter = logging.Formatter("[%(levelname)1.1s] %(message)s")
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
