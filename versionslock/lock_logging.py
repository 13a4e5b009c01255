"""
Console logging for versionslock.

Three levels sit between the standard ones: RESULT for command output, STATUS
for stage progress and VERBOSE for the details shown with ``--verbose``.
"""

import datetime
import logging
import sys

ERROR = logging.ERROR
RESULT = 35
WARNING = logging.WARNING   # 30
STATUS = 25
INFO = logging.INFO         # 20
VERBOSE = 19
DEBUG = logging.DEBUG       # 10

DEFAULT_STREAM_LOG_LEVEL = INFO

custom_levels = {
    'RESULT': RESULT,
    'STATUS': STATUS,
    'VERBOSE': VERBOSE,
}

RESET_COLOR = "\033[0m"

# Levels not listed here are printed without color
level_colors = {
    ERROR: "\033[1;31m",
    WARNING: "\033[0;33m",
    RESULT: "\033[0;32m",
    STATUS: "\033[1;34m",
}


def log_level_factory(level_num):
    def log_func(self, message, *args, **kwargs):
        if self.isEnabledFor(level_num):
            self._log(level_num, message, args, **kwargs)
    return log_func


class LockLogger(logging.Logger):
    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, stacklevel=3):
        # logging.Logger._log resolves the caller relative to itself, which would always point at
        # log_func above for the custom levels. Resolve the caller here with our own stacklevel.
        fn, lno, func, sinfo = self.findCaller(stack_info, stacklevel)
        if exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()

        record = self.makeRecord(self.name, level, fn, lno, msg, args, exc_info, func, extra, sinfo)
        self.handle(record)


for custom_name, custom_num in custom_levels.items():
    logging.addLevelName(custom_num, custom_name)
    setattr(LockLogger, custom_name.lower(), log_level_factory(custom_num))


class ColoredStandardFormatter(logging.Formatter):
    show_location = False

    def format(self, record):
        formatted_time = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        prefix = f"{formatted_time}|{record.levelname}"
        if self.show_location:
            prefix += f":{record.module}:{record.lineno}"
        color = level_colors.get(record.levelno)
        if color is None:
            return f"{prefix}: {record.getMessage()}"
        return f"{color}{prefix}: {record.getMessage()}{RESET_COLOR}"


class ColoredDebugFormatter(ColoredStandardFormatter):
    show_location = True


def setup_logging(name=__name__, stream_log_level=DEFAULT_STREAM_LOG_LEVEL):
    if isinstance(stream_log_level, str):
        stream_log_level = logging.getLevelName(stream_log_level.upper())

    _logger = LockLogger(name)
    _logger.setLevel(logging.DEBUG)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ColoredStandardFormatter())
    stream_handler.setLevel(stream_log_level)
    _logger.addHandler(stream_handler)

    return _logger


def apply_logging_options(_logger, args):
    if args is None:
        return
    stream_handlers = [h for h in _logger.handlers if not hasattr(h, "baseFilename")]

    if getattr(args, "stream_log_level", None):
        for stream_handler in stream_handlers:
            stream_handler.setLevel(args.stream_log_level.upper())

    # --verbose lowers the stream level to VERBOSE unless it is already lower
    if getattr(args, "verbose", False):
        for stream_handler in stream_handlers:
            if stream_handler.level > VERBOSE:
                stream_handler.setLevel(VERBOSE)

    if getattr(args, "debug", False):
        for stream_handler in stream_handlers:
            stream_handler.setFormatter(ColoredDebugFormatter())
            if stream_handler.level > DEBUG:
                stream_handler.setLevel(DEBUG)
