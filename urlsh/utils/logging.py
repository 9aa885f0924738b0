"""Application-wide logging initialization

IMPORTANT: Call `initialize_logging()` in the CLI entry point before any other
logging is done.

Log records are written to stderr so they never mix with command output.

Two formats are available, selected by the LOG_FORMAT env var:

text (default):
    WARNING: Failed to load store. Starting with an empty store. (path=urls.json, error=...)

json (default under --verbose):
{
    "timestamp": "2026-10-19T12:00:00.000Z",
    "level": "WARNING",
    "logger": "urlsh.dao.file.short_url_file_dao",
    "message": "Failed to load store. Starting with an empty store."
}
"""

import os
import json
import logging
import logging.config
from datetime import datetime, UTC

from urlsh.utils.constants import ENV


STANDARD_ATTRS = frozenset(
    {
        'args',
        'asctime',
        'created',
        'exc_info',
        'exc_text',
        'filename',
        'funcName',
        'levelname',
        'levelno',
        'lineno',
        'module',
        'msecs',
        'message',
        'msg',
        'name',
        'pathname',
        'process',
        'processName',
        'relativeCreated',
        'stack_info',
        'thread',
        'threadName',
        'taskName',
    }
)


def record_extras(record: logging.LogRecord) -> dict:
    """Return the `extra` fields attached to a LogRecord"""
    return {key: value for key, value in record.__dict__.items() if key not in STANDARD_ATTRS}


class ConsoleFormatter(logging.Formatter):
    """One-line human-readable formatter: 'LEVEL: message (key=value, ...)'"""

    def format(self, record: logging.LogRecord) -> str:
        line = f'{record.levelname}: {record.getMessage()}'
        extras = record_extras(record)
        if extras:
            line += ' (' + ', '.join(f'{key}={value}' for key, value in extras.items()) + ')'
        if record.exc_info:
            line += '\n' + self.formatException(record.exc_info)
        return line


class JsonFormatter(logging.Formatter):
    """JSON formatter that includes LogRecord extras"""

    def format(self, record: logging.LogRecord) -> str:
        # fmt: off
        timestamp = datetime.fromtimestamp(record.created, tz=UTC) \
                            .isoformat(timespec="milliseconds") \
                            .replace("+00:00", "Z")
        # fmt: on

        log = {
            'timestamp': timestamp,
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            **record_extras(record),
        }

        if record.exc_info:
            log['exception'] = self.formatException(record.exc_info)

        return json.dumps(log, default=str)


FORMATTERS = {
    'text': ConsoleFormatter,
    'json': JsonFormatter,
}


def initialize_logging(level: str | None = None, log_format: str | None = None) -> None:
    """Configure the root logger

    Args:
        level (str | None):
            Overrides the LOG_LEVEL env var (default WARNING).
        log_format (str | None):
            'text' or 'json'. Overrides the LOG_FORMAT env var; without either,
            DEBUG logging is JSON and everything else is text. Unknown
            values fall back to text.
    """
    log_level = (level or os.getenv(ENV.App.LOG_LEVEL, 'WARNING')).upper()
    log_format = (log_format or os.getenv(ENV.App.LOG_FORMAT) or ('json' if log_level == 'DEBUG' else 'text')).lower()
    logging.config.dictConfig(
        {
            'version': 1,
            'disable_existing_loggers': False,
            'formatters': {
                'default': {
                    '()': FORMATTERS.get(log_format, ConsoleFormatter),
                }
            },
            'handlers': {
                'stderr': {
                    'class': 'logging.StreamHandler',
                    'formatter': 'default',
                    'stream': 'ext://sys.stderr',
                }
            },
            'root': {
                'level': log_level,
                'handlers': ['stderr'],
            },
        }
    )
