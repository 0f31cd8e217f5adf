"""
Logging for the student report service.

Loggers obtained from :func:`getLogger` emit one JSON object per line, which
keeps diagnostic output easy to ship and to search. Handlers live on the
``student_reports`` package logger; module loggers propagate to it. The level
and the destination are taken from ``LOGLEVEL`` and ``LOGFILE``: from the
environment when the first logger is made, and from the application
configuration when :func:`init_app` runs in the app factory.
"""

import logging
import sys
from typing import Any, Optional

from flask import Flask
from pythonjsonlogger.json import JsonFormatter

from .context import get_application_config

PACKAGE = 'student_reports'
FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
RENAME_FIELDS = {'levelname': 'level', 'asctime': 'timestamp'}


def _make_handler(logfile: Optional[str]) -> logging.Handler:
    handler: logging.Handler
    if logfile:
        handler = logging.FileHandler(logfile)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(JsonFormatter(FORMAT, rename_fields=RENAME_FIELDS))
    return handler


def _level(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return logging.INFO


def configure(level: Any = logging.INFO,
              logfile: Optional[str] = None) -> None:
    """Set the level and the destination of all service loggers."""
    logger = logging.getLogger(PACKAGE)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(_make_handler(logfile))
    logger.setLevel(_level(level))
    logger.propagate = False


def init_app(app: Flask) -> None:
    """Configure logging from the application configuration."""
    app.config.setdefault('LOGLEVEL', logging.INFO)
    app.config.setdefault('LOGFILE', None)
    configure(app.config['LOGLEVEL'], app.config['LOGFILE'])


def getLogger(name: str) -> logging.Logger:
    """
    Get a JSON logger for module ``name``.

    ``name`` should be in the ``student_reports`` namespace, so that lines
    reach the package handler.
    """
    if not logging.getLogger(PACKAGE).handlers:
        config = get_application_config()
        configure(config.get('LOGLEVEL', logging.INFO), config.get('LOGFILE'))
    return logging.getLogger(name)


def mask(token: str) -> str:
    """Show only enough of a token to correlate log lines."""
    if not token:
        return '<none>'
    if len(token) <= 8:
        return '*' * len(token)
    return f'{token[:4]}...{token[-4:]}'
