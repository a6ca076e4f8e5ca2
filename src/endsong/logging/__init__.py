"""Structured logging: JSON formatter and setup."""

from endsong.logging.formatter import JSONLogFormatter
from endsong.logging.setup import configure_logging

__all__ = ["JSONLogFormatter", "configure_logging"]
