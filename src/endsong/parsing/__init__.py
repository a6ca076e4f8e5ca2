"""Streaming history parsing package."""

from endsong.parsing.models import RawPlayRecord
from endsong.parsing.parser import HistoryParser

__all__ = ["HistoryParser", "RawPlayRecord"]
