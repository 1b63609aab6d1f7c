"""Extended streaming history export adapter."""

from __future__ import annotations

from .parser import parse_history_file
from .schema import StreamingHistory, StreamingHistoryEntry, parse_timestamp
from .translator import translate_entry

__all__ = [
    "StreamingHistory",
    "StreamingHistoryEntry",
    "parse_history_file",
    "parse_timestamp",
    "translate_entry",
]
