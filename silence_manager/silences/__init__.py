"""
Silences module - duration parsing and silence composition.
"""

from silence_manager.silences.composer import compose_silence
from silence_manager.silences.duration import duration_to_timedelta, parse_duration, split_duration

__all__ = [
    "compose_silence",
    "parse_duration",
    "split_duration",
    "duration_to_timedelta",
]
