"""
Audio module - Clip processing and recording sessions.
"""

from .processor import clip_duration, clip_to_duration, frequency_bars, read_clip
from .recorder import RecordingSession, RecordingTimer

__all__ = [
    "RecordingSession",
    "RecordingTimer",
    "clip_duration",
    "clip_to_duration",
    "frequency_bars",
    "read_clip",
]
