"""Shared FastAPI dependencies.

Each provider is built once per process; tests swap them through
``app.dependency_overrides``.
"""

from functools import lru_cache

from voicecolor.services.analysis import VoiceColorAnalyzer
from voicecolor.services.llm import create_llm
from voicecolor.services.storage import BaseObjectStore, create_object_store


@lru_cache(maxsize=1)
def get_voice_analyzer() -> VoiceColorAnalyzer:
    """Create and cache the analysis relay backed by Gemini."""
    return VoiceColorAnalyzer(create_llm("gemini"))


@lru_cache(maxsize=1)
def get_object_store() -> BaseObjectStore:
    """Create and cache the snapshot bucket."""
    return create_object_store("local")
