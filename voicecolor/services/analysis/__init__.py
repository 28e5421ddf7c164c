"""
Analysis module - Voice color analysis relay and prompt material.
"""

from .analyzer import VoiceColorAnalyzer
from .palette import COLOR_PALETTE, ColorCategory

__all__ = ["COLOR_PALETTE", "ColorCategory", "VoiceColorAnalyzer"]
