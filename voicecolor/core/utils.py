"""Shared utility functions for VoiceColor."""

import base64
import re

# 8192 base64 quanta: chunks of a multiple of 3 bytes concatenate without padding
BASE64_CHUNK_SIZE = 3 * 0x2000


def strip_code_fences(text: str) -> str:
    """Remove markdown code fences wrapping JSON from LLM responses."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r"^```\w*\n?", "", text)
        text = re.sub(r"\n?```$", "", text)
    return text.strip()


def encode_base64_chunked(data: bytes, chunk_size: int = BASE64_CHUNK_SIZE) -> str:
    """Base64-encode ``data`` a bounded slice at a time.

    The output is identical to ``base64.b64encode(data)``; only the peak
    size of each intermediate conversion is bounded.

    Raises:
        ValueError: If ``chunk_size`` is not a positive multiple of 3.
    """
    if chunk_size <= 0 or chunk_size % 3:
        raise ValueError(f"chunk_size must be a positive multiple of 3, got {chunk_size}")
    view = memoryview(data)
    parts = [
        base64.b64encode(view[offset : offset + chunk_size]).decode("ascii")
        for offset in range(0, len(view), chunk_size)
    ]
    return "".join(parts)
