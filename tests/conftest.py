"""Shared pytest fixtures for VoiceColor test suite.

Provides common test fixtures used across unit and integration tests,
including a conforming analysis payload, a mock LLM provider and
generated WAV clips.
"""

import io
import json
import math
import struct
import wave
from unittest.mock import AsyncMock

import pytest

from voicecolor.services.analysis.palette import COLOR_PALETTE

# ---------------------------------------------------------------------------
# Analysis payload fixtures
# ---------------------------------------------------------------------------


def make_payload(count: int = 12, summary: str = "明るく伝わりやすい声です") -> dict:
    """Build an analysis payload in wire format with ``count`` parameters.

    Counts above 12 wrap around the palette, producing duplicate ids.
    """
    parameters = []
    for index in range(count):
        category = COLOR_PALETTE[index % len(COLOR_PALETTE)]
        parameters.append(
            {
                "id": category.id,
                "label": category.label,
                "subLabel": category.trait,
                "score": 40 + (index * 5) % 60,
                "description": f"{category.trait}を感じさせる声です。",
                "colorCode": category.color_code,
            }
        )
    return {"summary": summary, "parameters": parameters}


@pytest.fixture
def payload_factory():
    """Expose ``make_payload`` for tests that need non-conforming counts."""
    return make_payload


@pytest.fixture
def stub_payload():
    """A conforming 12-color analysis payload (wire format)."""
    return make_payload()


@pytest.fixture
def stub_json(stub_payload):
    """The conforming payload serialized the way Gemini returns it."""
    return json.dumps(stub_payload, ensure_ascii=False)


@pytest.fixture
def sample_result(stub_payload):
    """The conforming payload parsed into an ``AnalysisResult``."""
    from voicecolor.core.models import AnalysisResult

    return AnalysisResult.model_validate(stub_payload)


# ---------------------------------------------------------------------------
# LLM Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_llm(stub_json):
    """Create a mock LLM provider for unit testing.

    Returns:
        AsyncMock: A mock implementing the BaseLLM interface whose
        ``generate_from_audio`` returns the conforming payload.
    """
    from voicecolor.services.llm.base import BaseLLM

    llm = AsyncMock(spec=BaseLLM)
    llm.generate_from_audio.return_value = stub_json
    return llm


# ---------------------------------------------------------------------------
# Audio Fixtures
# ---------------------------------------------------------------------------


def make_wav(seconds: float, sample_rate: int = 16000, frequency: float = 440.0) -> bytes:
    """Encode a mono 16-bit sine wave of ``seconds`` as WAV bytes."""
    amplitude = 16000  # ~50% of max int16
    frames = b"".join(
        struct.pack("<h", int(amplitude * math.sin(2 * math.pi * frequency * i / sample_rate)))
        for i in range(int(sample_rate * seconds))
    )
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(frames)
    return buf.getvalue()


@pytest.fixture
def wav_factory():
    """Expose ``make_wav`` for tests that need a specific clip length."""
    return make_wav


@pytest.fixture
def sample_wav_bytes():
    """1 second of 440Hz sine-wave audio as WAV (16kHz, 16-bit, mono)."""
    return make_wav(1.0)


@pytest.fixture
def long_wav_bytes():
    """20 seconds of 440Hz sine-wave audio, longer than the quiz limit."""
    return make_wav(20.0, sample_rate=8000)
