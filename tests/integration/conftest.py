"""Integration test fixtures for VoiceColor.

Provides an application built against a temporary bucket directory and an
async HTTP client that talks to it in-process. The Gemini provider is
replaced through ``app.dependency_overrides``.
"""

from unittest.mock import patch

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from voicecolor.api.app import create_app
from voicecolor.api.deps import get_object_store, get_voice_analyzer
from voicecolor.core.config import Settings
from voicecolor.services.analysis import VoiceColorAnalyzer
from voicecolor.services.llm.gemini import GeminiLLM
from voicecolor.services.storage import LocalBucket

ALLOWED_ORIGIN = "http://localhost:8501"


@pytest.fixture
def settings(tmp_path):
    """Settings pointing the bucket at a temporary directory."""
    return Settings(
        _env_file=None,
        gemini_api_key="test-key",
        bucket_dir=str(tmp_path / "bucket"),
        public_base_url="http://test/files",
        cors_origins=[ALLOWED_ORIGIN],
    )


@pytest.fixture
def app(settings, mock_llm):
    """Create a fresh FastAPI application wired to test doubles."""
    with patch("voicecolor.api.app.get_settings", return_value=settings):
        application = create_app()
    application.dependency_overrides[get_voice_analyzer] = lambda: VoiceColorAnalyzer(mock_llm)
    application.dependency_overrides[get_object_store] = lambda: LocalBucket(
        root=settings.bucket_dir, public_base_url=settings.public_base_url
    )
    return application


@pytest.fixture
def use_gemini(app):
    """Swap in a real GeminiLLM whose HTTP traffic goes to ``handler``."""

    def _install(handler, api_key: str = "test-key") -> None:
        llm = GeminiLLM(api_key=api_key, transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_voice_analyzer] = lambda: VoiceColorAnalyzer(llm)

    return _install


@pytest.fixture
async def async_client(app):
    """AsyncClient talking to the app in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
