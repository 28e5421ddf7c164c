"""Unit tests for the Streamlit-side APIClient.

Validates that the client posts clips and snapshots as the right multipart
fields, decodes analysis results, applies the color contract check, and
maps every failure onto a categorized ``APIError``.
"""

import json
import logging
from unittest.mock import MagicMock, patch

import httpx
import pytest

from voicecolor.ui.api_client import APIClient, APIError


class Recorder:
    """httpx MockTransport handler that records requests."""

    def __init__(self, response):
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _client(response, **kwargs) -> tuple[APIClient, Recorder]:
    handler = Recorder(response)
    api = APIClient(
        base_url="http://relay.test", transport=httpx.MockTransport(handler), **kwargs
    )
    return api, handler


class TestAnalyzeVoice:
    def test_posts_audio_field(self, stub_json):
        api, handler = _client(httpx.Response(200, text=stub_json))

        api.analyze_voice(b"RIFFclip", filename="voice.webm", mime_type="audio/webm")

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url == "http://relay.test/analyze"
        body = request.content
        assert b'name="audio"; filename="voice.webm"' in body
        assert b"Content-Type: audio/webm" in body
        assert b"RIFFclip" in body

    def test_returns_parsed_result(self, stub_json, stub_payload):
        api, _ = _client(httpx.Response(200, text=stub_json))

        result = api.analyze_voice(b"clip")

        assert result.summary == stub_payload["summary"]
        assert len(result.parameters) == 12
        assert result.parameters[0].color_code == "#EF4444"

    def test_non_conforming_returned_with_warning(self, payload_factory, caplog):
        api, _ = _client(httpx.Response(200, json=payload_factory(11)))

        with caplog.at_level(logging.WARNING, logger="voicecolor.ui.api_client"):
            result = api.analyze_voice(b"clip")

        assert len(result.parameters) == 11
        assert "expected 12 parameters, got 11" in caplog.text

    def test_strict_contract_rejects(self, payload_factory):
        api, _ = _client(httpx.Response(200, json=payload_factory(13)), strict_contract=True)

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "contract"
        assert "duplicate parameter id 'red'" in exc_info.value.message

    @pytest.mark.parametrize("body", ["not json", json.dumps({"parameters": []}), "[]"])
    def test_undecodable_result(self, body):
        api, _ = _client(httpx.Response(200, text=body))

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "invalid_response"


class TestErrorMapping:
    def test_missing_base_url(self):
        api = APIClient(base_url="")

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "config"

    def test_connection_error(self):
        api, _ = _client(httpx.ConnectError("refused"))

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "connection"
        assert "not running" in exc_info.value.message

    def test_timeout(self):
        api, _ = _client(httpx.ReadTimeout("slow"))

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "timeout"

    def test_json_error_detail(self):
        api, _ = _client(
            httpx.Response(400, json={"detail": "No audio file provided", "code": "MISSING_UPLOAD"})
        )

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "http"
        assert exc_info.value.message == "HTTP 400: No audio file provided"

    def test_plain_text_upstream_error(self):
        api, _ = _client(httpx.Response(429, text="Gemini API Error: quota exceeded"))

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.message == "HTTP 429: Gemini API Error: quota exceeded"

    def test_other_transport_error(self):
        api, _ = _client(httpx.RemoteProtocolError("peer closed"))

        with pytest.raises(APIError) as exc_info:
            api.analyze_voice(b"clip")

        assert exc_info.value.category == "network"


class TestHealth:
    def test_check_connection_ok(self):
        api, handler = _client(httpx.Response(200, json={"status": "ok"}))

        assert api.check_connection() == (True, "Connected")
        assert handler.requests[0].url.path == "/health"

    def test_check_connection_down(self):
        api, _ = _client(httpx.ConnectError("refused"))

        ok, message = api.check_connection()

        assert ok is False
        assert "not running" in message


class TestUploadSnapshot:
    def test_posts_image_field(self):
        api, handler = _client(httpx.Response(200, json={"url": "http://relay.test/files/a.png"}))

        url = api.upload_snapshot(b"\x89PNG", filename="result.png")

        assert url == "http://relay.test/files/a.png"
        request = handler.requests[0]
        assert request.url.path == "/upload"
        assert b'name="image"; filename="result.png"' in request.content
        assert b"Content-Type: image/png" in request.content

    def test_missing_url(self):
        api, _ = _client(httpx.Response(200, json={}))

        with pytest.raises(APIError) as exc_info:
            api.upload_snapshot(b"\x89PNG")

        assert exc_info.value.category == "invalid_response"


def test_analyze_uses_analyze_timeout():
    """The analysis upload overrides the default request timeout."""
    with patch("voicecolor.ui.api_client.httpx.Client") as mock_cls:
        mock_http = MagicMock()
        mock_cls.return_value = mock_http
        mock_http.post.return_value.content = json.dumps({"summary": "s", "parameters": []})
        api = APIClient(base_url="http://test:8000", analyze_timeout=90.0)

        api.analyze_voice(b"clip")

    assert mock_http.post.call_args.kwargs["timeout"] == 90.0
    mock_http.post.return_value.raise_for_status.assert_called_once()
