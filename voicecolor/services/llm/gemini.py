"""
Gemini LLM provider implementation.

Talks to the Gemini ``generateContent`` REST endpoint with ``httpx`` and
sends the audio inline as base64. Each analysis makes exactly one request:
transport failures become ``UpstreamUnavailableError`` and HTTP error
statuses are surfaced as ``UpstreamAPIError`` so the relay can pass them
through.
"""

import logging

import httpx

from voicecolor.core.config import get_settings
from voicecolor.core.exceptions import (
    ConfigurationError,
    EmptyModelResponseError,
    UpstreamAPIError,
    UpstreamUnavailableError,
)
from voicecolor.core.utils import encode_base64_chunked
from voicecolor.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_MIME_TYPE = "audio/webm"


def extract_text(data: dict) -> str | None:
    """Pull ``candidates[0].content.parts[0].text`` out of a Gemini reply."""
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None


class GeminiLLM(BaseLLM):
    """Gemini API provider (single attempt per request)."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        temperature: float | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Gemini provider.

        Args:
            api_key: Gemini API key (falls back to settings if not provided).
            model: Model name, e.g. "gemini-2.5-flash".
            base_url: API root up to and including the version segment.
            temperature: Sampling temperature for generation.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, used by tests.
        """
        settings = get_settings()
        self._api_key = api_key if api_key is not None else settings.gemini_api_key
        self._model = model or settings.gemini_model
        self._base_url = (base_url or settings.gemini_base_url).rstrip("/")
        self._temperature = (
            temperature if temperature is not None else settings.gemini_temperature
        )
        self._timeout = timeout or settings.gemini_timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/models/{self._model}:generateContent"

    def build_request(
        self,
        audio: bytes,
        mime_type: str,
        prompt: str,
        system: str | None = None,
        response_schema: dict | None = None,
        temperature: float | None = None,
    ) -> dict:
        """Assemble the ``generateContent`` JSON body."""
        generation_config: dict = {
            "responseMimeType": "application/json",
            "temperature": temperature if temperature is not None else self._temperature,
        }
        if response_schema:
            generation_config["responseSchema"] = response_schema

        body: dict = {
            "contents": [
                {
                    "parts": [
                        {
                            "inlineData": {
                                "mimeType": mime_type or DEFAULT_AUDIO_MIME_TYPE,
                                "data": encode_base64_chunked(audio),
                            }
                        },
                        {"text": prompt},
                    ]
                }
            ],
            "generationConfig": generation_config,
        }
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}
        return body

    async def _post(self, body: dict) -> httpx.Response:
        """Send the request once, translating httpx transport errors."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport
            ) as client:
                return await client.post(
                    self.endpoint,
                    json=body,
                    headers={"x-goog-api-key": self._api_key},
                )
        except httpx.TimeoutException as exc:
            logger.error("Gemini API timeout: %s", exc)
            raise UpstreamUnavailableError(f"Gemini API request timed out: {exc}") from exc
        except httpx.TransportError as exc:
            logger.error("Gemini API connection error: %s", exc)
            raise UpstreamUnavailableError(f"Failed to connect to Gemini API: {exc}") from exc

    async def _call_api(self, body: dict) -> str:
        response = await self._post(body)

        if not response.is_success:
            logger.error("Gemini API Error: %s %s", response.status_code, response.text)
            raise UpstreamAPIError(response.status_code, response.text)

        try:
            data = response.json()
        except ValueError:
            logger.error("Gemini API returned a non-JSON body: %.200s", response.text)
            raise EmptyModelResponseError() from None

        text = extract_text(data)
        if not text:
            raise EmptyModelResponseError()
        return text

    async def generate_from_audio(
        self,
        audio: bytes,
        mime_type: str,
        prompt: str,
        **kwargs,
    ) -> str:
        """Send ``audio`` plus ``prompt`` to Gemini and return the reply text.

        Raises:
            ConfigurationError: If no API key is configured.
            UpstreamAPIError: On a non-success HTTP status from Gemini.
            UpstreamUnavailableError: When Gemini cannot be reached or times out.
            EmptyModelResponseError: When the reply carries no text.
        """
        if not self._api_key:
            raise ConfigurationError("Server Configuration Error: API Key missing")

        body = self.build_request(
            audio,
            mime_type,
            prompt,
            system=kwargs.pop("system", None),
            response_schema=kwargs.pop("response_schema", None),
            temperature=kwargs.pop("temperature", None),
        )
        logger.info(
            "Sending %d bytes of %s audio to %s", len(audio), mime_type, self._model
        )
        return await self._call_api(body)
