"""
Synchronous HTTP client for the VoiceColor relay.

Uses ``httpx.Client`` (sync) because Streamlit scripts run synchronously.
"""

import logging

import httpx
import streamlit as st
from pydantic import ValidationError

from voicecolor.core.models import AnalysisResult, UploadResponse

logger = logging.getLogger(__name__)


class APIError(Exception):
    """User-friendly API error with categorized message.

    Categories: "config", "connection", "timeout", "http", "network",
    "invalid_response", "contract", "unknown".
    """

    def __init__(self, message: str, category: str = "unknown") -> None:
        self.message = message
        self.category = category
        super().__init__(message)


class APIClient:
    """Thin synchronous wrapper around httpx for calling the relay.

    All methods return parsed models or raise ``APIError``. There is no
    retry: a failed analysis is reported once and the user starts over.
    """

    def __init__(
        self,
        base_url: str | None = "http://localhost:8000",
        timeout: float = 30.0,
        analyze_timeout: float = 120.0,
        strict_contract: bool = False,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: Base URL of the relay. Empty means "not configured".
            timeout: Default request timeout in seconds.
            analyze_timeout: Timeout for the analysis upload.
            strict_contract: Reject results that break the 12-color contract.
            transport: Optional httpx transport, used by tests.
        """
        self._base_url = (base_url or "").rstrip("/")
        self._analyze_timeout = analyze_timeout
        self._strict_contract = strict_contract
        self._client = (
            httpx.Client(base_url=self._base_url, timeout=timeout, transport=transport)
            if self._base_url
            else None
        )

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        """Execute an HTTP request with user-friendly error handling.

        Raises:
            APIError: On missing configuration, connection, timeout,
                HTTP status, or network errors.
        """
        if self._client is None:
            raise APIError("Backend URL is not configured", category="config")
        try:
            resp = getattr(self._client, method)(path, **kwargs)
            resp.raise_for_status()
            return resp
        except httpx.ConnectError:
            raise APIError(
                "Backend server is not running. "
                "Start it with: `uvicorn voicecolor.api.app:app --reload --port 8000`",
                category="connection",
            ) from None
        except httpx.TimeoutException:
            raise APIError(
                "Request timed out. The server may be overloaded.",
                category="timeout",
            ) from None
        except httpx.HTTPStatusError as exc:
            try:
                detail = exc.response.json().get("detail", exc.response.text)
            except Exception:
                detail = exc.response.text or str(exc)
            raise APIError(
                f"HTTP {exc.response.status_code}: {detail}", category="http"
            ) from None
        except httpx.HTTPError as exc:
            raise APIError(f"Network error: {exc}", category="network") from None

    # -- health --

    def health_check(self) -> dict:
        return self._request("get", "/health").json()

    def check_connection(self) -> tuple[bool, str]:
        """Check if the backend is reachable. Returns (ok, message)."""
        try:
            self.health_check()
            return True, "Connected"
        except APIError as exc:
            return False, exc.message

    # -- analysis --

    def analyze_voice(
        self,
        audio: bytes,
        filename: str = "voice.wav",
        mime_type: str = "audio/wav",
    ) -> AnalysisResult:
        """Upload a clip to ``/analyze`` and decode the result.

        Contract violations (wrong count, bad score, ...) are logged and the
        result is returned anyway unless ``strict_contract`` is set.
        """
        resp = self._request(
            "post",
            "/analyze",
            files={"audio": (filename, audio, mime_type)},
            timeout=self._analyze_timeout,
        )
        try:
            result = AnalysisResult.model_validate_json(resp.content)
        except ValidationError as exc:
            logger.error("Relay returned an undecodable result: %s", exc)
            raise APIError("Analysis result could not be read", category="invalid_response") from None

        violations = result.contract_violations()
        if violations:
            logger.warning("Analysis result breaks the color contract: %s", "; ".join(violations))
            if self._strict_contract:
                raise APIError("; ".join(violations), category="contract")
        return result

    # -- share --

    def upload_snapshot(self, png: bytes, filename: str = "snapshot.png") -> str:
        """Upload a rendered result image and return its public URL."""
        resp = self._request("post", "/upload", files={"image": (filename, png, "image/png")})
        try:
            return UploadResponse.model_validate_json(resp.content).url
        except ValidationError:
            raise APIError("Upload response could not be read", category="invalid_response") from None


@st.cache_resource
def get_api_client(
    base_url: str = "http://localhost:8000",
    analyze_timeout: float = 120.0,
    strict_contract: bool = False,
) -> APIClient:
    """Return a cached APIClient, keyed by its arguments.

    Uses Streamlit's ``cache_resource`` to persist the client across reruns.
    When the base URL changes (e.g. user updates sidebar), a new client
    is created automatically because the cache key includes the parameter.
    """
    return APIClient(
        base_url=base_url,
        analyze_timeout=analyze_timeout,
        strict_contract=strict_contract,
    )
