"""
VoiceColor exception hierarchy.

All application-specific exceptions inherit from VoiceColorError,
enabling centralized error handling in the API middleware layer.
"""

from datetime import UTC, datetime


class VoiceColorError(Exception):
    """Base exception for all VoiceColor errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "VOICECOLOR_ERROR",
        status_code: int = 500,
    ) -> None:
        self.detail = detail
        self.code = code
        self.status_code = status_code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class MissingUploadError(VoiceColorError):
    """Raised when a multipart request lacks its required file field."""

    def __init__(self, field: str) -> None:
        super().__init__(
            detail=f"No {field} provided",
            code="MISSING_UPLOAD",
            status_code=400,
        )
        self.field = field


class ConfigurationError(VoiceColorError):
    """Raised when a required server-side setting is missing."""

    def __init__(self, detail: str = "Server configuration error") -> None:
        super().__init__(
            detail=detail,
            code="CONFIGURATION_ERROR",
            status_code=500,
        )


class UpstreamAPIError(VoiceColorError):
    """Raised when the Gemini API answers with a non-success status.

    The upstream status and body are relayed to the caller unchanged.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(
            detail=f"Gemini API Error: {body}",
            code="UPSTREAM_ERROR",
            status_code=status_code,
        )
        self.body = body


class UpstreamUnavailableError(VoiceColorError):
    """Raised when the Gemini API cannot be reached at all."""

    def __init__(self, detail: str = "Gemini API is unreachable") -> None:
        super().__init__(
            detail=detail,
            code="UPSTREAM_UNAVAILABLE",
            status_code=502,
        )


class EmptyModelResponseError(VoiceColorError):
    """Raised when the model reply carries no text part."""

    def __init__(self) -> None:
        super().__init__(
            detail="Gemini API returned no text",
            code="EMPTY_MODEL_RESPONSE",
            status_code=500,
        )


class StorageError(VoiceColorError):
    """Raised when a snapshot cannot be written to the bucket."""

    def __init__(self, detail: str = "Failed to store object") -> None:
        super().__init__(detail=detail, code="STORAGE_ERROR", status_code=500)


class InvalidTransitionError(VoiceColorError):
    """Raised when a quiz session is asked to make an illegal state change."""

    def __init__(self, current: str, action: str) -> None:
        super().__init__(
            detail=f"Cannot {action} while {current}",
            code="INVALID_TRANSITION",
            status_code=409,
        )
        self.current = current
        self.action = action
