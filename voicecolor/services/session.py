"""
Quiz session state machine.

States: idle -> recording -> analyzing -> result | error

``result`` and ``error`` only go back to ``idle`` through :meth:`QuizSession.reset`.
A recording that is cancelled returns to ``idle`` without analysis.
"""

import logging
from collections.abc import Callable

from voicecolor.core.exceptions import InvalidTransitionError
from voicecolor.core.models import AnalysisResult, AppState
from voicecolor.services.audio.recorder import DEFAULT_DURATION_SECONDS, RecordingSession
from voicecolor.services.share import decompress_result

logger = logging.getLogger(__name__)

ANALYSIS_FAILED_MESSAGE = "音声の解析に失敗しました。もう一度お試しください。"

Analyzer = Callable[[bytes, str], AnalysisResult]


class QuizSession:
    """Drives one user through record -> analyze -> result.

    Args:
        analyze: Callable turning ``(audio, mime_type)`` into a result. Any
            exception it raises moves the session to ``error``.
        duration: Recording countdown length in seconds.
    """

    def __init__(self, analyze: Analyzer, duration: int = DEFAULT_DURATION_SECONDS) -> None:
        self._analyze = analyze
        self._duration = duration
        self.state = AppState.idle
        self.result: AnalysisResult | None = None
        self.error_message: str | None = None
        self.recording: RecordingSession | None = None

    def _require(self, action: str, *allowed: AppState) -> None:
        if self.state not in allowed:
            raise InvalidTransitionError(self.state.value, action)

    def start_recording(self, mime_type: str = "audio/wav") -> RecordingSession:
        """Begin a recording attempt; the returned session stops itself at 0 s."""
        self._require("start recording", AppState.idle)
        self.recording = RecordingSession(
            on_complete=self._on_recording_complete,
            duration=self._duration,
            mime_type=mime_type,
        )
        self.state = AppState.recording
        return self.recording

    def cancel_recording(self) -> None:
        self._require("cancel recording", AppState.recording)
        if self.recording is not None:
            self.recording.cancel()
        self.recording = None
        self.state = AppState.idle

    def _on_recording_complete(self, audio: bytes, mime_type: str) -> None:
        self.state = AppState.analyzing
        self.recording = None
        try:
            result = self._analyze(audio, mime_type)
        except Exception:
            logger.exception("Voice analysis failed")
            self.result = None
            self.error_message = ANALYSIS_FAILED_MESSAGE
            self.state = AppState.error
            return
        self.result = result
        self.error_message = None
        self.state = AppState.result

    def restore_shared(self, token: str | None) -> bool:
        """Show a result decoded from a share token instead of recording.

        Returns:
            True if the token decoded and the session moved to ``result``.
        """
        self._require("restore a shared result", AppState.idle)
        result = decompress_result(token)
        if result is None:
            return False
        self.result = result
        self.state = AppState.result
        return True

    def reset(self) -> None:
        self._require("reset", AppState.result, AppState.error)
        self.state = AppState.idle
        self.result = None
        self.error_message = None
