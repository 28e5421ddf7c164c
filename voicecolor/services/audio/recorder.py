"""Recording session with a fixed-length countdown.

A :class:`RecordingSession` owns everything one recording attempt holds on
to: the countdown, the captured bytes and any cleanup callbacks registered
by the capture front-end. Whichever way the attempt ends (manual stop,
countdown expiry, cancel, or leaving a ``with`` block) the cleanups run
exactly once.
"""

import logging
from collections.abc import Callable

from voicecolor.core.exceptions import InvalidTransitionError

logger = logging.getLogger(__name__)

DEFAULT_DURATION_SECONDS = 15


class RecordingTimer:
    """Whole-second countdown that fires its expiry callback once at zero."""

    def __init__(
        self,
        duration: int = DEFAULT_DURATION_SECONDS,
        on_expire: Callable[[], None] | None = None,
    ) -> None:
        if duration <= 0:
            raise ValueError(f"duration must be positive, got {duration}")
        self._duration = duration
        self._remaining = duration
        self._on_expire = on_expire
        self._cancelled = False

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def remaining(self) -> int:
        return self._remaining

    @property
    def expired(self) -> bool:
        return self._remaining == 0

    @property
    def active(self) -> bool:
        return not self._cancelled and not self.expired

    def tick(self) -> int:
        """Account for one elapsed second and return the seconds left."""
        if not self.active:
            return self._remaining
        self._remaining -= 1
        if self._remaining == 0 and self._on_expire is not None:
            self._on_expire()
        return self._remaining

    def advance(self, seconds: float) -> int:
        """Account for ``seconds`` of wall time (whole seconds only)."""
        for _ in range(int(seconds)):
            if not self.active:
                break
            self.tick()
        return self._remaining

    def cancel(self) -> None:
        self._cancelled = True


class RecordingSession:
    """One recording attempt and the resources it owns.

    Args:
        on_complete: Called once with the finished clip and its MIME type.
        duration: Countdown length; reaching zero stops the recording.
        mime_type: MIME type of the bytes written to the session.
    """

    def __init__(
        self,
        on_complete: Callable[[bytes, str], None],
        duration: int = DEFAULT_DURATION_SECONDS,
        mime_type: str = "audio/wav",
    ) -> None:
        self._on_complete = on_complete
        self._mime_type = mime_type
        self._buffer = bytearray()
        self._cleanups: list[Callable[[], None]] = []
        self._stopped = False
        self._closed = False
        self.timer = RecordingTimer(duration, on_expire=self._on_expire)

    @property
    def stopped(self) -> bool:
        return self._stopped

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def mime_type(self) -> str:
        return self._mime_type

    def add_cleanup(self, callback: Callable[[], None]) -> None:
        """Register a release callback; callbacks run in reverse order."""
        if self._closed:
            callback()
            return
        self._cleanups.append(callback)

    def write(self, data: bytes) -> None:
        if self._stopped:
            raise InvalidTransitionError("stopped", "write audio")
        self._buffer.extend(data)

    def stop(self) -> bool:
        """Finish the recording and deliver the clip.

        Returns:
            False if the session had already stopped or been cancelled.
        """
        if self._stopped:
            return False
        self._stopped = True
        audio = bytes(self._buffer)
        self.close()
        logger.info("Recording stopped with %d bytes", len(audio))
        self._on_complete(audio, self._mime_type)
        return True

    def cancel(self) -> None:
        """Abandon the recording without delivering anything."""
        self._stopped = True
        self._buffer.clear()
        self.close()

    def close(self) -> None:
        """Release every owned resource. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self.timer.cancel()
        while self._cleanups:
            callback = self._cleanups.pop()
            try:
                callback()
            except Exception:
                logger.exception("Recording cleanup failed")

    def _on_expire(self) -> None:
        logger.info("Recording reached %d s limit", self.timer.duration)
        self.stop()

    def __enter__(self) -> "RecordingSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
