"""Audio clip utilities.

Trims recorded clips to the quiz duration and computes the frequency bars
drawn as a voice print next to the recorder.
"""

import io
import logging

import numpy as np
import soundfile as sf

logger = logging.getLogger(__name__)


def read_clip(audio: bytes) -> tuple[np.ndarray, int] | None:
    """Decode an encoded clip to float32 samples.

    Returns:
        ``(samples, sample_rate)`` with samples shaped ``(frames, channels)``,
        or None when libsndfile cannot decode the format (e.g. browser WebM).
    """
    if not audio:
        return None
    try:
        data, sample_rate = sf.read(io.BytesIO(audio), dtype="float32", always_2d=True)
    except RuntimeError as exc:  # LibsndfileError subclasses RuntimeError
        logger.debug("Cannot decode clip with soundfile: %s", exc)
        return None
    return data, sample_rate


def clip_duration(audio: bytes) -> float | None:
    """Duration of an encoded clip in seconds, or None if undecodable."""
    decoded = read_clip(audio)
    if decoded is None:
        return None
    data, sample_rate = decoded
    return len(data) / sample_rate


def clip_to_duration(audio: bytes, max_seconds: float) -> bytes:
    """Trim an encoded clip to at most ``max_seconds``.

    The clip is re-encoded in its original container and subtype. Clips that
    are already short enough, or that soundfile cannot decode, are returned
    unchanged.
    """
    if not audio:
        return audio
    try:
        with sf.SoundFile(io.BytesIO(audio)) as src:
            max_frames = int(max_seconds * src.samplerate)
            if src.frames <= max_frames:
                return audio
            data = src.read(frames=max_frames, dtype="float32", always_2d=True)
            sample_rate, fmt, subtype = src.samplerate, src.format, src.subtype
    except RuntimeError as exc:
        logger.debug("Passing through undecodable clip: %s", exc)
        return audio

    out = io.BytesIO()
    sf.write(out, data, sample_rate, format=fmt, subtype=subtype)
    logger.info("Trimmed clip to %.1f s", max_seconds)
    return out.getvalue()


def frequency_bars(samples: np.ndarray, bins: int = 32) -> np.ndarray:
    """Reduce a clip's magnitude spectrum to ``bins`` bars in [0, 1].

    Args:
        samples: Float samples, either 1-D or ``(frames, channels)``.
        bins: Number of bars to return.

    Returns:
        Float32 array of length ``bins``; all zeros for silence or empty input.
    """
    if bins <= 0:
        raise ValueError(f"bins must be positive, got {bins}")
    mono = samples.mean(axis=1) if samples.ndim > 1 else samples
    if mono.size == 0:
        return np.zeros(bins, dtype=np.float32)

    spectrum = np.abs(np.fft.rfft(mono))
    bars = np.array(
        [chunk.mean() if chunk.size else 0.0 for chunk in np.array_split(spectrum, bins)],
        dtype=np.float32,
    )
    peak = bars.max()
    if peak <= 0:
        return np.zeros(bins, dtype=np.float32)
    return bars / peak
