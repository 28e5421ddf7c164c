"""
Share codec for analysis results.

A result is serialized to JSON and compressed with lz-string's URI-safe
encoding, the same format the browser client puts in ``?data=`` share
links, so links produced on either side open on the other. Share URLs can
also be rendered as QR codes for scanning from another device.
"""

import io
import json
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import segno
from lzstring import LZString

from voicecolor.core.models import AnalysisResult

logger = logging.getLogger(__name__)

SHARE_PARAM = "data"

_lz = LZString()


def _to_utf16_units(text: str) -> str:
    """Split astral characters into surrogate pairs, the way JavaScript strings hold them.

    lz-string works on UTF-16 code units; without this, characters outside the
    BMP (emoji) would not survive compression.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    return "".join(
        chr(int.from_bytes(data[i : i + 2], "little")) for i in range(0, len(data), 2)
    )


def _from_utf16_units(text: str) -> str:
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")


def compress_result(result: AnalysisResult) -> str:
    """Encode ``result`` as a URL-safe compressed token."""
    payload = json.dumps(result.to_wire(), ensure_ascii=False, separators=(",", ":"))
    return _lz.compressToEncodedURIComponent(_to_utf16_units(payload))


def decompress_result(token: str | None) -> AnalysisResult | None:
    """Decode a share token.

    Returns:
        The result, or None if the token is empty, corrupted, truncated or
        holds anything other than an analysis result. Never raises.
    """
    if not token:
        return None
    try:
        payload = _lz.decompressFromEncodedURIComponent(token)
        if not payload:
            return None
        return AnalysisResult.model_validate(json.loads(_from_utf16_units(payload)))
    except Exception as exc:  # corrupted tokens fail in arbitrary ways inside lzstring
        logger.debug("Ignoring undecodable share token: %s", exc)
        return None


def build_share_url(result: AnalysisResult, base_url: str, param: str = SHARE_PARAM) -> str:
    """Return ``base_url`` with the result token set as query parameter ``param``.

    Other query parameters are kept; an existing ``param`` is replaced.
    """
    parts = urlsplit(base_url)
    query = [(k, v) for k, v in parse_qsl(parts.query, keep_blank_values=True) if k != param]
    query.append((param, compress_result(result)))
    return urlunsplit(parts._replace(query=urlencode(query)))


def share_qr_png(url: str, scale: int = 6) -> bytes:
    """Encode ``url`` as a QR code PNG.

    Low error correction leaves the most room for long result tokens.

    Raises:
        ValueError: If ``url`` does not fit in a version 40 symbol.
    """
    out = io.BytesIO()
    qr = segno.make(url, error="l", micro=False, boost_error=False)
    qr.save(out, kind="png", scale=scale, border=2)
    return out.getvalue()
