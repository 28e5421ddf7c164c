"""
Voice analysis relay endpoint.

Receives the recorded clip, forwards it to Gemini with the fixed 12-color
prompt and returns the model's JSON text unchanged.
"""

import logging

from fastapi import APIRouter, Depends, File, Response, UploadFile

from voicecolor.api.deps import get_voice_analyzer
from voicecolor.core.exceptions import MissingUploadError
from voicecolor.core.models import AnalysisResult, ErrorResponse
from voicecolor.services.analysis import VoiceColorAnalyzer
from voicecolor.services.llm.gemini import DEFAULT_AUDIO_MIME_TYPE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["analysis"])


@router.post(
    "/analyze",
    response_class=Response,
    responses={
        200: {"model": AnalysisResult, "content": {"application/json": {}}},
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def analyze_audio(
    audio: UploadFile | None = File(None),
    analyzer: VoiceColorAnalyzer = Depends(get_voice_analyzer),
) -> Response:
    """Analyze the voice in the ``audio`` upload.

    The body is the model's output after code-fence stripping; it is not
    validated against ``AnalysisResult``.
    """
    if audio is None:
        raise MissingUploadError("audio file")

    data = await audio.read()
    mime_type = audio.content_type or DEFAULT_AUDIO_MIME_TYPE
    logger.info("Analyzing %s (%d bytes, %s)", audio.filename, len(data), mime_type)

    text = await analyzer.analyze(data, mime_type)
    return Response(content=text, media_type="application/json")
