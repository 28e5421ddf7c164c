"""
Voice color analysis relay.

Sends one audio clip to the configured LLM with the fixed 12-color prompt
and hands back the model's JSON text after removing code fences. The text
is returned as-is; contract problems are only logged.
"""

import json
import logging

from pydantic import ValidationError

from voicecolor.core.models import AnalysisResult
from voicecolor.core.utils import strip_code_fences
from voicecolor.services.analysis.prompts import (
    ANALYSIS_PROMPT,
    RESPONSE_SCHEMA,
    SYSTEM_INSTRUCTION,
)
from voicecolor.services.llm.base import BaseLLM

logger = logging.getLogger(__name__)


class VoiceColorAnalyzer:
    """Relays audio to an LLM and returns the raw analysis JSON text."""

    def __init__(self, llm: BaseLLM) -> None:
        self._llm = llm

    async def analyze(self, audio: bytes, mime_type: str) -> str:
        """Analyze one clip.

        Args:
            audio: Encoded audio bytes as uploaded by the client.
            mime_type: The upload's MIME type.

        Returns:
            The model's JSON text with any markdown fences removed.
        """
        raw = await self._llm.generate_from_audio(
            audio,
            mime_type,
            ANALYSIS_PROMPT,
            system=SYSTEM_INSTRUCTION,
            response_schema=RESPONSE_SCHEMA,
        )
        text = strip_code_fences(raw)
        self._log_contract(text)
        return text

    @staticmethod
    def _log_contract(text: str) -> None:
        """Log, never enforce, deviations from the requested shape."""
        try:
            result = AnalysisResult.model_validate(json.loads(text))
        except (json.JSONDecodeError, ValidationError) as exc:
            logger.warning("Model output is not a valid analysis result: %s", exc)
            return
        violations = result.contract_violations()
        if violations:
            logger.warning("Model output breaks the color contract: %s", "; ".join(violations))
