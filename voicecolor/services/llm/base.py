"""
Abstract base class for LLM providers.

Every multimodal provider must implement this interface, keeping the voice
analysis logic independent of the upstream API it talks to.
"""

from abc import ABC, abstractmethod


class BaseLLM(ABC):
    """Interface that every LLM provider must implement."""

    @abstractmethod
    async def generate_from_audio(
        self,
        audio: bytes,
        mime_type: str,
        prompt: str,
        **kwargs,
    ) -> str:
        """Generate a text response about an audio clip.

        Args:
            audio: Raw encoded audio (webm, wav, ogg, ...).
            mime_type: MIME type describing ``audio``.
            prompt: Instruction sent alongside the audio.
            **kwargs: Provider-specific options (``system``,
                ``response_schema``, ``temperature``, ...).

        Returns:
            The model's raw text response.
        """
