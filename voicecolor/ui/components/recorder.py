"""
Recorder component: captures one clip and hands it to the quiz session.

The browser does the microphone capture (``st.audio_input``); this module
applies the countdown to the captured clip and keeps a voice print of it.
"""

import logging

import streamlit as st

from voicecolor.services.audio import clip_duration, clip_to_duration, frequency_bars, read_clip
from voicecolor.services.session import QuizSession

logger = logging.getLogger(__name__)

READING_SCRIPT = (
    "こんにちは。今日はとても良い天気ですね。"
    "私の声から、どんな色が見えてくるでしょうか。"
)


def _widget_key() -> str:
    # A fresh key after each reset clears the previous clip from the widget
    return f"voice_input_{st.session_state.recorder_generation}"


def render_recorder(quiz: QuizSession, duration: int) -> None:
    """Show the reading script and the microphone input."""
    st.markdown("#### 次の文章を読み上げてください")
    st.info(READING_SCRIPT)
    st.caption(
        f"録音は最大{duration}秒です。超えた部分は自動的にカットされます。"
        "マイクへのアクセスを許可してください。"
    )

    audio = st.audio_input("録音する", key=_widget_key())
    if audio is None:
        return

    audio_bytes = audio.getvalue()
    if not audio_bytes:
        st.warning("録音できませんでした。マイクの設定を確認してください。")
        return

    mime_type = audio.type or "audio/wav"
    clip = clip_to_duration(audio_bytes, duration)
    decoded = read_clip(clip)
    st.session_state.voice_print = (
        frequency_bars(decoded[0]).tolist() if decoded is not None else None
    )

    recording = quiz.start_recording(mime_type=mime_type)
    with recording, st.spinner("音声を解析中... AIが声のトーンや響きからカラータイプを診断しています"):
        recording.write(clip)
        seconds = clip_duration(audio_bytes)
        if seconds is not None:
            # Reaching zero stops the recording and runs the analysis
            recording.timer.advance(seconds)
        recording.stop()
    st.rerun()


def reset_recorder() -> None:
    st.session_state.recorder_generation += 1
    st.session_state.voice_print = None
