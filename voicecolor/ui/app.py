"""
VoiceColor Streamlit UI: main entry point.

Run with: ``streamlit run voicecolor/ui/app.py``
"""

# ---------------------------------------------------------------------------
# Ensure project root is on sys.path so ``from voicecolor.xxx`` imports work.
# Streamlit replaces sys.path[0] with the script directory (voicecolor/ui/).
# ---------------------------------------------------------------------------
import sys  # noqa: E402
from pathlib import Path  # noqa: E402

_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

import streamlit as st  # noqa: E402

from voicecolor.core.config import get_settings  # noqa: E402
from voicecolor.core.models import AppState  # noqa: E402
from voicecolor.services.share import SHARE_PARAM  # noqa: E402
from voicecolor.services.session import QuizSession  # noqa: E402
from voicecolor.ui.api_client import get_api_client  # noqa: E402
from voicecolor.ui.components.recorder import render_recorder, reset_recorder  # noqa: E402
from voicecolor.ui.components.result_view import render_result  # noqa: E402

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------
st.set_page_config(
    page_title="声診断 | VoiceColor",
    page_icon="\U0001f3a4",
    layout="wide",
)

_settings = get_settings()

# ---------------------------------------------------------------------------
# Session state defaults
# ---------------------------------------------------------------------------
_DEFAULTS = {
    "api_base_url": _settings.backend_url,
    "recorder_generation": 0,
    "voice_print": None,
}

for key, value in _DEFAULTS.items():
    if key not in st.session_state:
        st.session_state[key] = value


def _client():
    return get_api_client(
        st.session_state.api_base_url,
        analyze_timeout=_settings.analyze_timeout,
        strict_contract=_settings.strict_contract,
    )


def _analyze(audio: bytes, mime_type: str):
    extension = mime_type.split("/")[-1].split(";")[0] or "webm"
    return _client().analyze_voice(audio, filename=f"voice.{extension}", mime_type=mime_type)


if "quiz" not in st.session_state:
    st.session_state.quiz = QuizSession(_analyze, duration=_settings.recording_duration_seconds)

quiz: QuizSession = st.session_state.quiz


def _reset() -> None:
    quiz.reset()
    reset_recorder()


# ---------------------------------------------------------------------------
# Shared result in the URL: show it, then drop the parameter
# ---------------------------------------------------------------------------
if SHARE_PARAM in st.query_params:
    if quiz.state == AppState.idle:
        quiz.restore_shared(st.query_params[SHARE_PARAM])
    del st.query_params[SHARE_PARAM]

# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------
with st.sidebar:
    st.title("\U0001f3a8 VoiceColor")
    st.caption("声のトーンから12色のパーソナリティを診断します")
    st.divider()
    st.session_state.api_base_url = st.text_input(
        "Backend API URL",
        value=st.session_state.api_base_url,
        help="URL of the VoiceColor relay (default: http://localhost:8000)",
    )
    _conn_ok, _conn_msg = _client().check_connection()
    if _conn_ok:
        st.success(f"Backend: {_conn_msg}")
    else:
        st.error(f"Backend: {_conn_msg}")

# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------
st.title("声診断")

if quiz.state == AppState.idle:
    render_recorder(quiz, _settings.recording_duration_seconds)
elif quiz.state == AppState.result and quiz.result is not None:
    render_result(
        quiz.result,
        share_base_url=_settings.share_base_url,
        client=_client(),
        on_reset=_reset,
        voice_print=st.session_state.voice_print,
    )
elif quiz.state == AppState.error:
    st.error("エラーが発生しました")
    st.write(quiz.error_message)
    st.button("最初に戻る", on_click=_reset, type="primary")
elif quiz.state == AppState.recording:
    # A rerun interrupted the previous run mid-recording; start over
    quiz.cancel_recording()
    reset_recorder()
    st.rerun()
else:
    st.info("処理中です...")
