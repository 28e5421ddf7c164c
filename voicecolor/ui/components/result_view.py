"""
Result view: summary, radar chart, detail list and share actions.
"""

import html
import logging
from collections.abc import Callable

import streamlit as st

from voicecolor.core.models import MAX_SCORE, MIN_SCORE, AnalysisResult, is_hex_color
from voicecolor.services.chart import FALLBACK_COLOR, build_radar_figure, render_snapshot_png
from voicecolor.services.share import build_share_url, share_qr_png
from voicecolor.ui.api_client import APIClient, APIError

logger = logging.getLogger(__name__)


def detail_line(label: str, sub_label: str, score: float, color_code: str) -> str:
    """HTML for one detail row; model and share-link text is escaped."""
    color = color_code if is_hex_color(color_code) else FALLBACK_COLOR
    return (
        f"<span style='color:{color};font-weight:bold'>● {html.escape(label)}</span>"
        f" {html.escape(sub_label)} | <b>{score}</b>"
    )


def _render_detail_list(result: AnalysisResult) -> None:
    with st.container(height=480):
        for param in result.parameters:
            st.markdown(
                detail_line(param.label, param.sub_label, param.score, param.color_code),
                unsafe_allow_html=True,
            )
            st.progress(int(min(max(param.score, MIN_SCORE), MAX_SCORE)))
            st.caption(param.description)


def _render_qr(url: str, caption: str) -> None:
    try:
        png = share_qr_png(url)
    except ValueError:
        # Too much data for a version 40 symbol; the URL is still shown as text
        st.caption("診断結果が大きいためQRコードを表示できません")
        return
    st.image(png, width=180)
    st.caption(caption)


def _render_share(result: AnalysisResult, share_base_url: str, client: APIClient) -> None:
    st.subheader("結果をシェア")
    share_url = build_share_url(result, share_base_url)
    st.text_input("共有URL", value=share_url)
    _render_qr(share_url, "このQRコードを読み取ると同じ診断結果が表示されます")

    if st.button("画像をアップロードして共有", key="upload_snapshot"):
        with st.spinner("画像を作成中..."):
            png = render_snapshot_png(result)
            try:
                url = client.upload_snapshot(png)
            except APIError as exc:
                logger.warning("Snapshot upload failed: %s", exc.message)
                st.error(f"アップロードに失敗しました: {exc.message}")
                return
        st.image(png)
        _render_qr(url, "このQRコードから画像を表示できます")
        st.markdown(f"このURLから同じ診断結果の画像を表示できます: [{url}]({url})")


def render_result(
    result: AnalysisResult,
    share_base_url: str,
    client: APIClient,
    on_reset: Callable[[], None],
    voice_print: list[float] | None = None,
) -> None:
    """Render a finished analysis."""
    st.header("診断結果")
    st.write(result.summary)

    violations = result.contract_violations()
    if violations:
        st.caption("⚠️ 一部の診断データが不完全です: " + "; ".join(violations))

    chart_col, detail_col = st.columns(2)
    with chart_col:
        st.pyplot(build_radar_figure(result))
        if voice_print:
            st.caption("あなたの声のスペクトル")
            st.bar_chart(voice_print, height=120)
    with detail_col:
        _render_detail_list(result)

    _render_share(result, share_base_url, client)
    st.button("もう一度診断する", on_click=on_reset, type="primary", key="reset")
