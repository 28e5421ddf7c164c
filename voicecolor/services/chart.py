"""Radar chart rendering for analysis results.

Uses matplotlib's object-oriented ``Figure`` API (no pyplot global state)
so charts can be built from Streamlit reruns and request handlers alike.
"""

import io
import textwrap

import numpy as np
from matplotlib.figure import Figure

from voicecolor.core.models import MAX_SCORE, MIN_SCORE, AnalysisResult, is_hex_color

FALLBACK_COLOR = "#666666"
FILL_COLOR = "#8B5CF6"
# First installed font wins; CJK fonts are needed for the Japanese labels
FONT_FAMILIES = ["Noto Sans CJK JP", "IPAexGothic", "Hiragino Sans", "DejaVu Sans"]


def _axis_color(color_code: str) -> str:
    return color_code if is_hex_color(color_code) else FALLBACK_COLOR


def draw_radar(ax, result: AnalysisResult) -> None:
    """Draw one axis per parameter onto a polar ``ax``.

    Scores are clamped to [0, 100] for drawing only; the result itself is
    left untouched. An empty parameter list leaves a blank grid.
    """
    params = result.parameters
    ax.set_ylim(MIN_SCORE, MAX_SCORE)
    ax.set_yticks([20, 40, 60, 80, 100])
    ax.set_yticklabels([])
    if not params:
        ax.set_xticks([])
        return

    angles = np.linspace(0, 2 * np.pi, len(params), endpoint=False)
    scores = np.clip([p.score for p in params], MIN_SCORE, MAX_SCORE)

    # Close the polygon
    loop_angles = np.append(angles, angles[0])
    loop_scores = np.append(scores, scores[0])
    ax.plot(loop_angles, loop_scores, color=FILL_COLOR, linewidth=2)
    ax.fill(loop_angles, loop_scores, color=FILL_COLOR, alpha=0.3)
    ax.scatter(angles, scores, c=[_axis_color(p.color_code) for p in params], zorder=3)

    ax.set_xticks(angles)
    ax.set_xticklabels([p.label for p in params], fontfamily=FONT_FAMILIES, fontsize=9)
    for tick, param in zip(ax.get_xticklabels(), params):
        tick.set_color(_axis_color(param.color_code))
        tick.set_fontweight("bold")


def build_radar_figure(result: AnalysisResult, size: float = 6.0) -> Figure:
    """Return a square figure holding the radar chart for ``result``."""
    fig = Figure(figsize=(size, size))
    ax = fig.add_subplot(projection="polar")
    draw_radar(ax, result)
    fig.tight_layout()
    return fig


def render_snapshot_png(result: AnalysisResult, dpi: int = 120) -> bytes:
    """Render the summary and radar chart to PNG bytes for sharing."""
    fig = Figure(figsize=(6.0, 7.5))
    summary = "\n".join(textwrap.wrap(result.summary, width=36)) or " "
    fig.suptitle(summary, fontsize=11, fontfamily=FONT_FAMILIES, y=0.97)
    ax = fig.add_axes((0.12, 0.05, 0.76, 0.7), projection="polar")
    draw_radar(ax, result)

    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=dpi, facecolor="white")
    return buf.getvalue()
