"""
Pydantic v2 request / response models used across the API and client layers.

The analysis payload keeps the camelCase field names produced by the model
(``subLabel``, ``colorCode``) on the wire while exposing snake_case
attributes in Python.
"""

import re
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

EXPECTED_PARAMETER_COUNT = 12
MIN_SCORE = 0
MAX_SCORE = 100

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def is_hex_color(value: str) -> bool:
    """Return True for ``#RGB`` / ``#RRGGBB`` strings."""
    return bool(_HEX_COLOR_RE.match(value or ""))


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------


class HealthResponse(BaseModel):
    """GET /health response."""

    status: str = "ok"
    version: str = "0.1.0"
    timestamp: datetime


class ErrorResponse(BaseModel):
    """JSON error envelope produced by the error handlers."""

    detail: str
    code: str
    timestamp: str


# ---------------------------------------------------------------------------
# Analysis
# ---------------------------------------------------------------------------


class ColorParameter(BaseModel):
    """One of the 12 color axes with the model's score and rationale."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    label: str
    sub_label: str = Field(alias="subLabel")
    # int | float keeps whole-number scores as ints so JSON round-trips are exact
    score: int | float
    description: str
    color_code: str = Field(alias="colorCode")


class AnalysisResult(BaseModel):
    """Structured result of one voice analysis.

    Parsing is deliberately lenient about the 12-color contract so that a
    result always survives a JSON round-trip unchanged. Use
    :meth:`contract_violations` to find out whether the model kept it.
    """

    model_config = ConfigDict(populate_by_name=True)

    summary: str
    parameters: list[ColorParameter] = Field(default_factory=list)

    def to_wire(self) -> dict:
        """Serialize with the camelCase keys used by the HTTP API."""
        return self.model_dump(by_alias=True)

    def contract_violations(self) -> list[str]:
        """List every way this result breaks the requested response shape.

        Checks the parameter count, id uniqueness, score range and color
        format. An empty list means the result is conforming.
        """
        problems: list[str] = []
        count = len(self.parameters)
        if count != EXPECTED_PARAMETER_COUNT:
            problems.append(
                f"expected {EXPECTED_PARAMETER_COUNT} parameters, got {count}"
            )

        seen: set[str] = set()
        for index, param in enumerate(self.parameters):
            if param.id in seen:
                problems.append(f"duplicate parameter id '{param.id}'")
            seen.add(param.id)
            if not MIN_SCORE <= param.score <= MAX_SCORE:
                problems.append(
                    f"parameters[{index}] ({param.id}) score {param.score} "
                    f"outside [{MIN_SCORE}, {MAX_SCORE}]"
                )
            if not is_hex_color(param.color_code):
                problems.append(
                    f"parameters[{index}] ({param.id}) colorCode "
                    f"'{param.color_code}' is not a hex color"
                )
        return problems

    def is_conforming(self) -> bool:
        return not self.contract_violations()


class UploadResponse(BaseModel):
    """POST /upload response."""

    url: str


# ---------------------------------------------------------------------------
# Client state
# ---------------------------------------------------------------------------


class AppState(StrEnum):
    """Client-visible states of a quiz session."""

    idle = "idle"
    recording = "recording"
    analyzing = "analyzing"
    result = "result"
    error = "error"
