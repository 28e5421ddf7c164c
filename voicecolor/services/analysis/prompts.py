"""
Prompt text and response schema sent with every voice analysis.

The model is told to ignore what is said and judge only how it is said,
then to score each of the 12 palette colors.
"""

from voicecolor.services.analysis.palette import COLOR_PALETTE


def _definitions() -> str:
    return "\n".join(
        f"{index}. {c.name} ({c.label}): {c.trait} ({c.trait_en}) - {c.keywords}."
        for index, c in enumerate(COLOR_PALETTE, start=1)
    )


def _label_lines() -> str:
    return "\n".join(
        f"- {c.name}: {c.color_code} ({c.label} - {c.trait})" for c in COLOR_PALETTE
    )


SYSTEM_INSTRUCTION = f"""\
You are an expert Voice Analyst and Color Therapist.
Your task is to analyze the audio input (tone, pitch, speed, pauses, emotion, energy) \
and map it to a specific 12-color personality framework.
IMPORTANT: Everyone reads the exact same script. Do NOT evaluate the content of the \
speech (words, meaning). Focus ONLY on the non-verbal qualities of the voice \
(how they say it).

The 12 Colors and their definitions are:
{_definitions()}

Listen to the voice.
- Is it fast and energetic? (Red/Yellow)
- Is it deep and calm? (Navy/Violet)
- Is it warm and welcoming? (Orange/Coral/Magenta)
- Is it clear and articulate? (Blue/Gold)

Assign a score from 0 to 100 for EACH of the 12 categories based on the voice qualities.
Provide a general summary of the voice type.
The description for each parameter should briefly explain why the voice reflects this trait.
"""

ANALYSIS_PROMPT = f"""\
Analyze this voice. Return the result in Japanese. Ensure the output strictly follows \
the JSON schema.
The parameters array MUST contain exactly 12 items corresponding to the 12 colors listed below.
Use these exact labels and approximate hex codes:
{_label_lines()}
"""

_PARAMETER_FIELDS = ("id", "label", "subLabel", "score", "description", "colorCode")

RESPONSE_SCHEMA: dict = {
    "type": "OBJECT",
    "properties": {
        "summary": {"type": "STRING"},
        "parameters": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    field: {"type": "NUMBER" if field == "score" else "STRING"}
                    for field in _PARAMETER_FIELDS
                },
                "required": list(_PARAMETER_FIELDS),
            },
        },
    },
    "required": ["summary", "parameters"],
}
