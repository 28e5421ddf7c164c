"""The 12 fixed color categories scored by the voice analysis."""

from typing import NamedTuple


class ColorCategory(NamedTuple):
    id: str
    name: str  # English color name
    label: str  # Japanese display label
    trait: str  # Japanese trait name (subLabel)
    trait_en: str
    color_code: str
    keywords: str


COLOR_PALETTE: tuple[ColorCategory, ...] = (
    ColorCategory("red", "Red", "レッド", "行動力", "Action", "#EF4444",
                  "Energy, passion, movement, speed"),
    ColorCategory("coral", "Coral", "コーラル", "本能力", "Instinct", "#FB923C",
                  "Survival, nurturing, physical needs, warmth"),
    ColorCategory("orange", "Orange", "オレンジ", "感性", "Sensibility", "#F97316",
                  "Emotion, creativity, enjoyment, gut feelings"),
    ColorCategory("gold", "Gold", "ゴールド", "意志力", "Willpower", "#EAB308",
                  "Confidence, success, leadership, wisdom"),
    ColorCategory("yellow", "Yellow", "イエロー", "カリスマ性", "Charisma", "#FACC15",
                  "Uniqueness, humor, brightness, intellectual curiosity"),
    ColorCategory("lime_green", "Lime Green", "ライムグリーン", "影響力", "Influence", "#84CC16",
                  "New beginnings, growth, freshness, hope"),
    ColorCategory("green", "Green", "グリーン", "共感力", "Empathy", "#22C55E",
                  "Harmony, balance, peace, acceptance of others"),
    ColorCategory("aqua", "Aqua", "アクア", "想像力", "Imagination", "#06B6D4",
                  "Flow, adaptability, artistic creativity, right brain"),
    ColorCategory("blue", "Blue", "ブルー", "伝達力", "Communication", "#3B82F6",
                  "Expression, truth, speech, calm logic"),
    ColorCategory("navy", "Navy", "ネイビー", "洞察力", "Insight", "#1E3A8A",
                  "Intuition, depth, wisdom, seeing the essence"),
    ColorCategory("violet", "Violet", "バイオレット", "客観性", "Objectivity", "#8B5CF6",
                  "Healing, spirituality, detachment, high perspective"),
    ColorCategory("magenta", "Magenta", "マゼンダ", "受容力", "Receptivity", "#D946EF",
                  "Love, compassion, completeness, care"),
)
