"""
Phase Color Palette

Fixed semantic color categories for phases. Shared by the validator
(display_color fill-in) and the renderer (bar / header colors).

Unknown keys resolve to FALLBACK_KEY. This is a presentation default,
not a validation failure.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class ColorCategory:
    key: str
    color: str          # bar fill
    header_color: str   # phase header text


PALETTE: Dict[str, ColorCategory] = {
    category.key: category
    for category in (
        ColorCategory("planning", "#2196f3", "#1976d2"),
        ColorCategory("design", "#ff9800", "#f57c00"),
        ColorCategory("development", "#ff5722", "#ff5722"),
        ColorCategory("launch", "#00bfa5", "#00bfa5"),
        ColorCategory("testing", "#9c27b0", "#7b1fa2"),
        ColorCategory("research", "#607d8b", "#455a64"),
        ColorCategory("deployment", "#4caf50", "#388e3c"),
        ColorCategory("review", "#03a9f4", "#0288d1"),
    )
}

FALLBACK_KEY = "planning"
CATEGORY_KEYS: Tuple[str, ...] = tuple(PALETTE)


def resolve_category(color_key: str) -> ColorCategory:
    """Case-insensitive palette lookup with silent fallback."""
    return PALETTE.get((color_key or "").strip().lower(), PALETTE[FALLBACK_KEY])
