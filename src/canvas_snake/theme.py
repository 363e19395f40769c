"""Colour palettes for the dark and light themes."""

from __future__ import annotations

import enum
from dataclasses import asdict, dataclass


class Theme(enum.Enum):
    DARK = "dark"
    LIGHT = "light"

    def toggled(self) -> Theme:
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


@dataclass(frozen=True)
class Palette:
    """The six colours used to draw a frame, as CSS colour strings."""

    background: str
    grid: str
    food: str
    snake: str
    game_over_overlay: str
    game_over_text: str

    def to_dict(self) -> dict:
        return asdict(self)


PALETTES: dict[Theme, Palette] = {
    Theme.DARK: Palette(
        background="#0f172a",
        grid="rgba(255,255,255,0.05)",
        food="#ef4444",
        snake="#22c55e",
        game_over_overlay="rgba(0,0,0,0.5)",
        game_over_text="#e5e7eb",
    ),
    Theme.LIGHT: Palette(
        background="#f1f5f9",
        grid="rgba(0,0,0,0.1)",
        food="#dc2626",
        snake="#16a34a",
        game_over_overlay="rgba(255,255,255,0.7)",
        game_over_text="#1e293b",
    ),
}


def palette_for(theme: Theme) -> Palette:
    return PALETTES[theme]
