"""Lightweight color harmony helpers for outfit feedback.

Colors are free-text labels ("navy blue", "Light Pink"). Each label collapses to
a base color by substring match, neutrals first, and pairs of base colors are
compared against small fixed relation tables.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# Order matters: "navy blue" must resolve to navy, not blue.
NEUTRAL_COLORS: Tuple[str, ...] = (
    "black",
    "white",
    "gray",
    "grey",
    "beige",
    "cream",
    "tan",
    "brown",
    "navy",
    "denim",
    "khaki",
    "ivory",
    "charcoal",
)
_NEUTRAL_SET: FrozenSet[str] = frozenset(NEUTRAL_COLORS)

PRIMARY_COLORS: Tuple[str, ...] = ("red", "blue", "yellow", "green", "orange", "purple", "pink")


def _relation(table: dict) -> Mapping[str, Tuple[str, ...]]:
    return MappingProxyType({color: tuple(related) for color, related in table.items()})


COMPLEMENTARY_COLORS = _relation(
    {
        "red": ("green", "teal", "turquoise"),
        "blue": ("orange", "coral", "peach"),
        "yellow": ("purple", "violet", "lavender"),
        "green": ("red", "pink", "magenta"),
        "orange": ("blue", "navy", "cyan"),
        "purple": ("yellow", "gold", "lime"),
        "pink": ("green", "mint", "olive"),
    }
)

ANALOGOUS_COLORS = _relation(
    {
        "red": ("orange", "pink", "burgundy", "coral"),
        "blue": ("purple", "teal", "cyan", "navy"),
        "yellow": ("orange", "gold", "lime", "cream"),
        "green": ("teal", "lime", "olive", "mint"),
        "orange": ("red", "coral", "peach", "gold"),
        "purple": ("pink", "blue", "lavender", "violet"),
        "pink": ("red", "coral", "rose", "magenta"),
    }
)

CLASHING_COLORS = _relation(
    {
        "red": ("pink", "orange", "purple"),
        "green": ("blue", "red"),
        "yellow": ("green", "orange"),
        "purple": ("red", "green"),
        "orange": ("red", "purple"),
        "pink": ("red", "orange", "yellow"),
    }
)

CLASH_PENALTY = 30
COMPLEMENTARY_BONUS = 10
ANALOGOUS_BONUS = 5
MONOCHROMATIC_BONUS = 5


@dataclass(frozen=True)
class ColorAnalysis:
    """Represents the outcome of a harmony evaluation."""

    is_harmonious: bool
    message: str
    score: int
    suggestion: Optional[str] = None


def extract_base_color(color: str) -> str:
    """Collapse a free-text color label to its base color."""

    label = color.strip().lower()
    for neutral in NEUTRAL_COLORS:
        if neutral in label:
            return neutral
    for primary in PRIMARY_COLORS:
        if primary in label:
            return primary
    return label


def is_neutral_color(color: str) -> bool:
    return extract_base_color(color) in _NEUTRAL_SET


def _related(table: Mapping[str, Tuple[str, ...]], color1: str, color2: str) -> bool:
    base1, base2 = extract_base_color(color1), extract_base_color(color2)
    return base2 in table.get(base1, ()) or base1 in table.get(base2, ())


def are_complementary(color1: str, color2: str) -> bool:
    return _related(COMPLEMENTARY_COLORS, color1, color2)


def are_analogous(color1: str, color2: str) -> bool:
    return _related(ANALOGOUS_COLORS, color1, color2)


def do_colors_clash(color1: str, color2: str) -> bool:
    """Return True when two colors clash. Neutrals never clash."""

    if is_neutral_color(color1) or is_neutral_color(color2):
        return False
    return _related(CLASHING_COLORS, color1, color2)


def are_monochromatic(color1: str, color2: str) -> bool:
    return extract_base_color(color1) == extract_base_color(color2)


def analyze_color_harmony(colors: Sequence[str]) -> ColorAnalysis:
    """Score a set of outfit colors and return a single verdict message."""

    colors = list(colors)
    if not colors:
        return ColorAnalysis(is_harmonious=True, message="No colors to analyze", score=100)
    if len(colors) == 1:
        return ColorAnalysis(is_harmonious=True, message="Single color - looks great!", score=100)

    score = 100
    clashes = complementary = analogous = monochromatic = 0
    neutral_count = sum(1 for color in colors if is_neutral_color(color))

    for i in range(len(colors)):
        for j in range(i + 1, len(colors)):
            color1, color2 = colors[i], colors[j]
            if do_colors_clash(color1, color2):
                clashes += 1
                score -= CLASH_PENALTY
            elif are_complementary(color1, color2):
                complementary += 1
                score += COMPLEMENTARY_BONUS
            elif are_analogous(color1, color2):
                analogous += 1
                score += ANALOGOUS_BONUS
            elif are_monochromatic(color1, color2):
                monochromatic += 1
                score += MONOCHROMATIC_BONUS

    score = max(0, min(100, score))
    logger.debug(
        "harmony colors=%s clashes=%s complementary=%s analogous=%s monochromatic=%s score=%s",
        colors,
        clashes,
        complementary,
        analogous,
        monochromatic,
        score,
    )

    if clashes:
        return ColorAnalysis(
            is_harmonious=False,
            message="These colors might clash",
            suggestion="Try pairing with neutral colors like black, white, or beige",
            score=score,
        )
    if neutral_count == len(colors):
        return ColorAnalysis(is_harmonious=True, message="Classic neutral combination!", score=score)
    if complementary:
        return ColorAnalysis(is_harmonious=True, message="Great complementary color match!", score=score)
    if analogous or monochromatic:
        return ColorAnalysis(is_harmonious=True, message="Harmonious color combination!", score=score)
    if neutral_count:
        return ColorAnalysis(is_harmonious=True, message="Good mix with neutrals!", score=score)
    return ColorAnalysis(is_harmonious=True, message="Nice color combination!", score=score)


def suggest_matching_colors(colors: Sequence[str], limit: int = 5) -> List[str]:
    """Suggest colors that would work with the given outfit colors."""

    if not colors:
        return list(NEUTRAL_COLORS[:3])

    suggestions: List[str] = []

    def _add(color: str) -> None:
        if color not in suggestions:
            suggestions.append(color)

    for color in colors:
        base = extract_base_color(color)
        for neutral in NEUTRAL_COLORS[:3]:
            _add(neutral)
        for related in COMPLEMENTARY_COLORS.get(base, ()):
            _add(related)
        for related in ANALOGOUS_COLORS.get(base, ())[:2]:
            _add(related)

    present = {extract_base_color(color) for color in colors}
    return [color for color in suggestions if color not in present][:limit]


__all__ = [
    "ColorAnalysis",
    "NEUTRAL_COLORS",
    "PRIMARY_COLORS",
    "COMPLEMENTARY_COLORS",
    "ANALOGOUS_COLORS",
    "CLASHING_COLORS",
    "extract_base_color",
    "is_neutral_color",
    "are_complementary",
    "are_analogous",
    "do_colors_clash",
    "are_monochromatic",
    "analyze_color_harmony",
    "suggest_matching_colors",
]
