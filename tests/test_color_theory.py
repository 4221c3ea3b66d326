"""Color harmony scoring and verdict tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models.color_theory import (
    COMPLEMENTARY_COLORS,
    analyze_color_harmony,
    do_colors_clash,
    extract_base_color,
    is_neutral_color,
    suggest_matching_colors,
)


@pytest.mark.parametrize("colors", [[], ["red"], ["Light Pink"]])
def test_zero_or_one_color_is_always_harmonious(colors) -> None:
    result = analyze_color_harmony(colors)
    assert result.is_harmonious is True
    assert result.score == 100


def test_red_and_green_clash() -> None:
    result = analyze_color_harmony(["red", "green"])
    assert result.is_harmonious is False
    assert result.score == 70
    assert result.message == "These colors might clash"
    assert "neutral" in result.suggestion


def test_black_and_navy_is_classic_neutral() -> None:
    result = analyze_color_harmony(["black", "navy"])
    assert result.is_harmonious is True
    assert result.score == 100
    assert result.message == "Classic neutral combination!"


def test_verdict_precedence_messages() -> None:
    assert analyze_color_harmony(["blue", "orange"]).message == "Great complementary color match!"
    assert analyze_color_harmony(["blue", "teal"]).message == "Harmonious color combination!"
    assert analyze_color_harmony(["red", "dark red"]).message == "Harmonious color combination!"
    assert analyze_color_harmony(["red", "black"]).message == "Good mix with neutrals!"
    assert analyze_color_harmony(["yellow", "teal"]).message == "Nice color combination!"


def test_score_is_clamped_to_valid_range() -> None:
    many_clashes = analyze_color_harmony(["red", "pink", "orange", "purple"])
    assert many_clashes.score == 0
    assert many_clashes.is_harmonious is False

    many_bonuses = analyze_color_harmony(["blue", "orange", "coral", "peach"])
    assert many_bonuses.score == 100


def test_score_does_not_depend_on_order() -> None:
    colors = ["red", "green", "navy", "pink"]
    assert analyze_color_harmony(colors).score == analyze_color_harmony(list(reversed(colors))).score


def test_base_color_prefers_neutrals() -> None:
    assert extract_base_color("Navy Blue") == "navy"
    assert extract_base_color("  Light Pink ") == "pink"
    assert extract_base_color("teal") == "teal"
    assert is_neutral_color("charcoal grey")


def test_neutrals_never_clash() -> None:
    assert do_colors_clash("red", "pink") is True
    assert do_colors_clash("red", "black") is False
    assert do_colors_clash("denim", "orange") is False


def test_suggest_matching_colors() -> None:
    assert suggest_matching_colors([]) == ["black", "white", "gray"]
    assert suggest_matching_colors(["red"]) == ["black", "white", "gray", "green", "teal"]
    assert "black" not in suggest_matching_colors(["black", "red"])


def test_relation_tables_are_read_only() -> None:
    with pytest.raises(TypeError):
        COMPLEMENTARY_COLORS["red"] = ("blue",)  # type: ignore[index]
