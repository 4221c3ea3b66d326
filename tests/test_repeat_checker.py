"""Repeat detection tests."""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path
from typing import List

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.repeat_checker import check_outfit_repeat, get_repeat_analysis, jaccard_similarity
from models.clothing_item import ClothingItem
from models.outfit import Outfit

TODAY = date(2025, 5, 20)


@pytest.fixture()
def wardrobe() -> List[ClothingItem]:
    rows = [
        ("t1", "tops"),
        ("t2", "tops"),
        ("b1", "bottoms"),
        ("b2", "bottoms"),
        ("s1", "shoes"),
        ("s2", "shoes"),
        ("a1", "accessories"),
    ]
    return [
        ClothingItem(item_id=item_id, image="", category=category, color="black", season=["all-season"])
        for item_id, category in rows
    ]


def _outfit(days_ago: int, items: List[str]) -> Outfit:
    return Outfit(outfit_id=f"o-{days_ago}", date=TODAY - timedelta(days=days_ago), items=items)


@pytest.mark.parametrize(
    "a,b",
    [({"x", "y"}, {"y", "z"}), (set(), {"a"}), ({"a", "b", "c"}, {"a"}), (set(), set())],
)
def test_jaccard_is_symmetric(a, b) -> None:
    assert jaccard_similarity(a, b) == jaccard_similarity(b, a)
    assert 0.0 <= jaccard_similarity(a, b) <= 1.0


def test_jaccard_values() -> None:
    assert jaccard_similarity([], []) == 0.0
    assert jaccard_similarity(["a", "b", "c"], ["a", "b", "c", "d"]) == 0.75


def test_exact_repeat_three_days_ago(wardrobe) -> None:
    past = [_outfit(3, ["s1", "b1", "t1"])]
    warning = check_outfit_repeat(["t1", "b1", "s1"], TODAY, past, wardrobe)

    assert warning.kind == "exact"
    assert warning.has_warning is True
    assert warning.days_ago == 3
    assert warning.message == "You wore this exact outfit 3 days ago"


def test_exact_repeat_yesterday_uses_singular(wardrobe) -> None:
    warning = check_outfit_repeat(["t1", "b1"], TODAY, [_outfit(1, ["t1", "b1"])], wardrobe)
    assert warning.message == "You wore this exact outfit 1 day ago"


def test_similar_outfit(wardrobe) -> None:
    past = [_outfit(5, ["t1", "b1", "s1"])]
    warning = check_outfit_repeat(["t1", "b1", "s1", "a1"], TODAY, past, wardrobe)
    assert warning.kind == "similar"
    assert warning.days_ago == 5


def test_similar_prefers_most_recent_match(wardrobe) -> None:
    past = [_outfit(6, ["t1", "b1", "s1"]), _outfit(4, ["t1", "b1", "s1", "a1", "t2"])]
    warning = check_outfit_repeat(["t1", "b1", "s1", "a1"], TODAY, past, wardrobe)
    assert warning.kind == "similar"
    assert warning.days_ago == 4


def test_single_item_worn_yesterday(wardrobe) -> None:
    past = [_outfit(1, ["t1", "b1", "s1"])]
    warning = check_outfit_repeat(["t2", "b1", "s2"], TODAY, past, wardrobe)

    assert warning.kind == "item"
    assert warning.affected_items == ["b1"]
    assert warning.message == "You wore this bottoms yesterday"


def test_several_items_worn_recently(wardrobe) -> None:
    past = [_outfit(2, ["t1", "b1", "s1", "a1"])]
    warning = check_outfit_repeat(["t1", "b1", "s2"], TODAY, past, wardrobe)

    assert warning.kind == "item"
    assert warning.days_ago == 2
    assert warning.message == "You wore some items 2 days ago"


def test_disjoint_items_are_fresh(wardrobe) -> None:
    past = [_outfit(1, ["t1", "b1", "s1"]), _outfit(2, ["a1"])]
    warning = check_outfit_repeat(["t2", "b2", "s2"], TODAY, past, wardrobe)
    assert warning.kind == "none"
    assert warning.has_warning is False
    assert warning.message == "Fresh combination!"


def test_ignores_target_date_old_future_and_empty_outfits(wardrobe) -> None:
    candidate = ["t1", "b1", "s1"]
    past = [
        _outfit(0, candidate),
        _outfit(8, candidate),
        _outfit(-2, candidate),
        Outfit(outfit_id="empty", date=TODAY - timedelta(days=1), items=[]),
    ]
    assert check_outfit_repeat(candidate, TODAY, past, wardrobe).kind == "none"


def test_empty_candidate_has_no_warning(wardrobe) -> None:
    warning = check_outfit_repeat([], TODAY, [_outfit(1, ["t1"])], wardrobe)
    assert warning.kind == "none"
    assert warning.message == ""


def test_repeat_analysis_lists_recent_wear(wardrobe) -> None:
    past = [
        _outfit(10, ["t1", "b2"]),
        _outfit(3, ["t1", "b1", "s1"]),
        _outfit(20, ["s2"]),
    ]
    analysis = get_repeat_analysis(["t1", "b1", "s1", "missing"], TODAY, past, wardrobe)

    assert analysis.warning.kind == "exact"
    assert [(wear.item_id, wear.days_ago) for wear in analysis.recent_wear_dates] == [
        ("t1", 3),
        ("b1", 3),
        ("s1", 3),
    ]
    assert any("swapping" in suggestion for suggestion in analysis.suggestions)


def test_repeat_analysis_names_category_for_item_repeat(wardrobe) -> None:
    past = [_outfit(1, ["s1"]), _outfit(12, ["b2"])]
    analysis = get_repeat_analysis(["t2", "b2", "s1"], TODAY, past, wardrobe)

    assert analysis.warning.kind == "item"
    assert analysis.suggestions == ["Try using a different shoes you haven't worn recently"]
    assert [(wear.item_id, wear.days_ago) for wear in analysis.recent_wear_dates] == [("s1", 1), ("b2", 12)]
