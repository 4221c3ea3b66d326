"""Outfit repeat detection against recent outfit history."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, Literal, Optional, Sequence

from models.clothing_item import ClothingItem
from models.outfit import Outfit

logger = logging.getLogger(__name__)

RepeatKind = Literal["exact", "similar", "item", "none"]

REPEAT_WINDOW_DAYS = 7
ITEM_WINDOW_DAYS = 3
ANALYSIS_WINDOW_DAYS = 14
SIMILARITY_THRESHOLD = 0.70


@dataclass(frozen=True)
class RepeatWarning:
    has_warning: bool
    kind: RepeatKind
    message: str
    days_ago: Optional[int] = None
    affected_items: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class RecentWear:
    item_id: str
    item: ClothingItem
    days_ago: int


@dataclass(frozen=True)
class RepeatAnalysis:
    warning: RepeatWarning
    recent_wear_dates: List[RecentWear]
    suggestions: List[str]


def jaccard_similarity(items1: Iterable[str], items2: Iterable[str]) -> float:
    """Intersection over union of two id collections; 0.0 when both are empty."""

    set1, set2 = set(items1), set(items2)
    union = set1 | set2
    if not union:
        return 0.0
    return len(set1 & set2) / len(union)


def _plural_days(days: int) -> str:
    return "day" if days == 1 else "days"


def _prior_outfits(current_date: date, past_outfits: Sequence[Outfit], window: int) -> List[Outfit]:
    """Non-empty outfits dated 1..window days before ``current_date``, most recent first."""

    recent = [
        outfit
        for outfit in past_outfits
        if outfit.items and 0 < (current_date - outfit.date).days <= window
    ]
    return sorted(recent, key=lambda outfit: outfit.date, reverse=True)


def _find_item(item_id: str, wardrobe_items: Sequence[ClothingItem]) -> Optional[ClothingItem]:
    return next((item for item in wardrobe_items if item.item_id == item_id), None)


def check_outfit_repeat(
    current_items: Sequence[str],
    current_date: date,
    past_outfits: Sequence[Outfit],
    wardrobe_items: Sequence[ClothingItem],
) -> RepeatWarning:
    """Warn when a candidate outfit repeats something worn recently.

    Checks run in order and the first hit wins: an identical item set in the
    last 7 days, an item set at least 70% similar in the last 7 days, then any
    single item worn in the last 3 days.
    """

    if not current_items:
        return RepeatWarning(has_warning=False, kind="none", message="")

    candidate = set(current_items)
    last_week = _prior_outfits(current_date, past_outfits, REPEAT_WINDOW_DAYS)

    for outfit in last_week:
        if set(outfit.items) == candidate:
            days_ago = (current_date - outfit.date).days
            return RepeatWarning(
                has_warning=True,
                kind="exact",
                message=f"You wore this exact outfit {days_ago} {_plural_days(days_ago)} ago",
                days_ago=days_ago,
            )

    for outfit in last_week:
        if jaccard_similarity(candidate, outfit.items) >= SIMILARITY_THRESHOLD:
            days_ago = (current_date - outfit.date).days
            return RepeatWarning(
                has_warning=True,
                kind="similar",
                message=f"You wore a very similar outfit {days_ago} {_plural_days(days_ago)} ago",
                days_ago=days_ago,
            )

    item_gaps: Dict[str, int] = {}
    for outfit in _prior_outfits(current_date, past_outfits, ITEM_WINDOW_DAYS):
        days_ago = (current_date - outfit.date).days
        for item_id in outfit.items:
            if item_id in candidate and (item_id not in item_gaps or days_ago < item_gaps[item_id]):
                item_gaps[item_id] = days_ago

    if item_gaps:
        affected = [item_id for item_id in current_items if item_id in item_gaps]
        closest_id = min(affected, key=lambda item_id: item_gaps[item_id])
        closest_days = item_gaps[closest_id]
        item = _find_item(closest_id, wardrobe_items)
        item_name = item.category if item else "item"
        if closest_days == 1:
            message = f"You wore this {item_name} yesterday"
        else:
            subject = "some items" if len(affected) > 1 else f"this {item_name}"
            message = f"You wore {subject} {closest_days} days ago"
        return RepeatWarning(
            has_warning=True,
            kind="item",
            message=message,
            days_ago=closest_days,
            affected_items=affected,
        )

    return RepeatWarning(has_warning=False, kind="none", message="Fresh combination!")


def _suggestions_for(warning: RepeatWarning, wardrobe_items: Sequence[ClothingItem]) -> List[str]:
    if warning.kind == "exact":
        return [
            "Try swapping out one or two items to freshen up the look",
            "Add an accessory to make it feel different",
        ]
    if warning.kind == "similar":
        return [
            "Consider choosing a different color for one of the items",
            "Mix it up with a different top or bottom",
        ]
    if warning.kind == "item":
        categories = [
            item.category
            for item in (_find_item(item_id, wardrobe_items) for item_id in warning.affected_items)
            if item is not None
        ]
        if categories:
            return [f"Try using a different {categories[0]} you haven't worn recently"]
    return []


def get_repeat_analysis(
    current_items: Sequence[str],
    current_date: date,
    past_outfits: Sequence[Outfit],
    wardrobe_items: Sequence[ClothingItem],
) -> RepeatAnalysis:
    """Repeat warning plus per-item recent wear dates and swap suggestions."""

    warning = check_outfit_repeat(current_items, current_date, past_outfits, wardrobe_items)
    last_two_weeks = [
        outfit
        for outfit in sorted(past_outfits, key=lambda outfit: outfit.date, reverse=True)
        if 0 < (current_date - outfit.date).days <= ANALYSIS_WINDOW_DAYS
    ]

    recent: List[RecentWear] = []
    for item_id in current_items:
        item = _find_item(item_id, wardrobe_items)
        if item is None:
            logger.debug("Skipping unknown item %s in repeat analysis", item_id)
            continue
        for outfit in last_two_weeks:
            if item_id in outfit.items:
                recent.append(RecentWear(item_id=item_id, item=item, days_ago=(current_date - outfit.date).days))
                break
    recent.sort(key=lambda wear: wear.days_ago)

    return RepeatAnalysis(
        warning=warning,
        recent_wear_dates=recent,
        suggestions=_suggestions_for(warning, wardrobe_items),
    )


__all__ = [
    "RepeatKind",
    "RepeatWarning",
    "RecentWear",
    "RepeatAnalysis",
    "jaccard_similarity",
    "check_outfit_repeat",
    "get_repeat_analysis",
]
