"""Wardrobe usage statistics."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, List, Optional, Sequence

from models.clothing_item import ClothingItem
from models.outfit import Outfit
from models.taxonomy import CATEGORIES, SEASONS

TOP_N = 5


@dataclass(frozen=True)
class WardrobeStats:
    total_items: int
    items_by_category: Dict[str, int]
    items_by_color: Dict[str, int]
    items_by_season: Dict[str, int]
    most_worn_items: List[ClothingItem]
    least_worn_items: List[ClothingItem]
    average_wear_count: float
    outfits_this_week: int
    outfits_this_month: int


@dataclass(frozen=True)
class Share:
    label: str
    count: int
    percentage: int


def _percentage(count: int, total: int) -> int:
    return round(count / total * 100) if total else 0


def calculate_wardrobe_stats(
    wardrobe: Sequence[ClothingItem],
    outfits: Sequence[Outfit],
    today: Optional[date] = None,
) -> WardrobeStats:
    today = today or date.today()

    by_category = {category: 0 for category in CATEGORIES}
    by_season = {season: 0 for season in SEASONS}
    by_color: Counter = Counter()
    for item in wardrobe:
        by_category[item.category] += 1
        by_color[item.color.lower()] += 1
        for season in item.season:
            by_season[season] += 1

    total_wears = sum(item.wear_count for item in wardrobe)
    average = total_wears / len(wardrobe) if wardrobe else 0.0

    week_start = today - timedelta(days=7)
    month_start = today.replace(day=1)

    return WardrobeStats(
        total_items=len(wardrobe),
        items_by_category=by_category,
        items_by_color=dict(by_color),
        items_by_season=by_season,
        most_worn_items=sorted(wardrobe, key=lambda item: item.wear_count, reverse=True)[:TOP_N],
        least_worn_items=sorted(wardrobe, key=lambda item: item.wear_count)[:TOP_N],
        average_wear_count=round(average, 1),
        outfits_this_week=sum(1 for outfit in outfits if week_start <= outfit.date <= today),
        outfits_this_month=sum(1 for outfit in outfits if month_start <= outfit.date <= today),
    )


def get_color_distribution(wardrobe: Sequence[ClothingItem]) -> List[Share]:
    counts = Counter(item.color.lower() for item in wardrobe)
    shares = [Share(color, count, _percentage(count, len(wardrobe))) for color, count in counts.items()]
    return sorted(shares, key=lambda share: share.count, reverse=True)


def get_category_distribution(wardrobe: Sequence[ClothingItem]) -> List[Share]:
    counts = {category: 0 for category in CATEGORIES}
    for item in wardrobe:
        counts[item.category] += 1
    shares = [Share(category, count, _percentage(count, len(wardrobe))) for category, count in counts.items()]
    return sorted(shares, key=lambda share: share.count, reverse=True)


__all__ = [
    "WardrobeStats",
    "Share",
    "calculate_wardrobe_stats",
    "get_color_distribution",
    "get_category_distribution",
]
