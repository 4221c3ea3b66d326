"""Deterministic weather filtering and wear-history ranking for wardrobe items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from models.clothing_item import ClothingItem
from models.taxonomy import ALL_SEASON
from models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

COLD_THRESHOLD_C = 15
HOT_THRESHOLD_C = 25

WARM_CATEGORIES = frozenset({"outerwear", "accessories"})
WARM_KEYWORDS = ("jacket", "coat", "sweater", "long", "warm", "boot")
LIGHT_KEYWORDS = ("shorts", "short", "tank", "light", "sandal", "summer")
WATERPROOF_KEYWORDS = ("waterproof", "rain", "umbrella", "boot")
WINTER_KEYWORDS = ("winter", "warm", "boot", "coat", "jacket", "snow")
SUN_KEYWORDS = ("hat", "sunglasses", "light", "summer")


@dataclass(frozen=True)
class FilteringResult:
    """Captures the outcome of a single filtering step."""

    items: List[ClothingItem]
    removed: Dict[str, str]
    debug: Dict[str, object]


def get_current_season(today: Optional[date] = None) -> str:
    """Return the meteorological season for the given (or current) month."""

    month = (today or date.today()).month
    if 3 <= month <= 5:
        return "spring"
    if 6 <= month <= 8:
        return "summer"
    if 9 <= month <= 11:
        return "fall"
    return "winter"


def is_season_eligible(item: ClothingItem, season: str) -> bool:
    return season in item.season or ALL_SEASON in item.season


def _has_keyword(text: str, keywords: Iterable[str]) -> bool:
    lowered = text.lower()
    return any(keyword in lowered for keyword in keywords)


def temperature_band(temperature: float) -> str:
    if temperature < COLD_THRESHOLD_C:
        return "cold"
    if temperature <= HOT_THRESHOLD_C:
        return "moderate"
    return "hot"


def filter_by_temperature(
    items: List[ClothingItem], temperature: float, today: Optional[date] = None
) -> FilteringResult:
    """Gate items on the current season, then on the temperature band."""

    season = get_current_season(today)
    band = temperature_band(temperature)
    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []

    for item in items:
        reason = None
        if not is_season_eligible(item, season):
            reason = f"not suitable for {season}"
        elif band == "cold":
            warm = (
                item.category in WARM_CATEGORIES
                or _has_keyword(item.notes, WARM_KEYWORDS)
                or "winter" in item.season
                or "fall" in item.season
            )
            if not warm:
                reason = "too light for cold weather"
        elif band == "hot":
            light = (
                _has_keyword(item.notes, LIGHT_KEYWORDS)
                or _has_keyword(item.category, LIGHT_KEYWORDS)
                or "summer" in item.season
            )
            if not light:
                reason = "too heavy for hot weather"
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "season": season,
        "temperature": temperature,
        "band": band,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_by_condition(items: List[ClothingItem], condition: str) -> FilteringResult:
    """Filter items by weather condition.

    Rain and sun only flag matching items as preferred; nothing is removed for
    them. Snow is the only condition that removes items.
    """

    lowered = condition.lower()
    removed: Dict[str, str] = {}
    kept: List[ClothingItem] = []
    preferred: List[str] = []

    for item in items:
        reason = None
        if "rain" in lowered or "drizzle" in lowered:
            if item.category in {"outerwear", "shoes", "accessories"} and _has_keyword(
                item.notes, WATERPROOF_KEYWORDS
            ):
                preferred.append(item.item_id)
        elif "snow" in lowered:
            wintry = (
                _has_keyword(item.notes, WINTER_KEYWORDS)
                or "winter" in item.season
                or item.category == "outerwear"
            )
            if not wintry:
                reason = "not suitable for snow"
        elif "clear" in lowered or "sun" in lowered:
            if _has_keyword(item.notes, SUN_KEYWORDS) or "summer" in item.season:
                preferred.append(item.item_id)
        if reason:
            removed[item.item_id] = reason
        else:
            kept.append(item)

    debug = {
        "input_count": len(items),
        "kept_count": len(kept),
        "removed_count": len(removed),
        "condition": lowered,
        "preferred": preferred,
    }
    return FilteringResult(items=kept, removed=removed, debug=debug)


def filter_items_by_weather(
    items: List[ClothingItem],
    weather: Optional[WeatherSnapshot],
    category: Optional[str] = None,
    today: Optional[date] = None,
) -> List[ClothingItem]:
    """Filter by category and, when weather is known, by temperature and condition."""

    filtered = [item for item in items if item.category == category] if category else list(items)
    if weather is None:
        return filtered

    by_temperature = filter_by_temperature(filtered, weather.temp, today=today)
    by_condition = filter_by_condition(by_temperature.items, weather.condition)
    logger.debug(
        "weather filter category=%s temperature=%s condition=%s",
        category,
        by_temperature.debug,
        by_condition.debug,
    )
    return by_condition.items


def _wear_history_key(item: ClothingItem) -> tuple:
    if item.wear_count == 0:
        # Newest additions first.
        return (0, -item.created_at.timestamp(), 0, 0)
    if item.last_worn is None:
        return (1, item.wear_count, 0, 0)
    return (1, item.wear_count, 1, item.last_worn.toordinal())


def sort_by_wear_history(items: Iterable[ClothingItem]) -> List[ClothingItem]:
    """Least-worn first: never worn, then fewer wears, then worn longest ago."""

    return sorted(items, key=_wear_history_key)


def get_weather_appropriate_items(
    items: List[ClothingItem],
    weather: Optional[WeatherSnapshot],
    category: Optional[str] = None,
    today: Optional[date] = None,
) -> List[ClothingItem]:
    """Candidate pool for a category: weather filtered, then wear-history sorted."""

    return sort_by_wear_history(filter_items_by_weather(items, weather, category=category, today=today))


__all__ = [
    "FilteringResult",
    "get_current_season",
    "is_season_eligible",
    "temperature_band",
    "filter_by_temperature",
    "filter_by_condition",
    "filter_items_by_weather",
    "sort_by_wear_history",
    "get_weather_appropriate_items",
]
