"""Weather filtering and wear-history ranking tests."""

from __future__ import annotations

import sys
from datetime import date, datetime
from pathlib import Path
from typing import List

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.weather_matching import (
    filter_by_condition,
    filter_by_temperature,
    filter_items_by_weather,
    get_current_season,
    get_weather_appropriate_items,
    sort_by_wear_history,
)
from models.clothing_item import ClothingItem
from models.weather import WeatherSnapshot

JANUARY = date(2025, 1, 15)
JULY = date(2025, 7, 15)


def _item(item_id: str, category: str, season: List[str] | None = None, notes: str = "", **extra) -> ClothingItem:
    return ClothingItem(
        item_id=item_id,
        image="",
        category=category,
        color="black",
        season=season or ["all-season"],
        notes=notes,
        **extra,
    )


def _weather(temp: float, condition: str = "clear") -> WeatherSnapshot:
    return WeatherSnapshot(temp=temp, feels_like=temp, condition=condition)


def _ids(items) -> List[str]:
    return [item.item_id for item in items]


def test_current_season_by_month() -> None:
    assert get_current_season(date(2025, 3, 1)) == "spring"
    assert get_current_season(date(2025, 6, 30)) == "summer"
    assert get_current_season(date(2025, 11, 30)) == "fall"
    assert get_current_season(date(2025, 12, 1)) == "winter"
    assert get_current_season(JANUARY) == "winter"


def test_cold_keeps_outerwear_and_warm_items() -> None:
    items = [
        _item("coat", "outerwear", ["winter"]),
        _item("tee", "tops"),
        _item("sweater", "tops", notes="Warm wool sweater"),
        _item("flannel", "tops", ["fall", "winter"]),
        _item("summer-coat", "outerwear", ["summer"]),
    ]
    result = filter_by_temperature(items, 5, today=JANUARY)

    assert _ids(result.items) == ["coat", "sweater", "flannel"]
    assert result.removed["tee"] == "too light for cold weather"
    assert result.removed["summer-coat"] == "not suitable for winter"
    assert result.debug["band"] == "cold"


def test_moderate_keeps_every_season_eligible_item() -> None:
    items = [_item("tee", "tops"), _item("coat", "outerwear"), _item("sandals", "shoes", notes="light sandals")]
    for temperature in (15, 20, 25):
        result = filter_by_temperature(items, temperature, today=JULY)
        assert _ids(result.items) == ["tee", "coat", "sandals"]


def test_hot_keeps_light_items() -> None:
    items = [
        _item("shorts", "bottoms", notes="Denim shorts"),
        _item("jeans", "bottoms", notes="Heavy jeans"),
        _item("linen", "tops", ["summer"]),
    ]
    result = filter_by_temperature(items, 30, today=JULY)
    assert _ids(result.items) == ["shorts", "linen"]
    assert "jeans" in result.removed


def test_rain_filter_is_permissive() -> None:
    items = [_item("tee", "tops"), _item("raincoat", "outerwear", notes="waterproof shell")]
    result = filter_by_condition(items, "rain")
    assert _ids(result.items) == ["tee", "raincoat"]
    assert result.debug["preferred"] == ["raincoat"]


def test_snow_keeps_wintry_items_only() -> None:
    items = [
        _item("tee", "tops"),
        _item("parka", "outerwear"),
        _item("boots", "shoes", notes="snow boots"),
        _item("knit", "tops", ["winter"]),
    ]
    result = filter_by_condition(items, "snow")
    assert _ids(result.items) == ["parka", "boots", "knit"]


def test_filter_without_weather_only_filters_category() -> None:
    items = [_item("tee", "tops", ["summer"]), _item("coat", "outerwear")]
    assert _ids(filter_items_by_weather(items, None, category="tops", today=JANUARY)) == ["tee"]
    assert _ids(filter_items_by_weather(items, None, today=JANUARY)) == ["tee", "coat"]


def test_wear_history_order() -> None:
    older_new = _item("older-new", "tops", created_at=datetime(2025, 1, 1))
    newer_new = _item("newer-new", "tops", created_at=datetime(2025, 2, 1))
    worn_once_no_date = _item("once-no-date", "tops", wear_count=1)
    worn_once_old = _item("once-old", "tops", wear_count=1, last_worn=date(2025, 1, 2))
    worn_once_recent = _item("once-recent", "tops", wear_count=1, last_worn=date(2025, 3, 2))
    worn_often = _item("often", "tops", wear_count=5, last_worn=date(2024, 1, 1))

    shuffled = [worn_often, worn_once_recent, older_new, worn_once_old, newer_new, worn_once_no_date]
    ordered = sort_by_wear_history(shuffled)

    assert _ids(ordered) == ["newer-new", "older-new", "once-no-date", "once-old", "once-recent", "often"]
    assert _ids(sort_by_wear_history(ordered)) == _ids(ordered)


def test_weather_appropriate_items_filters_then_sorts() -> None:
    items = [
        _item("worn-tee", "tops", wear_count=3, last_worn=date(2025, 7, 1)),
        _item("fresh-tee", "tops"),
        _item("coat", "outerwear"),
        _item("winter-top", "tops", ["winter"]),
    ]
    candidates = get_weather_appropriate_items(items, _weather(22), category="tops", today=JULY)
    assert _ids(candidates) == ["fresh-tee", "worn-tee"]
