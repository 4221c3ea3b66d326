"""Weather tips, suggested items and wardrobe statistics tests."""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1]))

from logic.outfit_suggestions import get_outfit_suggestions, get_suggested_items, get_weather_summary
from logic.statistics import calculate_wardrobe_stats, get_category_distribution, get_color_distribution
from models.clothing_item import ClothingItem
from models.outfit import Outfit
from models.weather import WeatherSnapshot

JANUARY = date(2025, 1, 20)


def _item(item_id: str, category: str, color: str = "black", notes: str = "", season=None, wear_count: int = 0):
    return ClothingItem(
        item_id=item_id,
        image="",
        category=category,
        color=color,
        season=season or ["all-season"],
        notes=notes,
        wear_count=wear_count,
    )


def test_cold_rainy_windy_tips() -> None:
    weather = WeatherSnapshot(temp=4, feels_like=1, condition="rain", wind_speed=35)
    tips = get_outfit_suggestions(weather)

    assert tips[0].suggestion == "It's cold! Wear a heavy jacket or winter coat"
    assert tips[0].priority == "high"
    assert "Don't forget an umbrella" in [tip.suggestion for tip in tips]
    assert tips[-1].suggestion.startswith("It's windy!")
    assert len(tips) == 8


def test_sunny_tip_only_when_warm() -> None:
    warm = [tip.suggestion for tip in get_outfit_suggestions(WeatherSnapshot(temp=24, feels_like=24, condition="clear"))]
    mild = [tip.suggestion for tip in get_outfit_suggestions(WeatherSnapshot(temp=18, feels_like=18, condition="clear"))]

    assert "It's sunny! Wear sunglasses and apply sunscreen" in warm
    assert all("sunny" not in tip for tip in mild)


def test_suggested_items_for_cold_weather() -> None:
    wardrobe = [
        _item("coat", "outerwear", wear_count=4),
        _item("jeans", "bottoms", wear_count=1),
        _item("skirt", "bottoms", notes="mini skirt"),
        _item("boots", "shoes", notes="leather boots", wear_count=2),
        _item("sneakers", "shoes"),
        _item("summer-coat", "outerwear", season=["summer"]),
    ]
    weather = WeatherSnapshot(temp=3, feels_like=0, condition="clear")

    suggested = get_suggested_items(weather, wardrobe, today=JANUARY)
    assert [item.item_id for item in suggested] == ["jeans", "boots", "coat"]


def test_suggested_items_includes_waterproof_pieces_in_rain() -> None:
    wardrobe = [_item("shell", "accessories", notes="waterproof shell"), _item("scarf", "accessories")]
    weather = WeatherSnapshot(temp=15, feels_like=15, condition="drizzle")
    assert [item.item_id for item in get_suggested_items(weather, wardrobe, today=JANUARY)] == ["shell"]


def test_weather_summary_bands() -> None:
    assert get_weather_summary(WeatherSnapshot(temp=5, feels_like=5, condition="snow", description="snow")) == (
        "5°C - snow (Cold)"
    )
    assert get_weather_summary(WeatherSnapshot(temp=28, feels_like=28, condition="clear", description="hot")) == (
        "28°C - hot (Hot)"
    )


def test_wardrobe_stats() -> None:
    wardrobe = [
        _item("a", "tops", color="Red", wear_count=3),
        _item("b", "tops", color="red", wear_count=0, season=["summer", "spring"]),
        _item("c", "shoes", color="white", wear_count=2),
    ]
    outfits = [
        Outfit(outfit_id="1", date=date(2025, 3, 30), items=["a"]),
        Outfit(outfit_id="2", date=date(2025, 4, 2), items=["a", "c"]),
        Outfit(outfit_id="3", date=date(2025, 4, 5), items=["c"]),
        Outfit(outfit_id="4", date=date(2025, 4, 9), items=["b"]),
    ]

    stats = calculate_wardrobe_stats(wardrobe, outfits, today=date(2025, 4, 5))

    assert stats.total_items == 3
    assert stats.items_by_category["tops"] == 2
    assert stats.items_by_category["dresses"] == 0
    assert stats.items_by_color == {"red": 2, "white": 1}
    assert stats.items_by_season["all-season"] == 2
    assert [item.item_id for item in stats.most_worn_items] == ["a", "c", "b"]
    assert [item.item_id for item in stats.least_worn_items] == ["b", "c", "a"]
    assert stats.average_wear_count == 1.7
    assert stats.outfits_this_week == 3
    assert stats.outfits_this_month == 2


def test_distributions() -> None:
    wardrobe = [_item("a", "tops", color="red"), _item("b", "tops", color="blue"), _item("c", "shoes", color="red")]

    colors = get_color_distribution(wardrobe)
    assert (colors[0].label, colors[0].count, colors[0].percentage) == ("red", 2, 67)

    categories = get_category_distribution(wardrobe)
    assert (categories[0].label, categories[0].percentage) == ("tops", 67)
    assert len(categories) == 6
    assert get_color_distribution([]) == []
