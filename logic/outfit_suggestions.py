"""Weather-driven dressing tips and a short list of suggested wardrobe items."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Literal, Optional, Sequence

from logic.weather_matching import get_current_season, is_season_eligible
from models.clothing_item import ClothingItem
from models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)

Priority = Literal["high", "medium", "low"]

WINDY_THRESHOLD_KMH = 30
MAX_SUGGESTED_ITEMS = 10


@dataclass(frozen=True)
class OutfitSuggestion:
    category: str
    suggestion: str
    priority: Priority


_COLD_TIPS = (
    ("outerwear", "It's cold! Wear a heavy jacket or winter coat", "high"),
    ("bottoms", "Long pants or warm trousers recommended", "high"),
    ("shoes", "Wear boots or closed-toe shoes", "medium"),
    ("accessories", "Consider a scarf, gloves, or beanie", "medium"),
)
_MILD_TIPS = (
    ("outerwear", "Light jacket or sweater recommended", "medium"),
    ("bottoms", "Jeans or casual pants work well", "low"),
    ("shoes", "Sneakers or casual shoes", "low"),
)
_WARM_TIPS = (
    ("tops", "T-shirt or light blouse is perfect", "medium"),
    ("bottoms", "Shorts, skirt, or light pants", "medium"),
    ("shoes", "Sandals or light sneakers", "low"),
)
_HOT_TIPS = (
    ("tops", "It's hot! Wear light, breathable clothing", "high"),
    ("accessories", "Sun protection: hat, sunglasses, sunscreen", "high"),
    ("bottoms", "Light shorts or breathable skirt", "medium"),
    ("shoes", "Open-toe sandals or breathable shoes", "medium"),
)
_RAIN_TIPS = (
    ("outerwear", "It's rainy! Bring a waterproof jacket or raincoat", "high"),
    ("accessories", "Don't forget an umbrella", "high"),
    ("shoes", "Waterproof shoes or boots", "medium"),
)
_SNOW_TIPS = (
    ("outerwear", "It's snowing! Wear a winter coat", "high"),
    ("shoes", "Winter boots with good traction", "high"),
    ("accessories", "Winter accessories: gloves, scarf, warm hat", "high"),
)
_SUNNY_TIPS = (("accessories", "It's sunny! Wear sunglasses and apply sunscreen", "medium"),)
_STORM_TIPS = (
    ("outerwear", "Storm warning! Waterproof jacket essential", "high"),
    ("accessories", "Bring a sturdy umbrella", "high"),
)
_WIND_TIPS = (("outerwear", "It's windy! Wear a windbreaker or wind-resistant jacket", "medium"),)


def _feel(temperature: float) -> str:
    if temperature < 10:
        return "cold"
    if temperature < 20:
        return "mild"
    if temperature < 28:
        return "warm"
    return "hot"


def get_outfit_suggestions(weather: WeatherSnapshot) -> List[OutfitSuggestion]:
    """Textual per-category tips from temperature, condition and wind."""

    tips = list(
        {"cold": _COLD_TIPS, "mild": _MILD_TIPS, "warm": _WARM_TIPS, "hot": _HOT_TIPS}[_feel(weather.temp)]
    )

    condition = weather.condition
    if condition in ("rain", "drizzle"):
        tips.extend(_RAIN_TIPS)
    elif condition == "snow":
        tips.extend(_SNOW_TIPS)
    elif condition == "clear" and weather.temp > 20:
        tips.extend(_SUNNY_TIPS)
    elif condition == "thunderstorm":
        tips.extend(_STORM_TIPS)

    if weather.wind_speed > WINDY_THRESHOLD_KMH:
        tips.extend(_WIND_TIPS)

    return [OutfitSuggestion(category=category, suggestion=text, priority=priority) for category, text, priority in tips]


def _notes_mention(item: ClothingItem, *words: str) -> bool:
    notes = item.notes.lower()
    return any(word in notes for word in words)


def _suits_weather(item: ClothingItem, weather: WeatherSnapshot) -> bool:
    feel = _feel(weather.temp)
    if feel == "cold":
        if item.category == "outerwear":
            return True
        if item.category == "bottoms" and not _notes_mention(item, "shorts", "skirt"):
            return True
        if item.category == "shoes" and _notes_mention(item, "boot"):
            return True
    elif feel == "mild":
        if item.category == "outerwear" and _notes_mention(item, "light"):
            return True
        if item.category in ("tops", "bottoms"):
            return True
    else:
        if item.category == "tops":
            return True
        if item.category == "bottoms" and _notes_mention(item, "shorts", "skirt", "light"):
            return True
        if item.category == "accessories" and _notes_mention(item, "hat", "sunglasses"):
            return True

    return weather.condition in ("rain", "drizzle") and _notes_mention(item, "waterproof")


def get_suggested_items(
    weather: WeatherSnapshot,
    wardrobe: Sequence[ClothingItem],
    today: Optional[date] = None,
) -> List[ClothingItem]:
    """Season-eligible items that fit the weather, least worn first, at most ten."""

    season = get_current_season(today)
    suitable = [item for item in wardrobe if is_season_eligible(item, season) and _suits_weather(item, weather)]
    suitable.sort(key=lambda item: item.wear_count)
    logger.debug("Suggested %s of %s items for %s", len(suitable[:MAX_SUGGESTED_ITEMS]), len(wardrobe), season)
    return suitable[:MAX_SUGGESTED_ITEMS]


def get_weather_summary(weather: WeatherSnapshot) -> str:
    """One-line summary such as ``"18°C - light rain (Mild)"``."""

    temp = weather.temp
    shown = int(temp) if float(temp).is_integer() else temp
    return f"{shown}°C - {weather.description} ({_feel(temp).capitalize()})"


__all__ = [
    "OutfitSuggestion",
    "get_outfit_suggestions",
    "get_suggested_items",
    "get_weather_summary",
]
