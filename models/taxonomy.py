"""Canonical taxonomy definitions for wardrobe items.

This module centralises the closed label sets for categories, seasons, weather
conditions and trip types. Helper functions keep validation logic consistent
across models, stores and the HTTP layer.
"""

from typing import Iterable, List


def _normalize_key(value: str) -> str:
    """Normalise a free-form string into a taxonomy key."""

    return value.strip().lower().replace("_", "-")


CATEGORIES: List[str] = ["tops", "bottoms", "dresses", "outerwear", "shoes", "accessories"]

# Order in which the guided builder walks the wardrobe.
BUILDER_CATEGORIES: List[str] = ["tops", "bottoms", "shoes", "outerwear", "accessories"]
REQUIRED_CATEGORIES = ("tops", "bottoms", "shoes")

SEASONS: List[str] = ["spring", "summer", "fall", "winter", "all-season"]
ALL_SEASON = "all-season"

WEATHER_CONDITIONS: List[str] = [
    "clear",
    "clouds",
    "rain",
    "snow",
    "drizzle",
    "thunderstorm",
    "mist",
    "fog",
]

TRIP_TYPES: List[str] = ["business", "vacation", "weekend"]


def validate_category(value: str) -> str:
    """Validate and normalise a category value.

    Raises a :class:`ValueError` if the category is not part of the canonical
    taxonomy.
    """

    key = _normalize_key(value)
    if key not in CATEGORIES:
        raise ValueError(f"Unsupported category '{value}'. Allowed: {CATEGORIES}")
    return key


def validate_seasons(values: Iterable[str]) -> List[str]:
    """Validate, normalise and deduplicate a non-empty season set."""

    normalised: List[str] = []
    for value in values:
        key = _normalize_key(str(value))
        if key not in SEASONS:
            raise ValueError(f"Unsupported season '{value}'. Allowed: {SEASONS}")
        if key not in normalised:
            normalised.append(key)
    if not normalised:
        raise ValueError("At least one season is required")
    return normalised


def validate_condition(value: str) -> str:
    """Validate a weather condition label."""

    key = _normalize_key(value)
    if key not in WEATHER_CONDITIONS:
        raise ValueError(f"Unsupported weather condition '{value}'. Allowed: {WEATHER_CONDITIONS}")
    return key


def validate_trip_type(value: str) -> str:
    key = _normalize_key(value)
    if key not in TRIP_TYPES:
        raise ValueError(f"Unsupported trip type '{value}'. Allowed: {TRIP_TYPES}")
    return key


__all__ = [
    "CATEGORIES",
    "BUILDER_CATEGORIES",
    "REQUIRED_CATEGORIES",
    "SEASONS",
    "ALL_SEASON",
    "WEATHER_CONDITIONS",
    "TRIP_TYPES",
    "validate_category",
    "validate_seasons",
    "validate_condition",
    "validate_trip_type",
]
