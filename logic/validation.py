"""Pydantic schemas and helpers for validating HTTP and tool payloads."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from models.taxonomy import validate_category, validate_condition, validate_seasons, validate_trip_type


class ClothingItemPayload(BaseModel):
    """Input contract for adding a clothing item."""

    image: str = ""
    category: str
    color: str = Field(min_length=1)
    season: List[str] = Field(min_length=1)
    notes: str = ""

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: str) -> str:
        return validate_category(value)

    @field_validator("season")
    @classmethod
    def _validate_season(cls, value: List[str]) -> List[str]:
        return validate_seasons(value)


class WeatherPayload(BaseModel):
    temp: float
    feels_like: Optional[float] = None
    condition: str
    description: str = ""
    wind_speed: float = 0.0

    @field_validator("condition")
    @classmethod
    def _validate_condition(cls, value: str) -> str:
        return validate_condition(value)


class OutfitSavePayload(BaseModel):
    """Input contract for saving an outfit built elsewhere (calendar entry)."""

    date: date
    item_ids: List[str] = Field(min_length=1)
    notes: str = ""


class RepeatCheckRequest(BaseModel):
    date: date
    item_ids: List[str]


class HarmonyRequest(BaseModel):
    colors: List[str] = []


class RecommendationRequest(BaseModel):
    """Ask for weather-appropriate items, optionally for one category."""

    category: Optional[str] = None
    location: Optional[str] = None
    weather: Optional[WeatherPayload] = None
    today: Optional[date] = None

    @field_validator("category")
    @classmethod
    def _validate_category(cls, value: Optional[str]) -> Optional[str]:
        return validate_category(value) if value else None


class TripRequest(BaseModel):
    destination: str = Field(min_length=1)
    start_date: date
    end_date: date
    trip_type: str

    @field_validator("trip_type")
    @classmethod
    def _validate_trip_type(cls, value: str) -> str:
        return validate_trip_type(value)

    @model_validator(mode="after")
    def _validate_range(self) -> "TripRequest":
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot precede start_date")
        return self


class ValidationResult(BaseModel):
    """Wrapper returned to callers when validation fails."""

    status: Literal["needs_review"] = "needs_review"
    message: str
    details: List[Dict[str, Any]]


def validation_failure(message: str, exc: ValidationError) -> Dict[str, Any]:
    """Translate Pydantic errors into a consistent review payload."""

    details = exc.errors(include_url=False, include_context=False, include_input=False)
    return ValidationResult(message=message, details=details).model_dump()


__all__ = [
    "ClothingItemPayload",
    "WeatherPayload",
    "OutfitSavePayload",
    "RepeatCheckRequest",
    "HarmonyRequest",
    "RecommendationRequest",
    "TripRequest",
    "ValidationResult",
    "validation_failure",
]
