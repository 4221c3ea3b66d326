"""Outfit and trip schemas."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from models.clothing_item import parse_date
from models.taxonomy import validate_trip_type
from models.weather import WeatherSnapshot


def _dedupe(values: List[str]) -> List[str]:
    seen = set()
    ordered = []
    for value in values:
        if value not in seen:
            ordered.append(value)
            seen.add(value)
    return ordered


@dataclass
class Outfit:
    """What was worn on a given day. One outfit per date."""

    outfit_id: str
    date: date
    items: List[str] = field(default_factory=list)
    photo: Optional[str] = None
    notes: str = ""
    weather: Optional[WeatherSnapshot] = None

    def __post_init__(self) -> None:
        self.date = parse_date(self.date)
        if self.date is None:
            raise ValueError("Outfit date is required")
        self.items = _dedupe([str(item_id) for item_id in self.items])
        if isinstance(self.weather, dict):
            self.weather = WeatherSnapshot.from_dict(self.weather)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outfit_id": self.outfit_id,
            "date": self.date.isoformat(),
            "items": list(self.items),
            "photo": self.photo,
            "notes": self.notes,
            "weather": self.weather.to_dict() if self.weather else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Outfit":
        return cls(
            outfit_id=str(data["outfit_id"]),
            date=data["date"],
            items=list(data.get("items") or []),
            photo=data.get("photo"),
            notes=str(data.get("notes") or ""),
            weather=data.get("weather"),
        )


@dataclass
class Trip:
    """A trip with an inclusive date range and per-day outfit plan."""

    trip_id: str
    destination: str
    start_date: date
    end_date: date
    trip_type: str
    outfits: Dict[date, str] = field(default_factory=dict)
    weather: List[WeatherSnapshot] = field(default_factory=list)
    packing_list: List[str] = field(default_factory=list)
    notes: str = ""

    def __post_init__(self) -> None:
        self.start_date = parse_date(self.start_date)
        self.end_date = parse_date(self.end_date)
        if self.start_date is None or self.end_date is None:
            raise ValueError("Trip start_date and end_date are required")
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot precede start_date")
        self.trip_type = validate_trip_type(self.trip_type)
        self.outfits = {parse_date(day): str(outfit_id) for day, outfit_id in self.outfits.items()}
        self.weather = [
            WeatherSnapshot.from_dict(entry) if isinstance(entry, dict) else entry for entry in self.weather
        ]

    @property
    def duration_days(self) -> int:
        return (self.end_date - self.start_date).days + 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "trip_id": self.trip_id,
            "destination": self.destination,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "trip_type": self.trip_type,
            "outfits": {day.isoformat(): outfit_id for day, outfit_id in self.outfits.items()},
            "weather": [snapshot.to_dict() for snapshot in self.weather],
            "packing_list": list(self.packing_list),
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Trip":
        return cls(
            trip_id=str(data["trip_id"]),
            destination=str(data["destination"]),
            start_date=data["start_date"],
            end_date=data["end_date"],
            trip_type=str(data["trip_type"]),
            outfits=dict(data.get("outfits") or {}),
            weather=list(data.get("weather") or []),
            packing_list=list(data.get("packing_list") or []),
            notes=str(data.get("notes") or ""),
        )
