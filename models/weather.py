"""Weather snapshot model shared by the weather source, matcher and outfits."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from models.taxonomy import validate_condition


@dataclass
class WeatherSnapshot:
    """A single current or forecast weather reading in metric units."""

    temp: float
    feels_like: float
    condition: str
    description: str = ""
    icon: str = ""
    humidity: float = 0.0
    wind_speed: float = 0.0
    timestamp: datetime | None = None
    location: Optional[str] = None

    def __post_init__(self) -> None:
        self.condition = validate_condition(self.condition)
        self.temp = float(self.temp)
        self.feels_like = float(self.feels_like)
        if self.timestamp is None:
            self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "temp": self.temp,
            "feels_like": self.feels_like,
            "condition": self.condition,
            "description": self.description,
            "icon": self.icon,
            "humidity": self.humidity,
            "wind_speed": self.wind_speed,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WeatherSnapshot":
        timestamp = data.get("timestamp")
        return cls(
            temp=data["temp"],
            feels_like=data.get("feels_like", data["temp"]),
            condition=str(data["condition"]),
            description=str(data.get("description") or ""),
            icon=str(data.get("icon") or ""),
            humidity=float(data.get("humidity") or 0.0),
            wind_speed=float(data.get("wind_speed") or 0.0),
            timestamp=datetime.fromisoformat(timestamp) if isinstance(timestamp, str) else timestamp,
            location=data.get("location"),
        )


__all__ = ["WeatherSnapshot"]
