"""Weather source abstractions, OpenWeatherMap client and TTL cache."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import requests
from pydantic import BaseModel, ValidationError

from models.weather import WeatherSnapshot

LOGGER = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5"
CACHE_TTL_SECONDS = 30 * 60


class _Condition(BaseModel):
    id: int
    description: str = ""
    icon: str = ""


class _Main(BaseModel):
    temp: float
    feels_like: float
    humidity: float = 0.0


class _Wind(BaseModel):
    speed: float = 0.0


class _CurrentResponse(BaseModel):
    name: str = ""
    main: _Main
    wind: _Wind = _Wind()
    weather: List[_Condition]


class _ForecastEntry(BaseModel):
    dt: int
    main: _Main
    wind: _Wind = _Wind()
    weather: List[_Condition]


class _City(BaseModel):
    name: str = ""


class _ForecastResponse(BaseModel):
    list: List[_ForecastEntry] = []
    city: _City = _City()


def map_condition_code(code: int) -> str:
    """Map an OpenWeatherMap condition id to a planner condition label."""

    if 200 <= code < 300:
        return "thunderstorm"
    if 300 <= code < 400:
        return "drizzle"
    if 500 <= code < 600:
        return "rain"
    if 600 <= code < 700:
        return "snow"
    if 700 <= code < 800:
        return "fog" if code == 741 else "mist"
    if code == 800:
        return "clear"
    if code > 800:
        return "clouds"
    return "clear"


def _to_snapshot(main: _Main, wind: _Wind, condition: _Condition, timestamp: datetime, location: str) -> WeatherSnapshot:
    return WeatherSnapshot(
        temp=round(main.temp),
        feels_like=round(main.feels_like),
        condition=map_condition_code(condition.id),
        description=condition.description,
        icon=condition.icon,
        humidity=main.humidity,
        # m/s to km/h
        wind_speed=round(wind.speed * 3.6),
        timestamp=timestamp,
        location=location or None,
    )


class WeatherSource(ABC):
    """Abstract weather source. Failures return ``None`` or ``[]``, never raise."""

    @abstractmethod
    def current(self, location: str) -> Optional[WeatherSnapshot]:
        """Return the current weather for a location."""

    @abstractmethod
    def forecast(self, location: str, days: int = 5) -> List[WeatherSnapshot]:
        """Return roughly one snapshot per day for the next ``days`` days."""


class OpenWeatherSource(WeatherSource):
    """OpenWeatherMap client with schema validation and graceful fallbacks."""

    def __init__(self, api_key: str | None = None, timeout_seconds: float = 5.0) -> None:
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds

    def _get(self, endpoint: str, location: str) -> dict:
        params = {"q": location, "units": "metric", "appid": self.api_key}
        response = requests.get(f"{BASE_URL}/{endpoint}", params=params, timeout=self.timeout_seconds)
        response.raise_for_status()
        return response.json()

    def current(self, location: str) -> Optional[WeatherSnapshot]:
        if not self.api_key:
            LOGGER.warning("Weather API key not configured")
            return None

        LOGGER.info("Fetching current weather")
        try:
            parsed = _CurrentResponse.model_validate(self._get("weather", location))
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return None
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return None
        if not parsed.weather:
            LOGGER.error("Weather payload has no condition entries")
            return None
        return _to_snapshot(parsed.main, parsed.wind, parsed.weather[0], datetime.now(), parsed.name)

    def forecast(self, location: str, days: int = 5) -> List[WeatherSnapshot]:
        if not self.api_key:
            LOGGER.warning("Weather API key not configured")
            return []

        LOGGER.info("Fetching weather forecast", extra={"days": days})
        try:
            parsed = _ForecastResponse.model_validate(self._get("forecast", location))
        except requests.RequestException as exc:
            LOGGER.error("Weather API unreachable", exc_info=exc)
            return []
        except ValidationError as exc:
            LOGGER.error("Weather payload schema validation failed", exc_info=exc)
            return []

        # One entry per calendar day, the one closest to noon.
        daily: Dict[str, Tuple[int, _ForecastEntry]] = {}
        for entry in parsed.list:
            moment = datetime.fromtimestamp(entry.dt)
            day_key = moment.date().isoformat()
            if day_key not in daily or abs(moment.hour - 12) < abs(daily[day_key][0] - 12):
                daily[day_key] = (moment.hour, entry)

        snapshots = []
        for _, entry in list(daily.values())[:days]:
            if not entry.weather:
                continue
            snapshots.append(
                _to_snapshot(
                    entry.main, entry.wind, entry.weather[0], datetime.fromtimestamp(entry.dt), parsed.city.name
                )
            )
        return snapshots


class MockWeatherSource(WeatherSource):
    """Offline deterministic weather source for tests and demos."""

    def __init__(
        self,
        snapshot: WeatherSnapshot | None = None,
        forecast_snapshots: List[WeatherSnapshot] | None = None,
    ) -> None:
        self.snapshot = snapshot or WeatherSnapshot(
            temp=20.0,
            feels_like=20.0,
            condition="clear",
            description="clear sky",
            icon="01d",
            humidity=50,
            wind_speed=10,
        )
        self.forecast_snapshots = forecast_snapshots
        self.calls: List[Tuple[str, str]] = []

    def current(self, location: str) -> Optional[WeatherSnapshot]:
        self.calls.append(("current", location))
        return self.snapshot

    def forecast(self, location: str, days: int = 5) -> List[WeatherSnapshot]:
        self.calls.append(("forecast", location))
        if self.forecast_snapshots is not None:
            return list(self.forecast_snapshots[:days])
        return [self.snapshot for _ in range(days)] if self.snapshot else []


class CachedWeatherSource(WeatherSource):
    """Time-based cache in front of another source.

    Entries are keyed by location (and forecast length) and stay fresh for
    ``ttl_seconds``. Empty results are not cached.
    """

    def __init__(
        self,
        source: WeatherSource,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.source = source
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._cache: Dict[str, Tuple[object, float]] = {}

    def _lookup(self, key: str) -> Optional[object]:
        cached = self._cache.get(key)
        if cached and self._clock() - cached[1] < self.ttl_seconds:
            LOGGER.debug("Weather cache hit for %s", key)
            return cached[0]
        return None

    def _store(self, key: str, value: object) -> None:
        self._cache[key] = (value, self._clock())

    def current(self, location: str) -> Optional[WeatherSnapshot]:
        key = f"current_{location}"
        cached = self._lookup(key)
        if cached is not None:
            return cached  # type: ignore[return-value]
        snapshot = self.source.current(location)
        if snapshot is not None:
            self._store(key, snapshot)
        return snapshot

    def forecast(self, location: str, days: int = 5) -> List[WeatherSnapshot]:
        key = f"forecast_{location}_{days}"
        cached = self._lookup(key)
        if cached is not None:
            return list(cached)  # type: ignore[call-overload]
        snapshots = self.source.forecast(location, days)
        if snapshots:
            self._store(key, list(snapshots))
        return snapshots

    def clear(self) -> None:
        self._cache.clear()


__all__ = [
    "WeatherSource",
    "OpenWeatherSource",
    "MockWeatherSource",
    "CachedWeatherSource",
    "map_condition_code",
    "CACHE_TTL_SECONDS",
]
