"""Configuration helpers for the wardrobe planner app."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Dict, Optional

DEFAULT_LOCATION = "London"
DEFAULT_WEATHER_CACHE_TTL_SECONDS = 30 * 60
DEFAULT_WEATHER_TIMEOUT_SECONDS = 5.0
STORAGE_BACKENDS = ("json", "sqlite", "memory")

# Settings file keys that differ from the dataclass field names.
_FILE_KEY_ALIASES = {"openweather_api_key": "weather_api_key"}
_ENV_VARS = {
    "weather_api_key": "OPENWEATHER_API_KEY",
    "default_location": "DEFAULT_LOCATION",
    "storage_backend": "STORAGE_BACKEND",
    "storage_path": "STORAGE_PATH",
    "weather_cache_ttl_seconds": "WEATHER_CACHE_TTL_SECONDS",
    "weather_timeout_seconds": "WEATHER_TIMEOUT_SECONDS",
}


@dataclass
class PlannerConfig:
    """Configuration values for the wardrobe planner.

    Everything runs locally: the only external dependency is the optional
    OpenWeatherMap key. Without it the planner works without weather context.
    """

    weather_api_key: Optional[str] = None
    default_location: str = DEFAULT_LOCATION
    storage_backend: str = "json"
    storage_path: Optional[str] = None
    weather_cache_ttl_seconds: float = DEFAULT_WEATHER_CACHE_TTL_SECONDS
    weather_timeout_seconds: float = DEFAULT_WEATHER_TIMEOUT_SECONDS
    environment: str | None = None

    def __post_init__(self) -> None:
        self.storage_backend = self.storage_backend.lower()
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(f"storage_backend must be one of {', '.join(STORAGE_BACKENDS)}")
        if self.weather_cache_ttl_seconds <= 0:
            raise ValueError("weather_cache_ttl_seconds must be positive")

    @classmethod
    def from_env(cls) -> "PlannerConfig":
        """Build a config from an optional settings file overlaid with environment variables.

        ``APP_CONFIG_PATH`` names the file directly; otherwise ``APP_ENV`` selects
        ``<PLANNER_CONFIG_DIR>/<env>.yaml``. Environment variables always win so a
        deployment can inject the weather key without touching the file.
        """

        env_name = os.getenv("APP_ENV")
        settings: Dict[str, str] = {}
        path = _settings_path(env_name)
        if path is not None and path.exists():
            settings = load_settings_file(path)

        values: Dict[str, str] = {}
        for field in fields(cls):
            env_var = _ENV_VARS.get(field.name)
            if env_var is None:
                continue
            raw = os.getenv(env_var) or settings.get(field.name)
            if raw:
                values[field.name] = raw

        return cls(
            weather_api_key=values.get("weather_api_key"),
            default_location=values.get("default_location", DEFAULT_LOCATION),
            storage_backend=values.get("storage_backend", "json"),
            storage_path=values.get("storage_path"),
            weather_cache_ttl_seconds=float(
                values.get("weather_cache_ttl_seconds", DEFAULT_WEATHER_CACHE_TTL_SECONDS)
            ),
            weather_timeout_seconds=float(values.get("weather_timeout_seconds", DEFAULT_WEATHER_TIMEOUT_SECONDS)),
            environment=env_name,
        )


def _settings_path(env_name: Optional[str]) -> Optional[Path]:
    explicit = os.getenv("APP_CONFIG_PATH")
    if explicit:
        return Path(explicit)
    if env_name:
        return Path(os.getenv("PLANNER_CONFIG_DIR", "config/environments")) / f"{env_name}.yaml"
    return None


def load_settings_file(path: Path) -> Dict[str, str]:
    """Read flat ``key: value`` pairs; nested YAML structures are not supported."""

    settings: Dict[str, str] = {}
    for line in path.read_text().splitlines():
        stripped = line.split(" #", 1)[0].strip()
        if not stripped or stripped.startswith("#") or ":" not in stripped:
            continue
        key, raw_value = (part.strip() for part in stripped.split(":", 1))
        if len(raw_value) >= 2 and raw_value[0] == raw_value[-1] and raw_value[0] in "\"'":
            raw_value = raw_value[1:-1]
        settings[_FILE_KEY_ALIASES.get(key, key)] = raw_value
    return settings


__all__ = ["PlannerConfig", "load_settings_file", "STORAGE_BACKENDS"]
