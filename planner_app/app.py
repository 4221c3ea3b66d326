"""Planner app bootstrap."""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from logic.outfit_builder import OutfitBuilder, SaveOutcome, record_outfit
from logic.outfit_similarity import SimilarOutfit, find_similar_outfits, generate_alternatives
from logic.outfit_suggestions import get_outfit_suggestions, get_suggested_items, get_weather_summary
from logic.repeat_checker import get_repeat_analysis
from logic.statistics import (
    Share,
    WardrobeStats,
    calculate_wardrobe_stats,
    get_category_distribution,
    get_color_distribution,
)
from logic.validation import ClothingItemPayload, TripRequest, validation_failure
from logic.weather_matching import get_weather_appropriate_items
from models.clothing_item import ClothingItem
from models.color_theory import analyze_color_harmony, suggest_matching_colors
from models.outfit import Outfit, Trip
from models.taxonomy import BUILDER_CATEGORIES
from models.weather import WeatherSnapshot
from planner_app.config import PlannerConfig
from planner_app.logging_config import configure_logging, get_logger, log_event, operation_context
from tools.storage import KeyValueStore, build_key_value_store
from tools.wardrobe_store import (
    KeyValueOutfitStore,
    KeyValueTripStore,
    KeyValueWardrobeStore,
    generate_id,
)
from tools.weather_provider import CachedWeatherSource, OpenWeatherSource, WeatherSource

LOGGER = get_logger(__name__)

MAX_FORECAST_DAYS = 5


class WardrobePlannerApp:
    """Wires together config, stores, the weather source and the planner logic."""

    def __init__(
        self,
        config: PlannerConfig | None = None,
        kv_store: KeyValueStore | None = None,
        weather_source: WeatherSource | None = None,
    ) -> None:
        self.config = config or PlannerConfig.from_env()
        configure_logging()

        self.kv_store = kv_store or build_key_value_store(self.config.storage_backend, self.config.storage_path)
        self.wardrobe_store = KeyValueWardrobeStore(self.kv_store)
        self.outfit_store = KeyValueOutfitStore(self.kv_store)
        self.trip_store = KeyValueTripStore(self.kv_store)
        self.weather_source = CachedWeatherSource(
            weather_source
            or OpenWeatherSource(
                api_key=self.config.weather_api_key,
                timeout_seconds=self.config.weather_timeout_seconds,
            ),
            ttl_seconds=self.config.weather_cache_ttl_seconds,
        )

    # Wardrobe
    def add_item(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Validate a posted item, assign an id and store it."""

        try:
            request = ClothingItemPayload.model_validate(payload)
        except ValidationError as exc:
            log_event(LOGGER, logging.WARNING, "item_payload_invalid", errors=len(exc.errors()))
            return validation_failure("Invalid clothing item payload", exc)

        item = ClothingItem(item_id=generate_id(), **request.model_dump())
        if not self.wardrobe_store.add(item):
            return {"status": "error", "message": "Could not save clothing item"}
        log_event(LOGGER, logging.INFO, "item_added", item_id=item.item_id, category=item.category)
        return {"status": "ok", "item": item.to_dict()}

    def list_items(self, category: str | None = None) -> List[ClothingItem]:
        items = self.wardrobe_store.list()
        if category:
            items = [item for item in items if item.category == category]
        return items

    # Weather
    def current_weather(self, location: str | None = None) -> Optional[WeatherSnapshot]:
        return self.weather_source.current(location or self.config.default_location)

    def forecast(self, location: str | None = None, days: int = MAX_FORECAST_DAYS) -> List[WeatherSnapshot]:
        return self.weather_source.forecast(location or self.config.default_location, days)

    def recommendations(
        self,
        weather: Optional[WeatherSnapshot],
        category: str | None = None,
        today: date | None = None,
    ) -> Dict[str, Any]:
        """Weather-appropriate items plus textual tips for the given conditions."""

        items = get_weather_appropriate_items(self.wardrobe_store.list(), weather, category=category, today=today)
        response: Dict[str, Any] = {"items": items, "tips": [], "summary": None, "suggested": []}
        if weather is not None:
            response["tips"] = get_outfit_suggestions(weather)
            response["summary"] = get_weather_summary(weather)
            response["suggested"] = get_suggested_items(weather, self.wardrobe_store.list(), today=today)
        return response

    # Builder
    def new_builder(
        self,
        target_date: date | None = None,
        location: str | None = None,
        rng: random.Random | None = None,
    ) -> OutfitBuilder:
        """Start a builder over the current wardrobe, falling back to no weather."""

        weather = self.current_weather(location)
        if weather is None:
            log_event(LOGGER, logging.WARNING, "builder_without_weather")
        return OutfitBuilder(self.wardrobe_store.list(), weather, today=target_date, rng=rng)

    def review_outfit(self, item_ids: Sequence[str], target_date: date) -> Dict[str, Any]:
        """Advisory feedback for a candidate outfit: repeats, colors and alternatives."""

        with operation_context("app:review_outfit") as correlation_id:
            wardrobe = self.wardrobe_store.list()
            analysis = get_repeat_analysis(item_ids, target_date, self.outfit_store.list_all(), wardrobe)
            by_id = {item.item_id: item for item in wardrobe}
            colors = [by_id[item_id].color for item_id in item_ids if item_id in by_id]
            harmony = analyze_color_harmony(colors)

            log_event(
                LOGGER,
                logging.INFO,
                "outfit_reviewed",
                correlation_id=correlation_id,
                repeat_kind=analysis.warning.kind,
                harmony_score=harmony.score,
            )
            return {
                "repeat": analysis,
                "harmony": harmony,
                "matching_colors": suggest_matching_colors(colors),
                "alternatives": generate_alternatives(item_ids, wardrobe) if analysis.warning.has_warning else [],
            }

    def save_builder_outfit(self, builder: OutfitBuilder, target_date: date, notes: str = "") -> SaveOutcome:
        with operation_context("app:save_builder_outfit") as correlation_id:
            outcome = builder.save(target_date, self.wardrobe_store, self.outfit_store, notes=notes)
            log_event(
                LOGGER,
                logging.INFO if outcome.success else logging.WARNING,
                "builder_outfit_saved" if outcome.success else "builder_outfit_not_saved",
                correlation_id=correlation_id,
                reason=outcome.reason,
            )
            return outcome

    def save_outfit_items(self, item_ids: Sequence[str], target_date: date, notes: str = "") -> SaveOutcome:
        """Record an outfit directly from item ids, as a calendar entry does.

        Every known id is kept, including several from one category. Unknown
        ids are dropped before the completeness check.
        """

        by_id = {item.item_id: item for item in self.wardrobe_store.list()}
        unknown = [item_id for item_id in item_ids if item_id not in by_id]
        if unknown:
            log_event(LOGGER, logging.DEBUG, "outfit_items_unknown", item_ids=unknown)
        items = [by_id[item_id] for item_id in item_ids if item_id in by_id]
        return record_outfit(items, target_date, self.wardrobe_store, self.outfit_store, notes=notes)

    # History
    def yesterday_outfit(self, target_date: date | None = None) -> Optional[Outfit]:
        target_date = target_date or date.today()
        return self.outfit_store.find_by_date(target_date - timedelta(days=1))

    def recent_outfits(self, target_date: date | None = None, limit: int = 10) -> List[Outfit]:
        """Outfits on or before ``target_date``, newest first."""

        target_date = target_date or date.today()
        outfits = [outfit for outfit in self.outfit_store.list_all() if outfit.date <= target_date]
        outfits.sort(key=lambda outfit: outfit.date, reverse=True)
        return outfits[:limit]

    def similar_outfits(self, outfit_id: str, limit: int = 5) -> List[SimilarOutfit]:
        outfits = self.outfit_store.list_all()
        target = next((outfit for outfit in outfits if outfit.outfit_id == outfit_id), None)
        if target is None:
            return []
        return find_similar_outfits(target, outfits, self.wardrobe_store.list(), limit=limit)

    def stats(self, today: date | None = None) -> WardrobeStats:
        return calculate_wardrobe_stats(self.wardrobe_store.list(), self.outfit_store.list_all(), today=today)

    def distributions(self) -> Dict[str, List[Share]]:
        """Color and category shares of the wardrobe, largest first."""

        wardrobe = self.wardrobe_store.list()
        return {"colors": get_color_distribution(wardrobe), "categories": get_category_distribution(wardrobe)}

    # Trips
    def plan_trip(
        self,
        destination: str,
        start_date: date,
        end_date: date,
        trip_type: str,
        notes: str = "",
    ) -> Dict[str, Any]:
        """Create a trip with a forecast for its length. Weather may be empty."""

        try:
            request = TripRequest.model_validate(
                {
                    "destination": destination,
                    "start_date": start_date,
                    "end_date": end_date,
                    "trip_type": trip_type,
                }
            )
        except ValidationError as exc:
            return validation_failure("Invalid trip request", exc)

        days = min((request.end_date - request.start_date).days + 1, MAX_FORECAST_DAYS)
        weather = self.weather_source.forecast(request.destination, days)
        if not weather:
            log_event(LOGGER, logging.WARNING, "trip_forecast_unavailable", destination=request.destination)

        trip = Trip(
            trip_id=generate_id(),
            destination=request.destination,
            start_date=request.start_date,
            end_date=request.end_date,
            trip_type=request.trip_type,
            weather=weather,
            notes=notes,
        )
        if not self.trip_store.add(trip):
            return {"status": "error", "message": "Could not save trip"}
        log_event(LOGGER, logging.INFO, "trip_planned", trip_id=trip.trip_id, days=trip.duration_days)
        return {"status": "ok", "trip": trip}

    def trip_outfit_candidates(self, trip: Trip) -> Dict[date, Dict[str, List[ClothingItem]]]:
        """Per trip day with weather, the candidate pool of every builder category.

        Forecast entries are paired with trip days in order.
        """

        wardrobe = self.wardrobe_store.list()
        plan: Dict[date, Dict[str, List[ClothingItem]]] = {}
        for offset, snapshot in enumerate(trip.weather[: trip.duration_days]):
            day = trip.start_date + timedelta(days=offset)
            plan[day] = {
                category: get_weather_appropriate_items(wardrobe, snapshot, category=category, today=day)
                for category in BUILDER_CATEGORIES
            }
        return plan


__all__ = ["WardrobePlannerApp"]
