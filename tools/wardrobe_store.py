"""Wardrobe, outfit and trip stores on top of a key-value backend.

Each collection lives under a single storage key and every write replaces the
whole collection, so a write either lands completely or not at all. Writes
report failure as ``False``; nothing here retries.
"""
from __future__ import annotations

import logging
import secrets
import time
from dataclasses import replace
from datetime import date
from typing import Any, Callable, Dict, List, Optional, TypeVar

from models.clothing_item import ClothingItem, from_dict, parse_date
from models.outfit import Outfit, Trip
from tools.observability import instrument_operation
from tools.storage import OUTFITS_KEY, TRIPS_KEY, WARDROBE_KEY, KeyValueStore

LOGGER = logging.getLogger(__name__)
T = TypeVar("T")


def generate_id() -> str:
    """Millisecond timestamp plus a short random suffix."""

    return f"{int(time.time() * 1000)}-{secrets.token_hex(5)[:9]}"


def _load_records(kv: KeyValueStore, key: str, factory: Callable[[Dict[str, Any]], T]) -> List[T]:
    records: List[T] = []
    for raw in kv.get(key) or []:
        try:
            records.append(factory(raw))
        except (KeyError, TypeError, ValueError) as exc:
            LOGGER.warning("Skipping stored %s entry due to validation error: %s", key, exc)
    return records


def _merge(record: T, fields: Dict[str, Any], id_field: str, factory: Callable[[Dict[str, Any]], T]) -> Optional[T]:
    payload = record.to_dict()
    for field_name, value in fields.items():
        if field_name == id_field or field_name not in payload:
            continue
        if isinstance(value, date):
            value = value.isoformat()
        payload[field_name] = value
    try:
        return factory(payload)
    except (KeyError, TypeError, ValueError) as exc:
        LOGGER.warning("Rejected update for %s: %s", payload.get(id_field), exc)
        return None


class WardrobeStore:
    """Persistence interface for clothing items."""

    def list(self) -> List[ClothingItem]:
        raise NotImplementedError

    def get(self, item_id: str) -> Optional[ClothingItem]:
        raise NotImplementedError

    def add(self, item: ClothingItem) -> bool:
        raise NotImplementedError

    def update(self, item_id: str, fields: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def update_many(self, updates: Dict[str, Dict[str, Any]]) -> bool:
        """Apply every update or none of them."""

        raise NotImplementedError

    def delete(self, item_id: str) -> bool:
        raise NotImplementedError


class OutfitStore:
    """Persistence interface for outfits, at most one per date."""

    def list_all(self) -> List[Outfit]:
        raise NotImplementedError

    def upsert_by_date(self, outfit: Outfit) -> bool:
        raise NotImplementedError

    def find_by_date(self, day: date) -> Optional[Outfit]:
        raise NotImplementedError

    def update(self, outfit_id: str, fields: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, outfit_id: str) -> bool:
        raise NotImplementedError


class TripStore:
    """Persistence interface for trips."""

    def list_all(self) -> List[Trip]:
        raise NotImplementedError

    def get(self, trip_id: str) -> Optional[Trip]:
        raise NotImplementedError

    def add(self, trip: Trip) -> bool:
        raise NotImplementedError

    def update(self, trip_id: str, fields: Dict[str, Any]) -> bool:
        raise NotImplementedError

    def delete(self, trip_id: str) -> bool:
        raise NotImplementedError


class KeyValueWardrobeStore(WardrobeStore):
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _save(self, items: List[ClothingItem]) -> bool:
        return self.kv.set(WARDROBE_KEY, [item.to_dict() for item in items])

    def list(self) -> List[ClothingItem]:
        return _load_records(self.kv, WARDROBE_KEY, from_dict)

    def get(self, item_id: str) -> Optional[ClothingItem]:
        return next((item for item in self.list() if item.item_id == item_id), None)

    @instrument_operation("wardrobe.add")
    def add(self, item: ClothingItem) -> bool:
        items = self.list()
        items.append(item)
        return self._save(items)

    @instrument_operation("wardrobe.update")
    def update(self, item_id: str, fields: Dict[str, Any]) -> bool:
        items = self.list()
        for index, item in enumerate(items):
            if item.item_id == item_id:
                merged = _merge(item, fields, "item_id", from_dict)
                if merged is None:
                    return False
                items[index] = merged
                return self._save(items)
        return False

    @instrument_operation("wardrobe.update_many")
    def update_many(self, updates: Dict[str, Dict[str, Any]]) -> bool:
        items = self.list()
        positions = {item.item_id: index for index, item in enumerate(items)}
        missing = [item_id for item_id in updates if item_id not in positions]
        if missing:
            LOGGER.warning("Rejected batch update, unknown items: %s", missing)
            return False
        for item_id, fields in updates.items():
            merged = _merge(items[positions[item_id]], fields, "item_id", from_dict)
            if merged is None:
                return False
            items[positions[item_id]] = merged
        return self._save(items)

    @instrument_operation("wardrobe.delete")
    def delete(self, item_id: str) -> bool:
        return self._save([item for item in self.list() if item.item_id != item_id])


class KeyValueOutfitStore(OutfitStore):
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _save(self, outfits: List[Outfit]) -> bool:
        return self.kv.set(OUTFITS_KEY, [outfit.to_dict() for outfit in outfits])

    def list_all(self) -> List[Outfit]:
        return _load_records(self.kv, OUTFITS_KEY, Outfit.from_dict)

    @instrument_operation("outfits.upsert_by_date")
    def upsert_by_date(self, outfit: Outfit) -> bool:
        """Store ``outfit`` for its date; a replaced outfit keeps its id."""

        outfits = self.list_all()
        for index, existing in enumerate(outfits):
            if existing.date == outfit.date:
                outfits[index] = replace(outfit, outfit_id=existing.outfit_id)
                return self._save(outfits)
        outfits.append(outfit)
        return self._save(outfits)

    def find_by_date(self, day: date | str) -> Optional[Outfit]:
        target = parse_date(day)
        return next((outfit for outfit in self.list_all() if outfit.date == target), None)

    @instrument_operation("outfits.update")
    def update(self, outfit_id: str, fields: Dict[str, Any]) -> bool:
        outfits = self.list_all()
        for index, outfit in enumerate(outfits):
            if outfit.outfit_id == outfit_id:
                merged = _merge(outfit, fields, "outfit_id", Outfit.from_dict)
                if merged is None:
                    return False
                outfits[index] = merged
                return self._save(outfits)
        return False

    @instrument_operation("outfits.delete")
    def delete(self, outfit_id: str) -> bool:
        return self._save([outfit for outfit in self.list_all() if outfit.outfit_id != outfit_id])


class KeyValueTripStore(TripStore):
    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _save(self, trips: List[Trip]) -> bool:
        return self.kv.set(TRIPS_KEY, [trip.to_dict() for trip in trips])

    def list_all(self) -> List[Trip]:
        return _load_records(self.kv, TRIPS_KEY, Trip.from_dict)

    def get(self, trip_id: str) -> Optional[Trip]:
        return next((trip for trip in self.list_all() if trip.trip_id == trip_id), None)

    @instrument_operation("trips.add")
    def add(self, trip: Trip) -> bool:
        trips = self.list_all()
        trips.append(trip)
        return self._save(trips)

    @instrument_operation("trips.update")
    def update(self, trip_id: str, fields: Dict[str, Any]) -> bool:
        trips = self.list_all()
        for index, trip in enumerate(trips):
            if trip.trip_id == trip_id:
                merged = _merge(trip, fields, "trip_id", Trip.from_dict)
                if merged is None:
                    return False
                trips[index] = merged
                return self._save(trips)
        return False

    @instrument_operation("trips.delete")
    def delete(self, trip_id: str) -> bool:
        return self._save([trip for trip in self.list_all() if trip.trip_id != trip_id])


__all__ = [
    "generate_id",
    "WardrobeStore",
    "OutfitStore",
    "TripStore",
    "KeyValueWardrobeStore",
    "KeyValueOutfitStore",
    "KeyValueTripStore",
]
