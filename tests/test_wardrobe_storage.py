"""Key-value backends, stores and model serialisation tests."""

from __future__ import annotations

import json
import sys
from datetime import date
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from models import taxonomy
from models.clothing_item import ClothingItem, from_dict
from models.outfit import Outfit, Trip
from models.weather import WeatherSnapshot
from tools.storage import (
    InMemoryKeyValueStore,
    JSONFileKeyValueStore,
    SQLiteKeyValueStore,
    build_key_value_store,
)
from tools.wardrobe_store import (
    KeyValueOutfitStore,
    KeyValueTripStore,
    KeyValueWardrobeStore,
    generate_id,
)


@pytest.fixture()
def sample_item() -> ClothingItem:
    return ClothingItem(
        item_id="item-1",
        image="data:image/png;base64,AAAA",
        category="Tops",
        color="Navy Blue",
        season=["Spring", "all_season", "spring"],
        notes="Linen shirt",
    )


@pytest.fixture(params=["memory", "json", "sqlite"])
def kv_store(request, tmp_path: Path):
    if request.param == "memory":
        return InMemoryKeyValueStore()
    if request.param == "json":
        return JSONFileKeyValueStore(tmp_path / "store")
    return SQLiteKeyValueStore(tmp_path / "planner.db")


def test_taxonomy_validation() -> None:
    assert taxonomy.validate_category("Outerwear") == "outerwear"
    assert taxonomy.validate_seasons(["Fall", "fall", "ALL_SEASON"]) == ["fall", "all-season"]
    with pytest.raises(ValueError):
        taxonomy.validate_category("hats")
    with pytest.raises(ValueError):
        taxonomy.validate_seasons([])
    with pytest.raises(ValueError):
        taxonomy.validate_condition("hail")


def test_clothing_item_normalises_and_validates(sample_item: ClothingItem) -> None:
    assert sample_item.category == "tops"
    assert sample_item.season == ["spring", "all-season"]
    assert sample_item.wear_count == 0
    assert sample_item.last_worn is None

    with pytest.raises(ValueError):
        ClothingItem(item_id="x", image="", category="tops", color="red", season=["spring"], wear_count=-1)


def test_from_dict_requires_identity_category_and_season() -> None:
    with pytest.raises(ValueError):
        from_dict({"item_id": "x", "category": "tops"})

    item = from_dict({"item_id": "x", "category": "shoes", "season": "winter", "last_worn": "2025-01-03"})
    assert item.season == ["winter"]
    assert item.last_worn == date(2025, 1, 3)


def test_outfit_and_trip_models() -> None:
    outfit = Outfit(outfit_id="o1", date="2025-05-01", items=["a", "b", "a"])
    assert outfit.items == ["a", "b"]
    assert Outfit.from_dict(json.loads(json.dumps(outfit.to_dict()))) == outfit

    trip = Trip(
        trip_id="t1",
        destination="Lisbon",
        start_date="2025-06-01",
        end_date="2025-06-03",
        trip_type="Vacation",
        outfits={"2025-06-01": "o1"},
        weather=[{"temp": 25, "condition": "clear", "timestamp": "2025-06-01T12:00:00"}],
    )
    assert trip.duration_days == 3
    assert trip.outfits == {date(2025, 6, 1): "o1"}
    assert isinstance(trip.weather[0], WeatherSnapshot)
    assert Trip.from_dict(trip.to_dict()) == trip

    with pytest.raises(ValueError):
        Trip(trip_id="t2", destination="x", start_date="2025-06-03", end_date="2025-06-01", trip_type="weekend")


def test_key_value_round_trip(kv_store) -> None:
    assert kv_store.get("wardrobe") is None
    assert kv_store.set("wardrobe", [{"item_id": "a"}]) is True
    assert kv_store.get("wardrobe") == [{"item_id": "a"}]
    assert kv_store.remove("wardrobe") is True
    assert kv_store.get("wardrobe") is None


def test_unserialisable_value_reports_failure(kv_store) -> None:
    assert kv_store.set("wardrobe", {"when": object()}) is False


def test_build_key_value_store_by_name(tmp_path: Path) -> None:
    assert isinstance(build_key_value_store("memory"), InMemoryKeyValueStore)
    assert isinstance(build_key_value_store("SQLite", str(tmp_path / "x.db")), SQLiteKeyValueStore)
    assert isinstance(build_key_value_store("json", str(tmp_path / "json")), JSONFileKeyValueStore)


def test_wardrobe_store_crud(kv_store, sample_item: ClothingItem) -> None:
    store = KeyValueWardrobeStore(kv_store)
    assert store.add(sample_item) is True
    assert store.get("item-1") == sample_item

    assert store.update("item-1", {"wear_count": 2, "last_worn": date(2025, 5, 2), "item_id": "ignored"}) is True
    updated = store.get("item-1")
    assert updated.wear_count == 2
    assert updated.last_worn == date(2025, 5, 2)
    assert updated.created_at == sample_item.created_at

    assert store.update("item-1", {"category": "socks"}) is False
    assert store.get("item-1").category == "tops"
    assert store.update("unknown", {"wear_count": 1}) is False

    assert store.delete("item-1") is True
    assert store.list() == []


def test_wardrobe_store_batch_update_is_all_or_nothing(kv_store, sample_item: ClothingItem) -> None:
    store = KeyValueWardrobeStore(kv_store)
    second = ClothingItem(item_id="item-2", image="", category="shoes", color="white", season=["summer"])
    store.add(sample_item)
    store.add(second)

    assert store.update_many({"item-1": {"wear_count": 5}, "missing": {"wear_count": 1}}) is False
    assert store.update_many({"item-1": {"wear_count": 5}, "item-2": {"wear_count": -1}}) is False
    assert [item.wear_count for item in store.list()] == [0, 0]

    assert store.update_many({"item-1": {"wear_count": 5}, "item-2": {"last_worn": date(2025, 5, 3)}}) is True
    assert store.get("item-1").wear_count == 5
    assert store.get("item-2").last_worn == date(2025, 5, 3)


def test_wardrobe_store_skips_corrupt_records(sample_item: ClothingItem) -> None:
    kv = InMemoryKeyValueStore()
    kv.set("wardrobe", [sample_item.to_dict(), {"item_id": "broken", "category": "socks", "season": ["spring"]}])
    assert [item.item_id for item in KeyValueWardrobeStore(kv).list()] == ["item-1"]


def test_outfit_store_upserts_by_date(kv_store) -> None:
    store = KeyValueOutfitStore(kv_store)
    store.upsert_by_date(Outfit(outfit_id="first", date=date(2025, 5, 1), items=["a"]))
    store.upsert_by_date(Outfit(outfit_id="other-day", date=date(2025, 5, 2), items=["b"]))
    store.upsert_by_date(Outfit(outfit_id="second", date=date(2025, 5, 1), items=["c"]))

    assert sorted(outfit.outfit_id for outfit in store.list_all()) == ["first", "other-day"]
    assert store.find_by_date("2025-05-01").items == ["c"]
    assert store.find_by_date(date(2025, 4, 1)) is None

    assert store.update("first", {"notes": "rainy day"}) is True
    assert store.find_by_date(date(2025, 5, 1)).notes == "rainy day"
    assert store.delete("first") is True
    assert store.find_by_date(date(2025, 5, 1)) is None


def test_trip_store_crud(kv_store) -> None:
    store = KeyValueTripStore(kv_store)
    trip = Trip(trip_id="t1", destination="Oslo", start_date="2025-12-01", end_date="2025-12-04", trip_type="business")

    assert store.add(trip) is True
    assert store.get("t1") == trip
    assert store.update("t1", {"packing_list": ["coat"], "end_date": "2025-11-01"}) is False
    assert store.update("t1", {"packing_list": ["coat"]}) is True
    assert store.get("t1").packing_list == ["coat"]
    assert store.delete("t1") is True
    assert store.list_all() == []


def test_generate_id_is_unique_and_timestamped() -> None:
    ids = {generate_id() for _ in range(50)}
    assert len(ids) == 50
    timestamp, suffix = next(iter(ids)).split("-")
    assert timestamp.isdigit()
    assert len(suffix) == 9
