"""Guided, one-category-at-a-time outfit assembly."""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, fields
from datetime import date
from typing import Dict, List, Optional, Sequence, Union

from logic.weather_matching import get_weather_appropriate_items
from models.clothing_item import ClothingItem
from models.outfit import Outfit
from models.taxonomy import BUILDER_CATEGORIES, REQUIRED_CATEGORIES, validate_category
from models.weather import WeatherSnapshot
from planner_app.logging_config import log_event
from tools.wardrobe_store import OutfitStore, WardrobeStore, generate_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Browsing:
    """Viewing the candidate pool of one category."""

    category: str
    index: int = 0


@dataclass(frozen=True)
class Preview:
    """Every category resolved; the outfit is ready for review."""


BuilderState = Union[Browsing, Preview]


@dataclass
class OutfitSelection:
    """One optional slot per category."""

    tops: Optional[ClothingItem] = None
    bottoms: Optional[ClothingItem] = None
    dresses: Optional[ClothingItem] = None
    outerwear: Optional[ClothingItem] = None
    shoes: Optional[ClothingItem] = None
    accessories: Optional[ClothingItem] = None

    def get(self, category: str) -> Optional[ClothingItem]:
        return getattr(self, validate_category(category))

    def set(self, category: str, item: Optional[ClothingItem]) -> None:
        setattr(self, validate_category(category), item)

    def resolved_categories(self) -> List[str]:
        return [slot.name for slot in fields(self) if getattr(self, slot.name) is not None]

    def items(self) -> List[ClothingItem]:
        return [getattr(self, name) for name in self.resolved_categories()]

    def item_ids(self) -> List[str]:
        return [item.item_id for item in self.items()]

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, category) is not None for category in REQUIRED_CATEGORIES)


@dataclass(frozen=True)
class SaveOutcome:
    success: bool
    outfit: Optional[Outfit] = None
    reason: Optional[str] = None
    failed_items: List[str] = field(default_factory=list)


class OutfitBuilder:
    """State machine walking tops, bottoms, shoes, outerwear and accessories.

    The builder starts browsing the first category at index 0. Selecting or
    skipping a category moves to the next one that has candidates; when none
    is left the builder enters :class:`Preview`. Categories with an empty pool
    can still be browsed through ``go_to_category`` and skipped from there.
    Candidate pools are recomputed from the wardrobe and weather on every
    access so ``update_context`` takes effect immediately.
    """

    def __init__(
        self,
        wardrobe_items: Sequence[ClothingItem],
        weather: Optional[WeatherSnapshot] = None,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.wardrobe_items: List[ClothingItem] = list(wardrobe_items)
        self.weather = weather
        self.today = today
        self.rng = rng or random.Random()
        self.state: BuilderState = Browsing(BUILDER_CATEGORIES[0])
        self.selection = OutfitSelection()

    # Pools and cursor
    def candidates_for(self, category: str) -> List[ClothingItem]:
        return get_weather_appropriate_items(self.wardrobe_items, self.weather, category=category, today=self.today)

    @property
    def candidates(self) -> List[ClothingItem]:
        if not isinstance(self.state, Browsing):
            return []
        return self.candidates_for(self.state.category)

    @property
    def current_category(self) -> Optional[str]:
        return self.state.category if isinstance(self.state, Browsing) else None

    @property
    def current_index(self) -> int:
        return self.state.index if isinstance(self.state, Browsing) else 0

    @property
    def is_preview(self) -> bool:
        return isinstance(self.state, Preview)

    @property
    def current_item(self) -> Optional[ClothingItem]:
        pool = self.candidates
        if 0 <= self.current_index < len(pool):
            return pool[self.current_index]
        return None

    def next_item(self) -> Optional[ClothingItem]:
        if isinstance(self.state, Browsing) and self.state.index < len(self.candidates) - 1:
            self.state = Browsing(self.state.category, self.state.index + 1)
        return self.current_item

    def previous_item(self) -> Optional[ClothingItem]:
        if isinstance(self.state, Browsing) and self.state.index > 0:
            self.state = Browsing(self.state.category, self.state.index - 1)
        return self.current_item

    # Category transitions
    def _advance(self) -> None:
        position = BUILDER_CATEGORIES.index(self.state.category)
        for category in BUILDER_CATEGORIES[position + 1 :]:
            if self.candidates_for(category):
                self.state = Browsing(category)
                return
            logger.debug("Passing over %s, no candidates", category)
        self.state = Preview()
        logger.info("Outfit builder reached preview with %s", self.selection.resolved_categories())

    def select_current_item(self) -> bool:
        """Commit the viewed item and move on. Returns False when nothing is viewed."""

        item = self.current_item
        if item is None:
            logger.debug("Nothing to select in %s", self.current_category)
            return False
        self.selection.set(self.state.category, item)
        self._advance()
        return True

    def skip_category(self) -> None:
        if isinstance(self.state, Browsing):
            self._advance()

    def go_to_category(self, category: str) -> None:
        category = validate_category(category)
        if category not in BUILDER_CATEGORIES:
            raise ValueError(f"Category '{category}' is not part of the builder flow")
        self.state = Browsing(category)

    def go_to_previous_category(self) -> None:
        if isinstance(self.state, Preview):
            self.state = Browsing(BUILDER_CATEGORIES[-1])
            return
        position = BUILDER_CATEGORIES.index(self.state.category)
        if position > 0:
            self.state = Browsing(BUILDER_CATEGORIES[position - 1])

    # Selection editing
    def select_item(self, item: ClothingItem) -> None:
        """Put an item into its category slot without moving the cursor."""

        self.selection.set(item.category, item)

    def clear_category(self, category: str) -> None:
        self.selection.set(category, None)

    def reset(self) -> None:
        self.selection = OutfitSelection()
        self.state = Browsing(BUILDER_CATEGORIES[0])

    def generate_random_outfit(self) -> OutfitSelection:
        """Draw one random candidate per category and jump to preview."""

        selection = OutfitSelection()
        for category in BUILDER_CATEGORIES:
            pool = self.candidates_for(category)
            if pool:
                selection.set(category, self.rng.choice(pool))
        self.selection = selection
        self.state = Preview()
        logger.info("Generated random outfit covering %s", selection.resolved_categories())
        return selection

    def load_outfit(self, item_ids: Sequence[str]) -> OutfitSelection:
        """Replace the selection with recorded items. Unknown ids are skipped."""

        by_id: Dict[str, ClothingItem] = {item.item_id: item for item in self.wardrobe_items}
        selection = OutfitSelection()
        for item_id in item_ids:
            item = by_id.get(item_id)
            if item is None:
                logger.debug("Skipping unknown item %s while loading outfit", item_id)
                continue
            selection.set(item.category, item)
        self.selection = selection
        self.state = Preview()
        return selection

    # Queries
    def selected_item_ids(self) -> List[str]:
        return self.selection.item_ids()

    def selected_items(self) -> List[ClothingItem]:
        return self.selection.items()

    def is_outfit_complete(self) -> bool:
        return self.selection.is_complete

    def has_current_category_selection(self) -> bool:
        category = self.current_category
        return category is not None and self.selection.get(category) is not None

    def completed_categories(self) -> List[str]:
        return self.selection.resolved_categories()

    def update_context(
        self, wardrobe_items: Sequence[ClothingItem], weather: Optional[WeatherSnapshot] = None
    ) -> None:
        """Swap in a fresh wardrobe and weather, keeping the cursor in range."""

        self.wardrobe_items = list(wardrobe_items)
        self.weather = weather
        if isinstance(self.state, Browsing) and self.state.index >= len(self.candidates):
            self.state = Browsing(self.state.category)

    def save(
        self,
        target_date: date,
        wardrobe_store: WardrobeStore,
        outfit_store: OutfitStore,
        notes: str = "",
    ) -> SaveOutcome:
        return save_outfit(
            self.selection, target_date, wardrobe_store, outfit_store, weather=self.weather, notes=notes
        )


def covers_required_categories(items: Sequence[ClothingItem]) -> bool:
    present = {item.category for item in items}
    return all(category in present for category in REQUIRED_CATEGORIES)


def record_outfit(
    items: Sequence[ClothingItem],
    target_date: date,
    wardrobe_store: WardrobeStore,
    outfit_store: OutfitStore,
    weather: Optional[WeatherSnapshot] = None,
    notes: str = "",
) -> SaveOutcome:
    """Persist ``items`` as the outfit for ``target_date`` and count the wear.

    Items may share a category; repeated ids count once. The outfit must cover
    tops, bottoms and shoes. Wear counts and ``last_worn`` are written in one
    batch before the outfit, and put back if the outfit write fails, so a failed
    save leaves both stores as they were and can simply be retried. ``last_worn``
    is set to the target date even when the item was already worn later.
    """

    unique: Dict[str, ClothingItem] = {}
    for item in items:
        unique.setdefault(item.item_id, item)
    chosen = list(unique.values())

    if not covers_required_categories(chosen):
        log_event(
            logger,
            logging.WARNING,
            "outfit_save_rejected",
            reason="incomplete_outfit",
            resolved=sorted({item.category for item in chosen}),
        )
        return SaveOutcome(success=False, reason="incomplete_outfit")

    stored = {item_id: wardrobe_store.get(item_id) for item_id in unique}
    missing = [item_id for item_id, item in stored.items() if item is None]
    if missing:
        log_event(logger, logging.ERROR, "wear_update_failed", failed_items=missing)
        return SaveOutcome(success=False, reason="wear_update_failed", failed_items=missing)

    bumped = {
        item_id: {"wear_count": item.wear_count + 1, "last_worn": target_date} for item_id, item in stored.items()
    }
    if not wardrobe_store.update_many(bumped):
        log_event(logger, logging.ERROR, "wear_update_failed", failed_items=list(unique))
        return SaveOutcome(success=False, reason="wear_update_failed", failed_items=list(unique))

    existing = outfit_store.find_by_date(target_date)
    outfit = Outfit(
        outfit_id=existing.outfit_id if existing else generate_id(),
        date=target_date,
        items=list(unique),
        notes=notes,
        weather=weather,
    )
    if not outfit_store.upsert_by_date(outfit):
        restored = wardrobe_store.update_many(
            {
                item_id: {"wear_count": item.wear_count, "last_worn": item.last_worn}
                for item_id, item in stored.items()
            }
        )
        log_event(
            logger,
            logging.ERROR,
            "outfit_save_failed",
            outfit_date=target_date.isoformat(),
            wear_restored=restored,
        )
        return SaveOutcome(success=False, outfit=outfit, reason="outfit_write_failed")

    log_event(
        logger,
        logging.INFO,
        "outfit_saved",
        outfit_id=outfit.outfit_id,
        outfit_date=target_date.isoformat(),
        item_count=len(outfit.items),
    )
    return SaveOutcome(success=True, outfit=outfit)


def save_outfit(
    selection: OutfitSelection,
    target_date: date,
    wardrobe_store: WardrobeStore,
    outfit_store: OutfitStore,
    weather: Optional[WeatherSnapshot] = None,
    notes: str = "",
) -> SaveOutcome:
    """Persist a builder selection; see :func:`record_outfit`."""

    return record_outfit(
        selection.items(), target_date, wardrobe_store, outfit_store, weather=weather, notes=notes
    )


__all__ = [
    "Browsing",
    "Preview",
    "BuilderState",
    "OutfitSelection",
    "OutfitBuilder",
    "SaveOutcome",
    "covers_required_categories",
    "record_outfit",
    "save_outfit",
]
