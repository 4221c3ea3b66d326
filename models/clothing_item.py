"""Clothing item data model and helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional

from models.taxonomy import validate_category, validate_seasons


def _ensure_list(value: Any) -> List[Any]:
    """Coerce a scalar or iterable into a list."""

    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def parse_date(value: Any) -> Optional[date]:
    """Accept ``date`` objects or ISO strings (date or datetime) and return a date."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value)
    if "T" in text:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    return date.fromisoformat(text)


def parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, datetime.min.time())
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


@dataclass
class ClothingItem:
    """Represents a single piece of clothing in the wardrobe."""

    item_id: str
    image: str
    category: str
    color: str
    season: List[str]
    notes: str = ""
    wear_count: int = 0
    last_worn: Optional[date] = None
    created_at: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        self.category = validate_category(self.category)
        self.season = validate_seasons(_ensure_list(self.season))
        self.color = str(self.color or "").strip()
        self.notes = str(self.notes or "")
        self.wear_count = int(self.wear_count)
        if self.wear_count < 0:
            raise ValueError("wear_count cannot be negative")
        self.last_worn = parse_date(self.last_worn)
        self.created_at = parse_datetime(self.created_at)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "item_id": self.item_id,
            "image": self.image,
            "category": self.category,
            "color": self.color,
            "season": list(self.season),
            "notes": self.notes,
            "wear_count": self.wear_count,
            "last_worn": self.last_worn.isoformat() if self.last_worn else None,
            "created_at": self.created_at.isoformat(),
        }


def from_dict(data: Dict[str, Any]) -> ClothingItem:
    """Factory to build a :class:`ClothingItem` from loose stored or posted data."""

    required_fields = ["item_id", "category", "season"]
    missing = [name for name in required_fields if not data.get(name)]
    if missing:
        raise ValueError(f"Missing required fields for ClothingItem: {missing}")

    return ClothingItem(
        item_id=str(data["item_id"]),
        image=str(data.get("image") or ""),
        category=str(data["category"]),
        color=str(data.get("color") or ""),
        season=_ensure_list(data.get("season")),
        notes=str(data.get("notes") or ""),
        wear_count=int(data.get("wear_count") or 0),
        last_worn=data.get("last_worn"),
        created_at=data.get("created_at") or datetime.now(),
    )


__all__ = ["ClothingItem", "from_dict", "parse_date", "parse_datetime"]
