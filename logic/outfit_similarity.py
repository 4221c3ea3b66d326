"""Find historical outfits that resemble a target outfit, color list or structure."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Set

from logic.repeat_checker import jaccard_similarity
from models.clothing_item import ClothingItem
from models.color_theory import analyze_color_harmony
from models.outfit import Outfit

logger = logging.getLogger(__name__)

ITEM_OVERLAP_WEIGHT = 50
COLOR_MATCH_BONUS = 25
STRUCTURE_MATCH_BONUS = 25
COLOR_OVERLAP_THRESHOLD = 0.4
SIMILAR_SCORE_THRESHOLD = 20
COLOR_SCORE_THRESHOLD = 30
ALTERNATIVE_MIN_SCORE = 70


@dataclass(frozen=True)
class SimilarOutfit:
    outfit: Outfit
    similarity_score: float
    reason: str
    items: List[ClothingItem]


def resolve_items(item_ids: Sequence[str], wardrobe_items: Sequence[ClothingItem]) -> List[ClothingItem]:
    """Map ids to wardrobe items, dropping ids that no longer exist."""

    by_id: Dict[str, ClothingItem] = {item.item_id: item for item in wardrobe_items}
    return [by_id[item_id] for item_id in item_ids if item_id in by_id]


def _color_set(item_ids: Sequence[str], wardrobe_items: Sequence[ClothingItem]) -> Set[str]:
    return {item.color.lower() for item in resolve_items(item_ids, wardrobe_items)}


def _category_set(item_ids: Sequence[str], wardrobe_items: Sequence[ClothingItem]) -> Set[str]:
    return {item.category for item in resolve_items(item_ids, wardrobe_items)}


def find_similar_outfits(
    target: Outfit,
    all_outfits: Sequence[Outfit],
    wardrobe_items: Sequence[ClothingItem],
    limit: int = 5,
) -> List[SimilarOutfit]:
    """Score other outfits by shared items, shared colors and shared structure."""

    target_colors = _color_set(target.items, wardrobe_items)
    target_categories = _category_set(target.items, wardrobe_items)
    matches: List[SimilarOutfit] = []

    for outfit in all_outfits:
        if outfit.outfit_id == target.outfit_id or not outfit.items:
            continue

        reasons: List[str] = []
        item_overlap = jaccard_similarity(target.items, outfit.items)
        score = item_overlap * ITEM_OVERLAP_WEIGHT
        if item_overlap > 0.5:
            reasons.append("shares many items")
        if jaccard_similarity(target_colors, _color_set(outfit.items, wardrobe_items)) >= COLOR_OVERLAP_THRESHOLD:
            score += COLOR_MATCH_BONUS
            reasons.append("similar colors")
        if _category_set(outfit.items, wardrobe_items) == target_categories:
            score += STRUCTURE_MATCH_BONUS
            reasons.append("same outfit structure")

        if score > SIMILAR_SCORE_THRESHOLD:
            matches.append(
                SimilarOutfit(
                    outfit=outfit,
                    similarity_score=score,
                    reason=", ".join(reasons),
                    items=resolve_items(outfit.items, wardrobe_items),
                )
            )

    matches.sort(key=lambda match: match.similarity_score, reverse=True)
    logger.debug("Found %s outfits similar to %s", len(matches), target.outfit_id)
    return matches[:limit]


def find_outfits_by_color(
    target_colors: Sequence[str],
    all_outfits: Sequence[Outfit],
    wardrobe_items: Sequence[ClothingItem],
    limit: int = 5,
) -> List[SimilarOutfit]:
    """Outfits whose color labels overlap the target colors by more than 30%."""

    wanted = {color.lower() for color in target_colors}
    matches: List[SimilarOutfit] = []
    for outfit in all_outfits:
        if not outfit.items:
            continue
        score = jaccard_similarity(wanted, _color_set(outfit.items, wardrobe_items)) * 100
        if score > COLOR_SCORE_THRESHOLD:
            matches.append(
                SimilarOutfit(
                    outfit=outfit,
                    similarity_score=score,
                    reason="matching color scheme",
                    items=resolve_items(outfit.items, wardrobe_items),
                )
            )
    matches.sort(key=lambda match: match.similarity_score, reverse=True)
    return matches[:limit]


def find_outfits_by_structure(
    target_categories: Sequence[str],
    all_outfits: Sequence[Outfit],
    wardrobe_items: Sequence[ClothingItem],
    limit: int = 5,
) -> List[SimilarOutfit]:
    """Outfits built from exactly the same set of categories, newest first."""

    wanted = set(target_categories)
    matches = [
        SimilarOutfit(
            outfit=outfit,
            similarity_score=100,
            reason="same outfit structure",
            items=resolve_items(outfit.items, wardrobe_items),
        )
        for outfit in all_outfits
        if outfit.items and _category_set(outfit.items, wardrobe_items) == wanted
    ]
    matches.sort(key=lambda match: match.outfit.date, reverse=True)
    return matches[:limit]


def generate_alternatives(
    current_items: Sequence[str],
    wardrobe_items: Sequence[ClothingItem],
    limit: int = 3,
) -> List[List[ClothingItem]]:
    """Swap one category at a time and keep swaps that stay color-harmonious."""

    current = resolve_items(current_items, wardrobe_items)
    if not current:
        return []

    scored: List[tuple] = []
    seen_categories: List[str] = []
    for item in current:
        if item.category in seen_categories:
            continue
        seen_categories.append(item.category)
        for alternative in wardrobe_items:
            if alternative.category != item.category or alternative.item_id in current_items:
                continue
            candidate = [alternative if piece.category == item.category else piece for piece in current]
            harmony = analyze_color_harmony([piece.color for piece in candidate])
            if harmony.is_harmonious and harmony.score >= ALTERNATIVE_MIN_SCORE:
                scored.append((harmony.score, candidate))

    scored.sort(key=lambda entry: entry[0], reverse=True)
    return [candidate for _, candidate in scored[:limit]]


__all__ = [
    "SimilarOutfit",
    "resolve_items",
    "find_similar_outfits",
    "find_outfits_by_color",
    "find_outfits_by_structure",
    "generate_alternatives",
]
