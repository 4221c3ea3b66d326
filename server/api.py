"""FastAPI server exposing the wardrobe planner."""

import os
from dataclasses import asdict
from datetime import date
from functools import lru_cache

from fastapi import Depends, FastAPI, HTTPException

from logic.validation import (
    ClothingItemPayload,
    HarmonyRequest,
    OutfitSavePayload,
    RecommendationRequest,
    RepeatCheckRequest,
    TripRequest,
)
from models.color_theory import analyze_color_harmony
from models.weather import WeatherSnapshot
from planner_app.app import WardrobePlannerApp

app = FastAPI(title="Wardrobe Planner", version="0.1.0")


@lru_cache(maxsize=1)
def get_planner() -> WardrobePlannerApp:
    """Build the planner once per process. Tests override this dependency."""

    return WardrobePlannerApp()


@app.get("/healthz")
async def healthcheck(planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    """Lightweight readiness probe."""

    return {
        "status": "ok",
        "service": "wardrobe-planner",
        "environment": planner.config.environment or "local",
        "storage_backend": planner.config.storage_backend,
    }


@app.get("/wardrobe")
def list_wardrobe(category: str | None = None, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    return {"items": [item.to_dict() for item in planner.list_items(category)]}


@app.post("/wardrobe", status_code=201)
def add_wardrobe_item(request: ClothingItemPayload, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    response = planner.add_item(request.model_dump())
    if response.get("status") != "ok":
        raise HTTPException(status_code=400, detail=response.get("message", "could not add item"))
    return response["item"]


@app.post("/recommendations")
def recommendations(request: RecommendationRequest, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    """Weather-appropriate items; uses posted weather or looks it up by location."""

    if request.weather is not None:
        payload = request.weather
        weather = WeatherSnapshot(
            temp=payload.temp,
            feels_like=payload.feels_like if payload.feels_like is not None else payload.temp,
            condition=payload.condition,
            description=payload.description,
            wind_speed=payload.wind_speed,
            location=request.location,
        )
    else:
        weather = planner.current_weather(request.location)

    result = planner.recommendations(weather, category=request.category, today=request.today)
    return {
        "weather": weather.to_dict() if weather else None,
        "summary": result["summary"],
        "items": [item.to_dict() for item in result["items"]],
        "tips": [asdict(tip) for tip in result["tips"]],
        "suggested": [item.to_dict() for item in result["suggested"]],
    }


@app.post("/harmony")
def harmony(request: HarmonyRequest) -> dict:
    return asdict(analyze_color_harmony(request.colors))


@app.post("/outfits/review")
def review_outfit(request: RepeatCheckRequest, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    review = planner.review_outfit(request.item_ids, request.date)
    analysis = review["repeat"]
    return {
        "repeat": asdict(analysis.warning),
        "recent_wear": [
            {"item_id": wear.item_id, "days_ago": wear.days_ago} for wear in analysis.recent_wear_dates
        ],
        "suggestions": analysis.suggestions,
        "harmony": asdict(review["harmony"]),
        "matching_colors": review["matching_colors"],
        "alternatives": [[item.item_id for item in combo] for combo in review["alternatives"]],
    }


@app.post("/outfits", status_code=201)
def save_outfit(request: OutfitSavePayload, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    outcome = planner.save_outfit_items(request.item_ids, request.date, notes=request.notes)
    if not outcome.success:
        status_code = 422 if outcome.reason == "incomplete_outfit" else 500
        raise HTTPException(status_code=status_code, detail=outcome.reason)
    return outcome.outfit.to_dict()


@app.get("/outfits/{outfit_date}")
def outfit_for_date(outfit_date: date, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    outfit = planner.outfit_store.find_by_date(outfit_date)
    if outfit is None:
        raise HTTPException(status_code=404, detail="no outfit for this date")
    return outfit.to_dict()


@app.get("/outfits/{outfit_id}/similar")
def similar_outfits(outfit_id: str, limit: int = 5, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    matches = planner.similar_outfits(outfit_id, limit=limit)
    return {
        "matches": [
            {
                "outfit_id": match.outfit.outfit_id,
                "date": match.outfit.date.isoformat(),
                "similarity_score": match.similarity_score,
                "reason": match.reason,
            }
            for match in matches
        ]
    }


@app.get("/stats")
def wardrobe_stats(today: date | None = None, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    stats = planner.stats(today=today)
    shares = planner.distributions()
    return {
        "total_items": stats.total_items,
        "items_by_category": stats.items_by_category,
        "items_by_color": stats.items_by_color,
        "items_by_season": stats.items_by_season,
        "most_worn": [item.item_id for item in stats.most_worn_items],
        "least_worn": [item.item_id for item in stats.least_worn_items],
        "average_wear_count": stats.average_wear_count,
        "outfits_this_week": stats.outfits_this_week,
        "outfits_this_month": stats.outfits_this_month,
        "color_distribution": [asdict(share) for share in shares["colors"]],
        "category_distribution": [asdict(share) for share in shares["categories"]],
    }


@app.post("/trips", status_code=201)
def plan_trip(request: TripRequest, planner: WardrobePlannerApp = Depends(get_planner)) -> dict:
    response = planner.plan_trip(request.destination, request.start_date, request.end_date, request.trip_type)
    if response.get("status") != "ok":
        raise HTTPException(status_code=400, detail=response.get("message", "could not plan trip"))
    return response["trip"].to_dict()


def get_app() -> FastAPI:
    """Expose the FastAPI instance for ASGI servers."""

    return app


if __name__ == "__main__":
    import uvicorn

    from planner_app.logging_config import configure_logging

    configure_logging()
    uvicorn.run("server.api:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")), reload=False)
