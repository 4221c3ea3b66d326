"""Model package exports."""

from models.taxonomy import *  # noqa: F401,F403
from models.clothing_item import ClothingItem, from_dict
from models.outfit import Outfit, Trip
from models.weather import WeatherSnapshot

__all__ = ["ClothingItem", "from_dict", "Outfit", "Trip", "WeatherSnapshot"]
