from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: snake_case attributes, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenModel(CamelModel):
    """Immutable record; edits replace the whole object."""
    model_config = ConfigDict(frozen=True)


class HealthStatus(str, Enum):
    HEALTHY = "Healthy"
    DISEASED = "Diseased"
    UNKNOWN = "Unknown"


class MarketCategory(str, Enum):
    SEEDS = "Seeds"
    PLANTS = "Plants"
    TOOLS = "Tools"
    FERTILIZER = "Fertilizer"


# ============================================================================#
# AI results
# ============================================================================#

class YouTubeSuggestion(FrozenModel):
    title: str
    channel_name: str
    summary: str
    search_query: str


class PlantAnalysis(FrozenModel):
    plant_name: str
    scientific_name: str
    health_status: HealthStatus
    disease_name: Optional[str] = None
    confidence: float = Field(ge=0, le=100)
    treatments: List[str]
    description: str
    youtube_suggestions: List[YouTubeSuggestion] = Field(default_factory=list)


class Coordinates(FrozenModel):
    lat: float
    lng: float


class LocationAnalysis(FrozenModel):
    location_name: str
    suitability_score: float = Field(ge=0, le=100)
    is_suitable_for_planting: bool
    climate_zone: str
    soil_type: str
    best_crops: List[str]
    reasoning: str
    coordinates: Optional[Coordinates] = None


# ============================================================================#
# Local records
# ============================================================================#

class ScanHistoryItem(FrozenModel):
    id: str
    date: str
    image_url: str
    plant_name: str
    health_status: HealthStatus


class MarketItem(FrozenModel):
    id: str
    name: str
    price: str
    category: MarketCategory
    image: str
    location: str
    seller: str
    rating: float = Field(ge=0, le=5)


class WeatherData(CamelModel):
    temp: float
    condition: str
    humidity: float
    wind_speed: float
    location: str


class HealthIndexPoint(CamelModel):
    name: str
    health: int
    moisture: int


# ============================================================================#
# Request bodies
# ============================================================================#

class ScanRequest(CamelModel):
    image: str = Field(..., description="Base64 image or data URL")


class LocationRequest(CamelModel):
    query: str = Field(..., description="Free-text farm location, e.g. 'Napa Valley, CA'")


class NavigateRequest(CamelModel):
    view: str


class SellListingRequest(CamelModel):
    name: str = ""
    price: str = ""
    category: MarketCategory = MarketCategory.SEEDS
    location: str = ""
    image: Optional[str] = None
