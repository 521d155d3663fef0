from collections import Counter
from typing import Any, Dict, List

from plant_detector.models import HealthIndexPoint, HealthStatus, ScanHistoryItem, WeatherData

# Static farm widget until a weather provider is wired in
FARM_WEATHER = WeatherData(
    temp=24,
    condition="Mostly Sunny",
    humidity=62,
    wind_speed=12,
    location="My Farm",
)

HEALTH_INDEX = [
    HealthIndexPoint(name="Mon", health=65, moisture=40),
    HealthIndexPoint(name="Tue", health=68, moisture=35),
    HealthIndexPoint(name="Wed", health=75, moisture=60),
    HealthIndexPoint(name="Thu", health=72, moisture=55),
    HealthIndexPoint(name="Fri", health=85, moisture=70),
    HealthIndexPoint(name="Sat", health=82, moisture=65),
    HealthIndexPoint(name="Sun", health=90, moisture=80),
]


def summarize_history(history: List[ScanHistoryItem]) -> Dict[str, int]:
    counts = Counter(item.health_status for item in history)
    summary = {status.value: counts.get(status, 0) for status in HealthStatus}
    summary["total"] = len(history)
    return summary


def get_dashboard(history: List[ScanHistoryItem]) -> Dict[str, Any]:
    return {
        "weather": FARM_WEATHER.model_dump(by_alias=True),
        "healthIndex": [p.model_dump(by_alias=True) for p in HEALTH_INDEX],
        "history": [item.model_dump(mode="json", by_alias=True) for item in history],
        "summary": summarize_history(history),
    }
