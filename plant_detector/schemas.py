"""
Response shape contracts for the two AI request types.

The dicts are sent to the model as the requested JSON schema and are the
authority for which fields must be present before a payload is trusted.
"""
from typing import Any, Dict

from pydantic import ValidationError

from plant_detector.models import LocationAnalysis, PlantAnalysis


class SchemaValidationError(ValueError):
    """Parsed AI payload does not match the requested shape."""


YOUTUBE_SUGGESTION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "title": {"type": "string", "description": "Video title (e.g. 'How to Treat Tomato Blight')"},
        "channelName": {"type": "string", "description": "Name of a trusted agriculture YouTube channel"},
        "summary": {"type": "string", "description": "One sentence summary of what the video teaches"},
        "searchQuery": {"type": "string", "description": "Optimized YouTube search query to find this exact topic"},
    },
    "required": ["title", "channelName", "summary", "searchQuery"],
}

PLANT_ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "plantName": {"type": "string", "description": "Common name of the plant"},
        "scientificName": {"type": "string", "description": "Scientific Latin name"},
        "healthStatus": {
            "type": "string",
            "enum": ["Healthy", "Diseased", "Unknown"],
            "description": "Overall health condition",
        },
        "diseaseName": {"type": "string", "description": "Name of the disease if detected, or 'None'"},
        "confidence": {"type": "number", "description": "Confidence score between 0 and 100"},
        "treatments": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of recommended treatments or care tips",
        },
        "description": {"type": "string", "description": "Brief summary of the analysis"},
        "youtubeSuggestions": {
            "type": "array",
            "items": YOUTUBE_SUGGESTION_SCHEMA,
            "description": "List of 3-5 YouTube videos that explain how to fix the specific problem.",
        },
    },
    "required": [
        "plantName", "scientificName", "healthStatus", "confidence",
        "treatments", "description", "youtubeSuggestions",
    ],
}

LOCATION_ANALYSIS_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "locationName": {"type": "string", "description": "The formatted address or name of the location"},
        "suitabilityScore": {
            "type": "number",
            "description": "Score 0-100 indicating how good conditions are for general farming right now",
        },
        "isSuitableForPlanting": {"type": "boolean", "description": "True if generally suitable to plant crops now"},
        "climateZone": {"type": "string", "description": "Brief climate description (e.g. 'Tropical Wet', 'Mediterranean')"},
        "soilType": {"type": "string", "description": "Likely soil composition for this region (e.g. 'Loamy', 'Sandy Clay')"},
        "bestCrops": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of 3-5 specific crops that would thrive here right now",
        },
        "reasoning": {
            "type": "string",
            "description": "Explanation of why this location is suitable or not (temp, humidity, season)",
        },
    },
    "required": [
        "locationName", "suitabilityScore", "isSuitableForPlanting", "climateZone",
        "soilType", "bestCrops", "reasoning",
    ],
}

_PRIMITIVES = {
    "string": (str,),
    "number": (int, float),
    "boolean": (bool,),
    "array": (list,),
    "object": (dict,),
}


def check_shape(data: Any, schema: Dict[str, Any], path: str = "$") -> None:
    """Walk ``data`` against ``schema``; raise SchemaValidationError on the first mismatch."""
    expected = schema.get("type")
    allowed = _PRIMITIVES.get(expected)
    # bool is an int subclass; never accept it where a number is wanted
    if allowed and (not isinstance(data, allowed) or (expected == "number" and isinstance(data, bool))):
        raise SchemaValidationError(f"{path}: expected {expected}, got {type(data).__name__}")

    if "enum" in schema and data not in schema["enum"]:
        raise SchemaValidationError(f"{path}: {data!r} not one of {schema['enum']}")

    if expected == "object":
        for key in schema.get("required", []):
            if key not in data or data[key] is None:
                raise SchemaValidationError(f"{path}: missing required field '{key}'")
        for key, sub_schema in schema.get("properties", {}).items():
            if key in data and data[key] is not None:
                check_shape(data[key], sub_schema, f"{path}.{key}")

    elif expected == "array" and "items" in schema:
        for i, item in enumerate(data):
            check_shape(item, schema["items"], f"{path}[{i}]")


def validate_plant_analysis(data: Any) -> PlantAnalysis:
    check_shape(data, PLANT_ANALYSIS_SCHEMA)
    try:
        return PlantAnalysis.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(str(e)) from e


def validate_location_analysis(data: Any) -> LocationAnalysis:
    check_shape(data, LOCATION_ANALYSIS_SCHEMA)
    try:
        return LocationAnalysis.model_validate(data)
    except ValidationError as e:
        raise SchemaValidationError(str(e)) from e
