"""
Tests for the AI response shape contracts
"""
import copy

import pytest

from plant_detector.models import HealthStatus
from plant_detector.schemas import (
    LOCATION_ANALYSIS_SCHEMA,
    PLANT_ANALYSIS_SCHEMA,
    SchemaValidationError,
    check_shape,
    validate_location_analysis,
    validate_plant_analysis,
)
from fakes import VALID_LOCATION, VALID_PLANT


class TestPlantSchema:
    def test_valid_payload_becomes_typed_model(self):
        result = validate_plant_analysis(copy.deepcopy(VALID_PLANT))
        assert result.plant_name == "Tomato"
        assert result.health_status == HealthStatus.HEALTHY
        assert result.youtube_suggestions[0].search_query == "tomato plant care basics"
        assert result.disease_name is None

    @pytest.mark.parametrize("field", PLANT_ANALYSIS_SCHEMA["required"])
    def test_missing_required_field_rejected(self, field):
        data = copy.deepcopy(VALID_PLANT)
        del data[field]
        with pytest.raises(SchemaValidationError):
            validate_plant_analysis(data)

    def test_health_status_outside_enum_rejected(self):
        data = dict(VALID_PLANT, healthStatus="Wilting")
        with pytest.raises(SchemaValidationError):
            validate_plant_analysis(data)

    def test_nested_suggestion_needs_all_four_fields(self):
        data = copy.deepcopy(VALID_PLANT)
        del data["youtubeSuggestions"][0]["searchQuery"]
        with pytest.raises(SchemaValidationError, match="searchQuery"):
            validate_plant_analysis(data)

    def test_treatments_must_be_strings(self):
        data = dict(VALID_PLANT, treatments=["Prune", 3])
        with pytest.raises(SchemaValidationError):
            validate_plant_analysis(data)

    def test_confidence_out_of_range_rejected(self):
        data = dict(VALID_PLANT, confidence=140)
        with pytest.raises(SchemaValidationError):
            validate_plant_analysis(data)

    def test_optional_disease_name_accepted(self):
        data = dict(VALID_PLANT, healthStatus="Diseased", diseaseName="Early Blight")
        assert validate_plant_analysis(data).disease_name == "Early Blight"

    def test_non_object_rejected(self):
        with pytest.raises(SchemaValidationError):
            validate_plant_analysis(["not", "an", "object"])


class TestLocationSchema:
    def test_valid_payload(self):
        result = validate_location_analysis(dict(VALID_LOCATION))
        assert result.is_suitable_for_planting is True
        assert result.best_crops == ["Garlic", "Fava Beans", "Kale"]

    def test_boolean_is_not_a_number(self):
        data = dict(VALID_LOCATION, suitabilityScore=True)
        with pytest.raises(SchemaValidationError):
            validate_location_analysis(data)

    def test_string_is_not_a_boolean(self):
        data = dict(VALID_LOCATION, isSuitableForPlanting="yes")
        with pytest.raises(SchemaValidationError):
            validate_location_analysis(data)

    def test_null_required_field_rejected(self):
        data = dict(VALID_LOCATION, reasoning=None)
        with pytest.raises(SchemaValidationError):
            validate_location_analysis(data)

    def test_check_shape_reports_path(self):
        data = dict(VALID_LOCATION, bestCrops=["Garlic", None])
        with pytest.raises(SchemaValidationError, match=r"\$\.bestCrops\[1\]"):
            check_shape(data, LOCATION_ANALYSIS_SCHEMA)
