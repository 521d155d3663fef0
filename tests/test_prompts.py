import datetime

from plant_detector.prompts import (
    ImagePart,
    TextPart,
    build_location_prompt,
    build_plant_prompt,
    current_month_name,
)
from plant_detector.services.images import PreparedImage


def test_plant_prompt_carries_image_then_instructions():
    payload = build_plant_prompt(PreparedImage(mime_type="image/png", data="aGVsbG8="))

    assert isinstance(payload.parts[0], ImagePart)
    assert isinstance(payload.parts[1], TextPart)
    assert payload.images[0].data_url == "data:image/png;base64,aGVsbG8="
    assert "If the image is not a plant, indicate Unknown." in payload.text
    assert "3-5 YouTube videos" in payload.text
    assert "searchQuery" in payload.text


def test_location_prompt_quotes_place_and_month():
    payload = build_location_prompt("Napa Valley, CA", "October")

    assert payload.images == []
    assert 'location: "Napa Valley, CA"' in payload.text
    assert "The current month is October." in payload.text
    assert "suitability score (0-100)" in payload.text


def test_current_month_name():
    assert current_month_name(datetime.datetime(2024, 3, 5)) == "March"
    assert current_month_name(datetime.datetime(2024, 10, 19)) == "October"
