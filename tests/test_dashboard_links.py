from plant_detector.models import HealthStatus, PlantAnalysis, YouTubeSuggestion
from plant_detector.services.dashboard import get_dashboard, summarize_history
from plant_detector.services.history import SEED_HISTORY
from plant_detector.utils.links import (
    community_help_url,
    maps_search_url,
    result_links,
    spoken_summary,
    treatment_search_url,
    youtube_search_url,
)

DISEASED = PlantAnalysis(
    plant_name="Tomato",
    scientific_name="Solanum lycopersicum",
    health_status=HealthStatus.DISEASED,
    disease_name="Early Blight",
    confidence=88,
    treatments=["Remove infected leaves"],
    description="Dark concentric spots on lower leaves.",
    youtube_suggestions=[
        YouTubeSuggestion(
            title="Treat Early Blight",
            channel_name="Garden Channel",
            summary="Shows pruning and copper spray.",
            search_query="how to treat early blight on tomatoes",
        )
    ],
)


class TestLinks:
    def test_youtube_search_url(self):
        assert youtube_search_url("how to cure powdery mildew") == (
            "https://www.youtube.com/results?search_query=how%20to%20cure%20powdery%20mildew"
        )

    def test_treatment_search_prefers_disease(self):
        assert treatment_search_url(DISEASED).endswith("how+to+treat+Early%20Blight")

    def test_community_help_url(self):
        assert community_help_url(DISEASED) == (
            "https://www.reddit.com/r/plantclinic/submit?title=Help%20needed%3A%20Tomato%20issue"
        )

    def test_maps_search_url(self):
        assert maps_search_url("Napa Valley, CA") == (
            "https://www.google.com/maps/search/?api=1&query=Napa+Valley%2C+CA"
        )

    def test_spoken_summary(self):
        assert spoken_summary(DISEASED) == (
            "This looks like Tomato. It appears to be Diseased. Dark concentric spots on lower leaves."
        )

    def test_result_links_one_per_video(self):
        links = result_links(DISEASED)
        assert links["videos"] == [youtube_search_url("how to treat early blight on tomatoes")]


class TestDashboard:
    def test_summary_counts(self):
        assert summarize_history(SEED_HISTORY) == {"Healthy": 2, "Diseased": 1, "Unknown": 0, "total": 3}

    def test_dashboard_payload(self):
        data = get_dashboard(SEED_HISTORY)
        assert data["weather"]["temp"] == 24
        assert data["weather"]["windSpeed"] == 12
        assert [p["name"] for p in data["healthIndex"]] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert data["history"][0]["plantName"] == "Tomato Plant"
