from urllib.parse import quote, urlencode

from plant_detector.models import PlantAnalysis

YOUTUBE_SEARCH_URL = "https://www.youtube.com/results"
MAPS_SEARCH_URL = "https://www.google.com/maps/search/"
COMMUNITY_SUBMIT_URL = "https://www.reddit.com/r/plantclinic/submit"


def youtube_search_url(query: str) -> str:
    return f"{YOUTUBE_SEARCH_URL}?search_query={quote(query, safe='')}"


def treatment_search_url(analysis: PlantAnalysis) -> str:
    subject = analysis.disease_name or analysis.plant_name
    return f"{YOUTUBE_SEARCH_URL}?search_query=how+to+treat+{quote(subject, safe='')}"


def community_help_url(analysis: PlantAnalysis) -> str:
    title = f"Help needed: {analysis.plant_name} issue"
    return f"{COMMUNITY_SUBMIT_URL}?title={quote(title, safe='')}"


def maps_search_url(query: str) -> str:
    return f"{MAPS_SEARCH_URL}?{urlencode({'api': 1, 'query': query})}"


def spoken_summary(analysis: PlantAnalysis) -> str:
    """Text read aloud on the result screen."""
    return (
        f"This looks like {analysis.plant_name}. "
        f"It appears to be {analysis.health_status.value}. "
        f"{analysis.description}"
    )


def result_links(analysis: PlantAnalysis) -> dict:
    return {
        "videos": [youtube_search_url(v.search_query) for v in analysis.youtube_suggestions],
        "treatmentSearch": treatment_search_url(analysis),
        "communityHelp": community_help_url(analysis),
    }
