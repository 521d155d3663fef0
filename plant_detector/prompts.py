"""
Prompt construction for the plant diagnosis and location suitability requests.

Pure data transformation: nothing here touches the network.
"""
import datetime
from dataclasses import dataclass, field
from typing import List, Optional, Union

from plant_detector.services.images import PreparedImage


@dataclass(frozen=True)
class ImagePart:
    mime_type: str
    data: str  # base64

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data}"


@dataclass(frozen=True)
class TextPart:
    text: str


Part = Union[ImagePart, TextPart]


@dataclass(frozen=True)
class PromptPayload:
    """Ordered input parts for a single generate-content call."""
    parts: List[Part] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.parts if isinstance(p, TextPart))

    @property
    def images(self) -> List[ImagePart]:
        return [p for p in self.parts if isinstance(p, ImagePart)]


# ============================================================================#
# Instruction text
# ============================================================================#

PLANT_ANALYSIS_PROMPT = """You are an expert agricultural botanist and plant disease specialist.

TASK:
1. Identify the plant species and scientific name.
2. Detect any diseases, pests, nutrient deficiencies, or environmental stress.
3. Explain the problem in simple steps that farmers can understand.
4. Provide a clear, step-by-step solution to fix the problem.

IMPORTANT - YOUTUBE GUIDANCE:
5. Recommend 3-5 YouTube videos that demonstrate HOW TO FIX or TREAT the issue.
   - Only suggest videos that likely exist on trusted agriculture channels.
   - Include: Title, Channel Name, Short Summary.
   - Generate a highly specific 'searchQuery' (e.g. "how to cure powdery mildew on roses") for each.

If the image is not a plant, indicate Unknown."""

LOCATION_ANALYSIS_PROMPT = """You are an expert agronomist and soil scientist.
Analyze the agricultural potential for the location: "{location}".

Context: The current month is {month}.

TASK:
1. Determine the likely climate zone and soil type for this specific region.
2. Assess if it is currently a good time to plant crops based on the season/weather pattern for this location.
3. Recommend 3-5 specific crops that would thrive in this location right now.
4. Provide a suitability score (0-100).
5. Explain your reasoning briefly (mention temperature, rainfall, or soil quality)."""


def current_month_name(now: Optional[datetime.datetime] = None) -> str:
    """Full English month name, e.g. 'October'."""
    return (now or datetime.datetime.now()).strftime("%B")


def build_plant_prompt(image: PreparedImage) -> PromptPayload:
    return PromptPayload(parts=[
        ImagePart(mime_type=image.mime_type, data=image.data),
        TextPart(text=PLANT_ANALYSIS_PROMPT),
    ])


def build_location_prompt(location_query: str, current_month: str) -> PromptPayload:
    # Callers reject blank queries before we get here
    return PromptPayload(parts=[
        TextPart(text=LOCATION_ANALYSIS_PROMPT.format(location=location_query, month=current_month)),
    ])
