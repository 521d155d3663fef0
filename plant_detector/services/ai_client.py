import asyncio
import json
import logging
from typing import Any, Dict, List, Optional, Union

import httpx
from openai import AsyncOpenAI

from plant_detector.config import (
    AI_CONNECT_TIMEOUT,
    AI_REQUEST_TIMEOUT,
    GENAI_BASE_URL,
    GENAI_MODEL,
    LOCATION_TEMPERATURE,
    OPENROUTER_API_KEY,
    PLANT_TEMPERATURE,
)
from plant_detector.models import HealthStatus, LocationAnalysis, PlantAnalysis
from plant_detector.prompts import (
    ImagePart,
    PromptPayload,
    build_location_prompt,
    build_plant_prompt,
    current_month_name,
)
from plant_detector.schemas import (
    LOCATION_ANALYSIS_SCHEMA,
    PLANT_ANALYSIS_SCHEMA,
    validate_location_analysis,
    validate_plant_analysis,
)
from plant_detector.services.images import prepare_image

logger = logging.getLogger(__name__)


class EmptyResponseError(RuntimeError):
    """Model returned no text."""


# ============================================================================#
# Transport
# ============================================================================#

class GenAIClient:
    """Single "generate content" call against an OpenAI-compatible gateway."""

    def __init__(
        self,
        api_key: str,
        base_url: str = GENAI_BASE_URL,
        model: str = GENAI_MODEL,
        timeout: float = AI_REQUEST_TIMEOUT,
    ):
        self.model = model
        self.timeout = timeout
        http_client = httpx.AsyncClient(
            timeout=httpx.Timeout(
                connect=AI_CONNECT_TIMEOUT,
                read=timeout,
                write=timeout,
                pool=timeout,
            )
        )
        self._client = AsyncOpenAI(
            base_url=base_url,
            api_key=api_key,
            http_client=http_client,
            max_retries=0,
        )

    @staticmethod
    def to_message_content(payload: PromptPayload) -> List[Dict[str, Any]]:
        content = []
        for part in payload.parts:
            if isinstance(part, ImagePart):
                content.append({"type": "image_url", "image_url": {"url": part.data_url}})
            else:
                content.append({"type": "text", "text": part.text})
        return content

    async def generate_content(
        self,
        payload: PromptPayload,
        schema: Dict[str, Any],
        schema_name: str,
        temperature: float,
    ) -> Optional[str]:
        response = await asyncio.wait_for(
            self._client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": self.to_message_content(payload)}],
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": schema_name, "schema": schema},
                },
                temperature=temperature,
                extra_headers={"X-Title": "Plant Detector"},
            ),
            timeout=self.timeout,
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    async def aclose(self):
        await self._client.close()


genai_client: Optional[GenAIClient] = None
if OPENROUTER_API_KEY:
    genai_client = GenAIClient(api_key=OPENROUTER_API_KEY)
    logger.info(f"GenAI client initialized ({GENAI_MODEL}, {AI_REQUEST_TIMEOUT}s timeout)")


# ============================================================================#
# Fallbacks
# ============================================================================#

def plant_analysis_fallback() -> PlantAnalysis:
    return PlantAnalysis(
        plant_name="Analysis Failed",
        scientific_name="Unknown",
        health_status=HealthStatus.UNKNOWN,
        confidence=0,
        treatments=["Check internet connection", "Ensure API Key is valid", "Try a clearer photo"],
        description="Could not process image.",
        youtube_suggestions=[],
    )


def location_analysis_fallback(location_query: str) -> LocationAnalysis:
    return LocationAnalysis(
        location_name=location_query,
        suitability_score=0,
        is_suitable_for_planting=False,
        climate_zone="Unknown",
        soil_type="Unknown",
        best_crops=[],
        reasoning="Unable to analyze this location. Please check your connection and try again.",
    )


# ============================================================================#
# Response parsing
# ============================================================================#

def extract_json_text(raw_text: Optional[str]) -> str:
    """Strip markdown code fences / surrounding prose around a JSON object."""
    if not raw_text or not raw_text.strip():
        raise EmptyResponseError("No response from AI")

    json_str = raw_text.strip()

    # Remove ```json or ``` at the beginning
    if json_str.startswith("```json"):
        json_str = json_str[7:]
    elif json_str.startswith("```"):
        json_str = json_str[3:]

    # Remove ``` at the end
    if json_str.endswith("```"):
        json_str = json_str[:-3]

    json_str = json_str.strip()

    if not json_str.startswith("{"):
        start_idx = json_str.find("{")
        end_idx = json_str.rfind("}")
        if start_idx != -1 and end_idx != -1:
            json_str = json_str[start_idx:end_idx + 1]

    return json_str


def parse_json_response(raw_text: Optional[str]) -> Any:
    return json.loads(extract_json_text(raw_text))


# ============================================================================#
# Operations
# ============================================================================#

async def analyze_plant_image(
    image: Union[str, bytes],
    client: Optional[GenAIClient] = None,
) -> PlantAnalysis:
    """Diagnose a plant photo. Never raises; returns the fallback on failure."""
    client = client or genai_client
    logger.info("Starting plant analysis")

    if not client:
        logger.error("OpenRouter API key not configured for plant analysis")
        return plant_analysis_fallback()

    try:
        payload = build_plant_prompt(prepare_image(image))
        raw_text = await client.generate_content(
            payload,
            schema=PLANT_ANALYSIS_SCHEMA,
            schema_name="plant_analysis",
            temperature=PLANT_TEMPERATURE,
        )
        logger.debug(f"Plant analysis raw response: {(raw_text or '')[:500]}")
        result = validate_plant_analysis(parse_json_response(raw_text))
    except asyncio.TimeoutError:
        logger.error(f"Plant analysis timeout after {client.timeout} seconds")
        return plant_analysis_fallback()
    except (httpx.TimeoutException, httpx.ConnectError) as e:
        logger.error(f"Plant analysis connection error: {e}")
        return plant_analysis_fallback()
    except Exception as e:
        logger.error(f"Plant Analysis Error: {e}", exc_info=True)
        return plant_analysis_fallback()

    logger.info(
        f"✓ Plant analysed: {result.plant_name} "
        f"({result.health_status.value}, confidence {result.confidence:.0f})"
    )
    return result


async def analyze_farming_location(
    location_query: str,
    client: Optional[GenAIClient] = None,
) -> LocationAnalysis:
    """Assess a place for planting this month. Never raises; returns the fallback on failure."""
    client = client or genai_client
    logger.info(f"Starting location analysis: {location_query[:80]}")

    if not client:
        logger.error("OpenRouter API key not configured for location analysis")
        return location_analysis_fallback(location_query)

    try:
        payload = build_location_prompt(location_query, current_month_name())
        raw_text = await client.generate_content(
            payload,
            schema=LOCATION_ANALYSIS_SCHEMA,
            schema_name="location_analysis",
            temperature=LOCATION_TEMPERATURE,
        )
        logger.debug(f"Location analysis raw response: {(raw_text or '')[:500]}")
        result = validate_location_analysis(parse_json_response(raw_text))
    except asyncio.TimeoutError:
        logger.error(f"Location analysis timeout after {client.timeout} seconds")
        return location_analysis_fallback(location_query)
    except (httpx.TimeoutException, httpx.ConnectError) as e:
        logger.error(f"Location analysis connection error: {e}")
        return location_analysis_fallback(location_query)
    except Exception as e:
        logger.error(f"Location Analysis Error: {e}", exc_info=True)
        return location_analysis_fallback(location_query)

    logger.info(f"✓ Location analysed: {result.location_name} (score {result.suitability_score:.0f})")
    return result
