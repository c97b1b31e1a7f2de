"""Plant identification through a vision-capable chat model."""

import logging
import os
import sys
from typing import Optional

import httpx

from src.common.models import NOT_AVAILABLE, PlantRecord

logging.basicConfig(
    level=logging.INFO,
    format="[PlantAnalyzer] %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

OPENAI_API_BASE = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o"

ANALYSIS_PROMPT = (
    "Du bist ein Experte für Botanik. Analysiere das folgende Bild. Identifiziere die Pflanze "
    "und verwende deine Suchfähigkeiten, um die folgenden Informationen zu finden: "
    "1. Eine kurze Beschreibung. 2. Eine Anleitung, wann sie gegossen werden muss. "
    "3. Welche Art von Erde sie benötigt. 4. Die Gießhäufigkeit pro Woche. "
    "5. Den Link zur deutschen Wikipedia-Seite. "
    "Gib nur die Informationen zurück, die im Schema gefordert werden."
)


def _text_field(description: str) -> dict:
    return {"type": "string", "description": f"{description} '{NOT_AVAILABLE}', wenn unbekannt."}


# Structured output expected from the model
ANALYSIS_SCHEMA = {
    "type": "object",
    "properties": {
        "plantInImage": {
            "type": "string",
            "enum": ["ja", "nein"],
            "description": "Ist eine Pflanze im Bild zu sehen? Antworte mit 'ja' oder 'nein'.",
        },
        "plantName": _text_field("Der wissenschaftliche oder gebräuchliche Name der Pflanze."),
        "description": _text_field("Eine kurze, interessante Beschreibung der Pflanze (ca. 2-3 Sätze)."),
        "wateringNeeds": _text_field(
            "Eine kurze Anleitung, wann die Pflanze gegossen werden muss "
            "(z.B. 'Wenn die obersten 2-3 cm der Erde trocken sind')."
        ),
        "wikipediaUrl": _text_field("Die vollständige URL zur deutschen Wikipedia-Seite der Pflanze."),
        "soilType": _text_field("Die ideale Erdart für die Pflanze (z.B. 'gut durchlässig, sandig')."),
        "wateringFrequency": _text_field("Die empfohlene Gießhäufigkeit pro Woche (z.B. '1-2 mal pro Woche')."),
    },
    "required": [
        "plantInImage",
        "plantName",
        "description",
        "wateringNeeds",
        "wikipediaUrl",
        "soilType",
        "wateringFrequency",
    ],
    "additionalProperties": False,
}


class AnalysisError(Exception):
    """Raised when a plant image could not be analyzed."""


class PlantAnalyzer:
    """Client that asks a hosted vision model to identify a plant photo."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = OPENAI_API_BASE,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the analyzer.

        Args:
            api_key: API key for the chat-completions endpoint
            model: Vision-capable model name
            base_url: API base URL
            timeout: Request timeout in seconds
            transport: Custom httpx transport (used by tests)
        """
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _build_payload(self, image_url: str) -> dict:
        return {
            "model": self.model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": ANALYSIS_PROMPT},
                        {"type": "image_url", "image_url": {"url": image_url}},
                    ],
                }
            ],
            "response_format": {
                "type": "json_schema",
                "json_schema": {
                    "name": "plant_analysis",
                    "strict": True,
                    "schema": ANALYSIS_SCHEMA,
                },
            },
        }

    async def analyze(self, image_url: str) -> PlantRecord:
        """
        Identify the plant in an image.

        Args:
            image_url: Public URL or data URL of the photo

        Returns:
            PlantRecord with care guidance and the submitted image attached

        Raises:
            ValueError: If no image URL was given
            AnalysisError: If the request failed or the answer was malformed
        """
        if not image_url:
            raise ValueError("Image URL is required")

        logger.info(f"Analyzing image with {self.model}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=self._build_payload(image_url),
                )
        except httpx.HTTPError as e:
            logger.error(f"Error in analysis request: {e}")
            raise AnalysisError("Failed to analyze image") from e

        if response.is_error:
            logger.error(f"Analysis request failed: HTTP {response.status_code}")
            raise AnalysisError(f"HTTP {response.status_code}: {response.reason_phrase}")

        try:
            content = response.json()["choices"][0]["message"]["content"]
            plant = PlantRecord.model_validate_json(content)
        except (ValueError, KeyError, IndexError, TypeError) as e:
            # pydantic's ValidationError is a ValueError
            logger.error(f"Malformed analysis response: {e}")
            raise AnalysisError("Failed to analyze image") from e

        logger.info(f"Identified: {plant.name}")
        return plant.model_copy(update={"image_data_url": image_url})

    @classmethod
    def from_env(cls) -> "PlantAnalyzer":
        """Create a PlantAnalyzer from environment variables."""
        api_key = os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")

        return cls(
            api_key=api_key,
            model=os.environ.get("OPENAI_MODEL", DEFAULT_MODEL),
            base_url=os.environ.get("OPENAI_BASE_URL", OPENAI_API_BASE),
        )
