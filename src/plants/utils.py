"""Shared helpers for presenting saved plants."""

from typing import Optional

from src.common.models import PlantRecord


def clean_text(text: str, max_length: Optional[int] = 280) -> str:
    """Collapse whitespace and optionally truncate."""
    text = " ".join(text.split())

    if max_length and len(text) > max_length:
        text = text[: max_length - 3] + "..."

    return text


def simplify_plant(plant: PlantRecord, index: int, max_description_length: Optional[int] = 280) -> dict:
    """Convert a PlantRecord to a compact dict for LLM consumption."""
    result = {
        "index": index,
        "name": plant.name,
        "plant_in_image": plant.has_plant,
    }

    # Only include care details the model could answer
    if plant.description:
        result["description"] = clean_text(plant.description, max_description_length)

    care = {}
    if plant.watering_needs:
        care["watering_needs"] = plant.watering_needs
    if plant.watering_frequency:
        care["watering_frequency"] = plant.watering_frequency
    if plant.soil_type:
        care["soil_type"] = plant.soil_type
    if care:
        result["care"] = care

    if plant.wikipedia_url:
        result["wikipedia_url"] = plant.wikipedia_url

    return result
