from dataclasses import dataclass
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Marker the identification service uses for "no data"
NOT_AVAILABLE = "Keine Angabe"

PlantInImage = Literal["ja", "nein"]


class PlantRecord(BaseModel):
    """A saved plant identification with its care guidance."""

    model_config = ConfigDict(populate_by_name=True)

    plant_in_image: PlantInImage = Field(alias="plantInImage")
    name: str = Field(alias="plantName")
    description: Optional[str] = None
    watering_needs: Optional[str] = Field(default=None, alias="wateringNeeds")
    wikipedia_url: Optional[str] = Field(default=None, alias="wikipediaUrl")
    soil_type: Optional[str] = Field(default=None, alias="soilType")
    watering_frequency: Optional[str] = Field(default=None, alias="wateringFrequency")
    image_data_url: Optional[str] = Field(default=None, alias="imageDataUrl")

    @field_validator(
        "description",
        "watering_needs",
        "wikipedia_url",
        "soil_type",
        "watering_frequency",
        mode="before",
    )
    @classmethod
    def _drop_not_available(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and value.strip() in ("", NOT_AVAILABLE):
            return None
        return value

    @property
    def has_plant(self) -> bool:
        """Whether the model recognized a plant in the photo."""
        return self.plant_in_image == "ja"


@dataclass
class ScoredPlant:
    """A plant paired with its position in the collection and a relevance score."""

    plant: PlantRecord
    index: int
    score: float
