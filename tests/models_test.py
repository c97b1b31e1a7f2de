import pytest
from pydantic import ValidationError

from src.common.models import NOT_AVAILABLE, PlantRecord


def test_parses_identification_payload():
    plant = PlantRecord.model_validate({
        "plantInImage": "ja",
        "plantName": "Monstera deliciosa",
        "description": "Eine beliebte Zimmerpflanze.",
        "wateringNeeds": "Wenn die obersten 2-3 cm der Erde trocken sind",
        "wikipediaUrl": "https://de.wikipedia.org/wiki/Fensterblatt",
        "soilType": "gut durchlässig",
        "wateringFrequency": "1 mal pro Woche",
    })

    assert plant.name == "Monstera deliciosa"
    assert plant.watering_needs.startswith("Wenn")
    assert plant.has_plant
    assert plant.image_data_url is None


def test_not_available_becomes_none():
    plant = PlantRecord.model_validate({
        "plantInImage": "nein",
        "plantName": NOT_AVAILABLE,
        "description": NOT_AVAILABLE,
        "wateringNeeds": NOT_AVAILABLE,
        "wikipediaUrl": NOT_AVAILABLE,
        "soilType": " ",
        "wateringFrequency": NOT_AVAILABLE,
    })

    assert not plant.has_plant
    # the name stays as reported
    assert plant.name == NOT_AVAILABLE
    assert plant.description is None
    assert plant.watering_needs is None
    assert plant.wikipedia_url is None
    assert plant.soil_type is None
    assert plant.watering_frequency is None


def test_dump_uses_camel_case_keys():
    plant = PlantRecord(plant_in_image="ja", name="Aloe vera", image_data_url="data:image/jpeg;base64,AAAA")
    data = plant.model_dump(by_alias=True, exclude_none=True)

    assert data == {
        "plantInImage": "ja",
        "plantName": "Aloe vera",
        "imageDataUrl": "data:image/jpeg;base64,AAAA",
    }


def test_rejects_unknown_plant_in_image():
    with pytest.raises(ValidationError):
        PlantRecord.model_validate({"plantInImage": "vielleicht", "plantName": "Rose"})
