import json

import pytest

from src.common.models import PlantRecord
from src.plants import server
from src.plants.store import PlantStore


class FakeAnalyzer:
    def __init__(self, plant: PlantRecord):
        self.plant = plant
        self.calls = []

    async def analyze(self, image_url: str) -> PlantRecord:
        self.calls.append(image_url)
        return self.plant.model_copy(update={"image_data_url": image_url})


@pytest.fixture
def store(tmp_path, monkeypatch):
    store = PlantStore(tmp_path / "plants.json")
    monkeypatch.setattr(server, "_store", store)
    return store


def add(store: PlantStore, name: str, description: str = None) -> None:
    store.add(PlantRecord(plant_in_image="ja", name=name, description=description))


async def test_identify_plant_adds_to_collection(store, monkeypatch):
    analyzer = FakeAnalyzer(PlantRecord(
        plant_in_image="ja",
        name="Monstera",
        description="Eine tropische Zimmerpflanze.",
        watering_needs="Wenn die Erde trocken ist",
    ))
    monkeypatch.setattr(server, "_analyzer", analyzer)
    add(store, "Rose")

    result = json.loads(await server.identify_plant("https://example.com/monstera.jpg"))

    assert analyzer.calls == ["https://example.com/monstera.jpg"]
    assert result["index"] == 0
    assert result["name"] == "Monstera"
    assert result["care"] == {"watering_needs": "Wenn die Erde trocken ist"}
    assert [p.name for p in store.plants] == ["Monstera", "Rose"]


def test_list_plants(store):
    add(store, "Rose")
    add(store, "Tulip", "A red flower")

    result = json.loads(server.list_plants())

    assert result == [
        {"index": 0, "name": "Tulip", "plant_in_image": True, "description": "A red flower"},
        {"index": 1, "name": "Rose", "plant_in_image": True},
    ]


def test_list_plants_limit(store):
    for name in ["Rose", "Tulip", "Daisy"]:
        add(store, name)

    assert len(json.loads(server.list_plants(limit=2))) == 2


def test_search_plants_keeps_positions(store):
    add(store, "Rose")
    add(store, "Tulip", "A red flower")

    result = json.loads(server.search_plants("ros"))

    assert [(r["name"], r["index"]) for r in result] == [("Rose", 1), ("Tulip", 0)]


def test_search_plants_empty_query(store):
    add(store, "Rose")
    add(store, "Tulip")

    result = json.loads(server.search_plants(""))

    assert [r["index"] for r in result] == [0, 1]


def test_delete_plant_by_search_position(store):
    add(store, "Rose")
    add(store, "Tulip")
    top = json.loads(server.search_plants("rose"))[0]

    result = json.loads(server.delete_plant(top["index"]))

    assert result["deleted"] == "Rose"
    assert [p.name for p in store.plants] == ["Tulip"]


def test_delete_plant_unknown_position(store):
    with pytest.raises(IndexError):
        server.delete_plant(3)


def test_clear_plants(store):
    add(store, "Rose")
    add(store, "Tulip")

    result = json.loads(server.clear_plants())

    assert result["count"] == 2
    assert store.plants == ()


def test_collection_resource_keeps_full_description(store):
    long_description = "Sehr lang. " * 50
    add(store, "Rose", long_description)

    result = json.loads(server.list_collection())

    assert result[0]["description"] == " ".join(long_description.split())


def test_tool_output_keeps_umlauts(store):
    add(store, "Gänseblümchen")

    assert "Gänseblümchen" in server.delete_plant(0)
    assert "\\u" not in server.clear_plants()
