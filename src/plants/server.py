import json
from typing import Optional

from mcp.server.fastmcp import FastMCP

from src.plants.analyzer import PlantAnalyzer
from src.plants.store import PlantStore
from src.plants.utils import simplify_plant

mcp = FastMCP("Plant Collection Server")

# Global instances (initialized on first use)
_store: Optional[PlantStore] = None
_analyzer: Optional[PlantAnalyzer] = None


def get_store() -> PlantStore:
    """Get or load the plant collection."""
    global _store
    if _store is None:
        _store = PlantStore.from_env()
    return _store


def get_analyzer() -> PlantAnalyzer:
    """Get or create the plant analyzer."""
    global _analyzer
    if _analyzer is None:
        _analyzer = PlantAnalyzer.from_env()
    return _analyzer


@mcp.tool()
async def identify_plant(image_url: str) -> str:
    """
    Identify the plant in a photo and add it to the collection.

    Args:
        image_url: Public URL or base64 data URL of the photo

    Returns:
        JSON object describing the identified plant and its care needs
    """
    plant = await get_analyzer().analyze(image_url)

    store = get_store()
    store.add(plant)

    return json.dumps(simplify_plant(plant, 0), indent=2, ensure_ascii=False)


@mcp.tool()
def list_plants(limit: int = 50) -> str:
    """
    List saved plants, newest first.

    Args:
        limit: Maximum number of plants to return (default 50)

    Returns:
        JSON array of plants with their collection position
    """
    plants = get_store().plants
    results = [simplify_plant(plant, index) for index, plant in enumerate(plants)]

    if limit:
        results = results[:limit]

    return json.dumps(results, indent=2, ensure_ascii=False)


@mcp.tool()
def search_plants(query: str, limit: int = 10) -> str:
    """
    Fuzzy search saved plants by name and description.

    Typos are tolerated; names weigh more than descriptions.

    Args:
        query: Search text (empty returns the collection in saved order)
        limit: Maximum number of results to return (default 10)

    Returns:
        JSON array of plants, most relevant first, with their collection position
    """
    ranked = get_store().search(query)
    results = [simplify_plant(plant, index) for plant, index in ranked]

    if limit:
        results = results[:limit]

    return json.dumps(results, indent=2, ensure_ascii=False)


@mcp.tool()
def delete_plant(index: int) -> str:
    """
    Delete a saved plant.

    Args:
        index: Collection position as reported by list_plants or search_plants

    Returns:
        JSON object naming the deleted plant
    """
    removed = get_store().delete(index)

    return json.dumps({
        "status": "success",
        "deleted": removed.name,
        "message": f"Deleted {removed.name} from position {index}",
    }, indent=2, ensure_ascii=False)


@mcp.tool()
def clear_plants() -> str:
    """
    Delete every saved plant.

    Returns:
        JSON object with the number of plants removed
    """
    store = get_store()
    count = len(store.plants)
    store.clear()

    return json.dumps({
        "status": "success",
        "count": count,
        "message": f"Deleted {count} plants",
    }, indent=2, ensure_ascii=False)


@mcp.resource("plants://collection")
def list_collection() -> str:
    """List the whole plant collection as a resource."""
    plants = get_store().plants
    return json.dumps(
        [simplify_plant(plant, index, max_description_length=None) for index, plant in enumerate(plants)],
        indent=2,
        ensure_ascii=False,
    )


def main():
    """Entry point for the plant collection MCP server."""
    mcp.run()


if __name__ == "__main__":
    main()
