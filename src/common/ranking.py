"""Fuzzy relevance ranking for a saved plant collection."""

from typing import Optional, Sequence

from src.common.levenshtein import edit_distance
from src.common.models import NOT_AVAILABLE, PlantRecord, ScoredPlant

NAME_WEIGHT = 0.7
DESCRIPTION_WEIGHT = 0.3


def normalize(text: str) -> str:
    """Trim surrounding whitespace and case-fold for comparison."""
    return text.strip().casefold()


def similarity(query: str, target: str) -> float:
    """
    Score how well a target string matches a search query.

    Args:
        query: The search text typed by the user
        target: The text to score against

    Returns:
        Score between 0.0 and 1.0 (1.0 = perfect match). An empty query
        matches everything, and a target containing the query scores 1.0.
    """
    if not query.strip():
        return 1.0

    normalized_query = normalize(query)
    normalized_target = normalize(target)

    if normalized_query in normalized_target:
        return 1.0

    max_length = max(len(normalized_query), len(normalized_target))
    if max_length == 0:
        return 1.0

    distance = edit_distance(normalized_query, normalized_target)
    return max(0.0, 1.0 - distance / max_length)


def _description_score(query: str, description: Optional[str]) -> float:
    if description is None or description == NOT_AVAILABLE:
        return 0.0
    return similarity(query, description)


def score_plant(query: str, plant: PlantRecord) -> float:
    """Weighted name/description relevance of a single plant."""
    name_score = similarity(query, plant.name)
    description_score = _description_score(query, plant.description)
    return NAME_WEIGHT * name_score + DESCRIPTION_WEIGHT * description_score


def rank_plants(query: str, plants: Sequence[PlantRecord]) -> list[tuple[PlantRecord, int]]:
    """
    Order a collection by relevance to a search query.

    Args:
        query: Free-text search query (empty = keep saved order)
        plants: The collection in saved order

    Returns:
        (plant, original_index) pairs, most relevant first. Plants with equal
        scores keep their saved order.
    """
    if not query.strip():
        return [(plant, index) for index, plant in enumerate(plants)]

    scored = [
        ScoredPlant(plant=plant, index=index, score=score_plant(query, plant))
        for index, plant in enumerate(plants)
    ]
    # sorted() is stable, also with reverse=True
    scored = sorted(scored, key=lambda s: s.score, reverse=True)

    return [(s.plant, s.index) for s in scored]
