"""Local JSON persistence for the saved plant collection."""

import json
import logging
import os
import sys
import tempfile
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.common.models import PlantRecord
from src.common.ranking import rank_plants

logging.basicConfig(
    level=logging.INFO,
    format="[PlantStore] %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)


class PlantStore:
    """Keeps the plant collection in memory and mirrors it to a JSON file."""

    def __init__(self, path: Path):
        """
        Initialize the store and load any previously saved plants.

        Args:
            path: JSON file holding the collection
        """
        self.path = path
        self._plants: list[PlantRecord] = []
        self._version = 0
        self._search_cache: Optional[tuple[int, str, list[tuple[PlantRecord, int]]]] = None

        self.load()

    @property
    def plants(self) -> tuple[PlantRecord, ...]:
        """Saved plants, newest first."""
        return tuple(self._plants)

    @property
    def version(self) -> int:
        """Counter bumped on every change to the collection."""
        return self._version

    def load(self) -> None:
        """Read the collection from disk, falling back to an empty one."""
        self._plants = []
        self._version += 1

        if not self.path.exists():
            logger.info(f"No saved plants at {self.path}")
            return

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            self._plants = [PlantRecord.model_validate(item) for item in data]
        except (OSError, UnicodeDecodeError, json.JSONDecodeError, TypeError, ValidationError) as e:
            logger.error(f"Error reading saved plants from {self.path}: {e}")
            self._plants = []
            return

        logger.info(f"Loaded {len(self._plants)} plants")

    def save(self) -> None:
        """Write the whole collection to disk, replacing the old file in one step."""
        data = [plant.model_dump(mode="json", by_alias=True, exclude_none=True) for plant in self._plants]
        temp_file: Optional[Path] = None

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
            ) as fh:
                temp_file = Path(fh.name)
                fh.write(json.dumps(data, indent=2, ensure_ascii=False))
            os.replace(temp_file, self.path)
        except OSError as e:
            logger.error(f"Error writing saved plants to {self.path}: {e}")
            if temp_file is not None:
                temp_file.unlink(missing_ok=True)

    def add(self, plant: PlantRecord) -> None:
        """Add a plant at the front of the collection."""
        self._update([plant, *self._plants])

    def delete(self, index: int) -> PlantRecord:
        """
        Remove the plant at a position in saved order.

        Returns:
            The removed plant

        Raises:
            IndexError: If no plant exists at that position
        """
        if not 0 <= index < len(self._plants):
            raise IndexError(f"No plant at position {index} (collection has {len(self._plants)})")

        removed = self._plants[index]
        self._update([p for i, p in enumerate(self._plants) if i != index])
        return removed

    def clear(self) -> None:
        """Remove every saved plant."""
        self._update([])

    def search(self, query: str) -> list[tuple[PlantRecord, int]]:
        """
        Rank the collection against a query.

        The last result is reused while the query and collection are unchanged.
        """
        if self._search_cache is not None:
            version, cached_query, ranked = self._search_cache
            if version == self._version and cached_query == query:
                return list(ranked)

        ranked = rank_plants(query, self._plants)
        self._search_cache = (self._version, query, ranked)
        return list(ranked)

    def _update(self, plants: list[PlantRecord]) -> None:
        self._plants = plants
        self._version += 1
        self.save()

    @classmethod
    def from_env(cls) -> "PlantStore":
        """Create a PlantStore from environment variables."""
        plants_file = os.environ.get("PLANTS_FILE")
        if plants_file:
            return cls(Path(plants_file).expanduser())

        return cls(Path.home() / ".saved_plants.json")
