"""Ingredient catalog collaborators.

The catalog is the read-only ingredient reference the validator enriches
caller input against. Matching is exact, case-insensitive name equality;
alternative names are stored but never matched.

Implementations:
- InMemoryIngredientCatalog: entries held in a dict keyed by lowercased name
- JsonFileIngredientCatalog: entries loaded lazily from a JSON array on disk
"""

import asyncio
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable, Optional

from pydantic import ValidationError

from recipe_generator.exceptions import CatalogLookupError
from recipe_generator.models.models import CatalogEntry
from recipe_generator.utils.logger import logger


class IngredientCatalog(ABC):
    """Lookup interface consumed by the ingredient validator."""

    @abstractmethod
    async def lookup_by_names(self, names: list[str]) -> list[CatalogEntry]:
        """Return the entries whose name equals one of `names`, ignoring case.

        Unknown names are simply absent from the result.
        """


class InMemoryIngredientCatalog(IngredientCatalog):
    def __init__(self, entries: Iterable[CatalogEntry] = ()) -> None:
        self._entries: dict[str, CatalogEntry] = {}
        for entry in entries:
            self.add(entry)

    def add(self, entry: CatalogEntry) -> None:
        self._entries[entry.name.lower()] = entry

    def __len__(self) -> int:
        return len(self._entries)

    async def lookup_by_names(self, names: list[str]) -> list[CatalogEntry]:
        found: list[CatalogEntry] = []
        seen: set[str] = set()
        for name in names:
            key = name.strip().lower()
            if key in seen:
                continue
            seen.add(key)
            entry = self._entries.get(key)
            if entry is not None:
                found.append(entry)
        return found


class JsonFileIngredientCatalog(IngredientCatalog):
    """Catalog backed by a JSON array of entries (camelCase or snake_case keys).

    The file is read once, on the first lookup, off the event loop.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._catalog: Optional[InMemoryIngredientCatalog] = None

    def _load(self) -> InMemoryIngredientCatalog:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogLookupError(f"Failed to load ingredient catalog from {self.path}: {e}") from e

        if not isinstance(raw, list):
            raise CatalogLookupError(f"Ingredient catalog {self.path} must contain a JSON array")

        try:
            entries = [CatalogEntry.model_validate(item) for item in raw]
        except ValidationError as e:
            raise CatalogLookupError(f"Invalid entry in ingredient catalog {self.path}: {e}") from e

        logger.info(f"Loaded {len(entries)} ingredients from {self.path}")
        return InMemoryIngredientCatalog(entries)

    async def lookup_by_names(self, names: list[str]) -> list[CatalogEntry]:
        if self._catalog is None:
            self._catalog = await asyncio.to_thread(self._load)
        return await self._catalog.lookup_by_names(names)
