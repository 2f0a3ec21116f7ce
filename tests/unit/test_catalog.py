"""Unit tests for ingredient catalog implementations."""

import json
from pathlib import Path

import pytest

from recipe_generator.catalog.catalog import InMemoryIngredientCatalog, JsonFileIngredientCatalog
from recipe_generator.exceptions import CatalogLookupError
from recipe_generator.models.models import AllergenType, CatalogEntry, IngredientCategory

SEED_CATALOG = Path(__file__).resolve().parents[2] / "data" / "ingredients.json"


class TestInMemoryIngredientCatalog:
    """Test exact, case-insensitive lookups."""

    @pytest.mark.asyncio
    async def test_lookup_case_insensitive(self, catalog):
        found = await catalog.lookup_by_names(["TOMATO", "Basil"])
        assert {entry.name for entry in found} == {"tomato", "basil"}

    @pytest.mark.asyncio
    async def test_unknown_names_absent(self, catalog):
        assert await catalog.lookup_by_names(["unobtainium"]) == []

    @pytest.mark.asyncio
    async def test_alternative_names_not_matched(self, catalog):
        assert await catalog.lookup_by_names(["tomatoes", "tortillas"]) == []

    @pytest.mark.asyncio
    async def test_duplicate_names_return_one_entry(self, catalog):
        found = await catalog.lookup_by_names(["basil", "BASIL"])
        assert len(found) == 1

    @pytest.mark.asyncio
    async def test_added_names_stored_lowercase(self, catalog):
        catalog.add(CatalogEntry(name="  Olive Oil ", category="oil"))

        assert len(catalog) == 4
        found = await catalog.lookup_by_names(["olive oil"])
        assert found[0].category is IngredientCategory.OIL


class TestJsonFileIngredientCatalog:
    """Test loading entries from disk."""

    @pytest.mark.asyncio
    async def test_loads_camel_case_entries(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                [
                    {
                        "name": "Egg",
                        "category": "protein",
                        "nutritionalData": {"calories": 155, "protein": 13},
                        "isAllergen": True,
                        "allergenType": "egg",
                    }
                ]
            )
        )
        catalog = JsonFileIngredientCatalog(path)

        found = await catalog.lookup_by_names(["egg"])

        assert len(found) == 1
        assert found[0].category is IngredientCategory.PROTEIN
        assert found[0].nutritional_data.calories == 155
        assert found[0].allergen_type is AllergenType.EGG

    @pytest.mark.asyncio
    async def test_missing_file_raises(self, tmp_path):
        catalog = JsonFileIngredientCatalog(tmp_path / "missing.json")
        with pytest.raises(CatalogLookupError, match="Failed to load"):
            await catalog.lookup_by_names(["egg"])

    @pytest.mark.asyncio
    async def test_non_array_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text('{"name": "egg"}')
        with pytest.raises(CatalogLookupError, match="JSON array"):
            await JsonFileIngredientCatalog(path).lookup_by_names(["egg"])

    @pytest.mark.asyncio
    async def test_invalid_entry_raises(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text('[{"name": "egg", "category": "mineral"}]')
        with pytest.raises(CatalogLookupError, match="Invalid entry"):
            await JsonFileIngredientCatalog(path).lookup_by_names(["egg"])

    @pytest.mark.asyncio
    async def test_seed_catalog_loads(self):
        catalog = JsonFileIngredientCatalog(SEED_CATALOG)
        found = await catalog.lookup_by_names(["Tomato", "tortilla", "ground beef"])
        assert {entry.name for entry in found} == {"tomato", "tortilla", "ground beef"}


class TestInMemoryConstruction:
    def test_empty_catalog(self):
        assert len(InMemoryIngredientCatalog()) == 0
