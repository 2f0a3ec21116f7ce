"""Shared fixtures for unit tests: in-memory catalog and fake completion clients."""

import pytest

from recipe_generator.catalog.catalog import InMemoryIngredientCatalog
from recipe_generator.models.models import CatalogEntry, NutritionalFacts

from fakes import HEURISTIC_REPLY, STRICT_REPLY, FakeCompletionClient


@pytest.fixture
def catalog_entries():
    return [
        CatalogEntry(
            name="Tomato",
            category="vegetable",
            nutritional_data=NutritionalFacts(calories=18, protein=0.9, carbs=3.9, fat=0.2, fiber=1.2, sugar=2.6),
            alternative_names=["tomatoes"],
        ),
        CatalogEntry(name="basil", category="herb"),
        CatalogEntry(name="tortilla", category="grain", alternative_names=["tortillas"]),
    ]


@pytest.fixture
def catalog(catalog_entries):
    return InMemoryIngredientCatalog(catalog_entries)


@pytest.fixture
def strict_client():
    return FakeCompletionClient(text=STRICT_REPLY)


@pytest.fixture
def heuristic_client():
    return FakeCompletionClient(text=HEURISTIC_REPLY)
