"""Ingredient validation: enrich caller ingredients against the catalog."""

from typing import Sequence

from recipe_generator.catalog.catalog import IngredientCatalog
from recipe_generator.models.models import UNKNOWN_CATEGORY, EnrichedIngredient, IngredientInput
from recipe_generator.utils.logger import logger


async def validate_ingredients(
    ingredients: Sequence[IngredientInput],
    catalog: IngredientCatalog,
) -> list[EnrichedIngredient]:
    """Look up every ingredient in the catalog and annotate it.

    One catalog round trip covers all names. Output has the same length and
    order as the input (no drops, no dedup). Unmatched ingredients get
    category "unknown" and no nutritional reference.

    Args:
        ingredients: Caller-supplied ingredients.
        catalog: Ingredient catalog to match against.

    Returns:
        List of EnrichedIngredient, one per input ingredient.

    Raises:
        Whatever the catalog raises, unchanged (no retry).
    """
    entries = await catalog.lookup_by_names([ingredient.name for ingredient in ingredients])
    by_name = {entry.name.lower(): entry for entry in entries}

    enriched = []
    for ingredient in ingredients:
        entry = by_name.get(ingredient.name.lower())
        enriched.append(
            EnrichedIngredient(
                name=ingredient.name,
                quantity=ingredient.quantity,
                validated=entry is not None,
                category=entry.category.value if entry else UNKNOWN_CATEGORY,
                nutritional_reference=entry.nutritional_data if entry else None,
            )
        )

    matched = sum(1 for ingredient in enriched if ingredient.validated)
    logger.debug(f"Validated ingredients: {matched}/{len(enriched)} found in catalog")
    return enriched
