"""Prompt templates for recipe generation.

Provides the prompt composer that turns a generation request into the single
completion prompt sent to the model. Composition is pure: identical inputs
give byte-identical prompts.
"""

from typing import Sequence

from recipe_generator.models.models import ComplexityLevel, EnrichedIngredient

RECIPE_JSON_FIELDS = ("title", "description", "ingredients", "instructions", "prepTime", "cookTime", "servings")

RECIPE_PROMPT_TEMPLATE = """Create a {complexity} level recipe using some or all of these ingredients: {ingredients}.
Dietary preferences: {preferences}.
Format the response as a JSON object with {fields}.
Use "ingredients" for the ingredients with quantities and "instructions" for an array of steps.
Respond with the JSON object only."""


def _format_ingredient(ingredient: EnrichedIngredient, include_quantities: bool) -> str:
    if include_quantities and ingredient.quantity:
        return f"{ingredient.name} ({ingredient.quantity})"
    return ingredient.name


def compose_recipe_prompt(
    ingredients: Sequence[EnrichedIngredient],
    dietary_preferences: Sequence[str],
    complexity_level: ComplexityLevel | str,
    include_quantities: bool = False,
) -> str:
    """Build the completion prompt for one recipe.

    Only ingredient names are embedded unless include_quantities is set.

    Args:
        ingredients: Enriched ingredients (must not be empty).
        dietary_preferences: Free-text preferences, rendered comma-joined (may be empty).
        complexity_level: Difficulty tier, embedded verbatim.
        include_quantities: Append "(quantity)" after each ingredient name.

    Returns:
        str: Prompt text.

    Raises:
        ValueError: If ingredients is empty.
    """
    if not ingredients:
        raise ValueError("At least one ingredient is required to compose a prompt")

    complexity = complexity_level.value if isinstance(complexity_level, ComplexityLevel) else complexity_level

    return RECIPE_PROMPT_TEMPLATE.format(
        complexity=complexity,
        ingredients=", ".join(_format_ingredient(i, include_quantities) for i in ingredients),
        preferences=", ".join(dietary_preferences),
        fields=", ".join(RECIPE_JSON_FIELDS),
    )
