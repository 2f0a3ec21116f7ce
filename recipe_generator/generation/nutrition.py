"""Nutrition estimation for generated recipes.

Only a placeholder estimator exists: it returns the same facts for every
recipe. A real estimator would aggregate EnrichedIngredient.nutritional_reference
data and can be injected into the pipeline in its place.
"""

from abc import ABC, abstractmethod

from recipe_generator.models.models import GeneratedRecipe, NutritionalFacts

PLACEHOLDER_NUTRITION = NutritionalFacts(
    calories=450,
    protein=20,
    carbs=55,
    fat=15,
    fiber=8,
    sugar=10,
    serving_size="per serving",
)


class NutritionEstimator(ABC):
    @abstractmethod
    def estimate(self, recipe: GeneratedRecipe) -> NutritionalFacts:
        """Return per-serving nutrition for `recipe`."""


class PlaceholderNutritionEstimator(NutritionEstimator):
    """Returns fixed facts regardless of the recipe."""

    def estimate(self, recipe: GeneratedRecipe) -> NutritionalFacts:
        return PLACEHOLDER_NUTRITION.model_copy()
