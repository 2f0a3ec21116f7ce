"""Unit tests for the placeholder nutrition estimator."""

from recipe_generator.generation.nutrition import PLACEHOLDER_NUTRITION, PlaceholderNutritionEstimator
from recipe_generator.models.models import GeneratedRecipe


def make_recipe(title):
    return GeneratedRecipe(
        title=title,
        description="",
        ingredients=[],
        instructions=[],
        prep_time="15 minutes",
        cook_time="30 minutes",
        servings=4,
    )


class TestPlaceholderNutritionEstimator:
    def test_same_facts_for_any_recipe(self):
        estimator = PlaceholderNutritionEstimator()
        first = estimator.estimate(make_recipe("Tacos"))
        second = estimator.estimate(make_recipe("Soup"))

        assert first == second
        assert first.model_dump() == {
            "calories": 450,
            "protein": 20,
            "carbs": 55,
            "fat": 15,
            "fiber": 8,
            "sugar": 10,
            "serving_size": "per serving",
        }

    def test_returns_a_copy(self):
        facts = PlaceholderNutritionEstimator().estimate(make_recipe("Tacos"))
        facts.calories = 1
        assert PLACEHOLDER_NUTRITION.calories == 450
