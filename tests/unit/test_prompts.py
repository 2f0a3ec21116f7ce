"""Unit tests for prompt composition."""

import pytest

from recipe_generator.models.models import ComplexityLevel, EnrichedIngredient
from recipe_generator.prompts.prompts import RECIPE_JSON_FIELDS, compose_recipe_prompt


@pytest.fixture
def ingredients():
    return [
        EnrichedIngredient(name="tomato", quantity="2", validated=True, category="vegetable"),
        EnrichedIngredient(name="saffron", quantity="1 pinch", validated=False),
    ]


class TestComposeRecipePrompt:
    """Test prompt contents and determinism."""

    def test_embeds_complexity_names_and_preferences(self, ingredients):
        prompt = compose_recipe_prompt(ingredients, ["vegetarian", "gluten-free"], ComplexityLevel.ADVANCED)

        assert "Create a advanced level recipe" in prompt
        assert "tomato, saffron" in prompt
        assert "Dietary preferences: vegetarian, gluten-free." in prompt

    def test_quantities_not_sent_by_default(self, ingredients):
        prompt = compose_recipe_prompt(ingredients, [], "beginner")
        assert "1 pinch" not in prompt
        assert "(2)" not in prompt

    def test_quantities_opt_in(self, ingredients):
        prompt = compose_recipe_prompt(ingredients, [], "beginner", include_quantities=True)
        assert "tomato (2), saffron (1 pinch)" in prompt

    def test_requests_json_fields(self, ingredients):
        prompt = compose_recipe_prompt(ingredients, [], "intermediate")
        assert "JSON object" in prompt
        for field in RECIPE_JSON_FIELDS:
            assert field in prompt
        assert RECIPE_JSON_FIELDS == (
            "title", "description", "ingredients", "instructions", "prepTime", "cookTime", "servings"
        )

    def test_empty_preferences_render_empty(self, ingredients):
        prompt = compose_recipe_prompt(ingredients, [], "intermediate")
        assert "Dietary preferences: ." in prompt

    def test_deterministic(self, ingredients):
        first = compose_recipe_prompt(ingredients, ["vegan"], ComplexityLevel.BEGINNER)
        second = compose_recipe_prompt(list(ingredients), ["vegan"], ComplexityLevel.BEGINNER)
        assert first == second

    def test_enum_and_string_complexity_match(self, ingredients):
        assert compose_recipe_prompt(ingredients, [], ComplexityLevel.BEGINNER) == compose_recipe_prompt(
            ingredients, [], "beginner"
        )

    def test_empty_ingredients_raise(self):
        with pytest.raises(ValueError, match="ingredient"):
            compose_recipe_prompt([], ["vegan"], "beginner")
