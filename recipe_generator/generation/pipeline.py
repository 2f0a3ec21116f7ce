"""Recipe generation pipeline.

Sequences the generation steps for one request, strictly in order:

1. validate_ingredients()   - enrich input against the ingredient catalog
2. compose_recipe_prompt()  - build the completion prompt
3. invoke_model()           - one call to the completion service
4. normalize_response()     - strict JSON parse, heuristic fallback
5. NutritionEstimator       - attach nutrition facts

Failure policy (all-or-nothing, no partial results):
- Invalid requests are rejected before any I/O (InvalidGenerationRequestError)
- Catalog failures propagate unchanged and the model is never called
- Model failures are logged and surfaced as RecipeGenerationError
- A JSON reply that is not a recipe surfaces as MalformedModelOutputError
- Prose replies are recovered from embedded JSON (parse_path="embedded") or
  by the heuristic parser (parse_path="heuristic"); both count as degraded

The pipeline holds no mutable state; one instance can serve concurrent calls.
Collaborators are injected, build_pipeline() wires them from configuration.
"""

import asyncio
from typing import Any, Iterable, Optional

from pydantic import ValidationError

from recipe_generator.catalog.catalog import IngredientCatalog, JsonFileIngredientCatalog
from recipe_generator.exceptions import (
    CatalogLookupError,
    InvalidGenerationRequestError,
    MalformedModelOutputError,
    ModelInvocationError,
    RecipeGenerationError,
)
from recipe_generator.generation.invoker import CompletionClient, GeminiCompletionClient, invoke_model
from recipe_generator.generation.normalizer import normalize_response
from recipe_generator.generation.nutrition import NutritionEstimator, PlaceholderNutritionEstimator
from recipe_generator.generation.validator import validate_ingredients
from recipe_generator.models.models import (
    ComplexityLevel,
    EnrichedIngredient,
    GenerationRequest,
    GenerationResult,
    IngredientInput,
    ParsePath,
)
from recipe_generator.prompts.prompts import compose_recipe_prompt
from recipe_generator.utils.config import Config, config
from recipe_generator.utils.logger import logger


def coerce_ingredients(ingredients: Optional[Iterable[Any]]) -> list[IngredientInput]:
    """Turn caller input (models, dicts, or bare names) into IngredientInput objects.

    Raises:
        InvalidGenerationRequestError: If the list is empty or an item is invalid.
    """
    if ingredients is None or isinstance(ingredients, (str, dict)):
        raise InvalidGenerationRequestError("ingredients must be a list")

    coerced = []
    for item in ingredients:
        try:
            if isinstance(item, IngredientInput):
                coerced.append(item)
            elif isinstance(item, str):
                coerced.append(IngredientInput(name=item))
            else:
                coerced.append(IngredientInput.model_validate(item))
        except ValidationError as e:
            raise InvalidGenerationRequestError(f"invalid ingredient {item!r}: {e.errors()[0]['msg']}") from e

    if not coerced:
        raise InvalidGenerationRequestError("at least one ingredient is required")
    return coerced


def resolve_complexity(complexity_level: Optional[ComplexityLevel | str], default: str) -> ComplexityLevel:
    """Map caller input to a ComplexityLevel; None selects the default.

    Raises:
        InvalidGenerationRequestError: If the value is not a known level.
    """
    value = default if complexity_level is None else complexity_level
    if isinstance(value, ComplexityLevel):
        return value
    try:
        return ComplexityLevel(str(value).strip().lower())
    except ValueError as e:
        allowed = ", ".join(level.value for level in ComplexityLevel)
        raise InvalidGenerationRequestError(
            f"complexity_level must be one of {allowed}, got: {complexity_level!r}"
        ) from e


def coerce_preferences(dietary_preferences: Optional[Iterable[Any]]) -> list[str]:
    """Pass dietary preferences through verbatim (a single string becomes a one-item list)."""
    if dietary_preferences is None:
        return []
    if isinstance(dietary_preferences, str):
        return [dietary_preferences]
    preferences = list(dietary_preferences)
    for preference in preferences:
        if not isinstance(preference, str):
            raise InvalidGenerationRequestError(f"dietary preferences must be strings, got: {preference!r}")
    return preferences


class RecipeGenerationPipeline:
    """Generate one structured recipe per call from ingredients and preferences."""

    def __init__(
        self,
        catalog: IngredientCatalog,
        completion_client: CompletionClient,
        nutrition_estimator: Optional[NutritionEstimator] = None,
        *,
        max_output_tokens: int = 1000,
        temperature: float = 0.7,
        model_timeout_seconds: Optional[float] = 60.0,
        catalog_timeout_seconds: Optional[float] = 10.0,
        include_quantities_in_prompt: bool = False,
        default_complexity: str = ComplexityLevel.INTERMEDIATE.value,
    ) -> None:
        self.catalog = catalog
        self.completion_client = completion_client
        self.nutrition_estimator = nutrition_estimator or PlaceholderNutritionEstimator()
        self.max_output_tokens = max_output_tokens
        self.temperature = temperature
        self.model_timeout_seconds = model_timeout_seconds
        self.catalog_timeout_seconds = catalog_timeout_seconds
        self.include_quantities_in_prompt = include_quantities_in_prompt
        self.default_complexity = default_complexity

    async def _enrich(self, ingredients: list[IngredientInput]) -> list[EnrichedIngredient]:
        timeout = asyncio.timeout(self.catalog_timeout_seconds)
        try:
            async with timeout:
                return await validate_ingredients(ingredients, self.catalog)
        except TimeoutError as e:
            # A TimeoutError raised by the catalog itself propagates unchanged
            if not timeout.expired():
                raise
            raise CatalogLookupError(
                f"Ingredient catalog lookup timed out after {self.catalog_timeout_seconds}s"
            ) from e

    async def generate(
        self,
        ingredients: Iterable[Any],
        dietary_preferences: Optional[Iterable[str]] = None,
        complexity_level: Optional[ComplexityLevel | str] = None,
    ) -> GenerationResult:
        """Run the full pipeline for one request.

        Args:
            ingredients: IngredientInput objects, {"name", "quantity"} dicts, or names.
            dietary_preferences: Free-text preferences, passed to the model verbatim.
            complexity_level: beginner, intermediate or advanced (None: configured default).

        Returns:
            GenerationResult with the recipe (nutrition attached) and the parse path used.

        Raises:
            InvalidGenerationRequestError: Empty/invalid ingredients or unknown complexity.
            CatalogLookupError: (or whatever the catalog raises) on catalog failure.
            MalformedModelOutputError: Model replied with JSON that is not a recipe.
            RecipeGenerationError: Model invocation failed.
        """
        inputs = coerce_ingredients(ingredients)
        preferences = coerce_preferences(dietary_preferences)
        complexity = resolve_complexity(complexity_level, self.default_complexity)

        logger.info(
            f"Generating {complexity.value} recipe from {len(inputs)} ingredients "
            f"(preferences: {', '.join(preferences) or 'none'})",
            extra={"complexity_level": complexity.value},
        )

        enriched = await self._enrich(inputs)
        request = GenerationRequest(
            ingredients=enriched,
            dietary_preferences=preferences,
            complexity_level=complexity,
        )

        prompt = compose_recipe_prompt(
            request.ingredients,
            request.dietary_preferences,
            request.complexity_level,
            include_quantities=self.include_quantities_in_prompt,
        )
        logger.debug(f"Composed prompt ({len(prompt)} chars)")

        try:
            text = await invoke_model(
                self.completion_client,
                prompt,
                max_output_tokens=self.max_output_tokens,
                temperature=self.temperature,
                timeout_seconds=self.model_timeout_seconds,
            )
        except ModelInvocationError as e:
            logger.error(f"Recipe generation failed: {e}", exc_info=True)
            raise RecipeGenerationError() from e

        try:
            normalized = normalize_response(text)
        except MalformedModelOutputError as e:
            logger.error(f"Recipe generation failed: {e}")
            raise

        parse_path = ParsePath(normalized.kind)
        nutrition = self.nutrition_estimator.estimate(normalized.recipe)
        recipe = normalized.recipe.model_copy(update={"nutritional_info": nutrition})

        logger.info(f"Generated recipe '{recipe.title}'", extra={"parse_path": parse_path.value})
        return GenerationResult(
            recipe=recipe,
            parse_path=parse_path,
            complexity_level=request.complexity_level,
            dietary_preferences=list(request.dietary_preferences),
            ingredients=list(request.ingredients),
        )


def build_pipeline(cfg: Optional[Config] = None) -> RecipeGenerationPipeline:
    """Factory: wire the JSON catalog and Gemini client from configuration.

    Raises:
        ValueError: If configuration is invalid (e.g. GEMINI_API_KEY missing).
    """
    cfg = cfg or config
    cfg.validate()

    logger.info(f"Ingredient catalog: {cfg.INGREDIENT_CATALOG_FILE}")
    logger.info(f"Model: {cfg.GEMINI_MODEL} (temperature={cfg.TEMPERATURE}, max_output_tokens={cfg.MAX_OUTPUT_TOKENS})")

    return RecipeGenerationPipeline(
        catalog=JsonFileIngredientCatalog(cfg.INGREDIENT_CATALOG_FILE),
        completion_client=GeminiCompletionClient(api_key=cfg.GEMINI_API_KEY, model=cfg.GEMINI_MODEL),
        max_output_tokens=cfg.MAX_OUTPUT_TOKENS,
        temperature=cfg.TEMPERATURE,
        model_timeout_seconds=cfg.MODEL_TIMEOUT_SECONDS,
        catalog_timeout_seconds=cfg.CATALOG_TIMEOUT_SECONDS,
        include_quantities_in_prompt=cfg.INCLUDE_QUANTITIES_IN_PROMPT,
        default_complexity=cfg.DEFAULT_COMPLEXITY,
    )
