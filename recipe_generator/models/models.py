"""Data models and schemas for the recipe generation pipeline.

Defines Pydantic models for catalog entries, generation requests, and the
structured recipe record produced from model output.
All models use Pydantic v2 for strict validation.
"""

import re
from enum import Enum
from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class ComplexityLevel(str, Enum):
    """User-selected recipe difficulty tier."""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class IngredientCategory(str, Enum):
    VEGETABLE = "vegetable"
    FRUIT = "fruit"
    GRAIN = "grain"
    PROTEIN = "protein"
    DAIRY = "dairy"
    HERB = "herb"
    SPICE = "spice"
    OIL = "oil"
    CONDIMENT = "condiment"
    OTHER = "other"


class AllergenType(str, Enum):
    NONE = "none"
    GLUTEN = "gluten"
    DAIRY = "dairy"
    NUTS = "nuts"
    SHELLFISH = "shellfish"
    SOY = "soy"
    EGG = "egg"
    OTHER = "other"


class ParsePath(str, Enum):
    """Which normalization path produced a recipe."""

    STRICT = "strict"
    EMBEDDED = "embedded"
    HEURISTIC = "heuristic"


UNKNOWN_CATEGORY = "unknown"


class NutritionalFacts(BaseModel):
    """Nutrition per reference serving."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    calories: Annotated[float, Field(0, ge=0)]
    protein: Annotated[float, Field(0, ge=0)]
    carbs: Annotated[float, Field(0, ge=0)]
    fat: Annotated[float, Field(0, ge=0)]
    fiber: Annotated[float, Field(0, ge=0)]
    sugar: Annotated[float, Field(0, ge=0)]
    serving_size: Annotated[str, Field("100g", description="Reference serving, e.g. '100g' or 'per serving'")]


class CatalogEntry(BaseModel):
    """Ingredient reference record held by the ingredient catalog.

    Names are stored lowercased. Alternative names are kept for reference only;
    lookups match on `name` alone.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, max_length=100)]
    category: IngredientCategory
    nutritional_data: Annotated[NutritionalFacts, Field(default_factory=NutritionalFacts)]
    description: Optional[str] = None
    common_unit: str = "g"
    alternative_names: Annotated[List[str], Field(default_factory=list)]
    is_allergen: bool = False
    allergen_type: AllergenType = AllergenType.NONE

    @field_validator("name")
    @classmethod
    def lowercase_name(cls, name: str) -> str:
        return name.lower()


class IngredientInput(BaseModel):
    """Ingredient as supplied by the caller."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, max_length=100, description="Ingredient name, e.g. 'tomato'")]
    quantity: Annotated[str, Field("", max_length=100, description="Free-text quantity, e.g. '2 cups'")]

    @field_validator("quantity", mode="before")
    @classmethod
    def stringify_quantity(cls, quantity):
        """Accept numeric quantities ("2" and 2 mean the same thing)."""
        if quantity is None:
            return ""
        if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
            return str(quantity)
        return quantity


class EnrichedIngredient(IngredientInput):
    """Caller ingredient plus what the catalog knows about it."""

    validated: bool
    category: str = UNKNOWN_CATEGORY
    nutritional_reference: Optional[NutritionalFacts] = None


class GenerationRequest(BaseModel):
    """Everything the prompt composer needs. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    ingredients: Annotated[tuple[EnrichedIngredient, ...], Field(min_length=1)]
    dietary_preferences: Annotated[tuple[str, ...], Field(default_factory=tuple)]
    complexity_level: ComplexityLevel = ComplexityLevel.INTERMEDIATE


class StructuredIngredient(BaseModel):
    """Ingredient line returned as an object by the model."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: Annotated[str, Field(min_length=1, validation_alias=AliasChoices("name", "item", "ingredient"))]
    quantity: Annotated[str, Field("", validation_alias=AliasChoices("quantity", "amount"))]
    unit: Optional[str] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def stringify_quantity(cls, quantity):
        if quantity is None:
            return ""
        if isinstance(quantity, (int, float)) and not isinstance(quantity, bool):
            return str(quantity)
        return quantity


class GeneratedRecipe(BaseModel):
    """Structured recipe record produced by the pipeline.

    Serialized with camelCase keys (prepTime, cookTime, nutritionalInfo) and
    accepts either spelling on input. `ingredients` and `instructions` are always
    lists, empty on the degraded path.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    title: str
    description: str
    ingredients: List[Union[StructuredIngredient, str]]
    instructions: List[str]
    prep_time: str
    cook_time: str
    servings: Annotated[int, Field(ge=1, le=100)]
    nutritional_info: Optional[NutritionalFacts] = None

    @field_validator("instructions", mode="before")
    @classmethod
    def flatten_instruction_steps(cls, instructions):
        """Accept step objects ({"step": 1, "description": "..."}) as plain text."""
        if not isinstance(instructions, list):
            return instructions
        flattened = []
        for step in instructions:
            if isinstance(step, dict):
                text = step.get("description") or step.get("text") or step.get("instruction")
                flattened.append(text if text is not None else step)
            else:
                flattened.append(step)
        return flattened

    @field_validator("prep_time", "cook_time", mode="before")
    @classmethod
    def minutes_from_number(cls, value):
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return f"{value:g} minutes"
        return value

    @field_validator("servings", mode="before")
    @classmethod
    def servings_from_text(cls, value):
        """Accept "4" or "4 servings" as 4."""
        if isinstance(value, str):
            match = re.search(r"\d+", value)
            if match:
                return int(match.group())
        return value

    @property
    def total_time(self) -> str:
        """Display-only total, e.g. '10 minutes + 20 minutes'."""
        if self.prep_time and self.cook_time:
            return f"{self.prep_time} + {self.cook_time}"
        return self.prep_time or self.cook_time


class StrictNormalization(BaseModel):
    """Model reply parsed as JSON and validated."""

    kind: Literal["strict"] = "strict"
    recipe: GeneratedRecipe


class EmbeddedNormalization(BaseModel):
    """Valid JSON recipe recovered from inside surrounding prose."""

    kind: Literal["embedded"] = "embedded"
    recipe: GeneratedRecipe


class HeuristicNormalization(BaseModel):
    """Recipe reconstructed line by line from unstructured text."""

    kind: Literal["heuristic"] = "heuristic"
    recipe: GeneratedRecipe


NormalizedRecipe = Annotated[
    Union[StrictNormalization, EmbeddedNormalization, HeuristicNormalization],
    Field(discriminator="kind"),
]


class GenerationResult(BaseModel):
    """Output of one pipeline run: the recipe plus how it was obtained."""

    recipe: GeneratedRecipe
    parse_path: ParsePath
    complexity_level: ComplexityLevel
    dietary_preferences: Annotated[List[str], Field(default_factory=list)]
    ingredients: Annotated[List[EnrichedIngredient], Field(default_factory=list)]

    @property
    def is_degraded(self) -> bool:
        """True whenever the reply did not parse as JSON on its own."""
        return self.parse_path is not ParsePath.STRICT
