"""Response normalization: reduce raw model text to a GeneratedRecipe.

Three outcomes, tried in order:

1. STRICT: strip Markdown code fences, parse the whole reply as JSON and
   validate it against the GeneratedRecipe schema. A reply that is a JSON
   object but lacks required fields raises MalformedModelOutputError.
2. EMBEDDED: the reply is not JSON, but a JSON object cut out of the prose
   is a valid recipe. If it is not a valid recipe the reply goes on to the
   heuristic tier instead.
3. HEURISTIC: a line scanner rebuilds a partial recipe (title, description,
   ingredients, instructions) and fills fixed defaults for times and
   servings. This tier never raises.

The result is tagged (StrictNormalization / EmbeddedNormalization /
HeuristicNormalization) so callers can tell which tier produced it. Only
STRICT counts as a clean parse.
"""

import json
import re
from collections import deque
from enum import Enum
from typing import Optional, Union

from pydantic import ValidationError

from recipe_generator.exceptions import MalformedModelOutputError
from recipe_generator.models.models import (
    EmbeddedNormalization,
    GeneratedRecipe,
    HeuristicNormalization,
    ParsePath,
    StrictNormalization,
)
from recipe_generator.utils.logger import logger

CODE_FENCE_MARKERS = ("```json", "```")

# Heuristic-tier defaults, never derived from the text
DEFAULT_PREP_TIME = "15 minutes"
DEFAULT_COOK_TIME = "30 minutes"
DEFAULT_SERVINGS = 4

DESCRIPTION_MIN_LENGTH = 30

INGREDIENTS_HEADER = "ingredients"
INSTRUCTIONS_HEADER = "instructions"

_HEADER_DECORATION = "#*_ \t"


class ScanState(str, Enum):
    BEFORE_INGREDIENTS = "before-ingredients"
    IN_INGREDIENTS = "in-ingredients"
    IN_INSTRUCTIONS = "in-instructions"


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and trim."""
    for marker in CODE_FENCE_MARKERS:
        text = text.replace(marker, "")
    return text.strip()


def _load_json_object(text: str) -> Optional[dict]:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    return parsed if isinstance(parsed, dict) else None


def parse_json_reply(text: str) -> Optional[dict]:
    """Parse the whole reply (fences removed) as a JSON object.

    Returns:
        The parsed dict, or None if the reply is not a JSON object.
    """
    return _load_json_object(strip_code_fences(text))


def extract_embedded_json(text: str) -> Optional[dict]:
    """Find a JSON object embedded in surrounding prose.

    Note:
        Uses r'{.*}' (greedy, across lines): the span from the first '{' to the
        last '}'. Fine for one object, not for several.
    """
    match = re.search(r"\{.*\}", text, re.DOTALL)
    if not match:
        return None
    return _load_json_object(match.group())


def _invalid_fields(error: ValidationError) -> list[str]:
    fields = {str(err["loc"][0]) for err in error.errors() if err.get("loc")}
    return sorted(fields)


def validate_recipe(data: dict) -> GeneratedRecipe:
    """Validate a parsed reply against the recipe schema.

    Raises:
        MalformedModelOutputError: If required fields are missing or mistyped.
    """
    try:
        return GeneratedRecipe.model_validate(data)
    except ValidationError as e:
        raise MalformedModelOutputError(_invalid_fields(e)) from e


def _section_marker(line: str, keyword: str) -> Optional[re.Match]:
    """Find a `keyword:` section marker anywhere in `line`, ignoring case.

    Markdown emphasis may sit between the keyword and its colon
    ("**Ingredients**:"). Headings like "### Recipe Ingredients:" and
    "**Instructions:** Preheat the oven" both match.
    """
    return re.search(rf"{keyword}[*_]*:", line, re.IGNORECASE)


def _inline_content(line: str, marker: re.Match) -> str:
    return line[marker.end():].strip(_HEADER_DECORATION)


def _append_line(section: list[str], line: str) -> None:
    stripped = line.strip()
    if stripped.strip(_HEADER_DECORATION):
        section.append(stripped)


def scan_sections(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split reply lines into ingredient and instruction lines.

    States: before-ingredients -> in-ingredients -> in-instructions.
    - Ingredients are the lines after an "ingredients:" marker up to the next
      "instructions:" marker. Text in front of that marker, on its own line,
      still belongs to the ingredients. Without a closing instructions marker
      the ingredients are discarded (empty list).
    - Instructions run from the first "instructions:" marker to the end of
      text. Markers seen while in-instructions are ordinary content.

    Returns:
        (ingredients, instructions), blank lines dropped, each line trimmed.
    """
    state = ScanState.BEFORE_INGREDIENTS
    ingredients: list[str] = []
    instructions: list[str] = []
    ingredients_closed = False
    pending = deque(lines)

    while pending:
        line = pending.popleft()

        if state is ScanState.IN_INSTRUCTIONS:
            _append_line(instructions, line)
            continue

        closing = _section_marker(line, INSTRUCTIONS_HEADER)
        if state is ScanState.IN_INGREDIENTS:
            if closing is None:
                _append_line(ingredients, line)
                continue
            _append_line(ingredients, line[: closing.start()])
            ingredients_closed = True
            state = ScanState.IN_INSTRUCTIONS
            _append_line(instructions, _inline_content(line, closing))
            continue

        opening = _section_marker(line, INGREDIENTS_HEADER)
        if opening is not None and (closing is None or opening.start() < closing.start()):
            state = ScanState.IN_INGREDIENTS
            # "Ingredients: rice Instructions: boil" closes on the same line
            pending.appendleft(_inline_content(line, opening))
        elif closing is not None:
            state = ScanState.IN_INSTRUCTIONS
            _append_line(instructions, _inline_content(line, closing))

    if not ingredients_closed:
        ingredients = []
    return ingredients, instructions


def parse_heuristic(text: str) -> GeneratedRecipe:
    """Rebuild a partial recipe from unstructured text. Never raises.

    The title is the first line minus one leading "#". The description is the
    first raw line that does not start with "#" and is longer than 30
    characters, so indented lines count by their full length.
    """
    lines = text.strip().splitlines()

    title = lines[0].strip().removeprefix("#").strip() if lines else ""
    description = next(
        (line for line in lines if not line.startswith("#") and len(line) > DESCRIPTION_MIN_LENGTH),
        "",
    ).strip()
    ingredients, instructions = scan_sections(lines)

    return GeneratedRecipe(
        title=title,
        description=description,
        ingredients=ingredients,
        instructions=instructions,
        prep_time=DEFAULT_PREP_TIME,
        cook_time=DEFAULT_COOK_TIME,
        servings=DEFAULT_SERVINGS,
    )


def normalize_response(text: str) -> Union[StrictNormalization, EmbeddedNormalization, HeuristicNormalization]:
    """Normalize raw model text into a tagged recipe result.

    Args:
        text: Raw completion text.

    Returns:
        StrictNormalization when the whole reply parsed as a valid JSON recipe,
        EmbeddedNormalization when a valid JSON recipe was cut out of prose,
        HeuristicNormalization otherwise.

    Raises:
        MalformedModelOutputError: If the whole reply is a JSON object that is
            not a valid recipe.
    """
    data = parse_json_reply(text)
    if data is not None:
        recipe = validate_recipe(data)
        logger.debug("Model reply parsed as JSON recipe", extra={"parse_path": ParsePath.STRICT.value})
        return StrictNormalization(recipe=recipe)

    embedded = extract_embedded_json(text)
    if embedded is not None:
        try:
            recipe = validate_recipe(embedded)
        except MalformedModelOutputError as e:
            logger.debug(f"Embedded JSON is not a recipe, ignoring it: {e}")
        else:
            logger.warning(
                "Model reply is not pure JSON, recovered a recipe embedded in prose",
                extra={"parse_path": ParsePath.EMBEDDED.value},
            )
            return EmbeddedNormalization(recipe=recipe)

    logger.warning(
        "Model reply is not JSON, falling back to heuristic parsing",
        extra={"parse_path": ParsePath.HEURISTIC.value},
    )
    return HeuristicNormalization(recipe=parse_heuristic(text))
