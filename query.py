#!/usr/bin/env python3
"""Ad hoc query runner for the Recipe Generation Service.

Generate one recipe directly from the command line.

Usage:
    python query.py "tomato:2, basil, garlic:3 cloves"
    python query.py --complexity beginner --diet vegetarian "pasta, tomato"
    python query.py --debug "chicken breast:500g, rice"  # Show full JSON result

Ingredients are comma-separated; an optional quantity follows a colon.

Features:
- Single generation via RecipeGenerationPipeline.generate()
- Recipe rendered as markdown
- Debug mode to display the full JSON result (parse path, enriched ingredients)
- Clean exit after completion
"""

import asyncio
import sys
from typing import Optional

from rich.console import Console
from rich.markdown import Markdown

from recipe_generator.exceptions import RecipeServiceError
from recipe_generator.generation.pipeline import build_pipeline
from recipe_generator.models.models import GenerationResult, StructuredIngredient
from recipe_generator.utils.logger import logger

console = Console()

USAGE = 'Usage: python query.py [--debug] [--complexity LEVEL] [--diet PREF]... "<ingredient>[:quantity], ..."'


def parse_ingredients(text: str) -> list[dict]:
    """Parse "tomato:2, basil" into [{"name": "tomato", "quantity": "2"}, {"name": "basil", "quantity": ""}]."""
    ingredients = []
    for item in text.split(","):
        if not item.strip():
            continue
        name, _, quantity = item.partition(":")
        ingredients.append({"name": name.strip(), "quantity": quantity.strip()})
    return ingredients


def render_markdown(result: GenerationResult) -> str:
    """Format a generation result as markdown for the terminal."""
    recipe = result.recipe
    lines = [f"# {recipe.title or 'Untitled recipe'}", ""]
    if recipe.description:
        lines += [recipe.description, ""]
    lines += [
        f"**Complexity:** {result.complexity_level.value}  ",
        f"**Prep:** {recipe.prep_time} | **Cook:** {recipe.cook_time} | **Serves:** {recipe.servings}",
        "",
        "## Ingredients",
        "",
    ]
    for ingredient in recipe.ingredients:
        if isinstance(ingredient, StructuredIngredient):
            amount = " ".join(part for part in (ingredient.quantity, ingredient.unit) if part)
            lines.append(f"- {ingredient.name}" + (f" ({amount})" if amount else ""))
        else:
            lines.append(f"- {ingredient}")
    lines += ["", "## Instructions", ""]
    lines += [f"{i}. {step}" for i, step in enumerate(recipe.instructions, start=1)]
    if recipe.nutritional_info:
        n = recipe.nutritional_info
        lines += [
            "",
            f"*Nutrition ({n.serving_size}): {n.calories:g} kcal, protein {n.protein:g}g, "
            f"carbs {n.carbs:g}g, fat {n.fat:g}g, fiber {n.fiber:g}g, sugar {n.sugar:g}g*",
        ]
    return "\n".join(lines)


def run_query(
    ingredients_text: str,
    complexity: Optional[str] = None,
    diets: Optional[list[str]] = None,
    debug: bool = False,
) -> None:
    """Execute a single generation and print the recipe.

    Args:
        ingredients_text: Comma-separated ingredients with optional ":quantity".
        complexity: beginner, intermediate or advanced (None: configured default).
        diets: Dietary preferences.
        debug: If True, display the full JSON result.
    """
    try:
        pipeline = build_pipeline()
        logger.info(f"Running generation for: {ingredients_text}")
        result = asyncio.run(
            pipeline.generate(parse_ingredients(ingredients_text), diets or [], complexity)
        )

        console.print()
        if debug:
            console.print("[bold cyan]Debug Mode: Full Result[/bold cyan]")
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print_json(data=result.model_dump(mode="json", by_alias=True))
            console.print("[dim]" + "=" * 60 + "[/dim]")
            console.print()

        if result.is_degraded:
            console.print(
                f"[yellow]⚠ Model reply was not pure JSON; recipe recovered via the "
                f"{result.parse_path.value} path.[/yellow]"
            )
        console.print(Markdown(render_markdown(result)))

    except KeyboardInterrupt:
        logger.info("\nQuery interrupted by user.")
        sys.exit(0)
    except (RecipeServiceError, ValueError) as e:
        console.print(f"[red]✗ Error: {e}[/red]")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Query execution failed: {e}", exc_info=True)
        sys.exit(1)


def main(argv: list[str]) -> None:
    debug_mode = False
    complexity = None
    diets: list[str] = []
    argv_start = 1

    while argv_start < len(argv) and argv[argv_start].startswith("--"):
        flag = argv[argv_start]
        if flag == "--debug":
            debug_mode = True
            argv_start += 1
        elif flag in ("--complexity", "--diet"):
            argv_start += 1
            if argv_start >= len(argv):
                print(f"Error: {flag} flag requires a value")
                sys.exit(1)
            if flag == "--complexity":
                complexity = argv[argv_start]
            else:
                diets.append(argv[argv_start])
            argv_start += 1
        else:
            print(f"Unknown flag: {flag}")
            sys.exit(1)

    if argv_start >= len(argv):
        print("Error: No ingredients provided")
        print(USAGE)
        sys.exit(1)

    # Join all arguments after flags (handles unquoted ingredient lists)
    run_query(" ".join(argv[argv_start:]), complexity=complexity, diets=diets, debug=debug_mode)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print(USAGE)
        print("")
        print("Examples:")
        print('  python query.py "tomato:2, basil, garlic:3 cloves"')
        print('  python query.py --complexity beginner --diet vegetarian "pasta, tomato"')
        print('  python query.py --debug "chicken breast:500g, rice"')
        sys.exit(1)
    main(sys.argv)
