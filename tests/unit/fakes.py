"""Test doubles for the pipeline's collaborators."""

from recipe_generator.catalog.catalog import IngredientCatalog
from recipe_generator.exceptions import CatalogLookupError
from recipe_generator.generation.invoker import CompletionChoice, CompletionClient, CompletionResponse

STRICT_REPLY = (
    '```json\n{"title":"T","description":"D","ingredients":["a"],"instructions":["b"],'
    '"prepTime":"10m","cookTime":"5m","servings":2}\n```'
)

HEURISTIC_REPLY = (
    "Tacos\n\nA tasty dish with more than thirty characters here.\n\n"
    "Ingredients:\n2 tortillas\n1 cup beef\n\nInstructions:\nCook beef\nAssemble tacos"
)


class FakeCompletionClient(CompletionClient):
    """Returns canned text and records every prompt it receives."""

    def __init__(self, text="", choices=None, error=None):
        self.text = text
        self.choices = choices
        self.error = error
        self.calls = []

    async def complete(self, prompt, max_output_tokens, temperature):
        self.calls.append(
            {"prompt": prompt, "max_output_tokens": max_output_tokens, "temperature": temperature}
        )
        if self.error is not None:
            raise self.error
        if self.choices is not None:
            return CompletionResponse(choices=self.choices)
        return CompletionResponse(choices=[CompletionChoice(text=self.text)])


class FailingCatalog(IngredientCatalog):
    """Catalog whose every lookup fails."""

    def __init__(self, error=None):
        self.error = error or CatalogLookupError("catalog unavailable")
        self.calls = 0

    async def lookup_by_names(self, names):
        self.calls += 1
        raise self.error
