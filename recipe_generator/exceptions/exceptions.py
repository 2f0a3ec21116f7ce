"""Custom exception classes for the recipe generation service."""

from typing import Optional


class RecipeServiceError(Exception):
    """Base exception for the recipe generation service."""

    pass


class InvalidGenerationRequestError(RecipeServiceError, ValueError):
    """Raised when a generation request is rejected before any I/O."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid generation request: {reason}")


class CatalogLookupError(RecipeServiceError):
    """Raised when the ingredient catalog cannot answer a lookup."""

    pass


class ModelInvocationError(RecipeServiceError):
    """Raised when the completion service call fails or returns no choices."""

    pass


class RecipeGenerationError(RecipeServiceError):
    """Generic failure surfaced to callers of the generation pipeline."""

    def __init__(self, message: str = "Failed to generate recipe"):
        super().__init__(message)


class MalformedModelOutputError(RecipeGenerationError):
    """Raised when the model reply is JSON but not a valid recipe."""

    def __init__(self, fields: Optional[list[str]] = None):
        self.fields = fields or []
        detail = ", ".join(self.fields) if self.fields else "unknown"
        super().__init__(f"Model output is not a valid recipe (invalid fields: {detail})")
