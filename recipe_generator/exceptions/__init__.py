"""
Exceptions module exports
"""

from .exceptions import (
    RecipeServiceError,
    InvalidGenerationRequestError,
    CatalogLookupError,
    ModelInvocationError,
    RecipeGenerationError,
    MalformedModelOutputError,
)

__all__ = [
    "RecipeServiceError",
    "InvalidGenerationRequestError",
    "CatalogLookupError",
    "ModelInvocationError",
    "RecipeGenerationError",
    "MalformedModelOutputError",
]
