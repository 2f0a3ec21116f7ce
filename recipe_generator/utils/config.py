"""Configuration management for the Recipe Generation Service.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()

COMPLEXITY_LEVELS = ("beginner", "intermediate", "advanced")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Default: gemini-2.5-flash (fast, cost-effective for single-shot generation)
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Temperature: moderate and non-zero, favors variety over determinism
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.7"))
        # Max Output Tokens: bounded decoding budget for one recipe
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "1000"))
        # Per-call timeouts (seconds) for the two external round trips
        self.MODEL_TIMEOUT_SECONDS: float = float(os.getenv("MODEL_TIMEOUT_SECONDS", "60"))
        self.CATALOG_TIMEOUT_SECONDS: float = float(os.getenv("CATALOG_TIMEOUT_SECONDS", "10"))
        # Ingredient catalog seed file (JSON array of catalog entries)
        self.INGREDIENT_CATALOG_FILE: str = os.getenv("INGREDIENT_CATALOG_FILE", "data/ingredients.json")
        # Complexity used when the caller does not pick one
        self.DEFAULT_COMPLEXITY: str = os.getenv("DEFAULT_COMPLEXITY", "intermediate").lower()
        # Send "name (quantity)" instead of bare names to the model. Off by default
        # so prompts stay identical to the historical ones.
        self.INCLUDE_QUANTITIES_IN_PROMPT: bool = os.getenv(
            "INCLUDE_QUANTITIES_IN_PROMPT", "false"
        ).lower() in ("true", "1", "yes")

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not (0.0 < self.TEMPERATURE <= 2.0):
            raise ValueError(
                f"TEMPERATURE must be greater than 0.0 and at most 2.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 1:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 1, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.MODEL_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"MODEL_TIMEOUT_SECONDS must be positive, got: {self.MODEL_TIMEOUT_SECONDS}"
            )
        if self.CATALOG_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"CATALOG_TIMEOUT_SECONDS must be positive, got: {self.CATALOG_TIMEOUT_SECONDS}"
            )
        if self.DEFAULT_COMPLEXITY not in COMPLEXITY_LEVELS:
            raise ValueError(
                f"DEFAULT_COMPLEXITY must be one of {', '.join(COMPLEXITY_LEVELS)}, "
                f"got: {self.DEFAULT_COMPLEXITY}"
            )


# Module-level config instance; validated by build_pipeline() and query.py
config = Config()
