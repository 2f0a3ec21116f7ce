"""Pytest configuration and fixtures for integration tests.

Loads .env from the project root and skips the live tests when no
GEMINI_API_KEY is configured.
"""

import os
from pathlib import Path

import pytest
from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).parent.parent.parent


def pytest_configure(config):
    """Load .env before collection so Config sees the API key."""
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)

    print("\n" + "=" * 70)
    print("Note: These tests call the live Gemini API and require GEMINI_API_KEY")
    print(f"Environment loaded from: {env_path}")
    print("=" * 70 + "\n")


@pytest.fixture(scope="session", autouse=True)
def check_api_keys():
    """Skip the session when the API key is missing."""
    if not os.getenv("GEMINI_API_KEY"):
        pytest.skip("Missing required API key: GEMINI_API_KEY (set it in .env)")


@pytest.fixture(scope="session")
def catalog_file():
    return str(PROJECT_ROOT / "data" / "ingredients.json")
