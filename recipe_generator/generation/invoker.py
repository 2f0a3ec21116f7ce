"""Model invocation: send one prompt to a text-completion service.

- CompletionClient: abstract completion interface (prompt in, choices out)
- GeminiCompletionClient: Google Gemini implementation via google-genai
- invoke_model(): single attempt with timeout, returns the first choice's text

Every failure (network, auth, quota, timeout, no choices) is raised as
ModelInvocationError. There are no retries and no backoff.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import List, Optional

from google import genai
from google.genai import types
from pydantic import BaseModel, Field

from recipe_generator.exceptions import ModelInvocationError
from recipe_generator.utils.logger import logger


class CompletionChoice(BaseModel):
    text: Optional[str] = None


class CompletionResponse(BaseModel):
    choices: List[CompletionChoice] = Field(default_factory=list)


class CompletionClient(ABC):
    """Text-completion service consumed by the pipeline."""

    @abstractmethod
    async def complete(self, prompt: str, max_output_tokens: int, temperature: float) -> CompletionResponse:
        """Return the service's completion choices for `prompt`."""


class GeminiCompletionClient(CompletionClient):
    """Completion client backed by the Gemini API.

    Each response candidate becomes one choice; its text is the concatenation
    of the candidate's text parts.
    """

    def __init__(self, api_key: str, model: str, client: Optional[genai.Client] = None) -> None:
        if not api_key and client is None:
            raise ValueError("GEMINI_API_KEY is required")
        self.model = model
        self.client = client if client is not None else genai.Client(api_key=api_key)

    async def complete(self, prompt: str, max_output_tokens: int, temperature: float) -> CompletionResponse:
        # Sync SDK call, run in a worker thread
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                max_output_tokens=max_output_tokens,
                temperature=temperature,
            ),
        )
        return CompletionResponse(choices=[_choice_from_candidate(c) for c in (response.candidates or [])])


def _choice_from_candidate(candidate) -> CompletionChoice:
    content = getattr(candidate, "content", None)
    parts = getattr(content, "parts", None) or []
    texts = [part.text for part in parts if getattr(part, "text", None)]
    return CompletionChoice(text="".join(texts) if texts else None)


async def invoke_model(
    client: CompletionClient,
    prompt: str,
    *,
    max_output_tokens: int = 1000,
    temperature: float = 0.7,
    timeout_seconds: Optional[float] = None,
) -> str:
    """Send the prompt once and return the text of the first choice.

    Args:
        client: Completion service.
        prompt: Composed recipe prompt.
        max_output_tokens: Decoding budget.
        temperature: Sampling temperature.
        timeout_seconds: Abort the call after this many seconds (None waits forever).

    Returns:
        str: Raw completion text.

    Raises:
        ModelInvocationError: On any service failure, timeout, or when the
            response carries no usable choice.
    """
    logger.debug(f"Invoking model (max_output_tokens={max_output_tokens}, temperature={temperature})")
    timeout = asyncio.timeout(timeout_seconds)
    try:
        async with timeout:
            response = await client.complete(
                prompt, max_output_tokens=max_output_tokens, temperature=temperature
            )
    except TimeoutError as e:
        if not timeout.expired():
            raise ModelInvocationError(f"Completion request failed: {e!r}") from e
        raise ModelInvocationError(f"Completion request timed out after {timeout_seconds}s") from e
    except ModelInvocationError:
        raise
    except Exception as e:
        raise ModelInvocationError(f"Completion request failed: {e}") from e

    if not response.choices:
        raise ModelInvocationError("Completion response contained no choices")

    text = response.choices[0].text
    if not text or not text.strip():
        raise ModelInvocationError("First completion choice has no text")

    logger.debug(f"Model returned {len(text)} chars")
    return text
