# utils/ai_client.py
import logging
from typing import Optional

import httpx
from openai import AsyncOpenAI, OpenAIError

from lessoncraft.core.config import GenerationSettings, get_generation_settings

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

GENERATION_FAILED_MESSAGE = "Failed to generate lesson plan. Please check your API key and try again."


class AIClientError(Exception):
    pass


class AIConfigurationError(AIClientError):
    pass


class MissingCredentialError(AIConfigurationError):
    pass


class GenerationError(AIClientError):
    pass


async def _fetch_gemini(prompt: str, settings: GenerationSettings, client: httpx.AsyncClient) -> str:
    payload = {"contents": [{"parts": [{"text": prompt}]}]}
    resp = await client.post(settings.api_url, params={"key": settings.api_key}, json=payload)

    if resp.status_code != 200:
        raise GenerationError(f"AI provider returned status {resp.status_code}: {resp.text}")

    data = resp.json()
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise GenerationError(f"Unexpected AI provider payload: {data!r}") from e


async def _fetch_openai(prompt: str, settings: GenerationSettings) -> str:
    async with AsyncOpenAI(api_key=settings.api_key, timeout=settings.timeout) as openai_client:
        response = await openai_client.chat.completions.create(
            model=settings.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=0.7,
        )
    try:
        return response.choices[0].message.content or ""
    except (IndexError, AttributeError, TypeError) as e:
        raise GenerationError(f"Unexpected AI provider payload: {response!r}") from e


async def generate_lesson_content(
    prompt: str,
    *,
    settings: Optional[GenerationSettings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Send one prompt to the configured provider and return the whole completion.

    Raises MissingCredentialError before any network traffic when no API key is
    configured, and GenerationError for every provider-side failure.
    """
    settings = settings or get_generation_settings()
    provider = settings.provider.strip().lower()

    if not settings.api_key:
        raise MissingCredentialError("AI API key is not configured. Set AI_API_KEY in the environment or .env file.")
    if provider not in ("gemini", "openai"):
        raise AIConfigurationError(f"Unsupported AI_PROVIDER: {settings.provider}")

    logger.info("Requesting lesson content from %s (%s)", provider, settings.model)
    try:
        if provider == "openai":
            text = await _fetch_openai(prompt, settings)
        elif client is not None:
            text = await _fetch_gemini(prompt, settings, client)
        else:
            async with httpx.AsyncClient(timeout=settings.timeout) as owned_client:
                text = await _fetch_gemini(prompt, settings, owned_client)
    except (GenerationError, httpx.HTTPError, OpenAIError, ValueError) as e:
        logger.exception("Error generating lesson plan: %s", e)
        raise GenerationError(GENERATION_FAILED_MESSAGE) from e

    if not text or not text.strip():
        logger.warning("AI provider returned an empty completion")
        raise GenerationError(GENERATION_FAILED_MESSAGE)

    logger.debug("AI raw response (truncated): %s", text[:1000])
    return text
