"""
Step 2 — OpenRouter Client

The assignment model is served by OpenRouter, which exposes the Chat
Completions protocol, so the OpenAI SDK is pointed at its base URL. OpenRouter
ranks and attributes traffic by the optional HTTP-Referer / X-Title headers;
they are sent when OPENROUTER_APP_URL / OPENROUTER_APP_NAME are set.

Model: google/gemini-flash-1.5-8b-exp  (override with GPT_MODEL)
"""

import logging
import os
from typing import Dict

from openai import AsyncOpenAI

log = logging.getLogger("generation.pipeline")

# ── OpenRouter config ──────────────────────────────────────────────────────────
OPENROUTER_BASE_URL = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
OPENROUTER_APP_URL = os.getenv("OPENROUTER_APP_URL", "")
OPENROUTER_APP_NAME = os.getenv("OPENROUTER_APP_NAME", "Assignment Docs API")
GPT_MODEL = os.getenv("GPT_MODEL", "google/gemini-flash-1.5-8b-exp")
GPT_TIMEOUT = float(os.getenv("GPT_TIMEOUT", "60"))

_client: AsyncOpenAI | None = None


def _attribution_headers() -> Dict[str, str]:
    headers = {}
    if OPENROUTER_APP_URL:
        headers["HTTP-Referer"] = OPENROUTER_APP_URL
    if OPENROUTER_APP_NAME:
        headers["X-Title"] = OPENROUTER_APP_NAME
    return headers


def _get_client() -> AsyncOpenAI:
    global _client
    if _client is None:
        api_key = os.getenv("OPENROUTER_API_KEY")
        if not api_key:
            raise RuntimeError("OPENROUTER_API_KEY is not set. Add it to your .env file.")
        _client = AsyncOpenAI(
            api_key=api_key,
            base_url=OPENROUTER_BASE_URL,
            default_headers=_attribution_headers(),
            timeout=GPT_TIMEOUT,
        )
    return _client


async def call_gpt(
    prompt: str,
    system: str = "You are a helpful academic assistant. Output only what is asked.",
    temperature: float = 0.4,
    max_tokens: int = 2048,
) -> str:
    """
    One chat completion on OpenRouter. Returns the reply text.

    OpenRouter can answer 200 with an empty `choices` list when the upstream
    provider drops the request; that comes back as "" and the caller treats it
    as an empty reply.
    """
    response = await _get_client().chat.completions.create(
        model=GPT_MODEL,
        messages=[
            {"role": "system", "content": system},
            {"role": "user", "content": prompt},
        ],
        temperature=temperature,
        max_tokens=max_tokens,
    )
    if not response.choices:
        log.warning(f"[GENERATE] {GPT_MODEL} returned no choices")
        return ""
    return response.choices[0].message.content or ""
