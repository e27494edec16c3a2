"""LLM wrapper.

Primary: Groq (OpenAI-compatible) if GROQ_API_KEY is set.
Secondary: OpenRouter if OPENROUTER_API_KEY is set.

Raises ExternalServiceFailure when no provider produced text; callers decide
how to degrade.
"""

from __future__ import annotations

import json
import logging

import requests

import config
from errors import ExternalServiceFailure

logger = logging.getLogger(__name__)

GROQ_URL = "https://api.groq.com/openai/v1/chat/completions"
OPENROUTER_URL = "https://openrouter.ai/api/v1/chat/completions"


def _content(data) -> str | None:
    """First choice's message text, or None for any malformed body."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message")
    if not isinstance(message, dict):
        return None
    content = message.get("content")
    return content if isinstance(content, str) else None


def openrouter_chat(messages: list[dict], *, model: str | None = None, max_tokens: int | None = None) -> str | None:
    key = config.OPENROUTER_API_KEY
    if not key:
        return None
    payload = {
        "model": model or config.OPENROUTER_MODEL,
        "messages": messages,
        "temperature": 0.2,
        "max_tokens": max_tokens or config.LLM_MAX_TOKENS,
    }
    headers = {
        "Authorization": f"Bearer {key}",
        "Content-Type": "application/json",
        # optional but recommended by OpenRouter
        "HTTP-Referer": config.OPENROUTER_SITE,
        "X-Title": config.OPENROUTER_APP,
    }
    try:
        r = requests.post(OPENROUTER_URL, headers=headers, data=json.dumps(payload), timeout=config.LLM_TIMEOUT)
        r.raise_for_status()
        return _content(r.json())
    except (requests.RequestException, ValueError) as exc:
        logger.warning("OpenRouter request failed: %s", exc)
        return None


def groq_chat(messages: list[dict], *, model: str | None = None, max_tokens: int | None = None) -> str | None:
    key = config.GROQ_API_KEY
    if not key:
        return None
    payload = {
        "model": model or config.GROQ_MODEL,
        "messages": messages,
        "temperature": 0.2,
        "max_tokens": max_tokens or config.LLM_MAX_TOKENS,
    }
    headers = {"Authorization": f"Bearer {key}", "Content-Type": "application/json"}
    try:
        r = requests.post(GROQ_URL, headers=headers, data=json.dumps(payload), timeout=config.LLM_TIMEOUT)
        r.raise_for_status()
        return _content(r.json())
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Groq request failed: %s", exc)
        return None


def answer(prompt: str, *, system: str = "You are an expert Ayurvedic dietitian.") -> str:
    msg = [
        {"role": "system", "content": system},
        {"role": "user", "content": prompt},
    ]
    g = groq_chat(msg)
    if g and g.strip():
        return g.strip()
    o = openrouter_chat(msg)
    if o and o.strip():
        return o.strip()
    raise ExternalServiceFailure("No LLM provider returned a response")
