from __future__ import annotations

import logging
from typing import Any, Optional

from openai import AsyncOpenAI

from ..config import settings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are Echo, a friendly Discord assistant. "
    "Keep answers short, plain and suitable for a chat channel."
)


class AIClient:
    """
    Thin async wrapper over the OpenAI chat API.

    The bot owns one instance (bot.ai); commands never build their own.
    """

    def __init__(self, client: AsyncOpenAI, model: str, system_prompt: str = SYSTEM_PROMPT) -> None:
        self._client = client
        self.model = model
        self.system_prompt = system_prompt

    async def generate_reply(self, prompt: str, *, user_name: Optional[str] = None) -> str:
        messages: list[dict[str, Any]] = [{"role": "system", "content": self.system_prompt}]
        content = prompt.strip()
        if user_name:
            content = f"{user_name} says: {content}"
        messages.append({"role": "user", "content": content})

        resp = await self._client.chat.completions.create(model=self.model, messages=messages)
        choices = getattr(resp, "choices", None) or []
        if not choices:
            return ""
        return (choices[0].message.content or "").strip()

    async def close(self) -> None:
        await self._client.close()


def build_ai_client() -> Optional[AIClient]:
    """AIClient from settings, or None when OPENAI_API_KEY is not set."""
    if not settings.ai_enabled:
        logger.info("OPENAI_API_KEY not set; AI replies disabled")
        return None
    client = AsyncOpenAI(api_key=settings.openai_api_key, timeout=float(settings.ai_timeout_s))
    return AIClient(client, settings.openai_model)


__all__ = ["AIClient", "build_ai_client", "SYSTEM_PROMPT"]
