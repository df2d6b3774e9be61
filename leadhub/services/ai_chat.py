"""Client for the external AI chat completion service.

Request:  {"message": str, "conversationHistory": [{"role": str, "content": str}]}
Response: {"response": str}

Anything else is an error; callers fall back to keyword replies.
"""

import logging

import httpx

from leadhub.core.config import settings

logger = logging.getLogger(__name__)


class AIChatError(RuntimeError):
    """The AI service is unconfigured, unreachable or answered in an unexpected shape."""


class AIChatClient:
    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = settings.AI_CHAT_URL if url is None else url
        self.timeout = settings.AI_CHAT_TIMEOUT if timeout is None else timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.url)

    async def complete(self, message: str, history: list[dict]) -> str:
        if not self.configured:
            raise AIChatError("AI chat service not configured")

        payload = {"message": message, "conversationHistory": history}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise AIChatError(f"AI chat request failed: {e}") from e
        except ValueError as e:
            raise AIChatError("AI chat service returned invalid JSON") from e

        text = data.get("response") if isinstance(data, dict) else None
        if not isinstance(text, str) or not text.strip():
            raise AIChatError("AI chat response missing 'response' text")
        return text
