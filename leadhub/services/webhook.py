"""Secondary lead webhook.

Each captured lead is also POSTed as JSON to an external collector (a
spreadsheet script in production). The response body is ignored.
"""

import logging

import httpx

from leadhub.core.config import settings

logger = logging.getLogger(__name__)


async def post_lead_webhook(payload: dict) -> bool:
    """POST the lead payload. Returns False when no webhook is configured.

    Transport and HTTP errors propagate so the caller can record them.
    """
    if not settings.WEBHOOK_URL:
        logger.debug("No WEBHOOK_URL configured, skipping lead webhook")
        return False

    async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT) as client:
        response = await client.post(settings.WEBHOOK_URL, json=payload)
        response.raise_for_status()

    logger.info("Lead webhook delivered (%s)", response.status_code)
    return True
