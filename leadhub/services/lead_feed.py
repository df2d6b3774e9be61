"""Live change feed for the leads table.

Dashboards subscribe here instead of polling. Every committed insert or
update is published as ``{"event": "insert" | "update", "lead": {...}}``.
"""

import logging
from typing import Awaitable, Callable, Set

logger = logging.getLogger(__name__)

LeadEvent = dict
LeadEventHandler = Callable[[LeadEvent], Awaitable[None]]

INSERT = "insert"
UPDATE = "update"


class Subscription:
    """Handle returned by ``LeadFeed.subscribe``."""

    def __init__(self, feed: "LeadFeed", handler: LeadEventHandler):
        self._feed = feed
        self.handler = handler

    @property
    def active(self) -> bool:
        return self.handler in self._feed._handlers

    def unsubscribe(self) -> None:
        self._feed._handlers.discard(self.handler)
        logger.info("Lead feed subscriber removed (%d remaining)", len(self._feed._handlers))


class LeadFeed:
    def __init__(self):
        self._handlers: Set[LeadEventHandler] = set()

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: LeadEventHandler) -> Subscription:
        self._handlers.add(handler)
        logger.info("Lead feed subscriber added (%d total)", len(self._handlers))
        return Subscription(self, handler)

    async def publish(self, event: str, lead: dict) -> None:
        """Deliver an event to every subscriber. Failing subscribers are dropped."""
        message = {"event": event, "lead": lead}
        dead = set()
        for handler in list(self._handlers):
            try:
                await handler(message)
            except Exception as e:
                logger.error("Lead feed subscriber failed on %s event: %s", event, e)
                dead.add(handler)
        self._handlers.difference_update(dead)


lead_feed = LeadFeed()
