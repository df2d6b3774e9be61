"""Chat widget endpoints.

The conversation lives in the browser; each turn sends the history it has
and gets back the history with the new user and assistant turns appended.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from leadhub.schemas.chat import ChatMessage, ChatRequest, ChatResponse, QuickAction, QuickActionRequest
from leadhub.services.chat import (
    QUICK_ACTIONS,
    REPLIES,
    ChatEntry,
    ChatSession,
    is_quick_action,
    quick_action_utterance,
)
from leadhub.services.intake import LeadIntakeService, get_intake_service

router = APIRouter()
logger = logging.getLogger(__name__)


def _session_from(history: list[ChatMessage]) -> ChatSession:
    return ChatSession(messages=[
        ChatEntry(role=m.role, text=m.text, timestamp=m.timestamp) for m in history
    ])


async def _run_turn(
    service: LeadIntakeService, history: list[ChatMessage], utterance: str
) -> ChatResponse:
    session = _session_from(history)
    reply = await service.get_chat_reply(session, utterance)
    logger.info("Chat reply via %s (topic=%s)", reply.source, reply.topic)
    return ChatResponse(
        response=reply.text,
        topic=reply.topic,
        source=reply.source,
        conversation_history=[
            ChatMessage(role=m.role, text=m.text, timestamp=m.timestamp) for m in session.messages
        ],
    )


@router.get("/greeting")
async def greeting():
    return {"response": REPLIES["greeting"]}


@router.post("/", response_model=ChatResponse)
async def chat_turn(
    request: ChatRequest,
    service: LeadIntakeService = Depends(get_intake_service),
):
    return await _run_turn(service, request.conversation_history, request.message)


@router.get("/quick-actions", response_model=List[QuickAction])
async def quick_actions():
    return QUICK_ACTIONS


@router.post("/quick-actions/{value}", response_model=ChatResponse)
async def run_quick_action(
    value: str,
    request: QuickActionRequest | None = None,
    service: LeadIntakeService = Depends(get_intake_service),
):
    """Send the canned "I need help with ..." message for a quick action."""
    if not is_quick_action(value):
        raise HTTPException(status_code=404, detail="Unknown quick action")
    history = request.conversation_history if request else []
    return await _run_turn(service, history, quick_action_utterance(value))
