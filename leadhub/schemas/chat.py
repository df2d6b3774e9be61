"""Pydantic schemas for the chat widget."""

from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    text: str
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class ChatRequest(BaseModel):
    """One chat turn. The widget sends back the session it was given."""
    message: str = Field(min_length=1)
    conversation_history: list[ChatMessage] = []


class ChatResponse(BaseModel):
    response: str
    topic: str
    source: Literal["ai", "keywords"]
    conversation_history: list[ChatMessage]


class QuickAction(BaseModel):
    label: str
    value: str
    urgent: bool = False
    popular: bool = False


class QuickActionRequest(BaseModel):
    conversation_history: list[ChatMessage] = []
