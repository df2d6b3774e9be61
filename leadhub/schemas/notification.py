"""Pydantic schemas for notifications."""

from typing import Literal
from pydantic import BaseModel


class Notification(BaseModel):
    """Transient notification (toast) surfaced to whoever triggered an action."""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"

    @classmethod
    def error(cls, description: str) -> "Notification":
        return cls(title="Error", description=description, variant="destructive")
