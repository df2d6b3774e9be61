"""Pydantic schemas for the service catalog."""

from pydantic import BaseModel


class ServiceOut(BaseModel):
    name: str
    active: bool

    class Config:
        from_attributes = True
