"""Pydantic schemas for the reading list."""

from typing import Optional

from pydantic import BaseModel, Field


class ReadingTodoItem(BaseModel):
    """Document queued for reading."""

    id: str
    path: str
    title: str = ""
    added_at: int = 0  # epoch ms
    completed: bool = False
    completed_at: Optional[int] = None

    model_config = {"from_attributes": True}


class CompletionStats(BaseModel):
    """Progress through the reading list."""

    total: int = 0
    completed: int = 0
    pending: int = 0
    completion_percentage: int = Field(default=0, ge=0, le=100)
