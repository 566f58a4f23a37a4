"""Pydantic schemas for tasks.

Learn: TaskCreate is deliberately loose (both fields optional) so a
blank or missing field reaches TaskService and comes back as 400, not
FastAPI's generic 422.
TaskRead never exposes owner_id.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class TaskCreate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None


class TaskRead(BaseModel):
    id: str
    title: str
    description: str
    created_at: datetime = Field(serialization_alias="createdAt")

    model_config = {"from_attributes": True}


class DeleteResult(BaseModel):
    success: bool = True
