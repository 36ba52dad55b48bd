# app/schemas/task.py
from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from datetime import datetime, timezone
from typing import Optional

from app.models.task import TaskStatus
from app.schemas.user import UserOut


def normalize_status_value(value):
    """Accept any casing, and the hyphenated 'in-progress' spelling"""
    if isinstance(value, str):
        return value.strip().lower().replace("-", " ")
    return value


def to_utc(value):
    """Aware datetimes are converted to UTC, naive ones are taken as UTC"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    due_date: datetime = Field(..., alias="dueDate")
    status: TaskStatus = TaskStatus.PENDING

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True
    }

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return normalize_status_value(v)

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v):
        return to_utc(v)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    status: Optional[TaskStatus] = None

    model_config = {
        "populate_by_name": True,
        "str_strip_whitespace": True
    }

    @field_validator("status", mode="before")
    @classmethod
    def normalize_status(cls, v):
        return normalize_status_value(v)

    @field_validator("due_date")
    @classmethod
    def due_date_to_utc(cls, v):
        return to_utc(v)

    @model_validator(mode="after")
    def at_least_one_field(self):
        if not self.changes():
            raise ValueError("At least one of title, description, dueDate or status must be provided")
        return self

    def changes(self) -> dict:
        """Fields the client actually sent, with nulls ignored"""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class TaskOut(BaseModel):
    id: int
    title: str
    description: str
    due_date: datetime = Field(..., alias="dueDate")
    status: str
    created_at: datetime = Field(..., alias="createdAt")

    # Owner
    user: UserOut = Field(..., validation_alias="owner")

    model_config = {
        "from_attributes": True,
        "populate_by_name": True
    }

    # SQLite hands back naive datetimes, which are stored in UTC
    @field_serializer("due_date", "created_at")
    def serialize_utc(self, value: datetime) -> datetime:
        return to_utc(value)


class ActionResult(BaseModel):
    success: bool = True
    message: str


class TaskEnvelope(ActionResult):
    data: TaskOut
