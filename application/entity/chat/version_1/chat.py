"""
Chat Entity for the chat history portal.

Represents one chat in a user's history. Chats are ordered by
(created_at, id) descending within an owner's history; that ordering is
fixed at creation and visibility edits never change it.
"""

import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Visibility(str, Enum):
    """Who can see a chat."""

    PUBLIC = "public"
    PRIVATE = "private"


class Chat(BaseModel):
    """
    Chat entity.

    Serialized with camelCase aliases (``userId``, ``createdAt``) for the
    HTTP API; constructed with either field names or aliases.
    """

    ENTITY_NAME: ClassVar[str] = "Chat"
    ENTITY_VERSION: ClassVar[int] = 1

    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)

    id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Stable, globally unique chat ID",
    )

    user_id: str = Field(
        ..., alias="userId", description="User ID who owns this chat"
    )

    title: str = Field(..., description="Display title of the chat")

    visibility: Visibility = Field(
        default=Visibility.PRIVATE, description="Public or private"
    )

    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="createdAt",
        description="Creation timestamp",
    )

    @field_validator("created_at")
    @classmethod
    def _ensure_utc(cls, value: datetime) -> datetime:
        # Naive timestamps are treated as UTC so rows stay comparable
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @property
    def sort_key(self) -> Tuple[datetime, str]:
        """Position of this chat in the recency ordering."""
        return self.created_at, self.id

    def to_api_dict(self) -> Dict[str, Any]:
        """Serialize for JSON responses."""
        return self.model_dump(by_alias=True, mode="json")

    def to_row(self) -> Dict[str, Any]:
        """Serialize to a storage row (field names, native types)."""
        return self.model_dump(by_alias=False)
