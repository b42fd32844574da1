"""
Request models for the chat history API.

Query strings and bodies are parsed into these models at the HTTP
boundary so that invalid combinations fail before reaching the services.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from application.entity.chat import Visibility
from common.constants import (
    CHAT_LIST_DEFAULT_LIMIT,
    CHAT_LIST_MAX_LIMIT,
    CURSOR_MAX_LENGTH,
)
from common.exception import BadRequestError


class ListChatsParams(BaseModel):
    """
    Validated chat history query parameters.

    ``limit`` is clamped to CHAT_LIST_MAX_LIMIT; ``starting_after`` and
    ``ending_before`` are mutually exclusive.
    """

    model_config = ConfigDict(frozen=True)

    limit: int = Field(
        default=CHAT_LIST_DEFAULT_LIMIT, description="Maximum number of chats to return"
    )
    starting_after: Optional[str] = Field(
        default=None,
        max_length=CURSOR_MAX_LENGTH,
        description="Cursor: return chats older than this chat",
    )
    ending_before: Optional[str] = Field(
        default=None,
        max_length=CURSOR_MAX_LENGTH,
        description="Cursor: return chats newer than this chat",
    )

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        if value < 1:
            raise ValueError("limit must be a positive integer")
        return min(value, CHAT_LIST_MAX_LIMIT)

    @field_validator("starting_after", "ending_before", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @classmethod
    def from_query(cls, args: Mapping[str, Any]) -> "ListChatsParams":
        """
        Parse raw query arguments.

        Raises:
            BadRequestError: If both cursors are given or a value is invalid
        """
        starting_after = args.get("starting_after")
        ending_before = args.get("ending_before")
        if starting_after is not None and ending_before is not None:
            raise BadRequestError(
                "api", "Only one of starting_after or ending_before can be provided."
            )

        raw = {"starting_after": starting_after, "ending_before": ending_before}
        if args.get("limit") not in (None, ""):
            raw["limit"] = args.get("limit")

        try:
            return cls(**raw)
        except ValidationError as e:
            messages = "; ".join(
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise BadRequestError("api", messages)


class CreateChatRequest(BaseModel):
    """Request model for creating a new chat."""

    title: str = Field(..., min_length=1, description="Display title of the chat")
    visibility: Visibility = Field(
        default=Visibility.PRIVATE, description="Initial visibility"
    )

    @field_validator("title")
    @classmethod
    def _strip_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title must not be blank")
        return value


class UpdateVisibilityRequest(BaseModel):
    """Request model for changing a chat's visibility."""

    visibility: Visibility = Field(..., description="New visibility: public or private")
