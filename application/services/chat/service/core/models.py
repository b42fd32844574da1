"""Data models for chat service."""

from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from application.entity.chat import Chat


class Page(BaseModel):
    """One page of chat history.

    Chats are always recency-descending, whatever the fetch direction.
    """

    model_config = ConfigDict(frozen=True)

    chats: Tuple[Chat, ...] = ()
    has_more: bool = False

    def chat_ids(self) -> Tuple[str, ...]:
        return tuple(chat.id for chat in self.chats)

    def find(self, chat_id: str) -> Optional[Chat]:
        for chat in self.chats:
            if chat.id == chat_id:
                return chat
        return None

    def __len__(self) -> int:
        return len(self.chats)
