"""
Visibility override store.

Holds optimistic visibility edits that the server has not acknowledged
yet. Each edit gets a sequence number from a store-wide counter; only the
resolution carrying the current number for a chat may change its entry.
"""

import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Dict, List, Optional

from application.entity.chat import Visibility

logger = logging.getLogger(__name__)


class OverrideStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OverrideEntry:
    chat_id: str
    visibility: Visibility
    sequence: int
    issued_at: datetime = field(default_factory=_utcnow)
    status: OverrideStatus = OverrideStatus.PENDING

    @property
    def is_pending(self) -> bool:
        return self.status == OverrideStatus.PENDING


class VisibilityOverrideStore:
    """Mapping from chat ID to its pending visibility override."""

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._entries: Dict[str, OverrideEntry] = {}
        self._sequence = itertools.count(1)
        self._clock = clock

    def set(self, chat_id: str, visibility: Visibility) -> OverrideEntry:
        """Create or overwrite the pending override for a chat."""
        entry = OverrideEntry(
            chat_id=chat_id,
            visibility=Visibility(visibility),
            sequence=next(self._sequence),
            issued_at=self._clock(),
        )
        self._entries[chat_id] = entry
        logger.debug(
            f"Override set for chat {chat_id}: {entry.visibility.value} (seq {entry.sequence})"
        )
        return entry

    def get(self, chat_id: str) -> Optional[OverrideEntry]:
        return self._entries.get(chat_id)

    def current_sequence(self, chat_id: str) -> Optional[int]:
        entry = self._entries.get(chat_id)
        return entry.sequence if entry else None

    def is_current(self, chat_id: str, sequence: int) -> bool:
        return self.current_sequence(chat_id) == sequence

    def resolve(
        self,
        chat_id: str,
        outcome: OverrideStatus,
        sequence: Optional[int] = None,
    ) -> Optional[OverrideEntry]:
        """
        Resolve the override for a chat.

        Confirmed and failed overrides are removed from the store.

        Args:
            chat_id: Chat whose override is resolved
            outcome: Confirmed or failed
            sequence: Sequence number of the write being resolved; when it
                is not the current one the call changes nothing

        Returns:
            The resolved entry, or None if there was nothing current to resolve
        """
        outcome = OverrideStatus(outcome)
        if outcome == OverrideStatus.PENDING:
            raise ValueError("An override can only be resolved as confirmed or failed")

        entry = self._entries.get(chat_id)
        if entry is None:
            return None
        if sequence is not None and entry.sequence != sequence:
            logger.info(
                f"Ignoring stale resolution for chat {chat_id} "
                f"(seq {sequence}, current {entry.sequence})"
            )
            return None

        entry.status = outcome
        del self._entries[chat_id]
        return entry

    def pending(self) -> List[OverrideEntry]:
        return [entry for entry in self._entries.values() if entry.is_pending]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, chat_id: str) -> bool:
        return chat_id in self._entries
