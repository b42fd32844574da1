"""List a user's chat history with keyset pagination."""

import logging
from typing import Optional

from application.entity.chat import Chat
from application.models.request_models import ListChatsParams
from application.repositories.chat_repository import ChatRepository
from common.exception import BadRequestError, NotFoundError, UnauthorizedError

from .constants import SURFACE_API, SURFACE_HISTORY
from .cursor import CursorCodec
from .models import Page

logger = logging.getLogger(__name__)


async def resolve_anchor(
    chat_repo: ChatRepository, owner_id: str, cursor: str
) -> Chat:
    """Resolve a cursor to the caller's chat it references.

    Raises:
        BadRequestError: If the cursor is malformed
        NotFoundError: If the chat is missing or owned by someone else
    """
    chat_id = CursorCodec.decode(cursor)
    anchor = await chat_repo.get_by_id(chat_id)

    # A foreign chat is reported exactly like a missing one
    if anchor is None or anchor.user_id != owner_id:
        raise NotFoundError(SURFACE_HISTORY, f"Chat with id {chat_id} not found")
    return anchor


async def list_chats(
    chat_repo: ChatRepository,
    owner_id: Optional[str],
    params: ListChatsParams,
) -> Page:
    """List one page of the owner's chats.

    Fetches ``limit + 1`` rows past the anchor to learn whether more rows
    exist, then drops the extra one. ``starting_after`` walks towards older
    chats; ``ending_before`` walks towards newer ones and is queried
    ascending, then reversed so the page is always newest first.

    Args:
        chat_repo: Repository for chat data access
        owner_id: Authenticated caller; never taken from the query
        params: Validated pagination parameters

    Returns:
        Page of at most ``params.limit`` chats

    Raises:
        UnauthorizedError: If there is no authenticated caller
        BadRequestError: If both cursors are supplied
        NotFoundError: If a cursor does not resolve to the caller's chat

    Example:
        >>> page = await list_chats(repo, "alice", ListChatsParams(limit=10))
        >>> page.has_more
        True
    """
    if not owner_id:
        raise UnauthorizedError(SURFACE_HISTORY)
    if params.starting_after and params.ending_before:
        raise BadRequestError(
            SURFACE_API, "Only one of starting_after or ending_before can be provided."
        )

    limit = params.limit
    extended_limit = limit + 1

    if params.ending_before:
        anchor = await resolve_anchor(chat_repo, owner_id, params.ending_before)
        rows = await chat_repo.find_newer(owner_id, extended_limit, anchor)
        has_more = len(rows) > limit
        chats = list(reversed(rows[:limit]))
    else:
        anchor = None
        if params.starting_after:
            anchor = await resolve_anchor(chat_repo, owner_id, params.starting_after)
        rows = await chat_repo.find_older(owner_id, extended_limit, anchor)
        has_more = len(rows) > limit
        chats = rows[:limit]

    logger.debug(
        f"Listed {len(chats)} chats for {owner_id} "
        f"(limit={limit}, anchor={anchor.id if anchor else None}, has_more={has_more})"
    )
    return Page(chats=tuple(chats), has_more=has_more)
