"""
Chat history route.

Serves the signed-in user's chat list one page at a time, most recent
first. ``starting_after`` pages towards older chats and ``ending_before``
towards newer ones; each takes the ID of a chat from a previous page.
"""

import logging

from quart import Blueprint, request
from quart_rate_limiter import rate_limit

from application.models import ListChatsParams
from application.routes.chat_endpoints.helpers import get_chat_service, handle_route_error
from application.routes.common.auth import get_authenticated_user
from application.routes.common.constants import RATE_LIMIT_PERIOD, READ_RATE_LIMIT
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse
from application.services.chat import format_page

logger = logging.getLogger(__name__)

history_bp = Blueprint("history", __name__)


@history_bp.route("", methods=["GET"])
@rate_limit(READ_RATE_LIMIT, RATE_LIMIT_PERIOD, key_function=user_rate_limit_key)
async def get_history():
    """
    List one page of the caller's chat history.

    Query: ``limit`` (default 10, max 100), ``starting_after`` or
    ``ending_before`` (a chat ID; not both).

    Returns ``{"chats": [...], "hasMore": bool}``.
    """
    try:
        params = ListChatsParams.from_query(request.args)
        user_id = await get_authenticated_user()

        page = await get_chat_service().list_chats(user_id, params)

        return APIResponse.success(format_page(page))

    except Exception as e:
        return handle_route_error(e, "get_history")
