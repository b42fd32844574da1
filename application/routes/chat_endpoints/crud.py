"""Get and Delete chat endpoints."""

import logging

from quart import Blueprint
from quart_rate_limiter import rate_limit

from application.routes.chat_endpoints.helpers import get_chat_service, handle_route_error
from application.routes.common.auth import get_authenticated_user
from application.routes.common.constants import (
    RATE_LIMIT_PERIOD,
    READ_RATE_LIMIT,
    WRITE_RATE_LIMIT,
)
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse

logger = logging.getLogger(__name__)

crud_bp = Blueprint("chat_crud", __name__)


@crud_bp.route("/<chat_id>", methods=["GET"])
@rate_limit(READ_RATE_LIMIT, RATE_LIMIT_PERIOD, key_function=user_rate_limit_key)
async def get_chat(chat_id: str):
    """Get one of the caller's chats."""
    try:
        user_id = await get_authenticated_user()
        chat = await get_chat_service().get_chat(chat_id, user_id)
        return APIResponse.success({"chat": chat.to_api_dict()})

    except Exception as e:
        return handle_route_error(e, "get_chat")


@crud_bp.route("/<chat_id>", methods=["DELETE"])
@rate_limit(WRITE_RATE_LIMIT, RATE_LIMIT_PERIOD, key_function=user_rate_limit_key)
async def delete_chat(chat_id: str):
    """Delete one of the caller's chats."""
    try:
        user_id = await get_authenticated_user()
        await get_chat_service().delete_chat(chat_id, user_id)
        return APIResponse.success({"message": "Chat deleted successfully"})

    except Exception as e:
        return handle_route_error(e, "delete_chat")
