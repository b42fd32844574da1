"""Create chat endpoint."""

import logging

from quart import Blueprint, request
from quart_rate_limiter import rate_limit

from application.models import CreateChatRequest
from application.routes.chat_endpoints.helpers import get_chat_service, handle_route_error
from application.routes.common.auth import get_authenticated_user
from application.routes.common.constants import RATE_LIMIT_PERIOD, WRITE_RATE_LIMIT
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_json

logger = logging.getLogger(__name__)

list_create_bp = Blueprint("chat_list_create", __name__)


@list_create_bp.route("", methods=["POST"])
@rate_limit(WRITE_RATE_LIMIT, RATE_LIMIT_PERIOD, key_function=user_rate_limit_key)
@validate_json(CreateChatRequest)
async def create_chat():
    """Create a new chat owned by the caller."""
    try:
        user_id = await get_authenticated_user()
        data: CreateChatRequest = request.validated_data

        chat = await get_chat_service().create_chat(
            user_id=user_id, title=data.title, visibility=data.visibility
        )

        return APIResponse.success({"chat": chat.to_api_dict()}, 201)

    except Exception as e:
        return handle_route_error(e, "create_chat")
