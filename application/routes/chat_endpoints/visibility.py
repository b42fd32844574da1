"""Chat visibility endpoint."""

import logging

from quart import Blueprint, request
from quart_rate_limiter import rate_limit

from application.models import UpdateVisibilityRequest
from application.routes.chat_endpoints.helpers import get_chat_service, handle_route_error
from application.routes.common.auth import get_authenticated_user
from application.routes.common.constants import RATE_LIMIT_PERIOD, WRITE_RATE_LIMIT
from application.routes.common.rate_limiting import user_rate_limit_key
from application.routes.common.response import APIResponse
from application.routes.common.validation import validate_json

logger = logging.getLogger(__name__)

visibility_bp = Blueprint("chat_visibility", __name__)


@visibility_bp.route("/<chat_id>/visibility", methods=["PATCH"])
@rate_limit(WRITE_RATE_LIMIT, RATE_LIMIT_PERIOD, key_function=user_rate_limit_key)
@validate_json(UpdateVisibilityRequest)
async def update_visibility(chat_id: str):
    """Persist a visibility change for one of the caller's chats."""
    try:
        user_id = await get_authenticated_user()
        data: UpdateVisibilityRequest = request.validated_data

        chat = await get_chat_service().update_visibility(chat_id, user_id, data.visibility)
        return APIResponse.success({"chat": chat.to_api_dict()})

    except Exception as e:
        return handle_route_error(e, "update_visibility")
