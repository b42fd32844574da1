"""
Chat Routes for the chat history portal.

Mounts the per-chat endpoints (create, get, delete, visibility) under a
single blueprint served at /api/v1/chats.
"""

from quart import Blueprint

from application.routes.chat_endpoints.crud import crud_bp
from application.routes.chat_endpoints.list_and_create import list_create_bp
from application.routes.chat_endpoints.visibility import visibility_bp

chat_bp = Blueprint("chat", __name__)

chat_bp.register_blueprint(list_create_bp)
chat_bp.register_blueprint(crud_bp)
chat_bp.register_blueprint(visibility_bp)
