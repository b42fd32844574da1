import sys
from pathlib import Path

# Load environment variables FIRST, before any other imports
from dotenv import load_dotenv
load_dotenv()

# Add project root to path so imports work whether running as module or directly
project_root_str = str(Path(__file__).parent.parent.resolve())
if sys.path and Path(sys.path[0]).name == 'application':
    sys.path[0] = project_root_str
elif project_root_str not in sys.path:
    sys.path.insert(0, project_root_str)

import logging
from typing import Dict, Optional

from quart import Quart, Response, jsonify
from quart_rate_limiter import RateLimiter
from quart_schema import QuartSchema, ResponseSchemaValidationError, hide

from application.routes import chat_bp, history_bp
from application.routes.common.constants import CHATS_URL_PREFIX, HISTORY_URL_PREFIX
from application.routes.common.error_handlers import register_error_handlers
from common.config import config

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(log_file: Optional[str] = None) -> None:
    """Configure root logging to stdout and, when APP_LOG_FILE is set, a file."""
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a"))

    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, handlers=handlers)


def create_app() -> Quart:
    """Build the Quart application with all blueprints and handlers."""
    configure_logging(config.APP_LOG_FILE)

    app = Quart(__name__)

    # Initialize rate limiter
    RateLimiter(app)

    QuartSchema(
        app,
        info={"title": "Chat History Portal", "version": "1.0.0"},
        tags=[
            {"name": "History", "description": "Paginated chat history"},
            {"name": "Chat", "description": "Chat management and visibility endpoints"},
            {"name": "System", "description": "System and health endpoints"},
        ],
        security=[{"bearerAuth": []}],
        security_schemes={
            "bearerAuth": {
                "type": "http",
                "scheme": "bearer",
            }
        },
    )

    @app.errorhandler(ResponseSchemaValidationError)
    async def handle_response_validation_error(
        error: ResponseSchemaValidationError,
    ) -> tuple[Dict[str, str], int]:
        logger.error(f"Response failed schema validation: {error}")
        return {"error": "VALIDATION"}, 500

    register_error_handlers(app)

    # Register blueprints
    app.register_blueprint(history_bp, url_prefix=HISTORY_URL_PREFIX)
    app.register_blueprint(chat_bp, url_prefix=CHATS_URL_PREFIX)

    @app.route("/health")
    async def health() -> tuple[Response, int]:
        return jsonify({"status": "ok"}), 200

    @app.route("/favicon.ico")
    @hide
    def favicon() -> tuple[str, int]:
        return "", 200

    # Allow all origins (JWT auth, not cookies, so credentials not needed)
    @app.after_request
    async def apply_cors(response: Response) -> Response:
        response.headers["Access-Control-Allow-Origin"] = "*"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, PATCH, DELETE, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "*"
        return response

    @app.after_serving
    async def shutdown() -> None:
        logger.info("Application shutdown complete")

    logger.info("Chat history portal application created")
    return app


app = create_app()
