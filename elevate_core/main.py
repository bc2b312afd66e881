"""Flask application entry point."""

import logging
from flask import Flask, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import extensions
from .config import settings
from .db import init_db
from .exceptions import ElevateError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# Create Flask app
app = Flask(__name__)

# CORS configuration (credentials allowed so the session cookie is sent)
CORS(app, origins=settings.cors_origins, supports_credentials=True)

# Token codec, password hasher, media uploader
extensions.init_app(app, settings)


# Database initialization (runs once on app startup)
def initialize_database():
    """Initialize database on app startup."""
    try:
        init_db()
        logger.info("Database initialized successfully")
    except Exception as e:
        logger.error(f"Database initialization failed: {e}")
        raise


# Initialize database with app context
with app.app_context():
    initialize_database()


def error_response(message: str, status_code: int):
    """Uniform error body: {"success": false, "message": ...}."""
    return jsonify({"success": False, "message": message}), status_code


# Error handlers
@app.errorhandler(ElevateError)
def handle_elevate_error(error):
    """Handle every ElevateError with the status it declares.

    Details stay in the log; clients only see the message.
    """
    status_code = error.status_code
    if status_code >= 500:
        logger.error(f"{error.__class__.__name__}: {error.message} {error.details}")
    else:
        logger.info(f"{error.__class__.__name__} ({status_code}): {error.message} {error.details}")
    return error_response(error.message, status_code)


@app.errorhandler(HTTPException)
def handle_http_exception(error):
    """Handle routing errors (unknown path, wrong method, ...)."""
    return error_response(error.description or error.name, error.code or 500)


@app.errorhandler(Exception)
def handle_internal_error(error):
    """Handle internal server errors."""
    logger.exception(f"Internal error: {error}")
    return error_response("Internal server error", 500)


# Health check endpoint
@app.route("/health")
def health():
    """Health check endpoint."""
    return jsonify({"status": "ok"})


# Register API blueprints
from .api import api_bp

app.register_blueprint(api_bp)


if __name__ == "__main__":
    app.run(debug=not settings.is_production)
