"""
===============================================================================
Artb Web Application Entry Point
===============================================================================
Initializes the Flask app, configures application parameters, registers routes,
and wires the request gate (origin check, rate-limit headers, JSON errors).

Note:
- For production deployment, use Gunicorn or a WSGI-compliant server.
"""

import logging

from flask import Flask, jsonify, request
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from werkzeug.middleware.proxy_fix import ProxyFix

from routes import routes  # Import application routes (Blueprint)
from utils.config import Settings
from utils.errors import ArtbError, OriginNotAllowed
from utils.rate_limit import apply_rate_limit_headers
from utils.services import EXTENSION_KEY, build_services

logger = logging.getLogger(__name__)

LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


def configure_logging(level=logging.INFO):
    logging.basicConfig(level=level, format=LOG_FORMAT)


def error_response(message, status_code, headers=None):
    response = jsonify({"error": message})
    response.status_code = status_code
    for name, value in (headers or {}).items():
        response.headers[name] = value
    return response


def register_error_handlers(app):
    """Render every error as ``{"error": message}``."""

    @app.errorhandler(ArtbError)
    def handle_artb_error(error):
        return error_response(error.message, error.status_code, error.headers)

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        if error.code is None or error.code < 400:
            return error
        if error.code == 413:
            return error_response("업로드 가능한 파일 크기를 초과했습니다.", 413)
        return error_response(error.description or error.name, error.code)

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return error_response("서버 내부 오류가 발생했습니다.", 500)


def create_app(settings=None, services=None):
    """
    Application factory.

    Args:
        settings (Settings): Process settings; read from the environment if None.
        services (Services): External handles; built from settings if None.

    Returns:
        Flask: Configured application.
    """
    settings = settings or Settings.from_env()
    services = services or build_services(settings)

    # Initialize Flask web application
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length_mb * 1024 * 1024
    app.config["UPLOAD_DIR"] = settings.upload_dir
    app.config["ARTB_SETTINGS"] = settings
    app.json.ensure_ascii = False
    app.extensions[EXTENSION_KEY] = services

    # Client address for rate limiting comes from the first trusted proxy hop;
    # with no trusted hops X-Forwarded-For is ignored
    if settings.trust_proxy_hops > 0:
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=settings.trust_proxy_hops)

    allowed_origins = set(settings.allowed_origins)

    @app.before_request
    def check_origin():
        origin = request.headers.get("Origin")
        if origin is not None and origin not in allowed_origins:
            logger.info("Rejected request from origin %s", origin)
            raise OriginNotAllowed()

    CORS(app, origins=list(settings.allowed_origins))

    app.after_request(apply_rate_limit_headers)
    register_error_handlers(app)

    # Register routes from the routes Blueprint
    app.register_blueprint(routes)

    @app.route('/')
    def index():
        """
        Endpoint: /
        Method: GET

        Liveness check for the hosting platform.
        """
        return "Artb Backend Server is running.", 200, {"Content-Type": "text/plain; charset=utf-8"}

    return app


def main():
    """Console entry point: run the development server."""
    configure_logging()
    app = create_app()
    port = app.config["ARTB_SETTINGS"].port
    logger.info("Server running at http://localhost:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    """
    Development Server Launch

    Runs the Flask application for local development and testing.
    Note:
    - Do NOT use this server in production environments.
    """
    main()
