"""
Flight proxy Flask application.

Main entry point for the web application. Wires:
- Configuration (resolved once from the environment)
- FlightService with its response cache and providers
- ChatRelay
- API routes and error handlers

Usage:
    python -m flight_proxy.app

Or with gunicorn:
    gunicorn 'flight_proxy.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, Response, jsonify
from flask_cors import CORS

from flight_proxy.api import chat_bp, flights_bp
from flight_proxy.config import AppConfig, load_config
from flight_proxy.errors import RelayFailure, ServiceUnavailable, ValidationError
from flight_proxy.services import ChatRelay, FlightService

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 1024 * 1024

INDEX_TEMPLATE = """<!doctype html>
<html>
<head><meta charset="utf-8"><title>flight-proxy</title></head>
<body style="font-family:system-ui,sans-serif;line-height:1.6;padding:16px;">
  <h1>flight-proxy</h1>
  <p>provider: <b>{provider}</b> (set FLIGHT_PROVIDER=opensky)</p>
  <p>chat: <b>{chat}</b></p>
  <ul>
    <li><a href="/health">/health</a></li>
    <li><a href="/flights?lat=35.68&amp;lon=139.76&amp;radius=2">/flights?lat=35.68&amp;lon=139.76&amp;radius=2</a></li>
  </ul>
  <p>Optional environment: OPENSKY_USERNAME / OPENSKY_PASSWORD, GEMINI_API_KEY</p>
</body>
</html>
"""


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    )


def create_app(
    app_config: Optional[AppConfig] = None,
    flight_service: Optional[FlightService] = None,
    chat_relay: Optional[ChatRelay] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        app_config: Configuration to use (loaded from the environment if None).
        flight_service: Pre-built FlightService, mainly for tests.
        chat_relay: Pre-built ChatRelay, mainly for tests.

    Returns:
        Configured Flask application instance.
    """
    app_config = app_config or load_config()
    configure_logging(app_config.debug)

    app = Flask(__name__)
    app.config['MAX_CONTENT_LENGTH'] = MAX_BODY_BYTES
    app.config['APP_CONFIG'] = app_config

    # Cross-origin access is a development convenience only
    if not app_config.is_production:
        CORS(app)

    app.config['FLIGHT_SERVICE'] = flight_service or FlightService.from_config(app_config)
    app.config['CHAT_RELAY'] = chat_relay or ChatRelay(app_config.chat)

    app.register_blueprint(flights_bp)
    app.register_blueprint(chat_bp)

    logger.info(
        f'Flight provider: {app_config.provider.value}, '
        f'cache TTL {app_config.cache.ttl_ms}ms, environment {app_config.environment}'
    )

    # -------------------------------------------------------------------------
    # Status routes
    # -------------------------------------------------------------------------

    @app.route('/')
    def index():
        """Human-readable status page."""
        body = INDEX_TEMPLATE.format(
            provider=app_config.provider.value,
            chat='gemini' if app.config['CHAT_RELAY'].is_live else 'stub',
        )
        return Response(body, mimetype='text/html')

    @app.route('/health')
    def health():
        """Simple health check endpoint."""
        return {'ok': True}

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(ValidationError)
    def bad_request(e):
        logger.info(f'Rejected request: {e}')
        return jsonify({'error': str(e)}), 400

    @app.errorhandler(ServiceUnavailable)
    def service_unavailable(e):
        logger.error(f'Flight data unavailable: {e.__cause__ or e}')
        return jsonify({'error': 'Failed to load flight data'}), 503

    @app.errorhandler(RelayFailure)
    def relay_failed(e):
        return jsonify({'error': 'chat failed'}), 500

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app_config = load_config()
    app = create_app(app_config)

    logger.info(f'flight-proxy listening on http://localhost:{app_config.port}')

    app.run(
        host='0.0.0.0',
        port=app_config.port,
        debug=app_config.debug,
        threaded=True,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
