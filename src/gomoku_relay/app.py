"""
Flask application factory and main application entry point.

This module creates and configures the Flask application instance
with WebSocket support for real-time game relaying.
"""

import sys

from flask import Flask
from flask_socketio import SocketIO
from flask_cors import CORS
from loguru import logger

from .config import load_config
from .game_server import GameServer
from .relay import SocketIOTransport

CORS_HEADERS = ['Content-Type', 'X-Content-Type-Options']


def create_app(config=None):
    """
    Create and configure the Flask application.

    Args:
        config: Dictionary overriding the defaults and environment

    Returns:
        Tuple of the Flask application and its SocketIO instance
    """
    app = Flask(__name__, static_folder='public', static_url_path='')

    app.config.update(load_config())
    if config:
        app.config.update(config)

    # Configure logging
    logger.remove()  # Remove default handler
    logger.add(
        sys.stdout,
        format="{time} | {level} | {message}",
        level=app.config['LOG_LEVEL'],
        colorize=True
    )
    logger.info("Starting Gomoku relay server")

    # Enable CORS for all HTTP requests
    CORS(app,
         origins="*",
         methods=['GET', 'POST'],
         allow_headers=CORS_HEADERS,
         expose_headers=CORS_HEADERS,
         supports_credentials=True)

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        return response

    # Initialize SocketIO for WebSocket support
    socketio = SocketIO(app,
                        cors_allowed_origins="*",
                        ping_timeout=app.config['PING_TIMEOUT'],
                        ping_interval=app.config['PING_INTERVAL'],
                        max_http_buffer_size=app.config['MAX_HTTP_BUFFER_SIZE'])

    # One GameServer per application; handlers and routes reach it through the app
    game_server = GameServer(SocketIOTransport(socketio))
    app.extensions['gomoku_relay'] = game_server

    from . import routes
    app.register_blueprint(routes.bp)

    from . import api
    app.register_blueprint(api.api_bp)

    from . import websocket_handlers
    websocket_handlers.init_socketio_handlers(socketio, game_server)

    return app, socketio
