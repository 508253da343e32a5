"""
Server entry point.

Run this script to start the relay server with WebSocket support.  The port
comes from the PORT environment variable (default 1983).
"""

from loguru import logger

from gomoku_relay.app import create_app
from gomoku_relay.config import get_local_ip

if __name__ == '__main__':
    app, socketio = create_app()
    host, port = app.config['HOST'], app.config['PORT']
    logger.info(f"Server running at http://localhost:{port}")
    logger.info(f"Reachable on the network at http://{get_local_ip()}:{port}")
    socketio.run(app, debug=app.config['DEBUG'], host=host, port=port,
                 allow_unsafe_werkzeug=True)
