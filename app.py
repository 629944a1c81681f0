"""
Emoji Guesser - A multiplayer party game where players guess the phrase behind a row of emoji.
Main Flask application entry point focusing on app creation, dependency injection, and service wiring.
"""

from flask import Flask
from flask_socketio import SocketIO
import logging
import atexit
import sys
import yaml

from src.phrase_catalog import ContentValidationError
from container import configure_container
from config_factory import load_config, ConfigurationFactory

# Initialize Flask app
app = Flask(__name__)

# Load and apply configuration
app_config = load_config()
config_factory = ConfigurationFactory()
app.config.update(config_factory.get_flask_config())

# In production, restrict to origins listed in SOCKETIO_CORS_ALLOWED_ORIGINS;
# an empty list means same-origin only
if app_config.is_production:
    socketio = SocketIO(app, cors_allowed_origins=app_config.allowed_origins, async_mode=app_config.socketio_async_mode)
else:
    socketio = SocketIO(app, cors_allowed_origins="*", async_mode=app_config.socketio_async_mode)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Configure service container with dependencies
container = configure_container(socketio=socketio, config=config_factory.to_dict())

phrase_catalog = container.get('PhraseCatalog')
session_service = container.get('SessionService')
round_scheduler = container.get('RoundScheduler')
session_directory = container.get('SessionDirectory')

# Load phrases on startup
try:
    phrase_catalog.load_phrases_from_yaml()
    logger.info(f"Loaded {phrase_catalog.get_phrase_count()} phrases from YAML")
except (FileNotFoundError, yaml.YAMLError, ContentValidationError) as e:
    logger.critical(f"FATAL: Phrase file validation failed, which is critical for game play. Server shutting down. Error: {e}")
    sys.exit(1)

# Register REST endpoints
from src.routes.api import create_api_blueprint
api_blueprint = create_api_blueprint({
    'session_directory': session_directory,
    'phrase_catalog': phrase_catalog
})
app.register_blueprint(api_blueprint)

# Register Socket.IO handlers
from src.handlers.socket_handlers import register_socket_handlers
register_socket_handlers(socketio)


def cleanup_on_exit():
    """Clean up resources on application exit."""
    logger.info("Shutting down Emoji Guesser server...")
    round_scheduler.stop()
    session_directory.shutdown()


atexit.register(cleanup_on_exit)

if __name__ == '__main__':
    logger.info(f"Starting Emoji Guesser server on {app_config.host}:{app_config.port}")
    try:
        socketio.run(app, host=app_config.host, port=app_config.port, debug=app_config.debug)
    except KeyboardInterrupt:
        logger.info("Received interrupt signal")
