"""
Gunicorn configuration for the Emoji Guesser server.
Optimized for Socket.IO with eventlet workers.
"""

import sys
import logging
import yaml
from src.phrase_catalog import PhraseCatalog, ContentValidationError
from config_factory import load_config

# Renamed to avoid clashing with gunicorn's internal 'config'
app_config = load_config()


def on_starting(server):
    """
    Server hook that runs when the master process is starting.
    Validates the phrase file before workers are forked; a bad file stops
    the server from starting.
    """
    logger = logging.getLogger(__name__)
    logger.info(f"Validating {app_config.phrases_file} before starting workers...")
    try:
        catalog = PhraseCatalog(app_config.phrases_file)
        catalog.load_phrases_from_yaml()
        logger.info(f"Successfully validated and loaded {catalog.get_phrase_count()} phrases.")
    except (FileNotFoundError, yaml.YAMLError, ContentValidationError) as e:
        logger.critical(f"FATAL: Phrase file validation failed. Server shutting down. Error: {e}")
        sys.exit(1)


# Server socket
bind = f"{app_config.host}:{app_config.port}"
backlog = 2048

# Worker processes
workers = 1  # Rooms live in process memory, so a single worker
worker_class = "eventlet"
worker_connections = app_config.worker_connections
timeout = app_config.timeout
keepalive = app_config.keepalive

# Logging
accesslog = "-"
errorlog = "-"
loglevel = app_config.log_level
access_log_format = '%(h)s %(l)s %(u)s %(t)s "%(r)s" %(s)s %(b)s "%(f)s" "%(a)s"'

# Process naming
proc_name = "emoji-guesser"

# Server mechanics
preload_app = False  # Don't preload for Socket.IO
daemon = False
