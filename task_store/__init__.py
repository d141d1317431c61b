"""
Flask application factory module.

This module creates and configures the Task Store application using
the factory pattern, allowing for different configurations
(development, testing, production).
"""

import logging
from flask import Flask

from config import get_config
from task_store.models import TaskStore

# Process-wide task mapping, bound to the app in create_app
store = TaskStore()

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the Flask application.

    Args:
        config_name: Configuration environment name.
                     If None, uses FLASK_ENV environment variable.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating app with config: %s", config_class.__name__)

    # Task fields keep wire order; non-ASCII text is sent as UTF-8
    app.json.sort_keys = False
    app.json.ensure_ascii = False

    # Initialize extensions
    store.init_app(app)
    logger.info("Task store holds %d tasks", len(store))

    # Register blueprints
    from task_store.routes.api import api_bp

    app.register_blueprint(api_bp)

    return app
