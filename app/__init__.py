"""
project: Dungeon Generator
module: __init__.py
License: MIT

Flask application factory.

The generation core lives in :mod:`app.dungeon` and has no knowledge of the
web layer; this module wires the HTTP blueprint around it. Configuration is
sourced from environment variables (optionally via a ``.env`` file) with
defaults suitable for development. A local ``instance/`` directory holds the
rotating log file.
"""

import logging
import os
import uuid

from dotenv import load_dotenv
from flask import Flask, jsonify

# Load .env if present so DUNGEON_* settings can be supplied without
# exporting shell variables during development.
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes", "on")


def create_app(config: dict | None = None) -> Flask:
    """Build the Flask app with the dungeon blueprint registered.

    ``config`` entries are applied last and override environment defaults
    (tests use this to flip flags without touching the process env).
    """
    app = Flask(__name__, instance_relative_config=True)

    # Ensure instance directory exists for the log file
    try:
        os.makedirs(app.instance_path, exist_ok=True)
    except OSError:
        logging.getLogger(__name__).warning("could not create instance dir %s", app.instance_path)

    app.config.update(
        DUNGEON_ENABLE_GENERATION_METRICS=_env_flag("DUNGEON_ENABLE_GENERATION_METRICS", "1"),
        DUNGEON_STRICT_CONNECTIVITY=_env_flag("DUNGEON_STRICT_CONNECTIVITY", "0"),
    )
    if config:
        app.config.update(config)

    from app.routes.dungeon_api import bp_dungeon

    app.register_blueprint(bp_dungeon)

    # Error handling: log details under a short id, return it to the caller
    @app.errorhandler(500)
    def internal_error(e):
        error_id = uuid.uuid4().hex[:8]
        logging.exception("Unhandled exception (id=%s)", error_id)
        return jsonify({"error": "internal server error", "error_id": error_id}), 500

    return app
