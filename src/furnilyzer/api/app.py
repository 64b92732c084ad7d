"""
Flask application factory for Furnilyzer.
"""
from typing import Optional

from flask import Flask
from flask_cors import CORS

from .. import __version__
from ..config import Config
from ..dictionaries import DictionaryLoadError
from ..services import FurnitureAnalyzer, build_analyzer
from ..logger import get_logger
from .routes import ANALYZER_EXTENSION, api_bp

logger = get_logger(__name__)


def create_app(analyzer: Optional[FurnitureAnalyzer] = None, load_analyzer: bool = True) -> Flask:
    """
    Create and configure Flask application.

    Args:
        analyzer: Pre-built analyzer; built from Config when omitted
        load_analyzer: Build an analyzer from Config if none was given

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)

    # Configure app
    app.config['ENV'] = Config.FLASK_ENV
    app.json.sort_keys = False

    # Enable CORS with configured origins
    cors_origins = Config.get_cors_origins()
    if cors_origins == ["*"]:
        CORS(app)
    else:
        CORS(app, origins=cors_origins)

    if analyzer is None and load_analyzer:
        try:
            analyzer = build_analyzer(Config)
        except DictionaryLoadError as e:
            logger.error(f"Analyzer could not be built: {e}", exc_info=True)

    app.extensions[ANALYZER_EXTENSION] = analyzer

    # Register blueprints
    app.register_blueprint(api_bp)

    # Health check
    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {'status': 'ok', 'version': __version__}

    # Log configuration
    logger.info("Flask app created")
    logger.info(f"Configuration: {Config.get_summary()}")

    # Validate configuration
    errors = Config.validate()
    if errors:
        logger.warning(f"Configuration warnings: {errors}")

    return app
