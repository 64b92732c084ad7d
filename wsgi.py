"""
WSGI entry point for production deployment.

Use this file with waitress:

    waitress-serve --host=0.0.0.0 --port=3000 wsgi:app

    # Or use the CLI
    python wsgi.py
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from waitress import serve

from furnilyzer.api import create_app
from furnilyzer.config import Config
from furnilyzer.logger import get_logger

logger = get_logger(__name__)

# Create the Flask application instance
app = create_app()


def main():
    """Run with a production-ready server."""
    host = Config.FLASK_HOST
    port = Config.FLASK_PORT

    errors = Config.validate()
    if errors:
        logger.warning("Configuration warnings:")
        for error in errors:
            logger.warning(f"  - {error}")

    logger.info(f"Starting Furnilyzer on {host}:{port}")
    logger.info(f"Environment: {Config.FLASK_ENV}")

    if Config.FLASK_ENV == "production" or not Config.FLASK_DEBUG:
        logger.info("Using Waitress production server")
        serve(app, host=host, port=port, threads=4)
    else:
        logger.info("Using Flask development server")
        app.run(host=host, port=port, debug=Config.FLASK_DEBUG)


if __name__ == "__main__":
    main()
