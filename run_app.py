"""
Main entry point for the Furnilyzer API.

Run this file to start the Flask development server.
"""
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from furnilyzer.api import create_app
from furnilyzer.config import Config
from furnilyzer.logger import get_logger

logger = get_logger(__name__)


def main():
    """Main function to run the Flask app."""
    # Validate configuration
    errors = Config.validate()
    if errors:
        logger.error("Configuration errors:")
        for error in errors:
            logger.error(f"  - {error}")
        logger.warning("App will start but some categories may be unavailable")

    app = create_app()

    logger.info(f"Furniture Analyzer API starting on {Config.FLASK_HOST}:{Config.FLASK_PORT}")
    logger.info(f"Debug mode: {Config.FLASK_DEBUG}")

    app.run(
        host=Config.FLASK_HOST,
        port=Config.FLASK_PORT,
        debug=Config.FLASK_DEBUG
    )


if __name__ == "__main__":
    main()
