"""
Configuration management for Furnilyzer.
"""
import os
from typing import Optional
from pathlib import Path

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass  # dotenv not available


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = Path(os.getenv("FURNILYZER_DATA_DIR", str(PROJECT_ROOT / "data")))
    RESULTS_DIR = Path(os.getenv("FURNILYZER_RESULTS_DIR", str(PROJECT_ROOT / "results")))

    # Term supply for Brand / ProductName. JSON files in DATA_DIR are used
    # when no database is configured.
    DATABASE_URL: Optional[str] = os.getenv("DATABASE_URL")

    # Analyzer settings
    ANALYZER_DEBUG: bool = os.getenv("ANALYZER_DEBUG", "False").lower() == "true"

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "3000"))
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Parse the comma separated CORS_ORIGINS setting."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not cls.DATA_DIR.exists():
            errors.append(f"Data directory not found: {cls.DATA_DIR}")

        if cls.DATABASE_URL and not cls.DATABASE_URL.startswith(("postgres://", "postgresql://")):
            errors.append("DATABASE_URL must be a postgres:// or postgresql:// connection string")

        if not 0 < cls.FLASK_PORT < 65536:
            errors.append(f"Invalid FLASK_PORT: {cls.FLASK_PORT}")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "data_dir": str(cls.DATA_DIR),
            "database_configured": cls.DATABASE_URL is not None,
            "analyzer_debug": cls.ANALYZER_DEBUG,
            "log_level": cls.LOG_LEVEL,
        }
