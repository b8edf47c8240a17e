"""
Configuration settings for the critical path tools.
Load configuration from environment variables or a .env file.
"""
import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
env_file = Path(__file__).parent.parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


class Settings:
    """Application settings loaded from environment variables."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    OUTPUT_DIR = Path(os.getenv('CRITPATH_OUTPUT_DIR', PROJECT_ROOT / 'output'))

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
    LOG_DIR = os.getenv('CRITPATH_LOG_DIR', '')

    # ============================================================================
    # Diagram Rendering
    # ============================================================================
    DIAGRAM_DPI = int(os.getenv('CRITPATH_DIAGRAM_DPI', '150'))

    # ============================================================================
    # Gemini Configuration (diagram review)
    # ============================================================================
    GEMINI_MODEL = os.getenv('CRITPATH_GEMINI_MODEL', 'gemini-2.0-flash')
    GEMINI_API_KEY = os.getenv('GEMINI_API_KEY') or os.getenv('GOOGLE_API_KEY', '')

    @classmethod
    def validate_required_settings(cls) -> list[str]:
        """
        Validate settings needed for the diagram review feature.
        Returns list of missing required settings.
        """
        missing = []
        if not cls.GEMINI_API_KEY:
            missing.append('GEMINI_API_KEY')
        return missing


# Create settings instance
settings = Settings()
