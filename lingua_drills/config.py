"""
Configuration settings for the Lingua Drills flashcard trainer.
"""

import os
from pathlib import Path


class Config:
    """Configuration class for application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent
    OUTPUT_DIR = Path(os.environ.get("LINGUA_OUTPUT_DIR", PROJECT_ROOT / "output"))

    # Pronunciation alignment settings
    ALIGNMENT_WINDOW = int(os.environ.get("LINGUA_ALIGNMENT_WINDOW", "2"))
    CLOSE_MAX_DISTANCE = int(os.environ.get("LINGUA_CLOSE_MAX_DISTANCE", "2"))
    CLOSE_LENGTH_RATIO = float(os.environ.get("LINGUA_CLOSE_LENGTH_RATIO", "0.5"))

    # Speech capture settings
    SPEECH_LOCALE = os.environ.get("LINGUA_SPEECH_LOCALE", "en-US")
    SPEECH_HOST = os.environ.get("LINGUA_SPEECH_HOST", "console")

    # Reference audio settings (generated speech is raw 16-bit little-endian PCM)
    REFERENCE_SAMPLE_RATE = 24000
    REFERENCE_CHANNELS = 1
    PLAYBACK_SAMPLE_RATE = int(os.environ.get("LINGUA_PLAYBACK_SAMPLE_RATE", "22050"))

    # Display settings
    UI_LANGUAGE = os.environ.get("LINGUA_UI_LANGUAGE", "en")
    SUPPORTED_LANGUAGES = ["en", "zh"]

    @classmethod
    def ensure_directories(cls):
        """Create necessary directories if they don't exist."""
        cls.OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
