"""
Error handling system for the Lingua Drills flashcard trainer.

This module provides centralized error definitions and actionable error
messages for deck loading, speech capture, audio playback and media
generation. Drill logic itself (normalization, edit distance, word
alignment) has no error paths.
"""

import logging
from enum import Enum
from typing import List, Dict, Any
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Categories of errors that can occur while drilling."""
    INPUT_VALIDATION = "input_validation"
    DECK_LOADING = "deck_loading"
    SPEECH_CAPTURE = "speech_capture"
    AUDIO_PLAYBACK = "audio_playback"
    MEDIA_GENERATION = "media_generation"
    QUIZ = "quiz"


@dataclass
class ProcessingError:
    """Represents an error with context and guidance."""
    category: ErrorCategory
    severity: ErrorSeverity
    message: str
    details: str
    suggested_actions: List[str]
    error_code: str
    context: Dict[str, Any] = None

    def __post_init__(self):
        if self.context is None:
            self.context = {}

    @property
    def is_retryable(self) -> bool:
        """Warnings are transient conditions the learner can retry."""
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)


class LinguaDrillsError(Exception):
    """Base exception for Lingua Drills errors."""

    def __init__(self, processing_error: ProcessingError):
        self.processing_error = processing_error
        super().__init__(processing_error.message)


class InputValidationError(LinguaDrillsError):
    """Raised when caller-supplied input is invalid."""
    pass


class DeckValidationError(LinguaDrillsError):
    """Raised when a deck file is missing, malformed or fails schema validation."""
    pass


class CapabilityUnavailableError(LinguaDrillsError):
    """Raised when no speech capture capability exists for the current host."""
    pass


class SpeechCaptureError(LinguaDrillsError):
    """Raised by capture capabilities that fail to start a session."""
    pass


class AudioPlaybackError(LinguaDrillsError):
    """Raised when reference audio cannot be decoded or played."""
    pass


class MediaGenerationError(LinguaDrillsError):
    """Raised by content services when media generation fails."""
    pass


# Recognition error reasons reported by speech engines, mapped to codes
_SPEECH_ERROR_CODES = {
    "not-allowed": "SPEECH_002",
    "service-not-allowed": "SPEECH_002",
    "no-speech": "SPEECH_003",
    "audio-capture": "SPEECH_004",
    "network": "SPEECH_005",
}


class ErrorHandler:
    """
    Centralized error handling and reporting system.

    Collects errors and warnings, logs them at the matching level, and
    builds actionable records for every non-fatal drill condition.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.errors: List[ProcessingError] = []
        self.warnings: List[ProcessingError] = []

    def add_error(self, error: ProcessingError) -> None:
        """Add an error to the collection."""
        if error.severity in [ErrorSeverity.ERROR, ErrorSeverity.CRITICAL]:
            self.errors.append(error)
        elif error.severity == ErrorSeverity.WARNING:
            self.warnings.append(error)

        log_level = {
            ErrorSeverity.INFO: logging.INFO,
            ErrorSeverity.WARNING: logging.WARNING,
            ErrorSeverity.ERROR: logging.ERROR,
            ErrorSeverity.CRITICAL: logging.CRITICAL
        }[error.severity]

        self.logger.log(log_level, f"[{error.error_code}] {error.message}")
        if error.details:
            self.logger.log(log_level, f"Details: {error.details}")

    def has_errors(self) -> bool:
        """Check if any errors have been recorded."""
        return len(self.errors) > 0

    def has_warnings(self) -> bool:
        """Check if any warnings have been recorded."""
        return len(self.warnings) > 0

    def get_error_summary(self) -> Dict[str, Any]:
        """Get a summary of all errors and warnings."""
        return {
            'error_count': len(self.errors),
            'warning_count': len(self.warnings),
            'errors': [self._format_error_for_summary(e) for e in self.errors],
            'warnings': [self._format_error_for_summary(e) for e in self.warnings]
        }

    def _format_error_for_summary(self, error: ProcessingError) -> Dict[str, Any]:
        """Format error for summary display."""
        return {
            'code': error.error_code,
            'category': error.category.value,
            'severity': error.severity.value,
            'message': error.message,
            'suggested_actions': error.suggested_actions
        }

    def clear_errors(self) -> None:
        """Clear all recorded errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def capability_unavailable(self, host: str) -> ProcessingError:
        """Build the record for a host without speech recognition."""
        return ProcessingError(
            category=ErrorCategory.SPEECH_CAPTURE,
            severity=ErrorSeverity.WARNING,
            message="Speech recognition is not available",
            details=f"No speech capture capability is registered for host '{host}'",
            suggested_actions=[
                "Use the replay button to listen to the reference audio",
                "Switch to the typing drill to practise this card",
                "Run with a host that supports speech recognition"
            ],
            error_code="SPEECH_001",
            context={'host': host}
        )

    def handle_speech_error(self, reason: str, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle a runtime error reported by a speech capture session."""
        reason = (reason or "").strip().lower()
        error_code = _SPEECH_ERROR_CODES.get(reason, "SPEECH_006")

        if error_code == "SPEECH_002":
            message = "Microphone permission was denied"
            actions = [
                "Allow microphone access and tap the mic again",
                "Check the system privacy settings"
            ]
        elif error_code == "SPEECH_003":
            message = "No speech was detected"
            actions = [
                "Tap the mic and read the sentence aloud",
                "Move closer to the microphone"
            ]
        elif error_code == "SPEECH_004":
            message = "No audio input was captured"
            actions = [
                "Check that a microphone is connected",
                "Select a different input device"
            ]
        elif error_code == "SPEECH_005":
            message = "Speech recognition network error"
            actions = [
                "Check your internet connection",
                "Tap the mic to try again"
            ]
        else:
            message = "Speech recognition failed"
            actions = ["Tap the mic to try again"]

        return ProcessingError(
            category=ErrorCategory.SPEECH_CAPTURE,
            severity=ErrorSeverity.WARNING,
            message=message,
            details=f"Speech capture reported: {reason or 'unknown'}",
            suggested_actions=actions,
            error_code=error_code,
            context=context
        )

    def handle_deck_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle deck loading errors."""
        if isinstance(error, DeckValidationError):
            return error.processing_error

        if isinstance(error, FileNotFoundError):
            return ProcessingError(
                category=ErrorCategory.DECK_LOADING,
                severity=ErrorSeverity.ERROR,
                message="Deck file not found",
                details=f"The specified deck file does not exist: {error}",
                suggested_actions=[
                    "Check that the file path is correct",
                    "Generate the level content again and save it as JSON"
                ],
                error_code="DECK_001",
                context=context
            )

        return ProcessingError(
            category=ErrorCategory.DECK_LOADING,
            severity=ErrorSeverity.ERROR,
            message="Deck file could not be read",
            details=f"Failed to parse deck file: {error}",
            suggested_actions=[
                "Ensure the file contains valid UTF-8 JSON",
                "Check that the file is not truncated"
            ],
            error_code="DECK_002",
            context=context
        )

    def handle_media_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle failures of the external content generation service."""
        if isinstance(error, MediaGenerationError):
            error.processing_error.context.update(context or {})
            return error.processing_error
        return ProcessingError(
            category=ErrorCategory.MEDIA_GENERATION,
            severity=ErrorSeverity.WARNING,
            message="Card media could not be generated",
            details=f"Content service error: {error}",
            suggested_actions=[
                "Continue without the image or audio",
                "Revisit the card later to retry generation"
            ],
            error_code="MEDIA_001",
            context=context
        )

    def handle_playback_error(self, error: Exception, context: Dict[str, Any] = None) -> ProcessingError:
        """Handle reference audio decoding or playback failures."""
        if isinstance(error, AudioPlaybackError):
            return error.processing_error
        return ProcessingError(
            category=ErrorCategory.AUDIO_PLAYBACK,
            severity=ErrorSeverity.WARNING,
            message="Reference audio could not be played",
            details=f"Playback error: {error}",
            suggested_actions=[
                "Check the audio output device",
                "Read the sentence on the card instead"
            ],
            error_code="AUDIO_001",
            context=context
        )


# Global error handler instance
error_handler = ErrorHandler()
