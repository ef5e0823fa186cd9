"""
Speech pronunciation drill: read the target sentence aloud and get
word-by-word feedback from the live transcript.
"""

import logging
from typing import Callable, List, Optional

from ..alignment.word_aligner import align_words
from ..config import Config
from ..errors import ErrorHandler, ProcessingError, SpeechCaptureError, error_handler
from ..models import LearningCard, PronunciationState, WordAlignment
from ..speech.capability import (
    CaptureHandle,
    SpeechCaptureCapability,
    SpeechCaptureListener,
    resolve_capability,
)


class PronunciationDrill(SpeechCaptureListener):
    """
    State machine for the "listen and speak" exercise.

    Listens to one capture session at a time. Each transcript event replaces
    the transcript wholesale and the word alignment is recomputed from
    scratch. Events from sessions other than the current one are ignored.
    """

    def __init__(
        self,
        card: LearningCard,
        capability: Optional[SpeechCaptureCapability] = None,
        host: Optional[str] = None,
        locale: Optional[str] = None,
        on_update: Optional[Callable[['PronunciationDrill'], None]] = None,
        on_attempt: Optional[Callable[[List[WordAlignment]], None]] = None,
        config=Config,
        errors: ErrorHandler = error_handler
    ):
        """
        Args:
            card: Card whose target sentence is spoken
            capability: Speech engine; resolved from ``host`` on first start if None
            host: Registry host name used to resolve the capability
            locale: Recognition locale
            on_update: Called after every state change, for redrawing
            on_attempt: Called with the final alignment when a session ends
            config: Configuration holding the alignment window and thresholds
            errors: Error handler receiving transient speech errors
        """
        self.logger = logging.getLogger(__name__)
        self.card = card
        self.capability = capability
        self.host = host or config.SPEECH_HOST
        self.locale = locale or config.SPEECH_LOCALE
        self.on_update = on_update
        self.on_attempt = on_attempt
        self.config = config
        self.errors = errors

        self.state = PronunciationState()
        self.alignments: List[WordAlignment] = []
        self.last_error: Optional[ProcessingError] = None
        self._handle: Optional[CaptureHandle] = None
        self._stop_requested = False

    @property
    def listening(self) -> bool:
        return self.state.listening

    @property
    def transcript(self) -> str:
        return self.state.transcript

    @property
    def awaiting_input(self) -> bool:
        """True while there is no transcript to classify."""
        return not self.state.transcript

    # ------------------------------------------------------------------
    # Learner actions

    def start(self) -> Optional[CaptureHandle]:
        """
        Start a capture session.

        A no-op while already listening, so at most one session is active.

        Returns:
            Handle of the active session, or None if the engine refused to start

        Raises:
            CapabilityUnavailableError: If the host has no speech capability
        """
        if self.state.listening:
            self.logger.debug("Already listening; start ignored")
            return self._handle

        if self.capability is None:
            self.capability = resolve_capability(self.host)

        self.last_error = None
        self._stop_requested = False
        try:
            self._handle = self.capability.start(self.locale, self)
        except SpeechCaptureError as e:
            self._handle = None
            self._record_error(e.processing_error)
            self._notify()
            return None

        self.state.listening = True
        self.logger.debug(f"Capture session {self._handle.session_id} started")
        self._notify()
        return self._handle

    def stop(self) -> None:
        """
        Request cancellation of the current session.

        Safe to call at any time and idempotent. A final transcript that
        the engine still delivers for the session is accepted.
        """
        was_listening = self.state.listening
        self._stop_requested = True
        self.state.listening = False
        if was_listening and self._handle is not None and self.capability is not None:
            self.capability.stop(self._handle)
        if was_listening:
            self._notify()

    def reset(self) -> None:
        """Stop listening and discard transcript and feedback."""
        self.stop()
        self._handle = None
        self.state = PronunciationState()
        self.alignments = []
        self.last_error = None

    # ------------------------------------------------------------------
    # Capture events

    def on_listening_started(self, handle: CaptureHandle) -> None:
        if not self._is_current(handle) or self._stop_requested:
            return
        self.state.listening = True
        self._notify()

    def on_transcript(self, handle: CaptureHandle, text: str) -> None:
        if not self._is_current(handle):
            return
        self.on_transcript_update(text)

    def on_ended(self, handle: CaptureHandle) -> None:
        if not self._is_current(handle):
            return
        self._handle = None
        self.state.listening = False
        if self.state.transcript and self.on_attempt is not None:
            self.on_attempt(list(self.alignments))
        self._notify()

    def on_error(self, handle: CaptureHandle, reason: str) -> None:
        if not self._is_current(handle):
            return
        self.state.listening = False
        self._record_error(self.errors.handle_speech_error(
            reason, {'card_id': self.card.card_id}
        ))
        self._notify()

    def on_transcript_update(self, full_text: str) -> None:
        """Replace the transcript and recompute the word alignment."""
        self.state.transcript = full_text
        if self.awaiting_input:
            self.alignments = []
        else:
            self.alignments = align_words(self.card.target_text, full_text, self.config)
        self._notify()

    # ------------------------------------------------------------------
    # Internal helpers

    def _is_current(self, handle: CaptureHandle) -> bool:
        if self._handle is None or handle != self._handle:
            self.logger.debug(f"Ignoring event from stale capture session {handle.session_id}")
            return False
        return True

    def _record_error(self, error: ProcessingError) -> None:
        self.last_error = error
        self.errors.add_error(error)

    def _notify(self) -> None:
        if self.on_update is not None:
            self.on_update(self)
