"""
Drill session: the current card, the active drill mode and the resets
that happen when either changes.
"""

import logging
from typing import Callable, List, Optional

from ..audio.reference import AudioPlayer, NullAudioPlayer
from ..config import Config
from ..content.media import CardMediaLoader, reference_audio
from ..errors import (
    AudioPlaybackError,
    CapabilityUnavailableError,
    ErrorCategory,
    ErrorHandler,
    ErrorSeverity,
    InputValidationError,
    ProcessingError,
    error_handler,
)
from ..models import DictationStatus, DrillMode, LearningCard, WordAlignment
from ..progress import DrillProgressTracker
from ..speech.capability import SpeechCaptureCapability
from .dictation import DictationDrill
from .pronunciation import PronunciationDrill


class DrillSession:
    """
    Owns the card index, the drill mode and one drill of each kind.

    Both drills are scoped to the current card and are rebuilt whenever
    the card or the mode changes, so no drill state carries over.
    """

    def __init__(
        self,
        cards: List[LearningCard],
        capability: Optional[SpeechCaptureCapability] = None,
        speech_host: Optional[str] = None,
        player: Optional[AudioPlayer] = None,
        media_loader: Optional[CardMediaLoader] = None,
        progress: Optional[DrillProgressTracker] = None,
        on_focus_input: Optional[Callable[[], None]] = None,
        on_update: Optional[Callable[['DrillSession'], None]] = None,
        config=Config,
        errors: ErrorHandler = error_handler
    ):
        """
        Args:
            cards: Deck being practised; shared with the media loader
            capability: Speech engine for the pronunciation drill
            speech_host: Host name used to resolve the engine when none is given
            player: Reference audio output
            media_loader: Fills in missing card media when a card is shown
            progress: Tracker receiving drill outcomes
            on_focus_input: Called when the typing drill needs keyboard focus
            on_update: Called after pronunciation state changes, for redrawing
            config: Configuration for the drills
            errors: Error handler receiving non-fatal conditions
        """
        if not cards:
            raise InputValidationError(ProcessingError(
                category=ErrorCategory.INPUT_VALIDATION,
                severity=ErrorSeverity.ERROR,
                message="Deck has no cards",
                details="A drill session needs at least one card",
                suggested_actions=["Load a deck that contains flashcards"],
                error_code="INPUT_001"
            ))

        self.logger = logging.getLogger(__name__)
        self.cards = cards
        self.capability = capability
        self.speech_host = speech_host or config.SPEECH_HOST
        self.player = player or NullAudioPlayer()
        self.media_loader = media_loader
        self.progress = progress or DrillProgressTracker()
        self.on_focus_input = on_focus_input
        self.on_update = on_update
        self.config = config
        self.errors = errors

        self.index = 0
        self.mode = DrillMode.VIEW
        self.flipped = False
        self.speech_available = True
        self.last_speech_error: Optional[ProcessingError] = None

        self.dictation: Optional[DictationDrill] = None
        self.pronunciation: Optional[PronunciationDrill] = None
        self.on_card_change(0)

    @property
    def current_card(self) -> LearningCard:
        return self.cards[self.index]

    # ------------------------------------------------------------------
    # Navigation

    def on_card_change(self, index: int) -> None:
        """
        Make ``index`` the current card.

        Rebuilds both drills, which stops any active listening, and
        unflips the card in view mode.
        """
        if not 0 <= index < len(self.cards):
            raise InputValidationError(ProcessingError(
                category=ErrorCategory.INPUT_VALIDATION,
                severity=ErrorSeverity.ERROR,
                message="Card index out of range",
                details=f"Index {index} is not in a deck of {len(self.cards)} cards",
                suggested_actions=[f"Choose a card between 1 and {len(self.cards)}"],
                error_code="INPUT_002"
            ))

        self.index = index
        if self.mode == DrillMode.VIEW:
            self.flipped = False
        if self.media_loader is not None:
            self.media_loader.ensure_media(index)
        self._rebuild_drills()
        self.progress.record_view(self.current_card.card_id)
        self.logger.debug(f"Showing card {index + 1}/{len(self.cards)} ({self.current_card.card_id})")

    def next_card(self) -> int:
        """Advance to the next card, wrapping to the first."""
        self.on_card_change((self.index + 1) % len(self.cards))
        return self.index

    def prev_card(self) -> int:
        """Go back to the previous card, wrapping to the last."""
        self.on_card_change((self.index - 1) % len(self.cards))
        return self.index

    def go_to(self, index: int) -> int:
        """Jump to a card by its zero-based index."""
        self.on_card_change(index)
        return self.index

    def flip(self) -> bool:
        """Reveal or hide the translation; only possible in view mode."""
        if self.mode == DrillMode.VIEW:
            self.flipped = not self.flipped
        return self.flipped

    # ------------------------------------------------------------------
    # Modes

    def set_mode(self, mode: DrillMode) -> None:
        """
        Switch the drill mode.

        Leaving a mode discards its in-progress state; entering dictation
        asks the interface to focus the text input.
        """
        if mode == self.mode:
            return
        previous = self.mode
        self.mode = mode
        if previous == DrillMode.VIEW:
            self.flipped = False
        self._rebuild_drills()
        self.logger.debug(f"Mode changed from {previous.value} to {mode.value}")

        if mode == DrillMode.DICTATION and self.on_focus_input is not None:
            self.on_focus_input()

    # ------------------------------------------------------------------
    # Dictation

    def type_input(self, text: str) -> bool:
        """Replace the dictation input; False if it is locked."""
        return self.dictation.set_input(text)

    def check_dictation(self) -> DictationStatus:
        if self.dictation.locked:
            return self.dictation.status
        status = self.dictation.check()
        self.progress.record_dictation(self.current_card.card_id, status)
        return status

    def submit_dictation(self) -> bool:
        """
        Handle Enter in the typing drill.

        Returns:
            True if the session advanced to the next card
        """
        drill = self.dictation
        if drill.submit_on_enter():
            return True
        self.progress.record_dictation(drill.card.card_id, drill.status)
        return False

    # ------------------------------------------------------------------
    # Pronunciation

    def start_listening(self) -> bool:
        """
        Start a capture session for the pronunciation drill.

        Returns:
            True if a session is active afterwards
        """
        if self.mode != DrillMode.PRONUNCIATION:
            self.logger.debug("Listening is only available in pronunciation mode")
            return False
        try:
            self.pronunciation.start()
        except CapabilityUnavailableError as e:
            self.speech_available = False
            self.last_speech_error = e.processing_error
            self.errors.add_error(e.processing_error)
            return False
        # Cache the resolved engine for the drills of later cards
        self.capability = self.pronunciation.capability
        return self.pronunciation.listening

    def stop_listening(self) -> None:
        self.pronunciation.stop()

    def toggle_listening(self) -> bool:
        """Mic button: stop when listening, start otherwise."""
        if self.pronunciation.listening:
            self.stop_listening()
            return False
        return self.start_listening()

    # ------------------------------------------------------------------
    # Reference audio

    def play_reference_audio(self) -> bool:
        """
        Play the current card's reference speech.

        Returns:
            True if audio was handed to the player
        """
        audio = reference_audio(self.current_card, self.errors)
        if audio is None:
            self.logger.debug(f"No reference audio for card {self.current_card.card_id}")
            return False
        try:
            self.player.play(audio)
        except AudioPlaybackError as e:
            self.errors.add_error(self.errors.handle_playback_error(
                e, {'card_id': self.current_card.card_id}
            ))
            return False
        return True

    # ------------------------------------------------------------------
    # Internal helpers

    def _rebuild_drills(self) -> None:
        if self.pronunciation is not None:
            self.pronunciation.reset()

        card = self.current_card
        self.dictation = DictationDrill(
            card,
            on_correct=self.play_reference_audio,
            on_advance=self.next_card
        )
        self.pronunciation = PronunciationDrill(
            card,
            capability=self.capability,
            host=self.speech_host,
            on_update=self._pronunciation_updated,
            on_attempt=self._record_attempt,
            config=self.config,
            errors=self.errors
        )

    def _record_attempt(self, alignments: List[WordAlignment]) -> None:
        self.progress.record_pronunciation(self.current_card.card_id, alignments)

    def _pronunciation_updated(self, drill: PronunciationDrill) -> None:
        if drill is self.pronunciation and self.on_update is not None:
            self.on_update(self)
