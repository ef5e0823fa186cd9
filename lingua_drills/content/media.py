"""
On-demand generation and caching of card media.

Images and reference speech are produced by the external content service
the first time a card is shown. Results are cached on the owning card list,
which is the only place cards are ever replaced.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import List, Optional

from ..audio.reference import ReferenceAudio
from ..errors import AudioPlaybackError, ErrorHandler, error_handler
from ..models import LearningCard


class ContentService(ABC):
    """Base interface for the generative content service."""

    @abstractmethod
    def generate_card_audio(self, text: str) -> Optional[str]:
        """
        Synthesize speech for a sentence.

        Args:
            text: Sentence to speak

        Returns:
            Base64 raw PCM audio, or None if nothing was produced
        """
        pass

    @abstractmethod
    def generate_card_image(self, description: str) -> Optional[str]:
        """
        Illustrate a card.

        Args:
            description: Visual description of the scene

        Returns:
            Base64 image data, or None if nothing was produced
        """
        pass


class CardMediaLoader:
    """Fills in missing media for cards of a deck."""

    def __init__(self, cards: List[LearningCard], service: ContentService,
                 errors: ErrorHandler = error_handler):
        self.logger = logging.getLogger(__name__)
        self.cards = cards
        self.service = service
        self.errors = errors

    def ensure_media(self, index: int) -> LearningCard:
        """
        Generate whatever media the card at ``index`` is missing.

        Failures are recorded as warnings and leave the card as it was.

        Returns:
            The (possibly updated) card
        """
        card = self.cards[index]
        updates = {}

        if card.image_base64 is None and card.image_description:
            image = self._generate("image", card, self.service.generate_card_image,
                                   card.image_description)
            if image:
                updates['image_base64'] = image

        if card.audio_base64 is None:
            audio = self._generate("audio", card, self.service.generate_card_audio,
                                   card.target_text)
            if audio:
                updates['audio_base64'] = audio

        if updates:
            card = replace(card, **updates)
            self.cards[index] = card
            self.logger.info(f"Cached {', '.join(sorted(updates))} for card {card.card_id}")
        return card

    def _generate(self, kind: str, card: LearningCard, generator, argument: str) -> Optional[str]:
        try:
            return generator(argument)
        except Exception as e:
            self.errors.add_error(
                self.errors.handle_media_error(e, {'card_id': card.card_id, 'media': kind})
            )
            return None


def reference_audio(card: LearningCard, errors: ErrorHandler = error_handler) -> Optional[ReferenceAudio]:
    """
    Decode the cached reference speech of a card.

    Returns:
        ReferenceAudio, or None if the card has no usable audio
    """
    if not card.audio_base64:
        return None
    try:
        return ReferenceAudio.from_base64(card.audio_base64)
    except AudioPlaybackError as e:
        errors.add_error(errors.handle_playback_error(e, {'card_id': card.card_id}))
        return None
