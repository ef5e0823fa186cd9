"""
Practice progress tracking and completion summary.

Records the outcome of every dictation check and pronunciation attempt
per card, and summarizes the session when the learner is done.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from .alignment.word_aligner import count_classes
from .models import DictationStatus, MatchClass, WordAlignment


@dataclass
class CardProgress:
    """Attempt history of one card."""
    card_id: str
    dictation_checks: int = 0
    dictation_correct: int = 0
    pronunciation_attempts: List[Dict[MatchClass, int]] = field(default_factory=list)
    first_seen: datetime = field(default_factory=datetime.now)

    @property
    def best_pronunciation(self) -> Optional[float]:
        """Best share of exactly matched words over all attempts."""
        best = None
        for counts in self.pronunciation_attempts:
            total = sum(counts.values())
            if not total:
                continue
            share = counts[MatchClass.EXACT] / total
            if best is None or share > best:
                best = share
        return best


class DrillProgressTracker:
    """Collects per-card drill outcomes for the completion summary."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self.cards: Dict[str, CardProgress] = {}
        self.start_time = datetime.now()

    def _card(self, card_id: str) -> CardProgress:
        if card_id not in self.cards:
            self.cards[card_id] = CardProgress(card_id=card_id)
        return self.cards[card_id]

    def record_view(self, card_id: str) -> None:
        """Note that a card was shown."""
        self._card(card_id)

    def record_dictation(self, card_id: str, status: DictationStatus) -> None:
        """Record the verdict of a dictation check."""
        if status == DictationStatus.IDLE:
            return
        progress = self._card(card_id)
        progress.dictation_checks += 1
        if status == DictationStatus.CORRECT:
            progress.dictation_correct += 1

    def record_pronunciation(self, card_id: str, alignments: List[WordAlignment]) -> None:
        """Record the final word alignment of a pronunciation attempt."""
        counts = count_classes(alignments)
        self._card(card_id).pronunciation_attempts.append(counts)
        self.logger.debug(
            f"Pronunciation attempt on {card_id}: "
            f"{counts[MatchClass.EXACT]} exact, {counts[MatchClass.CLOSE]} close, "
            f"{counts[MatchClass.MISMATCH]} mismatch"
        )

    def summary(self) -> Dict[str, Any]:
        """Summarize the practice session."""
        checks = sum(card.dictation_checks for card in self.cards.values())
        correct = sum(card.dictation_correct for card in self.cards.values())
        attempts = sum(len(card.pronunciation_attempts) for card in self.cards.values())
        return {
            'cards_practised': len(self.cards),
            'dictation_checks': checks,
            'dictation_correct': correct,
            'dictation_accuracy': (correct / checks) if checks else None,
            'pronunciation_attempts': attempts,
            'best_pronunciation': {
                card_id: card.best_pronunciation
                for card_id, card in self.cards.items()
                if card.best_pronunciation is not None
            },
            'elapsed_seconds': (datetime.now() - self.start_time).total_seconds(),
        }

    def log_summary(self) -> None:
        """Log the completion summary."""
        summary = self.summary()
        self.logger.info("=" * 50)
        self.logger.info("PRACTICE SUMMARY")
        self.logger.info("=" * 50)
        self.logger.info(f"Cards practised: {summary['cards_practised']}")
        if summary['dictation_checks']:
            self.logger.info(
                f"Dictation: {summary['dictation_correct']}/{summary['dictation_checks']} checks correct "
                f"({summary['dictation_accuracy']:.0%})"
            )
        if summary['pronunciation_attempts']:
            self.logger.info(f"Pronunciation attempts: {summary['pronunciation_attempts']}")
            for card_id, best in summary['best_pronunciation'].items():
                self.logger.info(f"  {card_id}: best {best:.0%} words exact")
        self.logger.info(f"Time spent: {summary['elapsed_seconds']:.0f}s")
