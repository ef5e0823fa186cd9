"""
Windowed word alignment of a spoken transcript against a target sentence.

Each target word is compared with the transcript words at nearby positions
only, so small insertions, deletions and reorderings are tolerated while a
word spoken far from its expected position is not credited. This is not a
global sequence alignment.
"""

import logging
from typing import Dict, List, Tuple

from ..config import Config
from ..models import MatchClass, WordAlignment
from .edit_distance import edit_distance
from .normalizer import normalize


logger = logging.getLogger(__name__)


def classify_distance(word: str, distance: int, config=Config) -> MatchClass:
    """
    Map the best edit distance of a target word to its match class.

    Args:
        word: Normalized target word
        distance: Best edit distance found in the window
        config: Configuration holding the close-match thresholds

    Returns:
        EXACT for zero, CLOSE within either threshold, MISMATCH otherwise
    """
    if distance == 0:
        return MatchClass.EXACT
    if (distance <= config.CLOSE_MAX_DISTANCE
            or distance <= len(word) * config.CLOSE_LENGTH_RATIO):
        return MatchClass.CLOSE
    return MatchClass.MISMATCH


def align_words(target_text: str, transcript: str, config=Config) -> List[WordAlignment]:
    """
    Classify every target word against the transcript.

    Args:
        target_text: Sentence the learner is asked to say
        transcript: Full utterance-so-far from speech recognition
        config: Configuration holding the window radius and thresholds

    Returns:
        One WordAlignment per normalized target word, in order
    """
    target_words = normalize(target_text).split(' ')
    input_words = normalize(transcript).split(' ')
    window = config.ALIGNMENT_WINDOW

    alignments = []
    for idx, word in enumerate(target_words):
        start = max(0, idx - window)
        stop = min(len(input_words), idx + window + 1)
        candidates = [edit_distance(word, input_words[j]) for j in range(start, stop)]

        if not candidates:
            # Transcript too short to reach this position
            alignments.append(WordAlignment(word, len(word), MatchClass.MISMATCH))
            continue

        best = min(candidates)
        alignments.append(WordAlignment(word, best, classify_distance(word, best, config)))

    logger.debug(
        f"Aligned {len(target_words)} target words against {len(input_words)} spoken words"
    )
    return alignments


def display_words(target_text: str, alignments: List[WordAlignment]) -> List[Tuple[str, WordAlignment]]:
    """
    Pair each alignment with the word as written on the card.

    The spelling on the card (with case and punctuation) is shown when the
    raw sentence has a token at that position, otherwise the normalized word.
    """
    raw_tokens = target_text.split(' ')
    pairs = []
    for idx, alignment in enumerate(alignments):
        shown = raw_tokens[idx] if idx < len(raw_tokens) and raw_tokens[idx] else alignment.word
        pairs.append((shown, alignment))
    return pairs


def count_classes(alignments: List[WordAlignment]) -> Dict[MatchClass, int]:
    """Count alignments per match class."""
    counts = {match_class: 0 for match_class in MatchClass}
    for alignment in alignments:
        counts[alignment.match_class] += 1
    return counts
