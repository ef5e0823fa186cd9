"""
Text normalization and fuzzy word alignment used to score drill input.
"""

from .normalizer import normalize
from .edit_distance import edit_distance
from .word_aligner import align_words, classify_distance, count_classes, display_words

__all__ = ['normalize', 'edit_distance', 'align_words', 'classify_distance',
           'count_classes', 'display_words']
