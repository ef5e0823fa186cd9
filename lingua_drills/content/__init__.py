"""
Generated level content: deck loading, card media and the level exam.
"""

from .deck import LevelDeck, load_deck, parse_level_data
from .media import CardMediaLoader, ContentService, reference_audio
from .quiz import QuizSession

__all__ = ['LevelDeck', 'load_deck', 'parse_level_data', 'CardMediaLoader',
           'ContentService', 'reference_audio', 'QuizSession']
