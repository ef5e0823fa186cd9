"""
Interactive drills over the cards of a deck.
"""

from .dictation import DictationDrill
from .pronunciation import PronunciationDrill
from .session import DrillSession

__all__ = ['DictationDrill', 'PronunciationDrill', 'DrillSession']
