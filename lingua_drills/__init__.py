"""
Lingua Drills: typing and speaking drills over generated flashcard decks.
"""

__version__ = "0.1.0"
