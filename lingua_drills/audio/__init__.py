"""
Reference audio decoding and playback.
"""

from .reference import AudioPlayer, NullAudioPlayer, ReferenceAudio, WavFilePlayer

__all__ = ['AudioPlayer', 'NullAudioPlayer', 'ReferenceAudio', 'WavFilePlayer']
