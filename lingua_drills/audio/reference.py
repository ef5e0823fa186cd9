"""
Reference audio decoding and playback adapters.

Generated speech arrives as base64-encoded raw 16-bit little-endian PCM
(24 kHz mono). Playback devices are external collaborators; the drills only
need a fire-and-forget ``play``.
"""

import base64
import binascii
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
import librosa
from scipy.io import wavfile

from ..config import Config
from ..errors import (
    AudioPlaybackError,
    ErrorCategory,
    ErrorSeverity,
    ProcessingError,
)


logger = logging.getLogger(__name__)


def _decode_error(details: str) -> AudioPlaybackError:
    return AudioPlaybackError(ProcessingError(
        category=ErrorCategory.AUDIO_PLAYBACK,
        severity=ErrorSeverity.WARNING,
        message="Reference audio is not valid PCM data",
        details=details,
        suggested_actions=[
            "Regenerate the audio for this card",
            "Read the sentence on the card instead"
        ],
        error_code="AUDIO_002"
    ))


@dataclass
class ReferenceAudio:
    """Decoded reference speech for one card."""
    samples: np.ndarray  # float32 in [-1, 1), shape (frames,) or (frames, channels)
    sample_rate: int

    @property
    def duration(self) -> float:
        """Duration in seconds."""
        return len(self.samples) / self.sample_rate

    @classmethod
    def from_base64(
        cls,
        payload: str,
        sample_rate: int = Config.REFERENCE_SAMPLE_RATE,
        channels: int = Config.REFERENCE_CHANNELS
    ) -> 'ReferenceAudio':
        """
        Decode a base64 PCM payload.

        Args:
            payload: Base64 text of raw 16-bit little-endian samples
            sample_rate: Sample rate of the payload
            channels: Interleaved channel count

        Returns:
            ReferenceAudio with float32 samples

        Raises:
            AudioPlaybackError: If the payload is not valid base64 PCM
        """
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise _decode_error(f"Invalid base64 payload: {e}")

        frame_bytes = 2 * channels
        if not raw or len(raw) % frame_bytes:
            raise _decode_error(
                f"Payload of {len(raw)} bytes is not a whole number of {channels}-channel frames"
            )

        samples = np.frombuffer(raw, dtype='<i2').astype(np.float32) / 32768.0
        if channels > 1:
            samples = samples.reshape(-1, channels)

        return cls(samples=samples, sample_rate=sample_rate)


class AudioPlayer(ABC):
    """Base interface for reference audio playback."""

    @abstractmethod
    def play(self, audio: ReferenceAudio) -> None:
        """
        Play a clip without waiting for it to finish.

        Raises:
            AudioPlaybackError: If the clip cannot be played
        """
        pass


class NullAudioPlayer(AudioPlayer):
    """Player for hosts without audio output; records what would be played."""

    def __init__(self):
        self.played = []

    def play(self, audio: ReferenceAudio) -> None:
        self.played.append(audio)
        logger.debug(f"Skipping playback of {audio.duration:.2f}s clip (no audio output)")


class WavFilePlayer(AudioPlayer):
    """
    Writes each clip to a WAV file for an external player to pick up.

    Clips are resampled to the configured playback rate.
    """

    def __init__(self, output_dir: Path = None, sample_rate: int = Config.PLAYBACK_SAMPLE_RATE):
        self.output_dir = Path(output_dir or Config.OUTPUT_DIR)
        self.sample_rate = sample_rate
        self.output_dir.mkdir(parents=True, exist_ok=True)
        self.clip_count = 0
        self.last_path: Optional[Path] = None

    def play(self, audio: ReferenceAudio) -> None:
        samples = audio.samples
        if audio.sample_rate != self.sample_rate:
            # librosa expects channels first
            samples = librosa.resample(
                samples.T, orig_sr=audio.sample_rate, target_sr=self.sample_rate
            ).T

        audio_normalized = (np.clip(samples, -1.0, 1.0) * 32767).astype('int16')

        self.clip_count += 1
        clip_path = self.output_dir / f"reference_{self.clip_count:03d}.wav"
        try:
            wavfile.write(str(clip_path), self.sample_rate, audio_normalized)
        except OSError as e:
            raise AudioPlaybackError(ProcessingError(
                category=ErrorCategory.AUDIO_PLAYBACK,
                severity=ErrorSeverity.WARNING,
                message="Reference audio could not be written",
                details=f"Failed to write {clip_path}: {e}",
                suggested_actions=[
                    "Check that the audio directory is writable",
                    "Choose a different directory with --audio-dir"
                ],
                error_code="AUDIO_003"
            ))

        self.last_path = clip_path
        logger.info(f"Reference audio written to {clip_path} ({audio.duration:.2f}s)")
