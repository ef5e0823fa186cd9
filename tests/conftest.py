"""
Pytest configuration and shared fixtures for the drill tests.

Provides fake speech capabilities, sample cards and a fresh error handler,
and configures Hypothesis for the property-based tests.
"""

import base64
from typing import List, Optional, Tuple

import numpy as np
import pytest
from hypothesis import settings, Verbosity

from lingua_drills.errors import ErrorHandler, SpeechCaptureError
from lingua_drills.models import LearningCard
from lingua_drills.speech.capability import (
    CaptureHandle,
    SpeechCaptureCapability,
    SpeechCaptureListener,
    _registry,
)


# Configure Hypothesis for property-based testing
settings.register_profile("drills",
    max_examples=100,
    verbosity=Verbosity.normal,
    deadline=None
)
settings.load_profile("drills")


def pytest_configure(config):
    config.addinivalue_line("markers", "property: property-based tests using Hypothesis")


class FakeSpeechCapture(SpeechCaptureCapability):
    """Capability whose events are fired by the test."""

    def __init__(self, refuse: Optional[SpeechCaptureError] = None):
        self.refuse = refuse
        self.sessions: List[Tuple[CaptureHandle, SpeechCaptureListener]] = []
        self.stopped: List[CaptureHandle] = []

    def start(self, locale: str, listener: SpeechCaptureListener) -> CaptureHandle:
        if self.refuse is not None:
            raise self.refuse
        handle = CaptureHandle(locale=locale)
        self.sessions.append((handle, listener))
        return handle

    def stop(self, handle: CaptureHandle) -> None:
        self.stopped.append(handle)

    @property
    def last(self) -> Tuple[CaptureHandle, SpeechCaptureListener]:
        return self.sessions[-1]

    def emit_started(self) -> None:
        handle, listener = self.last
        listener.on_listening_started(handle)

    def emit_transcript(self, text: str) -> None:
        handle, listener = self.last
        listener.on_transcript(handle, text)

    def emit_ended(self) -> None:
        handle, listener = self.last
        listener.on_ended(handle)

    def emit_error(self, reason: str) -> None:
        handle, listener = self.last
        listener.on_error(handle, reason)


def pcm_base64(samples) -> str:
    """Encode float samples in [-1, 1] as base64 16-bit little-endian PCM."""
    pcm = (np.asarray(samples, dtype=np.float64) * 32767).astype('<i2')
    return base64.b64encode(pcm.tobytes()).decode("ascii")


@pytest.fixture
def errors():
    """Fresh error handler, isolated from the global one."""
    return ErrorHandler()


@pytest.fixture
def fake_capture():
    return FakeSpeechCapture()


@pytest.fixture
def coffee_card():
    return LearningCard(
        card_id="c1",
        target_text="I would like a coffee.",
        translation="我想要一杯咖啡。",
        pronunciation_hint="wǒ xiǎng yào yī bēi kāfēi",
        image_description="A cozy cafe counter",
    )


@pytest.fixture
def morning_card():
    return LearningCard(card_id="c2", target_text="Good morning, sir!", translation="先生，早上好！")


@pytest.fixture
def audio_card():
    tone = 0.5 * np.sin(np.linspace(0, 2 * np.pi * 10, 2400))
    return LearningCard(
        card_id="c3",
        target_text="See you tomorrow.",
        translation="明天见。",
        audio_base64=pcm_base64(tone),
    )


@pytest.fixture
def deck(coffee_card, morning_card, audio_card):
    return [coffee_card, morning_card, audio_card]


@pytest.fixture(autouse=True)
def clean_registry():
    """Keep registered speech capabilities from leaking between tests."""
    saved = dict(_registry)
    yield
    _registry.clear()
    _registry.update(saved)


@pytest.fixture
def encode_pcm():
    return pcm_base64
