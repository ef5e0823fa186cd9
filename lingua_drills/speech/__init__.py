"""
Speech capture capabilities consumed by the pronunciation drill.
"""

from .capability import (
    CaptureHandle,
    SpeechCaptureCapability,
    SpeechCaptureListener,
    register_capability,
    resolve_capability,
    unregister_capability,
)
from .console import ConsoleSpeechCapture

__all__ = ['CaptureHandle', 'SpeechCaptureCapability', 'SpeechCaptureListener',
           'register_capability', 'resolve_capability', 'unregister_capability',
           'ConsoleSpeechCapture']
