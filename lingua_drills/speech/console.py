"""
Terminal stand-in for a speech engine.

The learner types what they said; the line is delivered as the final
transcript of the session. Sessions are pumped explicitly by the event loop.
"""

import logging
import sys
from typing import Optional, TextIO, Tuple

from .capability import CaptureHandle, SpeechCaptureCapability, SpeechCaptureListener


logger = logging.getLogger(__name__)


class ConsoleSpeechCapture(SpeechCaptureCapability):
    """Capture capability reading utterances from a text stream."""

    def __init__(self, stream: TextIO = None, prompt_stream: TextIO = None):
        self.stream = stream or sys.stdin
        self.prompt_stream = prompt_stream or sys.stdout
        self._pending: Optional[Tuple[CaptureHandle, SpeechCaptureListener]] = None

    @property
    def has_pending(self) -> bool:
        return self._pending is not None

    def start(self, locale: str, listener: SpeechCaptureListener) -> CaptureHandle:
        handle = CaptureHandle(locale=locale)
        self._pending = (handle, listener)
        logger.debug(f"Console capture session {handle.session_id} queued ({locale})")
        return handle

    def stop(self, handle: CaptureHandle) -> None:
        if self._pending is not None and self._pending[0] == handle:
            self._pending = None
            logger.debug(f"Console capture session {handle.session_id} cancelled")

    def pump(self) -> bool:
        """
        Run the queued session to completion.

        Returns:
            True if a session was run, False when nothing was queued
        """
        if self._pending is None:
            return False
        handle, listener = self._pending
        self._pending = None

        listener.on_listening_started(handle)
        self.prompt_stream.write("(say it) > ")
        self.prompt_stream.flush()
        line = self.stream.readline()

        utterance = line.strip()
        if utterance:
            listener.on_transcript(handle, utterance)
        else:
            listener.on_error(handle, "no-speech")
        listener.on_ended(handle)
        return True
