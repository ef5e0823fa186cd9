"""
Tests for the speech capability registry and the console capability.
"""

import io

import pytest

from lingua_drills.errors import CapabilityUnavailableError
from lingua_drills.speech import (
    ConsoleSpeechCapture,
    SpeechCaptureListener,
    register_capability,
    resolve_capability,
    unregister_capability,
)


class RecordingListener(SpeechCaptureListener):
    """Listener that records events in order."""

    def __init__(self):
        self.events = []

    def on_listening_started(self, handle):
        self.events.append(("started", handle))

    def on_transcript(self, handle, text):
        self.events.append(("transcript", text))

    def on_ended(self, handle):
        self.events.append(("ended", handle))

    def on_error(self, handle, reason):
        self.events.append(("error", reason))


class TestRegistry:
    """Tests for capability registration by host."""

    def test_unregistered_host_is_unavailable(self):
        with pytest.raises(CapabilityUnavailableError) as exc_info:
            resolve_capability("kiosk")

        error = exc_info.value.processing_error
        assert error.error_code == "SPEECH_001"
        assert error.context == {'host': 'kiosk'}

    def test_register_and_resolve(self):
        capture = ConsoleSpeechCapture(io.StringIO(), io.StringIO())
        register_capability("kiosk", lambda: capture)
        assert resolve_capability("kiosk") is capture

    def test_unregister(self):
        register_capability("kiosk", lambda: ConsoleSpeechCapture())
        unregister_capability("kiosk")
        unregister_capability("kiosk")

        with pytest.raises(CapabilityUnavailableError):
            resolve_capability("kiosk")


class TestConsoleSpeechCapture:
    """Tests for the terminal capture capability."""

    def test_events_are_delivered_on_pump_not_on_start(self):
        capture = ConsoleSpeechCapture(io.StringIO("good morning\n"), io.StringIO())
        listener = RecordingListener()

        handle = capture.start("en-US", listener)
        assert listener.events == []
        assert capture.has_pending

        assert capture.pump() is True
        assert listener.events == [
            ("started", handle), ("transcript", "good morning"), ("ended", handle)
        ]
        assert not capture.has_pending

    def test_blank_line_reports_no_speech(self):
        capture = ConsoleSpeechCapture(io.StringIO("   \n"), io.StringIO())
        listener = RecordingListener()
        handle = capture.start("en-US", listener)
        capture.pump()

        assert listener.events == [("started", handle), ("error", "no-speech"), ("ended", handle)]

    def test_prompt_is_written(self):
        prompt = io.StringIO()
        capture = ConsoleSpeechCapture(io.StringIO("hi\n"), prompt)
        capture.start("en-US", RecordingListener())
        capture.pump()
        assert "(say it) > " in prompt.getvalue()

    def test_stop_cancels_queued_session(self):
        capture = ConsoleSpeechCapture(io.StringIO("hi\n"), io.StringIO())
        listener = RecordingListener()
        handle = capture.start("en-US", listener)
        capture.stop(handle)

        assert capture.pump() is False
        assert listener.events == []

    def test_stop_of_other_session_is_ignored(self):
        capture = ConsoleSpeechCapture(io.StringIO("hi\n"), io.StringIO())
        first = capture.start("en-US", RecordingListener())
        capture.start("en-US", RecordingListener())
        capture.stop(first)

        assert capture.has_pending
