"""
Speech capture capability interfaces and host registry.

A capability wraps whatever speech-to-text engine the host provides. It is
injected into the pronunciation drill, or resolved by host name from the
registry; a host with nothing registered reports CapabilityUnavailableError.
"""

import logging
import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Dict

from ..errors import CapabilityUnavailableError, error_handler


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CaptureHandle:
    """Identifies one capture session started on a capability."""
    locale: str
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)


class SpeechCaptureListener(ABC):
    """Receiver of capture session events, in emission order."""

    @abstractmethod
    def on_listening_started(self, handle: CaptureHandle) -> None:
        """The engine acknowledged the session and is listening."""
        pass

    @abstractmethod
    def on_transcript(self, handle: CaptureHandle, text: str) -> None:
        """
        Interim or final recognition result.

        Args:
            handle: Session the result belongs to
            text: Full utterance-so-far, not a delta
        """
        pass

    @abstractmethod
    def on_ended(self, handle: CaptureHandle) -> None:
        """Terminal event of a session."""
        pass

    @abstractmethod
    def on_error(self, handle: CaptureHandle, reason: str) -> None:
        """
        Runtime failure of a session, e.g. ``not-allowed`` or ``no-speech``.

        Args:
            handle: Session that failed
            reason: Engine-reported reason string
        """
        pass


class SpeechCaptureCapability(ABC):
    """Base interface for speech-to-text capture engines."""

    @abstractmethod
    def start(self, locale: str, listener: SpeechCaptureListener) -> CaptureHandle:
        """
        Begin a capture session.

        Events are delivered to the listener after this call returns.

        Args:
            locale: BCP 47 recognition locale, e.g. ``en-US``
            listener: Receiver of session events

        Returns:
            Handle identifying the new session

        Raises:
            SpeechCaptureError: If the engine refuses to start
        """
        pass

    @abstractmethod
    def stop(self, handle: CaptureHandle) -> None:
        """
        Request cancellation of a session.

        Must be safe to call for sessions that have already ended.
        """
        pass


_registry: Dict[str, Callable[[], SpeechCaptureCapability]] = {}


def register_capability(host: str, factory: Callable[[], SpeechCaptureCapability]) -> None:
    """Register a capability factory for a host name."""
    if host in _registry:
        logger.info(f"Replacing speech capability registered for host '{host}'")
    _registry[host] = factory


def unregister_capability(host: str) -> None:
    """Remove the capability registered for a host, if any."""
    _registry.pop(host, None)


def resolve_capability(host: str) -> SpeechCaptureCapability:
    """
    Create the capability registered for a host.

    Raises:
        CapabilityUnavailableError: If nothing is registered for the host
    """
    factory = _registry.get(host)
    if factory is None:
        raise CapabilityUnavailableError(error_handler.capability_unavailable(host))
    return factory()
