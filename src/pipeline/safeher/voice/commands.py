"""Voice command interpretation and SOS keyword detection.

Speech-to-text happens on the device; this module only sees transcripts.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable

import structlog

logger = structlog.get_logger()

# Checked in order; the first keyword contained in the transcript wins.
SOS_KEYWORDS = (
    "help", "emergency", "sos", "danger", "dangerous",
    "unsafe", "scared", "afraid", "threat", "attack",
    "assault", "harassment", "stalking", "follow",
    "call police", "call 911", "need help", "help me",
)

# (action, trigger words, confidence, message), checked in order
COMMAND_RULES = (
    ("emergency", ("help", "emergency"), 0.9, "Emergency command detected"),
    ("share_location", ("location", "where"), 0.8, "Location sharing command detected"),
    ("safety_checkin", ("safe", "okay"), 0.7, "Safety check-in command detected"),
    ("call_contact", ("call", "phone"), 0.8, "Call contact command detected"),
)


@dataclass(frozen=True)
class VoiceCommand:
    """Interpreted intent of a spoken command."""

    action: str
    confidence: float
    message: str


@dataclass(frozen=True)
class SosTrigger:
    """Emitted when a transcript contains an SOS keyword."""

    keyword: str
    full_text: str
    timestamp: datetime
    type: str = "voice_sos"


def detect_sos_keyword(text: str) -> str | None:
    """Return the first SOS keyword found in a transcript, if any."""
    spoken = text.lower()
    for keyword in SOS_KEYWORDS:
        if keyword in spoken:
            return keyword
    return None


def classify_command(text: str) -> VoiceCommand:
    """Map a spoken command to an app action."""
    normalized = text.lower().strip()

    for action, words, confidence, message in COMMAND_RULES:
        if any(word in normalized for word in words):
            return VoiceCommand(action=action, confidence=confidence, message=message)

    return VoiceCommand(action="unknown", confidence=0.0, message="Command not recognized")


class SessionState(str, Enum):
    IDLE = "idle"
    LISTENING = "listening"


class VoiceCommandSession:
    """A single listening session with one SOS callback.

    start() and stop() are the only state transitions. Transcripts that arrive
    while idle are ignored.
    """

    def __init__(self) -> None:
        self.state = SessionState.IDLE
        self._callback: Callable[[SosTrigger], None] | None = None

    @property
    def is_listening(self) -> bool:
        return self.state is SessionState.LISTENING

    def start(self, callback: Callable[[SosTrigger], None]) -> bool:
        """Begin listening. Returns True; starting twice keeps the first callback."""
        if self.is_listening:
            logger.info("Voice session already listening")
            return True

        self._callback = callback
        self.state = SessionState.LISTENING
        logger.info("Voice session started")
        return True

    def stop(self) -> None:
        """Stop listening and drop the callback."""
        self._callback = None
        self.state = SessionState.IDLE
        logger.info("Voice session stopped")

    def handle_transcript(self, text: str, now: datetime | None = None) -> SosTrigger | None:
        """Feed a (partial or final) transcript to the session.

        Args:
            text: Recognised speech.
            now: Event time; defaults to the current time.

        Returns:
            The SosTrigger passed to the callback, or None if the session is
            idle or no keyword matched.
        """
        if not self.is_listening:
            return None

        keyword = detect_sos_keyword(text)
        if keyword is None:
            return None

        trigger = SosTrigger(keyword=keyword, full_text=text.lower(), timestamp=now or datetime.now())
        logger.warning("SOS voice command detected", keyword=keyword)

        if self._callback is not None:
            self._callback(trigger)

        return trigger
