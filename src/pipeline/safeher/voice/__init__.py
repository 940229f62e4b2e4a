"""Voice command interpretation."""

from safeher.voice.commands import (
    SessionState,
    SosTrigger,
    VoiceCommand,
    VoiceCommandSession,
    classify_command,
    detect_sos_keyword,
)

__all__ = [
    "classify_command",
    "detect_sos_keyword",
    "VoiceCommand",
    "VoiceCommandSession",
    "SessionState",
    "SosTrigger",
]
