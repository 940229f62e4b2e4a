"""Tests for voice command interpretation and the listening session."""

from datetime import datetime

import pytest

from safeher.voice import (
    SessionState,
    SosTrigger,
    VoiceCommandSession,
    classify_command,
    detect_sos_keyword,
)

NOW = datetime(2024, 6, 15, 23, 30)


class TestSosKeywords:

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Please HELP me", "help"),
            ("I think I'm being followed", "follow"),
            ("this feels dangerous", "danger"),
            ("call 911 now", "call 911"),
            ("SOS", "sos"),
            ("what a lovely evening", None),
            ("", None),
        ],
    )
    def test_detection(self, text, expected):
        assert detect_sos_keyword(text) == expected


class TestClassifyCommand:

    @pytest.mark.parametrize(
        "text, action, confidence",
        [
            ("Help!", "emergency", 0.9),
            ("  EMERGENCY  ", "emergency", 0.9),
            ("where am I", "share_location", 0.8),
            ("send my location", "share_location", 0.8),
            ("I'm okay", "safety_checkin", 0.7),
            ("phone mom", "call_contact", 0.8),
            ("play some music", "unknown", 0.0),
        ],
    )
    def test_actions(self, text, action, confidence):
        command = classify_command(text)
        assert command.action == action
        assert command.confidence == confidence

    def test_unknown_message(self):
        assert classify_command("hmm").message == "Command not recognized"


class TestVoiceCommandSession:

    def test_starts_idle(self):
        session = VoiceCommandSession()
        assert session.state is SessionState.IDLE
        assert not session.is_listening

    def test_idle_session_ignores_transcripts(self):
        session = VoiceCommandSession()
        assert session.handle_transcript("help me", now=NOW) is None

    def test_trigger_invokes_callback(self):
        received = []
        session = VoiceCommandSession()
        assert session.start(received.append) is True

        trigger = session.handle_transcript("somebody help me", now=NOW)

        assert trigger == SosTrigger(keyword="help", full_text="somebody help me", timestamp=NOW)
        assert trigger.type == "voice_sos"
        assert received == [trigger]

    def test_trigger_keeps_lowercased_transcript(self):
        session = VoiceCommandSession()
        session.start(lambda trigger: None)

        trigger = session.handle_transcript("Somebody HELP Me", now=NOW)

        assert trigger.full_text == "somebody help me"

    def test_no_keyword_no_callback(self):
        received = []
        session = VoiceCommandSession()
        session.start(received.append)

        assert session.handle_transcript("turn left at the corner", now=NOW) is None
        assert received == []

    def test_second_start_keeps_first_callback(self):
        first, second = [], []
        session = VoiceCommandSession()
        session.start(first.append)
        assert session.start(second.append) is True

        session.handle_transcript("emergency", now=NOW)

        assert len(first) == 1
        assert second == []

    def test_stop_returns_to_idle(self):
        received = []
        session = VoiceCommandSession()
        session.start(received.append)
        session.stop()

        assert session.state is SessionState.IDLE
        assert session.handle_transcript("help", now=NOW) is None
        assert received == []

    def test_sessions_are_independent(self):
        a_events, b_events = [], []
        a, b = VoiceCommandSession(), VoiceCommandSession()
        a.start(a_events.append)
        b.start(b_events.append)

        a.handle_transcript("help", now=NOW)
        b.stop()

        assert len(a_events) == 1
        assert b_events == []
        assert a.is_listening
