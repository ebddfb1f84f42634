from __future__ import annotations

import os
import subprocess

import pytest
from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError

from easy_korean import config_manager as cfg
from easy_korean.audio import SpeechService
from easy_korean.audio.backends import (
    GTTSSpeechProvider,
    GeminiSpeechProvider,
    NativeSpeechProvider,
    create_backend,
    get_speech_provider,
)
from easy_korean.errors import AuthError, SpeechError
from easy_korean.lookup_cache import SessionCache


def test_create_backend_resolves_aliases():
    assert isinstance(create_backend("gtts"), GTTSSpeechProvider)
    assert isinstance(create_backend("macos"), NativeSpeechProvider)
    assert isinstance(create_backend("GEMINI"), GeminiSpeechProvider)


def test_create_backend_rejects_unknown_name():
    with pytest.raises(KeyError):
        create_backend("espeak")


def test_auto_backend_follows_platform(monkeypatch):
    monkeypatch.setattr("easy_korean.config_manager.settings.sys.platform", "linux")

    assert isinstance(create_backend("auto"), GTTSSpeechProvider)


def test_get_speech_provider_prefers_config_override():
    cfg.set_settings(cfg.EasyKoreanSettings(speech_backend="gtts"))

    assert isinstance(get_speech_provider({"speech_backend": "gemini"}), GeminiSpeechProvider)
    assert isinstance(get_speech_provider(), GTTSSpeechProvider)


def test_get_speech_provider_applies_executable_override():
    provider = get_speech_provider({"speech_backend": "native", "native_executable_path": "/custom/say"})

    assert isinstance(provider, NativeSpeechProvider)
    assert provider.executable_path == "/custom/say"


def test_native_command_uses_korean_voice_and_slower_rate():
    provider = NativeSpeechProvider(executable_path="/usr/bin/say", voice="Yuna", rate=0.9)

    assert provider.build_command("안녕", "/tmp/out.aiff") == [
        "/usr/bin/say",
        "-v",
        "Yuna",
        "-r",
        "158",
        "-o",
        "/tmp/out.aiff",
        "안녕",
    ]


def test_native_synthesis_reads_output_and_removes_temp_file(monkeypatch):
    invoked = []
    dummy_audio = AudioSegment.silent(duration=50)

    def fake_run(command, **kwargs):
        invoked.append(command)
        assert kwargs["check"] is True

    def fake_from_file(path, format):
        assert format == "aiff"
        return dummy_audio

    monkeypatch.setattr("easy_korean.audio.backends.native.subprocess.run", fake_run)
    monkeypatch.setattr("easy_korean.audio.backends.native.AudioSegment.from_file", fake_from_file)

    result = NativeSpeechProvider(executable_path="/usr/bin/say").synthesize("안녕하세요")

    assert result is dummy_audio
    destination = invoked[0][invoked[0].index("-o") + 1]
    assert not os.path.exists(destination)


def test_native_failure_is_wrapped(monkeypatch):
    def failing_run(command, **kwargs):
        raise subprocess.CalledProcessError(1, command, stderr="voice not installed")

    monkeypatch.setattr("easy_korean.audio.backends.native.subprocess.run", failing_run)

    with pytest.raises(SpeechError):
        NativeSpeechProvider().synthesize("안녕")


class FakeSpeechClient:
    def __init__(self, replies):
        self.replies = list(replies)
        self.voices = []

    def generate_speech(self, *, model, text, voice=None):
        self.voices.append(voice)
        reply = self.replies.pop(0)
        if isinstance(reply, BaseException):
            raise reply
        return reply


def test_gemini_retries_without_voice_when_no_audio():
    client = FakeSpeechClient([None, b"\x00\x00" * 240])
    provider = GeminiSpeechProvider(client_factory=lambda: client, model="tts", voice="Kore")

    audio = provider.synthesize("안녕")

    assert client.voices == ["Kore", None]
    assert audio.frame_rate == 24000
    assert len(audio) == 10


def test_gemini_without_audio_after_retry_fails():
    client = FakeSpeechClient([None, b""])
    provider = GeminiSpeechProvider(client_factory=lambda: client, model="tts", voice="Kore")

    with pytest.raises(SpeechError):
        provider.synthesize("안녕")


def test_gemini_provider_errors_become_speech_errors():
    client = FakeSpeechClient([RuntimeError("503 UNAVAILABLE")])
    provider = GeminiSpeechProvider(client_factory=lambda: client, model="tts")

    with pytest.raises(SpeechError):
        provider.synthesize("안녕")


def test_gemini_without_credentials_fails_as_speech_error():
    def no_key():
        raise AuthError("API Key is missing.")

    with pytest.raises(SpeechError):
        GeminiSpeechProvider(client_factory=no_key).synthesize("안녕")


def test_gtts_requests_korean(monkeypatch):
    created = []

    class FakeGTTS:
        def __init__(self, text, lang):
            created.append((text, lang))

        def write_to_fp(self, handle):
            handle.write(b"mp3-bytes")

    dummy_audio = AudioSegment.silent(duration=20)
    monkeypatch.setattr("easy_korean.audio.backends.gtts.gTTS", FakeGTTS)
    monkeypatch.setattr(
        "easy_korean.audio.backends.gtts.AudioSegment.from_file",
        lambda handle, format: dummy_audio,
    )

    assert GTTSSpeechProvider().synthesize("안녕") is dummy_audio
    assert created == [("안녕", "ko")]


def _undecodable(handle, format):
    raise CouldntDecodeError(f"Decoding failed. ffmpeg returned error code: 1 ({format})")


def test_gtts_undecodable_reply_is_wrapped(monkeypatch):
    class GarbageGTTS:
        def __init__(self, text, lang):
            pass

        def write_to_fp(self, handle):
            handle.write(b"not an mp3 at all")

    monkeypatch.setattr("easy_korean.audio.backends.gtts.gTTS", GarbageGTTS)
    monkeypatch.setattr("easy_korean.audio.backends.gtts.AudioSegment.from_file", _undecodable)

    with pytest.raises(SpeechError):
        GTTSSpeechProvider().synthesize("안녕")

    cache = SessionCache()
    with pytest.raises(SpeechError):
        SpeechService(GTTSSpeechProvider(), cache=cache).speak("안녕")
    assert len(cache) == 0


def test_native_undecodable_output_is_wrapped(monkeypatch):
    monkeypatch.setattr("easy_korean.audio.backends.native.subprocess.run", lambda command, **kwargs: None)
    monkeypatch.setattr("easy_korean.audio.backends.native.AudioSegment.from_file", _undecodable)

    with pytest.raises(SpeechError):
        NativeSpeechProvider(executable_path="/usr/bin/say").synthesize("안녕")
