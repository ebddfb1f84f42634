from __future__ import annotations

import io
import json

import pytest
from pydub import AudioSegment

from easy_korean import config_manager as cfg
from easy_korean import llm_client
from easy_korean.audio import BaseSpeechProvider
from easy_korean.cli import commands
from easy_korean.cli.args import parse_cli_args
from easy_korean.cli.main import run_cli
from easy_korean.lookup_cache import PREFERENCE_KEY, build_cache_key

from tests.helpers.fakes import ProviderError, entry_payload, fake_genai_client


@pytest.fixture
def storage_path(tmp_path):
    return tmp_path / "storage.json"


@pytest.fixture
def sdk(monkeypatch):
    client = fake_genai_client({}, default=entry_payload())
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setattr(llm_client.genai, "Client", lambda **_: client)
    return client


def _run(argv):
    out = io.StringIO()
    code = run_cli(argv, out=out)
    return code, out.getvalue()


def _stored(path):
    return json.loads(path.read_text(encoding="utf-8"))


def test_parser_requires_a_sub_command():
    with pytest.raises(SystemExit):
        parse_cli_args([])


def test_lookup_prints_entry_and_caches_it(sdk, storage_path):
    code, output = _run(["lookup", "안녕", "--language", "English", "--storage-path", str(storage_path)])

    assert code == 0
    assert json.loads(output)["word"] == "안녕"
    assert build_cache_key("안녕", "English") in _stored(storage_path)


def test_lookup_without_language_uses_saved_preference(sdk, storage_path):
    code, _ = _run(["lookup", "안녕", "--storage-path", str(storage_path)])

    stored = _stored(storage_path)
    assert code == 0
    assert stored[PREFERENCE_KEY] == "한국어 (Korean)"
    assert build_cache_key("안녕", "한국어 (Korean)") in stored


def test_lookup_failure_exits_with_status_one(sdk, storage_path):
    sdk.models.default = ProviderError("API key not valid. Please pass a valid API key.")

    code, output = _run(["lookup", "안녕", "-l", "English", "--storage-path", str(storage_path)])

    assert code == 1
    assert output == ""
    assert len(sdk.models.calls) == 1


def test_daily_prints_entry(sdk, storage_path):
    code, output = _run(["daily", "--language", "English", "--storage-path", str(storage_path)])

    assert code == 0
    assert json.loads(output)["examples"]
    assert "beginner Korean word" in sdk.models.calls[0].contents


def test_language_shows_and_updates_preference(storage_path):
    assert _run(["language", "--storage-path", str(storage_path)]) == (0, "한국어 (Korean)\n")
    assert _run(["language", "English", "--storage-path", str(storage_path)]) == (0, "English\n")
    assert _run(["language", "--storage-path", str(storage_path)]) == (0, "English\n")


def test_language_list_shows_selector_options(storage_path):
    code, output = _run(["language", "--list", "--storage-path", str(storage_path)])

    assert code == 0
    assert output.splitlines() == list(cfg.SUPPORTED_LANGUAGES)


class SilentProvider(BaseSpeechProvider):
    name = "silent"

    def synthesize(self, text):
        return AudioSegment.silent(duration=10)


def test_speak_writes_audio_file(monkeypatch, tmp_path):
    requested = []

    def fake_create_backend(name, **kwargs):
        requested.append(name)
        return SilentProvider()

    monkeypatch.setattr(commands, "create_backend", fake_create_backend)
    destination = tmp_path / "hello.wav"

    code, output = _run(["speak", "안녕", "--output", str(destination), "--backend", "gtts"])

    assert code == 0
    assert output.strip() == str(destination)
    assert destination.exists()
    assert requested == ["gtts"]


def test_speak_rejects_blank_text(monkeypatch, tmp_path):
    monkeypatch.setattr(commands, "create_backend", lambda name, **kwargs: SilentProvider())

    code, _ = _run(["speak", "  ", "--output", str(tmp_path / "x.wav")])

    assert code == 1
