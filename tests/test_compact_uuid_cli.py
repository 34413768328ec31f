from __future__ import annotations

import json
import re

import pytest
from typer.testing import CliRunner

from compact_uuid import __version__
from compact_uuid.cli import app, main


runner = CliRunner()

_ANSI_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")

KNOWN_UUID = "5453b1ed-7bde-4a41-a76c-27f61ade5f73"
KNOWN_TEXT = "H2DX73XSkZc7NiVW3QYNes"


def _plain(s: str) -> str:
    return " ".join(_ANSI_RE.sub("", s).split())


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.setattr("compact_uuid.cli.load_dotenv", lambda *a, **k: True)
    monkeypatch.delenv("COMPACT_UUID_ALPHABET", raising=False)
    monkeypatch.delenv("COMPACT_UUID_PAD_LENGTH", raising=False)
    monkeypatch.delenv("COMPACT_UUID_STRICT", raising=False)


def test_encode_prints_encoded_payload():
    result = runner.invoke(app, ["encode", KNOWN_UUID.upper()])
    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed == {"kind": "compact-uuid.encode.v1", "uuid": KNOWN_UUID, "encoded": KNOWN_TEXT}


def test_encode_with_pad_length():
    result = runner.invoke(app, ["encode", KNOWN_UUID, "--pad-length", "25"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["encoded"] == "222" + KNOWN_TEXT


def test_root_pad_length_applies_to_commands():
    result = runner.invoke(app, ["--pad-length", "24", "encode", KNOWN_UUID])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["encoded"] == "22" + KNOWN_TEXT


def test_decode_prints_uuid():
    result = runner.invoke(app, ["decode", KNOWN_TEXT])
    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed["kind"] == "compact-uuid.decode.v1"
    assert parsed["uuid"] == KNOWN_UUID


def test_plain_json_is_single_line():
    result = runner.invoke(app, ["--plain-json", "decode", KNOWN_TEXT])
    assert result.exit_code == 0
    assert result.stdout.count("\n") == 1
    assert json.loads(result.stdout)["uuid"] == KNOWN_UUID


def test_name_auto_selects_url_namespace():
    result = runner.invoke(app, ["name", "input string", "--namespace", "url"])
    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed["namespace"] == "url"
    assert parsed["uuid"] == "4552de95-510d-5ab2-85a0-6f42ceacdb7e"

    auto = json.loads(runner.invoke(app, ["name", "https://example.com"]).stdout)
    assert auto["namespace"] == "url"
    dns = json.loads(runner.invoke(app, ["name", "example.com"]).stdout)
    assert dns["namespace"] == "dns"


def test_name_rejects_unknown_namespace():
    result = runner.invoke(app, ["name", "x", "--namespace", "isbn"])
    assert result.exit_code == 2
    assert "invalid --namespace" in _plain(result.output)


def test_random_respects_length():
    result = runner.invoke(app, ["random", "--length", "30"])
    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert len(parsed["encoded"]) == 30


def test_info_reports_custom_alphabet():
    result = runner.invoke(app, ["--alphabet", "9876543210", "info", "--num-bytes", "1"])
    assert result.exit_code == 0
    parsed = json.loads(result.stdout)
    assert parsed["alphabet"] == "0123456789"
    assert parsed["base"] == 10
    assert parsed["defaultPadLength"] == 20
    assert parsed["encodeLength"] == 3


def test_alphabet_from_env(monkeypatch):
    monkeypatch.setenv("COMPACT_UUID_ALPHABET", "ba")
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["alphabet"] == "ab"


def test_option_overrides_env_alphabet(monkeypatch):
    monkeypatch.setenv("COMPACT_UUID_ALPHABET", "ba")
    result = runner.invoke(app, ["--alphabet", "xyz", "info"])
    assert json.loads(result.stdout)["base"] == 3


def test_single_symbol_alphabet_is_usage_error():
    result = runner.invoke(app, ["--alphabet", "aaa", "info"])
    assert result.exit_code == 2
    assert "invalid alphabet" in _plain(result.output)


def test_strict_decode_from_env_fails(monkeypatch):
    monkeypatch.setenv("COMPACT_UUID_STRICT", "yes")
    result = runner.invoke(app, ["decode", KNOWN_TEXT[:-1] + "l"])
    assert result.exit_code == 2


def test_main_version(capsys):
    assert main(["--version"]) == 0
    assert f"compact-uuid {__version__}" in capsys.readouterr().out


def test_main_invalid_uuid_prints_command_help(capsys):
    code = main(["encode", "not-a-uuid"])
    captured = capsys.readouterr()
    combined = _plain(f"{captured.err}\n{captured.out}")
    assert code == 2
    assert "invalid UUID 'not-a-uuid'" in combined
    assert "Usage: compact-uuid encode" in combined


def test_main_strict_decode_reports_position(capsys):
    code = main(["--strict", "decode", KNOWN_TEXT[:-1] + "l"])
    captured = capsys.readouterr()
    assert code == 2
    combined = _plain(f"{captured.err}\n{captured.out}")
    assert "character 'l' at position 21 is not in the alphabet" in combined
    assert "Usage: compact-uuid decode" in combined


def test_main_permissive_decode_notes_substitution(capsys):
    code = main(["decode", KNOWN_TEXT[:-1] + "l"])
    captured = capsys.readouterr()
    assert code == 0
    assert "1 character(s) outside the alphabet" in _plain(captured.err)
    assert json.loads(captured.out)["uuid"]


def test_main_quiet_suppresses_note(capsys):
    code = main(["--quiet", "decode", KNOWN_TEXT[:-1] + "l"])
    captured = capsys.readouterr()
    assert code == 0
    assert captured.err == ""


def test_main_bad_pad_length_env(capsys, monkeypatch):
    monkeypatch.setenv("COMPACT_UUID_PAD_LENGTH", "wide")
    code = main(["encode", KNOWN_UUID])
    captured = capsys.readouterr()
    assert code == 2
    assert "invalid pad length from env COMPACT_UUID_PAD_LENGTH" in _plain(captured.err)


def test_main_unknown_command(capsys):
    code = main(["frobnicate"])
    captured = capsys.readouterr()
    assert code == 2
    assert "No such command 'frobnicate'" in _plain(f"{captured.err}\n{captured.out}")


def test_main_non_integer_pad_length(capsys):
    code = main(["--pad-length", "wide", "encode", KNOWN_UUID])
    captured = capsys.readouterr()
    assert code == 2
    assert "--pad-length" in _plain(f"{captured.err}\n{captured.out}")


def test_main_random_source_failure(capsys, monkeypatch):
    monkeypatch.setattr("compact_uuid.codec._uuid4_bytes", lambda: b"short")
    code = main(["random"])
    captured = capsys.readouterr()
    assert code == 1
    assert "random source failed" in _plain(captured.err)


def test_alphabet_env_keeps_surrounding_spaces(monkeypatch):
    monkeypatch.setenv("COMPACT_UUID_ALPHABET", " ab ")
    result = runner.invoke(app, ["info"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["alphabet"] == " ab"
