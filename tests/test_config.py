from pathlib import Path

import pytest
import tomli

from sclipt.config import (
    DEFAULT_SENTINEL,
    get_config_path,
    get_storage_path,
    load_config,
)


def write_config(text):
    path = get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_defaults_without_file(tmp_path):
    config = load_config()
    assert config["input"]["sentinel"] == DEFAULT_SENTINEL
    assert config["display"]["color"] is True
    assert config["storage"]["path"] == str(tmp_path / "home" / "snippets.json")


def test_file_overrides_per_key():
    write_config('[input]\nsentinel = "EOF"\n\n[display]\ncolor = false\n')
    config = load_config()
    assert config["input"]["sentinel"] == "EOF"
    assert config["display"]["color"] is False
    assert config["logging"]["level"] == "WARNING"


def test_malformed_config_raises():
    write_config("[input\nsentinel = ")
    with pytest.raises(tomli.TOMLDecodeError):
        load_config()


class TestStoragePath:
    def test_override_wins(self, monkeypatch):
        monkeypatch.setenv("SCLIPT_FILE", "/env/snippets.json")
        assert get_storage_path(load_config(), "/cli/s.json") == Path("/cli/s.json")

    def test_env_file_beats_config(self, monkeypatch):
        monkeypatch.setenv("SCLIPT_FILE", "/env/snippets.json")
        write_config('[storage]\npath = "/cfg/snippets.json"\n')
        assert get_storage_path(load_config()) == Path("/env/snippets.json")

    def test_config_path(self):
        write_config('[storage]\npath = "/cfg/snippets.json"\n')
        assert get_storage_path(load_config()) == Path("/cfg/snippets.json")

    def test_falls_back_to_home(self, tmp_path):
        assert get_storage_path({}) == tmp_path / "home" / "snippets.json"


@pytest.mark.parametrize("text,message", [
    ("[input]\nsentinel = 5\n", "input.sentinel must be a str"),
    ('[input]\nsentinel = "  "\n', "input.sentinel must not be empty"),
    ('input = "x"\n', r"\[input\] must be a table"),
    ('[display]\ncolor = "yes"\n', "display.color must be a bool"),
    ("[storage]\npath = 3\n", "storage.path must be a str"),
])
def test_wrongly_typed_values_raise(text, message):
    write_config(text)
    with pytest.raises(ValueError, match=message):
        load_config()
