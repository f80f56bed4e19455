import pytest

from mender.agents.sre_team.sandbox import LanguageProfile
from mender.config.config import DEFAULTS, RepairSettings, load_config, load_groq_api_key
from mender.errors import ConfigError


def test_yaml_overrides_merge_with_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("loop:\n  max_attempts: 9\nmodel:\n  id: some-model\n")

    config = load_config(path)

    assert config["loop"]["max_attempts"] == 9
    assert config["loop"]["max_patch_retries"] == DEFAULTS["loop"]["max_patch_retries"]
    assert config["model"]["id"] == "some-model"
    assert config["model"]["temperature"] == DEFAULTS["model"]["temperature"]


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_config(path) == DEFAULTS


def test_explicit_missing_path_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "absent.yaml")


def test_env_config_path(tmp_path, monkeypatch):
    path = tmp_path / "custom.yaml"
    path.write_text("loop:\n  max_attempts: 2\n")
    monkeypatch.setenv("MENDER_CONFIG", str(path))
    assert load_config()["loop"]["max_attempts"] == 2


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("loop: [unclosed\n")
    with pytest.raises(ConfigError):
        load_config(path)


def test_settings_from_config():
    settings = RepairSettings.from_config({
        "loop": {"max_attempts": None, "max_patch_retries": 0},
        "languages": {"rb": {"interpreter": "ruby", "failure_marker": "Error"}},
    })
    assert settings.max_attempts is None
    assert settings.max_patch_retries == 0
    assert settings.profiles == {".rb": LanguageProfile(interpreter="ruby", failure_marker="Error")}


@pytest.mark.parametrize("loop", [
    {"max_attempts": 0},
    {"max_attempts": "many"},
    {"max_patch_retries": -1},
])
def test_invalid_loop_settings_raise(loop):
    with pytest.raises(ConfigError):
        RepairSettings.from_config({"loop": loop})


def test_language_profile_needs_marker():
    with pytest.raises(ConfigError):
        RepairSettings.from_config({"languages": {".rb": {"interpreter": "ruby"}}})


def test_groq_api_key(monkeypatch):
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    assert load_groq_api_key() == "gsk-test"
    monkeypatch.delenv("GROQ_API_KEY")
    with pytest.raises(ConfigError):
        load_groq_api_key()
