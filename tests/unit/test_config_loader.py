"""Unit tests for configuration loading."""

import os

import pytest
import yaml

from i18ntrans.core.exceptions import ConfigurationError
from i18ntrans.utils.config_loader import (
    backend_settings,
    build_orchestrator_config,
    get_default_config,
    load_config,
    override_with_env,
    save_config,
)

ENV_VARS = [
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "CUSTOM_API_URL",
    "CUSTOM_API_KEY",
    "ANTHROPIC_API_BASE_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    # Private copy of the environment so .env loading cannot leak between tests
    environ = os.environ.copy()
    for var in ENV_VARS:
        environ.pop(var, None)
    monkeypatch.setattr(os, "environ", environ)
    # Keep default config discovery away from the developer's files
    monkeypatch.chdir(tmp_path)


def test_defaults():
    config = get_default_config()

    assert config["source_lang"] == "zh"
    assert config["translation"]["max_workers"] == 3
    assert config["translation"]["batch_delay"] == 2000
    assert config["output_dir"] == "./translations"


def test_load_without_file_returns_defaults():
    assert load_config() == get_default_config()


def test_yaml_merged_over_defaults(tmp_path):
    path = tmp_path / "custom.yaml"
    path.write_text(yaml.dump({
        "provider": "claude",
        "target": ["en", "ja"],
        "translation": {"max_workers": 8}
    }), encoding="utf-8")

    config = load_config(str(path))

    assert config["provider"] == "claude"
    assert config["target"] == ["en", "ja"]
    assert config["translation"]["max_workers"] == 8
    assert config["translation"]["max_retries"] == 3


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "nope.yaml"))


def test_invalid_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("provider: [unclosed", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_non_mapping_yaml(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- en\n- ja\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("CUSTOM_API_URL", "https://llm.example.com/v1/chat/completions")
    monkeypatch.setenv("ANTHROPIC_API_BASE_URL", "https://gateway.example.com/v1")

    config = override_with_env(get_default_config())

    assert config["api_keys"]["openai"] == "sk-env"
    assert config["custom"]["api_url"] == "https://llm.example.com/v1/chat/completions"
    assert config["anthropic_base_url"] == "https://gateway.example.com/v1"


def test_dotenv_file_loaded(tmp_path):
    env_file = tmp_path / "test.env"
    env_file.write_text("ANTHROPIC_API_KEY=sk-ant-dotenv\n", encoding="utf-8")

    config = load_config(env_file=str(env_file))

    assert config["api_keys"]["anthropic"] == "sk-ant-dotenv"


def test_save_and_reload(tmp_path):
    config = get_default_config()
    config["target"] = ["en", "kr"]
    path = tmp_path / "nested" / "config.yaml"

    save_config(config, str(path))

    assert load_config(str(path))["target"] == ["en", "kr"]


def test_build_orchestrator_config():
    config = get_default_config()
    config["source_lang"] = "en"
    config["model"] = "gpt-4o"
    config["translation"].update({"max_workers": "5", "retry_delay": 500, "request_timeout": 30000})

    orchestrator_config = build_orchestrator_config(config)

    assert orchestrator_config.source_lang == "en"
    assert orchestrator_config.model == "gpt-4o"
    assert orchestrator_config.max_workers == 5
    assert orchestrator_config.retry_delay_ms == 500
    assert orchestrator_config.request_timeout_ms == 30000
    assert orchestrator_config.batch_size == 50


def test_build_orchestrator_config_rejects_bad_values():
    config = get_default_config()
    config["translation"]["max_workers"] = "many"

    with pytest.raises(ConfigurationError) as exc_info:
        build_orchestrator_config(config)
    assert exc_info.value.config_key == "max_workers"

    config["translation"]["max_workers"] = 0
    with pytest.raises(ConfigurationError):
        build_orchestrator_config(config)


def test_backend_settings_per_provider():
    config = get_default_config()
    config["api_keys"] = {"openai": "sk-o", "anthropic": "sk-a"}
    config["custom"] = {"api_url": "https://x.example/v1", "api_key": "ck", "format": "claude"}

    assert backend_settings(config)["api_key"] == "sk-o"

    config["provider"] = "claude"
    config["anthropic_base_url"] = "https://gw.example"
    settings = backend_settings(config)
    assert settings["api_key"] == "sk-a"
    assert settings["base_url"] == "https://gw.example"

    config["provider"] = "custom"
    config["translation"]["request_timeout"] = 15000
    settings = backend_settings(config)
    assert settings["api_url"] == "https://x.example/v1"
    assert settings["api_format"] == "claude"
    assert settings["timeout"] == 15.0
