"""Configuration loading and management."""

import copy
import os
from pathlib import Path
from typing import Dict, Any, Optional

import yaml
from dotenv import load_dotenv

from i18ntrans.core.exceptions import ConfigurationError
from i18ntrans.core.orchestrator import OrchestratorConfig

DEFAULT_CONFIG_PATHS = [
    Path("i18n-translator.yaml"),
    Path("configs/default.yaml"),
]


def get_default_config() -> Dict[str, Any]:
    """Get default configuration."""
    return {
        "provider": "openai",
        "model": None,
        "source_lang": "zh",
        "target": [],
        "output_dir": "./translations",
        "translation": {
            "max_workers": 3,
            "batch_size": 50,
            "batch_delay": 2000,
            "max_retries": 3,
            "retry_delay": 2000,
            "retry_multiplier": 1.5,
            "request_timeout": None,
        },
        "api_keys": {
            "openai": "",
            "anthropic": "",
        },
        "custom": {
            "api_url": "",
            "api_key": "",
            "format": "openai",
        },
        "anthropic_base_url": None,
        "logging": {
            "level": "INFO",
            "file": None,
        },
    }


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None, env_file: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file, then apply environment overrides.

    Args:
        config_path: Path to config file (defaults to the first of DEFAULT_CONFIG_PATHS that exists)
        env_file: Optional .env file; the current directory's .env is used otherwise

    Returns:
        Configuration dictionary
    """
    load_dotenv(env_file) if env_file else load_dotenv()

    config = get_default_config()

    if config_path is None:
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                config_path = str(path)
                break

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path, 'r', encoding='utf-8') as f:
            try:
                loaded = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(loaded, dict):
            raise ConfigurationError(f"Config file {path} must contain a mapping")
        config = _deep_merge(config, loaded)

    return override_with_env(config)


def save_config(config: Dict[str, Any], config_path: str) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Output path
    """
    config_path = Path(config_path)
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, 'w', encoding='utf-8') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def override_with_env(config: Dict[str, Any]) -> Dict[str, Any]:
    """Override config with environment variables."""
    env_mappings = {
        "OPENAI_API_KEY": ["api_keys", "openai"],
        "ANTHROPIC_API_KEY": ["api_keys", "anthropic"],
        "CUSTOM_API_URL": ["custom", "api_url"],
        "CUSTOM_API_KEY": ["custom", "api_key"],
        "ANTHROPIC_API_BASE_URL": ["anthropic_base_url"],
    }

    for env_var, path in env_mappings.items():
        value = os.getenv(env_var)
        if value:
            current = config
            for key in path[:-1]:
                if not isinstance(current.get(key), dict):
                    current[key] = {}
                current = current[key]
            current[path[-1]] = value

    return config


def _number(section: Dict[str, Any], key: str, cast):
    value = section.get(key)
    if value is None:
        return None
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Invalid value for {key}: {value!r}",
            config_key=key,
            invalid_value=value
        ) from e


def build_orchestrator_config(config: Dict[str, Any]) -> OrchestratorConfig:
    """Translate a loaded configuration dictionary into an OrchestratorConfig."""
    section = config.get("translation") or {}
    defaults = OrchestratorConfig()

    values = {
        "max_workers": _number(section, "max_workers", int),
        "batch_size": _number(section, "batch_size", int),
        "batch_delay_ms": _number(section, "batch_delay", float),
        "max_retries": _number(section, "max_retries", int),
        "retry_delay_ms": _number(section, "retry_delay", float),
        "retry_multiplier": _number(section, "retry_multiplier", float),
    }

    orchestrator_config = OrchestratorConfig(
        source_lang=config.get("source_lang") or defaults.source_lang,
        model=config.get("model"),
        request_timeout_ms=_number(section, "request_timeout", float),
        **{key: value for key, value in values.items() if value is not None}
    )

    issues = orchestrator_config.validate()
    if issues:
        raise ConfigurationError(f"Invalid configuration: {'; '.join(issues)}")

    return orchestrator_config


def backend_settings(config: Dict[str, Any]) -> Dict[str, Any]:
    """Keyword arguments for ``create_backend`` from a loaded configuration."""
    provider = (config.get("provider") or "openai").lower()
    api_keys = config.get("api_keys") or {}
    custom = config.get("custom") or {}

    settings: Dict[str, Any] = {
        "provider": provider,
        "model": config.get("model"),
    }

    if provider == "openai":
        settings["api_key"] = api_keys.get("openai") or None
    elif provider in ("claude", "anthropic"):
        settings["api_key"] = api_keys.get("anthropic") or None
        settings["base_url"] = config.get("anthropic_base_url") or None
    elif provider == "custom":
        settings["api_key"] = custom.get("api_key") or None
        settings["api_url"] = custom.get("api_url") or None
        settings["api_format"] = custom.get("format") or "openai"

    timeout = (config.get("translation") or {}).get("request_timeout")
    if timeout:
        settings["timeout"] = float(timeout) / 1000

    return settings
