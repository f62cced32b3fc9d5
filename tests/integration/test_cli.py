"""Integration tests for the command-line interface."""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from cli.commands.main import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for var in ["OPENAI_API_KEY", "ANTHROPIC_API_KEY", "CUSTOM_API_URL", "CUSTOM_API_KEY", "ANTHROPIC_API_BASE_URL"]:
        monkeypatch.delenv(var, raising=False)
    with patch("cli.commands.main.setup_logger") as setup_mock:
        yield setup_mock


def test_translate_writes_files(tmp_path, source_file, make_backend):
    backend = make_backend()
    out = tmp_path / "out"

    with patch("cli.commands.main.create_backend", return_value=backend) as factory:
        result = runner.invoke(app, ["translate", str(source_file), "-t", "en,kr", "-o", str(out), "-p", "openai"])

    assert result.exit_code == 0, result.output
    assert (out / "en.json").exists()
    assert (out / "kr.json").exists()
    assert json.loads((out / "kr.json").read_text(encoding="utf-8"))["common"]["ok"] == "ko:确定"
    assert factory.call_args.kwargs["provider"] == "openai"
    assert "Translation Summary" in result.output


def test_options_reach_orchestrator(tmp_path, source_file, make_backend):
    backend = make_backend()

    with patch("cli.commands.main.create_backend", return_value=backend), \
         patch("cli.commands.main.TranslationOrchestrator") as orchestrator_cls:
        orchestrator_cls.return_value.run.return_value.outcomes = {}
        orchestrator_cls.return_value.run.return_value.error_report_path = None
        orchestrator_cls.return_value.run.return_value.has_errors = False
        result = runner.invoke(app, [
            "translate", str(source_file), "-t", "ja",
            "--max-workers", "7", "--batch-size", "10", "--batch-delay", "0",
            "--max-retries", "5", "--retry-delay", "250", "--retry-multiplier", "2",
            "--timeout", "30000", "-s", "zh", "-m", "gpt-4o"
        ])

    assert result.exit_code == 0, result.output
    config = orchestrator_cls.call_args.args[1]
    assert config.max_workers == 7
    assert config.batch_size == 10
    assert config.batch_delay_ms == 0
    assert config.max_retries == 5
    assert config.retry_delay_ms == 250
    assert config.retry_multiplier == 2
    assert config.request_timeout_ms == 30000
    assert config.model == "gpt-4o"


def test_all_languages_failed_exits_nonzero(tmp_path, source_file, make_backend):
    backend = make_backend(fail_languages=["en"])

    with patch("cli.commands.main.create_backend", return_value=backend):
        result = runner.invoke(app, [
            "translate", str(source_file), "-t", "en", "-o", str(tmp_path / "out"),
            "--max-retries", "1", "--retry-delay", "0"
        ])

    assert result.exit_code == 1
    assert (tmp_path / "out" / "translation-errors.json").exists()


def test_partial_success_exits_zero(tmp_path, source_file, make_backend):
    backend = make_backend(fail_languages=["ja"])

    with patch("cli.commands.main.create_backend", return_value=backend):
        result = runner.invoke(app, [
            "translate", str(source_file), "-t", "en,ja", "-o", str(tmp_path / "out"),
            "--max-retries", "1", "--retry-delay", "0"
        ])

    assert result.exit_code == 0, result.output
    assert "Error report" in result.output


def test_targets_from_config_file(tmp_path, source_file, make_backend):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "target: [fr]\noutput_dir: {}\n".format(json.dumps(str(tmp_path / "cfg-out"))),
        encoding="utf-8"
    )

    with patch("cli.commands.main.create_backend", return_value=make_backend()):
        result = runner.invoke(app, ["translate", str(source_file), "--config", str(config_path)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "cfg-out" / "fr.json").exists()


def test_missing_input_file(tmp_path):
    result = runner.invoke(app, ["translate", str(tmp_path / "missing.json"), "-t", "en"])

    assert result.exit_code == 1
    assert "not found" in result.output


def test_no_targets(source_file):
    result = runner.invoke(app, ["translate", str(source_file)])

    assert result.exit_code == 1
    assert "No target languages" in result.output


def test_missing_api_key(source_file):
    result = runner.invoke(app, ["translate", str(source_file), "-t", "en", "-p", "openai"])

    assert result.exit_code == 1
    assert "OPENAI_API_KEY" in result.output


def test_unknown_provider(source_file):
    result = runner.invoke(app, ["translate", str(source_file), "-t", "en", "-p", "gemini"])

    assert result.exit_code == 1
    assert "Unsupported provider" in result.output


def test_invalid_numeric_option(source_file, make_backend):
    with patch("cli.commands.main.create_backend", return_value=make_backend()):
        result = runner.invoke(app, ["translate", str(source_file), "-t", "en", "--max-workers", "0"])

    assert result.exit_code == 1
    assert "max_workers" in result.output


def test_source_alias_translates(tmp_path, source_file, make_backend, isolated):
    backend = make_backend()
    out = tmp_path / "out"

    with patch("cli.commands.main.create_backend", return_value=backend):
        result = runner.invoke(app, ["translate", str(source_file), "-t", "en", "-s", "cn", "-o", str(out)])

    assert result.exit_code == 0, result.output
    translated = json.loads((out / "en.json").read_text(encoding="utf-8"))
    assert translated["common"]["ok"] == "en:确定"
    assert {request.source_lang for request in backend.requests} == {"zh"}
    isolated.return_value.info.assert_called_once()


def test_unsupported_source_language(source_file, make_backend, isolated):
    with patch("cli.commands.main.create_backend", return_value=make_backend()):
        result = runner.invoke(app, ["translate", str(source_file), "-t", "en", "-s", "xx"])

    assert result.exit_code == 1
    assert "Unsupported source language" in result.output
    assert "Configuration rejected" in isolated.return_value.error.call_args.args[0]


def test_invalid_json_input(tmp_path, make_backend):
    bad = tmp_path / "bad.json"
    bad.write_text("{oops", encoding="utf-8")

    with patch("cli.commands.main.create_backend", return_value=make_backend()):
        result = runner.invoke(app, ["translate", str(bad), "-t", "en"])

    assert result.exit_code == 1
    assert "Failed to read JSON" in result.output


def test_languages_command():
    result = runner.invoke(app, ["languages"])

    assert result.exit_code == 0
    assert "zh-TW" in result.output
    assert "Japanese" in result.output


def test_version_command():
    from i18ntrans import __version__

    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_config_writes_defaults(tmp_path):
    from i18ntrans.utils.config_loader import load_config

    result = runner.invoke(app, ["init-config"])

    assert result.exit_code == 0, result.output
    written = tmp_path / "i18n-translator.yaml"
    assert written.exists()

    config = load_config(str(written))
    assert config["source_lang"] == "zh"
    assert config["translation"]["max_workers"] == 3


def test_init_config_refuses_overwrite(tmp_path):
    target = tmp_path / "custom.yaml"
    target.write_text("provider: claude\n", encoding="utf-8")

    result = runner.invoke(app, ["init-config", str(target)])

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert target.read_text(encoding="utf-8") == "provider: claude\n"

    result = runner.invoke(app, ["init-config", str(target), "--force"])

    assert result.exit_code == 0, result.output
    assert "batch_size: 50" in target.read_text(encoding="utf-8")
