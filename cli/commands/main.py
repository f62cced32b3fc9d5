"""Main CLI interface using Typer."""

import typer
from pathlib import Path
from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn, TimeElapsedColumn
from rich.table import Table

from i18ntrans import __version__
from i18ntrans.core.exceptions import ConfigurationError, I18nTransError
from i18ntrans.core.languages import LANGUAGE_ALIASES, SUPPORTED_LANGUAGES, parse_language_list
from i18ntrans.core.models import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_PARTIAL,
    RunReport,
    TranslationCompleteEvent,
    TranslationErrorEvent,
    TranslationProgressEvent,
)
from i18ntrans.core.orchestrator import TranslationOrchestrator
from i18ntrans.translation.backends import PROVIDERS, create_backend
from i18ntrans.utils.config_loader import (
    backend_settings,
    build_orchestrator_config,
    get_default_config,
    load_config,
    save_config,
)
from i18ntrans.utils.logger import setup_logger

app = typer.Typer(
    name="i18n-json-translator",
    help="AI translation of JSON i18n files into multiple languages",
    add_completion=False
)

console = Console()


def _apply_overrides(config: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Write non-None CLI values into the loaded config. Keys are dotted paths."""
    for dotted, value in overrides.items():
        if value is None:
            continue
        keys = dotted.split(".")
        section = config
        for key in keys[:-1]:
            if not isinstance(section.get(key), dict):
                section[key] = {}
            section = section[key]
        section[keys[-1]] = value
    return config


def _resolve_targets(target: Optional[str], config: Dict[str, Any]) -> List[str]:
    if target:
        return parse_language_list(target)
    configured = config.get("target") or []
    if isinstance(configured, str):
        return parse_language_list(configured)
    return parse_language_list(",".join(str(code) for code in configured))


@app.command()
def translate(
    input_file: Path = typer.Argument(..., help="Source JSON file (e.g. locales/zh.json)"),
    target: Optional[str] = typer.Option(None, "-t", "--target", help="Comma-separated target languages (e.g. en,ja,kr)"),
    provider: Optional[str] = typer.Option(None, "-p", "--provider", help=f"AI provider ({'/'.join(PROVIDERS)})"),
    model: Optional[str] = typer.Option(None, "-m", "--model", help="Model name (e.g., gpt-4o, claude-3-5-sonnet-20241022)"),
    output_dir: Optional[Path] = typer.Option(None, "-o", "--output", help="Output directory (default: ./translations)"),
    source_lang: Optional[str] = typer.Option(None, "-s", "--source", help="Source language (default: zh)"),
    config_file: Optional[Path] = typer.Option(None, "-c", "--config", help="YAML configuration file"),
    max_workers: Optional[int] = typer.Option(None, "--max-workers", help="Concurrent requests per language (default: 3)"),
    batch_size: Optional[int] = typer.Option(None, "--batch-size", help="Tasks per batch (default: 50)"),
    batch_delay: Optional[float] = typer.Option(None, "--batch-delay", help="Delay between batches in ms (default: 2000)"),
    max_retries: Optional[int] = typer.Option(None, "--max-retries", help="Attempts per string (default: 3)"),
    retry_delay: Optional[float] = typer.Option(None, "--retry-delay", help="Initial retry delay in ms (default: 2000)"),
    retry_multiplier: Optional[float] = typer.Option(None, "--retry-multiplier", help="Retry delay multiplier (default: 1.5)"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in ms"),
    custom_api_url: Optional[str] = typer.Option(None, "--custom-api-url", help="Endpoint for the custom provider"),
    custom_api_key: Optional[str] = typer.Option(None, "--custom-api-key", help="API key for the custom provider"),
    custom_api_format: Optional[str] = typer.Option(None, "--custom-api-format", help="Custom API format (openai/claude)"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level (DEBUG/INFO/WARNING/ERROR)"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Also write logs to this file"),
):
    """Translate a JSON i18n file into one or more languages."""

    if not input_file.exists():
        console.print(f"[red]Error: Input file not found: {input_file}[/red]")
        raise typer.Exit(1)

    try:
        config = load_config(str(config_file) if config_file else None)
    except (FileNotFoundError, ConfigurationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _apply_overrides(config, {
        "provider": provider,
        "model": model,
        "source_lang": source_lang,
        "output_dir": str(output_dir) if output_dir else None,
        "translation.max_workers": max_workers,
        "translation.batch_size": batch_size,
        "translation.batch_delay": batch_delay,
        "translation.max_retries": max_retries,
        "translation.retry_delay": retry_delay,
        "translation.retry_multiplier": retry_multiplier,
        "translation.request_timeout": timeout,
        "custom.api_url": custom_api_url,
        "custom.api_key": custom_api_key,
        "custom.format": custom_api_format,
        "logging.level": log_level,
        "logging.file": str(log_file) if log_file else None,
    })

    logging_config = config.get("logging") or {}
    log = setup_logger(level=logging_config.get("level") or "INFO", log_file=logging_config.get("file"))

    targets = _resolve_targets(target, config)
    if not targets:
        console.print("[red]Error: No target languages given. Use -t en,ja,kr[/red]")
        raise typer.Exit(1)

    try:
        orchestrator_config = build_orchestrator_config(config)
        backend = create_backend(**backend_settings(config))
    except ConfigurationError as e:
        log.error(f"Configuration rejected: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    destination = Path(config.get("output_dir") or "./translations")

    console.print(f"[bold blue]i18n JSON Translation[/bold blue]")
    console.print(f"Input: {input_file}")
    console.print(f"Output: {destination}")
    console.print(f"Translation: {orchestrator_config.source_lang} → {', '.join(targets)}")
    console.print(f"Provider: {config.get('provider')}" + (f" ({config.get('model')})" if config.get("model") else ""))
    console.print(
        f"Workers: {orchestrator_config.max_workers}, retries: {orchestrator_config.max_retries}, "
        f"batch: {orchestrator_config.batch_size}\n"
    )

    log.info(f"Translating {input_file} to {', '.join(targets)} with {config.get('provider')}")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=30),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=False
        ) as progress:
            progress_tasks: Dict[str, Any] = {}

            def progress_callback(event):
                if isinstance(event, TranslationProgressEvent):
                    if event.language not in progress_tasks:
                        progress_tasks[event.language] = progress.add_task(
                            f"[cyan]Translating {event.language}...", total=event.total
                        )
                    progress.update(progress_tasks[event.language], completed=event.current)
                elif isinstance(event, TranslationCompleteEvent):
                    if event.language not in progress_tasks:
                        progress_tasks[event.language] = progress.add_task("", total=1, completed=1)
                    progress.update(progress_tasks[event.language], description=f"[green]✓ {event.language}")
                elif isinstance(event, TranslationErrorEvent):
                    if event.language in progress_tasks:
                        progress.update(progress_tasks[event.language], description=f"[red]✗ {event.language}")
                    else:
                        progress.add_task(f"[red]✗ {event.language}", total=1)

            orchestrator = TranslationOrchestrator(
                backend,
                orchestrator_config,
                progress_callback=progress_callback
            )
            report = orchestrator.run(input_file, destination, targets)

    except I18nTransError as e:
        log.error(f"Translation run aborted: {e}")
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    _display_summary(report)

    if report.outcomes and all(o.status == STATUS_FAILED for o in report.outcomes.values()):
        raise typer.Exit(1)


@app.command("init-config")
def init_config(
    path: Path = typer.Argument(Path("i18n-translator.yaml"), help="Where to write the configuration"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing file"),
):
    """Write the default configuration to a YAML file."""

    if path.exists() and not force:
        console.print(f"[red]Error: Config file already exists: {path} (use --force to overwrite)[/red]")
        raise typer.Exit(1)

    save_config(get_default_config(), str(path))
    console.print(f"[green]✓ Wrote default configuration to {path}[/green]")


@app.command()
def languages():
    """List supported target languages and accepted aliases."""

    aliases_by_code: Dict[str, List[str]] = {}
    for alias, code in LANGUAGE_ALIASES.items():
        aliases_by_code.setdefault(code, []).append(alias)

    table = Table(title="Supported Languages")
    table.add_column("Code", style="cyan")
    table.add_column("Name")
    table.add_column("Native Name")
    table.add_column("Aliases", style="dim")

    for code, info in SUPPORTED_LANGUAGES.items():
        table.add_row(code, info["name"], info["native_name"], ", ".join(aliases_by_code.get(code, [])))

    console.print(table)


@app.command()
def version():
    """Show version information."""
    console.print(f"i18n-json-translator {__version__}")


def _display_summary(report: RunReport):
    """Display per-language results in a table."""
    styles = {
        STATUS_COMPLETED: "[green]completed[/green]",
        STATUS_PARTIAL: "[yellow]partial[/yellow]",
        STATUS_FAILED: "[red]failed[/red]",
    }

    table = Table(title="Translation Summary")
    table.add_column("Language", style="cyan")
    table.add_column("Status")
    table.add_column("Strings", justify="right")
    table.add_column("Failed", justify="right")
    table.add_column("Output / Error")

    for lang, outcome in report.outcomes.items():
        label = lang if outcome.canonical in (None, lang) else f"{lang} ({outcome.canonical})"
        detail = str(outcome.output_path) if outcome.output_path else (outcome.error or "")
        table.add_row(
            label,
            styles.get(outcome.status, outcome.status),
            str(outcome.total_leaves),
            str(len(outcome.failed_paths)),
            detail
        )

    console.print("\n")
    console.print(table)

    if report.error_report_path:
        console.print(f"\n[yellow]Error report: {report.error_report_path}[/yellow]")

    if not report.has_errors:
        console.print("\n[bold green]Translation Complete![/bold green]")
    elif report.succeeded:
        console.print(f"\n[yellow]Completed with errors: {len(report.succeeded)}/{len(report.outcomes)} languages fully translated[/yellow]")
    else:
        console.print("\n[red]No language was fully translated[/red]")


def cli():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    cli()
