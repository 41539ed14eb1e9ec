"""Furnishot CLI - typer application entry point."""

from __future__ import annotations

import atexit
from dataclasses import replace
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from ruamel.yaml import YAML

from furnishot.models.product import ProductSpecification
from furnishot.models.prompt import DEFAULT_MAX_PROMPT_LENGTH
from furnishot.models.settings import GenerationSettings
from furnishot.observability import close_file_logging, configure_logging, get_logger
from furnishot.pipeline.config import EngineConfigError, load_engine_config
from furnishot.pipeline.engine import PromptResult, generate_prompt, generate_prompts_per_format
from furnishot.rules.context import CONTEXT_RULES
from furnishot.rules.styling import OUTPUT_FORMATS
from furnishot.validation.prompt_validation import validate_prompt
from furnishot.validation.report import ValidationReport

app = typer.Typer(
    name="furnishot",
    help="Furnishot: furniture photography prompt composition and validation.",
    no_args_is_help=True,
)
console = Console()

log = get_logger(__name__)

_SEVERITY_STYLE = {"pass": "[green]✓[/green]", "warn": "[yellow]![/yellow]", "fail": "[red]✗[/red]"}


@app.callback()
def main(
    verbose: Annotated[
        int,
        typer.Option(
            "-v",
            "--verbose",
            count=True,
            help="Increase verbosity: -v for INFO, -vv for DEBUG.",
        ),
    ] = 0,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Write all events to {log_dir}/debug.jsonl.",
            envvar="FURNISHOT_LOG_DIR",
        ),
    ] = None,
) -> None:
    """Furnishot: furniture photography prompt composition and validation."""
    configure_logging(verbosity=verbose, log_to_file=log_dir is not None, log_dir=log_dir)
    if log_dir is not None:
        atexit.register(close_file_logging)


def _load_yaml(path: Path, what: str) -> dict[str, Any]:
    """Load a YAML mapping or exit with an error line."""
    if not path.exists():
        console.print(f"[red]Error:[/red] {what} file '{path}' not found")
        raise typer.Exit(1)
    yaml = YAML()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.load(f)
    except Exception as e:
        console.print(f"[red]Error:[/red] Cannot read {what} file '{path}': {escape(str(e))}")
        raise typer.Exit(1) from None
    if not isinstance(data, dict):
        console.print(f"[red]Error:[/red] {what} file '{path}' must contain a mapping")
        raise typer.Exit(1)
    return dict(data)


def _print_report(report: ValidationReport) -> None:
    table = Table(title="Validation")
    table.add_column("", width=2)
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    for check in report.checks:
        table.add_row(_SEVERITY_STYLE[check.severity], check.name, check.message)
    console.print(table)
    status = "[green]valid[/green]" if report.is_valid else "[red]invalid[/red]"
    console.print(f"{status} - {report.length}/{report.max_length} characters ({report.summary})")
    for suggestion in report.suggestions:
        console.print(f"  [dim]→[/dim] {suggestion}")


def _print_result(result: PromptResult) -> None:
    intelligence = result.intelligence
    console.print()
    console.print(
        f"[bold]{result.context_preset.value}[/bold] · {intelligence.category.value} · "
        f"{intelligence.placement_type.value} · {intelligence.material_profile.primary.value}"
    )
    analysis = intelligence.placement_analysis
    console.print(
        f"  Placement confidence: {analysis.confidence:.0%} · "
        f"enforcement: {analysis.enforcement_level}"
    )
    for fallback in result.fallbacks:
        console.print(f"  [dim]↻[/dim] {fallback}")
    if result.composed.dropped:
        console.print(f"  [yellow]Dropped sections:[/yellow] {', '.join(result.composed.dropped)}")
    _print_report(result.report)
    for recommendation in result.recommendations:
        if recommendation not in result.report.suggestions:
            console.print(f"  [dim]→[/dim] {recommendation}")
    ready = "[green]yes[/green]" if result.production_ready else "[red]no[/red]"
    console.print(f"Quality score: {result.quality_score}/100 · production ready: {ready}")


# =============================================================================
# Commands
# =============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from furnishot import __version__

    console.print(f"Furnishot v{__version__}")


@app.command()
def presets() -> None:
    """List context presets and output formats."""
    table = Table(title="Context presets")
    table.add_column("Preset", style="cyan")
    table.add_column("Aspect ratio")
    table.add_column("Pixels")
    table.add_column("Format")
    for rule in CONTEXT_RULES.values():
        table.add_row(
            rule.preset.value, rule.aspect_ratio, rule.pixel_dimensions, rule.format_description
        )
    console.print(table)

    formats = Table(title="Output formats")
    formats.add_column("Format", style="cyan")
    formats.add_column("Dimensions")
    formats.add_column("Aspect ratio")
    formats.add_column("Preset")
    for fmt in OUTPUT_FORMATS.values():
        formats.add_row(fmt.key, fmt.dimensions, fmt.aspect_ratio, fmt.preset.value)
    console.print(formats)


@app.command()
def compose(
    product: Annotated[
        Path,
        typer.Argument(help="YAML file describing the product (may embed a 'settings' mapping)."),
    ],
    context: Annotated[
        str | None,
        typer.Option(
            "--context",
            "-c",
            help="Context preset. Defaults to the preset implied by the output formats.",
        ),
    ] = None,
    settings: Annotated[
        Path | None,
        typer.Option("--settings", "-s", help="YAML file with generation settings."),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option("--config", help="YAML engine configuration."),
    ] = None,
    max_length: Annotated[
        int | None,
        typer.Option("--max-length", min=1, help="Override the prompt length ceiling."),
    ] = None,
    report: Annotated[
        bool,
        typer.Option("--report", "-r", help="Print classification and validation details."),
    ] = False,
    per_format: Annotated[
        bool,
        typer.Option(
            "--per-format",
            help="Compose one prompt per output format, each with its own preset.",
        ),
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit with code 1 when the prompt is invalid."),
    ] = False,
) -> None:
    """Compose the image-generation prompt for a product."""
    product_data = _load_yaml(product, "Product")
    settings_data = product_data.pop("settings", None)
    if settings is not None:
        settings_data = _load_yaml(settings, "Settings")

    try:
        spec = ProductSpecification.model_validate(product_data)
        generation_settings = GenerationSettings.model_validate(settings_data or {})
    except ValidationError as e:
        console.print(f"[red]Error:[/red] Invalid input: {escape(str(e))}")
        raise typer.Exit(1) from None

    try:
        engine_config = load_engine_config(config)
    except EngineConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None
    if max_length is not None:
        engine_config = replace(engine_config, max_prompt_length=max_length)

    if per_format:
        results = generate_prompts_per_format(spec, generation_settings, engine_config)
        if not results:
            console.print("[red]Error:[/red] No known output format requested")
            raise typer.Exit(1)
    else:
        results = {"": generate_prompt(spec, context, generation_settings, engine_config)}

    for key, result in results.items():
        if key:
            console.print(f"[bold]== {key} ({result.context_preset.value}) ==[/bold]")
        console.print(result.prompt, markup=False, highlight=False, soft_wrap=True)
        if report:
            _print_result(result)

    if strict and not all(r.report.is_valid for r in results.values()):
        raise typer.Exit(1)


@app.command()
def validate(
    prompt_file: Annotated[
        Path,
        typer.Argument(help="Text file containing a composed prompt."),
    ],
    max_length: Annotated[
        int,
        typer.Option("--max-length", min=1, help="Prompt length ceiling."),
    ] = DEFAULT_MAX_PROMPT_LENGTH,
    placement: Annotated[
        str | None,
        typer.Option("--placement", help="Check for wording contradicting this placement."),
    ] = None,
    context: Annotated[
        str | None,
        typer.Option("--context", "-c", help="Require this context preset's markers."),
    ] = None,
) -> None:
    """Validate a composed prompt; exits with code 1 when invalid."""
    if not prompt_file.exists():
        console.print(f"[red]Error:[/red] Prompt file '{prompt_file}' not found")
        raise typer.Exit(1)

    try:
        text = prompt_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(
            f"[red]Error:[/red] Cannot read prompt file '{prompt_file}': {escape(str(e))}"
        )
        raise typer.Exit(1) from None
    result = validate_prompt(
        text, max_length=max_length, placement_type=placement, context_preset=context
    )
    log.debug("prompt_file_validated", path=str(prompt_file), valid=result.is_valid)
    _print_report(result)
    if not result.is_valid:
        raise typer.Exit(1)
