"""Command-line interface using Typer.

Commands:
    run       Generate one stage artifact from an upstream JSON file
    validate  Check an existing artifact JSON against a stage's schema and rules
    stages    List the pipeline stages

Artifacts are written as JSON (stdout or --out); progress and diagnostics go
to stderr so the output can be piped into the next stage's upstream file.
"""

import asyncio
import json
from pathlib import Path
from typing import Annotated, Any, Optional

import structlog
import typer
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.table import Table

from ai_risk_reporting import __version__
from ai_risk_reporting.config import Settings
from ai_risk_reporting.llm.anthropic_client import AnthropicClient
from ai_risk_reporting.llm.base_client import BaseLLMClient
from ai_risk_reporting.llm.exceptions import LLMClientError
from ai_risk_reporting.logging_config import configure_logging
from ai_risk_reporting.models.enums import StageId
from ai_risk_reporting.orchestrator.engine import GenerationOrchestrator
from ai_risk_reporting.orchestrator.result import StageResult
from ai_risk_reporting.orchestrator.stages import STAGES, get_stage
from ai_risk_reporting.validation.schema import SchemaValidator

app = typer.Typer(
    name="ai-risk-reporting",
    help="Generate validated AI tool risk reports, one stage at a time.",
    add_completion=False,
)

console = Console(stderr=True, soft_wrap=True)
logger = structlog.get_logger(__name__)

EXIT_REJECTED = 1
EXIT_USAGE = 2


def create_client(settings: Settings) -> BaseLLMClient:
    """Generation client used by `run`."""
    return AnthropicClient.from_settings(settings)


def _load_json(path: Path) -> Any:
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        console.print(f"[red]Error:[/red] File not found: {path}")
        raise typer.Exit(EXIT_USAGE)
    except json.JSONDecodeError as e:
        console.print(f"[red]Error:[/red] {path} is not valid JSON: {e}")
        raise typer.Exit(EXIT_USAGE)


def _write_json(data: Any, out: Optional[Path]) -> None:
    text = json.dumps(data, indent=2, ensure_ascii=False)
    if out is None:
        typer.echo(text)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(text + "\n", encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {out}")


def _print_problems(problems: list[str]) -> None:
    for problem in problems:
        console.print(f"  [red]-[/red] {problem}")


async def _generate(
    stage: StageId,
    upstream: Any,
    settings: Settings,
    attempts: Optional[int],
) -> StageResult:
    async with create_client(settings) as client:
        orchestrator = GenerationOrchestrator(client, settings=settings)
        return await orchestrator.run(stage, upstream, attempts)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit"),
    ] = False,
    log_level: Annotated[
        Optional[str],
        typer.Option("--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ...)"),
    ] = None,
) -> None:
    """AI tool risk reporting pipeline."""
    if version:
        typer.echo(f"ai-risk-reporting {__version__}")
        raise typer.Exit()

    settings = Settings()
    configure_logging(log_level or settings.LOG_LEVEL, settings.ENVIRONMENT)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command()
def run(
    ctx: typer.Context,
    stage: Annotated[StageId, typer.Argument(help="Stage to run")],
    upstream_file: Annotated[
        Path,
        typer.Argument(help="JSON file holding the stage input (see `stages`)"),
    ],
    attempts: Annotated[
        Optional[int],
        typer.Option("--attempts", "-n", min=1, help="Attempt budget (default: MAX_ATTEMPTS)"),
    ] = None,
    out: Annotated[
        Optional[Path],
        typer.Option("--out", "-o", help="Write the accepted artifact here instead of stdout"),
    ] = None,
    payload_only: Annotated[
        bool,
        typer.Option("--payload-only", help="Write only the artifact payload, without its envelope"),
    ] = False,
) -> None:
    """Generate one stage artifact.

    Exits 0 with the accepted artifact, 1 when the attempt budget is
    exhausted, 2 on unusable input or a generation service failure.
    """
    settings: Settings = ctx.obj
    upstream = _load_json(upstream_file)

    try:
        result = asyncio.run(_generate(stage, upstream, settings, attempts))
    except PydanticValidationError as e:
        console.print(f"[red]Error:[/red] {upstream_file} is not a valid {stage.value} input")
        _print_problems([f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()])
        raise typer.Exit(EXIT_USAGE)
    except LLMClientError as e:
        console.print(f"[red]Generation failed:[/red] {e.message}")
        raise typer.Exit(EXIT_USAGE)

    if not result.ok:
        diagnostics = result.diagnostics
        console.print(
            f"[red]✗[/red] {stage.value} rejected after {diagnostics.attempts_consumed} attempt(s)"
        )
        last = diagnostics.history[-1]
        _print_problems(last.problems())
        logger.warning("Stage rejected", stage=stage, diagnostics=diagnostics.to_dict())
        raise typer.Exit(EXIT_REJECTED)

    artifact = result.artifact
    console.print(
        f"[green]✓[/green] {stage.value} accepted after {artifact.attempts} attempt(s)"
        f" (model {artifact.model_version})"
    )
    data = artifact.payload.model_dump(mode="json") if payload_only else artifact.to_dict()
    _write_json(data, out)


@app.command()
def validate(
    stage: Annotated[StageId, typer.Argument(help="Stage that produced the artifact")],
    artifact_file: Annotated[Path, typer.Argument(help="Artifact JSON (payload only)")],
    upstream_file: Annotated[
        Path,
        typer.Argument(help="JSON file holding the stage input the artifact was generated from"),
    ],
) -> None:
    """Validate an existing artifact without calling the generation service."""
    definition = get_stage(stage)
    data = _load_json(artifact_file)

    try:
        upstream = definition.input_model.model_validate(_load_json(upstream_file))
    except PydanticValidationError as e:
        console.print(f"[red]Error:[/red] {upstream_file} is not a valid {stage.value} input")
        _print_problems([f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()])
        raise typer.Exit(EXIT_USAGE)

    schema_result = SchemaValidator(definition.artifact_model).validate(data)
    if not schema_result.ok:
        console.print(f"[red]✗[/red] Schema validation failed with {schema_result.error_count} error(s)")
        _print_problems([str(schema_result.error), *schema_result.other_errors])
        raise typer.Exit(EXIT_REJECTED)

    violations = definition.rules.validate(schema_result.artifact, upstream)
    if violations:
        console.print(f"[red]✗[/red] {len(violations)} business rule violation(s)")
        _print_problems(violations)
        raise typer.Exit(EXIT_REJECTED)

    console.print(f"[green]✓[/green] {artifact_file} is a valid {stage.value} artifact")


@app.command()
def stages() -> None:
    """List the pipeline stages in dependency order."""
    table = Table(title="Pipeline stages")
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Input")
    table.add_column("Artifact")
    table.add_column("Prompt version", style="dim")

    for definition in STAGES.values():
        table.add_row(
            definition.stage_id.value,
            definition.input_model.__name__,
            definition.artifact_model.__name__,
            definition.prompt_version,
        )

    Console().print(table)


if __name__ == "__main__":
    app()
