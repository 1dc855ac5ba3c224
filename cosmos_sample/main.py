from __future__ import annotations

import sys
from typing import Optional

import typer

from cosmos_sample.config import get_settings
from cosmos_sample.orchestrator import DemoResult, DemoStage, run_demo
from cosmos_sample.reporter import print_summary
from cosmos_sample.utils.logging import configure_logging, get_logger

log = get_logger(__name__)

app = typer.Typer(help="Azure Cosmos DB employee sample CLI.")


def _mask(secret: Optional[str]) -> str:
    if not secret:
        return "<unset>"
    return f"{secret[:4]}…({len(secret)} chars)"


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    key = settings.cosmos_key.get_secret_value() if settings.cosmos_key else None
    typer.echo(
        f"endpoint={settings.cosmos_endpoint or '<unset>'} key={_mask(key)} | "
        f"consistency={settings.consistency_level} regions={settings.preferred_regions}"
    )
    typer.echo(
        f"container={settings.database_name}/{settings.container_name} "
        f"pk={settings.partition_key_path} throughput={settings.throughput} RU/s | "
        f"query='{settings.query_text}' page_size={settings.page_size} "
        f"create_items={settings.create_items} read_items={settings.read_items}"
    )


@app.command()
def run(
    create_items: Optional[bool] = typer.Option(
        None,
        "--create-items/--no-create-items",
        help="Insert the sample employees before querying (default from settings).",
    ),
    read_items: Optional[bool] = typer.Option(
        None,
        "--read-items/--no-read-items",
        help="Point-read the sample employees by id and partition key.",
    ),
    page_size: Optional[int] = typer.Option(
        None, "--page-size", "-p", min=1, help="Query page size (default from settings)."
    ),
    query: Optional[str] = typer.Option(
        None, "--query", "-q", help="Query text (default from settings)."
    ),
    json_logs: bool = typer.Option(False, "--json-logs", help="Emit logs as JSON lines."),
    summary: bool = typer.Option(True, "--summary/--no-summary", help="Print a summary table."),
) -> None:
    """
    Run the demo. Failures are logged; the exit status is always 0.
    """
    try:
        settings = get_settings()
        configure_logging(level=settings.log_level, json_logs=json_logs or settings.log_json)
    except ValueError as exc:
        # pydantic ValidationError and pydantic-settings SettingsError are both ValueErrors.
        configure_logging(json_logs=json_logs)
        log.exception("Invalid configuration; nothing was run")
        result = DemoResult(
            succeeded=False,
            stage=DemoStage.START.value,
            stages=[],
            error=str(exc),
            error_type=type(exc).__name__,
        )
    else:
        overrides = {
            "create_items": create_items,
            "read_items": read_items,
            "page_size": page_size,
            "query_text": query,
        }
        settings = settings.model_copy(
            update={key: value for key, value in overrides.items() if value is not None}
        )
        result = run_demo(settings)

    if summary:
        print_summary(result)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
