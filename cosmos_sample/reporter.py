"""
Result reporting for the Cosmos DB employee sample.

Log-line helpers for each operation outcome plus a rich summary table for the
CLI. Nothing here affects control flow.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from cosmos_sample.domain.models import Employee, InsertResult, ReadResult, ResultPage
from cosmos_sample.utils.logging import get_logger

log = get_logger(__name__)


def _charge(value: float) -> str:
    return f"{value:.2f} RU"


def _duration(seconds: float) -> str:
    return f"{seconds * 1000:.1f} ms"


def log_stage(stage: str) -> None:
    log.debug(f"[STAGE] {stage}", extra={"stage": stage})


def log_prepared(employees: Sequence[Employee]) -> None:
    ids = [employee.id for employee in employees]
    log.info(f"Prepared {len(ids)} employee items: {ids}", extra={"item_ids": ids})


def log_item_created(result: InsertResult) -> None:
    log.info(
        f"Created item {result.item_id} with request charge of {_charge(result.request_charge)} "
        f"within duration {_duration(result.duration_seconds)}",
        extra={
            "item_id": result.item_id,
            "request_charge": result.request_charge,
            "duration_seconds": result.duration_seconds,
        },
    )


def log_items_created(count: int, total_request_charge: float) -> None:
    log.info(
        f"Created {count} items with total request charge of {_charge(total_request_charge)}",
        extra={"items": count, "request_charge": total_request_charge},
    )


def log_item_read(result: ReadResult) -> None:
    log.info(
        f"Item successfully read with id {result.employee.id} with a charge of "
        f"{_charge(result.request_charge)} and within duration {_duration(result.duration_seconds)}",
        extra={
            "item_id": result.employee.id,
            "request_charge": result.request_charge,
            "duration_seconds": result.duration_seconds,
        },
    )


def log_query_page(page: ResultPage, page_number: int, cumulative_charge: float) -> None:
    """
    Log one query page: item count, its charge, the running charge and the ids.
    """
    log.info(
        f"Got a page of query result with {len(page.items)} item(s) and request charge of "
        f"{_charge(page.request_charge)} (cumulative {_charge(cumulative_charge)})",
        extra={
            "page": page_number,
            "items": len(page.items),
            "request_charge": page.request_charge,
            "cumulative_request_charge": cumulative_charge,
        },
    )
    log.info(f"Item Ids {page.item_ids}", extra={"page": page_number, "item_ids": page.item_ids})
    if page.query_metrics:
        log.debug(f"Query metrics: {page.query_metrics}", extra={"page": page_number})


def log_query_summary(pages: int, items: int, total_request_charge: float) -> None:
    log.info(
        f"Query returned {items} item(s) over {pages} page(s), total request charge "
        f"{_charge(total_request_charge)}",
        extra={"pages": pages, "items": items, "request_charge": total_request_charge},
    )


def print_summary(result: Dict[str, Any], console: Optional[Console] = None) -> None:
    """
    Render a demo result as a rich table of stages followed by query totals.
    """
    console = console or Console()
    stages: List[Dict[str, Any]] = result.get("stages", [])

    status = "[green]succeeded[/green]" if result.get("succeeded") else "[red]failed[/red]"
    table = Table(
        title=f"Cosmos DB Employee Demo ({status})",
        box=box.ROUNDED,
        caption=f"Last stage: {result.get('stage', 'start')}",
    )
    table.add_column("Stage", style="cyan", no_wrap=True)
    table.add_column("Duration (ms)", justify="right", style="green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("CPU %", justify="right", style="red")
    table.add_column("OK", justify="center")

    for stage in stages:
        mem_bytes = stage.get("peak_rss_bytes") or 0
        cpu = stage.get("cpu_percent")
        table.add_row(
            stage["stage"],
            f"{stage.get('duration_seconds', 0.0) * 1000:.1f}",
            f"{mem_bytes / (1024 * 1024):.2f}",
            "N/A" if cpu is None else f"{cpu:.1f}",
            "[green]✓[/green]" if stage.get("ok") else "[red]✗[/red]",
        )

    console.print(table)

    if result.get("created"):
        console.print(
            f"Created [magenta]{result['created']}[/magenta] item(s), "
            f"{_charge(result.get('create_request_charge', 0.0))}"
        )
    if "pages" in result:
        console.print(
            f"Query: [magenta]{result.get('items', 0)}[/magenta] item(s) in "
            f"[magenta]{result['pages']}[/magenta] page(s), "
            f"{_charge(result.get('query_request_charge', 0.0))}"
        )
    if result.get("error"):
        console.print(f"[red]Error ({result.get('error_type')}): {escape(str(result['error']))}[/red]")


__all__ = [
    "log_item_created",
    "log_item_read",
    "log_items_created",
    "log_prepared",
    "log_query_page",
    "log_query_summary",
    "log_stage",
    "print_summary",
]
