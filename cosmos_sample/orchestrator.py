"""
Orchestrator for the Cosmos DB employee demo.

Sequences the run as a linear state machine:

    START -> CLIENT_BUILT -> DATABASE_ENSURED -> CONTAINER_ENSURED
          -> ITEMS_CREATED | INSERT_SKIPPED -> READ -> QUERIED -> CLOSED

Usage (example from CLI):
    from cosmos_sample.orchestrator import run_demo

    result = run_demo()
    print(result["stage"], result.get("pages"))

`run_demo` never raises: a failure in any stage is logged once, recorded in
the returned result, and the store handle is still released exactly once.
"""

from __future__ import annotations

import contextlib
from enum import Enum
from typing import Any, Dict, Generator, List, Optional, Sequence, TypedDict

from azure.cosmos.exceptions import CosmosHttpResponseError

from cosmos_sample import reporter
from cosmos_sample.config import Settings, get_settings
from cosmos_sample.domain.employees import sample_employees
from cosmos_sample.domain.models import Employee
from cosmos_sample.infrastructure.abstract import DocumentStore, StoreFactory
from cosmos_sample.infrastructure.cosmos_store import build_document_store
from cosmos_sample.utils.logging import get_logger
from cosmos_sample.utils.profiler import ProfileStats, profile_block

log = get_logger(__name__)


class DemoStage(str, Enum):
    START = "start"
    CLIENT_BUILT = "client_built"
    DATABASE_ENSURED = "database_ensured"
    CONTAINER_ENSURED = "container_ensured"
    ITEMS_CREATED = "items_created"
    INSERT_SKIPPED = "insert_skipped"
    READ = "read"
    QUERIED = "queried"
    CLOSED = "closed"


class DemoResult(TypedDict, total=False):
    """
    Outcome of one demo run.

    Only the keys for stages that actually ran are present, apart from
    `succeeded`, `stage` and `stages`.
    """

    succeeded: bool
    stage: str
    error: Optional[str]
    error_type: Optional[str]
    item_ids: List[str]
    created: int
    create_request_charge: float
    read: int
    read_failures: int
    read_request_charge: float
    pages: int
    items: int
    query_request_charge: float
    query_item_ids: List[Any]
    stages: List[Dict[str, Any]]


class EmployeeDemo:
    """
    Owns the store handle for one run and drives it through the demo stages.

    Parameters
    ----------
    settings : Settings | None
        Effective configuration. Loaded from the environment on first use
        when omitted, so a bad environment fails inside `run()`.
    store_factory : callable | None
        Builds the store from settings. Defaults to `build_document_store`.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        store_factory: Optional[StoreFactory] = None,
    ) -> None:
        self._settings = settings
        self._store_factory = store_factory
        self.store: Optional[DocumentStore] = None
        self.database: Any = None
        self.container: Any = None
        self.stage = DemoStage.START
        self.result = DemoResult(succeeded=False, stage=DemoStage.START.value, stages=[])
        self._closed = False

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def _advance(self, stage: DemoStage) -> None:
        self.stage = stage
        self.result["stage"] = stage.value
        reporter.log_stage(stage.value)

    def _record_stage(self, stats: ProfileStats, ok: bool) -> None:
        self.result["stages"].append(
            {
                "stage": stats.label,
                "duration_seconds": stats.duration_seconds,
                "peak_rss_bytes": stats.peak_rss_bytes,
                "cpu_percent": stats.cpu_percent,
                "ok": ok,
            }
        )

    @contextlib.contextmanager
    def _timed(self, label: str) -> Generator[ProfileStats, None, None]:
        stats: Optional[ProfileStats] = None
        ok = False
        try:
            with profile_block(label) as stats:
                yield stats
            ok = True
        finally:
            if stats is not None:
                self._record_stage(stats, ok)

    def build_client(self) -> None:
        factory = self._store_factory or build_document_store
        with self._timed("build_client"):
            self.store = factory(self.settings)
        self._advance(DemoStage.CLIENT_BUILT)

    def create_database_if_not_exists(self) -> None:
        name = self.settings.database_name
        log.info(f"Create database {name} if not exists.")
        with self._timed("ensure_database"):
            self.database = self.store.ensure_database(name)
        log.info(f"Checking database {name} completed!")
        self._advance(DemoStage.DATABASE_ENSURED)

    def create_container_if_not_exists(self) -> None:
        settings = self.settings
        log.info(f"Create container {settings.container_name} if not exists.")
        with self._timed("ensure_container"):
            self.container = self.store.ensure_container(
                self.database,
                settings.container_name,
                settings.partition_key_path,
                settings.throughput,
            )
        log.info(
            f"Checking container {settings.container_name} completed!",
            extra={
                "partition_key_path": settings.partition_key_path,
                "throughput": settings.throughput,
            },
        )
        self._advance(DemoStage.CONTAINER_ENSURED)

    def create_employees(self, employees: Sequence[Employee]) -> None:
        if not self.settings.create_items:
            log.info("Item creation disabled; skipping inserts.")
            self._advance(DemoStage.INSERT_SKIPPED)
            return

        total_request_charge = 0.0
        with self._timed("create_items"):
            for employee in employees:
                created = self.store.insert(self.container, employee)
                reporter.log_item_created(created)
                total_request_charge += created.request_charge
        reporter.log_items_created(len(employees), total_request_charge)
        self.result["created"] = len(employees)
        self.result["create_request_charge"] = total_request_charge
        self._advance(DemoStage.ITEMS_CREATED)

    def read_items(self, employees: Sequence[Employee]) -> None:
        """
        Point-read every employee by id and partition key.

        A failed read is logged and the loop moves on to the next item.
        """
        if not self.settings.read_items:
            log.info("Point reads disabled; skipping reads.")
            self._advance(DemoStage.READ)
            return

        read = failures = 0
        total_request_charge = 0.0
        with self._timed("read_items"):
            for employee in employees:
                try:
                    item = self.store.point_read(
                        self.container, employee.id, employee.partition_key
                    )
                except CosmosHttpResponseError:
                    log.exception(f"Read item {employee.id} failed")
                    failures += 1
                    continue
                reporter.log_item_read(item)
                total_request_charge += item.request_charge
                read += 1
        self.result["read"] = read
        self.result["read_failures"] = failures
        self.result["read_request_charge"] = total_request_charge
        self._advance(DemoStage.READ)

    def query_items(self) -> None:
        settings = self.settings
        pages = items = 0
        total_request_charge = 0.0
        item_ids: List[str] = []

        with self._timed("query_items"):
            for page in self.store.query(
                self.container,
                settings.query_text,
                settings.page_size,
                populate_query_metrics=settings.query_metrics_enabled,
            ):
                pages += 1
                items += len(page.items)
                total_request_charge += page.request_charge
                item_ids.extend(page.item_ids)
                reporter.log_query_page(page, pages, total_request_charge)

        reporter.log_query_summary(pages, items, total_request_charge)
        self.result["pages"] = pages
        self.result["items"] = items
        self.result["query_request_charge"] = total_request_charge
        self.result["query_item_ids"] = item_ids
        self._advance(DemoStage.QUERIED)

    def run(self) -> DemoResult:
        """
        Run every stage in order. Raises on the first failure.
        """
        self.build_client()
        self.create_database_if_not_exists()
        self.create_container_if_not_exists()

        employees = sample_employees()
        self.result["item_ids"] = [employee.id for employee in employees]
        reporter.log_prepared(employees)

        self.create_employees(employees)

        log.info("Reading items.")
        self.read_items(employees)

        log.info("Querying items.")
        self.query_items()
        return self.result

    def close(self) -> None:
        """
        Release the store handle. Only the first call has any effect.
        """
        if self._closed:
            return
        self._closed = True
        try:
            if self.store is not None:
                self.store.close()
        finally:
            self._advance(DemoStage.CLOSED)


def run_demo(
    settings: Optional[Settings] = None,
    store_factory: Optional[StoreFactory] = None,
) -> DemoResult:
    """
    Run the demo end to end and return its result.

    Parameters
    ----------
    settings : Settings | None
        Configuration to use. Defaults to `get_settings()`.
    store_factory : callable | None
        Builds the store from settings. Defaults to `build_document_store`.

    Returns
    -------
    DemoResult
        `succeeded` is False and `error`/`error_type` are set when any stage
        failed; `stage` is always "closed".
    """
    demo = EmployeeDemo(settings, store_factory)
    try:
        log.info("Starting SYNC main")
        demo.run()
        log.info("Demo complete, please hold while resources are released")
        demo.result["succeeded"] = True
    except Exception as exc:  # noqa: BLE001 - single top-level handler for the whole run
        log.exception(
            f"Cosmos getStarted failed at stage {demo.stage.value}",
            extra={"stage": demo.stage.value, "error_type": type(exc).__name__},
        )
        demo.result["error"] = str(exc)
        demo.result["error_type"] = type(exc).__name__
    finally:
        log.info("Closing the client")
        try:
            demo.close()
        except Exception:  # noqa: BLE001 - release failures are logged, not raised
            log.exception("Closing the client failed")
    return demo.result


__all__ = [
    "DemoResult",
    "DemoStage",
    "EmployeeDemo",
    "run_demo",
]
