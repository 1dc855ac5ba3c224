"""
Store capability consumed by the orchestrator.

The demo only needs a handful of operations from the document store. Keeping
them behind a Protocol lets the orchestrator run against the real
`CosmosDocumentStore` or any stand-in with the same shape.
"""

from __future__ import annotations

from typing import Any, Callable, Iterator, Protocol, runtime_checkable

from cosmos_sample.config import Settings
from cosmos_sample.domain.models import Employee, InsertResult, ReadResult, ResultPage


@runtime_checkable
class DocumentStore(Protocol):
    """
    Operations the demo issues against the external store.

    Database and container handles are opaque to callers; they are whatever
    the implementation returns from the ensure_* calls.
    """

    def ensure_database(self, name: str) -> Any:
        """Create the database if absent and return a handle to it."""
        ...

    def ensure_container(
        self, database: Any, name: str, partition_key_path: str, throughput: int
    ) -> Any:
        """Create the container if absent and return a handle to it."""
        ...

    def insert(self, container: Any, employee: Employee) -> InsertResult: ...

    def point_read(self, container: Any, item_id: str, partition_key: str) -> ReadResult: ...

    def query(
        self,
        container: Any,
        query_text: str,
        page_size: int,
        populate_query_metrics: bool = False,
    ) -> Iterator[ResultPage]:
        """
        Run a query and lazily yield its pages.

        The iterator is forward-only; consuming it a second time yields nothing.
        """
        ...

    def close(self) -> None: ...


StoreFactory = Callable[[Settings], DocumentStore]


__all__ = ["DocumentStore", "StoreFactory"]
