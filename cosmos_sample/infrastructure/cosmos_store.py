"""
Azure Cosmos DB store for the employee sample.

Wraps a single `azure.cosmos.CosmosClient` for the lifetime of a run. The
client is entered through an ExitStack when built and exited in `close()`, so
the owner releases it with one call whatever state the run ended in.

Request charges come from the `x-ms-request-charge` header of the last
response on the container's connection; durations are measured client-side.
"""

from __future__ import annotations

import time
from contextlib import ExitStack
from typing import Iterator, Optional

from azure.cosmos import CosmosClient, PartitionKey
from azure.cosmos.container import ContainerProxy
from azure.cosmos.database import DatabaseProxy
from azure.cosmos.http_constants import HttpHeaders

from cosmos_sample.config import Settings
from cosmos_sample.domain.models import Employee, InsertResult, ReadResult, ResultPage
from cosmos_sample.utils.logging import get_logger

log = get_logger(__name__)


def _request_charge(container: ContainerProxy) -> float:
    headers = container.client_connection.last_response_headers or {}
    return float(headers.get(HttpHeaders.RequestCharge, 0.0))


def _query_metrics(container: ContainerProxy) -> Optional[str]:
    headers = container.client_connection.last_response_headers or {}
    return headers.get(HttpHeaders.QueryMetrics)


class CosmosDocumentStore:
    """
    Document store backed by a synchronous CosmosClient.

    Parameters
    ----------
    client : CosmosClient
        An already constructed client. Ownership passes to the store.
    """

    def __init__(self, client: CosmosClient) -> None:
        self._stack = ExitStack()
        self._client: Optional[CosmosClient] = self._stack.enter_context(client)

    @property
    def client(self) -> CosmosClient:
        if self._client is None:
            raise RuntimeError("Cosmos client has already been closed")
        return self._client

    def ensure_database(self, name: str) -> DatabaseProxy:
        created = self.client.create_database_if_not_exists(id=name)
        return self.client.get_database_client(created.id)

    def ensure_container(
        self, database: DatabaseProxy, name: str, partition_key_path: str, throughput: int
    ) -> ContainerProxy:
        created = database.create_container_if_not_exists(
            id=name,
            partition_key=PartitionKey(path=partition_key_path),
            offer_throughput=throughput,
        )
        return database.get_container_client(created.id)

    def insert(self, container: ContainerProxy, employee: Employee) -> InsertResult:
        # The SDK derives the partition key value from the body.
        start = time.perf_counter()
        created = container.create_item(body=employee.to_document())
        duration = time.perf_counter() - start
        return InsertResult(
            item_id=created["id"],
            request_charge=_request_charge(container),
            duration_seconds=duration,
        )

    def point_read(self, container: ContainerProxy, item_id: str, partition_key: str) -> ReadResult:
        start = time.perf_counter()
        document = container.read_item(item=item_id, partition_key=partition_key)
        duration = time.perf_counter() - start
        return ReadResult(
            employee=Employee.from_document(document),
            request_charge=_request_charge(container),
            duration_seconds=duration,
        )

    def query(
        self,
        container: ContainerProxy,
        query_text: str,
        page_size: int,
        populate_query_metrics: bool = False,
    ) -> Iterator[ResultPage]:
        pager = container.query_items(
            query=query_text,
            enable_cross_partition_query=True,
            populate_query_metrics=populate_query_metrics,
            max_item_count=page_size,
        )
        for page in pager.by_page():
            # Headers describe the page only once it has been fetched.
            items = list(page)
            yield ResultPage(
                items=items,
                request_charge=_request_charge(container),
                query_metrics=_query_metrics(container) if populate_query_metrics else None,
            )

    def close(self) -> None:
        if self._client is None:
            return
        try:
            self._stack.close()
        finally:
            self._client = None


def build_document_store(settings: Settings) -> CosmosDocumentStore:
    """
    Build a store against the configured account.

    Raises ConfigurationError when the endpoint or key is missing. The
    CosmosClient constructor contacts the account, so an unreachable endpoint
    or a rejected key fails here as well.
    """
    endpoint, key = settings.account_credentials()
    log.info(f"Using Azure Cosmos DB endpoint: {endpoint}")
    client = CosmosClient(
        endpoint,
        credential=key,
        consistency_level=settings.consistency_level,
        preferred_locations=list(settings.preferred_regions),
    )
    return CosmosDocumentStore(client)


__all__ = ["CosmosDocumentStore", "build_document_store"]
