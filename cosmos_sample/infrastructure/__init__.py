"""
Infrastructure package for the Cosmos DB employee sample.

Centralizes the external store concerns (client construction, schema
ensure calls, item and query operations). Keep this layer focused on I/O and
resource management, decoupled from orchestrator logic.
"""

from cosmos_sample.infrastructure.abstract import DocumentStore, StoreFactory
from cosmos_sample.infrastructure.cosmos_store import CosmosDocumentStore, build_document_store

__all__ = [
    "CosmosDocumentStore",
    "DocumentStore",
    "StoreFactory",
    "build_document_store",
]
