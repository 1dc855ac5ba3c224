"""
Cosmos DB employee sample - getting started with the azure-cosmos SDK.

Walks through the basic lifecycle of a Cosmos DB (NoSQL API) client:

- Building a client with a consistency level and preferred region
- Creating a database and a partitioned container if they do not exist
- Inserting and point-reading sample employee items (optional)
- Running a paged query and reporting request charges per page

Consistency, partitioning, paging and retries are all handled by the SDK;
this package only sequences the calls and reports what came back.
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from cosmos_sample.config import ConfigurationError, Settings, get_settings
from cosmos_sample.domain import Employee, sample_employees
from cosmos_sample.infrastructure import CosmosDocumentStore, DocumentStore, build_document_store
from cosmos_sample.orchestrator import DemoResult, DemoStage, EmployeeDemo, run_demo
from cosmos_sample.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "ConfigurationError",
    "Settings",
    "get_settings",
    # Domain
    "Employee",
    "sample_employees",
    # Store
    "CosmosDocumentStore",
    "DocumentStore",
    "build_document_store",
    # Orchestration
    "DemoResult",
    "DemoStage",
    "EmployeeDemo",
    "run_demo",
    # Logging
    "configure_logging",
    "get_logger",
]
