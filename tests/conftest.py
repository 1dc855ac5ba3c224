"""
Pytest configuration for the Cosmos DB employee sample.

Provides fixtures for:
- Settings with test-specific values (no account needed)
- An in-memory document store standing in for Cosmos DB
- Live account settings for integration tests
"""

from __future__ import annotations

import os
from typing import List

import pytest

from cosmos_sample.config import Settings
from tests.fakes import InMemoryDocumentStore


@pytest.fixture
def test_settings() -> Settings:
    """
    Settings fixture with a dummy account; nothing here is ever contacted.
    """
    return Settings(
        cosmos_endpoint="https://localhost:8081/",
        cosmos_key="dGVzdC1rZXk=",
        log_level="DEBUG",
    )


@pytest.fixture
def memory_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def store_factory(memory_store: InMemoryDocumentStore):
    """Factory handing out the shared in-memory store; records the settings it saw."""
    seen: List[Settings] = []

    def factory(settings: Settings) -> InMemoryDocumentStore:
        seen.append(settings)
        return memory_store

    factory.seen = seen  # type: ignore[attr-defined]
    return factory


@pytest.fixture(scope="session")
def live_settings() -> Settings:
    """
    Settings for a real account or the emulator.

    Skips when COSMOS_ENDPOINT/COSMOS_KEY are not set in the environment.
    """
    if not (os.getenv("COSMOS_ENDPOINT") and os.getenv("COSMOS_KEY")):
        pytest.skip("Cosmos DB account not configured for integration tests")
    return Settings(
        database_name=os.getenv("COSMOS_DATABASE", "MainDBTest"),
        create_items=True,
        read_items=True,
        log_level="DEBUG",
    )
