"""
Configuration settings for the Cosmos DB employee sample.

Uses Pydantic Settings to load the account endpoint and key, the target
database/container layout, and the demo toggles from environment variables
(or a local `.env` file).
"""
from __future__ import annotations

from functools import lru_cache
from typing import List, Literal, Optional, Tuple

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cosmos_sample.utils.logging import resolve_level

ConsistencyLevel = Literal["Strong", "BoundedStaleness", "Session", "ConsistentPrefix", "Eventual"]


class ConfigurationError(RuntimeError):
    """Raised when the account endpoint or key is missing or unusable."""


class Settings(BaseSettings):
    # Account
    cosmos_endpoint: Optional[str] = Field(
        None, validation_alias=AliasChoices("COSMOS_ENDPOINT", "ACCOUNT_HOST")
    )
    cosmos_key: Optional[SecretStr] = Field(
        None, validation_alias=AliasChoices("COSMOS_KEY", "ACCOUNT_KEY")
    )
    consistency_level: ConsistencyLevel = Field("Eventual", alias="COSMOS_CONSISTENCY_LEVEL")
    preferred_regions: List[str] = Field(["West US"], alias="COSMOS_PREFERRED_REGIONS")

    # Schema
    database_name: str = Field("MainDB", alias="COSMOS_DATABASE")
    container_name: str = Field("Employee", alias="COSMOS_CONTAINER")
    partition_key_path: str = Field("/lastName", alias="COSMOS_PARTITION_KEY_PATH")
    throughput: int = Field(400, alias="COSMOS_THROUGHPUT", ge=400)

    # Demo
    query_text: str = Field("SELECT * FROM Family", alias="DEMO_QUERY")
    page_size: int = Field(10, alias="DEMO_PAGE_SIZE", gt=0)
    query_metrics_enabled: bool = Field(True, alias="DEMO_QUERY_METRICS")
    create_items: bool = Field(False, alias="DEMO_CREATE_ITEMS")
    read_items: bool = Field(False, alias="DEMO_READ_ITEMS")

    # Application
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_json: bool = Field(False, alias="LOG_JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        return resolve_level(value)

    def account_credentials(self) -> Tuple[str, str]:
        """
        Return the (endpoint, key) pair, failing hard when either is absent.
        """
        missing = []
        if not self.cosmos_endpoint:
            missing.append("COSMOS_ENDPOINT")
        if self.cosmos_key is None or not self.cosmos_key.get_secret_value():
            missing.append("COSMOS_KEY")
        if missing:
            raise ConfigurationError(f"Missing Cosmos DB account settings: {', '.join(missing)}")
        return self.cosmos_endpoint, self.cosmos_key.get_secret_value()


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["ConfigurationError", "ConsistencyLevel", "Settings", "get_settings"]
