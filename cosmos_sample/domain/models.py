"""
Domain models for the Cosmos DB employee sample.

`Employee` is the document stored in the `Employee` container; `lastName`
doubles as its partition key. The result records carry what the store reports
back for each operation (request charge, client-side duration) so the
reporter can log them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field


class Employee(BaseModel):
    """
    Representation of a single item in the `Employee` container.
    """

    id: str = Field(..., min_length=1, description="Unique item id (<lastName>-<epoch ms>).")
    first_name: str = Field(..., alias="firstName", min_length=1, description="Given name.")
    last_name: str = Field(
        ..., alias="lastName", min_length=1, description="Surname; also the partition key."
    )

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "extra": "ignore",
    }

    @property
    def partition_key(self) -> str:
        return self.last_name

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the JSON document shape the store expects."""
        return self.model_dump(by_alias=True)

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Employee":
        """Parse a stored document; system properties (_rid, _ts, ...) are dropped."""
        return cls.model_validate(dict(document))


@dataclass(frozen=True)
class InsertResult:
    item_id: str
    request_charge: float
    duration_seconds: float


@dataclass(frozen=True)
class ReadResult:
    employee: Employee
    request_charge: float
    duration_seconds: float


@dataclass(frozen=True)
class ResultPage:
    """
    One page of a query result as returned by the store.

    `items` are the raw results. A query may project fields or match
    documents that are not employees, so they are not parsed into `Employee`.
    `request_charge` is the charge of this page alone; `query_metrics` is the
    raw metrics header when metrics collection was requested.
    """

    items: List[Any] = field(default_factory=list)
    request_charge: float = 0.0
    query_metrics: Optional[str] = None

    @property
    def item_ids(self) -> List[Any]:
        """Each item's `id`, or the item itself for scalar `SELECT VALUE` results."""
        return [item.get("id") if isinstance(item, Mapping) else item for item in self.items]


__all__ = ["Employee", "InsertResult", "ReadResult", "ResultPage"]
