"""
Sample employee records.

Each factory returns a fresh `Employee` for a fixed persona. Ids are the
surname plus the current epoch time in milliseconds, so two records for the
same surname built within the same millisecond share an id.
"""
from __future__ import annotations

import time
from typing import List

from cosmos_sample.domain.models import Employee


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _employee(first_name: str, last_name: str) -> Employee:
    return Employee(id=f"{last_name}-{_now_millis()}", first_name=first_name, last_name=last_name)


def developer_employee() -> Employee:
    return _employee("Aaron", "Andersen")


def devops_employee() -> Employee:
    return _employee("John", "Wakefield")


def operational_employee() -> Employee:
    return _employee("Michael", "Johnson")


def ceo_employee() -> Employee:
    return _employee("Brad", "Smith")


def sample_employees() -> List[Employee]:
    """The four personas used by the demo, in creation order."""
    return [
        developer_employee(),
        devops_employee(),
        operational_employee(),
        ceo_employee(),
    ]


__all__ = [
    "ceo_employee",
    "developer_employee",
    "devops_employee",
    "operational_employee",
    "sample_employees",
]
