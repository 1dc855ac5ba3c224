"""
Domain package for the Cosmos DB employee sample.

Exports the employee model, the per-operation result records and the sample
record factories. Keep this package focused on data definitions.
"""

from cosmos_sample.domain.employees import (
    ceo_employee,
    developer_employee,
    devops_employee,
    operational_employee,
    sample_employees,
)
from cosmos_sample.domain.models import Employee, InsertResult, ReadResult, ResultPage

__all__ = [
    "Employee",
    "InsertResult",
    "ReadResult",
    "ResultPage",
    "ceo_employee",
    "developer_employee",
    "devops_employee",
    "operational_employee",
    "sample_employees",
]
