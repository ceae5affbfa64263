"""
Pydantic schemas for the Airtable data model.
"""

from rau.schemas.airtable import (
    FieldDef,
    FieldToken,
    Record,
    RecordsResponse,
    RecordValue,
    TableRef,
    TableSchema,
    TablesResponse,
)

__all__ = [
    "FieldDef",
    "FieldToken",
    "Record",
    "RecordValue",
    "RecordsResponse",
    "TableRef",
    "TableSchema",
    "TablesResponse",
]
