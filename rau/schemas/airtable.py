"""
Airtable Schemas.

Pydantic models for the records and field metadata exchanged with the
Airtable REST API, and for the values held locally between requests.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

RecordValue = Any
"""A JSON value: None, bool, int, float, str, list or dict."""


class FieldDef(BaseModel):
    """A field definition as returned by the metadata API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    type: str = Field(..., description="Airtable field type, e.g. singleLineText or formula")


class TableRef(BaseModel):
    """A base and table pair resolved from a named configuration."""

    model_config = ConfigDict(frozen=True)

    base_id: str
    table_name: str


class FieldToken(BaseModel):
    """One `key=value` command-line argument, split on the first '='."""

    model_config = ConfigDict(frozen=True)

    key: str
    raw_value: str

    @classmethod
    def parse(cls, token: str) -> "FieldToken | None":
        """Split a token, or return None when it has no '='."""
        key, sep, raw_value = token.partition("=")
        if not sep:
            return None
        return cls(key=key, raw_value=raw_value)


class Record(BaseModel):
    """A single record. Unknown envelope keys such as createdTime are ignored."""

    model_config = ConfigDict(extra="ignore")

    id: str
    fields: dict[str, RecordValue] = Field(default_factory=dict)


class RecordsResponse(BaseModel):
    """Envelope for list, update and create responses."""

    model_config = ConfigDict(extra="ignore")

    records: list[Record]


class TableSchema(BaseModel):
    """A table entry in the base metadata response."""

    model_config = ConfigDict(extra="ignore")

    name: str
    fields: list[FieldDef]


class TablesResponse(BaseModel):
    """Envelope for GET /meta/bases/{base_id}/tables."""

    model_config = ConfigDict(extra="ignore")

    tables: list[TableSchema]
