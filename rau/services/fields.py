"""
Field Classification.

Splits a table's fields into those clients may write and those the
service computes. The computed types are a closed list; every other
type, including ones Airtable adds later, counts as writable.
"""

from dataclasses import dataclass, field

from rau.schemas.airtable import FieldDef

COMPUTED_FIELD_TYPES = frozenset({
    "computed",
    "formula",
    "rollup",
    "lookup",
    "lastModifiedTime",
    "createdTime",
})


@dataclass(frozen=True)
class FieldClassification:
    """Field names partitioned by writability, each in schema order."""

    writable: list[str] = field(default_factory=list)
    computed: list[str] = field(default_factory=list)


def is_computed(field_def: FieldDef) -> bool:
    return field_def.type in COMPUTED_FIELD_TYPES


def classify(fields: list[FieldDef]) -> FieldClassification:
    """Partition fields into writable and computed names."""
    writable: list[str] = []
    computed: list[str] = []
    for field_def in fields:
        (computed if is_computed(field_def) else writable).append(field_def.name)
    return FieldClassification(writable=writable, computed=computed)
