"""
Response Projection.

Turns records returned by the service into (label, text) rows for
printing. Values are rendered by the codec's display().
"""

from rau.schemas.airtable import Record
from rau.services.codec import display

NO_VALUE = "<no value>"
NO_NAME = "<no name>"
NAME_FIELD = "Name"


def project_whole(record: Record) -> list[tuple[str, str]]:
    """Every field of the record, sorted by field name."""
    return [(name, display(record.fields[name])) for name in sorted(record.fields)]


def project_selected(record: Record, names: tuple[str, ...] | list[str]) -> list[tuple[str, str]]:
    """The requested fields in request order; absent ones show NO_VALUE."""
    rows = []
    for name in names:
        if name in record.fields:
            rows.append((name, display(record.fields[name])))
        else:
            rows.append((name, NO_VALUE))
    return rows


def record_name(record: Record) -> str:
    name = record.fields.get(NAME_FIELD)
    return name if isinstance(name, str) else NO_NAME


def project_recent(records: list[Record]) -> list[tuple[str, str]]:
    """(id, name) per record; a missing or non-text Name shows NO_NAME."""
    return [(record.id, record_name(record)) for record in records]
