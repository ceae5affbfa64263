"""
Schema Cache.

On-disk snapshot of a table's field definitions. The artifact is a JSON
array of {"name", "type"} objects written to the working directory.

The artifact carries no table identity, so refresh() must run before
load() in every invocation that reads field metadata. With
cache.per_table enabled, the file name is derived from the base and
table instead, so switching tables never reads another table's fields.
"""

import hashlib
import json
from pathlib import Path
from typing import Protocol

from pydantic import TypeAdapter, ValidationError

from rau.core.exceptions import CacheCorruptError, CacheMissingError, CacheWriteError
from rau.core.logging import get_logger
from rau.schemas.airtable import FieldDef, TableRef

logger = get_logger(__name__)

_FIELD_LIST = TypeAdapter(list[FieldDef])


class FieldSource(Protocol):
    """Anything that can fetch the field definitions of a table."""

    async def list_fields(self, table: TableRef) -> list[FieldDef]: ...


def cache_path_for(
    table: TableRef,
    filename: str,
    per_table: bool = False,
    directory: Path | None = None,
) -> Path:
    """
    Build the cache artifact path.

    Args:
        table: Table the artifact will describe
        filename: Configured file name, e.g. available_fields_cache.json
        per_table: Derive a distinct file name from the base and table
        directory: Directory holding the artifact, defaults to the working directory

    Returns:
        Path of the artifact
    """
    base = directory if directory is not None else Path.cwd()
    if not per_table:
        return base / filename

    digest = hashlib.sha1(f"{table.base_id}/{table.table_name}".encode()).hexdigest()[:12]
    stem, dot, suffix = filename.rpartition(".")
    if not dot:
        return base / f"{filename}.{digest}"
    return base / f"{stem}.{digest}.{suffix}"


class SchemaCache:
    """
    Single-file cache of field definitions.

    Usage:
        cache = SchemaCache(cache_path_for(table, "available_fields_cache.json"))
        await cache.refresh(client, table)
        fields = cache.load()
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    async def refresh(self, source: FieldSource, table: TableRef) -> list[FieldDef]:
        """
        Fetch the table's fields and overwrite the artifact.

        Raises:
            CacheWriteError: If the artifact cannot be written
            RemoteError: If the service rejects the metadata request
        """
        fields = await source.list_fields(table)
        self.store(fields)
        logger.debug(
            "Schema cache refreshed",
            path=str(self.path),
            base_id=table.base_id,
            table_name=table.table_name,
            field_count=len(fields),
        )
        return fields

    def store(self, fields: list[FieldDef]) -> None:
        """Serialize fields to the artifact."""
        payload = [{"name": f.name, "type": f.type} for f in fields]
        try:
            self.path.write_text(json.dumps(payload), encoding="utf-8")
        except OSError as e:
            raise CacheWriteError(str(self.path), str(e)) from e

    def load(self) -> list[FieldDef]:
        """
        Read field definitions back from the artifact.

        Raises:
            CacheMissingError: If the artifact does not exist
            CacheCorruptError: If the artifact is not a list of {name, type}
        """
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise CacheMissingError(str(self.path)) from e
        except (OSError, UnicodeDecodeError) as e:
            raise CacheCorruptError(str(self.path), str(e)) from e

        try:
            return _FIELD_LIST.validate_json(text)
        except ValidationError as e:
            raise CacheCorruptError(str(self.path), f"{e.error_count()} validation error(s)") from e
