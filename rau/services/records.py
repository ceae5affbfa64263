"""
Record Service.

Carries out a resolved intent against one table: refreshes the schema
cache where field metadata is needed, calls the API and projects the
reply. Display is left to the caller.

Usage:
    async with AirtableClient() as client:
        service = RecordService(client, table, SchemaCache(path))
        result = await service.execute(intent)
"""

from typing import Any

from rau.cli.client import AirtableClient
from rau.core.exceptions import ResponseDecodeError
from rau.core.logging import get_logger
from rau.schemas.airtable import FieldDef, Record, RecordValue, TableRef
from rau.services.fields import classify
from rau.services.projector import project_recent, project_selected, project_whole
from rau.services.resolver import (
    CreateBlankRecord,
    Intent,
    ReadSelectedFields,
    ReadWholeRecord,
    ShowRecentRecords,
    ShowSchema,
    ShowWritableFields,
    UpdateFields,
)
from rau.services.schema_cache import SchemaCache


class RecordService:
    """Runs intents for one configured table."""

    def __init__(self, client: AirtableClient, table: TableRef, cache: SchemaCache) -> None:
        self.client = client
        self.table = table
        self.cache = cache
        self._logger = get_logger(self.__class__.__module__)

    def _log_operation(self, message: str, **kwargs: Any) -> None:
        self._logger.info(
            message,
            base_id=self.table.base_id,
            table_name=self.table.table_name,
            **kwargs,
        )

    async def schema(self) -> list[FieldDef]:
        """Refresh the cache and return its field definitions."""
        await self.cache.refresh(self.client, self.table)
        return self.cache.load()

    async def recent_records(self, page_size: int, view: str) -> list[tuple[str, str]]:
        self._log_operation("Listing recent records", page_size=page_size, view=view)
        records = await self.client.list_records(self.table, page_size, view)
        return project_recent(records)

    async def read_record(self, record_id: str) -> list[tuple[str, str]]:
        self._log_operation("Reading record", record_id=record_id)
        return project_whole(await self.client.get_record(self.table, record_id))

    async def read_fields(self, record_id: str, names: tuple[str, ...]) -> list[tuple[str, str]]:
        self._log_operation("Reading record fields", record_id=record_id, fields=list(names))
        return project_selected(await self.client.get_record(self.table, record_id), names)

    async def update_fields(self, record_id: str, fields: dict[str, RecordValue]) -> list[Record]:
        self._log_operation("Updating record", record_id=record_id, fields=list(fields))
        return await self.client.patch_record(self.table, record_id, fields)

    async def create_blank_record(self, writable: list[str]) -> Record:
        """
        Create a record with each of the given writable fields set to null.

        Raises:
            ResponseDecodeError: If the reply holds no record
        """
        self._log_operation("Creating blank record", field_count=len(writable))
        records = await self.client.create_record(
            self.table,
            CreateBlankRecord.build_fields(writable),
        )
        if not records:
            raise ResponseDecodeError("create record", "response contains no records")
        self._logger.debug("Record created", record_id=records[0].id)
        return records[0]

    async def execute(self, intent: Intent) -> Any:
        """
        Dispatch an intent to the matching operation.

        Intents with needs_schema set get the cache refreshed once, up
        front, and work from the field definitions it returns. Other
        intents never touch the cache.
        """
        if not isinstance(intent, Intent):
            raise TypeError(f"Unsupported intent: {type(intent).__name__}")

        fields = await self.schema() if intent.needs_schema else []

        if isinstance(intent, ShowSchema):
            return fields
        if isinstance(intent, ShowWritableFields):
            return classify(fields).writable
        if isinstance(intent, CreateBlankRecord):
            return await self.create_blank_record(classify(fields).writable)
        if isinstance(intent, ShowRecentRecords):
            return await self.recent_records(intent.page_size, intent.view)
        if isinstance(intent, ReadWholeRecord):
            return await self.read_record(intent.record_id)
        if isinstance(intent, ReadSelectedFields):
            return await self.read_fields(intent.record_id, intent.field_names)
        if isinstance(intent, UpdateFields):
            return await self.update_fields(intent.record_id, intent.fields)
        raise TypeError(f"Unsupported intent: {type(intent).__name__}")
