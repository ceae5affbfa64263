"""
HTTP Client for the Airtable REST API.

Provides an async client for the five operations the CLI performs.
Every request carries the bearer credential. Non-success statuses raise
RemoteError with the raw body; undecodable success bodies raise
ResponseDecodeError.
"""

from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from rau.core.config import get_app_config, get_credential
from rau.core.exceptions import RemoteError, ResponseDecodeError
from rau.core.logging import get_logger
from rau.schemas.airtable import (
    FieldDef,
    Record,
    RecordsResponse,
    RecordValue,
    TableRef,
    TablesResponse,
)

logger = get_logger(__name__)

DEFAULT_BASE_URL = "https://api.airtable.com/v0"

ModelT = TypeVar("ModelT", bound=BaseModel)


def _get_client_config() -> tuple[str, float | None]:
    """Load base URL and timeout from application.yaml."""
    api = get_app_config().application.api
    return api.base_url, api.timeout


def _segment(value: str) -> str:
    return quote(value, safe="")


class AirtableClient:
    """
    HTTP client for Airtable API communication.

    Usage:
        client = AirtableClient(api_key="pat...")
        fields = await client.list_fields(table)
        record = await client.get_record(table, "rec123")
        await client.close()
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            api_key: Bearer credential. If None, read from the settings.
            base_url: API base URL. If None, read from application.yaml.
            timeout: Request timeout in seconds. If None, read from
                application.yaml, where null means wait indefinitely.
        """
        if base_url is None:
            base_url, config_timeout = _get_client_config()
            if timeout is None:
                timeout = config_timeout

        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key if api_key is not None else get_credential()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "AirtableClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def request(
        self,
        method: str,
        path: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """
        Make an HTTP request to the API.

        Args:
            method: HTTP method (GET, POST, PATCH)
            path: Path below the base URL (e.g., /appX/Clients)
            **kwargs: Additional arguments for httpx

        Returns:
            httpx.Response

        Raises:
            httpx.HTTPError: On transport failure
        """
        client = await self._get_client()

        logger.debug("API request", method=method, path=path)

        try:
            response = await client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error("API request failed", method=method, path=path, error=str(e))
            raise

        logger.debug(
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )
        return response

    async def _call(
        self,
        operation: str,
        model: type[ModelT],
        method: str,
        path: str,
        **kwargs: Any,
    ) -> ModelT:
        """Perform a request and decode a successful body into model."""
        response = await self.request(method, path, **kwargs)
        if not response.is_success:
            raise RemoteError(operation, response.status_code, response.text)
        try:
            return model.model_validate_json(response.text)
        except ValidationError as e:
            raise ResponseDecodeError(operation, str(e)) from e

    def _table_path(self, table: TableRef) -> str:
        return f"/{_segment(table.base_id)}/{_segment(table.table_name)}"

    async def list_fields(self, table: TableRef) -> list[FieldDef]:
        """Fetch the field definitions of a table. Empty when the table is absent."""
        tables = await self._call(
            "fetch fields",
            TablesResponse,
            "GET",
            f"/meta/bases/{_segment(table.base_id)}/tables",
        )
        for entry in tables.tables:
            if entry.name == table.table_name:
                return entry.fields

        logger.warning(
            "Table not found in base metadata",
            base_id=table.base_id,
            table_name=table.table_name,
        )
        return []

    async def list_records(self, table: TableRef, page_size: int, view: str) -> list[Record]:
        """Fetch up to page_size records from a view."""
        response = await self._call(
            "query recent records",
            RecordsResponse,
            "GET",
            self._table_path(table),
            params={"maxRecords": page_size, "view": view},
        )
        return response.records

    async def get_record(self, table: TableRef, record_id: str) -> Record:
        """Fetch one record by id."""
        return await self._call(
            "query record",
            Record,
            "GET",
            f"{self._table_path(table)}/{_segment(record_id)}",
        )

    async def patch_record(
        self,
        table: TableRef,
        record_id: str,
        fields: dict[str, RecordValue],
    ) -> list[Record]:
        """Update the given fields of one record."""
        response = await self._call(
            "update record",
            RecordsResponse,
            "PATCH",
            self._table_path(table),
            json={"records": [{"id": record_id, "fields": fields}]},
        )
        return response.records

    async def create_record(self, table: TableRef, fields: dict[str, RecordValue]) -> list[Record]:
        """Create one record with the given fields."""
        response = await self._call(
            "create record",
            RecordsResponse,
            "POST",
            self._table_path(table),
            json={"records": [{"fields": fields}]},
        )
        return response.records
