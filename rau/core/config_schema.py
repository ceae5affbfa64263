"""
Configuration Schemas.

Pydantic models defining the expected structure of each YAML config file.
Used by AppConfig to validate configuration at load time. If a YAML file
has missing keys, wrong types, or unknown fields, a clear ValidationError
is raised at startup instead of a cryptic KeyError later on.

Each top-level class corresponds to one file in <config root>/settings/:
    ApplicationSchema  → application.yaml
    TablesSchema       → tables.yaml
    LoggingSchema      → logging.yaml
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _StrictBase(BaseModel):
    """Base with extra='forbid' so unknown YAML keys are caught immediately."""

    model_config = ConfigDict(extra="forbid")


# =============================================================================
# application.yaml
# =============================================================================


class ApiSchema(_StrictBase):
    base_url: str
    timeout: float | None = None


class RecentSchema(_StrictBase):
    page_size: int = Field(gt=0)
    view: str


class CacheSchema(_StrictBase):
    filename: str
    per_table: bool = False


class ApplicationSchema(_StrictBase):
    name: str
    version: str
    description: str
    api: ApiSchema
    recent: RecentSchema
    cache: CacheSchema


# =============================================================================
# tables.yaml
# =============================================================================


class TableEntrySchema(_StrictBase):
    base_id: str
    table_name: str


class TablesSchema(_StrictBase):
    tables: dict[str, TableEntrySchema] = Field(default_factory=dict)


# =============================================================================
# logging.yaml
# =============================================================================


class ConsoleHandlerSchema(_StrictBase):
    enabled: bool


class FileHandlerSchema(_StrictBase):
    enabled: bool
    path: str
    max_bytes: int
    backup_count: int


class HandlersSchema(_StrictBase):
    console: ConsoleHandlerSchema
    file: FileHandlerSchema


class LoggingSchema(_StrictBase):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    format: Literal["console", "json"]
    handlers: HandlersSchema
