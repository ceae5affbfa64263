"""
Root Pytest Fixtures.

Every test runs against a private configuration root built from the
repository's config/ directory, with RAU_HOME pointing at it and the
working directory moved into a temporary folder so the schema cache
never lands in the checkout.
"""

import logging
import shutil
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

from rau.core.config import get_app_config, get_settings
from rau.schemas.airtable import TableRef

PROJECT_ROOT = Path(__file__).parent.parent
TEST_API_KEY = "pat-test-key"


def _clear_caches() -> None:
    get_settings.cache_clear()
    get_app_config.cache_clear()
    structlog.contextvars.clear_contextvars()


@pytest.fixture(autouse=True)
def config_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Provide an isolated configuration root and working directory."""
    root = tmp_path / "rau-home"
    shutil.copytree(PROJECT_ROOT / "config" / "settings", root / "settings")
    (root / ".env").write_text(f"AIRTABLE_API_KEY={TEST_API_KEY}\n")

    workdir = tmp_path / "work"
    workdir.mkdir()

    monkeypatch.setenv("RAU_HOME", str(root))
    monkeypatch.delenv("AIRTABLE_API_KEY", raising=False)
    monkeypatch.chdir(workdir)

    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level

    _clear_caches()
    yield root
    _clear_caches()

    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def table() -> TableRef:
    """The table behind the sample 'clients' configuration."""
    return TableRef(base_id="appXXXXXXXXXXXXXX", table_name="Clients")


@pytest.fixture
def metadata_payload() -> dict:
    """A base metadata response with a mix of writable and computed fields."""
    return {
        "tables": [
            {
                "id": "tblProjects",
                "name": "Projects",
                "fields": [{"id": "fld0", "name": "Title", "type": "singleLineText"}],
            },
            {
                "id": "tblClients",
                "name": "Clients",
                "primaryFieldId": "fld1",
                "fields": [
                    {"id": "fld1", "name": "Name", "type": "singleLineText"},
                    {"id": "fld2", "name": "Status", "type": "singleSelect", "options": {"choices": []}},
                    {"id": "fld3", "name": "Total", "type": "formula"},
                    {"id": "fld4", "name": "Created", "type": "createdTime"},
                ],
            },
        ],
    }
