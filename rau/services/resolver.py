"""
Command Resolution.

Decides from the positional arguments and flags what a `rau` invocation
should do. Resolution is pure: it validates the arguments and returns an
intent carrying its payload, and never touches the cache or the network.

Rules are evaluated in order and the first match wins:

    1. --schema                            → ShowSchema
    2. --fields                            → ShowWritableFields
    3. --recent                            → ShowRecentRecords
    4. record id, no tokens                → ReadWholeRecord
    5. record id, no token contains '='    → ReadSelectedFields
    6. record id, some token contains '='  → UpdateFields
    7. no record id                        → CreateBlankRecord

In rule 6 every token must be `key=value`; a single bare token rejects
the whole batch with InvalidFieldFormatError.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import ClassVar

from rau.core.exceptions import ConflictingFlagsError, InvalidFieldFormatError
from rau.schemas.airtable import FieldToken, RecordValue
from rau.services.codec import encode

RECENT_PAGE_SIZE = 100
RECENT_VIEW = "Grid view"


@dataclass(frozen=True)
class CommandRequest:
    """Raw command-line input, minus the configuration name."""

    record_id: str | None = None
    tokens: tuple[str, ...] = ()
    schema: bool = False
    fields: bool = False
    recent: bool = False


@dataclass(frozen=True)
class ResolverOptions:
    page_size: int = RECENT_PAGE_SIZE
    view: str = RECENT_VIEW


@dataclass(frozen=True)
class Intent:
    """Base class for resolved intents."""

    needs_schema: ClassVar[bool] = False


@dataclass(frozen=True)
class ShowSchema(Intent):
    needs_schema: ClassVar[bool] = True


@dataclass(frozen=True)
class ShowWritableFields(Intent):
    needs_schema: ClassVar[bool] = True


@dataclass(frozen=True)
class ShowRecentRecords(Intent):
    page_size: int = RECENT_PAGE_SIZE
    view: str = RECENT_VIEW


@dataclass(frozen=True)
class ReadWholeRecord(Intent):
    record_id: str


@dataclass(frozen=True)
class ReadSelectedFields(Intent):
    record_id: str
    field_names: tuple[str, ...]


@dataclass(frozen=True)
class UpdateFields(Intent):
    record_id: str
    fields: dict[str, RecordValue] = field(default_factory=dict)


@dataclass(frozen=True)
class CreateBlankRecord(Intent):
    """
    Create a record with every writable field set to null.

    The writable names come from the schema cache at execution time,
    after it has been refreshed, so the payload is built on demand.
    """

    needs_schema: ClassVar[bool] = True

    @staticmethod
    def build_fields(writable: list[str]) -> dict[str, RecordValue]:
        return {name: None for name in writable}


def encode_update(tokens: tuple[str, ...]) -> dict[str, RecordValue]:
    """
    Encode an update batch. Later duplicates of a key win.

    Raises:
        InvalidFieldFormatError: On the first token without '='
    """
    encoded: dict[str, RecordValue] = {}
    for token in tokens:
        parsed = FieldToken.parse(token)
        if parsed is None:
            raise InvalidFieldFormatError(token)
        encoded[parsed.key] = encode(parsed.raw_value)
    return encoded


def _is_update(tokens: tuple[str, ...]) -> bool:
    return any("=" in token for token in tokens)


Rule = tuple[
    str,
    Callable[[CommandRequest], bool],
    Callable[[CommandRequest, ResolverOptions], Intent],
]

RULES: tuple[Rule, ...] = (
    (
        "schema",
        lambda r: r.schema,
        lambda r, o: ShowSchema(),
    ),
    (
        "fields",
        lambda r: r.fields,
        lambda r, o: ShowWritableFields(),
    ),
    (
        "recent",
        lambda r: r.recent,
        lambda r, o: ShowRecentRecords(page_size=o.page_size, view=o.view),
    ),
    (
        "read whole record",
        lambda r: r.record_id is not None and not r.tokens,
        lambda r, o: ReadWholeRecord(record_id=r.record_id),
    ),
    (
        "read selected fields",
        lambda r: r.record_id is not None and not _is_update(r.tokens),
        lambda r, o: ReadSelectedFields(record_id=r.record_id, field_names=tuple(r.tokens)),
    ),
    (
        "update fields",
        lambda r: r.record_id is not None,
        lambda r, o: UpdateFields(record_id=r.record_id, fields=encode_update(r.tokens)),
    ),
    (
        "create blank record",
        lambda r: True,
        lambda r, o: CreateBlankRecord(),
    ),
)


def check_flags(request: CommandRequest) -> None:
    """Reject flag combinations that cannot be resolved."""
    if request.schema and request.fields:
        raise ConflictingFlagsError()


def resolve(request: CommandRequest, options: ResolverOptions | None = None) -> Intent:
    """
    Select the intent for a request.

    Raises:
        ConflictingFlagsError: If --schema and --fields are both set
        InvalidFieldFormatError: If an update batch has a bare token
    """
    check_flags(request)
    opts = options or ResolverOptions()
    for _name, matches, build in RULES:
        if matches(request):
            return build(request, opts)
    raise AssertionError("resolution rules are exhaustive")
