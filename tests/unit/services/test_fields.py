"""Unit tests for field classification."""

from rau.schemas.airtable import FieldDef
from rau.services.fields import COMPUTED_FIELD_TYPES, classify, is_computed


def _fields(*pairs: tuple[str, str]) -> list[FieldDef]:
    return [FieldDef(name=name, type=type_) for name, type_ in pairs]


class TestComputedTypes:
    """Tests for the closed set of computed field types."""

    def test_contains_exactly_six_types(self):
        assert COMPUTED_FIELD_TYPES == frozenset({
            "computed", "formula", "rollup", "lookup", "lastModifiedTime", "createdTime",
        })

    def test_unknown_type_is_writable(self):
        assert not is_computed(FieldDef(name="X", type="someFutureType"))


class TestClassify:
    """Tests for classify()."""

    def test_partitions_in_schema_order(self):
        fields = _fields(
            ("Name", "singleLineText"),
            ("Total", "formula"),
            ("Status", "singleSelect"),
            ("Created", "createdTime"),
            ("Tags", "multipleSelects"),
        )

        result = classify(fields)

        assert result.writable == ["Name", "Status", "Tags"]
        assert result.computed == ["Total", "Created"]

    def test_union_equals_input_and_sets_are_disjoint(self):
        types = sorted(COMPUTED_FIELD_TYPES) + ["singleLineText", "number", "checkbox"]
        fields = _fields(*[(f"F{i}", t) for i, t in enumerate(types)])

        result = classify(fields)

        assert set(result.writable).isdisjoint(result.computed)
        assert sorted(result.writable + result.computed) == sorted(f.name for f in fields)
        assert len(result.computed) == len(COMPUTED_FIELD_TYPES)

    def test_empty_input(self):
        result = classify([])
        assert result.writable == []
        assert result.computed == []
