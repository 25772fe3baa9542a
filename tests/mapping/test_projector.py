from __future__ import annotations

from datamapper.domain.mapping.projector import SchemaMapper, project
from datamapper.domain.mapping.schema import MappingSchema
from datamapper.domain.models import NULL_SENTINEL, DiagnosticCode, DiagnosticStage


def test_renames_fields_in_schema_order():
    schema = MappingSchema.from_mapping({"out_name": "name", "out_id": "id"})

    result = project([{"id": "1", "name": "Ann", "extra": "x"}], schema)

    assert result.records == [{"out_name": "Ann", "out_id": "1"}]
    assert list(result.records[0]) == ["out_name", "out_id"]
    assert result.warnings == []


def test_missing_source_field_gives_null_and_warning(caplog):
    schema = MappingSchema.from_mapping(
        {"target_id": "id", "non_existent_field": "this_field_does_not_exist_in_source"}
    )

    with caplog.at_level("WARNING"):
        result = SchemaMapper(schema).project([{"id": 1}, {"id": 2}])

    assert result.records == [
        {"target_id": 1, "non_existent_field": NULL_SENTINEL},
        {"target_id": 2, "non_existent_field": NULL_SENTINEL},
    ]
    assert [w.record_index for w in result.warnings] == [0, 1]
    warning = result.warnings[0]
    assert warning.stage == DiagnosticStage.MAP
    assert warning.code == DiagnosticCode.MISSING_SOURCE_FIELD
    assert warning.field == "non_existent_field"
    assert warning.source_field == "this_field_does_not_exist_in_source"
    assert "this_field_does_not_exist_in_source" in caplog.text
    assert "non_existent_field" in caplog.text


def test_present_null_value_is_not_missing():
    schema = MappingSchema.from_mapping({"x": "a"})

    result = project([{"a": None}], schema)

    assert result.records == [{"x": None}]
    assert result.warnings == []


def test_empty_dataset():
    schema = MappingSchema.from_mapping({"x": "a"})

    assert project([], schema).records == []


def test_empty_schema_gives_empty_records():
    result = project([{"a": 1}, {"b": 2}], MappingSchema())

    assert result.records == [{}, {}]


def test_same_source_feeds_several_targets():
    schema = MappingSchema.from_mapping({"first": "id", "second": "id", "third": "gone"})

    result = project([{"id": 7}], schema)

    assert result.records == [{"first": 7, "second": 7, "third": None}]
    assert len(result.warnings) == 1


def test_rows_with_different_fields_keep_output_shape():
    schema = MappingSchema.from_mapping({"x": "a", "y": "b"})
    rows = [{"a": 1, "b": 2}, {"a": 3}, {"c": 4}]

    result = project(rows, schema)

    assert len(result.records) == len(rows)
    assert all(list(record) == ["x", "y"] for record in result.records)
    assert len(result.warnings) == 3
