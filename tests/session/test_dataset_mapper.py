from __future__ import annotations

import pytest

from datamapper import (
    DataSetMapper,
    InvalidRecordShape,
    InvalidSourceArgument,
    MalformedInput,
    SourceNotFound,
    UnsupportedSourceKind,
)
from datamapper.domain.models import DiagnosticStage
from datamapper.domain.source_kind import SourceKind
from datamapper.infra.sources.loader import build_readers


@pytest.fixture
def users_csv(tmp_path):
    path = tmp_path / "users.csv"
    path.write_text(
        "id,name,email,status\n1,John Doe,john@example.com,active\n2,Jane Smith,jane@example.com,inactive\n",
        encoding="utf-8",
    )
    return str(path)


def test_delimited_scenario(tmp_path):
    path = tmp_path / "in.csv"
    path.write_text("id,name\n1,Ann\n2,Bob\n", encoding="utf-8")
    mapper = DataSetMapper({"out_id": "id", "out_name": "name"})

    mapper.load("delimited-file", str(path), ",")
    mapped = mapper.map()

    assert mapped == [{"out_id": "1", "out_name": "Ann"}, {"out_id": "2", "out_name": "Bob"}]
    assert mapper.get_mapped_data() == mapped


def test_json_scenario():
    mapper = DataSetMapper({"x": "a"})

    mapper.load("json", '[{"a":1},{"a":2}]')

    assert mapper.map() == [{"x": 1}, {"x": 2}]


def test_single_json_object_loads_one_record():
    mapper = DataSetMapper({"x": "a"})

    mapper.load("json", '{"a":1}')

    assert len(mapper.get_input_data()) == 1


def test_well_formed_rows_keep_header_fields(users_csv):
    mapper = DataSetMapper({})

    mapper.load("csv", users_csv)

    data = mapper.get_input_data()
    assert len(data) == 2
    assert all(list(record) == ["id", "name", "email", "status"] for record in data)


def test_malformed_rows_are_dropped_without_raising(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("id,name\n1,Ann\n2\n3,Cid,extra\n4,Dee\n", encoding="utf-8")
    mapper = DataSetMapper({"n": "name"})

    mapper.load("delimited-file", str(path))

    assert len(mapper.get_input_data()) == 5 - 1 - 2
    assert [w.stage for w in mapper.load_warnings] == [DiagnosticStage.EXTRACT] * 2


def test_record_collection_with_list_element_fails_and_stays_empty():
    mapper = DataSetMapper({"client_id": "db_user_id"})

    with pytest.raises(InvalidRecordShape):
        mapper.load("array", [{"db_user_id": 101}, ["value1", "value2"]])

    assert mapper.get_input_data() == []
    assert mapper.get_mapped_data() == []


def test_failed_load_discards_previous_state(users_csv):
    mapper = DataSetMapper({"client_id": "id"})
    mapper.load("csv", users_csv)
    mapper.map()

    with pytest.raises(SourceNotFound):
        mapper.load("csv", users_csv + ".missing")

    assert mapper.get_input_data() == []
    assert mapper.get_mapped_data() == []


def test_second_load_replaces_raw_and_mapped(users_csv):
    mapper = DataSetMapper({"client_id": "id", "code": "product_id"})
    mapper.load("csv", users_csv)
    mapper.map()

    mapper.load("json", '[{"product_id": "P001"}]')

    assert mapper.get_input_data() == [{"product_id": "P001"}]
    assert mapper.get_mapped_data() == []
    assert "id" not in mapper.get_input_data()[0]
    assert mapper.map() == [{"client_id": None, "code": "P001"}]


def test_map_is_repeatable(users_csv):
    mapper = DataSetMapper({"client_id": "id", "missing": "nope"})
    mapper.load("csv", users_csv)

    first = mapper.map()
    second = mapper.map()

    assert first == second
    assert len(mapper.map_warnings) == 2


def test_map_without_load_is_empty():
    assert DataSetMapper({"x": "a"}).map() == []


def test_projection_shape_holds_for_mixed_records():
    schema = {"a2": "a", "b2": "b", "z2": "z"}
    mapper = DataSetMapper(schema)
    mapper.load("record-collection", [{"a": 1}, {"b": 2, "c": 3}, {}])

    mapped = mapper.map()

    assert len(mapped) == 3
    assert all(list(record) == list(schema) for record in mapped)
    assert mapped[2] == {"a2": None, "b2": None, "z2": None}


def test_snapshots_are_copies():
    mapper = DataSetMapper({"x": "a"})
    mapper.load("json", '[{"a": {"nested": 1}}]')
    mapper.map()

    mapper.get_input_data()[0]["a"]["nested"] = 2
    mapper.get_mapped_data()[0]["x"] = "changed"

    assert mapper.get_input_data() == [{"a": {"nested": 1}}]
    assert mapper.get_mapped_data() == [{"x": {"nested": 1}}]


@pytest.mark.parametrize("kind", ["CSV", "Delimited-File", "JSON", "Txt", "ARRAY"])
def test_kind_is_case_insensitive(kind, users_csv):
    mapper = DataSetMapper({})
    source = [{"a": 1}] if kind.lower() == "array" else users_csv
    if kind.lower() == "json":
        source = '[{"a": 1}]'

    mapper.load(kind, source)

    assert mapper.get_input_data()


def test_unsupported_kind():
    with pytest.raises(UnsupportedSourceKind) as exc_info:
        DataSetMapper({}).load("xml", "<a/>")

    assert "record-collection" in str(exc_info.value)


def test_file_kind_with_list_source():
    with pytest.raises(InvalidSourceArgument):
        DataSetMapper({}).load("delimited-file", [{"a": 1}])


def test_malformed_json():
    mapper = DataSetMapper({})

    with pytest.raises(MalformedInput):
        mapper.load("json", '{"product_id": "P003", "extra_comma":}')

    assert mapper.diagnostics == []


@pytest.mark.parametrize("kind", list(SourceKind))
def test_every_kind_has_a_reader(kind):
    assert kind in build_readers()
