from __future__ import annotations

from collections import OrderedDict

import pytest

from datamapper.domain.exceptions import InvalidRecordShape, InvalidSourceArgument
from datamapper.infra.sources.record_collection import RecordCollectionReader


def test_keyed_records_are_loaded_in_order():
    rows = [
        {"db_user_id": 101, "db_username": "alice"},
        OrderedDict([("db_user_id", 102), ("db_username", "bob")]),
    ]

    result = RecordCollectionReader().read(rows, ",")

    assert result.records == [
        {"db_user_id": 101, "db_username": "alice"},
        {"db_user_id": 102, "db_username": "bob"},
    ]


def test_empty_collection():
    assert RecordCollectionReader().read([], ",").records == []


def test_records_are_copied():
    rows = [{"a": 1}]

    result = RecordCollectionReader().read(rows, ",")
    rows[0]["a"] = 2

    assert result.records == [{"a": 1}]


def test_list_element_fails_whole_collection():
    rows = [{"a": 1}, ["value1", "value2"], {"a": 3}]

    with pytest.raises(InvalidRecordShape) as exc_info:
        RecordCollectionReader().read(rows, ",")

    assert exc_info.value.index == 1


@pytest.mark.parametrize("element", [("a", 1), "abc", 5, None])
def test_non_mapping_elements_fail(element):
    with pytest.raises(InvalidRecordShape):
        RecordCollectionReader().read([element], ",")


@pytest.mark.parametrize("source", ["a,b", {"a": 1}, 3, None, b"bytes"])
def test_non_sequence_source_is_rejected(source):
    with pytest.raises(InvalidSourceArgument):
        RecordCollectionReader().read(source, ",")


def test_tuple_of_records_is_accepted():
    result = RecordCollectionReader().read(({"a": 1},), ",")

    assert result.records == [{"a": 1}]
