import logging

from datamapper.infra.artifacts.report_writer import createEmptyReport
from datamapper.usecases.dataset_mapper import DataSetMapper
from datamapper.usecases.mapping_usecase import MappingUseCase


def _run(rows, schema, items_limit=None, include_input=False):
    usecase = MappingUseCase(include_input=include_input)
    report = createEmptyReport(runId="run-1", command="map", configSources=[], itemsLimit=items_limit)
    session = DataSetMapper(schema)
    result = usecase.run(
        session=session,
        kind="record-collection",
        source=rows,
        delimiter=",",
        logger=logging.getLogger("mapping-test"),
        run_id="run-1",
        report=report,
    )
    return result, report


def test_reports_mapped_rows():
    result, report = _run([{"id": 1}, {"id": 2}], {"client_id": "id"})

    assert result.exit_code == 0
    assert result.mapped_data == [{"client_id": 1}, {"client_id": 2}]
    assert report.summary.rows_loaded == 2
    assert report.summary.rows_mapped == 2
    assert report.summary.warnings == 0
    assert report.meta.source == "<list>"
    assert report.meta.mapping_schema == {"client_id": "id"}
    assert report.input_data is None


def test_reports_missing_fields_as_items():
    _result, report = _run([{"id": 1}], {"client_id": "id", "client_name": "name"})

    assert report.summary.missing_fields == 1
    assert report.items[0]["code"] == "MISSING_SOURCE_FIELD"
    assert report.items[0]["source_field"] == "name"
    assert report.items[0]["record_index"] == 0


def test_items_are_truncated_by_limit():
    _result, report = _run([{"a": 1}] * 5, {"x": "missing"}, items_limit=2)

    assert report.summary.warnings == 5
    assert len(report.items) == 2
    assert report.meta.items_truncated is True


def test_include_input():
    _result, report = _run([{"a": 1}], {"x": "a"}, include_input=True)

    assert report.input_data == [{"a": 1}]
