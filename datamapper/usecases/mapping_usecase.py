from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from datamapper.domain.models import DiagnosticCode, DiagnosticItem, MappedDataset, RawDataset
from datamapper.infra.artifacts.report_writer import Report, addReportItem
from datamapper.infra.logging.setup import logEvent
from datamapper.usecases.dataset_mapper import DataSetMapper


@dataclass
class MappingRunResult:
    exit_code: int
    input_data: RawDataset = field(default_factory=list)
    mapped_data: MappedDataset = field(default_factory=list)


def diagnosticToItem(item: DiagnosticItem) -> dict[str, Any]:
    return {
        "stage": item.stage.value,
        "code": item.code.value,
        "field": item.field,
        "source_field": item.source_field,
        "record_index": item.record_index,
        "line_no": item.line_no,
        "message": item.message,
    }


class MappingUseCase:
    """
    Назначение/ответственность:
        Use-case одного запуска: load -> (map) -> заполнение отчёта.
        Фатальные ошибки (DataMapperError) не перехватывает.
    """

    def __init__(self, include_input: bool = False, map_records: bool = True) -> None:
        self.include_input = include_input
        self.map_records = map_records

    def run(
        self,
        session: DataSetMapper,
        kind: str,
        source: Any,
        delimiter: str,
        logger: logging.Logger,
        run_id: str,
        report: Report,
    ) -> MappingRunResult:
        report.meta.source_kind = kind
        report.meta.source = source if isinstance(source, str) else f"<{type(source).__name__}>"
        report.meta.delimiter = delimiter
        report.meta.mapping_schema = session.mapping_schema.as_dict()

        session.load(kind, source, delimiter)
        input_data = session.get_input_data()
        report.summary.rows_loaded = len(input_data)
        report.summary.rows_skipped = len(session.load_warnings)
        logEvent(
            logger,
            logging.INFO,
            run_id,
            "load",
            f"load done kind={kind} rows_loaded={len(input_data)} rows_skipped={len(session.load_warnings)}",
        )

        mapped_data: MappedDataset = []
        if self.map_records:
            mapped_data = session.map()
            report.summary.rows_mapped = len(mapped_data)
            report.summary.missing_fields = sum(
                1 for item in session.map_warnings if item.code == DiagnosticCode.MISSING_SOURCE_FIELD
            )
            logEvent(
                logger,
                logging.INFO,
                run_id,
                "map",
                f"map done rows_mapped={len(mapped_data)} missing_fields={report.summary.missing_fields}",
            )

        diagnostics = session.diagnostics
        report.summary.warnings = len(diagnostics)
        for item in diagnostics:
            addReportItem(report, diagnosticToItem(item))

        if self.include_input:
            report.input_data = input_data

        return MappingRunResult(exit_code=0, input_data=input_data, mapped_data=mapped_data)
