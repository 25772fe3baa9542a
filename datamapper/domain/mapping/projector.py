from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from datamapper.domain.mapping.schema import MappingSchema
from datamapper.domain.models import (
    NULL_SENTINEL,
    DiagnosticCode,
    DiagnosticItem,
    DiagnosticStage,
    MappedDataset,
    Record,
)

logger = logging.getLogger(__name__)


@dataclass
class ProjectionResult:
    """
    Назначение:
        Результат проекции набора записей на схему: записи + предупреждения.
    """

    records: MappedDataset
    warnings: list[DiagnosticItem] = field(default_factory=list)


class SchemaMapper:
    """
    Назначение/ответственность:
        Переименование полей записей по MappingSchema.

    Инварианты/гарантии:
        - Одна выходная запись на каждую входную, в том же порядке.
        - Ключи выходной записи совпадают с целевыми полями схемы и идут в её порядке.
        - Отсутствующее исходное поле -> NULL_SENTINEL и предупреждение, без исключения.
        - Значения копируются как есть, без приведения типов.
    """

    def __init__(self, schema: MappingSchema, log: logging.Logger | None = None) -> None:
        self.schema = schema
        self.logger = log or logger

    def project(self, records: Sequence[Record]) -> ProjectionResult:
        mapped: MappedDataset = []
        warnings: list[DiagnosticItem] = []

        for index, record in enumerate(records):
            out: Record = {}
            for target_field, source_field in self.schema:
                if source_field in record:
                    out[target_field] = record[source_field]
                    continue
                out[target_field] = NULL_SENTINEL
                warnings.append(self._missing_field(index, target_field, source_field))
            mapped.append(out)

        return ProjectionResult(records=mapped, warnings=warnings)

    def _missing_field(self, index: int, target_field: str, source_field: str) -> DiagnosticItem:
        message = (
            f"Source field '{source_field}' not found in input record #{index}. "
            f"Setting target field '{target_field}' to null."
        )
        self.logger.warning(message)
        return DiagnosticItem(
            stage=DiagnosticStage.MAP,
            code=DiagnosticCode.MISSING_SOURCE_FIELD,
            field=target_field,
            message=message,
            record_index=index,
            source_field=source_field,
        )


def project(records: Sequence[Record], schema: MappingSchema) -> ProjectionResult:
    return SchemaMapper(schema).project(records)
