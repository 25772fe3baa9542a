from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

Record = dict[str, Any]
RawDataset = list[Record]
MappedDataset = list[Record]

# Значение целевого поля, если исходного поля нет в записи.
NULL_SENTINEL = None


class DiagnosticStage(str, Enum):
    """
    Назначение:
        Источник диагностического события в пайплайне.
    """

    EXTRACT = "EXTRACT"
    MAP = "MAP"


class DiagnosticCode(str, Enum):
    ROW_COLUMN_MISMATCH = "ROW_COLUMN_MISMATCH"
    MISSING_SOURCE_FIELD = "MISSING_SOURCE_FIELD"


@dataclass(frozen=True)
class DiagnosticItem:
    """
    Назначение:
        Нефатальное диагностическое событие (пропущенная строка, отсутствующее поле).

    Поля:
        stage: DiagnosticStage
        code: DiagnosticCode
        field: имя целевого поля (для MAP) или None
        message: текст для лога/отчёта
        record_index: позиция записи в RawDataset (для MAP)
        line_no: номер строки файла (для EXTRACT)
        source_field: имя исходного поля (для MAP)
    """

    stage: DiagnosticStage
    code: DiagnosticCode
    field: str | None
    message: str
    record_index: int | None = None
    line_no: int | None = None
    source_field: str | None = None
