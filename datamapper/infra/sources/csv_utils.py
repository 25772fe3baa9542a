from __future__ import annotations

import csv
import logging
import sys
from typing import Sequence

from datamapper.common.sanitize import truncateText
from datamapper.domain.exceptions import InvalidSourceArgument, SourceUnreadable
from datamapper.domain.models import DiagnosticCode, DiagnosticItem, DiagnosticStage, Record

# Кавычки по умолчанию csv-модуля: поле в "...", "" внутри поля - литеральная кавычка.
QUOTE_CHAR = '"'


def raiseFieldSizeLimit() -> int:
    """
    Назначение:
        Снимает ограничение csv-модуля на длину поля (по умолчанию 131072 символа).
        На платформах с 32-битным C long sys.maxsize не помещается, лимит уменьшается до допустимого.
    """
    limit = sys.maxsize
    while True:
        try:
            csv.field_size_limit(limit)
            return limit
        except OverflowError:
            limit //= 10


raiseFieldSizeLimit()


def validateDelimiter(delimiter: object) -> str:
    """
    Назначение:
        Проверяет, что разделитель - один символ, отличный от кавычки и перевода строки.
    """
    if not isinstance(delimiter, str) or len(delimiter) != 1:
        raise InvalidSourceArgument(f"Delimiter must be a single character, got {delimiter!r}")
    if delimiter in (QUOTE_CHAR, "\r", "\n"):
        raise InvalidSourceArgument(f"Delimiter {delimiter!r} is not allowed")
    return delimiter


def splitLine(line: str, delimiter: str, source: str, line_no: int) -> list[str]:
    """
    Назначение:
        Разбивает одну строку на поля по правилам CSV-кавычек.
        Кавычка, открытая и не закрытая в строке, поглощает остаток строки.
    """
    try:
        for row in csv.reader([line], delimiter=delimiter, quotechar=QUOTE_CHAR, strict=False):
            return row
    except csv.Error as exc:
        raise SourceUnreadable(
            f"Could not parse line {line_no} of: {source} ({exc})",
            source=source,
        ) from exc
    return []


def parseHeader(fields: Sequence[str] | None, source: str) -> list[str]:
    """
    Назначение:
        Проверяет строку заголовка: она есть и имена полей уникальны.
    """
    if not fields:
        raise SourceUnreadable(
            f"Could not read header from: {source}. File might be empty or malformed.",
            source=source,
        )
    header = list(fields)
    seen: set[str] = set()
    for name in header:
        if name in seen:
            raise SourceUnreadable(f"Duplicate header field '{name}' in: {source}", source=source)
        seen.add(name)
    return header


def combineRow(header: Sequence[str], fields: Sequence[str]) -> Record | None:
    if len(header) != len(fields):
        return None
    return dict(zip(header, fields))


def skippedRowWarning(
    logger: logging.Logger,
    source: str,
    kind_label: str,
    line_no: int,
    expected: int,
    got: int,
    raw_line: str,
) -> DiagnosticItem:
    """
    Назначение:
        Логирует и возвращает предупреждение о строке с неверным числом колонок.
    """
    message = (
        f"Skipping malformed {kind_label} row at line {line_no} (column count mismatch: "
        f"expected {expected}, got {got}) in {source}: {truncateText(raw_line, 200)}"
    )
    logger.warning(message)
    return DiagnosticItem(
        stage=DiagnosticStage.EXTRACT,
        code=DiagnosticCode.ROW_COLUMN_MISMATCH,
        field=None,
        message=message,
        line_no=line_no,
    )
