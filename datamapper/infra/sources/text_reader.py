from __future__ import annotations

import logging
from typing import Any

from datamapper.domain.exceptions import InvalidSourceArgument
from datamapper.domain.models import DiagnosticItem, RawDataset
from datamapper.domain.ports.sources import LoadResult
from datamapper.infra.sources.csv_utils import (
    combineRow,
    parseHeader,
    skippedRowWarning,
    splitLine,
    validateDelimiter,
)
from datamapper.infra.sources.file_access import DEFAULT_ENCODING, readSourceText, requireExistingFile

logger = logging.getLogger(__name__)


class LineDelimitedFileReader:
    """
    Назначение/ответственность:
        Читает текстовый файл построчно: пустые строки отбрасываются,
        первая оставшаяся строка - заголовок, каждая строка разбирается отдельно
        (поле в кавычках не может переходить на следующую строку).
    """

    label = "TXT"

    def __init__(self, encoding: str = DEFAULT_ENCODING, log: logging.Logger | None = None) -> None:
        self.encoding = encoding
        self.logger = log or logger

    def read(self, source: Any, delimiter: str) -> LoadResult:
        if not isinstance(source, str):
            raise InvalidSourceArgument("TXT source must be a file path string.")
        delimiter = validateDelimiter(delimiter)
        requireExistingFile(source, self.label)

        content = readSourceText(source, self.label, self.encoding)
        numbered = [
            (line_no, line.rstrip("\r\n"))
            for line_no, line in enumerate(content.split("\n"), start=1)
            if line.strip()
        ]
        if not numbered:
            return LoadResult(records=[])

        header_no, header_line = numbered[0]
        header = parseHeader(splitLine(header_line, delimiter, source, header_no), source)

        records: RawDataset = []
        warnings: list[DiagnosticItem] = []
        for line_no, line in numbered[1:]:
            row = splitLine(line, delimiter, source, line_no)
            record = combineRow(header, row)
            if record is None:
                warnings.append(
                    skippedRowWarning(self.logger, source, self.label, line_no, len(header), len(row), line)
                )
                continue
            records.append(record)

        return LoadResult(records=records, warnings=warnings)
