from __future__ import annotations

import csv
import logging
from typing import Any

from datamapper.domain.exceptions import InvalidSourceArgument, SourceUnreadable
from datamapper.domain.models import DiagnosticItem, RawDataset
from datamapper.domain.ports.sources import LoadResult
from datamapper.infra.sources.csv_utils import (
    QUOTE_CHAR,
    combineRow,
    parseHeader,
    skippedRowWarning,
    validateDelimiter,
)
from datamapper.infra.sources.file_access import DEFAULT_ENCODING, openSourceText, requireExistingFile

logger = logging.getLogger(__name__)


class DelimitedFileReader:
    """
    Назначение/ответственность:
        Читает CSV-подобный файл: первая запись - заголовок, остальные - данные.

    Инварианты/гарантии:
        - Кавычки экранируют разделитель и перевод строки, "" внутри поля - литеральная кавычка.
        - Строка с числом полей != заголовку пропускается с предупреждением.
    """

    label = "CSV"

    def __init__(self, encoding: str = DEFAULT_ENCODING, log: logging.Logger | None = None) -> None:
        self.encoding = encoding
        self.logger = log or logger

    def read(self, source: Any, delimiter: str) -> LoadResult:
        if not isinstance(source, str):
            raise InvalidSourceArgument("CSV source must be a file path string.")
        delimiter = validateDelimiter(delimiter)
        requireExistingFile(source, self.label)

        records: RawDataset = []
        warnings: list[DiagnosticItem] = []
        with openSourceText(source, self.label, self.encoding) as handle:
            reader = csv.reader(handle, delimiter=delimiter, quotechar=QUOTE_CHAR, strict=False)
            try:
                header = parseHeader(next(reader, None), source)
                for row in reader:
                    record = combineRow(header, row)
                    if record is None:
                        warnings.append(
                            skippedRowWarning(
                                self.logger,
                                source,
                                self.label,
                                reader.line_num,
                                len(header),
                                len(row),
                                delimiter.join(row),
                            )
                        )
                        continue
                    records.append(record)
            except csv.Error as exc:
                raise SourceUnreadable(
                    f"Could not parse CSV file: {source} at line {reader.line_num} ({exc})",
                    source=source,
                ) from exc

        return LoadResult(records=records, warnings=warnings)
