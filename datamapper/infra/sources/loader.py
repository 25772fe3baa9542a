from __future__ import annotations

import logging
from typing import Any

from datamapper.domain.ports.sources import LoadResult, SourceReader
from datamapper.domain.source_kind import SourceKind
from datamapper.infra.sources.delimited_reader import DelimitedFileReader
from datamapper.infra.sources.file_access import DEFAULT_ENCODING
from datamapper.infra.sources.json_reader import JsonSourceReader
from datamapper.infra.sources.record_collection import RecordCollectionReader
from datamapper.infra.sources.text_reader import LineDelimitedFileReader

logger = logging.getLogger(__name__)


def build_readers(encoding: str = DEFAULT_ENCODING, log: logging.Logger | None = None) -> dict[SourceKind, SourceReader]:
    return {
        SourceKind.DELIMITED_FILE: DelimitedFileReader(encoding=encoding, log=log),
        SourceKind.JSON: JsonSourceReader(encoding=encoding),
        SourceKind.LINE_DELIMITED_FILE: LineDelimitedFileReader(encoding=encoding, log=log),
        SourceKind.RECORD_COLLECTION: RecordCollectionReader(),
    }


class SourceLoader:
    """
    Назначение/ответственность:
        Диспетчер: kind -> стратегия чтения -> LoadResult.
    """

    def __init__(
        self,
        readers: dict[SourceKind, SourceReader] | None = None,
        encoding: str = DEFAULT_ENCODING,
        log: logging.Logger | None = None,
    ) -> None:
        self.logger = log or logger
        self.readers = readers or build_readers(encoding=encoding, log=self.logger)

    def load(self, kind: str | SourceKind, source: Any, delimiter: str = ",") -> LoadResult:
        source_kind = SourceKind.parse(kind)
        reader = self.readers[source_kind]
        result = reader.read(source, delimiter)
        self.logger.debug(
            "Loaded %d record(s) from %s source, %d row(s) skipped",
            len(result.records),
            source_kind.value,
            len(result.warnings),
        )
        return result
