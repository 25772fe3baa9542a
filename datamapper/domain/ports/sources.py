from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

from datamapper.domain.models import DiagnosticItem, RawDataset


@dataclass
class LoadResult:
    """
    Назначение:
        Результат чтения источника: нормализованные записи + предупреждения о пропущенных строках.
    """

    records: RawDataset
    warnings: list[DiagnosticItem] = field(default_factory=list)


class SourceReader(Protocol):
    """
    Назначение/ответственность:
        Стратегия чтения одного вида источника в RawDataset.
    """

    def read(self, source: Any, delimiter: str) -> LoadResult:
        """
        Контракт:
            Вход: source (путь, JSON-текст или коллекция записей), delimiter.
            Выход: LoadResult. Фатальные проблемы -> DataMapperError.
        """
        ...
