from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from datamapper.domain.exceptions import InvalidRecordShape, InvalidSourceArgument
from datamapper.domain.models import RawDataset
from datamapper.domain.ports.sources import LoadResult


class RecordCollectionReader:
    """
    Назначение/ответственность:
        Принимает готовую коллекцию записей (например, строки из БД).

    Инварианты/гарантии:
        - Каждый элемент - Mapping с ключами; список/кортеж/скаляр валит весь вызов
          (без пропуска элемента, в отличие от файловых источников).
        - Записи копируются, последующие изменения у вызывающего не видны.
    """

    def read(self, source: Any, delimiter: str) -> LoadResult:
        if isinstance(source, (str, bytes, bytearray, Mapping)) or not isinstance(source, Sequence):
            raise InvalidSourceArgument(
                f"Record collection source must be a sequence of records, got {type(source).__name__}."
            )

        records: RawDataset = []
        for index, item in enumerate(source):
            if not isinstance(item, Mapping):
                raise InvalidRecordShape(
                    "Record collection must contain keyed records only; "
                    f"element #{index} is {type(item).__name__}.",
                    index=index,
                )
            records.append(dict(item))
        return LoadResult(records=records)
