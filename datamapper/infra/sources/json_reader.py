from __future__ import annotations

import json
from typing import Any

from datamapper.domain.exceptions import InvalidSourceArgument, MalformedInput
from datamapper.domain.models import RawDataset
from datamapper.domain.ports.sources import LoadResult
from datamapper.infra.sources.file_access import DEFAULT_ENCODING, pathExists, readSourceText


class JsonSourceReader:
    """
    Назначение/ответственность:
        Читает JSON из файла или из самой строки (если такого пути нет).

    Инварианты/гарантии:
        - Массив объектов -> набор записей; одиночный объект -> набор из одной записи.
        - Любая другая форма документа, включая не-объект внутри массива -> MalformedInput.
    """

    label = "JSON"

    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        self.encoding = encoding

    def read(self, source: Any, delimiter: str) -> LoadResult:
        if not isinstance(source, str):
            raise InvalidSourceArgument("JSON source must be a file path string or JSON string.")

        if pathExists(source):
            text = readSourceText(source, self.label, self.encoding)
            origin = source
        else:
            text = source
            origin = None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedInput(f"Invalid JSON data: {exc.msg} (line {exc.lineno}, column {exc.colno})", source=origin) from exc

        return LoadResult(records=_as_records(data, origin))


def _as_records(data: Any, origin: str | None) -> RawDataset:
    if isinstance(data, dict):
        return [data]
    if not isinstance(data, list):
        raise MalformedInput(
            f"JSON data is not a valid array of objects/records (got {type(data).__name__}).",
            source=origin,
        )
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedInput(
                f"JSON array element #{index} is not an object/record (got {type(item).__name__}).",
                source=origin,
            )
    return data
