from __future__ import annotations

import os
from contextlib import contextmanager
from typing import Iterator, TextIO

from datamapper.domain.exceptions import SourceNotFound, SourceUnreadable

DEFAULT_ENCODING = "utf-8-sig"


def pathExists(path: str) -> bool:
    """
    Назначение:
        Проверка существования пути без исключений на некорректных именах
        (слишком длинные строки, NUL-символы).
    """
    return os.path.exists(path)


def requireExistingFile(path: str, label: str) -> None:
    if not pathExists(path):
        raise SourceNotFound(f"{label} file not found: {path}", source=path)


@contextmanager
def openSourceText(path: str, label: str, encoding: str = DEFAULT_ENCODING) -> Iterator[TextIO]:
    """
    Назначение:
        Открыть текстовый файл источника и перевести ошибки ОС/декодирования в SourceUnreadable.
        Дескриптор закрывается на любом выходе, включая ошибку разбора.
    """
    try:
        handle = open(path, "r", encoding=encoding, newline="")
    except OSError as exc:
        raise SourceUnreadable(f"Could not open {label} file: {path} ({exc.strerror or exc})", source=path) from exc
    with handle:
        try:
            yield handle
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadable(f"Could not read {label} file: {path} ({exc})", source=path) from exc


def readSourceText(path: str, label: str, encoding: str = DEFAULT_ENCODING) -> str:
    with openSourceText(path, label, encoding) as handle:
        return handle.read()
