from __future__ import annotations

from enum import Enum

from datamapper.domain.exceptions import UnsupportedSourceKind


class SourceKind(str, Enum):
    """
    Назначение:
        Закрытый набор поддерживаемых видов источника.
    """

    DELIMITED_FILE = "delimited-file"
    JSON = "json"
    LINE_DELIMITED_FILE = "line-delimited-file"
    RECORD_COLLECTION = "record-collection"

    @classmethod
    def parse(cls, kind: str | "SourceKind") -> "SourceKind":
        """
        Назначение:
            Привести строковый kind (без учёта регистра, включая короткие алиасы) к SourceKind.
        """
        if isinstance(kind, SourceKind):
            return kind
        if not isinstance(kind, str):
            raise UnsupportedSourceKind(repr(kind), supported_kind_names())
        value = kind.strip().lower()
        value = _ALIASES.get(value, value)
        try:
            return cls(value)
        except ValueError as exc:
            raise UnsupportedSourceKind(kind, supported_kind_names()) from exc


# короткие имена из формы загрузки
_ALIASES = {
    "csv": SourceKind.DELIMITED_FILE.value,
    "txt": SourceKind.LINE_DELIMITED_FILE.value,
    "array": SourceKind.RECORD_COLLECTION.value,
}


def supported_kind_names() -> tuple[str, ...]:
    return tuple(kind.value for kind in SourceKind) + tuple(_ALIASES)
