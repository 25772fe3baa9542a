from __future__ import annotations

from datamapper.domain.error_codes import ErrorCategory, ErrorCode


class DataMapperError(Exception):
    """
    Назначение:
        Базовая ошибка пайплайна загрузки/маппинга.
    Инварианты/гарантии:
        - У каждого наследника фиксированы code и category.
        - Фатальна для вызова load/map, пробрасывается вызывающему.
    """

    code: ErrorCode
    category: ErrorCategory = ErrorCategory.PROCESSING

    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        return self.message


class UnsupportedSourceKind(DataMapperError):
    """Неизвестный kind источника."""

    code = ErrorCode.UNSUPPORTED_SOURCE_KIND
    category = ErrorCategory.INPUT

    def __init__(self, kind: str, supported: tuple[str, ...]) -> None:
        super().__init__(f"Unsupported source kind: {kind}. Supported kinds: {', '.join(supported)}")
        self.kind = kind
        self.supported = supported


class InvalidSourceArgument(DataMapperError):
    """Тип/форма source или delimiter не подходит для выбранного kind."""

    code = ErrorCode.INVALID_SOURCE_ARGUMENT
    category = ErrorCategory.INPUT


class InvalidRecordShape(DataMapperError):
    """
    Назначение:
        Элемент record-collection не является записью с ключами.
        Прерывает всю загрузку (без пропуска строки).
    """

    code = ErrorCode.INVALID_RECORD_SHAPE
    category = ErrorCategory.INPUT

    def __init__(self, message: str, *, index: int) -> None:
        super().__init__(message)
        self.index = index


class InvalidMappingSchema(DataMapperError):
    """Схема маппинга не является объектом target -> source."""

    code = ErrorCode.INVALID_MAPPING_SCHEMA
    category = ErrorCategory.INPUT


class SourceNotFound(DataMapperError):
    """Файл источника не найден."""

    code = ErrorCode.SOURCE_NOT_FOUND


class SourceUnreadable(DataMapperError):
    """Файл существует, но не читается (open/read/decode) или без заголовка."""

    code = ErrorCode.SOURCE_UNREADABLE


class MalformedInput(DataMapperError):
    """Синтаксическая ошибка JSON или неподдерживаемая форма документа."""

    code = ErrorCode.MALFORMED_INPUT


__all__ = [
    "DataMapperError",
    "UnsupportedSourceKind",
    "InvalidSourceArgument",
    "InvalidRecordShape",
    "InvalidMappingSchema",
    "SourceNotFound",
    "SourceUnreadable",
    "MalformedInput",
]
