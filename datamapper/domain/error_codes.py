from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """
    Назначение:
        Единая таксономия кодов фатальных ошибок загрузки и маппинга.
    """

    UNSUPPORTED_SOURCE_KIND = "UNSUPPORTED_SOURCE_KIND"
    INVALID_SOURCE_ARGUMENT = "INVALID_SOURCE_ARGUMENT"
    INVALID_RECORD_SHAPE = "INVALID_RECORD_SHAPE"
    INVALID_MAPPING_SCHEMA = "INVALID_MAPPING_SCHEMA"
    SOURCE_NOT_FOUND = "SOURCE_NOT_FOUND"
    SOURCE_UNREADABLE = "SOURCE_UNREADABLE"
    MALFORMED_INPUT = "MALFORMED_INPUT"


class ErrorCategory(str, Enum):
    """
    Назначение:
        Категория ошибки для пользовательского сообщения.
        INPUT - неверные аргументы вызова, PROCESSING - проблемы чтения/разбора источника.
    """

    INPUT = "input"
    PROCESSING = "processing"
