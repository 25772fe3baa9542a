"""Загрузка записей из CSV/JSON/TXT/коллекций и переименование полей по схеме маппинга."""

from datamapper.domain.exceptions import (
    DataMapperError,
    InvalidMappingSchema,
    InvalidRecordShape,
    InvalidSourceArgument,
    MalformedInput,
    SourceNotFound,
    SourceUnreadable,
    UnsupportedSourceKind,
)
from datamapper.domain.mapping.projector import ProjectionResult, SchemaMapper
from datamapper.domain.mapping.schema import MappingSchema
from datamapper.domain.models import NULL_SENTINEL, DiagnosticItem
from datamapper.domain.source_kind import SourceKind
from datamapper.infra.sources.loader import SourceLoader
from datamapper.usecases.dataset_mapper import DataSetMapper

__all__ = [
    "DataSetMapper",
    "MappingSchema",
    "SchemaMapper",
    "ProjectionResult",
    "SourceLoader",
    "SourceKind",
    "DiagnosticItem",
    "NULL_SENTINEL",
    "DataMapperError",
    "UnsupportedSourceKind",
    "InvalidSourceArgument",
    "InvalidRecordShape",
    "InvalidMappingSchema",
    "SourceNotFound",
    "SourceUnreadable",
    "MalformedInput",
]
