from __future__ import annotations

import copy
import logging
from typing import Any, Mapping

from datamapper.domain.mapping.projector import SchemaMapper
from datamapper.domain.mapping.schema import MappingSchema
from datamapper.domain.models import DiagnosticItem, MappedDataset, RawDataset
from datamapper.domain.source_kind import SourceKind
from datamapper.infra.sources.file_access import DEFAULT_ENCODING
from datamapper.infra.sources.loader import SourceLoader

logger = logging.getLogger(__name__)


class DataSetMapper:
    """
    Назначение/ответственность:
        Сессия загрузки и маппинга: держит схему, сырые и смапленные данные.

    Инварианты/гарантии:
        - Схема фиксируется в конструкторе.
        - load() всегда сбрасывает raw и mapped; при ошибке состояние остаётся пустым.
        - map() пересчитывает mapped из текущего raw при каждом вызове.
        - get_*() возвращают копии (снимки), а не внутреннее состояние.

    Взаимодействия:
        - SourceLoader для чтения источников.
        - SchemaMapper для проекции.

    Не потокобезопасен: один вызывающий в момент времени.
    """

    def __init__(
        self,
        mapping_schema: MappingSchema | Mapping[str, str],
        log: logging.Logger | None = None,
        encoding: str = DEFAULT_ENCODING,
        loader: SourceLoader | None = None,
    ) -> None:
        if not isinstance(mapping_schema, MappingSchema):
            mapping_schema = MappingSchema.from_mapping(mapping_schema)
        self.logger = log or logger
        self._schema = mapping_schema
        self._loader = loader or SourceLoader(encoding=encoding, log=self.logger)
        self._mapper = SchemaMapper(mapping_schema, log=self.logger)
        self._input_data: RawDataset = []
        self._mapped_data: MappedDataset = []
        self._load_warnings: list[DiagnosticItem] = []
        self._map_warnings: list[DiagnosticItem] = []

    @property
    def mapping_schema(self) -> MappingSchema:
        return self._schema

    def load(self, kind: str | SourceKind, source: Any, delimiter: str = ",") -> None:
        """
        Назначение:
            Загрузить источник, заменив предыдущее состояние.

        Выходные данные:
            None. Ошибки - наследники DataMapperError, состояние после них пустое.
        """
        self._input_data = []
        self._mapped_data = []
        self._load_warnings = []
        self._map_warnings = []

        result = self._loader.load(kind, source, delimiter)

        self._input_data = result.records
        self._load_warnings = result.warnings

    def map(self) -> MappedDataset:
        """
        Назначение:
            Спроецировать текущие сырые данные на схему.
        """
        result = self._mapper.project(self._input_data)
        self._mapped_data = result.records
        self._map_warnings = result.warnings
        return copy.deepcopy(self._mapped_data)

    def get_input_data(self) -> RawDataset:
        return copy.deepcopy(self._input_data)

    def get_mapped_data(self) -> MappedDataset:
        return copy.deepcopy(self._mapped_data)

    @property
    def load_warnings(self) -> list[DiagnosticItem]:
        return list(self._load_warnings)

    @property
    def map_warnings(self) -> list[DiagnosticItem]:
        return list(self._map_warnings)

    @property
    def diagnostics(self) -> list[DiagnosticItem]:
        return [*self._load_warnings, *self._map_warnings]
