from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, Mapping

from datamapper.domain.exceptions import InvalidMappingSchema


@dataclass(frozen=True)
class MappingSchema:
    """
    Назначение:
        Упорядоченное соответствие target_field -> source_field.

    Инварианты/гарантии:
        - Неизменяема после создания.
        - Целевые имена уникальны: при повторе побеждает последнее значение,
          позиция остаётся от первого вхождения.
        - Исходные имена могут повторяться.
    """

    pairs: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str] | Iterable[tuple[str, str]]) -> "MappingSchema":
        items = mapping.items() if isinstance(mapping, Mapping) else mapping
        collapsed: dict[str, str] = {}
        for target, source in items:
            if not isinstance(target, str) or not isinstance(source, str):
                raise InvalidMappingSchema(
                    f"Mapping schema entries must be string pairs, got {target!r} -> {source!r}"
                )
            collapsed[target] = source
        return cls(pairs=tuple(collapsed.items()))

    @classmethod
    def from_json_text(cls, text: str) -> "MappingSchema":
        """
        Назначение:
            Разобрать схему из JSON-текста вида {"target": "source", ...}.
        """
        try:
            data: Any = json.loads(text)
        except json.JSONDecodeError as exc:
            raise InvalidMappingSchema(f"Invalid JSON mapping schema provided: {exc.msg}") from exc
        if not isinstance(data, dict):
            raise InvalidMappingSchema("Mapping schema is not a valid JSON object")
        return cls.from_mapping(data)

    @property
    def targets(self) -> tuple[str, ...]:
        return tuple(target for target, _ in self.pairs)

    def as_dict(self) -> dict[str, str]:
        return dict(self.pairs)

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)
