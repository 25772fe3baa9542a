from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Sequence


def renderRecordsJson(records: Sequence[dict[str, Any]]) -> str:
    """
    Назначение:
        Сериализует записи в JSON-массив (None -> null, порядок ключей сохраняется).
    """
    return json.dumps(list(records), ensure_ascii=False, indent=2, default=str)


def writeRecordsJson(records: Sequence[dict[str, Any]], outputPath: str) -> str:
    """
    Назначение:
        Записывает смапленные записи в JSON-файл, создавая каталог при необходимости.
    """
    path = Path(outputPath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(renderRecordsJson(records))
        f.write("\n")
    return str(path)
