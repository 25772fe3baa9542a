from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from datamapper.common.time import getNowIso


@dataclass
class ReportMeta:
    """
    Назначение:
        Метаданные отчёта запуска команды.
    """
    run_id: str
    command: str
    started_at: str
    finished_at: str | None = None
    duration_ms: int | None = None
    source_kind: str | None = None
    source: str | None = None
    delimiter: str | None = None
    mapping_schema: dict[str, str] | None = None
    output_path: str | None = None
    log_file: str | None = None
    report_dir: str | None = None
    items_limit: int | None = None
    items_truncated: bool = False
    config_sources: list[str] = field(default_factory=list)


@dataclass
class ReportSummary:
    """
    Назначение:
        Сводные счётчики запуска.
    """
    rows_loaded: int = 0
    rows_mapped: int = 0
    rows_skipped: int = 0
    missing_fields: int = 0
    warnings: int = 0
    failed: int = 0


@dataclass
class Report:
    """
    Назначение:
        Корневой объект отчёта.

    Поля:
        meta: ReportMeta
        summary: ReportSummary
        items: list[dict]
            Диагностики (не больше meta.items_limit).
        error: dict | None
            Фатальная ошибка, если команда упала.
        input_data: list[dict] | None
            Сырые записи, если включено в настройках.
    """
    meta: ReportMeta
    summary: ReportSummary
    items: list[dict]
    error: dict[str, Any] | None = None
    input_data: list[dict] | None = None


def createEmptyReport(runId: str, command: str, configSources: list[str], itemsLimit: int | None = None) -> Report:
    """
    Назначение:
        Создаёт пустой отчёт-скелет для команды.
    """
    meta = ReportMeta(
        run_id=runId,
        command=command,
        started_at=getNowIso(),
        items_limit=itemsLimit,
        config_sources=list(configSources or []),
    )
    return Report(meta=meta, summary=ReportSummary(), items=[])


def addReportItem(report: Report, item: dict[str, Any]) -> None:
    limit = report.meta.items_limit
    if limit is not None and len(report.items) >= limit:
        report.meta.items_truncated = True
        return
    report.items.append(item)


def finalizeReport(report: Report, durationMs: int, logFile: str | None, reportDir: str) -> None:
    """
    Назначение:
        Финализирует отчёт: время завершения, длительность, пути.
    """
    report.meta.finished_at = getNowIso()
    report.meta.duration_ms = durationMs
    report.meta.log_file = logFile
    report.meta.report_dir = reportDir


def writeReportJson(report: Report, reportDir: str, fileBaseName: str) -> str:
    """
    Назначение:
        Записывает report.json на диск.

    Входные данные:
        fileBaseName: str
            Например: "report_map_<runId>"

    Выходные данные:
        str
            Полный путь к созданному файлу.
    """
    Path(reportDir).mkdir(parents=True, exist_ok=True)
    reportPath = str(Path(reportDir) / f"{fileBaseName}.json")

    data: dict[str, Any] = asdict(report)

    with open(reportPath, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=2, default=str)

    return reportPath
