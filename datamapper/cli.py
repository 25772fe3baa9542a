from __future__ import annotations

import json
import logging
import time
from pathlib import Path

import typer

from datamapper.common.run_id import generate_run_id
from datamapper.common.time import getDurationMs
from datamapper.config import Settings, loadSettings
from datamapper.domain.error_codes import ErrorCategory
from datamapper.domain.exceptions import DataMapperError, InvalidMappingSchema
from datamapper.domain.mapping.schema import MappingSchema
from datamapper.domain.source_kind import supported_kind_names
from datamapper.infra.artifacts.output_writer import renderRecordsJson, writeRecordsJson
from datamapper.infra.artifacts.report_writer import createEmptyReport, finalizeReport, writeReportJson
from datamapper.infra.logging.setup import closeCommandLogger, createCommandLogger, logEvent, mapLogLevel
from datamapper.usecases.dataset_mapper import DataSetMapper
from datamapper.usecases.mapping_usecase import MappingUseCase

app = typer.Typer(no_args_is_help=True, add_completion=False)


def ensureDir(path: str) -> None:
    """
    Назначение:
        Создаёт каталог, если он отсутствует.
    """
    Path(path).mkdir(parents=True, exist_ok=True)


def printRunHeader(runId: str, command: str, settings: Settings, sources: list[str]) -> None:
    """
    Назначение:
        Печатает в stderr сводку параметров запуска (stdout занят JSON-выводом).
    """
    typer.echo(
        f"run_id={runId} command={command} log_level={settings.log_level} "
        f"log_dir={settings.log_dir} report_dir={settings.report_dir} sources={sources}",
        err=True,
    )


def formatError(exc: DataMapperError) -> str:
    """
    Назначение:
        Переводит типизированную ошибку в пользовательское сообщение с категорией.
    """
    if exc.category == ErrorCategory.INPUT:
        return f"ERROR: input error: {exc}"
    return f"ERROR: processing error: {exc}"


def readSchemaText(schema: str | None, schemaFile: str | None) -> str:
    """
    Назначение:
        Возвращает JSON-текст схемы из --schema или --schema-file (ровно один из них).
    """
    if schema and schemaFile:
        raise InvalidMappingSchema("Use either --schema or --schema-file, not both")
    if schemaFile:
        p = Path(schemaFile)
        if not p.exists() or not p.is_file():
            raise InvalidMappingSchema(f"Mapping schema file not found: {schemaFile}")
        return p.read_text(encoding="utf-8")
    if schema:
        return schema
    raise InvalidMappingSchema("Mapping schema is required (--schema or --schema-file)")


def runWithReport(ctx: typer.Context, commandName: str, runner) -> None:
    """
    Назначение:
        Унифицированная обвязка выполнения команд:
        - создаёт логгер + файл лога
        - создаёт report.json skeleton
        - переводит DataMapperError в сообщение и exit code 2
        - гарантирует запись отчёта в finally
    """
    runId = ctx.obj["runId"]
    settings: Settings = ctx.obj["settings"]
    sources = ctx.obj["sources"]

    startMonotonic = time.monotonic()

    logger, logFilePath = createCommandLogger(
        commandName=commandName,
        logDir=settings.log_dir,
        runId=runId,
        logLevel=settings.log_level,
    )

    report = createEmptyReport(
        runId=runId,
        command=commandName,
        configSources=sources,
        itemsLimit=settings.report_items_limit,
    )

    exitCode: int | None = None

    try:
        logEvent(logger, logging.INFO, runId, "core", "Command started")
        printRunHeader(runId, commandName, settings, sources)
        try:
            exitCode = runner(logger, report)
        except DataMapperError as exc:
            logEvent(logger, logging.ERROR, runId, "core", f"{exc.code.value}: {exc}")
            report.error = {"code": exc.code.value, "category": exc.category.value, "message": str(exc)}
            report.summary.failed = 1
            typer.echo(formatError(exc), err=True)
            exitCode = 2
        except OSError as exc:
            logEvent(logger, logging.ERROR, runId, "output", f"Output write failed: {exc}")
            report.error = {"code": "OUTPUT_WRITE_FAILED", "category": "processing", "message": str(exc)}
            report.summary.failed = 1
            typer.echo(f"ERROR: processing error: {exc}", err=True)
            exitCode = 2
    finally:
        durationMs = getDurationMs(startMonotonic, time.monotonic())
        finalizeReport(report=report, durationMs=durationMs, logFile=logFilePath, reportDir=settings.report_dir)
        reportPath = writeReportJson(report, settings.report_dir, f"report_{commandName}_{runId}")
        logEvent(logger, logging.INFO, runId, "report", f"Report written: {reportPath}")
        closeCommandLogger(logger)

    if exitCode:
        raise typer.Exit(code=exitCode)


def runMapCommand(
    ctx: typer.Context,
    kind: str,
    source: str,
    delimiter: str | None,
    schema: str | None,
    schemaFile: str | None,
    outputPath: str | None,
    showInput: bool,
) -> None:
    settings: Settings = ctx.obj["settings"]
    runId = ctx.obj["runId"]

    def execute(logger, report) -> int:
        mappingSchema = MappingSchema.from_json_text(readSchemaText(schema, schemaFile))
        session = DataSetMapper(mappingSchema, log=logger, encoding=settings.encoding)
        usecase = MappingUseCase(include_input=settings.report_include_input)
        result = usecase.run(
            session=session,
            kind=kind,
            source=source,
            delimiter=delimiter if delimiter is not None else settings.default_delimiter,
            logger=logger,
            run_id=runId,
            report=report,
        )

        if outputPath:
            written = writeRecordsJson(result.mapped_data, outputPath)
            report.meta.output_path = written
            logEvent(logger, logging.INFO, runId, "output", f"Mapped data written: {written}")
        elif showInput:
            typer.echo(
                json.dumps(
                    {"input": result.input_data, "mapped": result.mapped_data},
                    ensure_ascii=False,
                    indent=2,
                    default=str,
                )
            )
        else:
            typer.echo(renderRecordsJson(result.mapped_data))

        if report.summary.warnings:
            typer.echo(f"WARNING: {report.summary.warnings} warning(s), see logs/report", err=True)
        return result.exit_code

    runWithReport(ctx=ctx, commandName="map", runner=execute)


def runLoadCommand(ctx: typer.Context, kind: str, source: str, delimiter: str | None) -> None:
    settings: Settings = ctx.obj["settings"]
    runId = ctx.obj["runId"]

    def execute(logger, report) -> int:
        session = DataSetMapper({}, log=logger, encoding=settings.encoding)
        usecase = MappingUseCase(include_input=settings.report_include_input, map_records=False)
        result = usecase.run(
            session=session,
            kind=kind,
            source=source,
            delimiter=delimiter if delimiter is not None else settings.default_delimiter,
            logger=logger,
            run_id=runId,
            report=report,
        )
        typer.echo(renderRecordsJson(result.input_data))
        return result.exit_code

    runWithReport(ctx=ctx, commandName="load", runner=execute)


@app.callback()
def main(
    ctx: typer.Context,
    config: str | None = typer.Option(None, "--config", help="Path to config.yml"),
    runId: str | None = typer.Option(None, "--run-id", help="Run identifier (UUID). If omitted, generated."),
    logLevel: str | None = typer.Option(None, "--log-level", help="Log level: ERROR|WARN|INFO|DEBUG"),
    logDir: str | None = typer.Option(None, "--log-dir", help="Directory for logs."),
    reportDir: str | None = typer.Option(None, "--report-dir", help="Directory for reports."),
    reportItemsLimit: int | None = typer.Option(None, "--report-items-limit", help="Limit diagnostics stored in report"),
):
    """
    Назначение:
        Глобальная инициализация CLI:
        - генерирует/принимает run_id
        - загружает настройки (CLI > ENV > config > defaults)
        - создаёт каталоги log/report
        - сохраняет всё в ctx.obj для подкоманд
    """
    if not runId:
        runId = generate_run_id()

    cliOverrides = {
        "log_level": logLevel,
        "log_dir": logDir,
        "report_dir": reportDir,
        "report_items_limit": reportItemsLimit,
    }
    try:
        loaded = loadSettings(config_path=config, cli_overrides=cliOverrides)
        mapLogLevel(loaded.settings.log_level)
    except ValueError as exc:
        typer.echo(f"ERROR: invalid settings: {exc}", err=True)
        raise typer.Exit(code=2)

    ensureDir(loaded.settings.log_dir)
    ensureDir(loaded.settings.report_dir)

    ctx.obj = {
        "runId": runId,
        "settings": loaded.settings,
        "sources": loaded.sources_used,
    }


_KIND_HELP = f"Source kind: {'|'.join(supported_kind_names())}"


@app.command("map")
def mapCommand(
    ctx: typer.Context,
    kind: str = typer.Option(..., "--kind", help=_KIND_HELP),
    source: str = typer.Option(..., "--source", help="Path to source file (or JSON text for --kind json)"),
    delimiter: str | None = typer.Option(None, "--delimiter", help="Field delimiter for delimited/line-delimited files"),
    schema: str | None = typer.Option(None, "--schema", help='Mapping schema JSON: {"target": "source"}'),
    schemaFile: str | None = typer.Option(None, "--schema-file", help="Path to mapping schema JSON file"),
    output: str | None = typer.Option(None, "--output", help="Write mapped data to this JSON file"),
    showInput: bool = typer.Option(False, "--show-input", help="Print raw input data next to mapped data"),
):
    runMapCommand(
        ctx=ctx,
        kind=kind,
        source=source,
        delimiter=delimiter,
        schema=schema,
        schemaFile=schemaFile,
        outputPath=output,
        showInput=showInput,
    )


@app.command("load")
def loadCommand(
    ctx: typer.Context,
    kind: str = typer.Option(..., "--kind", help=_KIND_HELP),
    source: str = typer.Option(..., "--source", help="Path to source file (or JSON text for --kind json)"),
    delimiter: str | None = typer.Option(None, "--delimiter", help="Field delimiter for delimited/line-delimited files"),
):
    runLoadCommand(ctx=ctx, kind=kind, source=source, delimiter=delimiter)
