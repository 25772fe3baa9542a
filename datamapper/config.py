from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import yaml


@dataclass(frozen=True)
class Settings:
    # Paths
    log_dir: str = "./logs"
    report_dir: str = "./reports"

    # Logging
    log_level: str = "INFO"

    # Sources
    default_delimiter: str = ","
    encoding: str = "utf-8-sig"

    # Report
    report_items_limit: int = 200
    report_include_input: bool = False


@dataclass(frozen=True)
class LoadedSettings:
    settings: Settings
    sources_used: list[str]


ENV_PREFIX = "DATAMAPPER_"

_ENV_FIELDS = {
    "log_dir": "LOG_DIR",
    "report_dir": "REPORT_DIR",
    "log_level": "LOG_LEVEL",
    "default_delimiter": "DELIMITER",
    "encoding": "ENCODING",
    "report_items_limit": "REPORT_ITEMS_LIMIT",
    "report_include_input": "REPORT_INCLUDE_INPUT",
}


def _read_yaml_config(path: Path) -> dict:
    if not path.exists():
        return {}
    if not path.is_file():
        return {}
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            return {}
        return data


def _env_get(name: str) -> str | None:
    v = os.getenv(name)
    if v is None or v == "":
        return None
    # разделитель может быть пробелом или табом, его не тримим
    if name == ENV_PREFIX + "DELIMITER":
        return v
    v = v.strip()
    return v or None


def _parse_int(v: str | None) -> int | None:
    if v is None:
        return None
    return int(v)


def _parse_bool(v: str | None) -> bool | None:
    if v is None:
        return None
    vv = v.lower()
    if vv in ("1", "true", "yes", "y"):
        return True
    if vv in ("0", "false", "no", "n"):
        return False
    raise ValueError(f"Invalid boolean env value: {v}")


_ENV_PARSERS = {
    "report_items_limit": _parse_int,
    "report_include_input": _parse_bool,
}


def loadSettings(
    config_path: str | None,
    cli_overrides: dict,
) -> LoadedSettings:
    """
    Priority: CLI > ENV > config > defaults
    """
    sources: list[str] = []
    defaults = Settings()

    # 1) config file
    cfg: dict = {}
    if config_path:
        cfg = _read_yaml_config(Path(config_path))
        if cfg:
            sources.append("config")

    merged = {name: cfg.get(name, getattr(defaults, name)) for name in _ENV_FIELDS}

    # 2) env
    env = {name: _env_get(ENV_PREFIX + suffix) for name, suffix in _ENV_FIELDS.items()}
    if any(v is not None for v in env.values()):
        sources.append("env")

    for name, value in env.items():
        if value is None:
            continue
        parser = _ENV_PARSERS.get(name)
        merged[name] = parser(value) if parser else value

    # 3) apply CLI overrides (only those explicitly passed)
    if any(v is not None for v in cli_overrides.values()):
        sources.append("cli")

    for k, v in cli_overrides.items():
        if v is None:
            continue
        merged[k] = v

    settings = Settings(
        log_dir=str(merged["log_dir"]),
        report_dir=str(merged["report_dir"]),
        log_level=str(merged["log_level"]),
        default_delimiter=str(merged["default_delimiter"]),
        encoding=str(merged["encoding"]),
        report_items_limit=int(merged["report_items_limit"]),
        report_include_input=bool(merged["report_include_input"]),
    )

    return LoadedSettings(settings=settings, sources_used=sources)
