"""YAML loader and validation for navtest configuration files."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from jsonschema import Draft7Validator

from navtest.errors import ConfigError

from .models import REPORT_FORMATS, PageConfig, RunConfig, TesterOptions

logger = logging.getLogger(__name__)

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

CONFIG_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "navtest config",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "paths": _STRING_LIST,
        "driver": {"type": "string", "minLength": 1},
        "color": {"type": "boolean"},
        "poll_interval": {"type": "number", "exclusiveMinimum": 0},
        "labels": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "pass": {"type": "string", "minLength": 1},
                "fail": {"type": "string", "minLength": 1},
            },
        },
        "report": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "format": {"enum": list(REPORT_FORMATS)},
                "save": {"type": ["string", "null"]},
            },
        },
        "pages": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["url"],
                "additionalProperties": False,
                "properties": {
                    "url": {"type": "string", "minLength": 1},
                    "title": {"type": "string"},
                    "selectors": _STRING_LIST,
                    "resources": _STRING_LIST,
                    "data": {"type": "object"},
                },
            },
        },
    },
}

_validator = Draft7Validator(CONFIG_SCHEMA)


def load_config(path: str) -> RunConfig:
    """Load and validate a config file.

    Relative suite paths and the report path are resolved against the
    directory holding the config file.
    """

    config_path = Path(path).expanduser().resolve()
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {config_path}: {exc}") from exc
    try:
        raw = yaml.safe_load(text) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    if not isinstance(raw, Mapping):
        raise ConfigError("Config file must contain a mapping at the top level")
    errors = sorted(_validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if errors:
        messages = "; ".join(f"{'/'.join(map(str, err.path)) or 'root'}: {err.message}" for err in errors)
        raise ConfigError(f"Config schema validation failed: {messages}")
    logger.debug("Loaded config from %s", config_path)
    return parse_config(raw, config_path.parent)


def parse_config(raw: Mapping[str, Any], base: Optional[Path] = None) -> RunConfig:
    base = base or Path.cwd()
    labels = raw.get("labels") or {}
    report = raw.get("report") or {}
    save = report.get("save")
    options = TesterOptions(
        pass_label=labels.get("pass", "PASS"),
        fail_label=labels.get("fail", "FAIL"),
        save=str(_resolve(save, base)) if save else None,
        report_format=report.get("format", _guess_format(save)),
        poll_interval=float(raw.get("poll_interval", 0.1)),
    )
    paths = tuple(str(_resolve(item, base)) for item in raw.get("paths") or [])
    pages = {}
    for item in raw.get("pages") or []:
        page = PageConfig(
            url=item["url"],
            title=item.get("title", ""),
            selectors=tuple(item.get("selectors") or ()),
            resources=tuple(item.get("resources") or ()),
            data=dict(item.get("data") or {}),
        )
        pages[page.url] = page
    return RunConfig(
        options=options,
        paths=paths,
        driver=raw.get("driver", "static"),
        color=bool(raw.get("color", True)),
        pages=pages,
    )


def _guess_format(save: Optional[str]) -> str:
    if save and save.lower().endswith(".json"):
        return "json"
    return "xunit"


def _resolve(value: str, base: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = base / path
    return path
