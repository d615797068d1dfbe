"""Configuration loading utilities for unitext."""
from __future__ import annotations

import codecs
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .logging import RENDERERS
from .options import ExpressionOption, parse_options
from .paths import default_config_path

logger = structlog.get_logger(__name__)

CONFIG_ENV_VAR = "UNITEXT_CONFIG"
_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class LoggingConfig(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")
    renderer: str = Field(default="json", description="Log line format: json|console")

    def normalized_level(self) -> str:
        return self.level.upper()

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        if value.upper() not in _LEVELS:
            raise ValueError(f"Unknown logging level: {value}")
        return value

    @field_validator("renderer")
    @classmethod
    def _validate_renderer(cls, value: str) -> str:
        if value.lower() not in RENDERERS:
            raise ValueError(f"Unknown log renderer: {value}")
        return value.lower()


class MatchingConfig(BaseModel):
    expression_options: List[str] = Field(
        default_factory=list,
        description="Default pattern compile options, e.g. caseInsensitive, anchorsMatchLines",
    )
    timeout: Optional[float] = Field(default=None, gt=0, description="Regex engine timeout in seconds")

    @field_validator("expression_options")
    @classmethod
    def _validate_options(cls, value: List[str]) -> List[str]:
        parse_options(ExpressionOption, value)
        return value

    def resolved_options(self) -> ExpressionOption:
        return parse_options(ExpressionOption, self.expression_options)


class TextConfig(BaseModel):
    encoding: str = Field(default="utf-8", description="Encoding used to read UTF-16 input files")
    lossy: bool = Field(default=False, description="Allow lossy decoding of input files")

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc
        return value


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    text: TextConfig = Field(default_factory=TextConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    """Candidate files in priority order: explicit path, ``$UNITEXT_CONFIG``, project, user."""

    if explicit:
        yield explicit
    from_env = os.environ.get(CONFIG_ENV_VAR)
    if from_env:
        yield Path(from_env).expanduser()
    yield Path.cwd() / ".unitext" / "config.yaml"
    yield default_config_path()


def _read_mapping(candidate: Path) -> Dict[str, Any]:
    try:
        data = yaml.safe_load(candidate.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid configuration in {candidate}: top level must be a mapping")
    return data


def load_config(path: Optional[Path] = None) -> AppConfig:
    candidate = next((item for item in config_search_paths(path) if item.is_file()), None)
    if candidate is None:
        return DEFAULT_CONFIG.model_copy(deep=True)
    try:
        config = AppConfig.model_validate(_read_mapping(candidate))
    except ValidationError as exc:
        raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    logger.debug("config.loaded", path=str(candidate))
    return config


def dump_default_config(target: Path) -> None:
    """Write the default configuration to ``target``, creating parent directories."""

    target.parent.mkdir(parents=True, exist_ok=True)
    document = yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), sort_keys=False, allow_unicode=True)
    target.write_text(document, encoding="utf-8")
    logger.info("config.written", path=str(target))


__all__ = [
    "AppConfig",
    "LoggingConfig",
    "MatchingConfig",
    "TextConfig",
    "DEFAULT_CONFIG",
    "CONFIG_ENV_VAR",
    "config_search_paths",
    "load_config",
    "dump_default_config",
]
