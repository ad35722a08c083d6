"""
Configuration for cypressgen.

Defaults are overridden, in order, by an optional YAML file, environment
variables and explicit overrides (CLI flags). Values are validated by
pydantic; invalid input raises ConfigError.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from enum import StrEnum
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from cypressgen.exceptions import ConfigError

logger = structlog.get_logger(__name__)


class Language(StrEnum):
    """Target dialect of the generated Cypress sources."""

    JS = "js"
    TS = "ts"


class RenderMode(StrEnum):
    """How page HTML is obtained."""

    BROWSER = "browser"  # Headless Chromium, scripts executed
    HTTP = "http"  # Plain HTTP fetch, no scripts


# Cypress treats "{...}" in typed text as key sequences, so braces are left out
DEFAULT_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]|;:,.<>?~"

# Environment variable -> (section, key)
ENV_OVERRIDES: dict[str, tuple[str, str]] = {
    "CYPRESSGEN_LANGUAGE": ("generator", "language"),
    "CYPRESSGEN_CLASS_SUFFIX": ("generator", "class_suffix"),
    "CYPRESSGEN_PAGE_WAIT_MS": ("generator", "page_wait_ms"),
    "CYPRESSGEN_RENDER_MODE": ("render", "mode"),
    "CYPRESSGEN_TIMEOUT_MS": ("render", "timeout_ms"),
    "CYPRESSGEN_HEADLESS": ("render", "headless"),
    "CYPRESSGEN_USER_AGENT": ("render", "user_agent"),
}


class GeneratorConfig(BaseModel):
    """Options that shape the generated sources."""

    language: Language = Field(default=Language.JS, description="Output dialect")
    class_suffix: str = Field(
        default="Page",
        pattern=r"^[A-Za-z0-9_]*$",
        description="Suffix appended to the capitalized feature name",
    )
    page_wait_ms: int = Field(default=1000, ge=0, le=60000, description="waitForPageLoad duration")
    long_input_length: int = Field(default=1000, ge=1, le=100000, description="Edge-case input length")
    special_characters: str = Field(
        default=DEFAULT_SPECIAL_CHARACTERS,
        min_length=1,
        description="Edge-case special-character input",
    )
    page_import_prefix: str = Field(
        default="../../pages",
        min_length=1,
        description="Import path from the test directory to the pages directory",
    )


class RenderConfig(BaseModel):
    """Options for the page renderer."""

    mode: RenderMode = Field(default=RenderMode.BROWSER)
    timeout_ms: int = Field(default=30000, ge=1000, le=300000, description="Navigation timeout")
    headless: bool = Field(default=True)
    user_agent: str | None = Field(default=None)


class AppConfig(BaseModel):
    """Complete configuration."""

    generator: GeneratorConfig = Field(default_factory=GeneratorConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

    @classmethod
    def load(
        cls,
        path: str | Path | None = None,
        env: Mapping[str, str] | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> AppConfig:
        """
        Build configuration from a YAML file, the environment and overrides.

        Args:
            path: Optional YAML file with ``generator``/``render`` sections
            env: Environment mapping (defaults to os.environ)
            overrides: Section -> key -> value; None values are ignored

        Raises:
            ConfigError: If the file cannot be read or values are invalid
        """
        data: dict[str, dict[str, Any]] = {"generator": {}, "render": {}}

        if path is not None:
            _merge(data, _read_yaml(Path(path)))

        env = os.environ if env is None else env
        for variable, (section, key) in ENV_OVERRIDES.items():
            value = env.get(variable)
            if value:
                data[section][key] = value

        if overrides:
            _merge(data, overrides)

        try:
            config = cls.model_validate(data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        logger.debug(
            "Configuration loaded",
            source=str(path) if path else "defaults",
            language=config.generator.language.value,
            render_mode=config.render.mode.value,
        )
        return config


def _read_yaml(path: Path) -> Mapping[str, Any]:
    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Config file {path} is not valid YAML: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, Mapping):
        raise ConfigError(f"Config file {path} must contain a mapping")
    return content


def _merge(data: dict[str, dict[str, Any]], source: Mapping[str, Any]) -> None:
    for section, values in source.items():
        if section not in data:
            raise ConfigError(f"Unknown config section: {section}")
        if values is None:
            continue
        if not isinstance(values, Mapping):
            raise ConfigError(f"Config section {section} must be a mapping")
        data[section].update({k: v for k, v in values.items() if v is not None})
