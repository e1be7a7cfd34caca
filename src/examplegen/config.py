"""Configuration for the example generator driver.

Settings are merged from three sources, later ones overriding earlier ones:

1. defaults declared on ``GeneratorConfig``
2. an optional YAML file
3. ``EXAMPLEGEN_*`` environment variables

Usage:
    >>> from examplegen.config import load_config
    >>> config = load_config("examplegen.yaml")
    >>> config.output_dir
    PosixPath('build/examples')

Environment variables:
    EXAMPLEGEN_BASE_DIR=mmv1
    EXAMPLEGEN_OUTPUT_DIR=build/examples
    EXAMPLEGEN_MAX_WORKERS=4
    EXAMPLEGEN_FAIL_FAST=false
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping

import yaml

from examplegen.engine.context import Variant

logger = logging.getLogger(__name__)


ENV_PREFIX = "EXAMPLEGEN"


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(Exception):
    """Base configuration error."""

    pass


class ConfigValidationError(ConfigError):
    """Configuration validation error."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Configuration validation failed: {', '.join(errors)}")


class ConfigSourceError(ConfigError):
    """Configuration source error."""

    pass


# =============================================================================
# Configuration
# =============================================================================


@dataclass
class GeneratorConfig:
    """Settings for rendering and writing a batch of examples.

    Attributes:
        base_dir: Directory template paths are resolved against.
        output_dir: Directory rendered configs are written to.
        max_workers: Number of examples rendered in parallel.
        fail_fast: Abort on the first failing example.
        doc_filename: File name of the documentation config.
        test_filename: File name of the acceptance test config.
        oics_filename: File name of the cloud shell config.
    """

    base_dir: Path = field(default_factory=Path.cwd)
    output_dir: Path = Path("build/examples")
    max_workers: int = 1
    fail_fast: bool = True
    doc_filename: str = "main.tf"
    test_filename: str = "test.tf"
    oics_filename: str = "oics.tf"

    def filename_for(self, variant: Variant) -> str:
        """Output file name for a variant."""
        return {
            Variant.DOC: self.doc_filename,
            Variant.TEST: self.test_filename,
            Variant.OICS: self.oics_filename,
        }[variant]

    def validate(self) -> None:
        """Check the settings.

        Raises:
            ConfigValidationError: Listing every problem found.
        """
        errors: list[str] = []
        if self.max_workers < 1:
            errors.append(f"max_workers must be >= 1, got {self.max_workers}")
        names = [self.doc_filename, self.test_filename, self.oics_filename]
        for name in names:
            if not name or "/" in name or "\\" in name:
                errors.append(f"invalid output file name: {name!r}")
        if len(set(names)) != len(names):
            errors.append("doc, test and oics file names must differ")
        if errors:
            raise ConfigValidationError(errors)

    def with_overrides(self, **overrides: Any) -> "GeneratorConfig":
        """Create a new config with non-None overrides applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return _build(values)

    def to_dict(self) -> dict[str, Any]:
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            result[f.name] = str(value) if isinstance(value, Path) else value
        return result


def _parse_bool(value: str) -> bool | None:
    if value.lower() in ("true", "yes", "1", "on"):
        return True
    if value.lower() in ("false", "no", "0", "off"):
        return False
    return None


def _coerce(name: str, value: Any, errors: list[str]) -> Any:
    if name in ("base_dir", "output_dir"):
        return Path(str(value))
    if name == "max_workers":
        try:
            return int(value)
        except (TypeError, ValueError):
            errors.append(f"max_workers must be an integer, got {value!r}")
            return 1
    if name == "fail_fast":
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            parsed = _parse_bool(value)
            if parsed is not None:
                return parsed
        errors.append(f"fail_fast must be a boolean, got {value!r}")
        return True
    return str(value)


def _build(values: Mapping[str, Any]) -> GeneratorConfig:
    known = {f.name for f in fields(GeneratorConfig)}
    errors = [f"unknown setting: {key}" for key in values if key not in known]
    coerced = {k: _coerce(k, v, errors) for k, v in values.items() if k in known}
    if errors:
        raise ConfigValidationError(errors)
    config = GeneratorConfig(**coerced)
    config.validate()
    return config


def load_file_settings(path: str | Path) -> dict[str, Any]:
    """Read settings from a YAML file.

    Raises:
        ConfigSourceError: If the file is missing or not a YAML mapping.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigSourceError(f"Configuration file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigSourceError(f"Failed to load config: {e}") from e
    if not isinstance(data, dict):
        raise ConfigSourceError(f"Configuration file {path} must contain a mapping")
    return data


def load_env_settings(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Read ``EXAMPLEGEN_*`` settings from the environment."""
    environ = os.environ if environ is None else environ
    prefix = f"{ENV_PREFIX}_"
    return {
        key[len(prefix):].lower(): value
        for key, value in environ.items()
        if key.startswith(prefix)
    }


def load_config(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> GeneratorConfig:
    """Load the generator configuration.

    Args:
        path: Optional YAML settings file.
        environ: Environment mapping (default: ``os.environ``).

    Raises:
        ConfigError: If a source cannot be read or a value is invalid.
    """
    values: dict[str, Any] = {}
    if path is not None:
        values.update(load_file_settings(path))
    values.update(load_env_settings(environ))
    config = _build(values)
    logger.debug("Loaded generator config: %s", config.to_dict())
    return config
