"""Exception hierarchy for example generation.

All errors raised while loading, validating or rendering an example derive
from ``ExampleGenError`` so a driver can decide whether to abort the whole
run or skip a single example.

Hierarchy:
    ExampleGenError
        ExampleConfigError
            MissingFieldError
            UnknownFieldError
            UndeclaredVariableError
            UnknownTestEnvVarError
            ExternalProviderError
        TemplateLoadError
        TemplateError
            TemplateSyntaxError
            TemplateExecutionError
        NotRenderedError
"""

from __future__ import annotations

from pathlib import Path


class ExampleGenError(Exception):
    """Base error for example generation."""

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ExampleConfigError(ExampleGenError):
    """An example is declared incorrectly."""

    pass


class MissingFieldError(ExampleConfigError):
    """A required example field is missing or empty."""

    def __init__(self, field_name: str, owner: str) -> None:
        self.field_name = field_name
        self.owner = owner
        super().__init__(f"Missing `{field_name}` for one example in resource {owner}")


class UnknownFieldError(ExampleConfigError):
    """An example declaration contains keys that are not recognised."""

    def __init__(self, fields: list[str], example_name: str = "") -> None:
        self.fields = fields
        self.example_name = example_name
        where = f" in example {example_name!r}" if example_name else ""
        super().__init__(f"Unknown example field(s){where}: {', '.join(fields)}")


class UndeclaredVariableError(ExampleConfigError):
    """A template references a variable that the example does not declare."""

    def __init__(self, variable: str, config_path: str | Path, declared_in: str) -> None:
        self.variable = variable
        self.config_path = str(config_path)
        self.declared_in = declared_in
        super().__init__(
            f"Failed to find {variable} environment variable defined in YAML file "
            f"when validating the file {self.config_path}. "
            f"Please define this in {declared_in}"
        )


class UnknownTestEnvVarError(ExampleConfigError):
    """A test_env_vars entry names a category with no documentation default."""

    def __init__(self, variable: str, category: str) -> None:
        self.variable = variable
        self.category = category
        super().__init__(
            f"test_env_vars entry {variable!r} uses unknown category {category!r}"
        )


class ExternalProviderError(ExampleConfigError):
    """An example depends on providers outside the allowed set."""

    def __init__(self, providers: list[str]) -> None:
        self.providers = providers
        super().__init__(
            f"Providers {providers!r} are not allowed. "
            "Only providers published by HashiCorp are allowed."
        )


# =============================================================================
# I/O Errors
# =============================================================================


class TemplateLoadError(ExampleGenError):
    """The template file could not be read."""

    def __init__(self, config_path: str | Path, reason: str) -> None:
        self.config_path = str(config_path)
        super().__init__(f"Failed to read template {self.config_path}: {reason}")


# =============================================================================
# Output Errors
# =============================================================================


class NotRenderedError(ExampleGenError):
    """An example was written before it was rendered."""

    def __init__(self, example_name: str) -> None:
        self.example_name = example_name
        super().__init__(f"Example {example_name!r} has not been rendered")


# =============================================================================
# Template Errors
# =============================================================================


class TemplateError(ExampleGenError):
    """A template could not be parsed or executed."""

    def __init__(self, config_path: str | Path, message: str) -> None:
        self.config_path = str(config_path)
        super().__init__(f"{self.config_path}: {message}")


class TemplateSyntaxError(TemplateError):
    """The template is malformed."""

    pass


class TemplateExecutionError(TemplateError):
    """The template failed while executing."""

    pass
