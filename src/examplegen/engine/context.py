"""Immutable rendering context for example templates.

A ``RenderContext`` is built for exactly one template execution. It carries
the variant being rendered, the variant's derived variable mappings and the
static example metadata that templates may read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class Variant(str, Enum):
    """Rendering targets produced from one example template."""

    DOC = "doc"
    TEST = "test"
    OICS = "oics"

    @property
    def uses_test_paths(self) -> bool:
        """Whether post-processing uses the test fixture path table."""
        return self is Variant.TEST


def _freeze(mapping: Mapping[str, str]) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class RenderContext:
    """Context passed to a single template execution.

    Attributes:
        variant: Target being rendered.
        vars: Variable mapping for this variant.
        test_env_vars: Test environment variable mapping for this variant.
        name: Example name.
        primary_resource_id: Id of the primary resource in the example.
        primary_resource_type: Optional resource type override.

    Example:
        ctx = RenderContext(
            variant=Variant.DOC,
            vars={"network": "my-vpc"},
            test_env_vars={"project": "my-project-name"},
            name="network_basic",
            primary_resource_id="default",
        )
        ctx.to_template_vars()["vars"]["network"]  # "my-vpc"
    """

    variant: Variant
    vars: Mapping[str, str] = field(default_factory=dict)
    test_env_vars: Mapping[str, str] = field(default_factory=dict)
    name: str = ""
    primary_resource_id: str = ""
    primary_resource_type: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "vars", _freeze(self.vars))
        object.__setattr__(self, "test_env_vars", _freeze(self.test_env_vars))

    def to_template_vars(self) -> dict[str, Any]:
        """Build the namespace handed to the template engine.

        Templates address variables as ``vars.NAME`` and
        ``testEnvVars.NAME``; the metadata is available under both the
        snake_case and the camelCase spelling.
        """
        return {
            "vars": dict(self.vars),
            "testEnvVars": dict(self.test_env_vars),
            "test_env_vars": dict(self.test_env_vars),
            "name": self.name,
            "primary_resource_id": self.primary_resource_id,
            "primaryResourceId": self.primary_resource_id,
            "primary_resource_type": self.primary_resource_type,
            "primaryResourceType": self.primary_resource_type,
            "variant": self.variant.value,
        }
