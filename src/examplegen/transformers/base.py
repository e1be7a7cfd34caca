"""Base classes and protocols for variable transformers.

A variable transformer derives the variable mappings for one rendering
variant from the author-declared mappings. Transformers never modify their
input; they return a new ``VariableSet``.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Mapping, Protocol, runtime_checkable

from examplegen.engine.context import Variant

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VariableSet:
    """The two variable mappings a template is rendered with.

    Attributes:
        vars: Example variables, addressed as ``vars.NAME``.
        test_env_vars: Test environment variables, addressed as
            ``testEnvVars.NAME``.
    """

    vars: Mapping[str, str] = field(default_factory=dict)
    test_env_vars: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vars", MappingProxyType(dict(self.vars)))
        object.__setattr__(self, "test_env_vars", MappingProxyType(dict(self.test_env_vars)))

    def with_vars(self, vars: Mapping[str, str]) -> "VariableSet":
        """Create a new VariableSet with different example variables."""
        return replace(self, vars=vars)

    def with_test_env_vars(self, test_env_vars: Mapping[str, str]) -> "VariableSet":
        """Create a new VariableSet with different test environment variables."""
        return replace(self, test_env_vars=test_env_vars)


@runtime_checkable
class VariableTransformer(Protocol):
    """Protocol for variable transformers.

    Example implementation:
        class UppercaseVars:
            def transform(self, variables: VariableSet) -> VariableSet:
                return variables.with_vars(
                    {k: v.upper() for k, v in variables.vars.items()}
                )
    """

    def transform(self, variables: VariableSet) -> VariableSet:
        """Derive a new VariableSet.

        Args:
            variables: Author-declared variables.

        Returns:
            Derived variables.
        """
        ...


class BaseVariableTransformer(ABC):
    """Abstract base class for the per-variant transformers.

    Subclasses set ``variant`` and implement ``_do_transform``. Errors
    propagate to the caller unchanged.
    """

    variant: Variant

    def __init__(self, name: str | None = None) -> None:
        """Initialize the transformer.

        Args:
            name: Optional name for this transformer instance.
        """
        self._name = name or self.__class__.__name__

    @property
    def name(self) -> str:
        """Get the transformer name."""
        return self._name

    def transform(self, variables: VariableSet) -> VariableSet:
        """Derive the variant's variables from the declared ones."""
        result = self._do_transform(variables)
        logger.debug(
            "%s derived %d vars and %d test env vars",
            self._name,
            len(result.vars),
            len(result.test_env_vars),
        )
        return result

    @abstractmethod
    def _do_transform(self, variables: VariableSet) -> VariableSet:
        """Perform the actual transformation.

        Args:
            variables: Author-declared variables.

        Returns:
            A new VariableSet.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"
