"""Variable reference resolution for example templates.

Templates reference author-declared values in two forms:

- example variables: ``{{ vars.network }}``, ``{{ vars["network"] }}`` or
  ``{{ vars.get("network") }}``
- test environment variables: ``{{ testEnvVars.project }}``

Every referenced name must be declared in the example's ``vars`` or
``test_env_vars`` mapping. A reference to an undeclared name is a
configuration error and stops processing immediately.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator, Mapping

from examplegen.errors import UndeclaredVariableError

logger = logging.getLogger(__name__)


# Jinja2 expression and statement tags; references are only looked for inside them.
_TAG_PATTERN = re.compile(r"\{\{.*?\}\}|\{%.*?%\}", re.DOTALL)


def _reference_pattern(namespace: str) -> re.Pattern[str]:
    # Method calls such as ``vars.items()`` are not references, but
    # ``vars.get("name")`` is.
    ns = re.escape(namespace)
    return re.compile(
        rf"(?<![\w.]){ns}"
        rf"(?:\.([A-Za-z_][A-Za-z0-9_]*)\b(?!\s*\()"
        rf"|\[\s*[\"']([^\"']+)[\"']\s*\]"
        rf"|\.get\(\s*[\"']([^\"']+)[\"'])"
    )


VARS_PATTERN = _reference_pattern("vars")
TEST_ENV_VARS_PATTERN = _reference_pattern("testEnvVars")


def find_references(contents: str, pattern: re.Pattern[str]) -> Iterator[str]:
    """Yield every variable name referenced with the given syntax.

    Names are yielded in order of appearance and may repeat.

    Args:
        contents: Raw template text.
        pattern: One of ``VARS_PATTERN`` or ``TEST_ENV_VARS_PATTERN``.
    """
    for tag in _TAG_PATTERN.finditer(contents):
        for match in pattern.finditer(tag.group(0)):
            yield match.group(1) or match.group(2) or match.group(3)


def validate_references(
    contents: str,
    declared: Mapping[str, str],
    *,
    pattern: re.Pattern[str],
    config_path: str | Path,
    declared_in: str,
) -> None:
    """Check that every reference of one syntax names a declared variable.

    Args:
        contents: Raw template text.
        declared: Mapping whose keys are the declared variable names.
        pattern: Reference syntax to scan for.
        config_path: Template path, reported in errors.
        declared_in: Name of the mapping the variable should be declared in.

    Raises:
        UndeclaredVariableError: On the first reference to an undeclared name.
    """
    for name in find_references(contents, pattern):
        if name not in declared:
            raise UndeclaredVariableError(name, config_path, declared_in)


def validate_template_variables(
    contents: str,
    vars: Mapping[str, str],
    test_env_vars: Mapping[str, str],
    config_path: str | Path,
) -> None:
    """Validate both reference syntaxes of a template.

    Test environment references are checked first, then example variables.
    """
    validate_references(
        contents,
        test_env_vars,
        pattern=TEST_ENV_VARS_PATTERN,
        config_path=config_path,
        declared_in="test_env_vars",
    )
    validate_references(
        contents,
        vars,
        pattern=VARS_PATTERN,
        config_path=config_path,
        declared_in="vars",
    )
    logger.debug("Validated variable references in %s", config_path)
