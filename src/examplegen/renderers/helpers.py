"""Helper functions available inside example templates.

Every helper is registered both as a Jinja2 global (``{{ camelize(name) }}``)
and as a filter (``{{ name | camelize }}``).
"""

from __future__ import annotations

import re
from typing import Any, Callable


def camelize(term: str, first_letter: str = "lower") -> str:
    """Convert snake_case to camelCase.

    Args:
        term: Identifier to convert.
        first_letter: ``"lower"`` for camelCase, ``"upper"`` for PascalCase.
    """
    result = re.sub(
        r"(?:^|_)([a-zA-Z0-9]*)",
        lambda m: m.group(1)[:1].upper() + m.group(1)[1:],
        term,
    )
    if first_letter == "lower" and result:
        result = result[0].lower() + result[1:]
    return result


def underscore(term: str) -> str:
    """Convert CamelCase or dashed text to snake_case."""
    term = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", term)
    term = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", term)
    return term.replace("-", "_").replace(".", "_").lower()


def dasherize(term: str) -> str:
    """Convert snake_case or CamelCase to dash-case."""
    return underscore(term).replace("_", "-")


def title_case(term: str) -> str:
    """Convert snake_case to space separated Title Case."""
    return " ".join(word[:1].upper() + word[1:] for word in underscore(term).split("_") if word)


def plural(word: str) -> str:
    """Pluralize an English resource name."""
    if not word:
        return word
    if word.endswith("y") and len(word) > 1 and word[-2] not in "aeiou":
        return word[:-1] + "ies"
    if word.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"


def contains(value: Any, item: Any) -> bool:
    """Whether ``item`` is in ``value``."""
    return item in value


def has_prefix(value: str, prefix: str) -> bool:
    """Whether ``value`` starts with ``prefix``."""
    return value.startswith(prefix)


def has_suffix(value: str, suffix: str) -> bool:
    """Whether ``value`` ends with ``suffix``."""
    return value.endswith(suffix)


def replace_all(value: str, old: str, new: str) -> str:
    """Replace every occurrence of ``old`` in ``value`` with ``new``."""
    return value.replace(old, new)


TEMPLATE_FUNCTIONS: dict[str, Callable[..., Any]] = {
    "camelize": camelize,
    "underscore": underscore,
    "dasherize": dasherize,
    "title_case": title_case,
    "plural": plural,
    "contains": contains,
    "has_prefix": has_prefix,
    "has_suffix": has_suffix,
    "replace_all": replace_all,
}
