"""Per-variant variable transformers.

Each rendering variant sees a different version of the example's variables:

- doc: ``vars`` verbatim, test environment categories replaced by readable
  defaults such as ``my-project-name``.
- test: ``vars`` mangled into collision-free resource names ending in
  ``%{random_suffix}``; test environment variables become ``%{name}``
  placeholders filled in by the acceptance test harness.
- oics: ``vars`` suffixed with ``${local.name_suffix}`` so that several
  people can apply the same example in a shared project.

Example:
    variables = VariableSet(
        vars={"network": "my-vpc"},
        test_env_vars={"project": "PROJECT_NAME"},
    )
    TestVariableTransformer().transform(variables).vars
    # {"network": "tf-test-my-vpc%{random_suffix}"}
"""

from __future__ import annotations

from typing import Mapping

from examplegen.engine.context import Variant
from examplegen.errors import UnknownTestEnvVarError
from examplegen.transformers.base import BaseVariableTransformer, VariableSet


# =============================================================================
# Constants
# =============================================================================

# Literal values shown in documentation for each test environment category.
DOC_DEFAULTS: Mapping[str, str] = {
    "PROJECT_NAME": "my-project-name",
    "PROJECT_NUMBER": "1111111111111",
    "CREDENTIALS": "my/credentials/filename.json",
    "REGION": "us-west1",
    "ORG_ID": "123456789",
    "ORG_DOMAIN": "example.com",
    "ORG_TARGET": "123456789",
    "BILLING_ACCT": "000000-0000000-0000000-000000",
    "MASTER_BILLING_ACCT": "000000-0000000-0000000-000000",
    "SERVICE_ACCT": "my@service-account.com",
    "CUST_ID": "A01b123xz",
    "IDENTITY_USER": "cloud_identity_user",
    "PAP_DESCRIPTION": "description",
    "CHRONICLE_ID": "00000000-0000-0000-0000-000000000000",
    "VMWAREENGINE_PROJECT": "my-vmwareengine-project",
}

HYPHEN_PREFIX = "tf-test-"
UNDERSCORE_PREFIX = "tf_test_"
RANDOM_SUFFIX = "%{random_suffix}"
LOCAL_NAME_SUFFIX = "${local.name_suffix}"

# Random suffix is 10 characters and standard resource names are <= 64.
MAX_TEST_VALUE_LENGTH = 54


# =============================================================================
# Value Rules
# =============================================================================


def placeholder(name: str) -> str:
    """Return the test harness placeholder for a variable name."""
    return f"%{{{name}}}"


def mangle_test_value(value: str) -> str:
    """Rewrite a variable value for use in an acceptance test.

    Args:
        value: Author-supplied value.

    Returns:
        The prefixed, truncated value followed by ``%{random_suffix}``.
    """
    if "-" in value:
        mangled = f"{HYPHEN_PREFIX}{value}"
    elif "_" in value:
        mangled = f"{UNDERSCORE_PREFIX}{value}"
    else:
        # descriptions and other free text keep their value
        mangled = value
    return f"{mangled[:MAX_TEST_VALUE_LENGTH]}{RANDOM_SUFFIX}"


# =============================================================================
# Transformers
# =============================================================================


class DocVariableTransformer(BaseVariableTransformer):
    """Variables for the documentation variant."""

    variant = Variant.DOC

    def __init__(self, defaults: Mapping[str, str] | None = None, name: str | None = None) -> None:
        super().__init__(name=name)
        self._defaults = dict(DOC_DEFAULTS if defaults is None else defaults)

    def _do_transform(self, variables: VariableSet) -> VariableSet:
        test_env_vars = {}
        for key, category in variables.test_env_vars.items():
            if category not in self._defaults:
                raise UnknownTestEnvVarError(key, category)
            test_env_vars[key] = self._defaults[category]
        return variables.with_test_env_vars(test_env_vars)


class TestVariableTransformer(BaseVariableTransformer):
    """Variables for the acceptance test variant.

    Args:
        overrides: ``test_vars_overrides`` of the example. Each key is
            rendered as ``%{key}`` instead of a mangled value; the override
            expression itself is consumed by the test generator.
    """

    __test__ = False  # not a pytest test class

    variant = Variant.TEST

    def __init__(self, overrides: Mapping[str, str] | None = None, name: str | None = None) -> None:
        super().__init__(name=name)
        self._overrides = dict(overrides or {})

    def _do_transform(self, variables: VariableSet) -> VariableSet:
        test_vars = {key: mangle_test_value(value) for key, value in variables.vars.items()}
        for key in self._overrides:
            test_vars[key] = placeholder(key)
        test_env_vars = {key: placeholder(key) for key in variables.test_env_vars}
        return VariableSet(vars=test_vars, test_env_vars=test_env_vars)


class OicsVariableTransformer(BaseVariableTransformer):
    """Variables for the Open in Cloud Shell variant.

    Args:
        overrides: ``oics_vars_overrides`` of the example; each value replaces
            the suffixed variable verbatim.
    """

    variant = Variant.OICS

    def __init__(self, overrides: Mapping[str, str] | None = None, name: str | None = None) -> None:
        super().__init__(name=name)
        self._overrides = dict(overrides or {})

    def _do_transform(self, variables: VariableSet) -> VariableSet:
        oics_vars = {key: f"{value}-{LOCAL_NAME_SUFFIX}" for key, value in variables.vars.items()}
        oics_vars.update(self._overrides)
        return variables.with_vars(oics_vars)


def transformer_for(
    variant: Variant,
    *,
    test_vars_overrides: Mapping[str, str] | None = None,
    oics_vars_overrides: Mapping[str, str] | None = None,
) -> BaseVariableTransformer:
    """Create the transformer for a variant."""
    if variant is Variant.DOC:
        return DocVariableTransformer()
    if variant is Variant.TEST:
        return TestVariableTransformer(overrides=test_vars_overrides)
    if variant is Variant.OICS:
        return OicsVariableTransformer(overrides=oics_vars_overrides)
    raise ValueError(f"Unsupported variant: {variant!r}")


def build_variables(
    variant: Variant,
    vars: Mapping[str, str],
    test_env_vars: Mapping[str, str] | None = None,
    *,
    test_vars_overrides: Mapping[str, str] | None = None,
    oics_vars_overrides: Mapping[str, str] | None = None,
) -> VariableSet:
    """Derive a variant's variables from the declared mappings.

    The inputs are never modified, so every variant is computed from the
    same author-declared baseline.

    Args:
        variant: Target variant.
        vars: Declared example variables.
        test_env_vars: Declared test environment categories.
        test_vars_overrides: Overrides used by the test variant.
        oics_vars_overrides: Overrides used by the cloud shell variant.

    Returns:
        A new VariableSet for the variant.
    """
    transformer = transformer_for(
        variant,
        test_vars_overrides=test_vars_overrides,
        oics_vars_overrides=oics_vars_overrides,
    )
    return transformer.transform(VariableSet(vars=vars, test_env_vars=test_env_vars or {}))
