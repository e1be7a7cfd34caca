"""Example declarations.

An ``Example`` describes one Terraform config that is shown in the
documentation, run as an acceptance test and offered as an "Open in Cloud
Shell" tutorial, all generated from a shared template.

Examples are usually declared in YAML next to the resource definition:

    examples:
      - name: network_basic
        primary_resource_id: default
        vars:
          network_name: my-vpc
        test_env_vars:
          project: PROJECT_NAME

and loaded with ``load_examples``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any
from urllib.parse import urlencode, urlunsplit

import yaml

from examplegen.errors import (
    ExampleConfigError,
    ExternalProviderError,
    MissingFieldError,
    UnknownFieldError,
    UnknownTestEnvVarError,
)
from examplegen.renderers.helpers import camelize
from examplegen.transformers.variables import DOC_DEFAULTS

logger = logging.getLogger(__name__)


DEFAULT_CONFIG_PATH = "templates/terraform/examples/{name}.tf.tmpl"

# Official providers supported by HashiCorp
# https://registry.terraform.io/search/providers?namespace=hashicorp&tier=official
HASHICORP_PROVIDERS: tuple[str, ...] = (
    "aws", "random", "null", "template", "azurerm", "kubernetes", "local",
    "external", "time", "vault", "archive", "tls", "helm", "azuread", "http",
    "cloudinit", "tfe", "dns", "consul", "vsphere", "nomad", "awscc",
    "googleworkspace", "hcp", "boundary", "ad", "azurestack", "opc",
    "oraclepaas", "hcs", "salesforce",
)

OICS_HOST = "console.cloud.google.com"
OICS_PATH = "/cloudshell/open"
OICS_PARAMS: dict[str, str] = {
    "cloudshell_git_repo": "https://github.com/terraform-google-modules/docs-examples.git",
    "cloudshell_image": "gcr.io/cloudshell-images/cloudshell:latest",
    "open_in_editor": "main.tf",
    "cloudshell_print": "./motd",
    "cloudshell_tutorial": "./tutorial.md",
}

# Alternative spellings accepted in declarations.
FIELD_ALIASES: dict[str, str] = {
    "template_path": "config_path",
    "templatePath": "config_path",
    "testEnvVars": "test_env_vars",
    "vars_overrides": "test_vars_overrides",
    "varsOverrides": "test_vars_overrides",
    "oicsVarsOverrides": "oics_vars_overrides",
    "primaryResourceId": "primary_resource_id",
    "primaryResourceType": "primary_resource_type",
}


# Output slots filled by rendering, never declared.
_OUTPUT_FIELDS = frozenset({"doc_text", "test_text", "oics_text", "_rendered"})


@dataclass(frozen=True)
class IamMember:
    """A member/role pair bootstrapped on the test project."""

    member: str
    role: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "IamMember":
        try:
            return cls(member=str(data["member"]), role=str(data["role"]))
        except (KeyError, TypeError) as e:
            raise ExampleConfigError(f"Invalid bootstrap_iam entry: {data!r}") from e


def _string_map(value: Any, key: str) -> dict[str, str]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ExampleConfigError(f"`{key}` must be a mapping, got {type(value).__name__}")
    return {str(k): "" if v is None else str(v) for k, v in value.items()}


def _string_list(value: Any, key: str) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ExampleConfigError(f"`{key}` must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass
class Example:
    """One example config rendered into documentation, test and cloud shell text.

    Attributes:
        name: Example name in lower_snake_case, e.g. ``address_with_subnetwork``.
        primary_resource_id: Id of the "primary" resource, used in import tests.
        primary_resource_type: Overrides the resource type implied by the parent.
        vars: Template variable values; prefixes for tests, verbatim in docs.
        test_env_vars: Template variable name to test environment category
            (``PROJECT_NAME``, ``REGION``, ``ORG_ID``, ...).
        test_vars_overrides: Variables rendered as ``%{name}`` in tests, with
            the value expression supplied to the test generator.
        oics_vars_overrides: Literal values used in the cloud shell config.
        config_path: Template path; defaults to
            ``templates/terraform/examples/{name}.tf.tmpl``.
        doc_text: Rendered documentation config.
        test_text: Rendered acceptance test config.
        oics_text: Rendered cloud shell config.
    """

    name: str = ""
    primary_resource_id: str = ""
    primary_resource_type: str = ""
    bootstrap_iam: list[IamMember] = field(default_factory=list)
    vars: dict[str, str] = field(default_factory=dict)
    test_env_vars: dict[str, str] = field(default_factory=dict)
    test_vars_overrides: dict[str, str] = field(default_factory=dict)
    oics_vars_overrides: dict[str, str] = field(default_factory=dict)
    min_version: str = ""
    ignore_read_extra: list[str] = field(default_factory=list)
    exclude_test: bool = False
    exclude_docs: bool = False
    exclude_import_test: bool = False
    primary_resource_name: str = ""
    region_override: str = ""
    config_path: str = ""
    skip_vcr: bool = False
    skip_test: str = ""
    external_providers: list[str] = field(default_factory=list)
    tgc_test_ignore_extra: list[str] = field(default_factory=list)
    tgc_test_ignore_in_asset: list[str] = field(default_factory=list)
    tgc_skip_test: str = ""

    doc_text: str = field(default="", compare=False, repr=False)
    test_text: str = field(default="", compare=False, repr=False)
    oics_text: str = field(default="", compare=False, repr=False)
    _rendered: bool = field(default=False, init=False, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.config_path and self.name:
            self.config_path = DEFAULT_CONFIG_PATH.format(name=self.name)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def declared_fields(cls) -> frozenset[str]:
        """Names of the fields that may appear in a declaration."""
        return frozenset(
            f.name for f in fields(cls) if f.name not in _OUTPUT_FIELDS
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Example":
        """Create an Example from a parsed declaration.

        Raises:
            UnknownFieldError: If the declaration contains unrecognised keys.
            ExampleConfigError: If a field has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ExampleConfigError(f"Example declaration must be a mapping, got {data!r}")

        known = cls.declared_fields()
        normalized: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in data.items():
            target = FIELD_ALIASES.get(key, key)
            if target in known:
                normalized[target] = value
            else:
                unknown.append(str(key))
        if unknown:
            raise UnknownFieldError(sorted(unknown), str(data.get("name") or ""))

        return cls(
            name=str(normalized.get("name") or ""),
            primary_resource_id=str(normalized.get("primary_resource_id") or ""),
            primary_resource_type=str(normalized.get("primary_resource_type") or ""),
            bootstrap_iam=[
                IamMember.from_dict(item) for item in normalized.get("bootstrap_iam") or []
            ],
            vars=_string_map(normalized.get("vars"), "vars"),
            test_env_vars=_string_map(normalized.get("test_env_vars"), "test_env_vars"),
            test_vars_overrides=_string_map(
                normalized.get("test_vars_overrides"), "test_vars_overrides"
            ),
            oics_vars_overrides=_string_map(
                normalized.get("oics_vars_overrides"), "oics_vars_overrides"
            ),
            min_version=str(normalized.get("min_version") or ""),
            ignore_read_extra=_string_list(normalized.get("ignore_read_extra"), "ignore_read_extra"),
            exclude_test=bool(normalized.get("exclude_test", False)),
            exclude_docs=bool(normalized.get("exclude_docs", False)),
            exclude_import_test=bool(normalized.get("exclude_import_test", False)),
            primary_resource_name=str(normalized.get("primary_resource_name") or ""),
            region_override=str(normalized.get("region_override") or ""),
            config_path=str(normalized.get("config_path") or ""),
            skip_vcr=bool(normalized.get("skip_vcr", False)),
            skip_test=str(normalized.get("skip_test") or ""),
            external_providers=_string_list(
                normalized.get("external_providers"), "external_providers"
            ),
            tgc_test_ignore_extra=_string_list(
                normalized.get("tgc_test_ignore_extra"), "tgc_test_ignore_extra"
            ),
            tgc_test_ignore_in_asset=_string_list(
                normalized.get("tgc_test_ignore_in_asset"), "tgc_test_ignore_in_asset"
            ),
            tgc_skip_test=str(normalized.get("tgc_skip_test") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a declaration dictionary, omitting empty fields."""
        result: dict[str, Any] = {}
        for name in sorted(self.declared_fields(), key=self._field_order):
            value = getattr(self, name)
            if name == "bootstrap_iam":
                value = [{"member": m.member, "role": m.role} for m in value]
            if value in ("", False, [], {}):
                continue
            result[name] = value
        return result

    @classmethod
    def _field_order(cls, name: str) -> int:
        return [f.name for f in fields(cls)].index(name)

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self, resource_name: str = "") -> None:
        """Validate the declaration.

        Args:
            resource_name: Owning resource, used in error messages.

        Raises:
            MissingFieldError: If ``name`` is empty.
            UnknownTestEnvVarError: If a test env category has no doc default.
            ExternalProviderError: If a provider is not on the whitelist.
        """
        if not self.name:
            raise MissingFieldError("name", resource_name)
        self.validate_test_env_vars()
        self.validate_external_providers()

    def validate_test_env_vars(self) -> None:
        for key, category in self.test_env_vars.items():
            if category not in DOC_DEFAULTS:
                raise UnknownTestEnvVarError(key, category)

    def validate_external_providers(self) -> None:
        unallowed = [p for p in self.external_providers if p not in HASHICORP_PROVIDERS]
        if unallowed:
            raise ExternalProviderError(unallowed)

    # -------------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------------

    def oics_link(self) -> str:
        """Build the Open in Cloud Shell link for this example."""
        params = dict(OICS_PARAMS)
        params["cloudshell_working_dir"] = self.name
        query = urlencode(sorted(params.items()))
        return urlunsplit(("https", OICS_HOST, OICS_PATH, query, ""))

    def test_slug(self, product_name: str, resource_name: str) -> str:
        """Name of the generated acceptance test function."""
        return f"{product_name}{resource_name}_{camelize(self.name, 'lower')}Example"

    def resource_type(self, terraform_name: str) -> str:
        """Resource type of the primary resource, used by import tests."""
        return self.primary_resource_type or terraform_name

    def store_rendered(self, doc_text: str, test_text: str, oics_text: str) -> None:
        """Fill the output slots with the texts of a completed render."""
        self.doc_text = doc_text
        self.test_text = test_text
        self.oics_text = oics_text
        self._rendered = True

    @property
    def is_rendered(self) -> bool:
        """Whether all three variants have been rendered, even to empty text."""
        return self._rendered


def load_examples(path: str | Path) -> list[Example]:
    """Load example declarations from a YAML file.

    The file holds either a list of examples or a mapping with an
    ``examples`` key (as in a resource definition).

    Raises:
        ExampleConfigError: If the file cannot be read or has the wrong shape.
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ExampleConfigError(f"Failed to read examples file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ExampleConfigError(f"Invalid YAML in {path}: {e}") from e

    if isinstance(data, dict):
        data = data.get("examples") or []
    if data is None:
        data = []
    if not isinstance(data, list):
        raise ExampleConfigError(f"{path} must contain a list of examples")

    examples = [Example.from_dict(item) for item in data]
    logger.info("Loaded %d example(s) from %s", len(examples), path)
    return examples
