"""Tests for per-variant variable transformers."""

import pytest

from examplegen.engine.context import Variant
from examplegen.errors import UnknownTestEnvVarError
from examplegen.transformers import (
    DOC_DEFAULTS,
    MAX_TEST_VALUE_LENGTH,
    RANDOM_SUFFIX,
    BaseVariableTransformer,
    DocVariableTransformer,
    OicsVariableTransformer,
    TestVariableTransformer,
    VariableSet,
    VariableTransformer,
    build_variables,
    mangle_test_value,
    placeholder,
    transformer_for,
)


@pytest.fixture
def declared():
    """Author-declared variables."""
    return VariableSet(
        vars={"network": "my-vpc", "subnet": "my_subnet", "description": "a description"},
        test_env_vars={"project": "PROJECT_NAME", "region": "REGION"},
    )


class TestMangleTestValue:
    """Test the acceptance test value rule."""

    def test_hyphenated_value(self):
        assert mangle_test_value("my-vpc") == "tf-test-my-vpc%{random_suffix}"

    def test_underscored_value(self):
        assert mangle_test_value("my_network") == "tf_test_my_network%{random_suffix}"

    def test_plain_value(self):
        assert mangle_test_value("description text") == "description text%{random_suffix}"

    def test_hyphen_takes_precedence(self):
        """A value with both separators gets the hyphen prefix."""
        assert mangle_test_value("a-b_c") == "tf-test-a-b_c%{random_suffix}"

    def test_truncation(self):
        """Long values are cut to 54 characters before the suffix."""
        value = "x" * 40 + "-" + "y" * 40
        result = mangle_test_value(value)

        assert result.endswith(RANDOM_SUFFIX)
        assert len(result) == MAX_TEST_VALUE_LENGTH + len(RANDOM_SUFFIX)
        assert result[:MAX_TEST_VALUE_LENGTH] == ("tf-test-" + value)[:54]

    def test_value_at_limit_not_truncated(self):
        value = "v" * 54
        assert mangle_test_value(value) == value + RANDOM_SUFFIX

    def test_placeholder(self):
        assert placeholder("network") == "%{network}"


class TestDocVariableTransformer:
    """Test documentation variables."""

    def test_vars_pass_through(self, declared):
        result = DocVariableTransformer().transform(declared)
        assert dict(result.vars) == dict(declared.vars)

    def test_test_env_vars_use_defaults(self, declared):
        result = DocVariableTransformer().transform(declared)
        assert dict(result.test_env_vars) == {
            "project": "my-project-name",
            "region": "us-west1",
        }

    def test_unknown_category(self):
        variables = VariableSet(test_env_vars={"thing": "NOT_A_CATEGORY"})
        with pytest.raises(UnknownTestEnvVarError) as exc_info:
            DocVariableTransformer().transform(variables)
        assert exc_info.value.variable == "thing"
        assert exc_info.value.category == "NOT_A_CATEGORY"

    def test_custom_defaults(self):
        variables = VariableSet(test_env_vars={"project": "PROJECT_NAME"})
        result = DocVariableTransformer(defaults={"PROJECT_NAME": "demo"}).transform(variables)
        assert result.test_env_vars["project"] == "demo"

    def test_default_table(self):
        assert DOC_DEFAULTS["ORG_ID"] == "123456789"
        assert DOC_DEFAULTS["BILLING_ACCT"] == "000000-0000000-0000000-000000"
        assert len(DOC_DEFAULTS) == 15


class TestTestVariableTransformer:
    """Test acceptance test variables."""

    def test_vars_are_mangled(self, declared):
        result = TestVariableTransformer().transform(declared)
        assert dict(result.vars) == {
            "network": "tf-test-my-vpc%{random_suffix}",
            "subnet": "tf_test_my_subnet%{random_suffix}",
            "description": "a description%{random_suffix}",
        }

    def test_overrides_become_placeholders(self, declared):
        result = TestVariableTransformer(overrides={"network": "nameOfVpc()"}).transform(declared)
        assert result.vars["network"] == "%{network}"
        assert result.vars["subnet"] == "tf_test_my_subnet%{random_suffix}"

    def test_override_only_names_are_added(self, declared):
        result = TestVariableTransformer(overrides={"zip": "path()"}).transform(declared)
        assert result.vars["zip"] == "%{zip}"

    def test_test_env_vars_become_placeholders(self, declared):
        result = TestVariableTransformer().transform(declared)
        assert dict(result.test_env_vars) == {"project": "%{project}", "region": "%{region}"}


class TestOicsVariableTransformer:
    """Test cloud shell variables."""

    def test_vars_are_suffixed(self, declared):
        result = OicsVariableTransformer().transform(declared)
        assert result.vars["network"] == "my-vpc-${local.name_suffix}"
        assert result.vars["description"] == "a description-${local.name_suffix}"

    def test_overrides_replace_verbatim(self, declared):
        result = OicsVariableTransformer(overrides={"network": "default"}).transform(declared)
        assert result.vars["network"] == "default"

    def test_test_env_vars_untouched(self, declared):
        result = OicsVariableTransformer().transform(declared)
        assert dict(result.test_env_vars) == dict(declared.test_env_vars)


class TestBuildVariables:
    """Test the variant dispatch."""

    def test_inputs_are_not_modified(self):
        vars = {"network": "my-vpc"}
        test_env_vars = {"project": "PROJECT_NAME"}
        for variant in Variant:
            build_variables(variant, vars, test_env_vars, test_vars_overrides={"network": "x"})
        assert vars == {"network": "my-vpc"}
        assert test_env_vars == {"project": "PROJECT_NAME"}

    def test_variants_derive_from_baseline(self):
        """The oics variant never sees test-mangled values."""
        vars = {"network": "my-vpc"}
        build_variables(Variant.TEST, vars)
        result = build_variables(Variant.OICS, vars)
        assert result.vars["network"] == "my-vpc-${local.name_suffix}"

    @pytest.mark.parametrize(
        "variant,expected",
        [
            (Variant.DOC, DocVariableTransformer),
            (Variant.TEST, TestVariableTransformer),
            (Variant.OICS, OicsVariableTransformer),
        ],
    )
    def test_transformer_for(self, variant, expected):
        transformer = transformer_for(variant)
        assert isinstance(transformer, expected)
        assert isinstance(transformer, BaseVariableTransformer)
        assert isinstance(transformer, VariableTransformer)
        assert transformer.variant is variant

    def test_variable_set_is_read_only(self, declared):
        with pytest.raises(TypeError):
            declared.vars["network"] = "other"
