"""Tests for the Jinja2 template executor and its helper library."""

import pytest

from examplegen.engine.context import RenderContext, Variant
from examplegen.errors import TemplateExecutionError, TemplateLoadError, TemplateSyntaxError
from examplegen.renderers import (
    TEMPLATE_FUNCTIONS,
    TemplateExecutor,
    camelize,
    dasherize,
    plural,
    title_case,
    underscore,
)


@pytest.fixture
def executor(tmp_path):
    """Executor rooted at a temporary directory."""
    return TemplateExecutor(base_dir=tmp_path)


@pytest.fixture
def ctx():
    return RenderContext(
        variant=Variant.DOC,
        vars={"network": "my-vpc"},
        test_env_vars={"project": "my-project-name"},
        name="network_basic",
        primary_resource_id="default",
    )


def write_template(tmp_path, name, content):
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return name


class TestTemplateExecutor:
    """Test loading, parsing and executing templates."""

    def test_renders_variables(self, executor, ctx, tmp_path):
        name = write_template(
            tmp_path,
            "net.tf.tmpl",
            'resource "google_compute_network" "{{ primary_resource_id }}" {\n'
            '  name    = "{{ vars.network }}"\n'
            '  project = "{{ testEnvVars.project }}"\n'
            "}\n",
        )
        compiled = executor.prepare(name)
        text = executor.execute(compiled, ctx)

        assert 'resource "google_compute_network" "default" {' in text
        assert 'name    = "my-vpc"' in text
        assert 'project = "my-project-name"' in text

    def test_relative_path_resolved_against_base_dir(self, executor, tmp_path):
        write_template(tmp_path, "templates/terraform/examples/a.tf.tmpl", "x\n")
        assert executor.resolve("templates/terraform/examples/a.tf.tmpl") == (
            tmp_path / "templates/terraform/examples/a.tf.tmpl"
        )
        assert executor.load("templates/terraform/examples/a.tf.tmpl") == "x\n"

    def test_appends_missing_newline(self, executor, ctx):
        compiled = executor.compile("value = {{ vars.network }}", "inline.tf.tmpl")
        assert executor.execute(compiled, ctx) == "value = my-vpc\n"

    def test_keeps_existing_newline(self, executor, ctx):
        compiled = executor.compile("value = 1\n", "inline.tf.tmpl")
        assert executor.execute(compiled, ctx) == "value = 1\n"

    def test_conditionals(self, executor, ctx):
        source = (
            "a = 1\n"
            "{% if variant == 'doc' %}\n"
            "doc = true\n"
            "{% endif %}\n"
            "b = 2\n"
        )
        compiled = executor.compile(source, "inline.tf.tmpl")
        assert executor.execute(compiled, ctx) == "a = 1\ndoc = true\nb = 2\n"

    def test_helpers_available(self, executor, ctx):
        compiled = executor.compile(
            "{{ camelize(name, 'upper') }} {{ name | dasherize }}", "inline.tf.tmpl"
        )
        assert executor.execute(compiled, ctx) == "NetworkBasic network-basic\n"

    def test_custom_function(self, tmp_path, ctx):
        executor = TemplateExecutor(base_dir=tmp_path, functions={"shout": str.upper})
        compiled = executor.compile("{{ shout(vars.network) }}", "inline.tf.tmpl")
        assert executor.execute(compiled, ctx) == "MY-VPC\n"

    def test_missing_file(self, executor):
        with pytest.raises(TemplateLoadError) as exc_info:
            executor.prepare("missing.tf.tmpl")
        assert exc_info.value.config_path == "missing.tf.tmpl"

    def test_syntax_error(self, executor):
        with pytest.raises(TemplateSyntaxError) as exc_info:
            executor.compile("{% if vars.network %}\nno end\n", "broken.tf.tmpl")
        assert "broken.tf.tmpl" in str(exc_info.value)

    def test_undefined_value_is_execution_error(self, executor, ctx):
        compiled = executor.compile("{{ vars.undeclared }}", "inline.tf.tmpl")
        with pytest.raises(TemplateExecutionError):
            executor.execute(compiled, ctx)

    def test_helper_failure_is_execution_error(self, executor, ctx):
        compiled = executor.compile("{{ plural(42) }}", "inline.tf.tmpl")
        with pytest.raises(TemplateExecutionError) as exc_info:
            executor.execute(compiled, ctx)
        assert "AttributeError" in str(exc_info.value)

    def test_mapping_key_shadows_dict_method(self, executor):
        """A variable named like a dict method renders its value."""
        ctx = RenderContext(variant=Variant.DOC, vars={"values": "my-vals", "items": "my-items"})
        compiled = executor.compile("{{ vars.values }} {{ vars.items }}", "inline.tf.tmpl")
        assert executor.execute(compiled, ctx) == "my-vals my-items\n"

    def test_dict_methods_available_when_not_shadowed(self, executor, ctx):
        compiled = executor.compile(
            "{% for k, v in vars.items() %}{{ k }}={{ v }}{% endfor %}", "inline.tf.tmpl"
        )
        assert executor.execute(compiled, ctx) == "network=my-vpc\n"

    def test_environment_is_cached(self, executor):
        assert executor.get_environment() is executor.get_environment()


class TestHelpers:
    """Test template helper functions."""

    def test_camelize(self):
        assert camelize("address_with_subnetwork") == "addressWithSubnetwork"
        assert camelize("address_with_subnetwork", "upper") == "AddressWithSubnetwork"
        assert camelize("") == ""

    def test_underscore(self):
        assert underscore("AddressWithSubnetwork") == "address_with_subnetwork"
        assert underscore("HTTPHealthCheck") == "http_health_check"
        assert underscore("my-vpc") == "my_vpc"

    def test_dasherize(self):
        assert dasherize("network_basic") == "network-basic"

    def test_title_case(self):
        assert title_case("network_basic") == "Network Basic"

    def test_plural(self):
        assert plural("policy") == "policies"
        assert plural("address") == "addresses"
        assert plural("key") == "keys"
        assert plural("network") == "networks"

    def test_registry(self):
        assert set(TEMPLATE_FUNCTIONS) >= {"camelize", "underscore", "contains", "has_prefix"}
        assert TEMPLATE_FUNCTIONS["has_prefix"]("tf-test-a", "tf-test")
        assert TEMPLATE_FUNCTIONS["has_suffix"]("a.tf", ".tf")
        assert TEMPLATE_FUNCTIONS["contains"]("my-vpc", "-")
        assert TEMPLATE_FUNCTIONS["replace_all"]("a-b-c", "-", "_") == "a_b_c"

    def test_every_helper_is_documented(self):
        for name, function in TEMPLATE_FUNCTIONS.items():
            assert function.__doc__, name
