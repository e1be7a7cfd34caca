"""Template execution for the example rendering pipeline.

Available components:
- TemplateExecutor: Jinja2-based loader and executor
- ExampleEnvironment: Jinja2 environment resolving mapping keys before attributes
- CompiledTemplate: a parsed template with its source text
- TEMPLATE_FUNCTIONS: helper library exposed to templates
"""

from examplegen.renderers.helpers import (
    TEMPLATE_FUNCTIONS,
    camelize,
    dasherize,
    plural,
    title_case,
    underscore,
)
from examplegen.renderers.jinja import (
    CompiledTemplate,
    ExampleEnvironment,
    TemplateExecutor,
)

__all__ = [
    # Helpers
    "TEMPLATE_FUNCTIONS",
    "camelize",
    "dasherize",
    "plural",
    "title_case",
    "underscore",
    # Jinja
    "CompiledTemplate",
    "ExampleEnvironment",
    "TemplateExecutor",
]
