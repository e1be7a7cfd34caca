"""examplegen - render example configs into documentation, test and cloud shell variants."""

from examplegen.errors import (
    ExampleGenError,
    ExampleConfigError,
    TemplateError,
    TemplateLoadError,
    UndeclaredVariableError,
)
from examplegen.engine import (
    BatchResult,
    ExampleRenderer,
    RenderContext,
    RenderResult,
    Variant,
    render_example,
    render_examples,
)
from examplegen.example import Example, IamMember, load_examples
from examplegen.postprocess import postprocess
from examplegen.transformers import VariableSet, build_variables, mangle_test_value

__version__ = "0.1.0"

__all__ = [
    # Errors
    "ExampleGenError",
    "ExampleConfigError",
    "TemplateError",
    "TemplateLoadError",
    "UndeclaredVariableError",
    # Engine
    "BatchResult",
    "ExampleRenderer",
    "RenderContext",
    "RenderResult",
    "Variant",
    "render_example",
    "render_examples",
    # Examples
    "Example",
    "IamMember",
    "load_examples",
    # Building blocks
    "postprocess",
    "VariableSet",
    "build_variables",
    "mangle_test_value",
]
