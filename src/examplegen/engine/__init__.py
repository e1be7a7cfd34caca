"""Example rendering engine.

Components:
- Variant / RenderContext: immutable per-execution context
- ExampleRenderer: renders the doc, test and cloud shell variants
- render_example / render_examples: validate-and-render entry points
"""

from examplegen.engine.context import RenderContext, Variant
from examplegen.engine.pipeline import (
    RENDER_ORDER,
    BatchResult,
    ExampleRenderer,
    RenderResult,
    render_example,
    render_examples,
)

__all__ = [
    # Context
    "RenderContext",
    "Variant",
    # Pipeline
    "RENDER_ORDER",
    "BatchResult",
    "ExampleRenderer",
    "RenderResult",
    "render_example",
    "render_examples",
]
