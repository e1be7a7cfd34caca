"""Example rendering pipeline.

For every example the pipeline reads and parses the template once,
validates its variable references, then renders the three variants:

1. Transform: derive the variant's variables from the declared ones
2. Execute: run the template against a rendering context
3. Post-process: collapse blank lines, strip region tags, substitute paths

Example:
    renderer = ExampleRenderer(base_dir=Path("mmv1"))
    result = renderer.render(example)
    print(example.doc_text)

    # Batch rendering that keeps going past failures
    batch = render_examples(examples, fail_fast=False, max_workers=4)
    for failure in batch.failures:
        print(failure.name, failure.error)
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, TYPE_CHECKING

from examplegen.engine.context import RenderContext, Variant
from examplegen.errors import ExampleGenError
from examplegen.postprocess import postprocess
from examplegen.renderers.jinja import CompiledTemplate, TemplateExecutor
from examplegen.resolver import validate_template_variables
from examplegen.transformers.variables import build_variables

if TYPE_CHECKING:
    from examplegen.example import Example

logger = logging.getLogger(__name__)


RENDER_ORDER: tuple[Variant, ...] = (Variant.DOC, Variant.TEST, Variant.OICS)


@dataclass
class RenderResult:
    """Result of rendering one example.

    Attributes:
        name: Example name.
        texts: Final text per variant.
        elapsed_ms: Time taken in milliseconds.
        success: Whether every variant rendered.
        error: The error that stopped rendering, if any.
    """

    name: str
    texts: dict[Variant, str] = field(default_factory=dict)
    elapsed_ms: float = 0.0
    success: bool = True
    error: ExampleGenError | None = None

    @property
    def doc_text(self) -> str:
        return self.texts.get(Variant.DOC, "")

    @property
    def test_text(self) -> str:
        return self.texts.get(Variant.TEST, "")

    @property
    def oics_text(self) -> str:
        return self.texts.get(Variant.OICS, "")


@dataclass
class BatchResult:
    """Result of rendering several examples."""

    results: list[RenderResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(r.success for r in self.results)

    @property
    def failures(self) -> list[RenderResult]:
        return [r for r in self.results if not r.success]

    @property
    def rendered(self) -> list[RenderResult]:
        return [r for r in self.results if r.success]

    def raise_for_failures(self) -> None:
        """Re-raise the first failure, if any."""
        for result in self.results:
            if result.error is not None:
                raise result.error

    def __str__(self) -> str:
        return f"{len(self.rendered)} rendered, {len(self.failures)} failed"


class ExampleRenderer:
    """Render examples into their documentation, test and cloud shell configs.

    The renderer holds no per-example state, so one instance may render
    several examples concurrently.

    Args:
        executor: Template executor to use.
        base_dir: Base directory for a default executor.
    """

    def __init__(
        self,
        executor: TemplateExecutor | None = None,
        base_dir: Path | str | None = None,
    ) -> None:
        self._executor = executor or TemplateExecutor(base_dir=base_dir)

    @property
    def executor(self) -> TemplateExecutor:
        return self._executor

    def prepare(self, example: "Example") -> CompiledTemplate:
        """Read, parse and validate an example's template."""
        compiled = self._executor.prepare(example.config_path)
        validate_template_variables(
            compiled.source,
            example.vars,
            example.test_env_vars,
            example.config_path,
        )
        return compiled

    def render_variant(
        self,
        example: "Example",
        variant: Variant,
        compiled: CompiledTemplate | None = None,
    ) -> str:
        """Render a single variant of an example.

        Does not write to the example's output slots.
        """
        if compiled is None:
            compiled = self.prepare(example)

        variables = build_variables(
            variant,
            example.vars,
            example.test_env_vars,
            test_vars_overrides=example.test_vars_overrides,
            oics_vars_overrides=example.oics_vars_overrides,
        )
        ctx = RenderContext(
            variant=variant,
            vars=variables.vars,
            test_env_vars=variables.test_env_vars,
            name=example.name,
            primary_resource_id=example.primary_resource_id,
            primary_resource_type=example.primary_resource_type,
        )
        raw = self._executor.execute(compiled, ctx)
        logger.debug("Rendered %s variant of %s", variant.value, example.name)
        return postprocess(raw, variant)

    def render(self, example: "Example") -> RenderResult:
        """Render all variants and store them on the example.

        The example's output slots are only written once every variant has
        rendered.

        Raises:
            ExampleGenError: If validation, loading or execution fails.
        """
        start = time.perf_counter()
        compiled = self.prepare(example)
        texts = {variant: self.render_variant(example, variant, compiled) for variant in RENDER_ORDER}

        example.store_rendered(texts[Variant.DOC], texts[Variant.TEST], texts[Variant.OICS])

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info("Rendered example %s in %.1fms", example.name, elapsed_ms)
        return RenderResult(name=example.name, texts=texts, elapsed_ms=elapsed_ms)

    def try_render(self, example: "Example") -> RenderResult:
        """Render an example, returning failures instead of raising."""
        try:
            return self.render(example)
        except ExampleGenError as e:
            logger.error("Failed to render example %s: %s", example.name, e)
            return RenderResult(name=example.name, success=False, error=e)


def render_example(example: "Example", base_dir: Path | str | None = None) -> RenderResult:
    """Validate and render a single example."""
    example.validate()
    return ExampleRenderer(base_dir=base_dir).render(example)


def render_examples(
    examples: Iterable["Example"],
    *,
    base_dir: Path | str | None = None,
    fail_fast: bool = True,
    max_workers: int = 1,
    renderer: ExampleRenderer | None = None,
) -> BatchResult:
    """Validate and render a batch of examples.

    Args:
        examples: Examples to render.
        base_dir: Template base directory.
        fail_fast: Raise on the first failure instead of collecting it.
        max_workers: Render in a thread pool when greater than one.
        renderer: Renderer to use instead of a default one.

    Returns:
        BatchResult with one entry per example, in input order.

    Raises:
        ExampleGenError: The first failure, when ``fail_fast`` is set.
    """
    renderer = renderer or ExampleRenderer(base_dir=base_dir)
    examples = list(examples)

    def _run(example: "Example") -> RenderResult:
        try:
            example.validate()
        except ExampleGenError as e:
            if fail_fast:
                raise
            logger.error("Invalid example %s: %s", example.name or "<unnamed>", e)
            return RenderResult(name=example.name, success=False, error=e)
        return renderer.render(example) if fail_fast else renderer.try_render(example)

    if max_workers > 1 and len(examples) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(_run, examples))
    else:
        results = [_run(example) for example in examples]

    batch = BatchResult(results=results)
    logger.info("Rendered examples: %s", batch)
    return batch
