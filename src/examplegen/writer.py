"""Write rendered example configs to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from examplegen.engine.context import Variant
from examplegen.errors import NotRenderedError

if TYPE_CHECKING:
    from examplegen.config import GeneratorConfig
    from examplegen.example import Example

logger = logging.getLogger(__name__)


def variants_to_write(example: "Example") -> list[Variant]:
    """Variants that are emitted for an example, honouring its exclude flags."""
    variants = []
    if not example.exclude_docs:
        variants.append(Variant.DOC)
    if not example.exclude_test:
        variants.append(Variant.TEST)
    variants.append(Variant.OICS)
    return variants


def write_example(example: "Example", config: "GeneratorConfig") -> list[Path]:
    """Write an example's rendered texts under ``output_dir/<name>/``.

    Returns:
        Paths of the files written.

    Raises:
        NotRenderedError: If the example has not been rendered.
    """
    if not example.is_rendered:
        raise NotRenderedError(example.name)

    texts = {
        Variant.DOC: example.doc_text,
        Variant.TEST: example.test_text,
        Variant.OICS: example.oics_text,
    }
    target = Path(config.output_dir) / example.name
    target.mkdir(parents=True, exist_ok=True)

    written = []
    for variant in variants_to_write(example):
        path = target / config.filename_for(variant)
        path.write_text(texts[variant], encoding="utf-8")
        written.append(path)

    skipped = set(Variant) - set(variants_to_write(example))
    if skipped:
        logger.warning(
            "Skipped %s output for example %s",
            ", ".join(sorted(v.value for v in skipped)),
            example.name,
        )
    logger.debug("Wrote %d file(s) for %s", len(written), example.name)
    return written
