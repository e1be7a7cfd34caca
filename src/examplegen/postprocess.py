"""Text post-processing for rendered example configs.

Rendered template output goes through three rewrites, in this order:

1. a trailing blank line at end of text is collapsed to a single newline;
2. documentation region markers (``# [START tag]`` style lines) are removed;
3. placeholder asset paths are swapped for the variant's real paths.

Paths are substituted after region markers are gone so that a marker can
never be partially rewritten.
"""

from __future__ import annotations

import re
from typing import Mapping

from examplegen.engine.context import Variant


TRAILING_BLANK_LINE = re.compile(r"\n\n\Z")

# A marker line followed by its newline, and a marker at the end of a line.
REGION_TAG_LINE = re.compile(r"# \[[a-zA-Z_ ]+\]\n")
REGION_TAG_EOL = re.compile(r"\n# \[[a-zA-Z_ ]+\]")


EXAMPLE_PATHS: Mapping[str, str] = {
    "../static/img/header-logo.png": "../static/header-logo.png",
    "path/to/private.key": "../static/ssl_cert/test.key",
    "path/to/id_rsa.pub": "../static/ssh_rsa.pub",
    "path/to/certificate.crt": "../static/ssl_cert/test.crt",
}

TEST_PATHS: Mapping[str, str] = {
    "../static/img/header-logo.png": "test-fixtures/header-logo.png",
    "path/to/private.key": "test-fixtures/test.key",
    "path/to/certificate.crt": "test-fixtures/test.crt",
    "path/to/index.zip": "%{zip_path}",
    "verified-domain.com": "tf-test-domain%{random_suffix}.gcp.tfacc.hashicorptest.com",
    "path/to/id_rsa.pub": "test-fixtures/ssh_rsa.pub",
}


def collapse_trailing_blank_line(text: str) -> str:
    """Replace a final ``\\n\\n`` with a single newline."""
    return TRAILING_BLANK_LINE.sub("\n", text)


def strip_region_tags(text: str) -> str:
    """Remove region marker lines.

    Removing one marker can join text into a new marker, so the rewrite is
    repeated until nothing changes.
    """
    while True:
        stripped = REGION_TAG_LINE.sub("", text)
        stripped = REGION_TAG_EOL.sub("", stripped)
        if stripped == text:
            return stripped
        text = stripped


def substitute_paths(text: str, table: Mapping[str, str]) -> str:
    """Apply a find/replace table in its declared order."""
    for placeholder, replacement in table.items():
        text = text.replace(placeholder, replacement)
    return text


def substitute_example_paths(text: str) -> str:
    """Point placeholder paths at the shared static assets."""
    return substitute_paths(text, EXAMPLE_PATHS)


def substitute_test_paths(text: str) -> str:
    """Point placeholder paths at the acceptance test fixtures."""
    return substitute_paths(text, TEST_PATHS)


def paths_for(variant: Variant) -> Mapping[str, str]:
    """Return the path table used by a variant."""
    return TEST_PATHS if variant.uses_test_paths else EXAMPLE_PATHS


def postprocess(text: str, variant: Variant) -> str:
    """Run every post-processing step for a variant.

    Args:
        text: Raw template output.
        variant: Variant the text was rendered for.

    Returns:
        Final text.
    """
    text = collapse_trailing_blank_line(text)
    text = strip_region_tags(text)
    return substitute_paths(text, paths_for(variant))
