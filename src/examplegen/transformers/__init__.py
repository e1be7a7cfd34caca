"""Variable transformers for the example rendering pipeline.

Transformers derive the variable mappings of one rendering variant from the
author-declared mappings of an example.

Available Transformers:
- DocVariableTransformer: documentation defaults for test env categories
- TestVariableTransformer: mangled names and harness placeholders
- OicsVariableTransformer: cloud shell name suffixes
"""

from examplegen.transformers.base import (
    VariableTransformer,
    BaseVariableTransformer,
    VariableSet,
)
from examplegen.transformers.variables import (
    DOC_DEFAULTS,
    LOCAL_NAME_SUFFIX,
    MAX_TEST_VALUE_LENGTH,
    RANDOM_SUFFIX,
    DocVariableTransformer,
    TestVariableTransformer,
    OicsVariableTransformer,
    build_variables,
    mangle_test_value,
    placeholder,
    transformer_for,
)

__all__ = [
    # Base
    "VariableTransformer",
    "BaseVariableTransformer",
    "VariableSet",
    # Variables
    "DOC_DEFAULTS",
    "LOCAL_NAME_SUFFIX",
    "MAX_TEST_VALUE_LENGTH",
    "RANDOM_SUFFIX",
    "DocVariableTransformer",
    "TestVariableTransformer",
    "OicsVariableTransformer",
    "build_variables",
    "mangle_test_value",
    "placeholder",
    "transformer_for",
]
