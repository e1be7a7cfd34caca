"""Tests for writing rendered examples to disk."""

import pytest

from examplegen.config import GeneratorConfig
from examplegen.engine.context import Variant
from examplegen.errors import NotRenderedError
from examplegen.example import Example
from examplegen.writer import variants_to_write, write_example


def rendered_example(**kwargs):
    example = Example(name="network_basic", **kwargs)
    example.store_rendered("doc\n", "test\n", "oics\n")
    return example


class TestVariantsToWrite:
    """Test which variants are emitted."""

    def test_all_by_default(self):
        assert variants_to_write(Example(name="a")) == [Variant.DOC, Variant.TEST, Variant.OICS]

    def test_exclude_flags(self):
        example = Example(name="a", exclude_docs=True, exclude_test=True)
        assert variants_to_write(example) == [Variant.OICS]


class TestWriteExample:
    """Test write_example."""

    def test_writes_files(self, tmp_path):
        config = GeneratorConfig(output_dir=tmp_path)
        written = write_example(rendered_example(), config)

        assert [p.name for p in written] == ["main.tf", "test.tf", "oics.tf"]
        assert (tmp_path / "network_basic" / "main.tf").read_text() == "doc\n"
        assert (tmp_path / "network_basic" / "oics.tf").read_text() == "oics\n"

    def test_custom_filenames(self, tmp_path):
        config = GeneratorConfig(output_dir=tmp_path, doc_filename="doc.tf")
        write_example(rendered_example(exclude_test=True), config)

        assert (tmp_path / "network_basic" / "doc.tf").exists()
        assert not (tmp_path / "network_basic" / "test.tf").exists()

    def test_unrendered_example(self, tmp_path):
        with pytest.raises(NotRenderedError):
            write_example(Example(name="a"), GeneratorConfig(output_dir=tmp_path))

    def test_empty_rendered_texts_are_written(self, tmp_path):
        example = Example(name="only_tags")
        example.store_rendered("", "", "")

        written = write_example(example, GeneratorConfig(output_dir=tmp_path))

        assert len(written) == 3
        assert (tmp_path / "only_tags" / "main.tf").read_text() == ""
