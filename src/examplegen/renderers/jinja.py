"""Jinja2-based template executor for example configs.

The executor reads an example template from disk once, parses it with a
fixed helper library and then executes it against one ``RenderContext``
per variant.

Example:
    executor = TemplateExecutor(base_dir=Path("mmv1"))
    template = executor.prepare("templates/terraform/examples/network_basic.tf.tmpl")
    text = executor.execute(template, ctx)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, TYPE_CHECKING

from jinja2 import Environment, StrictUndefined, Template, TemplateError as JinjaTemplateError
from jinja2 import TemplateSyntaxError as JinjaTemplateSyntaxError

from examplegen.errors import TemplateExecutionError, TemplateLoadError, TemplateSyntaxError
from examplegen.renderers.helpers import TEMPLATE_FUNCTIONS

if TYPE_CHECKING:
    from examplegen.engine.context import RenderContext

logger = logging.getLogger(__name__)


class ExampleEnvironment(Environment):
    """Jinja2 environment where ``mapping.key`` resolves to the mapping's item.

    A variable named ``values`` or ``items`` renders its declared value
    rather than the dict method of the same name.
    """

    def getattr(self, obj: Any, attribute: str) -> Any:
        if isinstance(obj, Mapping) and attribute in obj:
            return obj[attribute]
        return super().getattr(obj, attribute)


@dataclass(frozen=True)
class CompiledTemplate:
    """A parsed template together with its source.

    Attributes:
        config_path: Path the template was read from.
        source: Raw template text, used for variable validation.
        template: Parsed Jinja2 template.
    """

    config_path: str
    source: str
    template: Template


class TemplateExecutor:
    """Load, parse and execute example templates.

    Args:
        base_dir: Directory relative template paths are resolved against.
            Defaults to the current working directory.
        functions: Extra helpers merged over the built-in helper library.
        encoding: Template file encoding.
    """

    def __init__(
        self,
        base_dir: Path | str | None = None,
        functions: dict[str, Callable[..., Any]] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else None
        self._functions = {**TEMPLATE_FUNCTIONS, **(functions or {})}
        self._encoding = encoding
        self._env: Environment | None = None

    @property
    def base_dir(self) -> Path | None:
        """Get the template base directory."""
        return self._base_dir

    def get_environment(self) -> Environment:
        """Get or create the Jinja2 environment.

        Undefined names fail loudly, block tags do not leave blank lines
        behind, and the final newline of the template is kept.
        """
        if self._env is not None:
            return self._env

        env = ExampleEnvironment(
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )
        env.globals.update(self._functions)
        env.filters.update(self._functions)
        self._env = env
        return env

    def resolve(self, config_path: str | Path) -> Path:
        """Resolve a template path against the base directory."""
        path = Path(config_path)
        if self._base_dir is not None and not path.is_absolute():
            path = self._base_dir / path
        return path

    def load(self, config_path: str | Path) -> str:
        """Read a template file.

        Raises:
            TemplateLoadError: If the file cannot be read.
        """
        path = self.resolve(config_path)
        try:
            return path.read_text(encoding=self._encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateLoadError(config_path, str(e)) from e

    def compile(self, source: str, config_path: str | Path) -> CompiledTemplate:
        """Parse template text.

        Raises:
            TemplateSyntaxError: If the template is malformed.
        """
        try:
            template = self.get_environment().from_string(source)
        except JinjaTemplateSyntaxError as e:
            raise TemplateSyntaxError(config_path, f"line {e.lineno}: {e.message}") from e
        return CompiledTemplate(config_path=str(config_path), source=source, template=template)

    def prepare(self, config_path: str | Path) -> CompiledTemplate:
        """Read and parse a template file."""
        source = self.load(config_path)
        logger.debug("Loaded template %s (%d bytes)", config_path, len(source))
        return self.compile(source, config_path)

    def execute(self, compiled: CompiledTemplate, ctx: "RenderContext") -> str:
        """Execute a parsed template against a rendering context.

        Returns:
            Rendered text, always ending with a newline.

        Raises:
            TemplateExecutionError: If the template fails while executing.
        """
        try:
            rendered = compiled.template.render(**ctx.to_template_vars())
        except JinjaTemplateError as e:
            raise TemplateExecutionError(compiled.config_path, str(e)) from e
        except Exception as e:
            raise TemplateExecutionError(
                compiled.config_path, f"{type(e).__name__} - {e}"
            ) from e

        if not rendered.endswith("\n"):
            rendered = f"{rendered}\n"
        return rendered

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_dir={self._base_dir!r})"
