"""Command-line interface for examplegen."""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from examplegen.config import ConfigError, load_config
from examplegen.engine.pipeline import render_examples
from examplegen.errors import ExampleGenError
from examplegen.example import Example, load_examples
from examplegen.writer import write_example

app = typer.Typer(
    name="examplegen",
    help="Render example configs into documentation, test and cloud shell variants",
    add_completion=False,
)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )


@app.command(name="render")
def render_cmd(
    examples_file: Annotated[Path, typer.Argument(help="YAML file declaring the examples")],
    output_dir: Annotated[
        Optional[Path],
        typer.Option("--output-dir", "-o", help="Directory to write rendered configs to"),
    ] = None,
    base_dir: Annotated[
        Optional[Path],
        typer.Option("--base-dir", "-b", help="Directory template paths are relative to"),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", help="Number of examples rendered in parallel"),
    ] = None,
    keep_going: Annotated[
        bool,
        typer.Option("--keep-going", help="Continue past examples that fail to render"),
    ] = False,
    config_file: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Generator settings file (YAML)"),
    ] = None,
) -> None:
    """Render every example and write its configs."""
    if not examples_file.exists():
        typer.echo(f"Error: File not found: {examples_file}", err=True)
        raise typer.Exit(1)

    try:
        config = load_config(config_file).with_overrides(
            output_dir=output_dir,
            base_dir=base_dir,
            max_workers=workers,
            fail_fast=False if keep_going else None,
        )
        examples = load_examples(examples_file)
        batch = render_examples(
            examples,
            base_dir=config.base_dir,
            fail_fast=config.fail_fast,
            max_workers=config.max_workers,
        )
        by_name = {r.name: r for r in batch.results}
        written = 0
        for example in examples:
            result = by_name.get(example.name)
            if result is not None and result.success:
                written += len(write_example(example, config))
    except (ExampleGenError, ConfigError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"Wrote {written} file(s) to {config.output_dir}")
    for failure in batch.failures:
        typer.echo(f"  FAILED {failure.name or '<unnamed>'}: {failure.error}", err=True)
    if not batch.success:
        raise typer.Exit(1)


@app.command(name="validate")
def validate_cmd(
    examples_file: Annotated[Path, typer.Argument(help="YAML file declaring the examples")],
    base_dir: Annotated[
        Optional[Path],
        typer.Option("--base-dir", "-b", help="Directory template paths are relative to"),
    ] = None,
) -> None:
    """Validate and render every example without writing files."""
    if not examples_file.exists():
        typer.echo(f"Error: File not found: {examples_file}", err=True)
        raise typer.Exit(1)

    try:
        examples = load_examples(examples_file)
        batch = render_examples(examples, base_dir=base_dir, fail_fast=False)
    except ExampleGenError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    for result in batch.results:
        status = "ok" if result.success else f"FAILED: {result.error}"
        typer.echo(f"{result.name or '<unnamed>'}: {status}")
    if not batch.success:
        raise typer.Exit(1)


@app.command(name="oics-link")
def oics_link_cmd(
    name: Annotated[str, typer.Argument(help="Example name")],
) -> None:
    """Print the Open in Cloud Shell link for an example."""
    typer.echo(Example(name=name).oics_link())


if __name__ == "__main__":
    app()
