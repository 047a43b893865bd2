"""Click CLI with analyze, cycles, depth and serve subcommands."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from click.core import ParameterSource

from dependency_explorer import __version__
from dependency_explorer.models import AnalysisConfig
from dependency_explorer.output import FORMATTERS, to_dot
from dependency_explorer.pipeline import analyze_directory, analyze_files

_FORMAT_CHOICES = ["console", "json", "dot", "rails-dot"]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run(path: Path, rails_aware: bool, normalize: bool, pattern: str):
    if path.is_file():
        if click.get_current_context().get_parameter_source("pattern") is not ParameterSource.DEFAULT:
            raise click.UsageError("--pattern applies to directories only")
        config = AnalysisConfig(
            source_dir=path.parent, pattern=pattern,
            rails_aware=rails_aware, normalize_cycles=normalize,
        )
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise click.ClickException(f"Cannot read {path}: {e}")
        return analyze_files({path.name: source}, config)

    config = AnalysisConfig(
        source_dir=path, pattern=pattern,
        rails_aware=rails_aware, normalize_cycles=normalize,
    )
    try:
        return analyze_directory(config)
    except ValueError as e:
        raise click.ClickException(str(e))


_path_argument = click.argument(
    "path", type=click.Path(exists=True, path_type=Path), default=".",
)
_pattern_option = click.option("--pattern", default="*.rb", show_default=True,
                               help="Glob pattern for source files (directories only)")
_rails_option = click.option("--rails-aware", is_flag=True,
                             help="Resolve association macros to model-to-model edges")
_normalize_option = click.option("--normalize-cycles", is_flag=True,
                                 help="Collapse rotations of the same cycle")


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """dependency-explorer: class-level dependency analysis for Ruby codebases."""
    _configure_logging(verbose)


@cli.command()
@_path_argument
@click.option("--format", "-f", "output_format", type=click.Choice(_FORMAT_CHOICES),
              default="console", show_default=True, help="Output format")
@click.option("-o", "--output", "output_file", type=click.Path(dir_okay=False, path_type=Path),
              help="Write output to a file instead of stdout")
@_pattern_option
@_rails_option
@_normalize_option
def analyze(path: Path, output_format: str, output_file: Path | None, pattern: str,
            rails_aware: bool, normalize_cycles: bool):
    """Analyze a file or directory and report its dependency structure."""
    result = _run(path, rails_aware, normalize_cycles, pattern)

    if output_format == "rails-dot":
        text = to_dot(result, rails=True)
    elif output_format == "console":
        text = FORMATTERS["console"](result, color=output_file is None)
    else:
        text = FORMATTERS[output_format](result)

    if output_file:
        output_file.write_text(text, encoding="utf-8")
        click.echo(f"Wrote {output_format} output to {output_file}")
    else:
        click.echo(text, nl=False)


@cli.command()
@_path_argument
@click.option("--cross-namespace", is_flag=True, help="Only show cycles crossing namespaces")
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@_pattern_option
@_rails_option
@_normalize_option
def cycles(path: Path, cross_namespace: bool, as_json: bool, pattern: str,
           rails_aware: bool, normalize_cycles: bool):
    """List circular dependencies."""
    result = _run(path, rails_aware, normalize_cycles, pattern)

    if cross_namespace:
        records = [c.to_dict() for c in result.cross_namespace_cycles]
        if as_json:
            click.echo(json.dumps(records, indent=2))
            return
        if not records:
            click.echo("No cross-namespace cycles found.")
            return
        for record in records:
            severity = click.style(record["severity"], fg="red" if record["severity"] == "high" else "yellow")
            click.echo(f"[{severity}] {' -> '.join(record['cycle'])}")
        return

    found = result.circular_dependencies
    if as_json:
        click.echo(json.dumps(found, indent=2))
        return
    if not found:
        click.echo("No circular dependencies found.")
        return
    click.echo(f"Found {len(found)} circular dependenc{'y' if len(found) == 1 else 'ies'}:\n")
    for cycle in found:
        click.echo("  " + click.style(" -> ".join(cycle), fg="red"))


@cli.command()
@_path_argument
@click.option("--json", "as_json", is_flag=True, help="Print JSON")
@_pattern_option
@_rails_option
def depth(path: Path, as_json: bool, pattern: str, rails_aware: bool):
    """Rank classes by dependency depth."""
    result = _run(path, rails_aware, False, pattern)
    depths = result.dependency_depth

    if as_json:
        click.echo(json.dumps(depths, indent=2))
        return
    for name, value in sorted(depths.items(), key=lambda kv: (-kv[1], kv[0])):
        click.echo(f"{value:>4}  {name}")


@cli.command()
@click.option("--port", "-p", default=8421, help="Port number")
@click.option("--host", default="127.0.0.1", help="Host address")
def serve(port: int, host: str):
    """Start the HTTP analysis API."""
    try:
        import uvicorn
    except ImportError:
        raise click.ClickException(
            "uvicorn is required for the HTTP API. "
            "Install with: pip install 'dependency-explorer[web]'"
        )

    from dependency_explorer.web import create_app

    click.echo(f"Starting dependency-explorer API at http://{host}:{port}")
    uvicorn.run(create_app(), host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
