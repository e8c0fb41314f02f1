"""htmlens CLI: inspect the structured data embedded in a web page."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
import httpx
from rich.console import Console

from . import __version__
from .config import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, ENV_TIMEOUT, ENV_USER_AGENT, LensConfig
from .core.fetcher import build_output_path, is_url
from .core.graph_builder import MalformedDocumentError
from .core.jsonld import JsonLdError
from .generators.mermaid import graph_to_mermaid
from .pipeline import AnalysisResult, Pipeline

console = Console(stderr=True)

_FATAL_ERRORS = (httpx.HTTPError, FileNotFoundError, JsonLdError, MalformedDocumentError)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def _source_options(func):
    """Options shared by every command that reads a SOURCE."""
    func = click.argument("source")(func)
    func = click.option(
        "--timeout",
        type=float,
        envvar=ENV_TIMEOUT,
        default=DEFAULT_TIMEOUT,
        show_default=True,
        help=f"HTTP timeout in seconds (or set {ENV_TIMEOUT}).",
    )(func)
    func = click.option(
        "--user-agent",
        envvar=ENV_USER_AGENT,
        default=DEFAULT_USER_AGENT,
        help=f"User-Agent header for page fetches (or set {ENV_USER_AGENT}).",
    )(func)
    func = click.option(
        "--merge-blocks",
        is_flag=True,
        default=False,
        help="Combine all JSON-LD blocks into one document before expansion.",
    )(func)
    func = click.option(
        "--random-ids",
        is_flag=True,
        default=False,
        help="Use random UUID blank-node ids instead of sequential ones.",
    )(func)
    func = click.option(
        "-v", "--verbose",
        is_flag=True,
        default=False,
        help="Enable debug logging.",
    )(func)
    return func


def _run(source: str, config: LensConfig, merge_blocks: bool, quiet: bool) -> AnalysisResult:
    """Run the pipeline, turning fatal errors into exit status 1."""
    pipeline = Pipeline(config, merge_blocks=merge_blocks, quiet=quiet)
    try:
        return pipeline.run(source)
    except _FATAL_ERRORS as exc:
        console.print(f"[bold red]❌ {type(exc).__name__}:[/] {exc}")
        raise SystemExit(1)


def _save_path(save: str, source: str) -> Path:
    if is_url(source):
        return build_output_path(save, source)
    base = Path(save)
    if base.suffix.lower() == ".md":
        return base
    return base / f"{Path(source).stem}.md"


@click.group()
@click.version_option(version=__version__, prog_name="htmlens")
def main():
    """htmlens — Knowledge graphs and summaries from a page's JSON-LD."""
    pass


@main.command()
@_source_options
@click.option("--graph-json", is_flag=True, default=False, help="Append the knowledge graph JSON.")
@click.option("--diagram", is_flag=True, default=False, help="Append a Mermaid diagram of the graph.")
@click.option("--data-downloads", is_flag=True, default=False, help="Report DataDownload entries.")
@click.option(
    "--save",
    type=click.Path(),
    default=None,
    help="Write the report to PATH (a .md file, or a directory for a derived file name).",
)
def analyze(
    source: str,
    timeout: float,
    user_agent: str,
    merge_blocks: bool,
    random_ids: bool,
    verbose: bool,
    graph_json: bool,
    diagram: bool,
    data_downloads: bool,
    save: str | None,
):
    """Summarize the structured data of SOURCE.

    SOURCE can be an http(s) URL, a local HTML file, or a local
    ``.json``/``.jsonld`` file with raw JSON-LD.
    """
    _setup_logging(verbose)
    config = LensConfig(
        timeout=timeout,
        user_agent=user_agent,
        include_markdown_json=graph_json,
        include_diagram=diagram,
        include_data_downloads=data_downloads,
        deterministic_ids=not random_ids,
    )
    result = _run(source, config, merge_blocks, quiet=False)
    click.echo(result.report, nl=False)

    if save:
        output_path = _save_path(save, result.base_url if is_url(source) else source)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.report, encoding="utf-8")
        console.print(f"[green]✓[/] Wrote output to {output_path}")


@main.command()
@_source_options
def graph(
    source: str,
    timeout: float,
    user_agent: str,
    merge_blocks: bool,
    random_ids: bool,
    verbose: bool,
):
    """Print the knowledge graph of SOURCE as JSON."""
    _setup_logging(verbose)
    config = LensConfig(timeout=timeout, user_agent=user_agent, deterministic_ids=not random_ids)
    result = _run(source, config, merge_blocks, quiet=True)
    click.echo(json.dumps(result.graph.to_dict(), indent=2, ensure_ascii=False))


@main.command()
@_source_options
def diagram(
    source: str,
    timeout: float,
    user_agent: str,
    merge_blocks: bool,
    random_ids: bool,
    verbose: bool,
):
    """Print a Mermaid diagram of the knowledge graph of SOURCE."""
    _setup_logging(verbose)
    config = LensConfig(timeout=timeout, user_agent=user_agent, deterministic_ids=not random_ids)
    result = _run(source, config, merge_blocks, quiet=True)
    click.echo(graph_to_mermaid(result.graph))


if __name__ == "__main__":
    main()
