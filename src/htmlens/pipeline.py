"""Orchestration pipeline: fetch → JSON-LD blocks → expand → graph → insights → report."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from rich.console import Console

from .analysis.insights import GraphInsights
from .config import LensConfig
from .core.fetcher import PageFetcher, is_json_ld_file, is_url
from .core.graph_builder import GraphBuilder, random_blank_id
from .core.jsonld import (
    HttpxDocumentLoader,
    JsonLdError,
    combine_json_ld_blocks,
    expand_json_ld,
    extract_json_ld_blocks,
    parse_block,
    with_default_context,
)
from .core.models import KnowledgeGraph
from .generators.text_report import TextReportRenderer

logger = logging.getLogger(__name__)

# Progress goes to stderr so stdout carries only the report
console = Console(stderr=True)


@dataclass
class AnalysisResult:
    """Everything produced for one source."""

    source: str
    base_url: str
    blocks_found: int = 0
    blocks_failed: int = 0
    graph: KnowledgeGraph = field(default_factory=KnowledgeGraph)
    insights: GraphInsights = field(default_factory=GraphInsights)
    report: str = ""


class Pipeline:
    """End-to-end page → structured-data report pipeline.

    Usage::

        pipeline = Pipeline(LensConfig(include_diagram=True))
        result = pipeline.run("https://shop.example/product/42")
        print(result.report)
    """

    def __init__(
        self,
        config: LensConfig | None = None,
        *,
        merge_blocks: bool = False,
        quiet: bool = False,
    ) -> None:
        self.config = config or LensConfig.from_env()
        self.merge_blocks = merge_blocks
        self.quiet = quiet
        self.fetcher = PageFetcher(timeout=self.config.timeout, user_agent=self.config.user_agent)
        self.document_loader = HttpxDocumentLoader(
            timeout=self.config.timeout, user_agent=self.config.user_agent
        )
        self.renderer = TextReportRenderer(self.config)

    def _say(self, message: str) -> None:
        if not self.quiet:
            console.print(message)

    # -- steps ---------------------------------------------------------------

    def load_blocks(self, source: str) -> tuple[list[str], str]:
        """Fetch *source* and return its raw JSON-LD blocks plus the base URL.

        Raises
        ------
        httpx.HTTPError
            If a remote page cannot be fetched.
        FileNotFoundError
            If a local path does not exist.
        """
        self._say(f"[bold blue]📥 Fetching:[/] {source}")
        content, name = self.fetcher.fetch(source)
        if is_url(source):
            base_url = name
        else:
            base_url = Path(source).expanduser().resolve().as_uri()
        self._say(f"[green]✓[/] Fetched {len(content):,} chars")

        if is_json_ld_file(source):
            blocks = [content.strip()] if content.strip() else []
        else:
            blocks = extract_json_ld_blocks(content)
        self._say(f"[green]✓[/] {len(blocks)} JSON-LD block(s)")
        return blocks, base_url

    def build_graph(self, blocks: list[str], base_url: str) -> tuple[KnowledgeGraph, int]:
        """Expand every block and feed it to one builder.

        Blocks that fail to parse or expand are logged and skipped.

        Returns
        -------
        tuple[KnowledgeGraph, int]
            ``(graph, number_of_failed_blocks)``
        """
        id_factory = None if self.config.deterministic_ids else random_blank_id
        builder = GraphBuilder(id_factory=id_factory)
        failed = 0

        self._say("[bold blue]🧠 Building knowledge graph...[/]")
        documents: list[tuple[int, Any]] = []
        if self.merge_blocks and blocks:
            try:
                documents.append((len(blocks), combine_json_ld_blocks(blocks)))
            except JsonLdError as exc:
                logger.warning("Could not combine JSON-LD blocks: %s", exc)
                failed = len(blocks)
        else:
            for raw in blocks:
                try:
                    documents.append((1, with_default_context(parse_block(raw))))
                except JsonLdError as exc:
                    logger.warning("Skipping JSON-LD block: %s", exc)
                    failed += 1

        for covered, document in documents:
            try:
                expanded = expand_json_ld(document, base_url, self.document_loader)
            except JsonLdError as exc:
                logger.warning("Skipping JSON-LD block: %s", exc)
                failed += covered
                continue
            builder.ingest(expanded)

        graph = builder.finalize()
        stats = graph.compute_stats()
        self._say(
            f"[green]✓[/] Graph: {stats['total_nodes']} nodes, {stats['total_edges']} edges"
            + (f" [yellow]({failed} block(s) skipped)[/]" if failed else "")
        )
        return graph, failed

    # -- entry point ---------------------------------------------------------

    def run(self, source: str) -> AnalysisResult:
        """Run every step for *source* and render the report."""
        blocks, base_url = self.load_blocks(source)
        graph, failed = self.build_graph(blocks, base_url)

        insights = GraphInsights.from_graph(
            graph, include_data_downloads=self.config.include_data_downloads
        )
        self._say(
            f"[green]✓[/] {len(insights.product_groups)} product group(s), "
            f"{len(insights.organizations)} organization(s), "
            f"{len(insights.other_entities)} other entities"
        )

        return AnalysisResult(
            source=source,
            base_url=base_url,
            blocks_found=len(blocks),
            blocks_failed=failed,
            graph=graph,
            insights=insights,
            report=self.renderer.render(insights, graph),
        )
