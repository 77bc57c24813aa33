"""CLI for generating the knowledge graph JSON consumed by the graph visualization"""

import argparse
import sys
from pathlib import Path

from loguru import logger

from gardengraph.config import settings
from gardengraph.content_sources.local import FileContentSource, ParseError
from gardengraph.linking import write_knowledge_graph
from gardengraph.session import BuildSession


def main(
    content_dir: str,
    output: str,
    include_drafts: bool = False,
    report_broken: bool = False,
) -> int:
    content_source = FileContentSource(content_dir=Path(content_dir), include_drafts=include_drafts)
    session = BuildSession(
        source=content_source,
        collision_policy=settings.registry_collision_policy,
        context_radius=settings.backlink_context_radius,
        context_max_chars=settings.backlink_context_max_chars,
    )

    logger.info("Generating knowledge graph...")
    try:
        graph = session.knowledge_graph
        if report_broken:
            for broken in session.find_broken_links():
                logger.warning(
                    f"Broken wikilink in {broken.source_type} {broken.source}: [[{broken.target}]]"
                )
    except ParseError as e:
        logger.error(f"Error generating knowledge graph: {e}")
        return 1

    output_path = write_knowledge_graph(graph, output)
    logger.info(f"Written {len(graph.nodes)} nodes, {len(graph.edges)} edges -> {output_path}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--content-dir",
        type=str,
        required=False,
        help="Folder containing posts, notes, flows and series",
        default=str(settings.content_dir),
    )
    parser.add_argument(
        "--output",
        type=str,
        required=False,
        help="Output knowledge graph JSON file",
        default=str(settings.graph_output_path),
    )
    parser.add_argument(
        "--include-drafts",
        action="store_true",
        default=settings.include_drafts,
        help="Include documents marked as drafts",
    )
    parser.add_argument(
        "--report-broken",
        action="store_true",
        help="Log every wikilink that does not resolve",
    )

    args = parser.parse_args()

    logger.configure(handlers=[{"sink": sys.stderr, "level": settings.log_level}])
    sys.exit(
        main(
            content_dir=args.content_dir,
            output=args.output,
            include_drafts=args.include_drafts,
            report_broken=args.report_broken,
        )
    )
