"""
CLI script to index the portal documents and run searches.

Usage:
    python scripts/run_search.py --query "routing configuration"
    python scripts/run_search.py --query "backup" --query "emergency config"
    python scripts/run_search.py --titles "softswitch"
    python scripts/run_search.py --config path/to/config.json --manifest path/to/manifest.json
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from portal_search.catalog import Manifest, get_manifest
from portal_search.core import get_config, get_logger, ConfigurationError
from portal_search.core.config_loader import reload_config
from portal_search.search import DocumentIndex, highlight_terms
from portal_search.utils import truncate_text


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Index portal documents and search their content"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--manifest",
        type=str,
        help="Path to a manifest JSON file (defaults to paths.manifest_path)"
    )

    parser.add_argument(
        "--query",
        action="append",
        default=[],
        help="Content search query (repeatable)"
    )

    parser.add_argument(
        "--titles",
        type=str,
        help="Search menu titles and categories instead of content"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print search hits as JSON"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress the ingestion summary"
    )

    return parser.parse_args()


def print_titles(manifest: Manifest, query: str) -> None:
    """Print menu entries matching a title search."""
    matches = manifest.filter_titles(query)

    print(f"Title search '{query}': {len(matches)} matches")
    for entry in matches:
        print(f"  [{entry.category}] {entry.title}")


def print_hits(index: DocumentIndex, query: str, as_json: bool) -> None:
    """Run a content search and print its hits."""
    hits = index.search_content(query)

    if as_json:
        print(json.dumps([hit.to_dict() for hit in hits], ensure_ascii=False, indent=2))
        return

    print(f"\nQuery '{query}': {len(hits)} results")
    print("-" * 60)

    if not hits:
        print("  No relevant documents found.")
        return

    terms = index.parser.extract_terms(query)
    for rank, hit in enumerate(hits, start=1):
        print(f"{rank}. {hit.title} ({hit.locator})")
        print(f"   {truncate_text(highlight_terms(hit.text, terms), 300)}")


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
        manifest = Manifest.from_file(args.manifest) if args.manifest else get_manifest(config)
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    logger = get_logger(__name__)

    if args.titles:
        print_titles(manifest, args.titles)
        if not args.query:
            sys.exit(0)

    if not args.query:
        print("Nothing to do: pass --query or --titles")
        sys.exit(1)

    index = DocumentIndex(config=config)

    logger.debug(f"Indexing {len(manifest)} manifest entries")
    stats = index.initialize(manifest)

    if not args.quiet:
        print("=" * 60)
        print("Portal Search - Index Summary")
        print("=" * 60)
        print(f"Documents requested: {stats.documents_requested:,}")
        print(f"Documents filtered:  {stats.documents_filtered:,}")
        print(f"Documents indexed:   {stats.documents_indexed:,}")
        print(f"Documents failed:    {stats.documents_failed:,}")
        print(f"Documents timed out: {stats.documents_timed_out:,}")
        print("=" * 60)

        if stats.errors:
            print(f"\nErrors ({len(stats.errors)}):")
            for error in stats.errors[:20]:
                print(f"  - {error}")
            if len(stats.errors) > 20:
                print(f"  ... and {len(stats.errors) - 20} more errors")

    for query in args.query:
        print_hits(index, query, args.json)

    sys.exit(0)


if __name__ == "__main__":
    main()
