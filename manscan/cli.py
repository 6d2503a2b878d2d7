"""Command-line interface for manscan."""
from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import DATABASE_FILE, DEFAULT_SECTIONS, DEFAULT_WORKERS
from .errors import LoadError
from .manpage import ManPage, discover_man_pages, parse_man_page
from .store import ManPageStore, build_database

logger = logging.getLogger(__name__)

console = Console(stderr=True)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def print_pages(pages: List[ManPage]):
    """Print parsed man pages to stdout."""
    for i, page in enumerate(pages):
        if i:
            print()
        print(page, end='')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="manscan",
        description="Extract name, description, synopsis and options from gzip man pages.",
        epilog="Example: manscan -f /usr/share/man/man1/ls.1.gz -d"
    )
    parser.add_argument("-f", "--file", dest="files", action="append", default=[], metavar="PATH",
                        help="Man page to parse (may be given more than once)")
    parser.add_argument("-d", "--database", action="store_true",
                        help="Store parsed pages in the database")
    parser.add_argument("--db-path", default=str(DATABASE_FILE),
                        help=f"Database location (default: {DATABASE_FILE})")
    parser.add_argument("--all", action="store_true",
                        help="Discover installed man pages and index them all")
    parser.add_argument("--sections", nargs='+', default=DEFAULT_SECTIONS,
                        help=f"Man sections to discover with --all (default: {' '.join(DEFAULT_SECTIONS)})")
    parser.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                        help=f"Number of parallel workers for indexing (default: {DEFAULT_WORKERS})")
    parser.add_argument("--option", metavar="TOKEN",
                        help="List stored man pages documenting an option (e.g. --option=-v)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def index_all(store: ManPageStore, sections: List[str], workers: int) -> int:
    """Discover installed pages and store them. Returns the exit status."""
    man_pages = discover_man_pages(sections)
    console.print(f"Found {len(man_pages)} man pages")

    with console.status("Indexing...") as status:
        def progress_callback(stage: str, current: int, total: int, message: str):
            status.update(f"[{current}/{total}] {message}")

        result = build_database(store, man_pages.values(), max_workers=workers,
                                progress_callback=progress_callback)

    console.print(f"[green]✓[/green] Indexed {len(result.indexed)} man pages into {escape(str(store.path))}", soft_wrap=True)
    if result.failed:
        console.print(f"[red]✗[/red] {len(result.failed)} man pages could not be loaded")
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not (args.files or args.all or args.option):
        parser.error("nothing to do: give -f PATH, --all or --option TOKEN")

    configure_logging(args.verbose)

    status = 0
    store = ManPageStore(args.db_path) if (args.database or args.all or args.option) else None

    pages = []
    for path in args.files:
        try:
            page = parse_man_page(path)
        except LoadError as e:
            console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False, soft_wrap=True)
            status = 1
            continue
        logger.debug("Parsed %s: %d options", path, len(page.options))
        pages.append(page)
    print_pages(pages)

    if store is not None and args.database:
        for page in pages:
            store.upsert(page)
        if pages:
            console.print(f"[green]✓[/green] Stored {len(pages)} man pages in {escape(str(store.path))}", soft_wrap=True)

    if args.all:
        status = max(status, index_all(store, args.sections, args.workers))

    if args.option:
        matches = store.find_by_option(args.option)
        if not matches:
            print(f"No stored man pages document {args.option}.")
        for page in matches:
            description = next(o.description for o in page.options if o.name == args.option)
            print(f"{page.name:<20} {description}")

    return status
