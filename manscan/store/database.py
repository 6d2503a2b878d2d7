"""SQLite storage for parsed man pages."""
from __future__ import annotations

import logging
import sqlite3
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Union

from ..config import DEFAULT_WORKERS
from ..errors import LoadError
from ..manpage import ManPage, Option, parse_man_page

logger = logging.getLogger(__name__)


_SCHEMA = """
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS manpages (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    path TEXT NOT NULL UNIQUE,
    description TEXT NOT NULL,
    synopsis TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_manpages_name ON manpages(name);

CREATE TABLE IF NOT EXISTS options (
    manpage_id INTEGER NOT NULL,
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    PRIMARY KEY(manpage_id, position),
    FOREIGN KEY(manpage_id) REFERENCES manpages(id) ON DELETE CASCADE
);
CREATE INDEX IF NOT EXISTS idx_options_name ON options(name);
"""


class ManPageStore:
    """Man pages and their options, keyed by source path."""

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self._path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys=ON")
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.executescript(_SCHEMA)
            conn.commit()

    def upsert(self, page: ManPage) -> int:
        """Insert or update `page` and replace its options. Returns the row id."""
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO manpages (name, path, description, synopsis, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(path) DO UPDATE SET
                    name = excluded.name,
                    description = excluded.description,
                    synopsis = excluded.synopsis,
                    updated_at = excluded.updated_at
                """,
                (page.name, page.path, page.description, page.synopsis, _now_iso()),
            )
            manpage_id = conn.execute(
                "SELECT id FROM manpages WHERE path = ?", (page.path,)
            ).fetchone()["id"]
            conn.execute("DELETE FROM options WHERE manpage_id = ?", (manpage_id,))
            conn.executemany(
                "INSERT INTO options (manpage_id, position, name, description) VALUES (?, ?, ?, ?)",
                [
                    (manpage_id, position, option.name, option.description)
                    for position, option in enumerate(page.options)
                ],
            )
            conn.commit()
        logger.debug("Stored %s (%d options)", page.path, len(page.options))
        return manpage_id

    def get(self, path: Union[str, Path]) -> Optional[ManPage]:
        pages = self._fetch_pages("SELECT * FROM manpages WHERE path = ?", (str(path),))
        return pages[0] if pages else None

    def find_by_name(self, name: str) -> List[ManPage]:
        return self._fetch_pages(
            "SELECT * FROM manpages WHERE name = ? ORDER BY path", (name,)
        )

    def find_by_option(self, option: str) -> List[ManPage]:
        """Pages documenting an option token such as ``-v``."""
        return self._fetch_pages(
            """
            SELECT DISTINCT m.* FROM manpages m
            JOIN options o ON o.manpage_id = m.id
            WHERE o.name = ?
            ORDER BY m.name, m.path
            """,
            (option,),
        )

    def list_pages(self) -> List[str]:
        rows = self._fetch_all("SELECT path FROM manpages ORDER BY path", ())
        return [row["path"] for row in rows]

    def delete(self, path: Union[str, Path]) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM manpages WHERE path = ?", (str(path),))
            conn.commit()
            return cursor.rowcount > 0

    def count(self) -> int:
        with self._connect() as conn:
            return conn.execute("SELECT COUNT(*) FROM manpages").fetchone()[0]

    def _fetch_all(self, query: str, params: tuple) -> List[sqlite3.Row]:
        with self._connect() as conn:
            return conn.execute(query, params).fetchall()

    def _fetch_pages(self, query: str, params: tuple) -> List[ManPage]:
        """Run a manpages query and attach each row's options.

        Options for every matched page come from a single second query on
        the same connection.
        """
        with self._connect() as conn:
            rows = conn.execute(query, params).fetchall()
            option_rows = conn.execute(
                f"""
                SELECT manpage_id, name, description FROM options
                WHERE manpage_id IN (SELECT id FROM ({query}))
                ORDER BY manpage_id, position
                """,
                params,
            ).fetchall()

        options: Dict[int, List[Option]] = {}
        for o in option_rows:
            options.setdefault(o["manpage_id"], []).append(
                Option(name=o["name"], description=o["description"])
            )

        return [
            ManPage(
                name=row["name"],
                description=row["description"],
                synopsis=row["synopsis"],
                options=tuple(options.get(row["id"], ())),
                path=row["path"],
            )
            for row in rows
        ]


@dataclass
class BuildResult:
    """Outcome of a batch build."""
    indexed: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


def build_database(
    store: ManPageStore,
    paths: Iterable[Union[str, Path]],
    max_workers: int = DEFAULT_WORKERS,
    progress_callback: Optional[Callable[[str, int, int, str], None]] = None,
) -> BuildResult:
    """Parse man pages in parallel and store them.

    Args:
        store: Destination store.
        paths: Gzip man page files to parse.
        max_workers: Number of parallel workers.
        progress_callback: Optional callback function(stage, current, total, message) for progress updates.

    Pages that fail to load are logged and reported in the result; they do
    not stop the build.
    """
    paths = [str(p) for p in paths]
    result = BuildResult()
    if not paths:
        if progress_callback:
            progress_callback("complete", 0, 0, "Nothing to index")
        return result

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_to_path = {executor.submit(parse_man_page, path): path for path in paths}

        completed = 0
        for future in as_completed(future_to_path):
            path = future_to_path[future]
            try:
                page = future.result()
            except LoadError as e:
                logger.warning("%s", e)
                result.failed.append(path)
            else:
                # Writes stay on this thread; workers only parse
                store.upsert(page)
                result.indexed.append(path)
            completed += 1

            if progress_callback:
                progress_callback("parsing", completed, len(paths), f"Stored {len(result.indexed)} man pages")

    result.indexed.sort()
    result.failed.sort()
    if progress_callback:
        progress_callback("complete", len(paths), len(paths), f"Indexed {len(result.indexed)} man pages")
    logger.info("Indexed %d man pages, %d failed", len(result.indexed), len(result.failed))
    return result


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
