"""Man page discovery."""
from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from ..config import DEFAULT_SECTIONS, FALLBACK_MAN_DIRECTORIES

logger = logging.getLogger(__name__)


def get_man_directories() -> List[Path]:
    """Get list of man page directories from manpath."""
    try:
        result = subprocess.run(
            ['manpath'],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2
        )
        paths = [Path(p) for p in result.stdout.strip().split(':') if p]
        directories = [p for p in paths if p.exists()]
        if directories:
            return directories
    except (OSError, subprocess.SubprocessError) as e:
        logger.debug("manpath unavailable: %s", e)

    # Fallback to common directories
    return [p for p in FALLBACK_MAN_DIRECTORIES if p.exists()]


def page_name(file_path: Path) -> str:
    """Program name for a man page file (grep.1.gz -> grep)."""
    name = file_path.name

    # Remove compression extension
    if name.endswith('.gz'):
        name = name[:-3]

    # Remove section number (e.g., .1, .8)
    if '.' in name:
        name = name.rsplit('.', 1)[0]

    return name


def discover_man_pages(sections: Optional[List[str]] = None,
                       directories: Optional[List[Path]] = None) -> Dict[str, Path]:
    """Discover gzip-compressed man pages by scanning man directories.

    Args:
        sections: List of man sections to include (e.g., ['man1', 'man8']).
                  If None, uses default from config.
        directories: Man directories to scan. If None, uses manpath.

    Returns:
        Dictionary mapping program name to man page file path
    """
    if sections is None:
        sections = DEFAULT_SECTIONS
    if directories is None:
        directories = get_man_directories()

    man_pages = {}

    for man_dir in directories:
        for section in sections:
            section_dir = Path(man_dir) / section
            if not section_dir.is_dir():
                continue

            try:
                entries = sorted(section_dir.iterdir())
            except OSError as e:
                logger.debug("Cannot list %s: %s", section_dir, e)
                continue

            for man_file in entries:
                if not man_file.is_file() or man_file.suffix != '.gz':
                    continue

                # Skip if we already have this program (prefer earlier paths)
                man_pages.setdefault(page_name(man_file), man_file)

    logger.debug("Discovered %d man pages", len(man_pages))
    return man_pages
