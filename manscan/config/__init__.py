"""Configuration and constants for manscan."""
from __future__ import annotations

import os
from pathlib import Path

# Paths
MANSCAN_DIR = Path(os.environ.get('MANSCAN_DIR', Path.home() / ".manscan"))

DATABASE_FILE = MANSCAN_DIR / "manpages.sqlite"

# Placeholder for a field whose section could not be located
NOT_AVAILABLE = "N/A"

# Indexing defaults
DEFAULT_WORKERS = 8

# Man page sections to index
# 1: User commands, 8: System admin commands
DEFAULT_SECTIONS = ['man1', 'man8']

# Used when `manpath` is unavailable
FALLBACK_MAN_DIRECTORIES = [
    Path('/usr/share/man'),
    Path('/usr/local/share/man'),
    Path('/opt/homebrew/share/man'),
]
