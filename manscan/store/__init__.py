"""Persistence for parsed man pages."""
from __future__ import annotations

from .database import ManPageStore, BuildResult, build_database

__all__ = [
    'ManPageStore',
    'BuildResult',
    'build_database',
]
