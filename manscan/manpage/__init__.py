"""Man page processing utilities."""
from __future__ import annotations

from .models import ManPage, Option
from .loader import read_man_file
from .parser import (
    parse_name,
    parse_description,
    parse_synopsis,
    parse_options,
    parse_text,
    parse_man_page,
)
from .discovery import get_man_directories, discover_man_pages

__all__ = [
    'ManPage',
    'Option',
    'read_man_file',
    'parse_name',
    'parse_description',
    'parse_synopsis',
    'parse_options',
    'parse_text',
    'parse_man_page',
    'get_man_directories',
    'discover_man_pages',
]
