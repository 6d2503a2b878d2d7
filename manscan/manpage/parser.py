"""Man page parsing utilities."""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import List, Union

from ..errors import SectionNotFound
from .loader import read_man_file
from .models import ManPage, Option
from .roff import MacroKind, find_section, get_section, iter_macros

logger = logging.getLogger(__name__)

OPTION_SECTIONS = r'(OPTIONS|SWITCHES)'

# Separates aliases on the NAME line ("foo\,bar", "gzip, gunzip")
NAME_SEPARATOR_RE = re.compile(r'\\?,')

OPTION_TERMINATOR_RE = re.compile(r'\s')


def parse_name(doc: str) -> str:
    """Extract the program name from the NAME section."""
    section = get_section(doc, "NAME")
    name = section.split(' ', 1)[0]
    name = NAME_SEPARATOR_RE.split(name, maxsplit=1)[0]
    return name.rstrip(' \\,')


def parse_description(doc: str) -> str:
    return get_section(doc, "DESCRIPTION")


def parse_synopsis(doc: str) -> str:
    return get_section(doc, "SYNOPSIS")


def _entry_text(doc: str, start: int) -> str:
    """Join the text lines following a macro, up to a blank or macro line."""
    parts = []
    pos = start
    while pos < len(doc):
        end = doc.find('\n', pos)
        if end == -1:
            end = len(doc)
        if end == pos or doc[pos] == '.':
            break
        parts.append(' ' + doc[pos:end])
        pos = end + 1
    return ''.join(parts).lstrip(' ')


def parse_options(doc: str) -> List[Option]:
    """Extract options from the OPTIONS or SWITCHES section.

    Pages without either section often document their flags in
    DESCRIPTION, so that section is used instead. Only ``.B`` and ``.IP``
    entries are read; any other macro ends the run of options.
    """
    try:
        start = find_section(doc, OPTION_SECTIONS)
    except SectionNotFound:
        try:
            start = find_section(doc, "DESCRIPTION")
        except SectionNotFound:
            return []

    options = []
    for macro in iter_macros(doc, start):
        if macro.kind not in (MacroKind.BOLD, MacroKind.INDENTED_PARAGRAPH):
            break

        text = _entry_text(doc, macro.end)
        dash = text.find('-')
        if dash == -1:
            logger.debug("Skipping entry without a dash at offset %d", macro.start)
            continue
        space = OPTION_TERMINATOR_RE.search(text, dash)
        if space is None:
            logger.debug("Skipping unterminated option at offset %d", macro.start)
            continue

        options.append(Option(
            name=text[dash:space.start()],
            description=text[space.end():].strip(),
        ))

    return options


def parse_text(text: str, path: Union[str, Path] = "") -> ManPage:
    """Parse roff source into a ManPage."""
    data = text.replace('\r', '')

    name = parse_name(data)
    description = parse_description(data)
    synopsis = parse_synopsis(data)
    options = parse_options(data)

    return ManPage(
        name=name,
        description=description,
        synopsis=synopsis,
        options=tuple(options),
        path=str(path),
        data=data,
    )


def parse_man_page(file_path: Union[str, Path]) -> ManPage:
    """Load a gzip man page and parse it.

    Raises:
        LoadError: if the file cannot be opened or decompressed.
    """
    return parse_text(read_man_file(file_path), file_path)
