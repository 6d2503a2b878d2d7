"""Roff macro scanning and section extraction.

Everything here works on an already normalized document (carriage returns
removed) and plain integer offsets into it. Nothing is cached between
calls, so the same document can be scanned from any offset at any time.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Iterator, Optional

from ..config import NOT_AVAILABLE
from ..errors import SectionNotFound

logger = logging.getLogger(__name__)


class MacroKind(Enum):
    """Macros the extractor cares about."""
    BOLD = "B"
    INDENTED_PARAGRAPH = "IP"
    PARAGRAPH = "PP"
    SECTION_HEADING = "SH"
    TAGGED_PARAGRAPH = "TP"
    OTHER = None  # any name not listed above


MACRO_KINDS = MappingProxyType({
    kind.value: kind for kind in MacroKind if kind is not MacroKind.OTHER
})

# A macro invocation: dot, uppercase name, then a space
MACRO_RE = re.compile(r'^\.([A-Z]+) ', re.MULTILINE)

# Whole lines introduced by a macro, argument text included
MACRO_LINE_RE = re.compile(r'^\.[A-Z]+ *.*(?:\n|$)', re.MULTILINE)


@dataclass(frozen=True)
class Macro:
    """A macro invocation occupying ``[start, end)`` of the document."""
    start: int
    end: int
    kind: MacroKind

    @property
    def name(self) -> Optional[str]:
        return self.kind.value


def next_macro(doc: str, offset: int = 0) -> Optional[Macro]:
    """Return the first macro at a line start at or after `offset`."""
    match = MACRO_RE.search(doc, offset)
    if match is None:
        return None
    kind = MACRO_KINDS.get(match.group(1), MacroKind.OTHER)
    return Macro(start=match.start(), end=match.end(), kind=kind)


def macro_after(doc: str, macro: Macro) -> Optional[Macro]:
    """Return the macro following `macro`."""
    return next_macro(doc, macro.end)


def iter_macros(doc: str, offset: int = 0) -> Iterator[Macro]:
    """Lazily yield successive macros starting at `offset`."""
    macro = next_macro(doc, offset)
    while macro is not None:
        yield macro
        macro = macro_after(doc, macro)


def find_section(doc: str, name: str) -> int:
    """Return the offset just past the `.SH` heading matching `name`.

    `name` is used as a regular expression, so alternatives such as
    ``(OPTIONS|SWITCHES)`` are allowed.

    Raises:
        SectionNotFound: if no heading matches.
    """
    match = re.search(r'^\.SH *' + name, doc, re.MULTILINE)
    if match is None:
        raise SectionNotFound(name)
    return match.end()


def strip_macros(text: str) -> str:
    """Remove every macro line from `text`."""
    return MACRO_LINE_RE.sub('', text)


def extract_section(doc: str, start: int) -> str:
    """Return the section body beginning at `start`, markup stripped.

    The body runs up to the next `.SH` macro, or to the end of the
    document when there is none.
    """
    end = len(doc)
    for macro in iter_macros(doc, start):
        if macro.kind is MacroKind.SECTION_HEADING:
            end = macro.start
            break
    return strip_macros(doc[start:end]).strip()


def get_section(doc: str, name: str) -> str:
    """Return the body of section `name`, or "N/A" if it is missing."""
    try:
        start = find_section(doc, name)
    except SectionNotFound:
        logger.debug("Section %s not found", name)
        return NOT_AVAILABLE
    return extract_section(doc, start)
