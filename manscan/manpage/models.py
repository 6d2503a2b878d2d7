"""Records produced by the man page parser."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class Option:
    """A command-line option, usually documented as ``-x`` or ``--long``."""
    name: str
    description: str

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"


@dataclass(frozen=True)
class ManPage:
    """The interesting fields of a man page.

    Attributes:
        name: Program or feature name from the NAME section
        description: Body of the DESCRIPTION section
        synopsis: Body of the SYNOPSIS section
        options: Options in document order
        path: File the page was loaded from ("" when parsed from text)
        data: Normalized roff source the fields were taken from
    """
    name: str
    description: str
    synopsis: str
    options: Tuple[Option, ...] = ()
    path: str = ""
    data: str = field(default="", repr=False)

    def __str__(self) -> str:
        lines = [
            f"Name: {self.name}",
            f"Desc:     {self.description}",
            f"Synopsis: {self.synopsis}",
            "Options:",
        ]
        lines.extend(str(option) for option in self.options)
        return '\n'.join(lines) + '\n'
