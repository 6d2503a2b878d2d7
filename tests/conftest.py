import gzip
from pathlib import Path

import pytest


SAMPLE_PAGE = """\
.TH FOOBAR 1 "January 2016" "foobar 1.0"
.SH NAME
foobar \\- summary
.SH SYNOPSIS
.B foobar
[\\-q] [\\-u] [\\-x]
.SH DESCRIPTION
This is just a sample...
.SH OPTIONS
.TP
.B -q
q is an option
.TP
.B -u
u is an option
.TP
.B -x
x is an option
.SH SEE ALSO
bar(1)
"""


@pytest.fixture
def sample_page() -> str:
    return SAMPLE_PAGE


@pytest.fixture
def write_gz(tmp_path: Path):
    """Write roff text into a gzip file under tmp_path and return its path."""

    def _write(text: str, name: str = "foobar.1.gz") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        with gzip.open(path, "wt", encoding="utf-8") as f:
            f.write(text)
        return path

    return _write
