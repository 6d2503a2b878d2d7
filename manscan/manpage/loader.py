"""Reading compressed man page files from disk."""
from __future__ import annotations

import gzip
import logging
import zlib
from pathlib import Path
from typing import Union

from ..errors import LoadError

logger = logging.getLogger(__name__)


def read_man_file(file_path: Union[str, Path]) -> str:
    """Read and decompress a gzip man page, returning its roff source.

    Raises:
        LoadError: if the file is missing, unreadable or not valid gzip data.
    """
    file_path = Path(file_path)
    logger.debug("Reading %s", file_path)
    try:
        with gzip.open(file_path, 'rb') as f:
            data = f.read()
    except FileNotFoundError as e:
        raise LoadError(file_path, "no such file") from e
    except (OSError, EOFError, zlib.error) as e:
        # BadGzipFile is an OSError; truncated streams raise EOFError
        raise LoadError(file_path, str(e) or type(e).__name__) from e

    return data.decode('utf-8', errors='ignore')
