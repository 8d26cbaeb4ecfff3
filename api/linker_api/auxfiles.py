"""Readers for the plain-text files passes take as parameters.

One item per line. Blank lines and lines starting with ``#`` are skipped;
items keep everything except surrounding whitespace.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple, Union

from .errors import AuxiliaryFileError

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise AuxiliaryFileError(f"cannot read file: {exc}", source=str(path)) from exc


def read_lines(path: PathLike) -> List[Tuple[int, str]]:
    """Return ``(line_number, text)`` for every meaningful line (1-based)."""
    entries = []
    for number, raw in enumerate(read_text(path).splitlines(), start=1):
        text = raw.strip()
        if not text or text.startswith("#"):
            continue
        entries.append((number, text))
    LOGGER.debug("Read %d entries from %s", len(entries), path)
    return entries


def read_name_list(path: PathLike) -> List[str]:
    return [text for _, text in read_lines(path)]
