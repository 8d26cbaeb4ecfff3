"""
Pipeline file reader.

One pass per line: the pass name followed by its arguments, separated by
whitespace. Double-quoted arguments may contain spaces. Blank lines and
lines starting with '#' are ignored. Relative file arguments are resolved
against the directory of the pipeline file.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple, Union

from api.linker_api.auxfiles import read_text
from api.linker_api.errors import ConfigParseError

LOGGER = logging.getLogger(__name__)

_TOKEN = re.compile(r'"((?:[^"\\]|\\.)*)"(?=\s|$)|(\S+)')


@dataclass(frozen=True)
class PassDescriptor:
    index: int
    name: str
    arguments: Tuple[str, ...] = ()
    line_number: Optional[int] = None
    line: Optional[str] = None
    source: Optional[str] = None
    base_dir: Optional[Path] = field(default=None, compare=False)


def split_arguments(line: str) -> List[str]:
    tokens = []
    for m in _TOKEN.finditer(line):
        quoted, bare = m.groups()
        if quoted is not None:
            tokens.append(quoted.replace('\\"', '"'))
        else:
            tokens.append(bare)
    return tokens


def parse_pipeline(
    text: str,
    source: Optional[str] = None,
    base_dir: Optional[Path] = None,
) -> List[PassDescriptor]:
    descriptors: List[PassDescriptor] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        tokens = split_arguments(line)
        if not tokens:
            raise ConfigParseError("cannot split line into tokens", source=source,
                                   line_number=line_number, line=line)
        descriptors.append(PassDescriptor(
            index=len(descriptors),
            name=tokens[0],
            arguments=tuple(tokens[1:]),
            line_number=line_number,
            line=line,
            source=source,
            base_dir=base_dir,
        ))
    LOGGER.debug("Parsed %d pass descriptor(s) from %s", len(descriptors), source or "<text>")
    return descriptors


def read_pipeline(path: Union[str, Path]) -> List[PassDescriptor]:
    path = Path(path)
    return parse_pipeline(read_text(path), source=str(path), base_dir=path.parent)
