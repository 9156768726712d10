"""libobj.reader

Line-preserving OBJ reader.

Only position records (`v x y z [w]`) are decoded. Everything else (faces,
normals, texcoords, comments, groups, materials) is kept as raw text so the
writer can hand it back untouched.

Matching is two-stage:

  1. A prefix check on the first two characters. `vn`, `vt`, `vp`, faces and
     comments are rejected here without running the number decoder.
  2. The field decoder. A line that passed (1) but does not decode is a
     malformed record and aborts the file.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, List, Optional

from .errors import MalformedRecordError, ObjError
from .model import VertexRecord

log = logging.getLogger(__name__)

VERTEX_MARKER = "v"

# Optionally-signed decimal or exponential notation: 1, -2., +0.5, .5, 1e3, -4.2E-07
_NUMBER_RE = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")

_NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def is_vertex_line(line: str) -> bool:
    return len(line) > 2 and line[0] == VERTEX_MARKER and line[1] in (" ", "\t")


def _decode_field(token: str) -> Optional[float]:
    if not _NUMBER_RE.fullmatch(token):
        return None
    value = float(token)
    if not math.isfinite(value):
        return None
    return value


def match_vertex(line: str, line_index: int) -> Optional[VertexRecord]:
    """Decode one line as a vertex record.

    Returns None for lines that are not vertex records. Raises
    MalformedRecordError for lines that start like one but do not decode.
    The optional W field is checked and then replaced by 1.0.
    """
    if not is_vertex_line(line):
        return None

    # x y z [w] [anything else, e.g. vertex colours]
    fields = line[2:].split(None, 4)
    if len(fields) < 3:
        raise MalformedRecordError(line_index + 1, line)

    xyz = [_decode_field(t) for t in fields[:3]]
    if any(v is None for v in xyz):
        raise MalformedRecordError(line_index + 1, line)
    if len(fields) > 3 and _decode_field(fields[3]) is None:
        raise MalformedRecordError(line_index + 1, line)

    x, y, z = xyz
    return VertexRecord(position=(x, y, z, 1.0), line_index=line_index)


def match_vertices(lines: Iterable[str]) -> List[VertexRecord]:
    vertices: List[VertexRecord] = []
    for index, line in enumerate(lines):
        v = match_vertex(line, index)
        if v is not None:
            vertices.append(v)
    log.debug("matched %d vertex records", len(vertices))
    return vertices


def split_lines(text: str) -> List[str]:
    """Split on CRLF, CR or LF. A final terminator does not add an empty line."""
    if not text:
        return []
    lines = _NEWLINE_RE.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def read_obj_lines(path: str) -> List[str]:
    try:
        # utf-8-sig drops a BOM; surrogateescape keeps undecodable bytes intact
        with open(path, "r", encoding="utf-8-sig", errors="surrogateescape", newline="") as f:
            text = f.read()
    except OSError as e:
        raise ObjError(f"error reading {path}") from e

    lines = split_lines(text)
    log.debug("read %s: %d lines", path, len(lines))
    return lines
