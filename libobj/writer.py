"""libobj.writer

Line-preserving OBJ writer.

Only lines that produced a VertexRecord are replaced; every other line is
returned as the same string that was read. Coordinates are written with the
shortest representation that parses back to the same float, so a file that
is rewritten with an identity transform converges after one pass.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from .errors import ObjError
from .model import Vec4, VertexRecord
from .reader import VERTEX_MARKER

log = logging.getLogger(__name__)


def format_coordinate(value: float) -> str:
    if value == 0.0:
        return "0"  # also folds -0.0
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def format_vertex(position: Vec4) -> str:
    # w is never written back
    return " ".join([VERTEX_MARKER] + [format_coordinate(c) for c in position[:3]])


def rewrite_lines(lines: Sequence[str], records: Sequence[VertexRecord]) -> List[str]:
    replacements: Dict[int, str] = {r.line_index: format_vertex(r.position) for r in records}
    return [replacements.get(i, line) for i, line in enumerate(lines)]


def join_lines(lines: Sequence[str]) -> str:
    return "\n".join(lines)


def write_obj_lines(lines: Sequence[str], out_path: str) -> None:
    try:
        with open(out_path, "w", encoding="utf-8", errors="surrogateescape", newline="") as f:
            f.write(join_lines(lines))
    except OSError as e:
        raise ObjError(f"error writing {out_path}") from e
    log.debug("wrote %s: %d lines", out_path, len(lines))
