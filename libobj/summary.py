from __future__ import annotations

import os

from .model import ObjSummary
from .reader import match_vertices, read_obj_lines
from .transform import bounding_box


def _record_type(line: str) -> str:
    # first token of the line; "" for blank lines
    stripped = line.lstrip()
    if stripped.startswith("#"):
        return "#"
    parts = stripped.split(None, 1)
    return parts[0] if parts else ""


def summarize_obj(path: str) -> ObjSummary:
    lines = read_obj_lines(path)
    vertices = match_vertices(lines)

    counts = {"vn": 0, "vt": 0, "f": 0, "#": 0}
    for line in lines:
        kind = _record_type(line)
        if kind in counts:
            counts[kind] += 1

    return ObjSummary(
        path=path,
        file_size=os.path.getsize(path),
        line_count=len(lines),
        vertex_count=len(vertices),
        normal_count=counts["vn"],
        texcoord_count=counts["vt"],
        face_count=counts["f"],
        comment_count=counts["#"],
        bounds=bounding_box(vertices),
    )
