from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence

from .errors import ObjError
from .model import UP_AXES, Alignment, BoundingBox, TransformConfig, Vec4, VertexRecord

log = logging.getLogger(__name__)

ZERO: Vec4 = (0.0, 0.0, 0.0, 0.0)


def scale_position(p: Vec4, s: float) -> Vec4:
    # w is scaled with the rest, then renormalized
    return (p[0] * s, p[1] * s, p[2] * s, 1.0)


def bounding_box(records: Sequence[VertexRecord]) -> Optional[BoundingBox]:
    if not records:
        return None
    mn = list(records[0].position)
    mx = list(records[0].position)
    for r in records[1:]:
        for i, c in enumerate(r.position):
            if c < mn[i]:
                mn[i] = c
            if c > mx[i]:
                mx[i] = c
    return BoundingBox(min=tuple(mn), max=tuple(mx))


def alignment_offset(box: BoundingBox, alignment: Alignment, up_axis: str = "z") -> Vec4:
    """Translation that places `box` according to `alignment`.

    BOTTOM_CENTER moves the lowest extent along the up axis to 0 and shifts
    the two other axes by minus half their extent. CENTER has no offset.
    """
    if alignment is Alignment.BOTTOM_CENTER:
        up = UP_AXES.index(up_axis)
        offset = [0.0, 0.0, 0.0, 0.0]
        for i in range(3):
            if i == up:
                offset[i] = -box.min[i]
            else:
                offset[i] = -(box.max[i] - box.min[i]) * 0.5
        return tuple(offset)
    return ZERO


def translate(p: Vec4, offset: Vec4) -> Vec4:
    return (p[0] + offset[0], p[1] + offset[1], p[2] + offset[2], p[3] + offset[3])


def transform_vertices(records: Sequence[VertexRecord], config: TransformConfig) -> List[VertexRecord]:
    """Scale, then align. Returns new records; `records` is left as is.

    Raises ObjError when a coordinate overflows to a non-finite value.
    """
    out = [
        VertexRecord(position=scale_position(r.position, config.scale), line_index=r.line_index)
        for r in records
    ]
    out = _align(out, config)

    for r in out:
        if not all(math.isfinite(c) for c in r.position):
            raise ObjError(f"vertex out of range after transform (line {r.line_index + 1})")
    return out


def _align(out: List[VertexRecord], config: TransformConfig) -> List[VertexRecord]:
    if config.alignment is Alignment.NONE:
        return out

    box = bounding_box(out)
    if box is None:
        return out

    if config.alignment is Alignment.CENTER:
        log.warning("alignment %s defines no offset; vertices left in place", config.alignment)

    offset = alignment_offset(box, config.alignment, config.up_axis)
    log.debug("bounds min=%s max=%s offset=%s", box.min, box.max, offset)
    if offset == ZERO:
        return out
    return [VertexRecord(position=translate(r.position, offset), line_index=r.line_index) for r in out]
