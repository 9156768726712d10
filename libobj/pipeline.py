"""libobj.pipeline

One file:   extension check -> read -> match -> transform -> rewrite -> write
Many files: validate all inputs up front, then convert each file as its own
            unit of work on a thread pool and join every result.

A file that fails never blocks or rolls back the others. Outputs of files
that converted successfully are kept even when the batch as a whole fails.
"""

from __future__ import annotations

import concurrent.futures
import logging
import os
from typing import List, Optional, Sequence, Tuple

from .errors import ConfigurationError, InputNotFoundError, ObjError, UnsupportedFormatError
from .model import BatchResult, BoundingBox, ConversionResult, ConvertOptions, TransformConfig, VertexRecord
from .reader import match_vertices, read_obj_lines
from .transform import bounding_box, transform_vertices
from .writer import rewrite_lines, write_obj_lines

log = logging.getLogger(__name__)

OBJ_EXTENSION = ".obj"


def check_extension(path: str) -> None:
    if os.path.splitext(path)[1].lower() != OBJ_EXTENSION:
        raise UnsupportedFormatError(path)


def output_path(path: str, options: ConvertOptions) -> str:
    if options.in_place:
        return path
    if not options.output_dir:
        raise ConfigurationError("you must specify an output path when not converting in place")
    return os.path.join(options.output_dir, os.path.basename(path))


def convert_lines(
    lines: Sequence[str], config: TransformConfig
) -> Tuple[List[str], List[VertexRecord], Optional[BoundingBox]]:
    """The in-memory part of a conversion: match, transform, rewrite.

    Returns the new lines, the transformed records and their bounds.
    """
    records = match_vertices(lines)
    moved = transform_vertices(records, config)
    return rewrite_lines(lines, moved), moved, bounding_box(moved)


def convert_file(path: str, options: ConvertOptions) -> ConversionResult:
    check_extension(path)

    lines = read_obj_lines(path)
    new_lines, records, bounds = convert_lines(lines, options.transform)

    out = output_path(path, options)
    write_obj_lines(new_lines, out)
    log.info("converted %s -> %s (%d vertices)", path, out, len(records))
    return ConversionResult(source=path, output=out, vertex_count=len(records), bounds=bounds)


def validate_inputs(paths: Sequence[str], options: ConvertOptions) -> None:
    for p in paths:
        if not os.path.isfile(p):
            raise InputNotFoundError(p)

    if not options.in_place and not (options.output_dir or "").strip():
        raise ConfigurationError("you must specify an output path when not converting in place")

    # every unit of work writes its own file
    seen = {}
    for p in paths:
        key = os.path.normcase(os.path.abspath(output_path(p, options)))
        if key in seen:
            raise ConfigurationError(f"{seen[key]} and {p} would both be written to {output_path(p, options)}")
        seen[key] = p


def prepare_output(options: ConvertOptions) -> None:
    if options.in_place:
        return
    try:
        os.makedirs(options.output_dir, exist_ok=True)
    except OSError as e:
        raise ObjError(f"error creating output directory: {options.output_dir}") from e


def _convert_one(path: str, options: ConvertOptions) -> ConversionResult:
    try:
        return convert_file(path, options)
    except Exception as exc:
        if exc.__cause__ is not None:
            log.error("conversion failed for %s: %s (%s)", path, exc, exc.__cause__)
        else:
            log.error("conversion failed for %s: %s", path, exc)
        return ConversionResult(source=path, error=exc)


def convert_batch(paths: Sequence[str], options: ConvertOptions) -> BatchResult:
    """Convert every path; configuration and missing inputs fail the whole run
    before anything is written."""
    validate_inputs(paths, options)
    prepare_output(options)

    if not paths:
        return BatchResult(results=[])

    with concurrent.futures.ThreadPoolExecutor(max_workers=options.workers) as executor:
        futures = [executor.submit(_convert_one, p, options) for p in paths]
        results = [f.result() for f in futures]

    failed = sum(1 for r in results if not r.ok)
    log.debug("batch done: %d files, %d failed", len(results), failed)
    return BatchResult(results=results)
