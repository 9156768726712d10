"""libobj.errors

Every failure the converter reports is an ObjError. The subclasses say at
which point of a run they happen:

  - ConfigurationError / InputNotFoundError: before any file is touched.
  - UnsupportedFormatError / MalformedRecordError: scoped to one file.
"""

from __future__ import annotations


class ObjError(RuntimeError):
    pass


class ConfigurationError(ObjError):
    pass


class InputNotFoundError(ObjError):
    def __init__(self, path: str):
        super().__init__(f"error finding source: {path}")
        self.path = path


class UnsupportedFormatError(ObjError):
    def __init__(self, path: str):
        super().__init__(f"Unknown model format: {path}")
        self.path = path


class MalformedRecordError(ObjError):
    """A line looked like a vertex record but its fields did not decode."""

    def __init__(self, line_number: int, line: str):
        super().__init__(f"invalid vertex format (line {line_number}): {line}")
        self.line_number = line_number
        self.line = line
