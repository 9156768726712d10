from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .errors import ConfigurationError

Vec4 = Tuple[float, float, float, float]

UP_AXES = ("x", "y", "z")


# -----------------------------
# Per-file geometry (ephemeral; owned by one conversion)
# -----------------------------

@dataclass(frozen=True)
class VertexRecord:
    position: Vec4
    line_index: int  # 0-based index into the file's lines


@dataclass(frozen=True)
class BoundingBox:
    min: Vec4
    max: Vec4

    @property
    def size(self) -> Vec4:
        return (
            self.max[0] - self.min[0],
            self.max[1] - self.min[1],
            self.max[2] - self.min[2],
            self.max[3] - self.min[3],
        )


# -----------------------------
# Run configuration
# -----------------------------

class Alignment(enum.Enum):
    NONE = "None"
    CENTER = "Center"
    BOTTOM_CENTER = "BottomCenter"

    @classmethod
    def parse(cls, text: str) -> "Alignment":
        """Accepts `BottomCenter`, `bottom_center`, `bottom-center`, any case."""
        key = text.replace("_", "").replace("-", "").strip().lower()
        for a in cls:
            if a.value.lower() == key:
                return a
        choices = ", ".join(a.value for a in cls)
        raise ConfigurationError(f"invalid alignment: {text} (expected one of {choices})")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class TransformConfig:
    scale: float = 1.0
    alignment: Alignment = Alignment.NONE
    up_axis: str = "z"

    def __post_init__(self) -> None:
        if not math.isfinite(self.scale) or self.scale <= 0.0:
            raise ConfigurationError(f"invalid scale factor: {self.scale}")
        if self.up_axis not in UP_AXES:
            raise ConfigurationError(f"invalid up axis: {self.up_axis}")


@dataclass(frozen=True)
class ConvertOptions:
    transform: TransformConfig = field(default_factory=TransformConfig)
    in_place: bool = False
    output_dir: Optional[str] = None
    verbose: bool = False
    workers: Optional[int] = None

    def __post_init__(self) -> None:
        if self.workers is not None and self.workers < 1:
            raise ConfigurationError(f"invalid worker count: {self.workers}")


# -----------------------------
# Results
# -----------------------------

@dataclass
class ConversionResult:
    source: str
    output: Optional[str] = None
    vertex_count: int = 0
    bounds: Optional[BoundingBox] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    results: List[ConversionResult]

    @property
    def ok(self) -> bool:
        return all(r.ok for r in self.results)

    @property
    def failures(self) -> List[ConversionResult]:
        return [r for r in self.results if not r.ok]


@dataclass
class ObjSummary:
    path: str
    file_size: int
    line_count: int
    vertex_count: int
    normal_count: int
    texcoord_count: int
    face_count: int
    comment_count: int
    bounds: Optional[BoundingBox]
