"""Analysis results and score manifest records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass(slots=True)
class AnalysisResult:
    """The four pipeline outputs for one image, plus any side-task results."""

    edge_image: bytes | str
    thermogram_image: bytes | str
    edge_score: float
    brightness_score: float
    width: int = 0
    height: int = 0
    extras: dict[str, Any] = field(default_factory=dict)

    def scores(self) -> dict[str, float]:
        return {"edge_score": self.edge_score, "brightness_score": self.brightness_score}


@dataclass(slots=True)
class ScoreRecord:
    # Identity
    path: str = ""
    filename: str = ""
    file_size_bytes: int = 0
    mtime: float = 0.0

    # Dimensions of the decoded image
    width: int = 0
    height: int = 0
    format: str = ""

    # Scores
    edge_score: float | None = None
    brightness_score: float | None = None

    # Saved visualizations (optional)
    edge_image_path: str | None = None
    thermogram_image_path: str | None = None

    # Failure
    is_corrupt: bool = False
    error: str | None = None

    # Meta
    analyzed_at: str = ""
    analyzer_version: str = "1"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ScoreRecord:
        return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})


MANIFEST_META_KEY = "__manifest_meta__"


@dataclass(slots=True)
class ManifestMeta:
    input_dir: str = ""
    schema_version: int = 1
    settings: dict[str, Any] = field(default_factory=dict)
    total_files: int = 0
    created_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d[MANIFEST_META_KEY] = True
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ManifestMeta:
        filtered = {k: v for k, v in data.items() if k in cls.__dataclass_fields__}
        return cls(**filtered)
