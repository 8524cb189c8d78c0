import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ConversionMode(str, Enum):
    """Output representation produced for every page."""

    RASTER = "png"
    VECTOR = "svg"
    MARKUP = "html"


@dataclass(frozen=True)
class DocumentFile:
    """A user-selected file: display name, declared MIME type and raw bytes."""

    name: str
    mime_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path) -> "DocumentFile":
        mime_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            mime_type=mime_type or "application/octet-stream",
            data=path.read_bytes(),
        )


@dataclass(frozen=True)
class PageArtifact:
    """One rendered page, tagged with the mode that produced it."""

    page_number: int
    mode: ConversionMode
    content: str


@dataclass(frozen=True)
class HitBox:
    """Axis-aligned rectangle of a single search match."""

    x: float
    y: float
    w: float
    h: float

    def scaled(self, sx: float, sy: float) -> "HitBox":
        return HitBox(x=self.x * sx, y=self.y * sy, w=self.w * sx, h=self.h * sy)


@dataclass(frozen=True)
class PageSearchResult:
    """Hits on one page plus the page size at the search reference resolution."""

    page_number: int
    hits: tuple[HitBox, ...]
    page_width: float
    page_height: float

    @property
    def hit_count(self) -> int:
        return len(self.hits)


def total_hits(results: list[PageSearchResult]) -> int:
    return sum(result.hit_count for result in results)
