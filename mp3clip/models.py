"""Shared data types used across mp3clip."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class VideoFile:
    """A candidate video found in the input folder."""

    name: str
    path: Path


@dataclass
class ExtractionRequest:
    """One ffmpeg extraction: where to seek, how long to keep, where to write."""

    input_path: Path
    start_seconds: int
    duration_seconds: int
    output_path: Path


@dataclass
class ExtractionResult:
    """Exit status and stderr lines of a finished ffmpeg run."""

    returncode: int
    lines: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0
