"""Input-folder scanning and folder creation."""

import sys
from pathlib import Path

from mp3clip.models import VideoFile

ACCEPTED_EXTENSIONS: tuple[str, ...] = (
    ".mp4", ".avi", ".mkv", ".mov", ".wmv", ".flv", ".3gp", ".webm", ".ogg",
)


def is_video_file(name: str, extensions: tuple[str, ...] = ACCEPTED_EXTENSIONS) -> bool:
    lowered = name.lower()
    return any(lowered.endswith(ext.lower()) for ext in extensions)


def list_video_files(
    directory: Path, extensions: tuple[str, ...] = ACCEPTED_EXTENSIONS
) -> list[VideoFile]:
    """Return regular files directly inside *directory* with an accepted extension.

    The listing is sorted by name so the numbers shown to the user are stable
    between runs. A missing directory is treated as empty.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return [
        VideoFile(name=p.name, path=p)
        for p in sorted(directory.iterdir(), key=lambda p: p.name)
        if p.is_file() and is_video_file(p.name, extensions)
    ]


def format_listing(files: list[VideoFile]) -> list[str]:
    return [f"{i}: {f.name}" for i, f in enumerate(files)]


def ensure_folder(path: Path) -> bool:
    """Create *path* (and parents) if it does not exist yet.

    Failures are reported on stderr but not raised; whatever later touches
    the folder will fail on its own.
    """
    path = Path(path)
    if path.is_dir():
        return True
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError:
        print(f"Failed to create '{path}' folder.", file=sys.stderr)
        return False
    print(f"Created '{path}' folder.")
    return True
