"""Run settings: folder locations and the ffmpeg invocation."""

import json
from dataclasses import dataclass, fields
from pathlib import Path

from mp3clip.scanner import ACCEPTED_EXTENSIONS


@dataclass
class Settings:
    """Where to look for videos, where to write clips, and how to call ffmpeg.

    Relative folders resolve against the current working directory.
    """

    input_dir: Path = Path("input")
    output_dir: Path = Path("output")
    ffmpeg: str = "ffmpeg"
    audio_codec: str = "libmp3lame"
    extensions: tuple[str, ...] = ACCEPTED_EXTENSIONS


def _expect(key: str, value, kind: type):
    if not isinstance(value, kind):
        raise ValueError(f"Setting '{key}' must be a {kind.__name__}, got {type(value).__name__}")
    return value


def load_settings(path: str | Path) -> Settings:
    """Load settings from a JSON object; missing keys keep their defaults."""
    path = Path(path)
    data = json.loads(path.read_text())

    if not isinstance(data, dict):
        raise ValueError("Settings file must contain a JSON object")

    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown settings: {', '.join(unknown)}")

    kwargs = {}
    for key in ("input_dir", "output_dir"):
        if key in data:
            kwargs[key] = Path(_expect(key, data[key], str))
    for key in ("ffmpeg", "audio_codec"):
        if key in data:
            kwargs[key] = _expect(key, data[key], str)
    if "extensions" in data:
        extensions = _expect("extensions", data["extensions"], list)
        if not all(isinstance(ext, str) for ext in extensions):
            raise ValueError("Setting 'extensions' must be a list of strings")
        kwargs["extensions"] = tuple(extensions)
    return Settings(**kwargs)
