"""FFmpeg subprocess helpers."""

import subprocess
from typing import Callable

from mp3clip.models import ExtractionRequest, ExtractionResult


class FFmpegLaunchError(RuntimeError):
    """Raised when the ffmpeg process could not be started."""
    pass


class FFmpegNotFoundError(FFmpegLaunchError):
    pass


def build_extract_command(
    request: ExtractionRequest,
    ffmpeg: str = "ffmpeg",
    audio_codec: str = "libmp3lame",
) -> list[str]:
    """Seek before the input, drop video, encode audio and cap the duration."""
    return [
        ffmpeg,
        "-ss", str(request.start_seconds),
        "-i", str(request.input_path),
        "-vn",
        "-acodec", audio_codec,
        "-t", str(request.duration_seconds),
        str(request.output_path),
    ]


def extract_mp3(
    request: ExtractionRequest,
    ffmpeg: str = "ffmpeg",
    audio_codec: str = "libmp3lame",
    on_line: Callable[[str], None] | None = None,
) -> ExtractionResult:
    """Run ffmpeg for *request*, relaying each stderr line as it arrives.

    Blocks until ffmpeg exits; there is no timeout. A non-zero exit is
    reported through the result, not raised.
    """
    cmd = build_extract_command(request, ffmpeg=ffmpeg, audio_codec=audio_codec)
    try:
        proc = subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except FileNotFoundError as e:
        raise FFmpegNotFoundError(f"{ffmpeg} not found on PATH") from e
    except OSError as e:
        raise FFmpegLaunchError(f"could not start {ffmpeg}: {e}") from e

    lines: list[str] = []
    # Popen's context manager closes the pipe and waits, even if on_line raises
    with proc:
        for raw in proc.stderr:
            line = raw.rstrip("\r\n")
            lines.append(line)
            if on_line:
                on_line(line)
        returncode = proc.wait()

    return ExtractionResult(returncode=returncode, lines=lines)
