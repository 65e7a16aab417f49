"""Orchestrator: one interactive extraction run from folder scan to ffmpeg exit."""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from mp3clip import ffutil
from mp3clip.models import ExtractionRequest, ExtractionResult, VideoFile
from mp3clip.scanner import ensure_folder, format_listing, list_video_files
from mp3clip.settings import Settings
from mp3clip.timecode import TimeFormatError, parse_time

NO_FILES_MESSAGE = "Could not find any video files in the input folder. Please add video files."
INVALID_SELECTION_MESSAGE = "Invalid file selection."
INVALID_RANGE_MESSAGE = "End time must be after start time."
SUCCESS_MESSAGE = "Audio extraction successful!"
FAILURE_MESSAGE = "Audio extraction failed!"


class OutputNameError(ValueError):
    """Raised when the output name would leave the output folder."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Invalid filename {name!r}: use a plain name without folders.")
        self.name = name


def output_path_for(name: str, output_dir: Path) -> Path:
    """Place ``<name>.mp3`` directly inside *output_dir*."""
    if not name or any(sep in name for sep in ("/", "\\", ":")) or name in (".", ".."):
        raise OutputNameError(name)
    return output_dir / f"{name}.mp3"


@dataclass
class EngineResult:
    """Where a run stopped.

    ``stage`` is one of ``no_files``, ``invalid_selection``, ``invalid_time``,
    ``invalid_range``, ``invalid_name``, ``launch_failed``, ``success`` or ``failure``.
    """

    stage: str
    exit_code: int
    request: ExtractionRequest | None = None
    extraction: ExtractionResult | None = None


def select_file(files: list[VideoFile], answer: str) -> VideoFile | None:
    """Map the user's answer to a file, or None if it is not a valid index."""
    answer = answer.strip()
    if not answer.isdecimal():
        return None
    index = int(answer)
    if 0 <= index < len(files):
        return files[index]
    return None


def build_request(
    video: VideoFile, start: str, end: str, name: str, settings: Settings
) -> ExtractionRequest:
    """Turn the raw prompt answers into an ExtractionRequest.

    Raises TimeFormatError for malformed timestamps and OutputNameError
    for names containing a path separator. The duration is not
    range-checked here.
    """
    start_seconds = parse_time(start)
    end_seconds = parse_time(end)
    return ExtractionRequest(
        input_path=video.path,
        start_seconds=start_seconds,
        duration_seconds=end_seconds - start_seconds,
        output_path=output_path_for(name, settings.output_dir),
    )


def run(
    settings: Settings,
    ask: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> EngineResult:
    """Execute one pass of the prompt-and-extract flow.

    Args:
        settings: Folder locations and ffmpeg invocation.
        ask: Prompt reader, ``input`` by default.
        out: Writer for status lines and relayed ffmpeg output.
    """
    ensure_folder(settings.input_dir)

    files = list_video_files(settings.input_dir, settings.extensions)
    if not files:
        out(NO_FILES_MESSAGE)
        return EngineResult(stage="no_files", exit_code=0)

    out("Available files:")
    for line in format_listing(files):
        out(line)

    video = select_file(files, ask("Pick a file by entering its number: "))
    if video is None:
        out(INVALID_SELECTION_MESSAGE)
        return EngineResult(stage="invalid_selection", exit_code=1)

    start = ask("Start Time: ")
    end = ask("End Time: ")
    name = ask("Filename: ")

    try:
        request = build_request(video, start, end, name, settings)
    except TimeFormatError as e:
        print(e, file=sys.stderr)
        return EngineResult(stage="invalid_time", exit_code=1)
    except OutputNameError as e:
        print(e, file=sys.stderr)
        return EngineResult(stage="invalid_name", exit_code=1)

    if request.duration_seconds <= 0:
        print(INVALID_RANGE_MESSAGE, file=sys.stderr)
        return EngineResult(stage="invalid_range", exit_code=1, request=request)

    ensure_folder(settings.output_dir)

    try:
        extraction = ffutil.extract_mp3(
            request,
            ffmpeg=settings.ffmpeg,
            audio_codec=settings.audio_codec,
            on_line=out,
        )
    except ffutil.FFmpegLaunchError as e:
        print(f"Error: could not run ffmpeg: {e}", file=sys.stderr)
        return EngineResult(stage="launch_failed", exit_code=1, request=request)

    if extraction.succeeded:
        out(SUCCESS_MESSAGE)
        return EngineResult(stage="success", exit_code=0, request=request, extraction=extraction)

    out(FAILURE_MESSAGE)
    return EngineResult(stage="failure", exit_code=1, request=request, extraction=extraction)
