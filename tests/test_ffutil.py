"""Unit tests for ffutil: command building and the streaming ffmpeg runner."""

import subprocess
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from mp3clip.ffutil import (
    FFmpegLaunchError,
    FFmpegNotFoundError,
    build_extract_command,
    extract_mp3,
)
from mp3clip.models import ExtractionRequest

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="fake encoder is a POSIX shell script")

REQUEST = ExtractionRequest(
    input_path=Path("input/talk.mp4"),
    start_seconds=10,
    duration_seconds=30,
    output_path=Path("output/quote.mp3"),
)


def _fake_process(lines: list[str], returncode: int = 0) -> MagicMock:
    proc = MagicMock()
    proc.__enter__.return_value = proc
    proc.stderr = iter(lines)
    proc.wait.return_value = returncode
    return proc


# ---------------------------------------------------------------------------
# build_extract_command (pure)
# ---------------------------------------------------------------------------

class TestBuildExtractCommand:
    def test_fixed_argument_order(self):
        cmd = build_extract_command(REQUEST)
        assert cmd == [
            "ffmpeg",
            "-ss", "10",
            "-i", str(Path("input/talk.mp4")),
            "-vn",
            "-acodec", "libmp3lame",
            "-t", "30",
            str(Path("output/quote.mp3")),
        ]

    def test_seek_comes_before_input(self):
        cmd = build_extract_command(REQUEST)
        assert cmd.index("-ss") < cmd.index("-i")

    def test_custom_binary_and_codec(self):
        cmd = build_extract_command(REQUEST, ffmpeg="/opt/bin/ffmpeg", audio_codec="mp3")
        assert cmd[0] == "/opt/bin/ffmpeg"
        assert cmd[cmd.index("-acodec") + 1] == "mp3"

    def test_negative_duration_passed_through(self):
        req = ExtractionRequest(Path("in.mp4"), 40, -30, Path("out.mp3"))
        cmd = build_extract_command(req)
        assert cmd[cmd.index("-t") + 1] == "-30"


# ---------------------------------------------------------------------------
# extract_mp3 (mocked subprocess)
# ---------------------------------------------------------------------------

class TestExtractMp3:
    @patch("mp3clip.ffutil.subprocess.Popen")
    def test_relays_lines_in_order(self, mock_popen):
        mock_popen.return_value = _fake_process(["Input #0\n", "size=10kB\r\n"])
        seen: list[str] = []

        result = extract_mp3(REQUEST, on_line=seen.append)

        assert seen == ["Input #0", "size=10kB"]
        assert result.lines == seen
        assert result.returncode == 0
        assert result.succeeded

    @patch("mp3clip.ffutil.subprocess.Popen")
    def test_reads_stderr_pipe(self, mock_popen):
        mock_popen.return_value = _fake_process([])
        extract_mp3(REQUEST)

        kwargs = mock_popen.call_args.kwargs
        assert kwargs["stderr"] == subprocess.PIPE
        assert kwargs["stdin"] == subprocess.DEVNULL
        assert mock_popen.call_args.args[0] == build_extract_command(REQUEST)

    @patch("mp3clip.ffutil.subprocess.Popen")
    def test_nonzero_exit_is_not_raised(self, mock_popen):
        mock_popen.return_value = _fake_process(["boom\n"], returncode=1)
        result = extract_mp3(REQUEST)
        assert result.returncode == 1
        assert not result.succeeded

    @patch("mp3clip.ffutil.subprocess.Popen")
    def test_stream_closed_when_callback_raises(self, mock_popen):
        proc = _fake_process(["line\n"])
        mock_popen.return_value = proc

        def explode(line: str) -> None:
            raise RuntimeError("callback failed")

        with pytest.raises(RuntimeError, match="callback failed"):
            extract_mp3(REQUEST, on_line=explode)
        proc.__exit__.assert_called_once()

    @patch("mp3clip.ffutil.subprocess.Popen", side_effect=FileNotFoundError("ffmpeg"))
    def test_missing_binary(self, mock_popen):
        with pytest.raises(FFmpegNotFoundError, match="not found"):
            extract_mp3(REQUEST)

    @patch("mp3clip.ffutil.subprocess.Popen", side_effect=PermissionError("denied"))
    def test_other_launch_failure(self, mock_popen):
        with pytest.raises(FFmpegLaunchError, match="could not start"):
            extract_mp3(REQUEST)

    def test_not_found_is_a_launch_error(self):
        assert issubclass(FFmpegNotFoundError, FFmpegLaunchError)


# ---------------------------------------------------------------------------
# extract_mp3 against a real child process
# ---------------------------------------------------------------------------

@posix_only
class TestExtractMp3Process:
    def test_success(self, tmp_path: Path, fake_ffmpeg):
        out = tmp_path / "clip.mp3"
        req = ExtractionRequest(tmp_path / "in.mp4", 0, 5, out)

        result = extract_mp3(req, ffmpeg=str(fake_ffmpeg(0)))

        assert result.succeeded
        assert out.exists()
        assert result.lines[0].startswith("fake-ffmpeg -ss 0 -i")

    def test_failure(self, tmp_path: Path, fake_ffmpeg):
        req = ExtractionRequest(tmp_path / "in.mp4", 0, 5, tmp_path / "clip.mp3")
        result = extract_mp3(req, ffmpeg=str(fake_ffmpeg(3)))
        assert result.returncode == 3

    def test_missing_binary(self, tmp_path: Path):
        req = ExtractionRequest(tmp_path / "in.mp4", 0, 5, tmp_path / "clip.mp3")
        with pytest.raises(FFmpegNotFoundError):
            extract_mp3(req, ffmpeg=str(tmp_path / "no-such-ffmpeg"))
