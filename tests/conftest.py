"""Shared test fixtures."""

import stat
from pathlib import Path

import pytest

# Stands in for ffmpeg: logs to stderr, creates its last argument, exits with the given code
_FAKE_ENCODER = """\
#!/bin/sh
echo "fake-ffmpeg $*" >&2
echo "size=1kB time=00:00:30.00" >&2
for last; do :; done
: > "$last"
exit {code}
"""


@pytest.fixture
def fake_ffmpeg(tmp_path: Path):
    """Return a factory that writes a fake encoder script exiting with *code*."""

    def make(code: int = 0) -> Path:
        script = tmp_path / f"fake-ffmpeg-{code}"
        script.write_text(_FAKE_ENCODER.format(code=code))
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return script

    return make


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch) -> Path:
    """Run inside an empty directory so ./input and ./output land in tmp_path."""
    root = tmp_path / "work"
    root.mkdir()
    monkeypatch.chdir(root)
    return root
