"""Parse user-entered ``SS`` / ``MM:SS`` timestamps."""

import re

_TIME_RE = re.compile(r"(?:(\d+):)?(\d+)")


class TimeFormatError(ValueError):
    """Raised when a timestamp is neither ``SS`` nor ``MM:SS``."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid time {text!r}: expected SS or MM:SS.")
        self.text = text


def parse_time(text: str) -> int:
    """Convert ``"90"`` or ``"1:30"`` to whole seconds.

    Seconds above 59 are accepted in the colon form (``"1:75"`` is 135).
    """
    m = _TIME_RE.fullmatch(text.strip())
    if m is None:
        raise TimeFormatError(text)
    minutes, seconds = m.groups()
    return int(minutes or 0) * 60 + int(seconds)
