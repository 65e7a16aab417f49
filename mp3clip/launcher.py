"""Console bootstrap: reopen the program in a terminal window when started without one."""

import os
import shutil
import subprocess
import sys
from typing import Callable, Mapping, TextIO

# Emulator name -> flag that introduces the command to run
POSIX_TERMINALS: tuple[tuple[str, str], ...] = (
    ("x-terminal-emulator", "-e"),
    ("gnome-terminal", "--"),
    ("konsole", "-e"),
    ("xterm", "-e"),
)


def has_terminal(stdin: TextIO | None = None, stdout: TextIO | None = None) -> bool:
    """True when both standard streams are attached to an interactive terminal."""
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    if stdin is None or stdout is None:
        return False
    return stdin.isatty() and stdout.isatty()


def child_argv(args: list[str]) -> list[str]:
    """Command line for the relaunched copy; --hold keeps its window open."""
    return [sys.executable, "-m", "mp3clip", "--no-relaunch", "--hold", *args]


def terminal_command(
    argv: list[str],
    platform: str = sys.platform,
    which: Callable[[str], str | None] = shutil.which,
    environ: Mapping[str, str] = os.environ,
) -> list[str] | None:
    """Wrap *argv* so it runs inside a new terminal window, or None if we can't."""
    if platform == "win32":
        return ["cmd", "/c", "start", "mp3clip", "cmd", "/k", subprocess.list2cmdline(argv)]

    if platform == "darwin":
        return None

    if not (environ.get("DISPLAY") or environ.get("WAYLAND_DISPLAY")):
        return None

    for name, flag in POSIX_TERMINALS:
        exe = which(name)
        if exe:
            return [exe, flag, *argv]
    return None


def relaunch_in_terminal(args: list[str]) -> bool:
    """Start a terminal running mp3clip with *args*; False if none could be opened."""
    cmd = terminal_command(child_argv(args))
    if cmd is None:
        return False
    try:
        subprocess.Popen(cmd)
    except OSError as e:
        print(f"Could not open a terminal ({e}); running here instead.", file=sys.stderr)
        return False
    return True
