"""Thin CLI entry point: resolves Settings and runs the engine."""

import argparse
import contextlib
import sys
from pathlib import Path

from mp3clip.engine import run
from mp3clip.launcher import has_terminal, relaunch_in_terminal
from mp3clip.settings import Settings, load_settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mp3clip",
        description="Cut a section of a video in ./input into an MP3 in ./output using ffmpeg.",
    )
    parser.add_argument("--settings", "-s", type=Path, help="Path to a JSON settings file")
    parser.add_argument("--input-dir", type=Path, help="Folder to scan for videos (default: input)")
    parser.add_argument("--output-dir", type=Path, help="Folder to write clips to (default: output)")
    parser.add_argument("--ffmpeg", type=str, help="ffmpeg executable to run")
    parser.add_argument(
        "--no-relaunch",
        action="store_true",
        help="Never reopen in a new terminal window, even without a console",
    )
    parser.add_argument("--hold", action="store_true", help="Wait for Enter before exiting")
    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.settings) if args.settings else Settings()
    if args.input_dir:
        settings.input_dir = args.input_dir
    if args.output_dir:
        settings.output_dir = args.output_dir
    if args.ffmpeg:
        settings.ffmpeg = args.ffmpeg
    return settings


def main(argv: list[str] | None = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)

    if not args.no_relaunch and not has_terminal():
        if relaunch_in_terminal(argv):
            sys.exit(0)

    try:
        settings = resolve_settings(args)
    except (OSError, ValueError) as e:
        print(f"Error: could not load settings: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        result = run(settings)
    except KeyboardInterrupt:
        print("\nAborted.", file=sys.stderr)
        sys.exit(130)
    except EOFError:
        print("\nError: input ended before all prompts were answered.", file=sys.stderr)
        sys.exit(1)

    if args.hold:
        print()
        with contextlib.suppress(EOFError, KeyboardInterrupt):
            input("Program has ended, press Enter to close this window.")

    sys.exit(result.exit_code)
