"""Command-line front door for kiloview.

Parses CLI options, loads the optional file into a line buffer, and
dispatches into the interactive viewer runtime.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from . import __version__
from .buffer import LineBuffer
from .errors import BufferLoadError, KiloviewError
from .runtime import run_viewer


def load_buffer(path: Path | None) -> LineBuffer:
    """Load ``path`` into a buffer, reporting failures and falling back to blank.

    File-open errors never abort the session; the message goes to stderr
    before the terminal enters raw mode.
    """
    if path is None:
        return LineBuffer.empty()
    try:
        return LineBuffer.from_path(path)
    except BufferLoadError as exc:
        print(f"kiloview: {exc}", file=sys.stderr)
        return LineBuffer.empty()


def main() -> None:
    """Parse CLI arguments and launch the viewer on an optional file."""
    parser = argparse.ArgumentParser(
        prog="kiloview",
        description="View a text file in the terminal with cursor navigation. Press Ctrl-Q to quit.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path to file. Omit to open an empty buffer.")
    parser.add_argument("--nopager", action="store_true", help="Print the file directly without interactive viewing.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args()

    buffer = load_buffer(Path(args.path) if args.path is not None else None)
    try:
        run_viewer(buffer, args.nopager)
    except KiloviewError as exc:
        raise SystemExit(f"kiloview: {exc}") from exc
    except KeyboardInterrupt:
        raise SystemExit(130) from None


if __name__ == "__main__":
    main()
