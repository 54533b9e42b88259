"""Error types shared by the viewer's collaborators.

Every failure that can leave the run loop is a ``KiloviewError``.
The CLI reports these as a single ``kiloview: ...`` line on stderr.
"""

from __future__ import annotations


class KiloviewError(Exception):
    """Base class for viewer failures surfaced to the run loop."""


class TerminalError(KiloviewError):
    """Raw-mode toggling or window-size query failed."""


class KeyReadError(KiloviewError):
    """Reading the next key from the terminal failed or hit end of input."""


class BufferLoadError(KiloviewError):
    """A file could not be loaded into a line buffer."""
