"""Exception hierarchy for visualine.

Raised exceptions live here. Errors that are *recorded* during a scan (and
never raised) are the ScanError variants in visualine.core.types.
"""


class VisualineError(Exception):
    """Base class for every error raised by visualine."""


class InvalidColor(VisualineError, ValueError):
    """Colour data could not be converted to a hex string."""


class NoTokens(VisualineError, LookupError):
    """No palette token could be scored against a colour."""


class PaletteError(VisualineError, ValueError):
    """A palette resource is malformed."""


class DocumentError(VisualineError, ValueError):
    """A layer document export is malformed."""


class ScanFailure(VisualineError, RuntimeError):
    """The scan could not run at all. No partial report exists."""
