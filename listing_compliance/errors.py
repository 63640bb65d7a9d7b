"""Typed errors raised by the compliance core.

The core never logs, retries or swallows these; the calling layer decides
what the user sees.
"""


class ComplianceError(Exception):
    """Base class for every error raised by the compliance core."""


class CatalogError(ComplianceError):
    """Rule catalog is malformed (bad or duplicate rule IDs, unknown category)."""


class PlatformMismatchError(ComplianceError, ValueError):
    """Two results (or a result and a listing) belong to different platforms."""

    def __init__(self, expected: str, actual: str, context: str = ""):
        self.expected = expected
        self.actual = actual
        msg = f"Platform mismatch: expected '{expected}', got '{actual}'"
        if context:
            msg += f" ({context})"
        super().__init__(msg)


class ListingParseError(ComplianceError, ValueError):
    """Listing input could not be parsed into a known listing shape."""


class ExportError(ComplianceError):
    """A scan result could not be serialized, or an export document is malformed."""
