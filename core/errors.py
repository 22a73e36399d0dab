"""
errors.py — Field Guide Exception Types
----------------------------------------

Failures that can occur while loading the keyword index, manifests and the
detail dataset. The matcher itself never raises; these only surface from the
loading layer and are converted to user-facing notices by the search service.

Project: Field Guide
"""


class FieldGuideError(Exception):
    """Base class for all field guide errors."""


class ResourceUnavailableError(FieldGuideError):
    """
    Raised when every candidate location for a resource failed.

    Args:
        locations (list[str]): Locations tried, in order.
        reasons (list[str]): Failure description for each location.
    """
    def __init__(self, locations, reasons):
        self.locations = list(locations)
        self.reasons = list(reasons)
        detail = "; ".join(self.reasons) if self.reasons else "no candidate locations configured"
        super().__init__(f"Resource unavailable ({detail})")


class IndexUnavailableError(FieldGuideError):
    """Raised when the keyword index cannot be loaded or is malformed."""


class DuplicateKeywordError(IndexUnavailableError):
    """Raised when the keyword index defines the same canonical keyword twice."""

    def __init__(self, keyword, first, second):
        self.keyword = keyword
        self.first = first
        self.second = second
        super().__init__(f"Duplicate keyword '{keyword}' ('{first}' and '{second}')")
