"""Exception hierarchy shared by the engine and its storage layer."""

from typing import List, Optional


class DpeLinkError(Exception):
    """Base class for every error raised by dpelink."""
    pass


class RepositoryError(DpeLinkError):
    """Raised when the candidate registry or a link store call fails."""
    pass


class UnsupportedOpportunityTypeError(DpeLinkError):
    """Raised when linking is requested for a type with no store binding."""

    def __init__(self, opportunity_type):
        self.opportunity_type = opportunity_type
        super().__init__(f"Unsupported opportunity type: {opportunity_type!r}")


class InvalidQueryError(DpeLinkError):
    """Raised when address query data fails validation."""

    def __init__(self, errors: Optional[List[str]] = None):
        self.errors = errors or []
        super().__init__("Invalid address query: " + "; ".join(self.errors))


class ConfigError(DpeLinkError):
    """Raised when an environment setting cannot be parsed."""
    pass
