class LinkPulseError(Exception):
    """Base class for LinkPulse errors."""


class InvalidUrlError(LinkPulseError):
    """Raised when a submitted URL fails validation."""


class LinkNotFoundError(LinkPulseError):
    """Raised when no link has the requested id."""


class EnrichmentError(LinkPulseError):
    """Raised when the enrichment model call fails. Never leaves the adapter."""
