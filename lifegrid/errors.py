"""Exception hierarchy shared by the library, the CLI and the web app."""


class LifegridError(Exception):
    """Base class for lifegrid errors"""


class ValidationError(LifegridError, ValueError):
    """Settings or input outside the accepted schema (recoverable, 4xx)."""


class InvalidTokenError(ValidationError):
    """Token could not be decoded into valid settings."""


class RenderError(LifegridError, RuntimeError):
    """Raster surface could not be allocated or drawn (5xx, not retried)."""
