"""Exception types raised by Ocean World."""


class OceanWorldError(Exception):
    """Base class for all Ocean World errors."""


class SurfaceError(OceanWorldError):
    """
    Drawing surface could not be acquired or became unusable.

    Raised at construction when the surface is missing or has no drawing
    context, and from the next frame if the context disappears mid-session.
    """


class ConfigurationError(OceanWorldError, ValueError):
    """A configuration value is outside its domain."""
