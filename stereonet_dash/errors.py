"""Typed errors raised by the stereonet package."""


class StereonetError(Exception):
    """Base error for the package."""


class StyleNotFoundError(StereonetError, KeyError):
    """A style class name was looked up but never registered."""

    def __str__(self):
        return Exception.__str__(self)


class InvalidRepresentationError(StereonetError, ValueError):
    """Plane representation mode is neither 'arc' nor 'pole'."""


class ConfigurationError(StereonetError):
    """The stereonet cannot be built from the given options."""


class DataFormatError(StereonetError, ValueError):
    """Tabular measurement input is missing required columns."""
