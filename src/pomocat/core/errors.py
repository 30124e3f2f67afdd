"""Exception hierarchy shared by the timer core and its collaborators."""

from __future__ import annotations


class PomocatError(Exception):
    """Base class for all pomocat errors."""


class ConfigurationError(PomocatError):
    """A configuration value or file could not be used as given."""


class DisplaySurfaceError(PomocatError):
    """A display surface failed to measure or render content.

    Raised for missing or undecodable image files, unsupported
    capabilities (e.g. images on a terminal), and backend failures.
    """


class InvalidCommandError(PomocatError):
    """A command was issued in a state where it does not apply."""
