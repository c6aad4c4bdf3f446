"""Exception types raised by the zone resolution core.

Expected business outcomes (out of radius, zone not configured, ...) are never
raised; they come back as a ``ZoneResolution`` with ``ok=False``. Only the two
conditions below escape as exceptions.
"""

from __future__ import annotations


class ZoneConfigUnavailableError(ConnectionError):
    """The restaurant configuration store could not be read."""


class ZoneComputationError(RuntimeError):
    """The grid math reached a state that should be impossible."""
