# app/core/errors.py


class PanchangamError(Exception):
    """Base error."""


class InvalidLocation(PanchangamError, ValueError):
    """Latitude/longitude out of range, or a location with no usable daylight interval."""


class InvalidTimezone(PanchangamError, ValueError):
    """Timezone identifier could not be resolved."""


class EphemerisUnavailable(PanchangamError):
    """Raised when the ephemeris provider cannot answer (e.g. no sunrise during polar night)."""


class EventNotFound(PanchangamError):
    """Raised by the solver when no crossing is bracketed within the search horizon."""
