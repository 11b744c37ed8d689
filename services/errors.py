class WellnessError(Exception):
    """Base class for errors raised by the wellness services."""


class InvalidRecordError(WellnessError, TypeError):
    """Raised when a value has the wrong shape entirely, e.g. a string where a
    list of history entries is expected.

    Missing or out-of-range fields never raise; they fall back to defaults.
    """
