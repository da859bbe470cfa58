class KickoffError(Exception):
    """Base error for the attendance app."""


class ValidationError(KickoffError):
    """Invalid input, raised before anything is written."""
