class InvariantViolation(Exception):
    """Raised when site content breaks a structural rule."""


class InvalidContentFormat(ValueError):
    """Raised when interchange text cannot be turned into site content."""
