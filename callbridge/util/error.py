"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""


class DependencyInjectionError(UtilError):
    """Raised when providers cannot be resolved into a container."""
