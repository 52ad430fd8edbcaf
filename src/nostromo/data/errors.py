"""Exceptions raised while loading definition data."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when a definition file is missing or is not valid JSON."""


class DataValidationError(DataError):
    """Raised when definition content has the wrong shape."""


class DataReferenceError(DataError):
    """Raised when a definition names a room or item that does not exist."""
