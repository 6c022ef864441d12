"""Library exceptions."""


class PyNoteSyncException(Exception):
    """Generic pynotesync exception."""


class AccessDeniedError(PyNoteSyncException):
    """No owner identity was supplied; the session cannot persist anything."""


class ConfigError(PyNoteSyncException):
    """Missing or invalid configuration value."""

    def __init__(self, key: str, message: str = ""):
        super().__init__(message or f"Missing configuration value: {key}")
        self.key = key
