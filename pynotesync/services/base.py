"""Base class for remote-backed services."""


class BaseService:
    """Holds the service root URL and the HTTP session."""

    def __init__(self, service_root: str, session) -> None:
        self._service_root: str = service_root.rstrip("/")
        self._session = session

    @property
    def service_root(self) -> str:
        """The service root URL."""
        return self._service_root

    @property
    def session(self):
        """The underlying HTTP session."""
        return self._session
