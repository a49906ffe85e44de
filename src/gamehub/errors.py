"""Domain errors raised by services and mapped to HTTP responses at the edge."""


class GameHubError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationFailed(GameHubError):
    """Malformed or missing input."""

    status_code = 400


class NotAuthenticated(GameHubError):
    """No identity supplied with the request."""

    status_code = 401


class NotFound(GameHubError):
    status_code = 404


class Conflict(GameHubError):
    """The write would break a uniqueness rule (e.g. username taken)."""

    status_code = 409


class StorageError(GameHubError):
    """The database failed; the message is safe to show to clients."""

    status_code = 500
