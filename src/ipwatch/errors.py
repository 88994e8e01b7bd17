"""Base exceptions for ipwatch."""


class IpWatchError(Exception):
    """Base exception for all ipwatch errors."""

    pass


class ConfigError(IpWatchError):
    """Configuration is invalid."""

    pass


class FetchError(IpWatchError):
    """External IP lookup failed."""

    pass


class TransportError(FetchError):
    """Request failed before a usable response arrived."""

    pass


class StatusError(FetchError):
    """Endpoint answered with a non-2xx status."""

    def __init__(self, status: int):
        super().__init__(f"HTTP status {status}")
        self.status = status


class ExhaustedRetriesError(FetchError):
    """Every attempt in the retry budget failed.

    Attributes:
        attempts: Total number of attempts made.
        last_error: Failure of the final attempt.
    """

    def __init__(self, attempts: int, last_error: FetchError):
        super().__init__(f"failed after {attempts} attempts: {last_error}")
        self.attempts = attempts
        self.last_error = last_error
