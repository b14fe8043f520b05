class RestApiError(Exception):
    """Base class for every error a RestApi call can terminate with."""

    phase: str = "unknown"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.__class__.__doc__ or self.__class__.__name__
        super().__init__(self.message)


class NoConnectionError(RestApiError):
    """The transport could not reach the server or the call timed out."""

    phase = "dispatch"


class NoResponseError(RestApiError):
    """The transport produced no response object."""

    phase = "normalize"


class BodyParseError(RestApiError):
    """A request or response body is not valid structured data."""

    phase = "normalize"

    def __init__(self, message: str | None = None, phase: str | None = None) -> None:
        super().__init__(message)
        if phase is not None:
            self.phase = phase
