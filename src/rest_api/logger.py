import logging
from typing import Any, Mapping, Protocol

from rest_api.errors import RestApiError
from rest_api.models import RequestType, TransportResponse


SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization"})


class RestApiLogger(Protocol):
    """
    Observer of a call's outgoing request, raw response and raised error.
    Implementations must not raise or alter control flow.
    """

    def log_request(
        self,
        request_type: RequestType,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any | None = None,
    ) -> None: ...

    def log_response(self, response: TransportResponse | None) -> None: ...

    def log_exception(self, error: RestApiError) -> None: ...


def mask_headers(headers: Mapping[str, str]) -> dict[str, str]:
    return {
        name: "***" if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


class StdlibRestApiLogger:
    """RestApiLogger that writes through a stdlib logging.Logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("rest_api")

    def log_request(
        self,
        request_type: RequestType,
        url: str,
        headers: Mapping[str, str] | None = None,
        body: Any | None = None,
    ) -> None:
        self._logger.info("-> %s %s", request_type.value, url)
        if headers:
            self._logger.debug("   headers: %s", mask_headers(headers))
        if body is not None:
            self._logger.debug("   body: %s", body)

    def log_response(self, response: TransportResponse | None) -> None:
        if response is None:
            self._logger.info("<- (no response)")
            return
        self._logger.info("<- %s", response.status)

    def log_exception(self, error: RestApiError) -> None:
        self._logger.error(
            "%s during %s: %s", type(error).__name__, error.phase, error.message
        )
