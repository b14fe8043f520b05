from __future__ import annotations
from enum import Enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Mapping, Sequence

if TYPE_CHECKING:
    from rest_api.headers import HeaderProvider
    from rest_api.interceptors import RestApiInterceptor


class RequestType(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"

    @property
    def sends_body(self) -> bool:
        return self in (RequestType.POST, RequestType.PUT)


@dataclass(frozen=True)
class CallOptions:
    """
    Optional per-call settings for a single verb call on RestApi.
    • body: structured value serialized by the body codec (POST/PUT only)
    • query_parameters: appended to the URL in insertion order
    • headers: HeaderProviders consulted after the default providers
    • interceptors: when set, replaces the default interceptors for this call
    """
    body: Any | None = None
    query_parameters: Mapping[str, str] | None = None
    headers: Sequence[HeaderProvider] = ()
    interceptors: Sequence[RestApiInterceptor] | None = None

    def __post_init__(self) -> None:
        # lists are accepted at construction but stored as tuples
        object.__setattr__(self, "headers", tuple(self.headers or ()))
        if self.interceptors is not None:
            object.__setattr__(self, "interceptors", tuple(self.interceptors))


@dataclass(frozen=True)
class RestApiRequest:
    """
    Fully specified description of one call. Created per call and
    discarded once the call has been dispatched.
    """
    request_type: RequestType
    endpoint: str
    body: Any | None = None
    query_parameters: Mapping[str, str] | None = None
    header_providers: tuple[HeaderProvider, ...] = ()

    @classmethod
    def from_options(
        cls,
        request_type: RequestType,
        endpoint: str,
        options: CallOptions,
    ) -> "RestApiRequest":
        query = dict(options.query_parameters) if options.query_parameters else None
        return cls(
            request_type=request_type,
            endpoint=endpoint,
            body=options.body,
            query_parameters=query,
            header_providers=tuple(options.headers),
        )


@dataclass(frozen=True)
class Header:
    name: str
    value: str


@dataclass(frozen=True)
class RestResponse:
    """
    Normalized result of one successful call.
    • status_code: HTTP status code
    • body: parsed body, None when the raw body was empty or absent
    • headers: one Header per raw header entry
    • raw_response: the TransportResponse the RestResponse was built from
    """
    status_code: int
    body: Any | None
    headers: frozenset[Header] = field(default_factory=frozenset)
    raw_response: TransportResponse | None = field(default=None, compare=False, repr=False)

    def header_values(self, name: str) -> list[str]:
        """Return every value received for a header name, case-insensitively."""
        lowered = name.lower()
        return sorted(h.value for h in self.headers if h.name.lower() == lowered)


@dataclass
class TransportRequest:
    """
    Wire-level HTTP request container for the Transport Layer.
    The url is fully built and encoded; body is already serialized text.
    """
    method: str
    url: str
    headers: dict[str, str]
    body: str | None = None


@dataclass
class TransportResponse:
    """
    Wire-level HTTP response container for the Transport Layer.
    This data structure allows for the decoupling of the HTTP
    engine from the orchestration of a call.
    """
    status: int
    headers: Mapping[str, str] | None
    body: bytes | None
