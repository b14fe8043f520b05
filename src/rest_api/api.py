import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable, NoReturn, Sequence

from rest_api.codec import BodyCodec, JsonBodyCodec
from rest_api.errors import BodyParseError, NoConnectionError, NoResponseError, RestApiError
from rest_api.headers import HeaderProvider, compose_headers
from rest_api.interceptors import RestApiInterceptor, apply_interceptors
from rest_api.logger import RestApiLogger, StdlibRestApiLogger
from rest_api.models import (
    CallOptions,
    Header,
    RequestType,
    RestApiRequest,
    RestResponse,
    TransportRequest,
    TransportResponse,
)
from rest_api.transport.base import TransportEngine
from rest_api.transport.engine import AiohttpEngine
from rest_api.url import build_query_parameters, build_url


DEFAULT_TIMEOUT = 30.0

ErrorHandler = Callable[[RestApiError], None]
ResponseListener = Callable[[RestResponse], None]
TransportFactory = Callable[[], TransportEngine]


def raise_error(error: RestApiError) -> NoReturn:
    """Default error strategy: signal the error to the caller."""
    raise error


class RestApi:
    """
    Provides generic GET, POST, PUT and DELETE REST requests against a single
    base URL. Every call runs the same steps:
    • build the URL from base_url, endpoint and query parameters
    • compose headers from the default providers, then the per-call providers
    • dispatch through the transport, bounded by the timeout
    • run the interceptor chain over the raw response
    • normalize the raw response into a RestResponse

    All configuration is fixed at construction, so concurrent calls on one
    instance share nothing mutable.

    By default a fresh transport is created for each call and closed when
    the call finishes. When transport_override is given, every call reuses
    it and its lifecycle belongs to the caller.

    Every failure goes through the error hook exactly once: the error is
    logged, then handed to error_handler. If error_handler returns instead
    of raising, the original error is raised.
    """

    build_query_parameters = staticmethod(build_query_parameters)

    def __init__(
        self,
        base_url: str,
        default_header_providers: Sequence[HeaderProvider] | None = None,
        logger: RestApiLogger | None = None,
        transport_override: TransportEngine | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        default_interceptors: Sequence[RestApiInterceptor] | None = None,
        codec: BodyCodec | None = None,
        transport_factory: TransportFactory | None = None,
        on_response: ResponseListener | None = None,
        error_handler: ErrorHandler | None = None,
    ) -> None:
        if not base_url:
            raise ValueError("base_url must be a non-empty string")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self._base_url = base_url
        self._default_header_providers = tuple(default_header_providers or ())
        self._logger = logger or StdlibRestApiLogger()
        self._transport_override = transport_override
        self._timeout = timeout
        self._default_interceptors = tuple(default_interceptors or ())
        self._codec = codec or JsonBodyCodec()
        self._transport_factory = transport_factory or AiohttpEngine
        self._on_response = on_response
        self._error_handler = error_handler or raise_error

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_header_providers(self) -> tuple[HeaderProvider, ...]:
        return self._default_header_providers

    @property
    def default_interceptors(self) -> tuple[RestApiInterceptor, ...]:
        return self._default_interceptors

    @property
    def logger(self) -> RestApiLogger:
        return self._logger

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def transport_override(self) -> TransportEngine | None:
        return self._transport_override

    async def get(self, endpoint: str, options: CallOptions | None = None) -> RestResponse:
        """GET base_url + endpoint. A body in options is not sent."""
        return await self.request(RequestType.GET, endpoint, options)

    async def post(self, endpoint: str, options: CallOptions | None = None) -> RestResponse:
        """POST base_url + endpoint with the serialized options.body, if any."""
        return await self.request(RequestType.POST, endpoint, options)

    async def put(self, endpoint: str, options: CallOptions | None = None) -> RestResponse:
        """PUT base_url + endpoint with the serialized options.body, if any."""
        return await self.request(RequestType.PUT, endpoint, options)

    async def delete(self, endpoint: str, options: CallOptions | None = None) -> RestResponse:
        """DELETE base_url + endpoint. A body in options is not sent."""
        return await self.request(RequestType.DELETE, endpoint, options)

    async def request(
        self,
        request_type: RequestType,
        endpoint: str,
        options: CallOptions | None = None,
    ) -> RestResponse:
        options = options or CallOptions()
        request = RestApiRequest.from_options(request_type, endpoint, options)
        return await self._make_request(request, options.interceptors)

    def build_url(self, endpoint: str, query_parameters: dict[str, str] | None = None) -> str:
        return build_url(self._base_url, endpoint, query_parameters)

    async def _make_request(
        self,
        request: RestApiRequest,
        interceptors: Sequence[RestApiInterceptor] | None,
    ) -> RestResponse:
        url = self.build_url(request.endpoint, request.query_parameters)

        # defaults first so per-call providers can override them
        headers = await compose_headers(
            self._default_header_providers, request.header_providers
        )

        self._logger.log_request(
            request.request_type, url, headers=headers, body=request.body
        )

        transport_request = TransportRequest(
            method=request.request_type.value,
            url=url,
            headers=headers,
            body=self._serialize_body(request),
        )

        chain = self._default_interceptors if interceptors is None else interceptors

        async with self._acquire_transport() as transport:
            response = await self._dispatch(transport, transport_request)
            self._logger.log_response(response)
            response = await apply_interceptors(self, transport, response, chain)

        return self._create_rest_response(response)

    @asynccontextmanager
    async def _acquire_transport(self) -> AsyncIterator[TransportEngine]:
        if self._transport_override is not None:
            yield self._transport_override
            return

        async with self._transport_factory() as transport:
            yield transport

    async def _dispatch(
        self,
        transport: TransportEngine,
        request: TransportRequest,
    ) -> TransportResponse | None:
        try:
            return await asyncio.wait_for(transport.send(request), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            self.handle_error(
                NoConnectionError(f"No response within {self._timeout}s: {request.method} {request.url}"),
                cause=e,
            )
        except OSError as e:
            self.handle_error(NoConnectionError(f"{type(e).__name__}: {e}"), cause=e)

    def _serialize_body(self, request: RestApiRequest) -> str | None:
        if not request.request_type.sends_body or request.body is None:
            return None

        try:
            return self._codec.serialize(request.body)
        except BodyParseError as e:
            self.handle_error(e)

    def _decode_body(self, body: bytes | str) -> object:
        if isinstance(body, bytes):
            try:
                body = body.decode("utf-8")
            except UnicodeDecodeError as e:
                raise BodyParseError(f"Body binary to string conversion error: {e}") from e
        return self._codec.parse(body)

    def _create_rest_response(self, response: TransportResponse | None) -> RestResponse:
        """Create a RestResponse from the raw TransportResponse."""
        if response is None:
            self.handle_error(NoResponseError())

        body = None
        if response.body:
            try:
                body = self._decode_body(response.body)
            except BodyParseError as e:
                self.handle_error(e)

        headers = frozenset(
            Header(name=str(name), value=str(value))
            for name, value in (response.headers or {}).items()
        )

        rest_response = RestResponse(
            status_code=response.status,
            body=body,
            headers=headers,
            raw_response=response,
        )

        if self._on_response is not None:
            self._on_response(rest_response)

        return rest_response

    def handle_error(self, error: RestApiError, cause: BaseException | None = None) -> NoReturn:
        """Log the error once, then signal it through the error strategy."""
        if cause is not None:
            error.__cause__ = cause

        self._logger.log_exception(error)
        self._error_handler(error)
        raise error
