from rest_api.api import DEFAULT_TIMEOUT, RestApi, raise_error
from rest_api.codec import BodyCodec, JsonBodyCodec
from rest_api.config.factories import build_rest_api
from rest_api.errors import (
    BodyParseError,
    NoConnectionError,
    NoResponseError,
    RestApiError,
)
from rest_api.headers import (
    BasicAuthHeaderProvider,
    BearerTokenHeaderProvider,
    HeaderProvider,
    StaticHeaderProvider,
    compose_headers,
)
from rest_api.interceptors import (
    InterceptorFactory,
    InterceptorType,
    LoggingInterceptor,
    RestApiInterceptor,
    apply_interceptors,
)
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
from rest_api.url import build_query_parameters, build_url

__all__ = [
    "DEFAULT_TIMEOUT",
    "RestApi",
    "raise_error",
    "BodyCodec",
    "JsonBodyCodec",
    "build_rest_api",
    "BodyParseError",
    "NoConnectionError",
    "NoResponseError",
    "RestApiError",
    "BasicAuthHeaderProvider",
    "BearerTokenHeaderProvider",
    "HeaderProvider",
    "StaticHeaderProvider",
    "compose_headers",
    "InterceptorFactory",
    "InterceptorType",
    "LoggingInterceptor",
    "RestApiInterceptor",
    "apply_interceptors",
    "RestApiLogger",
    "StdlibRestApiLogger",
    "CallOptions",
    "Header",
    "RequestType",
    "RestApiRequest",
    "RestResponse",
    "TransportRequest",
    "TransportResponse",
    "build_query_parameters",
    "build_url",
]
