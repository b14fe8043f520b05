from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Iterable

from rest_api.core.abstract_factory import TypeAbstractFactory
from rest_api.models import TransportResponse
from rest_api.transport.base import TransportEngine

if TYPE_CHECKING:
    from rest_api.api import RestApi


class InterceptorType(str, Enum):
    LOGGING = "logging"


class RestApiInterceptor(ABC):
    """
    Transforms a received response before it is normalized and returned
    to the caller. An interceptor may replace, augment or pass the response
    through unchanged. It receives the RestApi that issued the call and the
    transport that is active for it, so it can issue follow-up requests.
    """

    @abstractmethod
    async def intercept_after_response(
        self,
        api: RestApi,
        transport: TransportEngine,
        response: TransportResponse | None,
    ) -> TransportResponse | None: ...


class InterceptorFactory(TypeAbstractFactory[InterceptorType, RestApiInterceptor]):
    """Registry for RestApiInterceptor components"""
    ...


async def apply_interceptors(
    api: RestApi,
    transport: TransportEngine,
    response: TransportResponse | None,
    interceptors: Iterable[RestApiInterceptor],
) -> TransportResponse | None:
    """
    Run the interceptors strictly in sequence, each receiving the
    previous one's output.
    """
    for interceptor in interceptors:
        response = await interceptor.intercept_after_response(api, transport, response)
    return response


@InterceptorFactory.register(InterceptorType.LOGGING)
class LoggingInterceptor(RestApiInterceptor):
    """
    Observes every response passing through the chain and passes it on unchanged.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger(self.__class__.__name__)

    async def intercept_after_response(
        self,
        api: RestApi,
        transport: TransportEngine,
        response: TransportResponse | None,
    ) -> TransportResponse | None:
        if response is None:
            self._logger.info("<- FAILED %s: no response", api.base_url)
        else:
            self._logger.info("<- %s %s", response.status, api.base_url)
        return response
