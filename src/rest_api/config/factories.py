from abc import ABC, abstractmethod
from typing import Any, Callable

from rest_api.api import RestApi
from rest_api.auth import StaticTokenProvider, TokenManager
from rest_api.config.models import (
    AiohttpEngineConfig,
    AuthConfigModel,
    BasicAuthConfig,
    BearerTokenConfig,
    InterceptorConfigModel,
    RestApiConfig,
)
from rest_api.headers import (
    BasicAuthHeaderProvider,
    BearerTokenHeaderProvider,
    HeaderProvider,
    StaticHeaderProvider,
)
from rest_api.interceptors import InterceptorFactory, InterceptorType, RestApiInterceptor
from rest_api.logger import RestApiLogger
from rest_api.transport.base import TransportEngine, TransportEngineType
from rest_api.transport.engine import TransportEngineFactory


class RuntimeFactory(ABC):

    @staticmethod
    @abstractmethod
    def build_factory(cfg: Any, *args, **kwargs) -> Callable[[], Any]: ...


class TransportRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(cfg: AiohttpEngineConfig) -> Callable[[], TransportEngine]:

        def factory() -> TransportEngine:
            return TransportEngineFactory.create(
                TransportEngineType(cfg.type), **cfg.to_runtime_args()
            )

        return factory


class InterceptorRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_factory(cfg: InterceptorConfigModel) -> Callable[[], RestApiInterceptor]:

        def factory() -> RestApiInterceptor:
            return InterceptorFactory.create(
                InterceptorType(cfg.type), **cfg.to_runtime_args()
            )

        return factory

    @staticmethod
    def build_all(cfgs: list[InterceptorConfigModel]) -> list[RestApiInterceptor]:
        return [InterceptorRuntimeFactory.build_factory(cfg)() for cfg in cfgs]


class HeaderRuntimeFactory(RuntimeFactory):

    @staticmethod
    def build_auth_provider(cfg: AuthConfigModel) -> HeaderProvider | None:
        if isinstance(cfg, BasicAuthConfig):
            return BasicAuthHeaderProvider(cfg.username, cfg.password)

        if isinstance(cfg, BearerTokenConfig):
            manager = TokenManager(StaticTokenProvider(cfg.token), refresh_margin=cfg.refresh_margin)
            return BearerTokenHeaderProvider(manager)

        return None

    @staticmethod
    def build_factory(cfg: RestApiConfig) -> Callable[[], list[HeaderProvider]]:

        def factory() -> list[HeaderProvider]:
            providers: list[HeaderProvider] = []
            if cfg.headers:
                providers.append(StaticHeaderProvider(cfg.headers))

            auth_provider = HeaderRuntimeFactory.build_auth_provider(cfg.auth)
            if auth_provider is not None:
                providers.append(auth_provider)

            return providers

        return factory


def build_rest_api(
    cfg: RestApiConfig,
    logger: RestApiLogger | None = None,
    **hooks: Any,
) -> RestApi:
    """
    Assemble a RestApi from a validated config. Extra keyword arguments
    (codec, on_response, error_handler) are passed to RestApi unchanged.

    With shared_transport enabled the returned RestApi holds one engine as
    its transport override; the caller enters and exits it, e.g.
    `async with api.transport_override: ...`.
    """
    transport_factory = TransportRuntimeFactory.build_factory(cfg.transport)

    return RestApi(
        base_url=cfg.base_url,
        default_header_providers=HeaderRuntimeFactory.build_factory(cfg)(),
        logger=logger,
        transport_override=transport_factory() if cfg.shared_transport else None,
        timeout=cfg.timeout,
        default_interceptors=InterceptorRuntimeFactory.build_all(cfg.interceptors),
        transport_factory=transport_factory,
        **hooks,
    )
