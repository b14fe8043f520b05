import ssl
from types import TracebackType
from typing_extensions import Self
from aiohttp import ClientConnectionError, ClientSession, ClientTimeout, TCPConnector
from yarl import URL

from rest_api.config.models import TcpConnectionConfig, TlsConfig
from rest_api.core.abstract_factory import TypeAbstractFactory
from rest_api.models import TransportRequest, TransportResponse
from rest_api.transport.base import TransportEngineType, TransportEngine


class TransportEngineFactory(TypeAbstractFactory[TransportEngineType, TransportEngine]):
    pass


@TransportEngineFactory.register(TransportEngineType.AIOHTTP)
class AiohttpEngine(TransportEngine):
    """
    TransportEngine adapter that uses aiohttp.ClientSession to make HTTP requests.
    """

    def __init__(
        self,
        connector_config: TcpConnectionConfig | None = None,
        base_timeout: float | None = None,
    ) -> None:
        self._connector_config = connector_config or TcpConnectionConfig()
        # The orchestrator bounds dispatch itself; this only caps the session.
        self._timeout = ClientTimeout(total=base_timeout)

        self._session: ClientSession | None = None

    @property
    def session(self) -> ClientSession:
        if self._session is None:
            raise ValueError(f"{self.__class__.__name__} aiohttp ClientSession not assigned")
        return self._session

    @session.setter
    def session(self, session: ClientSession | None) -> None:
        self._session = session

    def _build_ssl_context(self, cfg: TlsConfig) -> ssl.SSLContext:
        context = ssl.create_default_context(purpose=ssl.Purpose.SERVER_AUTH)

        if not cfg.verify:
            context.check_hostname = False
            context.verify_mode = ssl.CERT_NONE

        if cfg.ca_bundle:
            context.load_verify_locations(cafile=str(cfg.ca_bundle))

        if cfg.client_cert:
            context.load_cert_chain(
                certfile=str(cfg.client_cert),
                keyfile=str(cfg.client_key) if cfg.client_key else None,
            )

        return context

    def _build_tcp_connector(self, cfg: TcpConnectionConfig) -> TCPConnector:
        kwargs = cfg.model_dump(exclude={"tls"})

        if cfg.tls and cfg.tls.enabled:
            kwargs["ssl"] = self._build_ssl_context(cfg.tls)

        return TCPConnector(**kwargs)

    async def __aenter__(self) -> Self:
        connector = self._build_tcp_connector(self._connector_config)
        self.session = ClientSession(connector=connector, timeout=self._timeout)

        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if self._session is not None and not self._session.closed:
            await self._session.close()
        self.session = None

    async def send(self, request: TransportRequest) -> TransportResponse:
        session = self.session

        try:
            async with session.request(
                request.method,
                URL(request.url, encoded=True),
                headers=request.headers,
                data=request.body,
            ) as response:
                body = await response.read()
                return TransportResponse(
                    status=response.status,
                    headers=response.headers,
                    body=body,
                )
        except ClientConnectionError as e:
            raise ConnectionError(f"{type(e).__name__}: {e}") from e
