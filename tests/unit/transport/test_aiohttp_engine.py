"""Unit tests for the aiohttp transport engine"""
import ssl
import aiohttp
import pytest
from aiohttp import ClientSession
from unittest.mock import AsyncMock, MagicMock, patch
from yarl import URL

from rest_api.config.models import TcpConnectionConfig, TlsConfig
from rest_api.models import TransportRequest
from rest_api.transport import AiohttpEngine, TransportEngineFactory, TransportEngineType
from tests.fixtures.transport import tcp_config_no_tls


def engine_with_session(mock_session: MagicMock) -> AiohttpEngine:
    engine = AiohttpEngine(connector_config=tcp_config_no_tls())
    engine._session = mock_session
    return engine


def mock_session_returning(response=None, error: BaseException | None = None) -> MagicMock:
    mock_cm = AsyncMock()
    if error is not None:
        mock_cm.__aenter__ = AsyncMock(side_effect=error)
    else:
        mock_cm.__aenter__ = AsyncMock(return_value=response)
    mock_cm.__aexit__ = AsyncMock(return_value=False)

    mock_session = MagicMock()
    mock_session.request = MagicMock(return_value=mock_cm)
    return mock_session


@pytest.mark.unit
@pytest.mark.transport
@pytest.mark.asyncio
class TestAiohttpEngineContextManager:
    """Tests for async context manager protocol"""

    async def test_aenter_creates_session(self):
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        async with engine as e:
            assert e is engine
            assert isinstance(engine.session, ClientSession)
            assert not engine.session.closed

    async def test_aexit_closes_session(self):
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        async with engine:
            session = engine.session

        assert session.closed
        assert engine._session is None

    async def test_engine_can_be_reentered(self):
        engine = AiohttpEngine()

        async with engine:
            pass
        async with engine:
            assert not engine.session.closed


@pytest.mark.unit
@pytest.mark.transport
@pytest.mark.asyncio
class TestSend:
    """Tests for send"""

    async def test_send_without_session_raises(self):
        """
        GIVEN an AiohttpEngine that was never entered
        WHEN send is called
        THEN it should raise ValueError (session not assigned)
        """
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        with pytest.raises(ValueError, match="ClientSession not assigned"):
            await engine.send(TransportRequest(method="GET", url="https://example.com", headers={}))

    async def test_send_returns_response_data(self):
        mock_response = AsyncMock()
        mock_response.status = 200
        mock_response.headers = {"Content-Type": "application/json"}
        mock_response.read = AsyncMock(return_value=b'{"ok": true}')
        engine = engine_with_session(mock_session_returning(mock_response))

        resp = await engine.send(
            TransportRequest(method="GET", url="https://example.com/x", headers={})
        )

        assert resp.status == 200
        assert resp.headers["Content-Type"] == "application/json"
        assert resp.body == b'{"ok": true}'

    async def test_send_passes_encoded_url_and_body(self):
        """
        GIVEN a TransportRequest with an already encoded URL
        WHEN send is called
        THEN aiohttp receives the URL marked as encoded plus headers and body
        """
        mock_response = AsyncMock()
        mock_response.status = 201
        mock_response.headers = {}
        mock_response.read = AsyncMock(return_value=b"")
        mock_session = mock_session_returning(mock_response)
        engine = engine_with_session(mock_session)

        await engine.send(
            TransportRequest(
                method="POST",
                url="https://example.com/items?q=a%20b",
                headers={"X-Custom": "value"},
                body='{"data": "payload"}',
            )
        )

        call_args = mock_session.request.call_args
        assert call_args[0][0] == "POST"
        url = call_args[0][1]
        assert isinstance(url, URL)
        assert str(url) == "https://example.com/items?q=a%20b"
        assert call_args.kwargs["headers"]["X-Custom"] == "value"
        assert call_args.kwargs["data"] == '{"data": "payload"}'

    async def test_connection_errors_become_connection_error(self):
        engine = engine_with_session(
            mock_session_returning(error=aiohttp.ClientConnectionError("Failed"))
        )

        with pytest.raises(ConnectionError, match="ClientConnectionError") as exc_info:
            await engine.send(TransportRequest(method="GET", url="https://example.com", headers={}))

        assert isinstance(exc_info.value.__cause__, aiohttp.ClientConnectionError)

    async def test_other_errors_propagate(self):
        engine = engine_with_session(mock_session_returning(error=RuntimeError("Boom")))

        with pytest.raises(RuntimeError, match="Boom"):
            await engine.send(TransportRequest(method="GET", url="https://example.com", headers={}))


@pytest.mark.unit
@pytest.mark.transport
class TestSSLContextCreation:
    """Tests for SSL context building"""

    @patch("rest_api.transport.engine.ssl.create_default_context")
    def test_build_ssl_context_creates_default_context(self, mock_create):
        mock_ctx = MagicMock(spec=ssl.SSLContext)
        mock_create.return_value = mock_ctx
        tls = TlsConfig(enabled=True, verify=True)
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        ctx = engine._build_ssl_context(tls)

        mock_create.assert_called_once_with(purpose=ssl.Purpose.SERVER_AUTH)
        assert ctx is mock_ctx

    @patch("rest_api.transport.engine.ssl.create_default_context")
    def test_build_ssl_context_with_verify_disabled(self, mock_create):
        mock_create.return_value = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
        tls = TlsConfig(enabled=True, verify=False)
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        ctx = engine._build_ssl_context(tls)

        assert ctx.verify_mode == ssl.CERT_NONE
        assert ctx.check_hostname is False

    @patch("rest_api.transport.engine.ssl.create_default_context")
    def test_build_ssl_context_loads_client_cert(self, mock_create, tmp_path):
        mock_ctx = MagicMock(spec=ssl.SSLContext)
        mock_create.return_value = mock_ctx
        tls = TlsConfig(
            enabled=True,
            ca_bundle=tmp_path / "ca.pem",
            client_cert=tmp_path / "client.pem",
            client_key=tmp_path / "client.key",
        )
        engine = AiohttpEngine(connector_config=tcp_config_no_tls())

        engine._build_ssl_context(tls)

        mock_ctx.load_verify_locations.assert_called_once_with(cafile=str(tmp_path / "ca.pem"))
        mock_ctx.load_cert_chain.assert_called_once_with(
            certfile=str(tmp_path / "client.pem"),
            keyfile=str(tmp_path / "client.key"),
        )

    @patch("rest_api.transport.engine.TCPConnector")
    def test_tls_disabled_builds_connector_without_ssl(self, mock_connector):
        engine = AiohttpEngine()
        cfg = TcpConnectionConfig(limit=5, tls=TlsConfig(enabled=False))

        engine._build_tcp_connector(cfg)

        kwargs = mock_connector.call_args.kwargs
        assert kwargs["limit"] == 5
        assert "ssl" not in kwargs
        assert "tls" not in kwargs

    @patch("rest_api.transport.engine.TCPConnector")
    def test_tls_enabled_passes_ssl_context(self, mock_connector):
        engine = AiohttpEngine()
        cfg = TcpConnectionConfig(tls=TlsConfig(enabled=True, verify=False))

        engine._build_tcp_connector(cfg)

        assert isinstance(mock_connector.call_args.kwargs["ssl"], ssl.SSLContext)


@pytest.mark.unit
@pytest.mark.transport
class TestTransportEngineFactory:

    def test_aiohttp_registered(self):
        assert TransportEngineType.AIOHTTP in TransportEngineFactory.list_keys()

    def test_create_passes_arguments(self):
        engine = TransportEngineFactory.create(
            TransportEngineType.AIOHTTP, connector_config=tcp_config_no_tls(), base_timeout=5
        )

        assert isinstance(engine, AiohttpEngine)
        assert engine._timeout.total == 5
