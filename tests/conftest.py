import pytest

from tests.fixtures.api import BASE_URL, RecordingLogger
from tests.fixtures.configs import full_rest_api_config, minimal_rest_api_config
from tests.fixtures.transport import FakeTransportEngine, json_response


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def fake_transport() -> FakeTransportEngine:
    return FakeTransportEngine(response=json_response())


@pytest.fixture
def base_url() -> str:
    return BASE_URL


__all__ = [
    'full_rest_api_config',
    'minimal_rest_api_config',
]
