from rest_api.transport.base import TransportEngine, TransportEngineType
from rest_api.transport.engine import AiohttpEngine, TransportEngineFactory

__all__ = [
    "TransportEngine",
    "TransportEngineType",
    "AiohttpEngine",
    "TransportEngineFactory",
]
