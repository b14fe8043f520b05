from rest_api.core.abstract_factory import TypeAbstractFactory
from rest_api.core.logging import configure_logging

__all__ = [
    "TypeAbstractFactory",
    "configure_logging",
]
