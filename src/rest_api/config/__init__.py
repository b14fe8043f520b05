from rest_api.config.models import (
    AiohttpEngineConfig,
    AuthConfigUnion,
    BasicAuthConfig,
    BearerTokenConfig,
    InterceptorConfigModel,
    NoAuthConfig,
    RestApiConfig,
    TcpConnectionConfig,
    TlsConfig,
)
from rest_api.config.loader import ConfigLoader
from rest_api.config.preprocessor import (
    ConfigPreprocessor,
    ConfigValue,
    EnvVarPreprocessor,
)

__all__ = [
    "AiohttpEngineConfig",
    "AuthConfigUnion",
    "BasicAuthConfig",
    "BearerTokenConfig",
    "InterceptorConfigModel",
    "NoAuthConfig",
    "RestApiConfig",
    "TcpConnectionConfig",
    "TlsConfig",
    "ConfigLoader",
    "ConfigPreprocessor",
    "ConfigValue",
    "EnvVarPreprocessor",
]
