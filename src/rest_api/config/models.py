from pathlib import Path
from typing import Annotated, Any, Literal, Union
from pydantic import BaseModel, Field, field_validator


class TlsConfig(BaseModel):
    enabled: bool = False
    verify: bool = True
    ca_bundle: Path | None = None
    client_cert: Path | None = None
    client_key: Path | None = None


class TcpConnectionConfig(BaseModel):
    limit: int = 100
    limit_per_host: int = 0
    ttl_dns_cache: int = 300
    force_close: bool = False
    enable_cleanup_closed: bool = True
    tls: TlsConfig | None = None


class AiohttpEngineConfig(BaseModel):
    """Config for the aiohttp transport engine"""
    type: Literal["aiohttp"] = "aiohttp"
    base_timeout: float | None = None
    tcp_connection: TcpConnectionConfig = Field(default_factory=TcpConnectionConfig)

    def to_runtime_args(self) -> dict[str, Any]:
        return {
            "connector_config": self.tcp_connection,
            "base_timeout": self.base_timeout,
        }


class AuthConfigModel(BaseModel):
    """Base config for all auth types."""

    type: str

    model_config = {"frozen": True}


class NoAuthConfig(AuthConfigModel):
    type: Literal["none"] = "none"


class BasicAuthConfig(AuthConfigModel):
    type: Literal["basic"] = "basic"
    username: str
    password: str


class BearerTokenConfig(AuthConfigModel):
    type: Literal["bearer"] = "bearer"
    token: str
    refresh_margin: int = 60


AuthConfigUnion = Annotated[
    Union[
        NoAuthConfig,
        BasicAuthConfig,
        BearerTokenConfig,
    ],
    Field(discriminator="type"),
]


class InterceptorConfigModel(BaseModel):
    """Interceptors that take no runtime arguments"""
    type: Literal["logging"]

    def to_runtime_args(self) -> dict[str, Any]:
        return {}


class RestApiConfig(BaseModel):
    """Configuration for a RestApi instance"""

    model_config = {"frozen": True}

    base_url: str = Field(..., description="Prepended to every endpoint")
    timeout: float = Field(default=30.0, gt=0, description="Dispatch timeout in seconds")
    headers: dict[str, str] = Field(default_factory=dict, description="Static default headers")
    auth: AuthConfigUnion = Field(default_factory=NoAuthConfig)
    interceptors: list[InterceptorConfigModel] = Field(default_factory=list)
    transport: AiohttpEngineConfig = Field(default_factory=AiohttpEngineConfig)
    shared_transport: bool = Field(
        default=False,
        description="Reuse one transport engine for every call instead of one per call",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("base_url must not be empty")
        return v
