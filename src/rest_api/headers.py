import base64
from abc import ABC, abstractmethod
from typing import Iterable, Mapping

from rest_api.auth.token_manager import TokenManager


class HeaderProvider(ABC):
    """
    Contributes header entries to an outgoing request. Providers are
    consulted in order; a later provider overwrites an earlier one's
    entry for the same header name.
    """

    @abstractmethod
    async def get_headers(self) -> Mapping[str, str]: ...


async def compose_headers(
    default_providers: Iterable[HeaderProvider],
    call_providers: Iterable[HeaderProvider] | None = None,
) -> dict[str, str]:
    """
    Await the default providers, then the per-call providers, strictly
    in sequence and merge their contributions into one mapping.
    """
    headers: dict[str, str] = {}

    for provider in [*default_providers, *(call_providers or [])]:
        headers.update(await provider.get_headers())

    return headers


class StaticHeaderProvider(HeaderProvider):

    def __init__(self, headers: Mapping[str, str]) -> None:
        self._headers = dict(headers)

    async def get_headers(self) -> Mapping[str, str]:
        return dict(self._headers)


class BasicAuthHeaderProvider(HeaderProvider):

    def __init__(self, username: str, password: str) -> None:
        self.username = username
        self.password = password

    async def get_headers(self) -> Mapping[str, str]:
        raw_credentials = f"{self.username}:{self.password}"
        b64_credentials = base64.b64encode(raw_credentials.encode("utf-8")).decode("utf-8")
        return {"Authorization": f"Basic {b64_credentials}"}


class BearerTokenHeaderProvider(HeaderProvider):
    """
    Inject a bearer token into the Authorization header using an async token manager.
    """

    def __init__(self, token_manager: TokenManager) -> None:
        self.token_manager = token_manager

    async def get_headers(self) -> Mapping[str, str]:
        token_value = await self.token_manager.get_token_value()
        return {"Authorization": f"Bearer {token_value}"}
