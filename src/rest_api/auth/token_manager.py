import asyncio
import logging

from rest_api.auth.token import Token, TokenProvider


class TokenManager:
    """
    Asynchronous token manager responsible for acquiring and caching a single
    access token from a given TokenProvider.

    Core responsibilities:
      • Hold the current Token instance.
      • Lazily refresh the token when it is missing, expired, or within a
        configured refresh margin.
      • Serialize concurrent refresh attempts using an asyncio.Lock so multiple
        callers don't all trigger separate token requests.
      • Provide convenience methods for getting the Token or just its string
        value, and for forcing a refresh or invalidating the cached token.

    TokenManager does not own any event loop; its coroutines are awaited
    inline by header providers on the caller's loop.
    """

    def __init__(self, provider: TokenProvider, refresh_margin: int = 60) -> None:
        self.provider = provider
        self._refresh_margin = refresh_margin
        self._token: Token | None = None
        self._lock = asyncio.Lock()
        self._logger = logging.getLogger(self.__class__.__name__)

    def _needs_refresh(self) -> bool:
        return (
            self._token is None
            or self._token.is_expired
            or self._token.will_expire_within(self._refresh_margin)
        )

    async def _refresh_token(self) -> Token:
        # Fast path - token exists and is not near expiring.
        if not self._needs_refresh():
            return self._token

        async with self._lock:
            if self._needs_refresh():
                self._token = await self.provider.get_token()
                self._logger.debug(
                    "Refreshed token from %s", self.provider.__class__.__name__
                )

        return self._token

    async def get_token(self) -> Token:
        return await self._refresh_token()

    async def get_token_value(self) -> str:
        token = await self._refresh_token()
        return token.token_value

    async def force_refresh(self) -> Token:
        async with self._lock:
            self._token = await self.provider.get_token()
            return self._token

    def invalidate(self) -> None:
        self._token = None
