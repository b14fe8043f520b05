from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Token:
    token_value: str
    expires_at: datetime | None = None

    def __post_init__(self) -> None:
        # naive expiry times are local time
        if self.expires_at is not None and self.expires_at.tzinfo is None:
            object.__setattr__(self, "expires_at", self.expires_at.astimezone(timezone.utc))

    @property
    def is_expired(self) -> bool:
        if self.expires_at is None:
            return False
        return datetime.now(timezone.utc) >= self.expires_at

    def seconds_until_expiration(self) -> float:
        if self.expires_at is not None:
            return (self.expires_at - datetime.now(timezone.utc)).total_seconds()
        return 0

    def will_expire_within(self, seconds: int) -> bool:
        if self.expires_at is None:
            return False
        return self.seconds_until_expiration() <= seconds


class TokenProvider(ABC):
    @abstractmethod
    async def get_token(self) -> Token: ...


class StaticTokenProvider(TokenProvider):
    """Serves a fixed, never-expiring token."""

    def __init__(self, token: str) -> None:
        self._token = token

    async def get_token(self) -> Token:
        return Token(token_value=self._token)
