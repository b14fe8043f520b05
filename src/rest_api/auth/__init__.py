from rest_api.auth.token import StaticTokenProvider, Token, TokenProvider
from rest_api.auth.token_manager import TokenManager

__all__ = [
    "StaticTokenProvider",
    "Token",
    "TokenProvider",
    "TokenManager",
]
