from bookshop.services.auth.dto import AuthTokenConfig, LoginIn, TokenOut
from bookshop.services.auth.service import AuthService

__all__ = ["AuthService", "AuthTokenConfig", "LoginIn", "TokenOut"]
