from .dto import AuthTokenConfig, LoginIn, LogoutIn, RefreshIn, SignupIn, TokenPairOut
from .service import AuthService, strip_bearer

__all__ = [
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "RefreshIn",
    "SignupIn",
    "TokenPairOut",
    "strip_bearer",
]
