from .dto import UserOut, WithdrawIn, WithdrawOut
from .service import IdentityService

__all__ = ["IdentityService", "UserOut", "WithdrawIn", "WithdrawOut"]
