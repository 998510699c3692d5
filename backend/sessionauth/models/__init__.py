from sessionauth.models.account import Account
from sessionauth.models.session_credential import SessionCredential

__all__ = [
    "Account",
    "SessionCredential",
]
