"""Claim names and token types shared by the issuer and the verifier."""

from __future__ import annotations

from typing import Final

ACCESS_TOKEN_TYPE: Final[str] = "access"
SESSION_TOKEN_TYPE: Final[str] = "session"

TYPE_CLAIM: Final[str] = "type"
REQUIRED_CLAIMS: Final[list[str]] = ["sub", "exp", "iat", "jti", TYPE_CLAIM]
