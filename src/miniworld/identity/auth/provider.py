"""Authentication provider port.

Sign-in, passwords and token issuance belong to an external identity
service. The storefront only asks it who a bearer token belongs to.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class AuthenticatedUser:
    user_id: str
    email: str


class AuthProvider(ABC):
    @abstractmethod
    def authenticate(self, token: str) -> AuthenticatedUser | None:
        """Return the user owning ``token``, or ``None`` if it is not valid."""
        ...


class StaticTokenAuthProvider(AuthProvider):
    """Resolves tokens from a fixed ``token -> email`` table.

    Used in development and tests, configured from ``ADMIN_API_TOKENS``.
    """

    def __init__(self, tokens: dict[str, str] | None = None):
        self._tokens = {token: email.lower() for token, email in (tokens or {}).items()}

    def register(self, token: str, email: str) -> None:
        self._tokens[token] = email.lower()

    def authenticate(self, token: str) -> AuthenticatedUser | None:
        email = self._tokens.get(token)
        if email is None:
            return None
        return AuthenticatedUser(user_id=email, email=email)
