"""Identite cote client / Client-side identity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """Utilisateur courant et son token / Current user and bearer token.

    An anonymous user has no token; requests are still sent and the server decides.
    """
    username: str | None = None
    token: str | None = None
    refresh_token: str | None = None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def headers(self) -> dict[str, str]:
        """En-tete Authorization si token / Authorization header when a token exists."""
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


ANONYMOUS = AuthUser()
