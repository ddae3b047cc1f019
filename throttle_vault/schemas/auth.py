"""
Schémas d'authentification / Authentication schemas.
Inscription, connexion, tokens, refresh.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class CredentialsRequest(BaseModel):
    """Requête de connexion ou d'inscription / Login or register request."""
    username: str = Field(min_length=1, max_length=50)
    password: str = Field(min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """Réponse avec tokens / Token response."""
    token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """Requête de rafraîchissement / Refresh request."""
    refresh_token: str


class UserMe(BaseModel):
    """Profil de l'utilisateur connecté / Current user profile."""
    username: str
    created_at: datetime | None = None
    model_config = {"from_attributes": True}
