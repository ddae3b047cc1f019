"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Throttle Vault"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True

    # Database - URL explicite prioritaire / explicit URL wins when set
    DATABASE_URL: str | None = None

    # Cluster heberge / Hosted cluster credentials
    DB_DRIVER: str = "postgresql+asyncpg"
    DB_USER: str | None = None
    DB_PASSWORD: str | None = None
    DB_HOST: str | None = None
    DB_NAME: str = "car_catalog"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # JWT Authentication
    SECRET_KEY: str = "change-me-in-production"
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_LOGIN: str = "5/minute"
    RATE_LIMIT_REGISTER: str = "3/minute"

    # Build du front (SPA) / Front-end build dir
    STATIC_DIR: str = "../app/dist"

    # Catalogue initial / Initial catalog (JSON array of car models)
    CATALOG_SEED_PATH: str | None = None

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    @property
    def database_url(self) -> str:
        """URL de connexion resolue / Resolved connection URL.

        Explicit DATABASE_URL first, then hosted credentials, then the local SQLite file.
        """
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DB_USER and self.DB_PASSWORD and self.DB_HOST:
            return f"{self.DB_DRIVER}://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}/{self.DB_NAME}"
        return f"sqlite+aiosqlite:///./{self.DB_NAME}.db"

    @property
    def database_label(self) -> str:
        """URL sans mot de passe pour les logs / URL without password, for logs."""
        url = self.database_url
        if self.DB_PASSWORD:
            url = url.replace(f":{self.DB_PASSWORD}@", "@")
        return url


settings = Settings()
