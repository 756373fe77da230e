"""
Configuration centrale de l'application via variables d'environnement.
Charger depuis un fichier .env en développement.
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Base de données : obligatoire, pas de valeur par défaut
    DATABASE_URL: str
    DB_POOL_SIZE: int = 1
    DB_MAX_OVERFLOW: int = 0
    CREATE_TABLES: bool = True

    # Sessions (cookie signé)
    SECRET_KEY: str = "change-me-in-production"
    SESSION_COOKIE: str = "mymadrassa_session"
    SESSION_MAX_AGE: int = 8 * 60 * 60

    # En-tête de secours pour l'authentification, uniquement en développement
    DEV_USER_HEADER: str = "X-Dev-User-Id"

    # CORS
    CORS_ORIGIN_REGEX: str = r"https?://(localhost|127\.0\.0\.1)(:\d+)?"

    # Environnement
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"
    PORT: int = 5000

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def is_production(self) -> bool:
        return self.ENV == "production"

    @property
    def is_development(self) -> bool:
        return self.ENV == "development"


@lru_cache
def get_settings() -> Settings:
    """Instance unique des paramètres, lue une seule fois depuis l'environnement."""
    return Settings()
