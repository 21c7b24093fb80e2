from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    # Base de datos
    db_url: str = Field("sqlite+aiosqlite:///./sentinelmind.db", alias="DB_URL")

    # Firma de tokens de sesión
    jwt_alg: str = Field("HS256", alias="JWT_ALG")
    jwt_secret: str = Field("sentinel-mind-dev-secret-change-me-2026", alias="JWT_SECRET")
    token_ttl_minutes: int = Field(60, alias="TOKEN_TTL_MINUTES")

    # Rutas de claves PEM (solo para algoritmos asimétricos: RS256, ES256...)
    priv_key_path: str = Field("keys/jwt_private.pem", alias="JWT_PRIVATE_KEY_PATH")
    pub_key_path: str = Field("keys/jwt_public.pem", alias="JWT_PUBLIC_KEY_PATH")

    # Contraseñas
    bcrypt_rounds: int = Field(10, alias="BCRYPT_ROUNDS")

    # Cuenta por defecto (se crea si la tabla users está vacía)
    default_username: str = Field("admin", alias="DEFAULT_USERNAME")
    default_password: str = Field("admin123", alias="DEFAULT_PASSWORD")

    # Dashboard
    dashboard_recent_limit: int = Field(10, alias="DASHBOARD_RECENT_LIMIT")
    critical_severity: str = Field("Critical", alias="CRITICAL_SEVERITY")

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        populate_by_name=True,  # permite Settings(db_url=...) además de la variable de entorno
    )


settings = Settings()
