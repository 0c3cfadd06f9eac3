from os import getenv
from pydantic import BaseModel, ConfigDict


class JwtSettings(BaseModel):
    """Paramètres JWT, construits une seule fois au démarrage"""

    model_config = ConfigDict(frozen=True)

    secret_key: str
    issuer: str = "TaskManagerAPI"
    audience: str = "TaskManagerClient"
    expiration_minutes: int = 60
    algorithm: str = "HS256"


class Settings:
    DATABASE_URL = getenv("DATABASE_URL", "postgresql+psycopg://taskapi:taskapi@db:5432/taskapi")
    BCRYPT_ROUNDS = int(getenv("BCRYPT_ROUNDS", "12"))
    CORS_ORIGINS = getenv("CORS_ORIGINS", "*")
    LOG_LEVEL = getenv("LOG_LEVEL", "INFO")
    SEED_DATABASE = getenv("SEED_DATABASE", "false").lower() in ("1", "true", "yes")

    jwt = JwtSettings(
        secret_key=getenv("JWT_SECRET", "dev-secret-change-in-prod-0123456789abcdef"),
        issuer=getenv("JWT_ISSUER", "TaskManagerAPI"),
        audience=getenv("JWT_AUDIENCE", "TaskManagerClient"),
        expiration_minutes=int(getenv("JWT_EXPIRE_MIN", "60")),  # 1h par défaut
    )


settings = Settings()


def get_jwt_settings() -> JwtSettings:
    """Dépendance FastAPI, surchargeable dans les tests"""
    return settings.jwt
