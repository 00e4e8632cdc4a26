from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "liftlog"
    # Full URL wins over the DB_* parts (e.g. sqlite for tests)
    SQLALCHEMY_URL: str | None = None

    # Tokens are issued by the identity provider; we only verify them
    AUTH_SECRET_KEY: str = "dev-secret-change-me"
    AUTH_ALGORITHM: str = "HS256"
    AUTH_ISSUER: str | None = None
    AUTH_AUDIENCE: str | None = None
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Zone that aware timestamps are converted into before storage
    WALL_CLOCK_TZ: str = "UTC"

    API_VERSION: str = "dev"
    ALLOW_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.SQLALCHEMY_URL:
            return self.SQLALCHEMY_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
