from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_NAME: str = "torneos"
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    # Overrides the composed PostgreSQL URL when set (e.g. sqlite:// in tests)
    DATABASE_URL: Optional[str] = None

    DB_POOL_SIZE: int = 20
    DB_POOL_TIMEOUT: int = 2
    DB_POOL_RECYCLE: int = 30

    JWT_SECRET: str = "YOUR_SECRET_KEY_HERE"
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRES_MINUTES: int = 60 * 24

    BCRYPT_ROUNDS: int = 12
    LOG_LEVEL: str = "INFO"

    SEED_ADMIN_EMAIL: Optional[str] = None
    SEED_ADMIN_PASSWORD: Optional[str] = None

    class Config:
        env_file = ".env"

    @property
    def database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+psycopg2://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

settings = Settings()
