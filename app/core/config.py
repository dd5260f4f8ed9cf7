from typing import List

from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+pysqlite:///:memory:"

    # Security scheme applied to the customer routes: "anonymous" or "bearerAuth"
    AUTH_SCHEME: str = "anonymous"
    JWT_SECRET: str | None = None
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60

    CORS_ORIGINS_STR: str = "http://localhost:3000"

    LOG_LEVEL: str = "INFO"
    ENABLE_METRICS: bool = True

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',')]


    def model_post_init(self, __context) -> None:
        if self.AUTH_SCHEME == "bearerAuth" and not self.JWT_SECRET:
            raise ValueError("JWT_SECRET is required when AUTH_SCHEME is 'bearerAuth'")


    class Config:
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()
