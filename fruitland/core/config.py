from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./fruitland.db"
    SQL_ECHO: bool = False

    # Session cookie
    SESSION_SECRET: str = "fruitland-dev-secret"  # 🔐 override in production
    SESSION_MAX_AGE: int = 14 * 24 * 3600

    # Tenancy
    TENANT_CACHE_TTL_SECONDS: float = 300.0
    DEFAULT_TENANT_SLUG: str = "fruitland"
    # Shared tenant cache; unset keeps it in process memory
    REDIS_URL: Optional[str] = None

    # Loyalty
    LOYALTY_POINTS_PER_UNIT: float = 0.01  # 1 point per 100 spent
    LOYALTY_POINT_VALUE: float = 1.0

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["*"]

    # Optional bootstrap superadmin, seeded on startup when both are set
    SUPERADMIN_EMAIL: Optional[str] = None
    SUPERADMIN_PASSWORD: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
