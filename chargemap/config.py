from pydantic_settings import BaseSettings
from functools import lru_cache
import os


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite:///./chargemap.db"

    # Environment: local, dev, staging, prod
    env: str = os.getenv("ENV", "dev")

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_allow_origins: str = os.getenv("ALLOWED_ORIGINS", "*")

    # Geo: mean Earth radius used by the radius search
    earth_radius_km: float = 6371.0

    # Schema management at startup (dev convenience; prod runs alembic)
    create_tables_on_startup: bool = True
    run_migrations_on_startup: bool = False

    @property
    def is_local(self) -> bool:
        return self.env.lower() in {"local", "dev", "test"}

    @property
    def cors_origins(self) -> list:
        if self.cors_allow_origins.strip() == "*":
            return ["*"]
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
