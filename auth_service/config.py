from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from shared.utils.database import build_database_url


class Settings(BaseSettings):
    # App config
    app_name: str = "Project Tracker Auth Service"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None
    port: int = 3001

    # Database - service-specific user pattern
    db_service_user: str = "auth_service"
    db_service_password: str = "auth_service_secure_pass_change_me"
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    db_name: str = "auth"
    db_pool_min_size: int = 5
    db_pool_max_size: int = 20

    # JWT
    jwt_secret: str = "your_super_secret_jwt_key_change_me"
    jwt_algorithm: str = "HS256"
    jwt_expires_hours: int = 24

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def database_url(self) -> str:
        """Build PostgreSQL connection string"""
        return build_database_url(
            self.postgres_host,
            self.postgres_port,
            self.db_name,
            self.db_service_user,
            self.db_service_password
        )


settings = Settings()
