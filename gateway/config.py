from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    # App config
    app_name: str = "Project Tracker API Gateway"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"
    log_format: str = "default"
    logging_config_path: Optional[str] = None
    port: int = 3000

    # Backend services
    auth_service_url: str = "http://localhost:3001"
    project_service_url: str = "http://localhost:3002"
    task_service_url: str = "http://localhost:3003"
    rpc_read_timeout: float = 30.0

    # Identity cookie
    access_token_cookie: str = "accessToken"
    access_token_max_age: int = 24 * 60 * 60

    # CORS
    frontend_url: str = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def cookie_secure(self) -> bool:
        """Secure cookies only when serving over HTTPS in production"""
        return self.environment == "production"


settings = Settings()
