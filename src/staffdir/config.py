"""
Configuration management for the staffdir backend
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: str = "sqlite+aiosqlite:///./staffdir.db"
    database_pool_size: int = 10
    database_max_overflow: int = 20

    # Auth
    auth_provider: str = "none"  # 'none', 'jwt', 'supabase'
    auth_config: dict = {}
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "staffdir"
    jwt_audience: str = "staffdir-api"
    supabase_url: str | None = None
    supabase_service_role_key: str | None = None

    # API Settings
    api_host: str = "0.0.0.0"
    api_port: int = 8090
    api_reload: bool = False
    cors_origins: list[str] = ["*"]

    # Collapse error statuses to 401/500 the way the mobile client first shipped
    coarse_error_status: bool = False

    # Environment
    environment: str = "development"  # 'development', 'staging', 'production'
    debug: bool = True
    sql_echo: bool = False
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "STAFFDIR_"
        case_sensitive = False


# Global settings instance
settings = Settings()
