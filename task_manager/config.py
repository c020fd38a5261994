from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    log_level: str = "INFO"

    database_url: str = "postgresql+psycopg://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    auto_create_tables: bool = True

    jwt_secret: str = "dev-secret-change-me"
    jwt_issuer: str = "task-manager"
    jwt_audience: str = "task-manager"
    jwt_expires_minutes: int = 60

    # task defaults
    default_status_slug: str = "draft"
    untitled_task_title: str = "Untitled Task"

    # seeded admin, may edit/delete any user
    admin_email: str = "hexlet@example.com"
    admin_password: str = "qwerty"

    # rate limiting (redis)
    rate_limit_enabled: bool = True
    rate_limit_login_per_min: int = 30

settings = Settings()
