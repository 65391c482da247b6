import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    APP_NAME: str = os.getenv("APP_NAME", "Asset Management")

    JWT_SECRET: str = os.getenv("JWT_SECRET", "change-me-in-production")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_EXPIRE_MINUTES: int = int(
        os.getenv("JWT_EXPIRE_MINUTES", 60 * 24 * 30))  # 30 days default

    DATABASE_URL: str | None = os.getenv("DATABASE_URL")
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    DB_NAME: str | None = os.getenv("DB_NAME")

    CORS_ORIGINS: str = os.getenv(
        "CORS_ORIGINS", "http://localhost:8080,http://127.0.0.1:5173")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Dashboard: warranties ending within this many days count as upcoming
    WARRANTY_EXPIRY_WINDOW_DAYS: int = int(
        os.getenv("WARRANTY_EXPIRY_WINDOW_DAYS", 30))

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]


settings = Settings()


def build_database_url(cfg: Settings) -> str:
    if cfg.DATABASE_URL:
        return cfg.DATABASE_URL
    if cfg.DB_HOST and cfg.DB_NAME:
        return (
            f"postgresql+psycopg2://{cfg.DB_USER}:{cfg.DB_PASS}@{cfg.DB_HOST}:{cfg.DB_PORT}/{cfg.DB_NAME}"
        )
    return f"sqlite:///{os.path.join(BASE_DIR, 'asset_management.db')}"


DATABASE_URL = build_database_url(settings)
