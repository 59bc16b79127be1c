from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    ENV: str = Field(default="dev")  # dev|prod
    TZ: str = Field(default="Asia/Riyadh")

    # Security
    JWT_SECRET: str = Field(default="change-me")
    JWT_ALG: str = Field(default="HS256")
    JWT_EXPIRES_MIN: int = Field(default=60 * 12)

    # DB
    DATABASE_URL: str = Field(default="postgresql+psycopg://app:app@db:5432/app")

    # CORS
    CORS_ORIGINS: str = Field(default="http://localhost:3000,http://localhost")

    # Business defaults
    CURRENCY: str = Field(default="SAR")
    SETTLED_STATUSES: str = Field(default="مدفوع,مكتمل,paid,completed")
    SOLD_STATUSES: str = Field(default="مباع,sold")

    # Seed (dev)
    SEED_DEMO: bool = Field(default=True)
    DEMO_ADMIN_LOGIN: str = Field(default="admin")
    DEMO_ADMIN_PASSWORD: str = Field(default="admin123")

    @property
    def settled_statuses(self) -> tuple[str, ...]:
        return tuple(s.strip() for s in self.SETTLED_STATUSES.split(",") if s.strip())

    @property
    def sold_statuses(self) -> tuple[str, ...]:
        return tuple(s.strip() for s in self.SOLD_STATUSES.split(",") if s.strip())


settings = Settings()
