from pydantic_settings import BaseSettings
from pydantic import BaseModel, model_validator
from typing import List, Literal
from urllib.parse import quote_plus
import os


class DefaultCategory(BaseModel):
    name: str
    kind: Literal["income", "expense"]
    color: str = "#059669"


class Settings(BaseSettings):
    APP_ENV: str = "local"

    # Database URL - can be provided directly or constructed from components
    DATABASE_URL: str | None = None

    # Individual database components (for constructing DATABASE_URL)
    DB_HOST: str = "localhost"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = ""
    DB_NAME: str = ""

    # Used when neither DATABASE_URL nor DB_NAME is set
    SQLITE_PATH: str = "./bookkeeping.db"

    LOCAL_URL: str = "http://127.0.0.1:8000"
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
    ]

    TRANSACTION_LIST_MAX_LIMIT: int = 500
    MONTHLY_TREND_MAX_MONTHS: int = 24

    # Seeded for every newly registered user
    DEFAULT_CATEGORIES: List[DefaultCategory] = [
        DefaultCategory(name="Sales", kind="income", color="#10B981"),
        DefaultCategory(name="Services", kind="income", color="#059669"),
        DefaultCategory(name="Commission", kind="income", color="#14B8A6"),
        DefaultCategory(name="Bank Interest", kind="income", color="#0891B2"),
        DefaultCategory(name="Other Income", kind="income", color="#7C3AED"),
        DefaultCategory(name="Operational", kind="expense", color="#EF4444"),
        DefaultCategory(name="Marketing", kind="expense", color="#F97316"),
    ]

    class Config:
        env_file = ".env" if os.getenv("APP_ENV", "local") == "local" else ".env.prod"
        env_file_encoding = "utf-8"

    @model_validator(mode='after')
    def construct_database_url(self):
        """Construct DATABASE_URL from components if not provided directly."""
        if not self.DATABASE_URL:
            if self.DB_NAME:
                # URL encode password to handle special characters
                password_part = f":{quote_plus(self.DB_PASSWORD)}" if self.DB_PASSWORD else ""
                self.DATABASE_URL = f"postgresql://{self.DB_USER}{password_part}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
            else:
                self.DATABASE_URL = f"sqlite:///{self.SQLITE_PATH}"
        return self

    @property
    def database_url(self) -> str:
        """Get DATABASE_URL as a guaranteed string."""
        assert self.DATABASE_URL is not None, "DATABASE_URL must be set"
        return self.DATABASE_URL


settings = Settings()
