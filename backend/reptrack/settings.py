from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    ENV: str = "local"
    DB_HOST: str = "db"
    DB_PORT: int = 5432
    DB_USER: str = "postgres"
    DB_PASSWORD: str = "postgres"
    DB_NAME: str = "reptrack"
    # Full URL override, e.g. sqlite+pysqlite:///./reptrack.db for local runs
    DB_URL: str | None = None

    # Identity used when a caller does not pass one (single implicit user)
    DEFAULT_USER_ID: str = "default_user"

    # External exercise catalog
    CATALOG_BASE_URL: str = "https://www.exercisedb.dev/api/v1"
    CATALOG_CACHE_TTL_SECONDS: int = 600
    CATALOG_TIMEOUT_SECONDS: float = 5.0

    # Coaching (OpenAI-compatible chat completions endpoint)
    LLM_API_URL: str = "https://api.groq.com/openai/v1/chat/completions"
    LLM_API_KEY: str | None = None
    LLM_MODEL: str = "llama-3.3-70b-versatile"
    LLM_TIMEOUT_SECONDS: float = 30.0

    # Streak may start yesterday when nothing is logged yet today
    STREAK_ALLOW_YESTERDAY: bool = True

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def DATABASE_URL(self) -> str:
        if self.DB_URL:
            return self.DB_URL
        return (
            f"postgresql+psycopg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

@lru_cache
def get_settings() -> Settings:
    return Settings()
