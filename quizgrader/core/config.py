from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE: float | None = None
    OPENAI_TIMEOUT_SECONDS: float = 30.0
    OPENAI_MAX_TOKENS: int = 512

    REFERENCE_MAX_CONCURRENCY: int = 4

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"


settings = Settings()
