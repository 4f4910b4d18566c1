# src/code_critic/config.py
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env")

    # LLM provider
    perplexity_api_key: str | None = None
    perplexity_model: str = "sonar-pro"

    # GitHub
    github_api_url: str = "https://api.github.com"
    github_token: str | None = None

    # Review store
    store_backend: str = "supabase"
    supabase_url: str | None = None
    supabase_key: str | None = None
    sqlite_path: str = ".code-critic.db"

    # Defaults
    review_timeout: float = 60.0
    log_dir: str | None = None
    log_level: str = "INFO"
