"""
Application configuration loaded from environment variables.
Uses pydantic-settings for typed, validated config.
"""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All environment variables read by the application."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── AI provider ───────────────────────────────────────────
    ai_provider: Literal["gemini", "openai"] = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"
    analysis_timeout_seconds: float = 60.0

    # ── Storage ───────────────────────────────────────────────
    storage_backend: Literal["file", "supabase"] = "file"
    storage_path: str = ".jobmatch/state.json"
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_table: str = "kv_store"

    # Quiet period before an edited field is written to storage
    persist_debounce_seconds: float = 2.0

    # ── App ───────────────────────────────────────────────────
    app_name: str = "AI Job Matcher"
    debug: bool = False
    log_level: str = "INFO"
    cors_origins: list[str] = ["*"]


# Singleton — import this wherever config is needed
settings = Settings()
