"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

Every external source key is optional: an empty key turns the matching
adapter into a no-op instead of crashing the process.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB (company cache)
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "placement_helper"
    mongodb_collection: str = "companies"
    mongodb_timeout_ms: int = 3000

    # External data sources
    serp_api_key: str = ""
    google_api_key: str = ""  # YouTube Data API

    # LLM completion endpoint (OpenAI-compatible, e.g. local llama.cpp server)
    llm_base_url: str = "http://127.0.0.1:8080/v1"
    llm_api_key: str = ""
    llm_model: str = "mistral-7b-instruct"

    # Bulk company dataset
    dataset_path: str = "data/companies_sorted.csv"

    # Outbound HTTP
    http_timeout_seconds: float = 5.0
    adapter_timeout_seconds: float = 8.0
    user_agent: str = "AI-Placement-Helper/1.0"

    # Resolution tuning
    quality_min_description_length: int = 50
    connectivity_failure_threshold: int = 3

    # App
    debug: bool = True
    log_level: str = "INFO"

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
