"""Application configuration using Pydantic settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore")

    openai_api_key: str
    service_name: str = "vectorflow"
    service_port: int = 8000

    normalize_model: str = "gpt-4o-mini"
    answer_model: str = "gpt-4o"
    normalize_temperature: float = 0.1
    answer_temperature: float = 0.2

    # Retrieval is an unranked scan, not a similarity search
    context_limit: int = 10
    embedding_dimensions: int = 1536

    # Stands in for the browser's local storage
    credentials_path: str = ".vectorflow/credentials.json"

    store_pool_min_size: int = 1
    store_pool_max_size: int = 5

    # Advertised upload limit, not enforced
    upload_soft_limit_bytes: int = 10 * 1024 * 1024


settings = Settings()
