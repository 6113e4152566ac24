from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    max_image_bytes: int = 20 * 1024 * 1024
    allowed_content_types: list[str] = [
        "image/jpeg",
        "image/png",
        "image/webp",
        "application/pdf",
    ]

    llm_provider: str = "openai"
    openai_api_key: str = ""
    openai_base_url: str | None = None
    openai_timeout_seconds: int = 30

    extraction_model_name: str = "gpt-4o-mini"
    extraction_temperature: float = 0.1
    description_model_name: str = "gpt-4o-mini"
    description_temperature: float = 0.7

    embedding_provider: str = "openai"
    text_embedding_model_name: str = "text-embedding-3-small"
    text_embedding_dimensions: int = 768
    image_embedding_model_name: str = "clip-ViT-B-32"
    image_embedding_dimensions: int = 512

    lookup_provider: str = "none"
    tavily_api_key: str = ""
    tavily_timeout_seconds: int = 15
    lookup_max_results: int = 5

    qdrant_location: str = "storage/qdrant"
    qdrant_url: str | None = None
    qdrant_api_key: str | None = None
    qdrant_timeout_seconds: int = 30
    text_collection_name: str = "cards-text"
    image_collection_name: str = "cards-image"

    storage_root: str = "public"
    certification_base_url: str = "https://www.psacard.com/cert"

    enable_narration: bool = False
    narration_model_name: str = "tts-1"
    narration_voice: str = "onyx"

    enable_synthetic_sample: bool = False
    synthetic_image_model_name: str = "gpt-image-1"

    search_top_k: int = 5
    search_text_weight: float = 0.6
    search_image_weight: float = 0.4
    list_limit: int = 100

    chat_model_name: str = "gpt-4o-mini"
    chat_temperature: float = 0.7
    chat_top_k: int = 5
