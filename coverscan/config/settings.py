from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    db_host: str = "host.docker.internal"
    db_port: int = 5432
    db_database: str = "coverscan"
    db_username: str = "coverscan"
    db_password: str = "secret"

    max_upload_bytes: int = 5_242_880

    storage_backend: str = "local"
    storage_files_root: str = "/app/files"
    storage_public_base_url: str = "http://localhost:8000/files"
    storage_timeout_seconds: int = 30

    supabase_url: str = ""
    supabase_service_key: str = ""
    supabase_bucket: str = "book-covers"

    inference_provider: str = "openai"

    inference_openai_api_key: str = ""
    inference_openai_model_name: str = "gpt-4o"
    inference_openai_timeout_seconds: int = 30

    inference_openai_compatible_base_url: str = ""
    inference_openai_compatible_api_key: str = ""
    inference_openai_compatible_model_name: str = ""
    inference_openai_compatible_timeout_seconds: int = 30

    inference_openrouter_api_key: str = ""
    inference_openrouter_model_name: str = "openai/gpt-4o"
    inference_openrouter_timeout_seconds: int = 30

    inference_groq_api_key: str = ""
    inference_groq_model_name: str = "meta-llama/llama-4-scout-17b-16e-instruct"
    inference_groq_timeout_seconds: int = 30

    inference_together_api_key: str = ""
    inference_together_model_name: str = "meta-llama/Llama-3.2-11B-Vision-Instruct-Turbo"
    inference_together_timeout_seconds: int = 30

    inference_ollama_api_key: str = "ollama"
    inference_ollama_model_name: str = "llava"
    inference_ollama_timeout_seconds: int = 120
