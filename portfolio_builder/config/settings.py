from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 8000

    pdf_engine: str = "pdfplumber"

    ai_provider: str = "cerebras"
    ai_streaming: bool | None = None
    ai_timeout_seconds: int = 120
    ai_temperature: float = 0.6
    ai_top_p: float = 0.95
    ai_max_tokens: int = 40960

    cerebras_api_key: str = ""
    cerebras_model_name: str = "llama3.3-70b"

    gemini_api_key: str = ""
    gemini_model_name: str = "gemini-2.0-flash"

    openai_api_key: str = ""
    openai_model_name: str = "gpt-4o-mini"

    openai_compatible_api_key: str = ""
    openai_compatible_model_name: str = ""
    openai_compatible_base_url: str | None = None

    storage_provider: str = "local"
    local_storage_dir: str = "public"
    local_storage_base_url: str = "/files"

    s3_bucket: str = ""
    s3_region: str = "us-east-1"
    s3_endpoint_url: str | None = None
    s3_public_base_url: str | None = None
    aws_access_key_id: str | None = None
    aws_secret_access_key: str | None = None

    kv_backend: str = "redis"
    redis_url: str = "redis://localhost:6379/0"

    recaptcha_secret_key: str
    recaptcha_verify_url: str = "https://www.google.com/recaptcha/api/siteverify"
    recaptcha_timeout_seconds: int = 10

    rate_limit_requests: int = 5
    rate_limit_window_seconds: int = 60

    history_max_entries: int = 10
    history_ttl_seconds: int = 30 * 24 * 60 * 60

    min_resume_chars: int = 100
    max_resume_pages: int = 10
    max_resume_chars: int = 35_000
    max_resume_chars_by_template: dict[str, int] = {}

    expose_internal_errors: bool = True
    trust_forwarded_for: bool = False
    proxy_timeout_seconds: int = 15
    proxy_max_bytes: int = 5 * 1024 * 1024

    def resume_char_ceiling(self, template_id: str) -> int:
        """Return the text-length ceiling for a template, falling back to the global one."""
        return self.max_resume_chars_by_template.get(template_id, self.max_resume_chars)
