from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

REQUIRED_ENV_VARS = {
    "SUPABASE_URL": "supabase_url",
    "SUPABASE_SERVICE_KEY": "supabase_service_key",
    "OPENAI_API_KEY": "openai_api_key",
}


class Settings(BaseSettings):
    # Supabase (service key bypasses RLS; all reads/writes happen server-side)
    supabase_url: str = ""
    supabase_service_key: str = ""

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: Optional[str] = None
    openai_model: str = "gpt-3.5-turbo"
    openai_temperature: float = 0.7
    openai_timeout_seconds: float = 30.0

    # Daily quota
    free_plan_name: str = "free"
    max_text_length: int = 5000
    max_tokens_per_request: int = 1500
    min_tokens_per_request: int = 50

    # App
    app_name: str = "enhance-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    api_prefix: str = "/api"
    public_base_url: str = "https://enhance-backend.vercel.app"
    cors_origins: str = "*"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    enhance_rate_limit: str = "20/minute"
    auth_cache_ttl_seconds: int = 60

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def email_redirect_url(self) -> str:
        return f"{self.public_base_url.rstrip('/')}{self.api_prefix}/auth/callback"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    def missing_required_settings(self) -> List[str]:
        return [env for env, field in REQUIRED_ENV_VARS.items() if not getattr(self, field)]

    def validate_required_settings(self) -> None:
        missing = self.missing_required_settings()
        if missing:
            raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
