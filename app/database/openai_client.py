from openai import OpenAI
from app.config import settings


class OpenAIClient:
    _client: OpenAI = None

    @classmethod
    def get_client(cls) -> OpenAI:
        if cls._client is None:
            cls._client = OpenAI(
                api_key=settings.openai_api_key,
                base_url=settings.openai_base_url,
                timeout=settings.openai_timeout_seconds,
            )
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_openai() -> OpenAI:
    return OpenAIClient.get_client()
