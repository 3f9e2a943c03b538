from supabase import create_client, Client
from app.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        """Client with the service key; bypasses RLS, so only use server-side."""
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_service_key)
        return cls._client

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
