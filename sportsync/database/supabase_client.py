from supabase import create_client, Client, ClientOptions
from sportsync.config import settings


class SupabaseClient:
    _client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def for_user(cls, access_token: str) -> Client:
        """Client whose table and storage calls carry the caller's JWT, so RLS sees auth.uid()."""
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(headers={"Authorization": f"Bearer {access_token}"}),
        )

    @classmethod
    def reset_client(cls):
        cls._client = None


def get_supabase() -> Client:
    return SupabaseClient.get_client()
