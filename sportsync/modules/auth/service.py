import hashlib
import time
import logging
from supabase import Client
from fastapi import HTTPException
from typing import Dict, Any, Optional

from sportsync.modules.auth.schemas import Identity

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls.

        Good enough for route guards. Writes that depend on a live identity
        go through SupabaseIdentityProvider instead.
        """
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_data = self.fetch_user(token)
            if user_data is None:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def fetch_user(self, token: str) -> Optional[Dict[str, Any]]:
        """Ask the auth server who owns `token`. Never cached."""
        user_response = self.supabase.auth.get_user(jwt=token)
        if not user_response or not user_response.user:
            return None
        user = user_response.user
        return {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
        }


class SupabaseIdentityProvider:
    """
    Confirms the caller's identity against the auth server at call time.

    Used right before writes that RLS authorizes with auth.uid(); a cached
    positive could let a revoked session through.
    """

    def __init__(self, auth_service: AuthService, token: Optional[str]):
        self.auth_service = auth_service
        self.token = token

    def confirm_current_identity(self) -> Optional[Identity]:
        if not self.token:
            return None
        try:
            user_data = self.auth_service.fetch_user(self.token)
        except Exception as e:
            logger.warning(f"Identity confirmation failed: {e}")
            return None
        if user_data is None:
            return None
        return Identity(id=str(user_data["id"]), email=user_data.get("email"))
