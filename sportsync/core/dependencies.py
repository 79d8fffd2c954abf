"""
Core dependencies for route protection and per-request collaborators
"""

from fastapi import Depends, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sportsync.database.supabase_client import SupabaseClient, get_supabase
from sportsync.database.record_store import SupabaseRecordStore
from sportsync.modules.auth.service import AuthService, SupabaseIdentityProvider
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_supabase(token: str = Depends(get_current_token)) -> Client:
    """Supabase client acting as the caller, so row level security applies to every write."""
    return SupabaseClient.for_user(token)


def get_record_store(supabase: Client = Depends(get_user_supabase)) -> SupabaseRecordStore:
    return SupabaseRecordStore(supabase)


def get_identity_provider(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> SupabaseIdentityProvider:
    return SupabaseIdentityProvider(auth_service, token)
