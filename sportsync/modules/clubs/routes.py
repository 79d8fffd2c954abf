from fastapi import APIRouter, Depends, File, Form, UploadFile
from sportsync.config import settings
from sportsync.core.dependencies import get_identity_provider, get_record_store, get_user_supabase
from sportsync.database.record_store import SupabaseRecordStore
from sportsync.modules.auth.service import SupabaseIdentityProvider
from sportsync.modules.clubs.schemas import ClubLogo, ClubResult, MyClubsResponse
from sportsync.modules.clubs.service import ClubProvisioningService
from sportsync.modules.clubs.storage import get_asset_store
from supabase import Client
from typing import Optional

router = APIRouter(prefix="/clubs", tags=["clubs"])


def get_club_service(
    record_store: SupabaseRecordStore = Depends(get_record_store),
    identity_provider: SupabaseIdentityProvider = Depends(get_identity_provider),
    supabase: Client = Depends(get_user_supabase),
) -> ClubProvisioningService:
    return ClubProvisioningService(record_store, get_asset_store(supabase), identity_provider)


async def _read_logo(logo: Optional[UploadFile]) -> Optional[ClubLogo]:
    if logo is None or not logo.filename:
        return None
    # One byte past the ceiling is enough for validation to reject oversized files
    content = await logo.read(settings.club_logo_max_bytes + 1)
    return ClubLogo(filename=logo.filename, content_type=logo.content_type, content=content)


@router.post("", response_model=ClubResult, response_model_exclude_unset=True, status_code=201)
async def create_club(
    name: Optional[str] = Form(None),
    logo: Optional[UploadFile] = File(None),
    service: ClubProvisioningService = Depends(get_club_service)
):
    """
    Create a club with an optional PNG/JPG/SVG logo (max 5MB) and make the
    caller its first member. Errors come back as {error_kind, message}.
    """
    club_logo = await _read_logo(logo)
    club = service.provision_club(name, club_logo)
    return ClubResult(club=club)


@router.get("/mine", response_model=MyClubsResponse)
async def list_my_clubs(
    service: ClubProvisioningService = Depends(get_club_service)
):
    """Clubs the current user belongs to (club selection after sign-up)."""
    return MyClubsResponse(clubs=service.list_my_clubs())
