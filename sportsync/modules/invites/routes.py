from fastapi import APIRouter, Depends, HTTPException
from sportsync.core.dependencies import get_current_user_id, get_record_store
from sportsync.database.record_store import SupabaseRecordStore
from sportsync.modules.invites.schemas import InviteResponse, InviteTokenResponse, IssuedInviteResponse
from sportsync.modules.invites.service import InviteService, build_invite_url
from typing import Dict

router = APIRouter(prefix="/invites", tags=["invites"])


def get_invite_service(record_store: SupabaseRecordStore = Depends(get_record_store)) -> InviteService:
    return InviteService(record_store)


@router.get("/{club_id}", response_model=InviteTokenResponse)
async def get_invite_token(
    club_id: int,
    user_data: Dict = Depends(get_current_user_id),
    service: InviteService = Depends(get_invite_service)
):
    """Current invite token for the club, or null if none was issued yet."""
    return InviteTokenResponse(token=service.get_invite_token(club_id))


@router.post("/{club_id}", response_model=IssuedInviteResponse, status_code=201)
async def issue_invite_token(
    club_id: int,
    user_data: Dict = Depends(get_current_user_id),
    service: InviteService = Depends(get_invite_service)
):
    """Issue a new invite token for the club. Always mints a new one; previous tokens keep working."""
    token = service.issue_invite_token(club_id)
    return IssuedInviteResponse(token=token, invite_url=build_invite_url(token))


@router.get("/records/{invite_id}", response_model=InviteResponse)
async def get_invite(
    invite_id: int,
    user_data: Dict = Depends(get_current_user_id),
    service: InviteService = Depends(get_invite_service)
):
    """Invite row by id, including ones no club points at anymore."""
    invite = service.get_invite(invite_id)
    if invite is None:
        raise HTTPException(status_code=404, detail="Invite not found")
    return invite
