"""
Club invite tokens.

get_invite_token is a pure lookup. issue_invite_token always mints a new
token and repoints the club at it; it is not get-or-create. Earlier invite
rows stay in club_invite and their tokens stay valid, since nothing here
revokes them. Callers that want one stable link per club call
get_invite_token first and only issue when it returns None. Two concurrent
first issues for the same club can both insert; the later club update wins
and the other invite becomes an unreferenced orphan.
"""
import uuid
import logging
from typing import Callable, Optional
from urllib.parse import urlencode

from sportsync.config import settings
from sportsync.core.errors import StoreError
from sportsync.database.record_store import RecordStore, RecordStoreError
from sportsync.modules.invites.models import CLUB_TABLE, INVITE_TABLE
from sportsync.modules.invites.schemas import InviteResponse

logger = logging.getLogger(__name__)


def generate_token() -> str:
    return str(uuid.uuid4())


def build_invite_url(token: str) -> str:
    """Return the sign-up URL a new member follows to join via `token`."""
    return f"{settings.app_url.rstrip('/')}/auth/sign-up?{urlencode({'invite': token})}"


class InviteService:
    def __init__(self, record_store: RecordStore, token_factory: Callable[[], str] = generate_token):
        self.record_store = record_store
        self.token_factory = token_factory

    def get_invite_token(self, club_id: int) -> Optional[str]:
        """Token of the invite the club currently points at, or None if it has none."""
        try:
            club = self.record_store.find(CLUB_TABLE, match={"id": club_id}, columns="club_invite_id")
            if not club or club.get("club_invite_id") is None:
                return None
            invite = self.record_store.find(
                INVITE_TABLE, match={"id": club["club_invite_id"]}, columns="token"
            )
        except RecordStoreError as e:
            raise StoreError(f"Failed to load invite for club {club_id}: {e}") from e
        return invite["token"] if invite else None

    def get_invite(self, invite_id: int) -> Optional[InviteResponse]:
        """Look up an invite row directly, whether or not a club still points at it."""
        try:
            row = self.record_store.find(INVITE_TABLE, match={"id": invite_id})
        except RecordStoreError as e:
            raise StoreError(f"Failed to load invite {invite_id}: {e}") from e
        return InviteResponse(**row) if row else None

    def issue_invite_token(self, club_id: int) -> str:
        """Mint a new invite for the club and link it. Returns the new token."""
        token = self.token_factory()

        try:
            invite = self.record_store.insert(INVITE_TABLE, {"token": token})
        except RecordStoreError as e:
            raise StoreError(f"Failed to create invite: {e}") from e

        try:
            club = self.record_store.update(CLUB_TABLE, club_id, {"club_invite_id": invite["id"]})
        except RecordStoreError as e:
            logger.warning(f"Orphaned club_invite {invite['id']}: linking to club {club_id} failed: {e}")
            raise StoreError(f"Failed to link invite to club: {e}") from e
        if club is None:
            logger.warning(f"Orphaned club_invite {invite['id']}: club {club_id} not found")
            raise StoreError(f"Club {club_id} not found")

        logger.info(f"Issued invite {invite['id']} for club {club_id}")
        return token
