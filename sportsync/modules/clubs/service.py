"""
Club provisioning.

Creating a club touches two external systems (record store, asset store)
with no shared transaction, so provision_club runs as an ordered saga:

    probe -> upload logo -> confirm identity -> insert club -> insert member

Compensation policy per step:
- probe: read only, nothing to undo.
- upload: no compensation. If a later step fails the object stays in the
  bucket as an orphan and is logged for cleanup.
- insert club: the last fatal step.
- insert member: best effort. Failure is logged and the club is still
  returned; a missing membership is repaired elsewhere.

No step is retried here. Callers may re-run provision_club, which starts
again from the probe.
"""
import time
import logging
from typing import Callable, List, Optional

from sportsync.core.errors import AuthError, ConflictError, StoreError, UploadError
from sportsync.database.record_store import RecordStore, RecordStoreError, UniqueViolation
from sportsync.modules.auth.schemas import Identity
from sportsync.modules.clubs.models import CLUB_TABLE, MEMBER_TABLE
from sportsync.modules.clubs.schemas import AssetUpload, ClubLogo, ClubResponse
from sportsync.modules.clubs.slug import slugify
from sportsync.modules.clubs.storage import AssetStore, AssetStoreError
from sportsync.modules.clubs.validation import logo_extension, normalize_club_name, validate_logo
from sportsync.config import settings

logger = logging.getLogger(__name__)


class ClubProvisioningService:
    def __init__(
        self,
        record_store: RecordStore,
        asset_store: AssetStore,
        identity_provider,
        clock: Callable[[], float] = time.time,
    ):
        self.record_store = record_store
        self.asset_store = asset_store
        self.identity_provider = identity_provider
        self.clock = clock
        self.logo_prefix = settings.club_logo_prefix

    def provision_club(self, name: str, logo: Optional[ClubLogo] = None) -> ClubResponse:
        """Create a club owned by the current user. Raises a CoordinatorError subclass on failure."""
        # Input checks happen before any I/O
        club_name = normalize_club_name(name)
        content_type = validate_logo(logo.content_type, logo.size) if logo is not None else None
        slug = slugify(club_name)

        self._ensure_unique(club_name, slug)

        upload = self._upload_logo(slug, logo, content_type) if logo is not None else None

        identity = self._confirm_identity()
        if identity is None:
            self._log_orphan(upload, "identity could not be confirmed")
            raise AuthError("Failed to authenticate. Please try again.")

        club = self._insert_club(club_name, slug, upload)
        logger.info(f"Club created: id={club.id} slug={club.slug}")

        # Best effort: the club stands even if this fails. Reconciling clubs
        # without a member row is handled outside this service.
        self._bootstrap_membership(club, identity)
        return club

    def list_my_clubs(self) -> List[ClubResponse]:
        """Clubs the confirmed identity is a member of."""
        identity = self._confirm_identity()
        if identity is None:
            raise AuthError("Failed to authenticate. Please try again.")
        try:
            rows = self.record_store.find_all(
                MEMBER_TABLE,
                match={"profile_id": identity.id},
                columns="club(id, name, slug, club_logo, club_invite_id)",
            )
        except RecordStoreError as e:
            raise StoreError(f"Failed to load clubs: {e}") from e
        return [ClubResponse(**row["club"]) for row in rows if row.get("club")]

    def _ensure_unique(self, club_name: str, slug: str) -> None:
        # Fast path only. Two concurrent requests can both pass this probe;
        # the unique indexes on club.name / club.slug decide in _insert_club.
        try:
            existing = self.record_store.find(
                CLUB_TABLE, any_of={"name": club_name, "slug": slug}, columns="id"
            )
        except RecordStoreError as e:
            raise StoreError(f"Failed to check existing clubs: {e}") from e
        if existing:
            raise ConflictError("A club with this name already exists.")

    def _upload_logo(self, slug: str, logo: ClubLogo, content_type: str) -> AssetUpload:
        # Timestamped so repeated attempts for the same slug never overwrite each other
        ext = logo_extension(logo.filename, content_type)
        path = f"{self.logo_prefix}/{slug}-{int(self.clock() * 1000)}.{ext}"
        try:
            stored_path = self.asset_store.upload(path, logo.content, content_type)
        except AssetStoreError as e:
            logger.error(f"Error uploading club logo to {path}: {e}")
            raise UploadError("Failed to upload club logo.") from e
        try:
            public_url = self.asset_store.get_public_url(stored_path)
        except AssetStoreError as e:
            logger.error(f"Error resolving public URL for club logo {stored_path}: {e}")
            self._log_orphan(AssetUpload(path=stored_path, public_url=""), "public URL resolution failed")
            raise UploadError("Failed to upload club logo.") from e
        return AssetUpload(path=stored_path, public_url=public_url)

    def _confirm_identity(self) -> Optional[Identity]:
        try:
            return self.identity_provider.confirm_current_identity()
        except Exception as e:
            logger.warning(f"Identity provider error: {e}")
            return None

    def _insert_club(self, club_name: str, slug: str, upload: Optional[AssetUpload]) -> ClubResponse:
        try:
            row = self.record_store.insert(CLUB_TABLE, {
                "name": club_name,
                "slug": slug,
                "club_logo": upload.public_url if upload else None,
            })
        except UniqueViolation as e:
            # Lost the race against a concurrent provisioning of the same name or slug
            self._log_orphan(upload, "club name or slug taken at insert")
            raise ConflictError("A club with this name already exists.") from e
        except RecordStoreError as e:
            logger.error(f"Error inserting club {slug}: {e}")
            self._log_orphan(upload, "club insert failed")
            raise StoreError("Failed to create a club.") from e
        return ClubResponse(**row)

    def _bootstrap_membership(self, club: ClubResponse, identity: Identity) -> None:
        try:
            self.record_store.insert(MEMBER_TABLE, {
                "club_id": club.id,
                "profile_id": identity.id,
            })
        except RecordStoreError as e:
            logger.warning(
                f"Failed to add user to club: club_id={club.id} profile_id={identity.id} error={e}"
            )

    @staticmethod
    def _log_orphan(upload: Optional[AssetUpload], reason: str) -> None:
        if upload is not None:
            logger.warning(f"Orphaned club logo left in storage ({reason}): {upload.path}")
