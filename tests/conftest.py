import pytest

from sportsync.modules.auth.schemas import Identity
from sportsync.modules.clubs.service import ClubProvisioningService
from sportsync.modules.invites.service import InviteService
from tests.fakes import FakeAssetStore, FakeIdentityProvider, FakeRecordStore

PROFILE_ID = "7d5c1f0e-0b8a-4c1e-9a57-3f1a2b6c9d10"


@pytest.fixture
def record_store():
    return FakeRecordStore()


@pytest.fixture
def asset_store():
    return FakeAssetStore()


@pytest.fixture
def identity():
    return Identity(id=PROFILE_ID, email="coach@example.com")


@pytest.fixture
def identity_provider(identity):
    return FakeIdentityProvider(identity)


@pytest.fixture
def club_service(record_store, asset_store, identity_provider):
    return ClubProvisioningService(
        record_store, asset_store, identity_provider, clock=lambda: 1700000000.0
    )


@pytest.fixture
def invite_service(record_store):
    return InviteService(record_store)
