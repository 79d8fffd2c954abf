import logging
import uuid

import pytest

from sportsync.core.errors import StoreError
from sportsync.modules.invites.service import InviteService, build_invite_url


@pytest.fixture
def club(record_store):
    return record_store.insert("club", {"name": "FC Warriors", "slug": "fc-warriors", "club_logo": None})


def test_get_returns_none_without_invite(invite_service, club):
    assert invite_service.get_invite_token(club["id"]) is None


def test_get_returns_none_for_unknown_club(invite_service):
    assert invite_service.get_invite_token(999) is None


def test_get_has_no_side_effects(invite_service, record_store, club):
    invite_service.get_invite_token(club["id"])
    assert record_store.rows("club_invite") == []
    assert record_store.calls[("insert", "club_invite")] == 0
    assert record_store.calls[("update", "club")] == 0


def test_issue_then_get_returns_same_token(invite_service, club):
    token = invite_service.issue_invite_token(club["id"])

    uuid.UUID(token)
    assert invite_service.get_invite_token(club["id"]) == token


def test_issue_twice_repoints_club_and_keeps_old_invite(invite_service, record_store, club):
    first = invite_service.issue_invite_token(club["id"])
    second = invite_service.issue_invite_token(club["id"])

    assert first != second
    assert invite_service.get_invite_token(club["id"]) == second

    invites = record_store.rows("club_invite")
    assert len(invites) == 2
    first_invite = next(i for i in invites if i["token"] == first)
    club_row = record_store.find("club", match={"id": club["id"]})
    assert club_row["club_invite_id"] != first_invite["id"]
    assert invite_service.get_invite(first_invite["id"]).token == first


def test_insert_failure_skips_club_update(invite_service, record_store, club):
    record_store.fail("insert", "club_invite")

    with pytest.raises(StoreError):
        invite_service.issue_invite_token(club["id"])
    assert record_store.calls[("update", "club")] == 0
    assert record_store.find("club", match={"id": club["id"]})["club_invite_id"] is None


def test_update_failure_leaves_orphaned_invite(invite_service, record_store, club, caplog):
    record_store.fail("update", "club")

    with caplog.at_level(logging.WARNING):
        with pytest.raises(StoreError):
            invite_service.issue_invite_token(club["id"])

    assert len(record_store.rows("club_invite")) == 1
    assert invite_service.get_invite_token(club["id"]) is None
    assert "Orphaned club_invite" in caplog.text


def test_issue_for_unknown_club_is_store_error(invite_service, record_store):
    with pytest.raises(StoreError, match="not found"):
        invite_service.issue_invite_token(404)
    assert len(record_store.rows("club_invite")) == 1


def test_get_surfaces_store_failures(invite_service, record_store, club):
    record_store.fail("find", "club")
    with pytest.raises(StoreError):
        invite_service.get_invite_token(club["id"])


def test_custom_token_factory(record_store, club):
    tokens = iter(["tok-1", "tok-2"])
    service = InviteService(record_store, token_factory=lambda: next(tokens))

    assert service.issue_invite_token(club["id"]) == "tok-1"
    assert service.issue_invite_token(club["id"]) == "tok-2"


def test_build_invite_url(monkeypatch):
    from sportsync.config import settings
    monkeypatch.setattr(settings, "app_url", "https://sportsync.example/")
    assert build_invite_url("abc") == "https://sportsync.example/auth/sign-up?invite=abc"
