from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from sportsync.database.record_store import (
    RecordStoreError, SupabaseRecordStore, UniqueViolation, build_or_filter,
)


def _api_error(code, message="boom"):
    return APIError({"message": message, "code": code, "details": None, "hint": None})


def _result(data):
    result = MagicMock()
    result.data = data
    return result


@pytest.fixture
def supabase():
    return MagicMock()


def test_build_or_filter_quotes_values():
    assert build_or_filter({"name": "FC Reds", "slug": "fc-reds"}) == 'name.eq."FC Reds",slug.eq."fc-reds"'
    assert build_or_filter({"name": 'A, "B" (C)'}) == 'name.eq."A, \\"B\\" (C)"'


def test_find_applies_match_and_or(supabase):
    query = supabase.table.return_value.select.return_value
    query.eq.return_value = query
    query.or_.return_value = query
    query.limit.return_value.execute.return_value = _result([{"id": 3}])

    row = SupabaseRecordStore(supabase).find(
        "club", match={"id": 3}, any_of={"name": "FC Reds", "slug": "fc-reds"}, columns="id"
    )

    assert row == {"id": 3}
    supabase.table.assert_called_with("club")
    supabase.table.return_value.select.assert_called_with("id")
    query.eq.assert_called_with("id", 3)
    query.or_.assert_called_with('name.eq."FC Reds",slug.eq."fc-reds"')
    query.limit.assert_called_with(1)


def test_find_returns_none_when_empty(supabase):
    supabase.table.return_value.select.return_value.limit.return_value.execute.return_value = _result([])
    assert SupabaseRecordStore(supabase).find("club") is None


def test_insert_returns_first_row(supabase):
    supabase.table.return_value.insert.return_value.execute.return_value = _result([{"id": 1, "token": "t"}])
    assert SupabaseRecordStore(supabase).insert("club_invite", {"token": "t"}) == {"id": 1, "token": "t"}


def test_insert_unique_violation(supabase):
    supabase.table.return_value.insert.return_value.execute.side_effect = _api_error(
        "23505", 'duplicate key value violates unique constraint "club_name_key"'
    )
    with pytest.raises(UniqueViolation, match="club_name_key"):
        SupabaseRecordStore(supabase).insert("club", {"name": "FC Reds"})


def test_insert_other_api_error(supabase):
    supabase.table.return_value.insert.return_value.execute.side_effect = _api_error("42501", "permission denied")
    with pytest.raises(RecordStoreError) as exc:
        SupabaseRecordStore(supabase).insert("club", {"name": "FC Reds"})
    assert not isinstance(exc.value, UniqueViolation)


def test_insert_network_error(supabase):
    supabase.table.return_value.insert.return_value.execute.side_effect = ConnectionError("reset")
    with pytest.raises(RecordStoreError, match="reset"):
        SupabaseRecordStore(supabase).insert("member", {"club_id": 1})


def test_insert_without_returned_row(supabase):
    supabase.table.return_value.insert.return_value.execute.return_value = _result([])
    with pytest.raises(RecordStoreError):
        SupabaseRecordStore(supabase).insert("member", {"club_id": 1})


def test_update_by_id(supabase):
    chain = supabase.table.return_value.update.return_value.eq.return_value
    chain.execute.return_value = _result([{"id": 7, "club_invite_id": 2}])

    row = SupabaseRecordStore(supabase).update("club", 7, {"club_invite_id": 2})

    assert row == {"id": 7, "club_invite_id": 2}
    supabase.table.return_value.update.assert_called_with({"club_invite_id": 2})
    supabase.table.return_value.update.return_value.eq.assert_called_with("id", 7)


def test_update_missing_row_returns_none(supabase):
    supabase.table.return_value.update.return_value.eq.return_value.execute.return_value = _result([])
    assert SupabaseRecordStore(supabase).update("club", 7, {"club_invite_id": 2}) is None
