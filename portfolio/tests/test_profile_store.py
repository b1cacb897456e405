"""Tests for ProfileStore lookups and writes"""
from datetime import timedelta

import pytest

from portfolio.app.models.resume_profile import ResumeProfileDevice
from portfolio.app.services.profile_store import DuplicateNameError, ProfileStore
from portfolio.app.utils.timeutil import to_epoch_ms

DOC = {"name": {"zh": "爱丽丝", "en": "Alice"}, "email": "alice@example.com"}


@pytest.fixture
def store(db_session):
    return ProfileStore(db_session)


def test_insert_and_find_by_name(store):
    created = store.insert("alice", {"resume_data": DOC}, device_token="tok-a")
    found = store.find_by_name("alice")
    assert found is not None
    assert found.id == created.id
    assert found.resume_data == DOC
    assert found.device_tokens == ["tok-a"]
    assert found.layout == "classic"
    assert found.palette == "clean-blue"
    assert found.show_icons is True
    assert found.font_scale == 100
    assert found.locale == "en"


def test_find_by_name_is_case_sensitive(store):
    store.insert("alice", {"resume_data": DOC})
    assert store.find_by_name("Alice") is None


def test_insert_without_token_links_no_device(store):
    profile = store.insert("anon", {"resume_data": DOC}, device_token=None)
    assert profile.device_tokens == []


def test_insert_duplicate_name_raises(store):
    store.insert("alice", {"resume_data": DOC}, device_token="tok-a")
    with pytest.raises(DuplicateNameError):
        store.insert("alice", {"resume_data": {}}, device_token="tok-b")
    # original row untouched
    assert store.find_by_name("alice").resume_data == DOC


def test_insert_ignores_unknown_fields(store):
    profile = store.insert("alice", {"resume_data": DOC, "profile_name": "mallory", "id": 99})
    assert profile.profile_name == "alice"
    assert profile.id != 99


def test_update_advances_updated_at(store):
    profile = store.insert("alice", {"resume_data": DOC})
    before = to_epoch_ms(profile.updated_at)
    updated = store.update(profile, {"resume_data": {"v": 2}, "layout": "modern"})
    assert updated.resume_data == {"v": 2}
    assert updated.layout == "modern"
    assert to_epoch_ms(updated.updated_at) > before


def test_update_strictly_advances_even_if_clock_behind(store, db_session):
    """A stored timestamp in the future still moves forward by at least 1ms."""
    profile = store.insert("alice", {"resume_data": DOC})
    profile.updated_at = profile.updated_at + timedelta(hours=1)
    db_session.commit()
    before = to_epoch_ms(profile.updated_at)
    updated = store.update(profile, {"resume_data": {"v": 2}})
    assert to_epoch_ms(updated.updated_at) == before + 1


def test_update_keeps_created_at(store):
    profile = store.insert("alice", {"resume_data": DOC})
    created = profile.created_at
    store.update(profile, {"resume_data": {"v": 2}})
    assert profile.created_at == created


def test_find_latest_by_device_token(store, db_session):
    older = store.insert("work", {"resume_data": DOC}, device_token="tok-a")
    newer = store.insert("personal", {"resume_data": DOC}, device_token="tok-a")
    store.insert("other", {"resume_data": DOC}, device_token="tok-b")
    newer.updated_at = newer.updated_at - timedelta(minutes=1)
    older.updated_at = newer.updated_at - timedelta(minutes=5)
    db_session.commit()

    assert store.find_latest_by_device_token("tok-a").id == newer.id

    store.update(older, {"resume_data": {"v": 2}})
    assert store.find_latest_by_device_token("tok-a").id == older.id


def test_find_latest_by_device_token_exact_match_only(store):
    """Membership is exact: a token that is a substring of a linked one does not match."""
    store.insert("alice", {"resume_data": DOC}, device_token="tok-abc")
    assert store.find_latest_by_device_token("tok-a") is None
    assert store.find_latest_by_device_token("abc") is None


def test_link_device_adds_token(store):
    store.insert("alice", {"resume_data": DOC}, device_token="tok-a")
    profile = store.link_device("alice", "tok-b")
    assert profile.device_tokens == ["tok-a", "tok-b"]


def test_link_device_idempotent(store, db_session):
    store.insert("alice", {"resume_data": DOC}, device_token="tok-a")
    store.link_device("alice", "tok-b")
    store.link_device("alice", "tok-b")
    rows = db_session.query(ResumeProfileDevice).filter(ResumeProfileDevice.device_token == "tok-b").all()
    assert len(rows) == 1


def test_link_device_does_not_touch_updated_at(store):
    profile = store.insert("alice", {"resume_data": DOC}, device_token="tok-a")
    before = profile.updated_at
    linked = store.link_device("alice", "tok-b")
    assert linked.updated_at == before


def test_link_device_unknown_name(store):
    assert store.link_device("nobody", "tok-a") is None
