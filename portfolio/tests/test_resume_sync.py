"""Tests for the resume profile save / load / claim protocol"""
from datetime import timedelta
from unittest.mock import patch

import pytest

from portfolio.app.services.profile_store import DuplicateNameError, ProfileStore
from portfolio.app.services.rate_limiter import RateLimiter
from portfolio.app.services.resume_sync import (
    ConflictError,
    InvalidNameError,
    InvalidRequestError,
    MissingDataError,
    NameTakenError,
    ProfileNotFoundError,
    RateLimitedError,
    ResumeSyncService,
    TimestampCheck,
    compare_timestamps,
)
from portfolio.app.utils.timeutil import to_epoch_ms

DOC = {"summary": {"zh": "你好", "en": "Hello"}}


@pytest.fixture
def service(db_session, rate_limiter):
    return ResumeSyncService(db_session, rate_limiter, conflict_tolerance_ms=2000)


# --- compare_timestamps ---

def test_compare_timestamps_not_checked_without_client_ts():
    assert compare_timestamps(10_000, None, 2000) is TimestampCheck.NOT_CHECKED
    assert compare_timestamps(10_000, 0, 2000) is TimestampCheck.NOT_CHECKED


def test_compare_timestamps_within_tolerance():
    assert compare_timestamps(12_000, 10_000, 2000) is TimestampCheck.IN_SYNC
    assert compare_timestamps(9_000, 10_000, 2000) is TimestampCheck.IN_SYNC


def test_compare_timestamps_server_newer():
    assert compare_timestamps(12_001, 10_000, 2000) is TimestampCheck.SERVER_NEWER


# --- save: create ---

def test_save_new_name_creates(service):
    result = service.save("alice", DOC, device_token="tok-a")
    assert result.action == "created"
    assert result.profile.profile_name == "alice"
    assert result.profile.device_tokens == ["tok-a"]
    assert result.updated_at_ms == to_epoch_ms(result.profile.updated_at)


def test_save_trims_name(service):
    result = service.save("  alice  ", DOC, device_token="tok-a")
    assert result.profile.profile_name == "alice"


def test_save_applies_layout_fields(service):
    result = service.save(
        "alice",
        DOC,
        layout="timeline",
        palette="navy",
        show_icons=False,
        font_scale=90,
        locale="zh",
        device_token="tok-a",
    )
    p = result.profile
    assert (p.layout, p.palette, p.show_icons, p.font_scale, p.locale) == ("timeline", "navy", False, 90, "zh")


def test_save_defaults_for_missing_layout_fields(service):
    p = service.save("alice", DOC, layout="", font_scale=0).profile
    assert (p.layout, p.palette, p.show_icons, p.font_scale, p.locale) == ("classic", "clean-blue", True, 100, "en")


@pytest.mark.parametrize("kwargs", [
    {"layout": "brutalist"},
    {"palette": "neon"},
    {"locale": "fr"},
    {"font_scale": -5},
])
def test_save_rejects_unknown_layout_values(service, kwargs):
    with pytest.raises(InvalidRequestError):
        service.save("alice", DOC, **kwargs)


# --- save: validation ---

@pytest.mark.parametrize("name", [None, "", " ", "a", "  b  ", "x" * 101, 42])
def test_save_invalid_name(service, name):
    with pytest.raises(InvalidNameError) as exc:
        service.save(name, DOC)
    assert exc.value.status_code == 400


def test_save_name_bounds_inclusive(service, clock):
    assert service.save("ab", DOC, device_token="t1").action == "created"
    assert service.save("y" * 100, DOC, device_token="t2").action == "created"


def test_save_missing_data(service):
    with pytest.raises(MissingDataError):
        service.save("alice", None)


def test_validation_failure_does_not_consume_cooldown(service):
    with pytest.raises(MissingDataError):
        service.save("alice", None, device_token="tok-a")
    assert service.save("alice", DOC, device_token="tok-a").action == "created"


# --- save: existing name ---

def test_second_create_without_token_is_name_taken(service):
    service.save("alice", DOC, device_token="tok-a")
    with pytest.raises(NameTakenError) as exc:
        service.save("alice", {"other": True})
    assert exc.value.status_code == 409
    assert exc.value.error == "name_taken"


def test_second_create_with_other_token_is_name_taken(service):
    service.save("alice", DOC, device_token="tok-a")
    with pytest.raises(NameTakenError):
        service.save("alice", {"other": True}, device_token="tok-b")


def test_profile_created_without_token_cannot_be_updated(service, clock):
    service.save("anon", DOC)
    with pytest.raises(NameTakenError):
        service.save("anon", DOC)


def test_linked_device_updates(service, clock):
    first = service.save("alice", DOC, device_token="tok-a")
    first_ts = first.updated_at_ms
    clock.advance(5000)
    second = service.save("alice", {"v": 2}, layout="modern", device_token="tok-a")
    assert second.action == "updated"
    assert second.profile.id == first.profile.id
    assert second.profile.resume_data == {"v": 2}
    assert second.profile.layout == "modern"
    assert second.updated_at_ms > first_ts


def test_update_without_last_saved_always_advances(service, clock):
    stamps = [service.save("alice", DOC, device_token="tok-a").updated_at_ms]
    for i in range(3):
        clock.advance(5000)
        stamps.append(service.save("alice", {"v": i}, device_token="tok-a").updated_at_ms)
    assert stamps == sorted(set(stamps))


# --- save: conflict ---

def _push_server_ahead(db_session, profile, ms):
    profile.updated_at = profile.updated_at + timedelta(milliseconds=ms)
    db_session.commit()
    return to_epoch_ms(profile.updated_at)


def test_conflict_when_server_newer_than_tolerance(service, db_session, clock):
    created = service.save("alice", DOC, device_token="tok-a")
    client_ts = created.updated_at_ms
    server_ts = _push_server_ahead(db_session, created.profile, 2001)

    clock.advance(5000)
    with pytest.raises(ConflictError) as exc:
        service.save("alice", {"stale": True}, device_token="tok-a", last_saved_ts=client_ts)

    err = exc.value
    assert err.status_code == 409
    assert err.server_updated_at == server_ts
    assert err.server_profile["profileName"] == "alice"
    assert err.server_profile["resumeData"] == DOC
    assert err.server_profile["updatedAt"] == server_ts
    detail = err.to_detail()
    assert detail["error"] == "conflict"
    assert detail["serverUpdatedAt"] == server_ts
    # nothing written
    assert service.load(name="alice").resume_data == DOC


def test_no_conflict_at_tolerance_boundary(service, db_session, clock):
    created = service.save("alice", DOC, device_token="tok-a")
    client_ts = created.updated_at_ms
    _push_server_ahead(db_session, created.profile, 2000)

    clock.advance(5000)
    result = service.save("alice", {"v": 2}, device_token="tok-a", last_saved_ts=client_ts)
    assert result.action == "updated"


def test_no_conflict_when_client_is_current(service, clock):
    created = service.save("alice", DOC, device_token="tok-a")
    clock.advance(5000)
    result = service.save("alice", {"v": 2}, device_token="tok-a", last_saved_ts=created.updated_at_ms)
    assert result.action == "updated"


def test_conflict_check_skipped_for_unlinked_device(service, db_session, clock):
    """An unlinked device gets name_taken, not conflict, whatever timestamp it sends."""
    created = service.save("alice", DOC, device_token="tok-a")
    _push_server_ahead(db_session, created.profile, 60_000)
    with pytest.raises(NameTakenError):
        service.save("alice", DOC, device_token="tok-b", last_saved_ts=1)


# --- save: rate limit ---

def test_rate_limited_within_window(service, clock):
    service.save("alice", DOC, device_token="tok-a")
    clock.advance(4999)
    with pytest.raises(RateLimitedError) as exc:
        service.save("alice", {"v": 2}, device_token="tok-a")
    assert exc.value.status_code == 429


def test_rate_limit_clears_after_window(service, clock):
    service.save("alice", DOC, device_token="tok-a")
    clock.advance(5000)
    assert service.save("alice", {"v": 2}, device_token="tok-a").action == "updated"


def test_rate_limit_not_applied_without_token(db_session):
    service = ResumeSyncService(db_session, RateLimiter(5000, clock=lambda: 0.0))
    service.save("one", DOC)
    service.save("two", DOC)


# --- load ---

def test_load_requires_name_or_token(service):
    with pytest.raises(InvalidRequestError):
        service.load()


def test_load_by_name_not_found_returns_none(service):
    assert service.load(name="nobody") is None


def test_load_by_name(service):
    service.save("alice", DOC, device_token="tok-a")
    assert service.load(name="alice").resume_data == DOC


def test_load_by_token(service):
    service.save("alice", DOC, device_token="tok-a")
    assert service.load(device_token="tok-a").profile_name == "alice"
    assert service.load(device_token="tok-zzz") is None


def test_load_name_takes_precedence(service, clock):
    service.save("alice", DOC, device_token="tok-a")
    service.save("bob", {"bob": True}, device_token="tok-b")
    assert service.load(name="bob", device_token="tok-a").profile_name == "bob"


# --- claim ---

@pytest.mark.parametrize("name,token", [(None, "tok"), ("", "tok"), ("alice", None), ("alice", "")])
def test_claim_requires_both(service, name, token):
    with pytest.raises(InvalidRequestError):
        service.claim(name, token)


def test_claim_unknown_profile(service):
    with pytest.raises(ProfileNotFoundError) as exc:
        service.claim("nobody", "tok-b")
    assert exc.value.status_code == 404


def test_claim_is_idempotent(service):
    service.save("alice", DOC, device_token="tok-a")
    first = service.claim("alice", "tok-b")
    assert first.action == "linked"
    tokens_after_first = list(first.profile.device_tokens)
    second = service.claim("alice", "tok-b")
    assert second.profile.device_tokens == tokens_after_first == ["tok-a", "tok-b"]


def test_claim_then_save_updates(service, clock):
    """Device A creates, B is refused, B claims, B saves."""
    assert service.save("alice", DOC, device_token="tok-a").action == "created"
    with pytest.raises(NameTakenError):
        service.save("alice", {"from": "b"}, device_token="tok-b")
    assert service.claim("alice", "tok-b").action == "linked"
    clock.advance(5000)
    result = service.save("alice", {"from": "b"}, device_token="tok-b")
    assert result.action == "updated"
    assert result.profile.resume_data == {"from": "b"}


def test_create_race_lost_at_insert_is_name_taken(service):
    """Another device inserted the name between lookup and insert; the unique constraint wins."""
    with patch.object(ProfileStore, "find_by_name", return_value=None), \
         patch.object(ProfileStore, "insert", side_effect=DuplicateNameError("bob")):
        with pytest.raises(NameTakenError) as exc:
            service.save("bob", DOC, device_token="tok-b")
    assert exc.value.error == "name_taken"
    assert exc.value.status_code == 409
    assert isinstance(exc.value.__cause__, DuplicateNameError)


@pytest.mark.parametrize("token", [123, ["tok-a"], {"t": 1}])
def test_save_non_string_token_is_invalid_request(service, token):
    with pytest.raises(InvalidRequestError):
        service.save("alice", DOC, device_token=token)
