import pytest

from pawsocial.core import privacy_rules, relationships
from pawsocial.core.activity import can_view_activity, stamp_and_store, visible_activity
from pawsocial.core.constants import Reason
from pawsocial.core.errors import InvalidIdentifierError, InvalidRuleError, NotFoundError
from pawsocial.models.activity import ActivityRecord, AppEvent


def test_stamp_uses_activity_rule(db, people):
    privacy_rules.set_privacy_rule(db, "bob", "activity", "friends")

    record = stamp_and_store(db, "bob", "created", "post", "post-1")

    assert record.visibility == "friends"
    assert record.actor_id == "bob"
    assert record.subject_id == "bob"


def test_stamp_defaults_to_followers(db, people):
    record = stamp_and_store(db, "bob", "created", "pet")

    assert record.visibility == "followers"


def test_requested_visibility_wins(db, people):
    privacy_rules.set_privacy_rule(db, "bob", "activity", "private")

    record = stamp_and_store(db, "bob", "created", "post", requested_visibility="public")

    assert record.visibility == "public"


def test_stamp_ignores_other_scopes(db, people):
    privacy_rules.set_privacy_rule(db, "bob", "posts", "public")

    assert stamp_and_store(db, "bob", "created", "post").visibility == "followers"


def test_stamp_validation(db, people):
    with pytest.raises(InvalidRuleError):
        stamp_and_store(db, "bob", "created", "post", requested_visibility="everyone")
    with pytest.raises(InvalidIdentifierError):
        stamp_and_store(db, "bob", "", "post")
    with pytest.raises(NotFoundError):
        stamp_and_store(db, "ghost", "created", "post")
    assert db.query(ActivityRecord).count() == 0


def test_stamp_writes_audit_event(db, people):
    stamp_and_store(db, "bob", "liked", "post", "post-9", actor_id="alice")

    event = db.query(AppEvent).one()
    assert event.account_id == "alice"
    assert event.event == "activity_log_success"
    assert event.meta == {"verb": "liked", "object_type": "post", "visibility": "followers"}


def test_stamped_visibility_survives_rule_change(db, people):
    relationships.follow(db, "alice", "bob")
    record = stamp_and_store(db, "bob", "created", "post")

    privacy_rules.set_privacy_rule(db, "bob", "activity", "private")

    db.expire_all()
    stored = db.query(ActivityRecord).filter_by(id=record.id).one()
    assert stored.visibility == "followers"
    assert can_view_activity(db, "alice", stored).allowed

    # New entries pick up the new rule
    assert stamp_and_store(db, "bob", "created", "post").visibility == "private"


def test_reader_checks_use_live_relationships(db, people):
    relationships.follow(db, "alice", "bob")
    record = stamp_and_store(db, "bob", "created", "post")

    assert can_view_activity(db, "alice", record).allowed
    assert not can_view_activity(db, "carol", record).allowed

    relationships.block(db, "bob", "alice")

    result = can_view_activity(db, "alice", record)
    assert not result.allowed
    assert result.reason == Reason.BLOCKED


def test_owner_sees_private_activity(db, people):
    record = stamp_and_store(db, "bob", "created", "post", requested_visibility="private")

    assert can_view_activity(db, "bob", record).reason == Reason.OWNER


def test_stamped_custom_consults_exceptions(db, people):
    record = stamp_and_store(db, "bob", "created", "post", requested_visibility="custom")
    privacy_rules.set_privacy_exception(db, "bob", "activity", "dave", "allow")

    assert can_view_activity(db, "dave", record).allowed
    assert can_view_activity(db, "erin", record).reason == Reason.NOT_LISTED


def test_visible_activity_filters_per_record(db, people):
    relationships.follow(db, "alice", "bob")
    public = stamp_and_store(db, "bob", "created", "post", requested_visibility="public")
    followers = stamp_and_store(db, "bob", "created", "pet")
    hidden = stamp_and_store(db, "bob", "created", "event", requested_visibility="private")

    assert [r.id for r in visible_activity(db, "alice", "bob")] == [followers.id, public.id]
    assert [r.id for r in visible_activity(db, "carol", "bob")] == [public.id]
    assert [r.id for r in visible_activity(db, "bob", "bob")] == [
        hidden.id, followers.id, public.id,
    ]


def test_visible_activity_empty_when_blocked(db, people):
    stamp_and_store(db, "bob", "created", "post", requested_visibility="public")
    relationships.block(db, "alice", "bob")

    assert visible_activity(db, "alice", "bob") == []


def test_failed_stamp_leaves_error_event(db, people):
    with pytest.raises(InvalidRuleError):
        stamp_and_store(db, "bob", "created", "post", requested_visibility="everyone")

    assert db.query(ActivityRecord).count() == 0
    event = db.query(AppEvent).one()
    assert event.event == "activity_log_error"
    assert event.account_id == "bob"
    assert event.meta["verb"] == "created"
    assert "everyone" in event.meta["error"]


def test_failed_stamp_for_unknown_account_is_audited_without_owner(db, people):
    with pytest.raises(NotFoundError):
        stamp_and_store(db, "bob", "liked", "post", actor_id="ghost")

    event = db.query(AppEvent).one()
    assert event.event == "activity_log_error"
    assert event.account_id is None
    assert db.query(ActivityRecord).count() == 0


def test_visible_activity_limit_applies_after_filtering(db, people):
    relationships.follow(db, "alice", "bob")
    older = stamp_and_store(db, "bob", "created", "post", requested_visibility="public")
    for _ in range(3):
        stamp_and_store(db, "bob", "created", "post", requested_visibility="private")

    assert [r.id for r in visible_activity(db, "carol", "bob", limit=1)] == [older.id]
    assert len(visible_activity(db, "bob", "bob", limit=2)) == 2


def test_visible_activity_scans_past_one_batch(db, people, monkeypatch):
    monkeypatch.setattr("pawsocial.core.activity.FEED_BATCH_SIZE", 2)
    first = stamp_and_store(db, "bob", "created", "post", requested_visibility="public")
    for _ in range(5):
        stamp_and_store(db, "bob", "created", "post", requested_visibility="private")
    last = stamp_and_store(db, "bob", "created", "post", requested_visibility="public")

    assert [r.id for r in visible_activity(db, "carol", "bob")] == [last.id, first.id]


def test_visible_activity_zero_limit(db, people):
    stamp_and_store(db, "bob", "created", "post", requested_visibility="public")

    assert visible_activity(db, "carol", "bob", limit=0) == []
    assert len(visible_activity(db, "carol", "bob")) == 1
