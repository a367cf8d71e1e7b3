import pytest

from pawsocial.core import privacy_rules
from pawsocial.core.constants import ExceptionDecision, Rule, Scope
from pawsocial.core.errors import (
    InvalidDecisionError,
    InvalidRuleError,
    InvalidScopeError,
    NotFoundError,
    SelfReferenceError,
)
from pawsocial.models.privacy import PrivacyRule


def test_missing_rule_defaults_to_followers(db, people):
    for scope in Scope:
        assert privacy_rules.get_effective_rule(db, "bob", scope) == Rule.FOLLOWERS


def test_set_rule_upserts(db, people):
    privacy_rules.set_privacy_rule(db, "bob", "posts", "public")
    privacy_rules.set_privacy_rule(db, "bob", "posts", "friends")

    assert db.query(PrivacyRule).filter_by(owner_id="bob").count() == 1
    assert privacy_rules.get_effective_rule(db, "bob", "posts") == Rule.FRIENDS


def test_rules_are_per_scope(db, people):
    privacy_rules.set_privacy_rule(db, "bob", Scope.PROFILE, Rule.PRIVATE)

    assert privacy_rules.get_effective_rule(db, "bob", "profile") == Rule.PRIVATE
    assert privacy_rules.get_effective_rule(db, "bob", "pets") == Rule.FOLLOWERS


def test_list_settings_fills_defaults(db, people):
    privacy_rules.set_privacy_rule(db, "bob", "activity", "private")

    settings = privacy_rules.list_privacy_settings(db, "bob")

    assert settings["activity"] == "private"
    assert settings["posts"] == "followers"
    assert set(settings) == {s.value for s in Scope}


@pytest.mark.parametrize(
    "scope,rule,error",
    [
        ("wall", "public", InvalidScopeError),
        ("posts", "everyone", InvalidRuleError),
        (None, "public", InvalidScopeError),
    ],
)
def test_set_rule_validates_enums(db, people, scope, rule, error):
    with pytest.raises(error):
        privacy_rules.set_privacy_rule(db, "bob", scope, rule)


def test_set_rule_for_unknown_owner(db, people):
    with pytest.raises(NotFoundError):
        privacy_rules.set_privacy_rule(db, "ghost", "posts", "public")


def test_exception_upsert_and_lookup(db, people):
    privacy_rules.set_privacy_exception(db, "bob", "posts", "dave", "allow")
    assert privacy_rules.get_exception(db, "bob", "posts", "dave") == ExceptionDecision.ALLOW

    privacy_rules.set_privacy_exception(db, "bob", "posts", "dave", "deny")
    assert privacy_rules.get_exception(db, "bob", "posts", "dave") == ExceptionDecision.DENY

    assert privacy_rules.get_exception(db, "bob", "pets", "dave") is None
    assert len(privacy_rules.list_privacy_exceptions(db, "bob")) == 1


def test_exception_validation(db, people):
    with pytest.raises(InvalidDecisionError):
        privacy_rules.set_privacy_exception(db, "bob", "posts", "dave", "maybe")
    with pytest.raises(SelfReferenceError):
        privacy_rules.set_privacy_exception(db, "bob", "posts", "bob", "allow")
    with pytest.raises(NotFoundError):
        privacy_rules.set_privacy_exception(db, "bob", "posts", "ghost", "allow")


def test_remove_exception(db, people):
    privacy_rules.set_privacy_exception(db, "bob", "posts", "dave", "allow")

    assert privacy_rules.remove_privacy_exception(db, "bob", "posts", "dave") is True
    assert privacy_rules.remove_privacy_exception(db, "bob", "posts", "dave") is False
    assert privacy_rules.get_exception(db, "bob", "posts", "dave") is None


def test_list_exceptions_filtered_by_scope(db, people):
    privacy_rules.set_privacy_exception(db, "bob", "posts", "dave", "allow")
    privacy_rules.set_privacy_exception(db, "bob", "pets", "erin", "deny")

    rows = privacy_rules.list_privacy_exceptions(db, "bob", "pets")

    assert [(r.viewer_id, r.decision) for r in rows] == [("erin", "deny")]
