from pawsocial.core.activity import (
    can_view_activity,
    stamp_and_store,
    visible_activity,
)
from pawsocial.core.privacy_rules import (
    get_effective_rule,
    list_privacy_exceptions,
    list_privacy_settings,
    remove_privacy_exception,
    set_privacy_exception,
    set_privacy_rule,
)
from pawsocial.core.relationships import (
    block,
    follow,
    is_blocked,
    unblock,
    unfollow,
)
from pawsocial.core.visibility import resolve, resolve_for_moderation

__all__ = [
    "block",
    "can_view_activity",
    "follow",
    "get_effective_rule",
    "is_blocked",
    "list_privacy_exceptions",
    "list_privacy_settings",
    "remove_privacy_exception",
    "resolve",
    "resolve_for_moderation",
    "set_privacy_exception",
    "set_privacy_rule",
    "stamp_and_store",
    "unblock",
    "unfollow",
    "visible_activity",
]
