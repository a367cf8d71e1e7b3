from enum import Enum


class Scope(str, Enum):
    """Content categories, each with its own visibility rule."""

    PROFILE = "profile"
    POSTS = "posts"
    PETS = "pets"
    PHOTOS = "photos"
    REELS = "reels"
    ACTIVITY = "activity"


class Rule(str, Enum):
    PUBLIC = "public"
    FOLLOWERS = "followers"
    FRIENDS = "friends"
    PRIVATE = "private"
    CUSTOM = "custom"


class ExceptionDecision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class Decision(str, Enum):
    ALLOW = "allow"
    DENY = "deny"


class Reason(str, Enum):
    """Why a resolution came out the way it did."""

    OWNER = "owner"
    BLOCKED = "blocked"
    PUBLIC = "public"
    PRIVATE = "private"
    FOLLOWER = "follower"
    NOT_FOLLOWER = "not_follower"
    FRIEND = "friend"
    NOT_FRIEND = "not_friend"
    EXCEPTION_ALLOW = "exception_allow"
    EXCEPTION_DENY = "exception_deny"
    NOT_LISTED = "not_listed"
    MODERATION = "moderation"


class Role(str, Enum):
    USER = "user"
    ADMIN = "admin"
    SUPER_ADMIN = "super_admin"


class RelationshipStatus(str, Enum):
    FOLLOWED = "followed"
    ALREADY_FOLLOWING = "already_following"
    UNFOLLOWED = "unfollowed"
    NOT_FOLLOWING = "not_following"
    BLOCKED = "blocked"
    ALREADY_BLOCKED = "already_blocked"
    UNBLOCKED = "unblocked"
    NOT_BLOCKED = "not_blocked"


# Absent PrivacyRule row
DEFAULT_RULE = Rule.FOLLOWERS

MODERATOR_ROLES = frozenset({Role.ADMIN.value, Role.SUPER_ADMIN.value})
