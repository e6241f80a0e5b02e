"""Audience resolution: who may see a content item, and who gets notified.

Pure functions over targeting fields; no I/O.
"""
from typing import Collection, Iterable, Protocol, Sequence, TypeVar

from campus.domain.auth.models import Viewer
from campus.domain.roles.models import UserNotificationPreferences


class Targetable(Protocol):
    """Anything carrying the isPublic/targetRoles pair."""

    is_public: bool
    target_roles: list[str]


class Authored(Targetable, Protocol):
    """Targetable content with a known author."""

    @property
    def author_id(self) -> str:
        ...


T = TypeVar("T", bound=Targetable)
A = TypeVar("A", bound=Authored)


def is_visible(content: Targetable, viewer_roles: Collection[str]) -> bool:
    """Public content is visible to everyone; otherwise any shared role suffices.

    Non-public content with an empty target set matches no viewer.
    """
    if content.is_public:
        return True
    return not set(viewer_roles).isdisjoint(content.target_roles)


def resolve_recipients(
    content: Targetable, all_preferences: Iterable[UserNotificationPreferences]
) -> set[str]:
    """User ids to notify about content."""
    recipients: set[str] = set()
    targets = set(content.target_roles)
    for prefs in all_preferences:
        if prefs.allow_all_announcements:
            recipients.add(prefs.user_id)
            continue
        if content.is_public:
            recipients.add(prefs.user_id)
            continue
        if targets.intersection(prefs.subscribed_roles):
            recipients.add(prefs.user_id)
    return recipients


def filter_visible(items: Iterable[T], viewer_roles: Collection[str]) -> list[T]:
    """Keep the visible items, preserving order."""
    roles = set(viewer_roles)
    return [item for item in items if is_visible(item, roles)]


def filter_for_viewer(items: Sequence[A], viewer: Viewer, viewer_roles: Collection[str]) -> list[A]:
    """List policy: admins see everything, authors see their own items."""
    if viewer.is_admin:
        return list(items)
    visible = {id(item) for item in filter_visible(items, viewer_roles)}
    return [item for item in items if id(item) in visible or item.author_id == viewer.user_id]
