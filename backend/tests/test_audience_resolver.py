"""Tests for visibility and recipient resolution."""
from datetime import datetime, timezone

import pytest

from campus.domain.audience.resolver import (
    filter_for_viewer,
    filter_visible,
    is_visible,
    resolve_recipients,
)
from campus.domain.auth.models import UserRole, Viewer
from campus.domain.content.models import Announcement, Event
from campus.domain.roles.models import UserNotificationPreferences

NOW = datetime(2025, 3, 1, 9, 0, tzinfo=timezone.utc)


def make_announcement(id="a1", is_public=True, target_roles=(), author_id="teacher-1"):
    return Announcement(
        id=id,
        title="Library hours",
        content="The library closes early on Friday.",
        author_id=author_id,
        author_name="Ms. Owusu",
        role=UserRole.TEACHER,
        is_public=is_public,
        target_roles=list(target_roles),
        timestamp=NOW,
    )


def prefs(user_id, subscribed=(), allow_all=False):
    return UserNotificationPreferences(
        user_id=user_id,
        subscribed_roles=list(subscribed),
        allow_all_announcements=allow_all,
        updated_at=NOW,
    )


@pytest.mark.parametrize("viewer_roles", [set(), {"general"}, {"hnd", "masters"}])
def test_public_content_visible_to_any_role_set(viewer_roles):
    assert is_visible(make_announcement(is_public=True), viewer_roles)


@pytest.mark.parametrize(
    "viewer_roles,expected",
    [
        ({"masters"}, True),
        ({"general", "bachelor"}, True),
        ({"general"}, False),
        (set(), False),
    ],
)
def test_targeted_content_visible_on_any_shared_role(viewer_roles, expected):
    content = make_announcement(is_public=False, target_roles=["masters", "bachelor"])
    assert is_visible(content, viewer_roles) is expected


def test_targeted_content_without_roles_matches_nobody():
    content = make_announcement(is_public=False, target_roles=[])
    assert not is_visible(content, {"general", "hnd"})
    assert resolve_recipients(content, [prefs("a", ["general"])]) == set()


def test_allow_all_user_receives_any_content():
    everyone = prefs("b", [], allow_all=True)
    for content in (
        make_announcement(is_public=True),
        make_announcement(is_public=False, target_roles=["masters"]),
        make_announcement(is_public=False, target_roles=[]),
    ):
        assert "b" in resolve_recipients(content, [everyone])


def test_targeted_content_resolves_to_override_users_only():
    user_a = prefs("A", ["bachelor"], allow_all=False)
    user_b = prefs("B", ["general"], allow_all=True)
    content = make_announcement(is_public=False, target_roles=["masters"])

    assert resolve_recipients(content, [user_a, user_b]) == {"B"}


def test_public_content_resolves_to_every_preference_record():
    user_a = prefs("A", ["bachelor"], allow_all=False)
    user_b = prefs("B", ["general"], allow_all=True)
    content = make_announcement(is_public=True, target_roles=[])

    assert resolve_recipients(content, [user_a, user_b]) == {"A", "B"}


def test_empty_subscriptions_receive_nothing_targeted():
    content = make_announcement(is_public=False, target_roles=["hnd"])
    assert resolve_recipients(content, [prefs("c", [])]) == set()


def test_filter_visible_preserves_order():
    items = [
        make_announcement(id="1", is_public=False, target_roles=["hnd"]),
        make_announcement(id="2"),
        make_announcement(id="3", is_public=False, target_roles=["masters"]),
        make_announcement(id="4", is_public=False, target_roles=["masters", "hnd"]),
    ]
    assert [i.id for i in filter_visible(items, {"masters"})] == ["2", "3", "4"]


def test_filter_for_viewer_admin_and_author_see_own_items():
    hidden = make_announcement(id="h", is_public=False, target_roles=["masters"], author_id="t1")
    event = Event(
        id="e",
        title="Staff meeting",
        description="Planning",
        location="Room 4",
        type="meeting",
        organizer="Dean",
        created_by="t2",
        is_public=False,
        target_roles=["polytech"],
        timestamp=NOW,
    )

    admin = Viewer(user_id="root", role=UserRole.ADMIN)
    author = Viewer(user_id="t1", role=UserRole.TEACHER)
    student = Viewer(user_id="s1", role=UserRole.STUDENT)

    assert filter_for_viewer([hidden, event], admin, set()) == [hidden, event]
    assert filter_for_viewer([hidden, event], author, set()) == [hidden]
    assert filter_for_viewer([hidden, event], student, {"polytech"}) == [event]
