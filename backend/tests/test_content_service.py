"""Tests for the announcement/event content service."""
from datetime import datetime, timedelta, timezone

import pytest

from campus.domain.auth.models import UserRole, Viewer
from campus.domain.common.errors import NotFoundError, ValidationError
from campus.domain.content.models import Announcement, Event, announcement_sort_key, event_sort_key
from campus.domain.content.services import ContentService
from campus.infra.db.repositories.content_repo import announcement_repository, event_repository
from campus.services.notification_service import NotificationFanOut


def announcement_data(**overrides):
    data = {
        "title": "Exam timetable",
        "content": "The timetable is on the notice board.",
        "author_id": "teacher-1",
        "author_name": "Mr. Mensah",
        "role": UserRole.TEACHER,
        "category": "Academic",
    }
    data.update(overrides)
    return data


def event_data(**overrides):
    data = {
        "title": "Career fair",
        "description": "Meet employers",
        "location": "Main hall",
        "type": "career",
        "organizer": "Careers office",
        "created_by": "teacher-1",
    }
    data.update(overrides)
    return data


class _BrokenFanOut:
    """Fan-out that always fails."""

    def __init__(self):
        self.calls = 0

    async def fan_out(self, content, all_preferences):
        self.calls += 1
        raise RuntimeError("notification store down")


@pytest.fixture
def fan_out(notification_repo):
    return NotificationFanOut(notification_repo)


@pytest.fixture
def announcements(store, role_repo, preferences, fan_out, registry):
    return ContentService(
        model=Announcement,
        repo=announcement_repository(store),
        role_repo=role_repo,
        preferences=preferences,
        fan_out=fan_out,
        sort_key=announcement_sort_key,
    )


@pytest.fixture
def events(store, role_repo, preferences, fan_out, registry):
    return ContentService(
        model=Event,
        repo=event_repository(store),
        role_repo=role_repo,
        preferences=preferences,
        fan_out=fan_out,
        sort_key=event_sort_key,
    )


async def test_create_assigns_id_and_timestamp(announcements):
    created = await announcements.create(announcement_data())
    assert created.id
    assert created.timestamp is not None
    assert created.is_pinned is False
    assert (await announcements.get(created.id)).title == "Exam timetable"


async def test_create_targeted_without_roles_fails_before_write(announcements):
    with pytest.raises(ValidationError):
        await announcements.create(announcement_data(is_public=False, target_roles=[]))
    assert await announcements.list_all() == []


async def test_create_rejects_unknown_target_role(announcements):
    with pytest.raises(ValidationError):
        await announcements.create(announcement_data(is_public=False, target_roles=["ghost"]))
    assert await announcements.list_all() == []


async def test_create_rejects_missing_fields(announcements):
    with pytest.raises(ValidationError):
        await announcements.create({"title": "No body"})


async def test_public_content_drops_target_roles(announcements):
    created = await announcements.create(announcement_data(is_public=True, target_roles=["hnd"]))
    assert created.target_roles == []


async def test_create_notifies_resolved_recipients(announcements, preferences, inbox):
    await preferences.update_preferences("alice", subscribed_roles=["bachelor"], allow_all_announcements=False)
    await preferences.update_preferences("bob", subscribed_roles=["masters"], allow_all_announcements=False)
    await preferences.update_preferences("cara", subscribed_roles=[], allow_all_announcements=True)

    created = await announcements.create(
        announcement_data(is_public=False, target_roles=["masters", "masters"])
    )

    assert created.target_roles == ["masters"]
    assert await inbox.unread_count("alice") == 0
    for user_id in ("bob", "cara"):
        [notification] = await inbox.list_notifications(user_id)
        assert notification.related_id == created.id
        assert notification.type.value == "announcement"
        assert notification.title == "New Announcement"
        assert notification.message == "Exam timetable"
        assert notification.category == "Academic"
        assert notification.author_name == "Mr. Mensah"
        assert notification.is_read is False


async def test_fan_out_failure_does_not_fail_create(store, role_repo, preferences, registry):
    broken = _BrokenFanOut()
    service = ContentService(
        model=Announcement,
        repo=announcement_repository(store),
        role_repo=role_repo,
        preferences=preferences,
        fan_out=broken,
        sort_key=announcement_sort_key,
    )

    created = await service.create(announcement_data())

    assert broken.calls == 1
    assert (await service.get(created.id)).id == created.id


async def test_update_does_not_renotify(announcements, preferences, inbox):
    await preferences.get_preferences("alice")
    created = await announcements.create(announcement_data())
    assert await inbox.unread_count("alice") == 1

    updated = await announcements.update(created.id, {"title": "Exam timetable (revised)"})

    assert updated.title == "Exam timetable (revised)"
    assert updated.timestamp == created.timestamp
    assert await inbox.unread_count("alice") == 1


async def test_update_enforces_targeting(announcements):
    created = await announcements.create(announcement_data())
    with pytest.raises(ValidationError):
        await announcements.update(created.id, {"is_public": False})

    updated = await announcements.update(created.id, {"is_public": False, "target_roles": ["hnd"]})
    assert updated.is_public is False
    assert updated.target_roles == ["hnd"]


async def test_update_rejects_protected_fields(announcements):
    created = await announcements.create(announcement_data())
    with pytest.raises(ValidationError):
        await announcements.update(created.id, {"author_id": "someone-else"})


async def test_update_missing_not_found(announcements):
    with pytest.raises(NotFoundError):
        await announcements.update("missing", {"title": "x"})


async def test_delete_twice_is_an_error(announcements):
    created = await announcements.create(announcement_data())
    await announcements.delete(created.id)
    with pytest.raises(NotFoundError):
        await announcements.delete(created.id)
    with pytest.raises(NotFoundError):
        await announcements.get(created.id)


async def test_announcements_pinned_first_then_newest(announcements):
    first = await announcements.create(announcement_data(title="first"))
    second = await announcements.create(announcement_data(title="second"))
    third = await announcements.create(announcement_data(title="third"))

    await announcements.toggle_pin(first.id)

    assert [a.title for a in await announcements.list_all()] == ["first", "third", "second"]
    unpinned = await announcements.toggle_pin(first.id)
    assert unpinned.is_pinned is False
    assert [a.id for a in await announcements.list_all()] == [third.id, second.id, first.id]


async def test_events_cannot_be_pinned(events):
    created = await events.create(event_data())
    with pytest.raises(ValidationError):
        await events.toggle_pin(created.id)


async def test_events_soonest_first_undated_last(events):
    start = datetime(2025, 5, 1, 10, 0, tzinfo=timezone.utc)
    await events.create(event_data(title="undated"))
    await events.create(event_data(title="later", start_time=start + timedelta(days=3)))
    await events.create(event_data(title="sooner", start_time=start))

    assert [e.title for e in await events.list_all()] == ["sooner", "later", "undated"]


async def test_event_notification_uses_type_and_organizer(events, preferences, inbox):
    await preferences.get_preferences("alice")
    created = await events.create(event_data())

    [notification] = await inbox.list_notifications("alice")
    assert notification.type.value == "event"
    assert notification.title == "New Event"
    assert notification.related_id == created.id
    assert notification.category == "career"
    assert notification.author_name == "Careers office"


async def test_list_visible_applies_viewer_policy(announcements):
    public = await announcements.create(announcement_data(title="public"))
    masters = await announcements.create(
        announcement_data(title="masters", is_public=False, target_roles=["masters"])
    )

    student = Viewer(user_id="s1", role=UserRole.STUDENT)
    author = Viewer(user_id="teacher-1", role=UserRole.TEACHER)

    assert [a.id for a in await announcements.list_visible(student, ["general"])] == [public.id]
    assert {a.id for a in await announcements.list_visible(student, ["masters"])} == {public.id, masters.id}
    assert {a.id for a in await announcements.list_visible(author, [])} == {public.id, masters.id}
