"""Authorization policies applied by the API layer before calling domain services."""
from campus.domain.auth.models import Viewer
from campus.domain.common.errors import AuthorizationError


def ensure_can_publish(viewer: Viewer) -> None:
    """Only teachers and admins create announcements and events."""
    if not viewer.is_staff:
        raise AuthorizationError("Only teachers and admins can publish content")


def ensure_can_modify(viewer: Viewer, author_id: str) -> None:
    """Content is edited or deleted by its author or an admin."""
    if viewer.is_admin:
        return
    if viewer.is_staff and viewer.user_id == author_id:
        return
    raise AuthorizationError("Only the author or an admin can modify this item")


def ensure_can_pin(viewer: Viewer) -> None:
    if not viewer.is_admin:
        raise AuthorizationError("Only admins can pin announcements")


def ensure_can_manage_roles(viewer: Viewer) -> None:
    if not viewer.is_admin:
        raise AuthorizationError("Only admins can manage notification roles")


def ensure_can_manage_config(viewer: Viewer) -> None:
    if not viewer.is_admin:
        raise AuthorizationError("Only admins can change runtime configuration")
