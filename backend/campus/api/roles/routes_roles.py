"""Notification role API routes."""
from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from campus.api.deps import get_current_viewer, get_role_registry
from campus.domain.auth.models import Viewer
from campus.domain.auth.policies import ensure_can_manage_roles
from campus.domain.roles.models import Role, RoleUpdate
from campus.domain.roles.services import RoleRegistry

router = APIRouter()


class RoleCreateRequest(BaseModel):
    """Create role request."""
    name: str
    description: str
    color: str = "#6B7280"


class RoleUpdateRequest(BaseModel):
    """Update role request; omitted fields are left unchanged."""
    name: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None


@router.get("", response_model=List[Role])
async def list_roles(
    viewer: Viewer = Depends(get_current_viewer),
    registry: RoleRegistry = Depends(get_role_registry),
):
    """List all notification roles (default and custom)."""
    return await registry.list_roles()


@router.get("/{role_id}", response_model=Role)
async def get_role(
    role_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    registry: RoleRegistry = Depends(get_role_registry),
):
    return await registry.get_role(role_id)


@router.post("", response_model=Role, status_code=201)
async def create_role(
    request: RoleCreateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    registry: RoleRegistry = Depends(get_role_registry),
):
    """Create a custom role (admin only)."""
    ensure_can_manage_roles(viewer)
    return await registry.create_role(
        name=request.name,
        description=request.description,
        color=request.color,
        created_by=viewer.user_id,
    )


@router.patch("/{role_id}", response_model=Role)
async def update_role(
    role_id: str,
    request: RoleUpdateRequest,
    viewer: Viewer = Depends(get_current_viewer),
    registry: RoleRegistry = Depends(get_role_registry),
):
    """Update a role. Default roles only accept description/color changes."""
    ensure_can_manage_roles(viewer)
    return await registry.update_role(role_id, RoleUpdate(**request.model_dump(exclude_unset=True)))


@router.delete("/{role_id}")
async def delete_role(
    role_id: str,
    viewer: Viewer = Depends(get_current_viewer),
    registry: RoleRegistry = Depends(get_role_registry),
):
    """Delete a custom role and unsubscribe everyone from it."""
    ensure_can_manage_roles(viewer)
    pruned = await registry.delete_role(role_id)
    return {"ok": True, "pruned_subscriptions": pruned}
