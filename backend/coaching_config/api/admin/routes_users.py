"""User role management routes."""
from typing import Any, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from coaching_config.api.deps import get_access_service, get_current_email, get_queue, require_admin
from coaching_config.domain.access.models import Permissions, Role
from coaching_config.domain.access.services import AccessService
from coaching_config.infra.jobs.queue import SerialTaskQueue

router = APIRouter()


class UserRequest(BaseModel):
    email: Optional[str] = None
    role: Optional[Any] = None


class RoleRequest(BaseModel):
    role: Optional[Any] = None


@router.get("/me")
async def get_me(
    email: str = Depends(get_current_email),
    access: AccessService = Depends(get_access_service),
):
    """Caller's role and what it allows."""
    role = await access.authenticate(email)
    return {"email": email, "role": role.value, **Permissions.for_role(role).to_dict()}


@router.get("/roles")
async def list_roles(_: str = Depends(get_current_email)):
    return [role.value for role in Role]


@router.get("")
async def list_users(
    _: Role = Depends(require_admin),
    access: AccessService = Depends(get_access_service),
):
    return await access.list_users()


@router.post("")
async def add_user(
    body: UserRequest,
    actor: str = Depends(get_current_email),
    access: AccessService = Depends(get_access_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    return await queue.submit("add_user", access.add_user, actor, body.email, body.role)


@router.put("/{email}")
async def edit_user(
    email: str,
    body: RoleRequest,
    actor: str = Depends(get_current_email),
    access: AccessService = Depends(get_access_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    return await queue.submit("edit_user", access.edit_user, actor, email, body.role)


@router.delete("/{email}")
async def remove_user(
    email: str,
    actor: str = Depends(get_current_email),
    access: AccessService = Depends(get_access_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    return await queue.submit("remove_user", access.remove_user, actor, email)
