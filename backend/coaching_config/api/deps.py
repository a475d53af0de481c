"""API dependencies."""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from coaching_config.domain.access.models import Permissions, Role
from coaching_config.domain.access.services import AccessService
from coaching_config.domain.catalog.services import CatalogService
from coaching_config.domain.common.errors import AuthorizationError
from coaching_config.domain.common.types import ZonedClock
from coaching_config.domain.expectations.services import ExpectationService
from coaching_config.domain.forms.services import FormService
from coaching_config.infra.jobs.queue import SerialTaskQueue
from coaching_config.infra.properties.store import PropertyStore
from coaching_config.infra.security.jwt import decode_token
from coaching_config.infra.sheets.repositories.employee_repo import SheetIdentityResolver
from coaching_config.infra.sheets.repositories.expectation_repo import ExpectationRepositoryImpl
from coaching_config.infra.sheets.repositories.form_repo import FormRepositoryImpl
from coaching_config.infra.sheets.store import TabularStore
from coaching_config.runtime import AppRuntime
from coaching_config.settings import get_settings, settings

bearer_scheme = HTTPBearer(auto_error=False)


def get_runtime(request: Request) -> AppRuntime:
    """Runtime created by the lifespan, or on first use when the app runs without one."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        runtime = AppRuntime.from_settings(get_settings())
        request.app.state.runtime = runtime
    return runtime


def get_store(runtime: AppRuntime = Depends(get_runtime)) -> TabularStore:
    return runtime.store


def get_properties(runtime: AppRuntime = Depends(get_runtime)) -> PropertyStore:
    return runtime.properties


def get_queue(runtime: AppRuntime = Depends(get_runtime)) -> SerialTaskQueue:
    return runtime.queue


async def get_current_email(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Email of the authenticated caller, taken from the bearer token."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None:
        raise credentials_exception

    payload = decode_token(credentials.credentials)
    if payload is None:
        raise credentials_exception

    email = payload.get("email") or payload.get("sub")
    if not email or payload.get("type", "access") != "access":
        raise credentials_exception
    return email


def get_access_service(runtime: AppRuntime = Depends(get_runtime)) -> AccessService:
    return AccessService(runtime.properties, lock=runtime.users_lock)


async def get_current_role(
    email: str = Depends(get_current_email),
    access: AccessService = Depends(get_access_service),
) -> Role:
    return await access.authenticate(email)


async def require_editor(role: Role = Depends(get_current_role)) -> Role:
    if not Permissions.for_role(role).is_editor:
        raise AuthorizationError("Editor role required")
    return role


async def require_admin(role: Role = Depends(get_current_role)) -> Role:
    if not Permissions.for_role(role).is_admin:
        raise AuthorizationError("Only admins can perform this action")
    return role


def get_expectation_service(
    store: TabularStore = Depends(get_store),
    properties: PropertyStore = Depends(get_properties),
    email: str = Depends(get_current_email),
) -> ExpectationService:
    return ExpectationService(
        store=store,
        repo=ExpectationRepositoryImpl(store),
        identity=SheetIdentityResolver(store, email),
        clock=ZonedClock(settings.audit_timezone),
        properties=properties,
    )


def get_form_service(
    store: TabularStore = Depends(get_store),
    email: str = Depends(get_current_email),
) -> FormService:
    return FormService(
        store=store,
        repo=FormRepositoryImpl(store),
        identity=SheetIdentityResolver(store, email),
        clock=ZonedClock(settings.audit_timezone),
    )


def get_catalog_service(store: TabularStore = Depends(get_store)) -> CatalogService:
    return CatalogService(store)
