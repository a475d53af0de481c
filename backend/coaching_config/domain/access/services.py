"""User roles kept as one JSON object in the property store."""
import asyncio
import json
import logging
from typing import Any, Optional

from coaching_config.domain.access.models import Permissions, Role
from coaching_config.domain.common.errors import AuthorizationError, NotFoundError, ValidationError
from coaching_config.infra.properties.store import PropertyStore

logger = logging.getLogger(__name__)

USERS_PROPERTY = "users"


def _parse_role(value: Any) -> Role:
    if value is None or value == "":
        raise ValidationError("Role is required")
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Invalid role specified: {value!r}") from None


def _clean_email(email: Optional[str]) -> str:
    if not email or not str(email).strip():
        raise ValidationError("Email is required")
    return str(email).strip()


class AccessService:
    """
    Maps emails to roles.

    Unknown emails are viewers. Only admins and owners manage users, and only
    an owner can hand out the owner role.
    """

    def __init__(self, properties: PropertyStore, lock: Optional[asyncio.Lock] = None):
        self.properties = properties
        # One lock per property store, shared across requests
        self._lock = lock or asyncio.Lock()

    async def list_users(self) -> dict[str, str]:
        raw = await self.properties.get(USERS_PROPERTY)
        return json.loads(raw) if raw else {}

    async def _save_users(self, users: dict[str, str]) -> None:
        await self.properties.set(USERS_PROPERTY, json.dumps(users))

    async def authenticate(self, email: Optional[str]) -> Role:
        """Role for an email. Raises ValidationError when email is empty."""
        if not email:
            raise ValidationError("Email is required for authentication")
        users = await self.list_users()
        role = users.get(email)
        if not role:
            return Role.VIEWER
        try:
            return Role(role)
        except ValueError:
            logger.warning("Stored role %r for %s is not a known role; treating as viewer", role, email)
            return Role.VIEWER

    async def permissions(self, email: Optional[str]) -> Permissions:
        return Permissions.for_role(await self.authenticate(email))

    async def _require_admin(self, actor: Optional[str]) -> Role:
        role = await self.authenticate(actor)
        if not Permissions.for_role(role).is_admin:
            logger.warning("User management by %s refused: role %s", actor, role.value)
            raise AuthorizationError("Only admins can perform this action")
        return role

    @staticmethod
    def _check_owner_grant(actor_role: Role, role: Role) -> None:
        if role is Role.OWNER and actor_role is not Role.OWNER:
            raise AuthorizationError("Only the current owner can modify owners")

    async def add_user(self, actor: Optional[str], email: Optional[str], role: Any) -> dict[str, str]:
        actor_role = await self._require_admin(actor)
        email = _clean_email(email)
        new_role = _parse_role(role)
        self._check_owner_grant(actor_role, new_role)
        async with self._lock:
            users = await self.list_users()
            users[email] = new_role.value
            await self._save_users(users)
        logger.info("User %s added as %s by %s", email, new_role.value, actor)
        return users

    async def edit_user(self, actor: Optional[str], email: Optional[str], role: Any) -> dict[str, str]:
        actor_role = await self._require_admin(actor)
        email = _clean_email(email)
        new_role = _parse_role(role)
        self._check_owner_grant(actor_role, new_role)
        async with self._lock:
            users = await self.list_users()
            if email not in users:
                raise NotFoundError("User", email)
            users[email] = new_role.value
            await self._save_users(users)
        logger.info("User %s changed to %s by %s", email, new_role.value, actor)
        return users

    async def remove_user(self, actor: Optional[str], email: Optional[str]) -> dict[str, str]:
        await self._require_admin(actor)
        email = _clean_email(email)
        async with self._lock:
            users = await self.list_users()
            if email not in users:
                raise NotFoundError("User", email)
            del users[email]
            await self._save_users(users)
        logger.info("User %s removed by %s", email, actor)
        return users
