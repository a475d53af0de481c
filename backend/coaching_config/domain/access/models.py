"""Access control models."""
import enum
from dataclasses import dataclass


class Role(str, enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    EDITOR = "editor"
    VIEWER = "viewer"


@dataclass(frozen=True)
class Permissions:
    """What a role may do. Each level includes the ones below it."""

    is_owner: bool
    is_admin: bool
    is_editor: bool

    @classmethod
    def for_role(cls, role: Role) -> "Permissions":
        is_owner = role is Role.OWNER
        is_admin = is_owner or role is Role.ADMIN
        is_editor = is_admin or role is Role.EDITOR
        return cls(is_owner=is_owner, is_admin=is_admin, is_editor=is_editor)

    def to_dict(self) -> dict[str, bool]:
        return {"isOwner": self.is_owner, "isAdmin": self.is_admin, "isEditor": self.is_editor}
