"""
Permissions

Canonical right names, the per-category tables that translate them to the
strings the service expects, and resolution of human-authored permission
entries into wire-ready grants.
"""

import logging
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Sequence

from pydantic import BaseModel

from ..protocols import InvalidPrincipalTypeError, InvalidRightError, TransportProtocol
from .fields import wire_field

logger = logging.getLogger(__name__)


# ============ Enums ============

class Right(str, Enum):
    """Canonical right names accepted from callers"""
    GRANT = "Grant"
    VIEW = "View"
    EDIT = "Edit"
    DELETE = "Delete"
    ADD = "Add"
    RUN = "Run"
    LOGIN = "Login"
    CHECKOUT = "Checkout"
    RETRIEVE = "Retrieve"
    MANAGE_SESSION = "ManageSession"
    AGENT_AUTH = "AgentAuth"
    OFFLINE_RESCUE = "OfflineRescue"
    ADD_ACCOUNT = "AddAccount"
    UNLOCK_ACCOUNT = "UnlockAccount"
    REQUEST_ZONE_ROLE = "RequestZoneRole"
    FILE_TRANSFER = "FileTransfer"
    UPDATE_PASSWORD = "UpdatePassword"
    WORKSPACE_LOGIN = "WorkspaceLogin"
    ROTATE_PASSWORD = "RotatePassword"
    RETRIEVE_SECRET = "RetrieveSecret"
    MANAGEMENT_ASSIGNMENT = "ManagementAssignment"


class PermissionCategory(str, Enum):
    """Resource categories with their own valid-permissions table"""
    GENERIC = "generic"
    SET = "set"
    WIN_NIX = "win_nix"
    SYSTEM = "system"
    DATABASE = "database"
    DOMAIN = "domain"
    ACCOUNT = "account"
    DB_ACCOUNT = "db_account"
    DOMAIN_ACCOUNT = "domain_account"
    CLOUD_ACCOUNT = "cloud_account"
    MULTIPLEX_ACCOUNT = "multiplex_account"
    SECRET = "secret"
    SSH_KEY = "ssh_key"
    SERVICE = "service"
    APPLICATION = "application"
    FOLDER = "folder"


class PrincipalType(str, Enum):
    """Principal types a permission can be granted to"""
    USER = "User"
    ROLE = "Role"


# ============ Valid Permission Tables ============

def _table(*rights: Right, **renamed: str) -> Mapping[str, str]:
    """Build a read-only table; ``rights`` map to themselves, ``renamed`` keys are Right member names"""
    table: Dict[str, str] = {right.value: right.value for right in rights}
    for member, wire in renamed.items():
        table[Right[member].value] = wire
    return MappingProxyType(table)


_BASIC = (Right.GRANT, Right.VIEW, Right.EDIT, Right.DELETE)

_SYSTEM_RIGHTS = _BASIC + (
    Right.MANAGE_SESSION,
    Right.AGENT_AUTH,
    Right.OFFLINE_RESCUE,
    Right.ADD_ACCOUNT,
    Right.UNLOCK_ACCOUNT,
)

VALID_PERMISSIONS: Mapping[PermissionCategory, Mapping[str, str]] = MappingProxyType({
    PermissionCategory.GENERIC: _table(*_BASIC),
    PermissionCategory.SET: _table(*_BASIC),
    # Windows and Unix systems
    PermissionCategory.WIN_NIX: _table(
        *_SYSTEM_RIGHTS,
        Right.REQUEST_ZONE_ROLE,
        MANAGEMENT_ASSIGNMENT="ManagePrivilegeElevationAssignment",
    ),
    # Every other system type
    PermissionCategory.SYSTEM: _table(*_SYSTEM_RIGHTS),
    PermissionCategory.DATABASE: _table(*_BASIC),
    PermissionCategory.DOMAIN: _table(*_BASIC, Right.UNLOCK_ACCOUNT, Right.ADD_ACCOUNT),
    PermissionCategory.ACCOUNT: _table(
        Right.VIEW, Right.LOGIN, Right.FILE_TRANSFER, Right.DELETE,
        Right.UPDATE_PASSWORD, Right.ROTATE_PASSWORD,
        GRANT="Owner", CHECKOUT="Naked", EDIT="Manage", WORKSPACE_LOGIN="UserPortalLogin",
    ),
    PermissionCategory.DB_ACCOUNT: _table(
        Right.VIEW, Right.DELETE, Right.UPDATE_PASSWORD, Right.ROTATE_PASSWORD,
        GRANT="Owner", CHECKOUT="Naked", EDIT="Manage",
    ),
    PermissionCategory.DOMAIN_ACCOUNT: _table(
        Right.VIEW, Right.LOGIN, Right.FILE_TRANSFER, Right.DELETE,
        Right.UPDATE_PASSWORD, Right.ROTATE_PASSWORD,
        GRANT="Owner", CHECKOUT="Naked", EDIT="Manage",
    ),
    PermissionCategory.CLOUD_ACCOUNT: _table(
        Right.VIEW, Right.LOGIN, Right.DELETE, Right.UPDATE_PASSWORD, Right.ROTATE_PASSWORD,
        GRANT="Owner", CHECKOUT="Naked", EDIT="Manage",
    ),
    PermissionCategory.MULTIPLEX_ACCOUNT: _table(Right.GRANT, Right.EDIT, Right.DELETE),
    PermissionCategory.SECRET: _table(*_BASIC, RETRIEVE_SECRET="Retrieve"),
    PermissionCategory.SSH_KEY: _table(
        Right.VIEW, Right.DELETE,
        GRANT="Owner", RETRIEVE="Checkout", EDIT="Manage",
    ),
    PermissionCategory.SERVICE: _table(Right.GRANT, Right.EDIT, Right.DELETE),
    PermissionCategory.APPLICATION: _table(Right.GRANT, Right.VIEW, RUN="Execute"),
    PermissionCategory.FOLDER: _table(*_BASIC, Right.ADD),
})


# ============ Models ============

class Permission(BaseModel):
    """One access-control entry; rights may be given as a comma-joined string or a list"""
    principal_name: str = wire_field("", wire="Principal", config="principal_name")
    principal_type: str = wire_field("", wire="PType", config="principal_type")
    principal_id: str = wire_field("", wire="PrincipalId", config="principal_id")
    rights: str = wire_field("", wire="Rights", config="rights")
    right_list: List[str] = wire_field(default_factory=list, config="right_list")


# ============ Resolution ============

def convert_rights(rights: Sequence[str], valid_permissions: Mapping[str, str]) -> List[str]:
    """
    Translate canonical right names to the strings sent to the service.

    Input order is kept; nothing is sorted or deduplicated.

    Raises:
        InvalidRightError: a right is not in ``valid_permissions``
    """
    converted = []
    for right in rights:
        key = right.value if isinstance(right, Right) else right
        wire = valid_permissions.get(key)
        if not wire:
            logger.error(f"Invalid right {key}")
            raise InvalidRightError(key)
        converted.append(wire)
    return converted


def resolve_principal_id(client: TransportProtocol, principal_name: str, principal_type: str) -> str:
    """Look up a principal's ID by name; principal type is case-insensitive"""
    # Imported here: principal objects depend on the vault object framework
    from .principal import Role, User

    kind = (principal_type or "").lower()
    if kind == PrincipalType.USER.value.lower():
        principal = User(client, name=principal_name)
    elif kind == PrincipalType.ROLE.value.lower():
        principal = Role(client, name=principal_name)
    else:
        logger.error(f"Invalid PrincipalType {principal_type}")
        raise InvalidPrincipalTypeError(principal_type)

    return principal.get_id_by_name()


def resolve_permissions(
    client: TransportProtocol,
    permissions: List[Permission],
    valid_permissions: Mapping[str, str],
) -> List[Permission]:
    """
    Resolve principal IDs and translate rights for a batch of permissions.

    Entries are processed in order and the first invalid entry aborts the
    batch. The caller's entries are only updated once every entry has
    resolved, so a failed batch leaves them untouched.

    Args:
        client: Transport used for principal lookups
        permissions: Entries to resolve, updated in place on success
        valid_permissions: Table of the owning resource's category

    Returns:
        The same list, resolved
    """
    resolved = []
    for perm in permissions:
        entry = perm.model_copy(deep=True)
        entry.principal_id = resolve_principal_id(client, entry.principal_name, entry.principal_type)

        raw = entry.rights.split(",") if entry.rights else list(entry.right_list)
        entry.rights = ",".join(convert_rights(raw, valid_permissions))
        resolved.append(entry)

    for perm, entry in zip(permissions, resolved):
        perm.principal_id = entry.principal_id
        perm.rights = entry.rights

    logger.debug(f"Resolved permissions: {[p.principal_name for p in permissions]}")
    return permissions


__all__ = [
    "Right",
    "PermissionCategory",
    "PrincipalType",
    "VALID_PERMISSIONS",
    "Permission",
    "convert_rights",
    "resolve_principal_id",
    "resolve_permissions",
]
