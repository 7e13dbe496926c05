"""
PAS resource objects

Usage:
    from pas_sdk.platform import Secret, Permission, Right

    secret = Secret(client, secret_name="db password", secret_text="...",
                    secret_type="Text", parent_path="folder1\\folder2")
    secret.create()
"""

from .connector import Connector
from .enums import ComputerClass, ConnectorStatus, SecretType, SetType
from .fields import flatten, from_map, to_config_map, to_wire_map, wire_field
from .folder import SecretFolder, resolve_folder_id, split_folder_path
from .manual_set import ManualSet
from .permissions import (
    VALID_PERMISSIONS,
    Permission,
    PermissionCategory,
    PrincipalType,
    Right,
    convert_rights,
    resolve_permissions,
)
from .principal import Role, User
from .query import QueryBuilder, query_vault_object, redrock_query
from .secret import ChallengeRules, Secret, WorkflowSettings
from .system import System
from .vault_object import VaultObject

__all__ = [
    # Framework
    'VaultObject',
    'wire_field',
    'to_wire_map',
    'to_config_map',
    'from_map',
    'flatten',
    'QueryBuilder',
    'redrock_query',
    'query_vault_object',
    # Permissions
    'Right',
    'PermissionCategory',
    'PrincipalType',
    'VALID_PERMISSIONS',
    'Permission',
    'convert_rights',
    'resolve_permissions',
    # Folders
    'SecretFolder',
    'split_folder_path',
    'resolve_folder_id',
    # Resources
    'Secret',
    'ChallengeRules',
    'WorkflowSettings',
    'System',
    'Connector',
    'ManualSet',
    'User',
    'Role',
    # Enums
    'SecretType',
    'SetType',
    'ComputerClass',
    'ConnectorStatus',
]
